"""HTTP transport for translation providers."""

import requests

FORM_HEADERS = {'Content-Type': 'application/x-www-form-urlencoded'}


class RequestsTransport:
    """Form-encoded POSTs over a shared requests.Session.

    Anything exposing the same `post_form(url, data) -> (status, body)`
    method can be handed to a translator instead.
    """

    def __init__(self, timeout: float = 10, session=None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def post_form(self, url: str, data: dict) -> tuple[int, str]:
        """POST `data` form-encoded to `url`; return (status code, body text)."""
        response = self.session.post(url, data=data, headers=FORM_HEADERS, timeout=self.timeout)
        return response.status_code, response.text
