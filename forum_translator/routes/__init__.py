"""Routes package for the forum application."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .auth import auth_bp
    from .topics import topics_bp
    from .translator import translator_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(topics_bp, url_prefix='/api/topics')
    app.register_blueprint(translator_bp, url_prefix='/api/translator')
