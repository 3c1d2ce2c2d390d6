from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from flask_limiter import Limiter
import logging
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()


def _rate_limit_key():
    # Imported lazily: utils.auth imports models, which import db from here
    from forum_translator.utils.auth import rate_limit_key
    return rate_limit_key()


limiter = Limiter(key_func=_rate_limit_key)


def _env_flag(name, default='false'):
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


def _database_url():
    url = os.getenv('DATABASE_URL', 'sqlite:///forum.db')
    # Render/Heroku style URLs
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def create_app(config_name='development'):
    app = Flask(__name__)

    # Config
    app.config['SQLALCHEMY_DATABASE_URI'] = _database_url()
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')

    # Translator settings
    app.config['TRANSLATOR_ENABLED'] = _env_flag('TRANSLATOR_ENABLED')
    app.config['TRANSLATOR_PROVIDER'] = os.getenv('TRANSLATOR_PROVIDER', 'Google')
    app.config['TRANSLATOR_GOOGLE_API_KEY'] = os.getenv('TRANSLATOR_GOOGLE_API_KEY', '')
    app.config['TRANSLATOR_SHOW_TOPIC_TITLES_IN_USER_LOCALE'] = _env_flag(
        'TRANSLATOR_SHOW_TOPIC_TITLES_IN_USER_LOCALE'
    )
    app.config['TRANSLATOR_HTTP_TIMEOUT'] = float(os.getenv('TRANSLATOR_HTTP_TIMEOUT', 10))
    app.config['DEFAULT_LOCALE'] = os.getenv('DEFAULT_LOCALE', 'en')

    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
        app.config['RATELIMIT_ENABLED'] = False
        app.config['TRANSLATOR_ENABLED'] = False
        app.config['TRANSLATOR_GOOGLE_API_KEY'] = ''

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app)

    with app.app_context():
        from forum_translator import models  # noqa: F401 (register tables)
        try:
            db.create_all()
        except Exception as e:
            app.logger.warning(f"Could not create database tables: {e}")

    from forum_translator.routes import register_routes
    register_routes(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
