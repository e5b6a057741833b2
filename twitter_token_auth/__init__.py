import logging
import os

from flask import Flask

from twitter_token_auth import config
from twitter_token_auth.oauth import twitter
from twitter_token_auth.tokenauth import auth


def setup_logger_handlers(app):
    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter(
    '%(asctime)s %(levelname)s: %(message)s '
    '[in %(pathname)s:%(lineno)d]'
    ))
    sh.setLevel(logging.DEBUG)
    app.logger.addHandler(sh)


def create_app(config_name=None):
    """
    Returns the Flask app.
    """
    app = Flask(__name__)

    if not config_name:
        config_name = os.getenv('FLASK_CONFIG', 'development')

    if config_name == 'production':
        setup_logger_handlers(app)

    app.config.from_object(config.app_config[config_name])

    twitter.init_app(app)

    app.register_blueprint(auth)

    return app
