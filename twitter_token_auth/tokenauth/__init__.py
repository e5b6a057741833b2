from flask import Blueprint

auth = Blueprint('auth', __name__)

from twitter_token_auth.tokenauth import views, core
