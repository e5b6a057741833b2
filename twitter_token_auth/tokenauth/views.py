from flask import current_app, jsonify, request

from twitter_token_auth.errors import TwitterTokenError
from twitter_token_auth.models import AuthRequest, Error, Fail
from twitter_token_auth.oauth import twitter
from twitter_token_auth.tokenauth import auth


@auth.errorhandler(TwitterTokenError)
def handle_token_error(error):
    """Error handler."""
    response = {
        "error": error.error,
        "error_description": str(error),
    }
    return jsonify(response), error.status_code


@auth.route("/auth/twitter/token", methods=["GET", "POST"])
def authenticate_token():
    """Authenticates a user holding a Twitter access token.
    Example of request received:
    POST /auth/twitter/token
    oauth_token=USER_ID-TOKEN
    &oauth_token_secret=TOKEN_SECRET
    &user_id=USER_ID
    """
    outcome = twitter.strategy.authenticate(AuthRequest.from_flask(request))

    if isinstance(outcome, Error):
        msg = "Error authenticating Twitter token: {!r}".format(outcome.error)
        current_app.logger.info(msg)
        error = outcome.error
        if not isinstance(error, Exception):
            error = TwitterTokenError(str(error))
        raise error

    if isinstance(outcome, Fail):
        current_app.logger.debug("Twitter token authentication failed")
        return jsonify({"info": outcome.info}), 401

    current_app.logger.info("Twitter token authenticated")
    return jsonify({"user": outcome.user, "info": outcome.info}), 200
