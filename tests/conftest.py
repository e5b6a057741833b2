import pytest

from flask.cli import load_dotenv
load_dotenv()

from twitter_token_auth import create_app
from twitter_token_auth.oauth import twitter


@pytest.fixture(scope="session")
def app():
    app = create_app("testing")

    with app.app_context():
        yield app


@pytest.fixture(scope="function")
def verifier():
    yield twitter.verifier
    twitter.verifier(None)
