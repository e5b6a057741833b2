from authlib.integrations.requests_client import OAuth1Session
from flask import current_app

from twitter_token_auth.schemas import UserSchema


class OAuth1Transport(object):
    '''Makes OAuth 1.0a signed requests on behalf of a user.

    The consumer credentials identify the application, the token pair
    passed to `signed_get` identifies the user.
    '''
    def __init__(self, consumer_key, consumer_secret):
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret

    def session(self, token, token_secret):
        return OAuth1Session(
            self.consumer_key,
            self.consumer_secret,
            token=token,
            token_secret=token_secret
        )

    def signed_get(self, url, token, token_secret):
        '''Returns the body of a signed GET request.

        Raises requests.HTTPError on a non 2xx response and the usual
        requests exceptions when the request does not complete.
        '''
        with self.session(token, token_secret) as session:
            resp = session.get(url)

        resp.raise_for_status()
        return resp.text


def default_verifier(*args):
    '''Treats every valid Twitter profile as a user.'''
    profile, done = args[-2:]
    return done(None, UserSchema().dump(profile))


class TwitterToken(object):
    '''Flask extension holding a TwitterTokenStrategy per app.'''
    def __init__(self, app=None):
        self._verify_callback = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app, transport=None):
        # imported here, core needs the transport above
        from twitter_token_auth.tokenauth.core import TwitterTokenStrategy

        strategy = TwitterTokenStrategy(app.config.get('TWITTER'), self._verify, transport=transport)
        app.extensions['twitter_token'] = strategy

    def verifier(self, f):
        '''Registers the verify callback used by every app.'''
        self._verify_callback = f
        return f

    @property
    def strategy(self):
        return current_app.extensions['twitter_token']

    def _verify(self, *args):
        verify = self._verify_callback or default_verifier
        return verify(*args)


twitter = TwitterToken()
