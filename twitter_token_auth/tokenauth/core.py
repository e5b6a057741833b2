'''This module validates Twitter access tokens and maps them to users'''
import json
import logging
from collections.abc import Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from marshmallow import ValidationError

from twitter_token_auth.errors import (
    ConfigurationError,
    MissingCredentialsError,
    ProfileFetchError,
    ProfileParseError,
    VerifyCallbackError,
)
from twitter_token_auth.models import Credentials, Error, Fail, Profile, Success
from twitter_token_auth.oauth import OAuth1Transport
from twitter_token_auth.schemas import ProfileSchema, StrategyOptionsSchema

logger = logging.getLogger(__name__)

USERS_SHOW_PATH = '/users/show.json'


def lookup(obj, field):
    '''Flat lookup of `field` in a request mapping.'''
    if not isinstance(obj, Mapping):
        return None
    return obj.get(field)


def lookup_nested(obj, field):
    '''Lookup supporting bracket paths like `user[token]`.

    Flat form bodies keep `user[token]` as a literal key, that wins over
    walking nested mappings. Returns None when the path is missing or ends
    on a mapping.
    '''
    if isinstance(obj, Mapping) and obj.get(field) is not None:
        return obj.get(field)

    chain = field.replace(']', '').split('[')
    for name in chain:
        if not isinstance(obj, Mapping):
            return None
        prop = obj.get(name)
        if prop is None:
            return None
        if not isinstance(prop, Mapping):
            return prop
        obj = prop
    return None


def user_id_from_token(token):
    '''Twitter access tokens are prefixed with the numeric user id.

    Returns:
        the user id as a string, None if the token doesn't carry one.
    '''
    if not isinstance(token, str) or '-' not in token:
        return None

    prefix = token.split('-', 1)[0]
    return prefix if prefix.isdigit() else None


def as_user_id(value):
    '''Request bodies may carry the user id as a JSON number.'''
    if isinstance(value, str):
        return value or None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def load_options(options):
    if not isinstance(options, Mapping):
        raise ConfigurationError('TwitterTokenStrategy requires an options mapping')

    try:
        return StrategyOptionsSchema().load(options)
    except ValidationError as err:
        msg = 'Invalid TwitterTokenStrategy options: {}'.format(err.messages)
        raise ConfigurationError(msg, err.messages) from err


class TwitterTokenStrategy(object):
    '''Authenticates requests carrying a Twitter access token and secret.

    The token pair is used to fetch the user's profile from Twitter, the
    profile is then handed to `verify` which decides who the user is:

        def verify(token, token_secret, profile, done):
            user = User.query.get(profile.id)
            done(None, user, {'scope': 'read'})

    With `pass_req_to_callback` the request is passed as the first argument,
    with `pass_params_to_callback` the `user_id` and `screen_name` taken from
    the request are passed right before the profile.
    `done(error, user, info)` must be called exactly once.
    '''
    name = 'twitter-token'

    def __init__(self, options, verify, transport=None):
        if not callable(verify):
            raise ConfigurationError('TwitterTokenStrategy requires a verify callback')

        self.options = load_options(options)
        self._verify = verify
        self._transport = transport or OAuth1Transport(
            self.options.consumer_key, self.options.consumer_secret
        )

    def authenticate(self, request):
        '''Authenticates an AuthRequest.

        Returns:
            one of Success(user, info), Fail(info) or Error(error).
        '''
        # Users who deny authorization on Twitter come back with ?denied=<token>
        if lookup(request.query, 'denied'):
            logger.info('Authorization was denied on Twitter')
            return Fail(None)

        try:
            credentials = self.extract_credentials(request)
        except MissingCredentialsError as err:
            logger.debug(err.message)
            return Fail({'message': err.message})

        params = {'user_id': credentials.user_id}
        screen_name = self._field(request, 'screen_name')
        if screen_name and isinstance(screen_name, str):
            params['screen_name'] = screen_name

        try:
            profile = self.user_profile(credentials.token, credentials.token_secret, params)
        except (ProfileFetchError, ProfileParseError) as err:
            msg = 'Could not load profile for user {}: {}'.format(credentials.user_id, err)
            logger.warning(msg)
            return Error(err)

        return self._verify_profile(request, credentials, params, profile)

    def extract_credentials(self, request):
        '''Pulls the token, secret and user id out of the body or query.

        Raises:
            MissingCredentialsError if there is no token.
        '''
        opts = self.options
        token = self._field(request, opts.oauth_token_field)
        token_secret = self._field(request, opts.oauth_token_secret_field)

        if not isinstance(token, str):
            token = None
        if not isinstance(token_secret, str):
            token_secret = None

        if not token:
            msg = 'You should provide {} and {}'.format(
                opts.oauth_token_field, opts.oauth_token_secret_field
            )
            raise MissingCredentialsError(msg)

        user_id = as_user_id(self._field(request, opts.user_id_field)) or user_id_from_token(token)
        return Credentials(token, token_secret, user_id)

    def _field(self, request, field):
        find = lookup_nested if self.options.legacy_field_lookup else lookup
        return find(request.body, field) or find(request.query, field)

    def _verify_profile(self, request, credentials, params, profile):
        outcomes = []

        def done(error=None, user=None, info=None):
            if outcomes:
                raise VerifyCallbackError('done was called more than once')

            if error:
                outcomes.append(Error(error))
            elif not user:
                outcomes.append(Fail(info))
            else:
                outcomes.append(Success(user, info))

        args = (profile, done)
        if self.options.pass_params_to_callback:
            args = (params,) + args
        args = (credentials.token, credentials.token_secret) + args
        if self.options.pass_req_to_callback:
            args = (request,) + args

        try:
            self._verify(*args)
        except Exception as err:
            if not outcomes:
                msg = 'Verify callback raised {!r}'.format(err)
                logger.debug(msg)
                return Error(err)
            logger.exception('Verify callback raised after calling done')

        if not outcomes:
            return Error(VerifyCallbackError('verify callback returned without calling done'))

        outcome = outcomes[0]
        msg = 'Authentication of user {} finished with {}'.format(
            credentials.user_id, type(outcome).__name__
        )
        logger.debug(msg)
        return outcome

    def user_profile(self, token, token_secret, params):
        '''Retrieves the user's profile from Twitter.

        When `skip_extended_user_profile` is set no request is made, the
        profile is built from `params` alone.

        Raises:
            ProfileFetchError if the request failed.
            ProfileParseError if the response isn't a JSON object.
        '''
        if self.options.skip_extended_user_profile:
            return Profile(
                provider='twitter',
                id=as_user_id(params.get('user_id')),
                username=params.get('screen_name')
            )

        url = self.profile_url(params)
        msg = 'Fetching Twitter profile from {}'.format(url)
        logger.debug(msg)

        try:
            body = self._transport.signed_get(url, token, token_secret)
        except Exception as err:
            raise ProfileFetchError('Failed to fetch user profile', err) from err

        return self.parse_profile(body)

    def profile_url(self, params):
        '''Adds the Twitter specific query parameters to the profile url.'''
        opts = self.options
        scheme, netloc, path, query, fragment = urlsplit(opts.user_profile_url)
        query_params = parse_qsl(query, keep_blank_values=True)

        user_id = params.get('user_id')
        wants_user_id = opts.query_augmentation == 'always' or path.endswith(USERS_SHOW_PATH)
        if user_id and wants_user_id:
            query_params.append(('user_id', user_id))
        if opts.include_email:
            query_params.append(('include_email', 'true'))
        if not opts.include_status:
            query_params.append(('skip_status', 'true'))
        if not opts.include_entities:
            query_params.append(('include_entities', 'false'))

        return urlunsplit((scheme, netloc, path, urlencode(query_params), fragment))

    def parse_profile(self, body):
        try:
            data = json.loads(body)
        except (TypeError, ValueError) as err:
            raise ProfileParseError('Failed to parse user profile', err) from err

        try:
            fields = ProfileSchema().load(data)
        except ValidationError as err:
            raise ProfileParseError('Failed to parse user profile', err) from err

        photos = ()
        if fields.get('photo'):
            photos = ({'value': fields['photo']},)
        emails = None
        if fields.get('email'):
            emails = ({'value': fields['email']},)

        return Profile(
            provider='twitter',
            id=fields.get('id'),
            username=fields.get('username'),
            display_name=fields.get('display_name'),
            photos=photos,
            raw=body,
            json=data,
            emails=emails
        )

    def user_authorization_params(self, options):
        '''Extra parameters for the Twitter authorization page.'''
        params = {}
        if options.get('force_login'):
            params['force_login'] = options['force_login']
        if options.get('screen_name'):
            params['screen_name'] = options['screen_name']
        return params
