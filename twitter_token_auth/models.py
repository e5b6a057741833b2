from collections import namedtuple

Credentials = namedtuple('Credentials', ['token', 'token_secret', 'user_id'])

Profile = namedtuple(
    'Profile',
    ['provider', 'id', 'username', 'display_name', 'photos', 'raw', 'json', 'emails'],
    defaults=(None, None, (), None, None, None)
)

StrategyOptions = namedtuple('StrategyOptions', [
    'consumer_key',
    'consumer_secret',
    'request_token_url',
    'access_token_url',
    'user_authorization_url',
    'user_profile_url',
    'oauth_token_field',
    'oauth_token_secret_field',
    'user_id_field',
    'include_email',
    'include_status',
    'include_entities',
    'skip_extended_user_profile',
    'pass_req_to_callback',
    'pass_params_to_callback',
    'legacy_field_lookup',
    'query_augmentation',
    'session_key',
])

# Terminal outcomes of an authentication attempt
Success = namedtuple('Success', ['user', 'info'])
Fail = namedtuple('Fail', ['info'])
Error = namedtuple('Error', ['error'])


class AuthRequest(namedtuple('AuthRequest', ['body', 'query'])):
    '''The parts of an inbound request a strategy looks at.'''
    __slots__ = ()

    def __new__(cls, body=None, query=None):
        return super().__new__(cls, body or {}, query or {})

    @classmethod
    def from_flask(cls, request):
        '''Builds an AuthRequest from a flask request.

        Form data wins over a JSON body, query args come from the url.
        '''
        body = request.form or request.get_json(silent=True) or {}
        return cls(body=body, query=request.args)
