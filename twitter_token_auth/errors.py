'''Errors raised while authenticating with a Twitter access token.'''


class TwitterTokenError(Exception):
    '''Base class for everything this package raises.'''
    error = 'server_error'
    status_code = 500

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self):
        if self.cause is None:
            return self.message
        return '{} ({})'.format(self.message, self.cause)


class ConfigurationError(TwitterTokenError):
    '''Strategy options are absent or malformed.'''
    error = 'configuration_error'

    def __init__(self, message, messages=None):
        super().__init__(message)
        self.messages = messages or {}


class MissingCredentialsError(TwitterTokenError):
    '''No token in the request, reported as a failed login.'''


class ProfileFetchError(TwitterTokenError):
    '''The signed request for the user profile failed.'''
    error = 'profile_fetch_error'
    status_code = 502


class ProfileParseError(TwitterTokenError):
    '''Twitter answered with something that is not a profile.'''
    error = 'profile_parse_error'
    status_code = 502


class VerifyCallbackError(TwitterTokenError):
    '''The verify callback did not call `done` exactly once.'''
    error = 'verify_callback_error'
