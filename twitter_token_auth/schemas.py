from marshmallow import EXCLUDE, Schema, fields, post_load, pre_load, validate

from twitter_token_auth.models import StrategyOptions

QUERY_AUGMENTATION_MODES = ('endpoint', 'always')


class StrategyOptionsSchema(Schema):
    consumer_key = fields.Str(required=True)
    consumer_secret = fields.Str(required=True)
    request_token_url = fields.Str(load_default='https://api.twitter.com/oauth/request_token')
    access_token_url = fields.Str(load_default='https://api.twitter.com/oauth/access_token')
    user_authorization_url = fields.Str(load_default='https://api.twitter.com/oauth/authenticate')
    user_profile_url = fields.Str(
        load_default='https://api.twitter.com/1.1/account/verify_credentials.json'
    )
    oauth_token_field = fields.Str(load_default='oauth_token')
    oauth_token_secret_field = fields.Str(load_default='oauth_token_secret')
    user_id_field = fields.Str(load_default='user_id')
    include_email = fields.Bool(load_default=False)
    include_status = fields.Bool(load_default=True)
    include_entities = fields.Bool(load_default=True)
    skip_extended_user_profile = fields.Bool(load_default=False)
    pass_req_to_callback = fields.Bool(load_default=False)
    pass_params_to_callback = fields.Bool(load_default=False)
    legacy_field_lookup = fields.Bool(load_default=False)
    query_augmentation = fields.Str(
        load_default='endpoint',
        validate=validate.OneOf(QUERY_AUGMENTATION_MODES)
    )
    session_key = fields.Str(load_default='oauth:twitter')

    @post_load
    def make_options(self, data, **kwargs):
        return StrategyOptions(**data)


class ProfileSchema(Schema):
    '''Normalizes the user object returned by the Twitter API.

    Only the fields we care about are kept, everything else is
    still available on the profile through `json`.
    '''
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(allow_none=True)
    username = fields.Str(data_key='screen_name', allow_none=True)
    display_name = fields.Str(data_key='name', allow_none=True)
    photo = fields.Str(data_key='profile_image_url_https', allow_none=True)
    email = fields.Str(allow_none=True)

    @pre_load
    def prefer_id_str(self, data, **kwargs):
        # ids above 2**53 only survive as strings
        if not isinstance(data, dict):
            return data

        data = dict(data)
        if data.get('id_str'):
            data['id'] = data['id_str']
        elif data.get('id') is not None:
            data['id'] = str(data['id'])

        return data


class UserSchema(Schema):
    '''What the default verifier hands back as the authenticated user.'''
    user_id = fields.Str(attribute='id')
    username = fields.Str()
    display_name = fields.Str()
    provider = fields.Str()
