import os


class Config(object):
    SECRET_KEY = os.getenv('SECRET_KEY_AUTH')

    TWITTER = {
        'consumer_key': os.getenv('TWITTER_CONSUMER_KEY'),
        'consumer_secret': os.getenv('TWITTER_CONSUMER_SECRET'),
        'user_profile_url': os.getenv(
            'TWITTER_PROFILE_URL',
            'https://api.twitter.com/1.1/account/verify_credentials.json'
        ),
        'include_email': os.getenv('TWITTER_INCLUDE_EMAIL', 'false'),
    }


class DevConfig(Config):
    DEBUG = True


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    TWITTER = {
        'consumer_key': 'test_consumer_key',
        'consumer_secret': 'test_consumer_secret',
    }


class ProdConfig(Config):
    pass


app_config = {
    'development': DevConfig,
    'testing': TestConfig,
    'production': ProdConfig
}
