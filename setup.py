from setuptools import setup, find_packages

setup(
    name='twitter_token_auth',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    install_requires=[
        'flask',
        'authlib',
        'requests',
        'marshmallow>=3.13',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-flask',
            'pytest-mock',
            'python-dotenv',
        ],
    },
    tests_require=[
        'pytest',
        'pytest-flask',
        'pytest-mock',
    ],
)
