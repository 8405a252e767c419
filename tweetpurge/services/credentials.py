"""
Credential providers for Twitter API calls.

Each provider exposes auth(), returning a requests auth object that is
attached to a single outbound request. The API client only talks to this
interface, so bearer tokens, OAuth 2.0 user tokens and OAuth 1.0a user
tokens are interchangeable.
"""

import os

from requests.auth import AuthBase
from requests_oauthlib import OAuth1

from tweetpurge.core.errors import AuthError


class BearerAuth(AuthBase):
    """Attach an 'Authorization: Bearer <token>' header"""

    def __init__(self, token):
        self.token = token

    def __call__(self, request):
        request.headers['Authorization'] = f'Bearer {self.token}'
        return request


class BearerTokenCredentials:
    """
    App-only bearer token read from the environment.

    The variable is read on every call to auth(), so rotating the token in
    the process environment takes effect on the next request.
    """

    def __init__(self, env_var='TWITTER_BEARER_TOKEN'):
        self.env_var = env_var

    def auth(self):
        token = (os.environ.get(self.env_var) or '').strip()
        if not token:
            raise AuthError(f"Bearer token not configured. Set {self.env_var} in the environment.")
        return BearerAuth(token)


class StaticBearerCredentials:
    """
    User-context token obtained from the OAuth 2.0 handshake.

    Library use only: the web app never builds one, because /callback shows
    the token once and does not keep it. Callers that hold a token can pass
    this to TwitterClient in place of the app-only bearer token.
    """

    def __init__(self, access_token):
        self.access_token = access_token

    def auth(self):
        token = getattr(self.access_token, 'access_token', self.access_token)
        if not token:
            raise AuthError("OAuth 2.0 access token is empty")
        return BearerAuth(token)


class OAuth1Credentials:
    """
    OAuth 1.0a user tokens (legacy variant).

    Requests are signed with the consumer pair plus the user's access token
    and secret instead of carrying a bearer header.
    """

    def __init__(self, consumer_key, consumer_secret, access_token, access_token_secret):
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.access_token = access_token
        self.access_token_secret = access_token_secret

    def auth(self):
        missing = [
            name for name, value in (
                ('TWITTER_CONSUMER_KEY', self.consumer_key),
                ('TWITTER_CONSUMER_SECRET', self.consumer_secret),
                ('TWITTER_ACCESS_TOKEN', self.access_token),
                ('TWITTER_ACCESS_TOKEN_SECRET', self.access_token_secret),
            )
            if not value
        ]
        if missing:
            raise AuthError(f"OAuth 1.0a credentials not configured: {', '.join(missing)}")

        return OAuth1(
            client_key=self.consumer_key,
            client_secret=self.consumer_secret,
            resource_owner_key=self.access_token,
            resource_owner_secret=self.access_token_secret,
        )


def credentials_from_config(config):
    """Build the credential provider selected by AUTH_STRATEGY"""
    strategy = (config.get('AUTH_STRATEGY') or 'bearer').lower()

    if strategy == 'oauth1':
        return OAuth1Credentials(
            consumer_key=config.get('TWITTER_CONSUMER_KEY'),
            consumer_secret=config.get('TWITTER_CONSUMER_SECRET'),
            access_token=config.get('TWITTER_ACCESS_TOKEN'),
            access_token_secret=config.get('TWITTER_ACCESS_TOKEN_SECRET'),
        )
    if strategy == 'bearer':
        return BearerTokenCredentials(config.get('TWITTER_BEARER_TOKEN_ENV') or 'TWITTER_BEARER_TOKEN')

    raise ValueError(f"Unknown AUTH_STRATEGY '{strategy}'. Use 'bearer' or 'oauth1'.")
