"""
OAuth 2.0 authorization-code handshake with Twitter.

One anti-CSRF state (and one PKCE verifier) is created when the handshake is
built at startup and is never rewritten afterwards. That is only sound for a
single operator with a single browser session.
"""

import base64
import hashlib
import logging
import secrets
import threading
import urllib.parse

import requests

from tweetpurge.core.errors import CsrfMismatchError, TokenExchangeError
from tweetpurge.services.models import AccessToken, HandshakeStatus

logger = logging.getLogger(__name__)

# read posts, write posts, read user profile
DEFAULT_SCOPES = ('tweet.read', 'tweet.write', 'users.read')

# Only reset() leaves these
TERMINAL_STATUSES = frozenset({HandshakeStatus.AUTHORIZED, HandshakeStatus.REJECTED})


def _pkce_pair():
    code_verifier = base64.urlsafe_b64encode(secrets.token_bytes(32)).decode('utf-8').rstrip('=')
    code_challenge = base64.urlsafe_b64encode(
        hashlib.sha256(code_verifier.encode('utf-8')).digest()
    ).decode('utf-8').rstrip('=')
    return code_verifier, code_challenge


def _error_text(response):
    """Best human-readable error from a failed token response"""
    try:
        error_data = response.json() if 'json' in response.headers.get('content-type', '') else {}
    except ValueError:
        error_data = {}
    if isinstance(error_data, dict):
        message = error_data.get('error_description') or error_data.get('error')
        if message:
            return f"HTTP {response.status_code}: {message}"
    return f"HTTP {response.status_code}: {response.text}"


class OAuth2Handshake:

    def __init__(self, client_id, client_secret, redirect_uri, state=None,
                 authorize_url='https://twitter.com/i/oauth2/authorize',
                 token_url='https://api.x.com/2/oauth2/token',
                 scopes=DEFAULT_SCOPES, session=None, timeout=10.0):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.authorize_url = authorize_url
        self.token_url = token_url
        self.scopes = tuple(scopes)
        self.session = session or requests.Session()
        self.timeout = timeout

        self._state = state or secrets.token_urlsafe(32)
        self._code_verifier, self._code_challenge = _pkce_pair()
        self._status = HandshakeStatus.IDLE
        self._lock = threading.Lock()

    @property
    def state(self):
        return self._state

    @property
    def status(self):
        with self._lock:
            return self._status

    def _advance(self, status):
        """Move to status unless AUTHORIZED or REJECTED was already reached"""
        with self._lock:
            if self._status in TERMINAL_STATUSES:
                return False
            self._status = status
            return True

    def reset(self):
        """Return to IDLE so a new authorization can be started"""
        with self._lock:
            self._status = HandshakeStatus.IDLE

    def build_authorization_url(self):
        """Twitter consent URL carrying the client id, scopes, state and PKCE challenge"""
        params = {
            'response_type': 'code',
            'client_id': self.client_id or '',
            'redirect_uri': self.redirect_uri,
            'scope': ' '.join(self.scopes),
            'state': self._state,
            'code_challenge': self._code_challenge,
            'code_challenge_method': 'S256',
        }
        self._advance(HandshakeStatus.AWAITING_CALLBACK)
        return f"{self.authorize_url}?{urllib.parse.urlencode(params)}"

    def verify_state(self, received_state):
        """Raise CsrfMismatchError unless received_state is byte-for-byte our state"""
        received = (received_state or '').encode('utf-8')
        if not received or not secrets.compare_digest(received, self._state.encode('utf-8')):
            self._advance(HandshakeStatus.REJECTED)
            raise CsrfMismatchError("Invalid OAuth state")

    def handle_callback(self, received_state, code):
        """Verify the callback state and exchange the code for an access token

        A rejected handshake accepts no callback until reset(). AUTHORIZED
        stays AUTHORIZED whatever later callbacks bring.

        Returns:
            AccessToken
        """
        if self.status is HandshakeStatus.REJECTED:
            raise CsrfMismatchError("OAuth handshake was rejected; start again from /login")

        self.verify_state(received_state)

        if not code:
            self._advance(HandshakeStatus.REJECTED)
            raise TokenExchangeError("Missing authorization code")

        try:
            token = self._exchange(code)
        except TokenExchangeError:
            self._advance(HandshakeStatus.REJECTED)
            raise

        self._advance(HandshakeStatus.AUTHORIZED)
        return token

    def _exchange(self, code):
        auth_string = f"{self.client_id or ''}:{self.client_secret or ''}"
        auth_b64 = base64.b64encode(auth_string.encode('utf-8')).decode('ascii')

        headers = {
            'Authorization': f'Basic {auth_b64}',
            'Content-Type': 'application/x-www-form-urlencoded'
        }

        data = {
            'code': code,
            'grant_type': 'authorization_code',
            'client_id': self.client_id or '',
            'redirect_uri': self.redirect_uri,
            'code_verifier': self._code_verifier
        }

        try:
            response = self.session.post(self.token_url, headers=headers, data=data, timeout=self.timeout)
        except requests.RequestException as e:
            raise TokenExchangeError(f"Token request failed: {e}") from e

        if response.status_code != 200:
            raise TokenExchangeError(_error_text(response))

        try:
            tokens = response.json()
        except ValueError as e:
            raise TokenExchangeError(f"Token response is not JSON: {e}") from e

        if not isinstance(tokens, dict) or not tokens.get('access_token'):
            raise TokenExchangeError("Token response did not include an access_token")

        return AccessToken(
            access_token=tokens['access_token'],
            token_type=tokens.get('token_type', 'bearer'),
            scope=tokens.get('scope'),
            expires_in=tokens.get('expires_in'),
        )
