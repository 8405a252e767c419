import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def _int_env(name, default):
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return int(value)


class Config:
    # Twitter API configuration
    TWITTER_API_BASE_URL = os.environ.get('TWITTER_API_BASE_URL', 'https://api.x.com/2')
    TWITTER_AUTHORIZE_URL = os.environ.get('TWITTER_AUTHORIZE_URL', 'https://twitter.com/i/oauth2/authorize')
    TWITTER_TOKEN_URL = os.environ.get('TWITTER_TOKEN_URL', TWITTER_API_BASE_URL + '/oauth2/token')

    # OAuth 2.0 client credentials (also the OAuth 1.0a consumer pair)
    TWITTER_CONSUMER_KEY = os.environ.get('TWITTER_CONSUMER_KEY')
    TWITTER_CONSUMER_SECRET = os.environ.get('TWITTER_CONSUMER_SECRET')

    # OAuth 1.0a user tokens, only used when AUTH_STRATEGY is 'oauth1'
    TWITTER_ACCESS_TOKEN = os.environ.get('TWITTER_ACCESS_TOKEN')
    TWITTER_ACCESS_TOKEN_SECRET = os.environ.get('TWITTER_ACCESS_TOKEN_SECRET')

    # Name of the variable holding the bearer token; the token itself is read on every call
    TWITTER_BEARER_TOKEN_ENV = os.environ.get('TWITTER_BEARER_TOKEN_ENV', 'TWITTER_BEARER_TOKEN')

    # 'bearer' or 'oauth1'
    AUTH_STRATEGY = os.environ.get('AUTH_STRATEGY', 'bearer').strip().lower()

    # Account whose timeline is shown on the home page
    TWITTER_USERNAME = os.environ.get('TWITTER_USERNAME', 'marlonbochi')
    TIMELINE_MAX_RESULTS = _int_env('TIMELINE_MAX_RESULTS', None)

    # Website / callback configuration
    WEBSITE_URL = os.environ.get('WEBSITE_URL', 'http://localhost:81')
    TWITTER_CALLBACK_URL = os.environ.get('TWITTER_CALLBACK_URL', WEBSITE_URL + '/callback')

    # Anti-CSRF state; generated at startup when not set
    OAUTH_STATE = os.environ.get('OAUTH_STATE')

    # Outbound HTTP behaviour; GET retries are opt-in
    HTTP_TIMEOUT = float(os.environ.get('HTTP_TIMEOUT', '10'))
    HTTP_MAX_RETRIES = _int_env('HTTP_MAX_RETRIES', 0)
    HTTP_BACKOFF = float(os.environ.get('HTTP_BACKOFF', '0.5'))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Flask configuration
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = _int_env('PORT', 81)


def warn_missing_credentials(config):
    """Log what is missing from a loaded config; never raises"""
    if not config.get('TWITTER_CONSUMER_KEY') or not config.get('TWITTER_CONSUMER_SECRET'):
        logger.warning(
            "Twitter client credentials not found. "
            "Set TWITTER_CONSUMER_KEY and TWITTER_CONSUMER_SECRET in .env to enable /login."
        )

    strategy = config.get('AUTH_STRATEGY')
    if strategy == 'oauth1':
        if not config.get('TWITTER_ACCESS_TOKEN') or not config.get('TWITTER_ACCESS_TOKEN_SECRET'):
            logger.warning("AUTH_STRATEGY is oauth1 but TWITTER_ACCESS_TOKEN / TWITTER_ACCESS_TOKEN_SECRET are not set.")
    elif not os.environ.get(config.get('TWITTER_BEARER_TOKEN_ENV', 'TWITTER_BEARER_TOKEN')):
        logger.warning("No bearer token in %s; API calls will fail until it is set.",
                       config.get('TWITTER_BEARER_TOKEN_ENV'))

    callback = config.get('TWITTER_CALLBACK_URL') or ''
    if 'localhost' in callback and os.environ.get('FLASK_ENV') == 'production':
        logger.warning("Using localhost callback URL in production environment!")
