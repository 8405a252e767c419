import time
from datetime import datetime, timezone

from flask import Flask, g, jsonify, request

from tweetpurge.api import error_response
from tweetpurge.core.config import Config, warn_missing_credentials
from tweetpurge.core.errors import TwitterAPIError
from tweetpurge.core.logger import setup_logger
from tweetpurge.services.credentials import credentials_from_config
from tweetpurge.services.http import HttpAdapter
from tweetpurge.services.oauth2 import OAuth2Handshake
from tweetpurge.services.twitter import TwitterClient


def create_app(config_overrides=None, twitter_client=None, oauth2_handshake=None, session=None):
    """Application factory for creating the Flask app

    Args:
        config_overrides: dict applied on top of Config
        twitter_client: prebuilt TwitterClient (tests inject fakes here)
        oauth2_handshake: prebuilt OAuth2Handshake
        session: requests.Session shared by the default client and handshake
    """
    app = Flask(__name__)

    # Configure app
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    logger = setup_logger(app.name, app.config['LOG_LEVEL'])
    warn_missing_credentials(app.config)

    if twitter_client is None:
        http = HttpAdapter(
            app.config['TWITTER_API_BASE_URL'],
            timeout=app.config['HTTP_TIMEOUT'],
            max_retries=app.config['HTTP_MAX_RETRIES'],
            backoff=app.config['HTTP_BACKOFF'],
            session=session,
        )
        twitter_client = TwitterClient(credentials_from_config(app.config), http)

    if oauth2_handshake is None:
        oauth2_handshake = OAuth2Handshake(
            client_id=app.config['TWITTER_CONSUMER_KEY'],
            client_secret=app.config['TWITTER_CONSUMER_SECRET'],
            redirect_uri=app.config['TWITTER_CALLBACK_URL'],
            state=app.config['OAUTH_STATE'],
            authorize_url=app.config['TWITTER_AUTHORIZE_URL'],
            token_url=app.config['TWITTER_TOKEN_URL'],
            session=session,
            timeout=app.config['HTTP_TIMEOUT'],
        )

    app.extensions['tweetpurge'] = {
        'twitter_client': twitter_client,
        'oauth2_handshake': oauth2_handshake,
    }

    # Register blueprints
    from tweetpurge.api.home.routes import home_bp
    from tweetpurge.api.tweets.routes import tweets_bp
    from tweetpurge.api.auth.routes import auth_bp

    app.register_blueprint(home_bp)
    app.register_blueprint(tweets_bp)
    app.register_blueprint(auth_bp)

    @app.errorhandler(TwitterAPIError)
    def handle_twitter_error(e):
        logger.warning("Unhandled %s: %s", type(e).__name__, e)
        return error_response("Request failed", e)

    @app.before_request
    def start_timer():
        g.start_time = time.perf_counter()

    @app.after_request
    def log_request(response):
        duration_ms = (time.perf_counter() - g.get('start_time', time.perf_counter())) * 1000
        logger.info(
            "request method=%s path=%s status=%s duration_ms=%.2f",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
        )
        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check"""
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
        })

    return app
