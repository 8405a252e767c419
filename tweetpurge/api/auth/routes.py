from flask import Blueprint, current_app, redirect, request, url_for

from tweetpurge.api import get_oauth2_handshake, text_response
from tweetpurge.core.errors import CsrfMismatchError, TokenExchangeError
from tweetpurge.services.models import HandshakeStatus

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['GET'])
def login():
    """Send the browser to Twitter's OAuth 2.0 consent page"""
    handshake = get_oauth2_handshake()
    if handshake.status is HandshakeStatus.REJECTED:
        handshake.reset()
    return redirect(handshake.build_authorization_url(), code=307)


@auth_bp.route('/callback', methods=['GET'])
def callback():
    """Handle OAuth callback from Twitter"""
    state = request.args.get('state', '')
    code = request.args.get('code', '')

    error = request.args.get('error')
    if error:
        current_app.logger.warning("Twitter returned an OAuth error: %s", error)

    try:
        token = get_oauth2_handshake().handle_callback(state, code)
    except CsrfMismatchError:
        current_app.logger.warning("Invalid OAuth state on callback")
        return redirect(url_for('home.home'), code=307)
    except TokenExchangeError as e:
        current_app.logger.warning("Failed to exchange code for token: %s", e)
        return redirect(url_for('home.home'), code=307)

    # Not stored anywhere; shown once so the operator can copy it
    return text_response(f"Access Token: {token.access_token}\n", 200)
