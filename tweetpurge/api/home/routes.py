from flask import Blueprint, current_app, render_template

from tweetpurge.api import error_response, get_twitter_client
from tweetpurge.core.errors import TwitterAPIError

home_bp = Blueprint('home', __name__)


@home_bp.route('/', methods=['GET'])
def home():
    """Show the configured account's recent tweets with a delete form for each"""
    client = get_twitter_client()
    username = current_app.config.get('TWITTER_USERNAME')

    try:
        user = client.resolve_user_id(username)
    except TwitterAPIError as e:
        current_app.logger.error("Error fetching user ID for @%s: %s", username, e)
        return error_response("Failed to fetch user ID", e)

    try:
        tweets = client.list_timeline(user.id, max_results=current_app.config.get('TIMELINE_MAX_RESULTS'))
    except TwitterAPIError as e:
        return error_response("Failed to fetch tweets", e)

    return render_template('index.html', user=user, tweets=tweets)
