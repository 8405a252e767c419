from flask import Blueprint, redirect, request, url_for

from tweetpurge.api import error_response, get_twitter_client, text_response
from tweetpurge.core.errors import TwitterAPIError

tweets_bp = Blueprint('tweets', __name__)


@tweets_bp.route('/delete', methods=['POST'])
def delete_tweet():
    """Delete the tweet named in the form, then send the browser back home"""
    tweet_id = (request.form.get('tweetID') or '').strip()
    if not tweet_id:
        return text_response("Tweet ID is required", 400)

    try:
        get_twitter_client().delete_post(tweet_id)
    except TwitterAPIError as e:
        return error_response("Failed to delete tweet", e)

    # 303 so a refresh of the result page does not repeat the delete
    return redirect(url_for('home.home'), code=303)
