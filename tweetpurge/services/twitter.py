import logging
from urllib.parse import quote

from tweetpurge.core.errors import (
    AuthError,
    DecodeError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from tweetpurge.services.models import Post, UserIdentity

logger = logging.getLogger(__name__)


def _segment(value):
    """Percent-encode a single path segment"""
    return quote(str(value), safe='')


def _json_body(response, what):
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(f"failed to decode {what} response: {e}") from e


def _check_auth(response, what):
    if response.status_code in (401, 403):
        logger.warning("Twitter rejected credentials while trying to %s: %s", what, response.status_code)
        raise AuthError(
            f"failed to {what}, credentials rejected (status code: {response.status_code})",
            status_code=response.status_code,
        )


class TwitterClient:
    """
    Twitter API v2 client for the three calls the web app needs.

    Each method makes one logical request through the HTTP adapter with auth
    from the injected credential provider, and either returns a fully
    populated result or raises a TwitterAPIError subclass.
    """

    def __init__(self, credentials, http):
        self.credentials = credentials
        self.http = http

    def resolve_user_id(self, username):
        """Look up a user by handle

        Args:
            username: Twitter handle, with or without a leading '@'

        Returns:
            UserIdentity parsed from the 'data' envelope
        """
        username = (username or '').strip().lstrip('@')
        if not username:
            raise ValidationError("username is required")

        response = self.http.request(
            'GET',
            f'/users/by/username/{_segment(username)}',
            auth=self.credentials.auth(),
        )
        _check_auth(response, 'fetch user ID')

        if response.status_code != 200:
            logger.warning("User lookup for @%s failed with status %s", username, response.status_code)
            raise NotFoundError(
                f"failed to fetch user ID, status code: {response.status_code}",
                status_code=response.status_code,
            )

        body = _json_body(response, 'user')
        data = body.get('data') if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise DecodeError("failed to decode user response: missing 'data' object")

        fields = {key: data.get(key) for key in ('id', 'username', 'name')}
        bad = [key for key, value in fields.items() if not isinstance(value, str)]
        if bad or not fields['id']:
            raise DecodeError(f"failed to decode user response: invalid fields {bad or ['id']}")

        return UserIdentity(id=fields['id'], username=fields['username'], display_name=fields['name'])

    def list_timeline(self, user_id, max_results=None):
        """Fetch the user's recent tweets in the order the platform returns them"""
        if not user_id:
            raise ValidationError("user ID is required")

        params = {'max_results': max_results} if max_results else None
        response = self.http.request(
            'GET',
            f'/users/{_segment(user_id)}/tweets',
            auth=self.credentials.auth(),
            params=params,
        )
        _check_auth(response, 'fetch tweets')

        if response.status_code != 200:
            logger.warning("Timeline fetch for user %s failed with status %s", user_id, response.status_code)
            raise UpstreamError(
                f"failed to fetch tweets, status code: {response.status_code}",
                status_code=response.status_code,
            )

        body = _json_body(response, 'timeline')
        if not isinstance(body, dict):
            raise DecodeError("failed to decode timeline response: expected a JSON object")

        # An empty timeline comes back without a 'data' key
        data = body.get('data')
        if data is None:
            return []
        if not isinstance(data, list):
            raise DecodeError("failed to decode timeline response: 'data' is not a list")

        posts = []
        for item in data:
            if not isinstance(item, dict) or not isinstance(item.get('id'), str) or not isinstance(item.get('text'), str):
                raise DecodeError(f"failed to decode timeline response: malformed tweet {item!r}")
            posts.append(Post(id=item['id'], text=item['text']))

        return posts

    def delete_post(self, post_id):
        """Delete a tweet. Any status other than 200 is a failure; never retried."""
        post_id = (post_id or '').strip()
        if not post_id:
            raise ValidationError("Tweet ID is required")

        response = self.http.request(
            'DELETE',
            f'/tweets/{_segment(post_id)}',
            auth=self.credentials.auth(),
        )

        if response.status_code != 200:
            logger.warning("Delete of tweet %s failed with status %s", post_id, response.status_code)
            raise UpstreamError(
                f"failed to delete tweet, status code: {response.status_code}",
                status_code=response.status_code,
            )

        logger.info("Deleted tweet %s", post_id)
