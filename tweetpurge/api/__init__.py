from flask import current_app


def get_twitter_client():
    return current_app.extensions['tweetpurge']['twitter_client']


def get_oauth2_handshake():
    return current_app.extensions['tweetpurge']['oauth2_handshake']


def text_response(message, status):
    return message, status, {'Content-Type': 'text/plain; charset=utf-8'}


def error_response(prefix, error):
    """Plain-text error page with the status the error maps to"""
    return text_response(f"{prefix}: {error}", error.http_status)
