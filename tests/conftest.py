import json
from types import SimpleNamespace

import pytest
import requests

from tweetpurge import create_app

API_BASE = "https://api.x.com/2"
TOKEN_URL = "https://api.x.com/2/oauth2/token"
OAUTH_STATE = "test-state-abc123"

_NO_JSON = object()


class FakeResponse:
    """Just enough of requests.Response for the client code"""

    def __init__(self, status_code=200, json_data=_NO_JSON, text=None, headers=None):
        self.status_code = status_code
        self._json = json_data
        if text is None:
            text = "" if json_data is _NO_JSON else json.dumps(json_data)
        self.text = text
        self.headers = headers or ({"content-type": "application/json"} if json_data is not _NO_JSON else {})

    def json(self):
        if self._json is _NO_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json


class FakeTwitterAPI:
    """
    In-memory stand-in for requests.Session talking to the Twitter API.

    Users and timelines live in dicts; DELETE really removes the tweet so a
    later timeline fetch no longer returns it. Canned responses can be queued
    per (method, path) to simulate failures.
    """

    def __init__(self):
        self.users = {}
        self.timelines = {}
        self.calls = []
        self.token_calls = []
        self.canned = {}
        self.token_response = FakeResponse(200, {
            "token_type": "bearer",
            "access_token": "user-access-token",
            "scope": "tweet.read tweet.write users.read",
            "expires_in": 7200,
        })

    def add_user(self, user_id, username, name, tweets=()):
        self.users[username] = {"id": user_id, "username": username, "name": name}
        self.timelines[user_id] = [dict(tweet) for tweet in tweets]

    def queue(self, method, path, response):
        self.canned.setdefault((method.upper(), path), []).append(response)

    def calls_to(self, method, prefix=""):
        return [call for call in self.calls if call.method == method and call.path.startswith(prefix)]

    def request(self, method, url, auth=None, params=None, timeout=None):
        path = url[len(API_BASE):] if url.startswith(API_BASE) else url
        prepared = requests.Request(method, url, params=params).prepare()
        if auth is not None:
            prepared = auth(prepared)
        self.calls.append(SimpleNamespace(
            method=method, path=path, headers=prepared.headers, params=params, timeout=timeout,
        ))

        queued = self.canned.get((method, path))
        if queued:
            response = queued.pop(0)
            if isinstance(response, Exception):
                raise response
            return response

        return self._route(method, path)

    def _route(self, method, path):
        parts = path.strip("/").split("/")

        if method == "GET" and parts[:3] == ["users", "by", "username"] and len(parts) == 4:
            user = self.users.get(parts[3])
            if user is None:
                return FakeResponse(404, {"errors": [{"detail": f"Could not find user with username: [{parts[3]}]."}]})
            return FakeResponse(200, {"data": dict(user)})

        if method == "GET" and len(parts) == 3 and parts[0] == "users" and parts[2] == "tweets":
            if parts[1] not in self.timelines:
                return FakeResponse(404, {"title": "Not Found Error"})
            tweets = self.timelines[parts[1]]
            if not tweets:
                return FakeResponse(200, {"meta": {"result_count": 0}})
            return FakeResponse(200, {"data": [dict(tweet) for tweet in tweets], "meta": {"result_count": len(tweets)}})

        if method == "DELETE" and len(parts) == 2 and parts[0] == "tweets":
            for tweets in self.timelines.values():
                for tweet in tweets:
                    if tweet["id"] == parts[1]:
                        tweets.remove(tweet)
                        return FakeResponse(200, {"data": {"deleted": True}})
            return FakeResponse(404, {"title": "Not Found Error"})

        return FakeResponse(404, {"title": "Not Found Error"})

    def post(self, url, headers=None, data=None, timeout=None):
        self.token_calls.append(SimpleNamespace(url=url, headers=headers, data=data, timeout=timeout))
        response = self.token_response
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_api():
    api = FakeTwitterAPI()
    api.add_user("42", "marlonbochi", "Marlon Bochi", tweets=[{"id": "1", "text": "hello"}])
    return api


@pytest.fixture
def bearer_token(monkeypatch):
    monkeypatch.setenv("TWITTER_BEARER_TOKEN", "test-bearer-token")
    return "test-bearer-token"


@pytest.fixture
def app(fake_api, bearer_token):
    app = create_app(
        {
            "TESTING": True,
            "AUTH_STRATEGY": "bearer",
            "TWITTER_BEARER_TOKEN_ENV": "TWITTER_BEARER_TOKEN",
            "TWITTER_USERNAME": "marlonbochi",
            "TWITTER_CONSUMER_KEY": "client-id",
            "TWITTER_CONSUMER_SECRET": "client-secret",
            "TWITTER_API_BASE_URL": API_BASE,
            "TWITTER_TOKEN_URL": TOKEN_URL,
            "TWITTER_CALLBACK_URL": "http://localhost:81/callback",
            "OAUTH_STATE": OAUTH_STATE,
            "HTTP_MAX_RETRIES": 0,
            "TIMELINE_MAX_RESULTS": None,
        },
        session=fake_api,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()
