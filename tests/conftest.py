"""Shared fixtures: an API client wired to a mocked requests session."""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Add src directory to path to import modules
src_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from conference_portal.client.api_client import ConferenceApiClient
from conference_portal.client.credentials import CredentialStore
from conference_portal.config.portal_config import PortalConfig

API_URL = "http://api.test"


def make_response(body=None, status_code=200, text=""):
    """Fake requests.Response. ``body=None`` means the response is not JSON."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def store():
    store = CredentialStore()
    store.save_session(
        "test-token", "Author", {"email": "ada@example.com", "username": "Ada", "role": "Author"}
    )
    return store


@pytest.fixture
def client(session, store):
    return ConferenceApiClient(PortalConfig(api_url=API_URL + "/", timeout=5), session=session, store=store)


@pytest.fixture
def respond(session):
    """Queue the response(s) the mocked session returns, in order."""

    def _respond(*bodies, status_code=200):
        session.request.side_effect = [make_response(body, status_code) for body in bodies]
        return session.request

    return _respond


def last_call(session):
    """(method, url, kwargs) of the most recent request."""
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs


@pytest.fixture
def sent(session):
    return lambda: last_call(session)


@pytest.fixture
def response():
    return make_response
