"""
Shared fixtures: a fake Unipile server behind httpx.MockTransport, a fake
Gemini generator, and a TestClient wired to both through dependency overrides.
"""
import json
from typing import Callable, Dict, List, Tuple, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from outreach_gateway.main import app
from outreach_gateway.services.auth_service import UnipileRelayStrategy, get_auth_strategy
from outreach_gateway.services.integrations.unipile import (
    UnipileAPIClient,
    UnipileConfig,
    get_unipile_client,
)
from outreach_gateway.services.message_service import get_message_generator

UNIPILE_BASE_URL = "https://api.unipile.test/v1"
FRONTEND_URL = "http://frontend.test/"

LINKEDIN_ACCOUNT = {
    "object": "Account",
    "id": "acc_42",
    "type": "LINKEDIN",
    "name": "Jane Doe",
    "job_title": "Head of Partnerships",
    "company": "Acme Corp",
    "industry": "Software",
    "profile_picture": "https://media.test/jane.png",
    "connection_params": {"im": {"id": "ACoAA123", "username": "janedoe", "publicIdentifier": "jane-doe"}},
}

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeUnipile:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, route: Route):
        self.routes[(method, f"/v1{path}")] = route

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"title": "Not found", "path": request.url.path})
        if callable(route):
            return route(request)
        return route

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


class FakeGenerator:
    """Stands in for Gemini; remembers prompts, can be told to fail."""

    def __init__(self, reply: str = "Hi Jane Doe, I'd love to connect and explore a collaboration."):
        self.reply = reply
        self.fail = False
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise RuntimeError("429 quota exceeded")
        return self.reply


@pytest.fixture
def unipile():
    fake = FakeUnipile()
    fake.add("GET", "/users/me", httpx.Response(200, json=LINKEDIN_ACCOUNT))
    return fake


@pytest.fixture
def unipile_client(unipile):
    config = UnipileConfig(
        api_key="test-key",
        base_url=UNIPILE_BASE_URL,
        redirect_uri="http://testserver/auth/callback"
    )
    return UnipileAPIClient(config, transport=httpx.MockTransport(unipile.handle))


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def strategy(unipile_client):
    return UnipileRelayStrategy(unipile_client, FRONTEND_URL)


@pytest.fixture
def client(unipile_client, generator, strategy):
    app.dependency_overrides[get_unipile_client] = lambda: unipile_client
    app.dependency_overrides[get_message_generator] = lambda: generator
    app.dependency_overrides[get_auth_strategy] = lambda: strategy
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer vendor-token"}
