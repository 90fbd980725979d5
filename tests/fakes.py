"""Test doubles for the upstream completion API and app wiring."""

import json
from collections.abc import Callable
from typing import Any

import httpx
from fastapi import FastAPI

from src.api.app import create_app
from src.api.routes import get_solver_service
from src.relay.config import RelayConfig
from src.relay.solver import SolverService

UPSTREAM_URL = "https://upstream.test/chat/completions"


class FakeUpstream:
    """Records outbound completion calls and replies with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: (
            httpx.Response(
                200,
                json={
                    "choices": [{"message": {"content": "  Step 1: think.  "}}],
                    "usage": {"total_tokens": 42},
                },
            )
        )

    def reply(self, status_code: int = 200, **kwargs: Any) -> None:
        """Answer every following call with a fixed response."""
        self.responder = lambda request: httpx.Response(status_code, **kwargs)

    def fail(self, exc: Exception) -> None:
        """Raise a transport error on every following call."""

        def raise_error(request: httpx.Request) -> httpx.Response:
            raise exc

        self.responder = raise_error

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


def build_app(config: RelayConfig, upstream: FakeUpstream) -> FastAPI:
    """Create an app whose solver sends through the fake upstream."""
    application = create_app(config)
    application.dependency_overrides[get_solver_service] = lambda: SolverService(
        config, transport=upstream.transport
    )
    return application
