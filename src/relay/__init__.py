"""Relay between the chat page and the upstream completion API.

Forwards a single homework question to DeepSeek with a fixed tutoring prompt
and hands the answer back to the HTTP layer.

Responsibilities:
    - Immutable relay configuration loaded once from the environment
    - One outbound completion call per question, no retries
    - Answer extraction from the upstream completion payload
    - Typed errors mapped to HTTP statuses by the API layer

Knows nothing about FastAPI. The API layer owns request parsing and rendering.
"""

from src.relay.config import RelayConfig, get_relay_config
from src.relay.errors import (
    ConfigurationError,
    EmptyAnswerError,
    InvalidRequestError,
    RelayError,
    UpstreamError,
    UpstreamUnavailableError,
)
from src.relay.solver import SolverService

__all__ = [
    "ConfigurationError",
    "EmptyAnswerError",
    "InvalidRequestError",
    "RelayConfig",
    "RelayError",
    "SolverService",
    "UpstreamError",
    "UpstreamUnavailableError",
    "get_relay_config",
]
