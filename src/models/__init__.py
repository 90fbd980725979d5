"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - SolveRequest: Incoming question payload
    - SolveResponse: Relayed answer with upstream usage
    - ErrorResponse: Structured error body
    - ChatMessage: Single message in the upstream request
    - CompletionRequest / CompletionResponse: Upstream wire shapes
"""

from src.models.schemas import (
    ChatMessage,
    CompletionChoice,
    CompletionMessage,
    CompletionRequest,
    CompletionResponse,
    ErrorResponse,
    SolveRequest,
    SolveResponse,
)

__all__ = [
    "ChatMessage",
    "CompletionChoice",
    "CompletionMessage",
    "CompletionRequest",
    "CompletionResponse",
    "ErrorResponse",
    "SolveRequest",
    "SolveResponse",
]
