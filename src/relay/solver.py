"""DeepSeek solver service.

Core module for turning one homework question into one answer.

Architecture Decisions:

1. **One call per question** - No retries and no conversation history. The
   upstream sees a system prompt and a single user message, nothing else.

2. **Client per call** - Each solve opens its own ``httpx.AsyncClient``. The
   relay keeps no state between requests, so there is nothing to share.

3. **Service Wrapper** - Decouples the HTTP layer from the upstream wire
   format. The route only sees a question in and a ``SolveResponse`` out;
   every failure surfaces as a ``RelayError`` subclass.

4. **Injectable transport** - Tests pass an ``httpx.MockTransport`` instead of
   reaching the real API.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from src.models.schemas import (
    ChatMessage,
    CompletionRequest,
    CompletionResponse,
    SolveResponse,
)
from src.relay.config import RelayConfig
from src.relay.errors import (
    ConfigurationError,
    EmptyAnswerError,
    UpstreamError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


class SolverService:
    """Relays questions to the upstream completion API.

    Wraps the DeepSeek chat-completion endpoint with:
    - Credential check before any network traffic
    - Fixed tutoring prompt and sampling temperature
    - Answer extraction with legacy ``text`` fallback
    - Typed errors for every failure path
    """

    def __init__(
        self,
        config: RelayConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the solver service.

        Args:
            config: Relay configuration built at process start.
            transport: Optional transport override (tests use MockTransport).
        """
        self._config = config
        self._transport = transport

    @property
    def config(self) -> RelayConfig:
        return self._config

    def ensure_configured(self) -> None:
        """Fail fast when the upstream credential is missing.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not self._config.has_api_key:
            raise ConfigurationError("DeepSeek API key is not configured on the server.")

    def build_request(self, question: str) -> CompletionRequest:
        """Build the upstream completion body for a question.

        Args:
            question: Trimmed, non-empty question text.

        Returns:
            CompletionRequest with the tutor prompt and the question.
        """
        return CompletionRequest(
            model=self._config.model_name,
            messages=[
                ChatMessage(role="system", content=self._config.system_prompt),
                ChatMessage(role="user", content=question),
            ],
            temperature=self._config.temperature,
        )

    async def solve(self, question: str) -> SolveResponse:
        """Ask the upstream API to solve a question.

        Args:
            question: Trimmed, non-empty question text.

        Returns:
            SolveResponse with the trimmed answer and upstream usage.

        Raises:
            ConfigurationError: No API key configured.
            UpstreamUnavailableError: The upstream could not be reached.
            UpstreamError: The upstream answered with a non-success status.
            EmptyAnswerError: The upstream produced no usable answer.
        """
        self.ensure_configured()

        payload = self.build_request(question).model_dump()
        headers = {"Authorization": f"Bearer {self._config.api_key}"}

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.post(
                    self._config.api_url, json=payload, headers=headers
                )
        except httpx.TimeoutException as e:
            logger.warning(f"DeepSeek request timed out after {self._config.timeout}s")
            raise UpstreamUnavailableError(
                "DeepSeek did not respond in time.", details=str(e) or None, status_code=504
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"DeepSeek request failed: {e}")
            raise UpstreamUnavailableError(
                "Could not reach DeepSeek.", details=str(e) or None
            ) from e

        if not response.is_success:
            details = response.text or response.reason_phrase
            logger.warning(f"DeepSeek API error {response.status_code}: {details[:200]}")
            raise UpstreamError(
                "DeepSeek API error.",
                details=details,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.warning("DeepSeek returned a non-JSON completion payload")
            raise EmptyAnswerError(
                "DeepSeek returned an unreadable response.", details=str(e)
            ) from e

        try:
            completion = CompletionResponse.model_validate(body)
        except ValidationError:
            # Well-formed JSON of an unexpected shape carries no answer
            completion = CompletionResponse()

        answer = completion.first_answer()
        if not answer:
            logger.warning("DeepSeek returned no answer text")
            raise EmptyAnswerError("DeepSeek did not return an answer.")

        logger.info(
            f"Solved question ({len(question)} chars) with {self._config.model_name}, "
            f"usage={completion.usage}"
        )

        # usage is left unset when the upstream sent none
        fields: dict[str, Any] = {"answer": answer}
        if completion.usage is not None:
            fields["usage"] = completion.usage
        return SolveResponse(**fields)
