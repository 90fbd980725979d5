"""HTTP client the chat page uses to reach the solve endpoint."""

import logging
import os

import httpx

logger = logging.getLogger(__name__)


def default_api_base_url() -> str:
    """Where the page posts questions.

    Falls back to this server's own port, which is where the API lives in
    integrated mode.
    """
    return os.getenv("API_BASE_URL") or f"http://localhost:{os.getenv('PORT', '8000')}"


GENERIC_FAILURE = "Something went wrong while contacting DeepSeek."
NO_ANSWER = "I couldn't generate a solution this time. Please retry."


class SolveClientError(Exception):
    """A solve request failed; the message is shown to the user as is."""


class SolveClient:
    """Posts questions to ``/api/solve`` and returns the answer text.

    Only the question is sent. Attachments stay on the page.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url or default_api_base_url()
        self._timeout = timeout
        self._transport = transport

    async def solve(self, question: str) -> str:
        """Ask the relay to solve a question.

        Args:
            question: Trimmed, non-empty question text.

        Returns:
            The answer text.

        Raises:
            SolveClientError: On transport failure, error status, or a body
                without an answer.
        """
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post("/api/solve", json={"question": question})
            except httpx.RequestError as e:
                logger.warning(f"Solve request failed: {e!r}")
                raise SolveClientError(f"Connection failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            message = None
            if isinstance(body, dict):
                message = body.get("error") or body.get("details")
            raise SolveClientError(message if isinstance(message, str) else GENERIC_FAILURE)

        answer = body.get("answer") if isinstance(body, dict) else None
        if not isinstance(answer, str) or not answer:
            raise SolveClientError(NO_ANSWER)

        return answer
