from typing import Any

from pydantic import BaseModel, Field, field_validator


class ChatMessage(BaseModel):
    """A single message sent to the completion API.

    Attributes:
        role: The speaker identifier (system or user).
        content: The message text.
    """

    role: str = Field(..., description="Message role: 'system' or 'user'")
    content: str = Field(..., description="The message content")


class SolveRequest(BaseModel):
    """Request payload for the solve endpoint.

    Attributes:
        question: The homework question. Stripped before use.
    """

    question: str | None = None

    @field_validator("question", mode="before")
    @classmethod
    def strip_question(cls, v: Any) -> Any:
        """Strip whitespace from question before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class SolveResponse(BaseModel):
    """Answer relayed back to the chat page.

    Attributes:
        answer: Trimmed answer text.
        usage: Upstream token accounting, passed through untouched.
    """

    answer: str
    usage: Any = None


class ErrorResponse(BaseModel):
    """Structured error body returned for every failed solve request.

    Attributes:
        error: Short, user-facing description of the failure.
        details: Extra context (parser message or upstream body).
    """

    error: str
    details: str | None = None


class CompletionRequest(BaseModel):
    """Body sent to the upstream chat-completion endpoint."""

    model: str
    messages: list[ChatMessage]
    temperature: float


class CompletionMessage(BaseModel):
    content: str | None = None


class CompletionChoice(BaseModel):
    message: CompletionMessage | None = None
    text: str | None = None


class CompletionResponse(BaseModel):
    """The subset of the upstream completion payload the relay reads."""

    choices: list[CompletionChoice | None] | None = None
    usage: Any = None

    def first_answer(self) -> str | None:
        """Return the trimmed text of the first choice.

        The legacy ``text`` field is only consulted when the choice carries
        no message content at all.
        """
        if not self.choices or self.choices[0] is None:
            return None
        choice = self.choices[0]
        content = choice.message.content if choice.message else None
        if content is not None:
            return content.strip()
        if choice.text is not None:
            return choice.text.strip()
        return None
