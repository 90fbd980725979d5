"""Chat page state: one tagged phase value and the flags derived from it."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from src.ui.client import SolveClient, SolveClientError

logger = logging.getLogger(__name__)

EMPTY_QUESTION = "Type a homework question to get started."
UNEXPECTED_ERROR = "Unexpected error while solving your question."

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


def split_paragraphs(answer: str) -> list[str]:
    """Split answer text into paragraph blocks.

    Blocks are separated by two or more newlines; each block is trimmed and
    empty blocks are dropped. Single newlines inside a block are kept.
    """
    blocks = (block.strip() for block in _PARAGRAPH_BREAK.split(answer))
    return [block for block in blocks if block]


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Submitting:
    pass


@dataclass(frozen=True)
class Answered:
    answer: str

    @property
    def paragraphs(self) -> list[str]:
        return split_paragraphs(self.answer)


@dataclass(frozen=True)
class Errored:
    """Failed submission.

    ``answer`` keeps the last answer in memory without displaying it.
    """

    message: str
    answer: str | None = None


ChatPhase = Idle | Submitting | Answered | Errored


class ChatController:
    """Drives the question/answer flow for one page client.

    Attributes:
        question: Current contents of the question box.
        phase: Current phase; every UI flag is derived from it.
    """

    def __init__(
        self,
        client: SolveClient,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._client = client
        self._on_change = on_change
        self.question: str = ""
        self.phase: ChatPhase = Idle()

    @property
    def is_loading(self) -> bool:
        return isinstance(self.phase, Submitting)

    @property
    def can_submit(self) -> bool:
        return bool(self.question.strip()) and not self.is_loading

    @property
    def error_message(self) -> str | None:
        return self.phase.message if isinstance(self.phase, Errored) else None

    @property
    def answer_blocks(self) -> list[str]:
        return self.phase.paragraphs if isinstance(self.phase, Answered) else []

    @property
    def status_text(self) -> str:
        if isinstance(self.phase, Submitting):
            return "Analyzing your question..."
        if self._last_answer():
            return "Here is the breakdown:"
        return "Ask a question or upload a screenshot to get help."

    def _last_answer(self) -> str | None:
        if isinstance(self.phase, Answered | Errored):
            return self.phase.answer
        return None

    def _set_phase(self, phase: ChatPhase) -> None:
        self.phase = phase
        if self._on_change is not None:
            self._on_change()

    async def submit(self) -> ChatPhase:
        """Send the current question to the relay.

        Ignored while a submission is in flight. An empty question moves to
        ``Errored`` without any request.

        Returns:
            The phase after the submission settles.
        """
        if self.is_loading:
            logger.debug("Ignoring submit while a request is in flight")
            return self.phase

        question = self.question.strip()
        if not question:
            self._set_phase(Errored(EMPTY_QUESTION, answer=self._last_answer()))
            return self.phase

        self._set_phase(Submitting())

        try:
            answer = await self._client.solve(question)
        except SolveClientError as e:
            self._set_phase(Errored(str(e)))
        except Exception:
            logger.exception("Unexpected failure while solving a question")
            self._set_phase(Errored(UNEXPECTED_ERROR))
        else:
            self.question = ""
            self._set_phase(Answered(answer))

        return self.phase
