"""Screenshot attachments for the chat page.

Attachments are cosmetic: they are previewed on the page and never sent to
the solve endpoint. Each preview is a revocable URL into an in-memory store,
and every URL granted is revoked exactly once (on clear or on teardown).
"""

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from types import TracebackType

logger = logging.getLogger(__name__)

PREVIEW_ROUTE = "/previews"


@dataclass(frozen=True)
class SelectedFile:
    """A file picked in the browser file dialog."""

    name: str
    content_type: str
    data: bytes = field(repr=False)

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")


@dataclass(frozen=True)
class Screenshot:
    """An attached screenshot shown as a thumbnail.

    Attributes:
        id: Locally generated unique token.
        name: Original file name.
        preview_url: Revocable URL serving the image bytes.
    """

    id: str
    name: str
    preview_url: str


@dataclass(frozen=True)
class Preview:
    data: bytes = field(repr=False)
    content_type: str


class PreviewStore:
    """In-memory image bytes addressed by revocable preview URLs."""

    def __init__(self) -> None:
        self._previews: dict[str, Preview] = {}

    def __len__(self) -> int:
        return len(self._previews)

    def grant(self, data: bytes, content_type: str) -> str:
        """Store image bytes and return a URL that serves them."""
        token = uuid.uuid4().hex
        self._previews[token] = Preview(data=data, content_type=content_type)
        return f"{PREVIEW_ROUTE}/{token}"

    def get(self, token: str) -> Preview | None:
        return self._previews.get(token)

    def revoke(self, url: str) -> None:
        """Drop the bytes behind a preview URL.

        Raises:
            KeyError: If the URL was never granted or is already revoked.
        """
        token = url.rsplit("/", 1)[-1]
        del self._previews[token]


# Shared by every page client; served by the preview route
preview_store = PreviewStore()


def _new_screenshot_id(file: SelectedFile) -> str:
    return f"{file.name}-{uuid.uuid4().hex}"


class ScreenshotTray:
    """Ordered screenshot attachments with scoped preview lifetimes.

    Tracks every outstanding preview URL by attachment id. ``clear`` and
    ``close`` revoke all of them and empty the tracking map, so a clear
    followed by teardown revokes nothing twice. Usable as a context manager.
    """

    def __init__(
        self,
        store: PreviewStore | None = None,
        id_factory: Callable[[SelectedFile], str] = _new_screenshot_id,
    ) -> None:
        self._store = store if store is not None else preview_store
        self._id_factory = id_factory
        self._screenshots: list[Screenshot] = []
        self._previews: dict[str, str] = {}

    def __enter__(self) -> "ScreenshotTray":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def screenshots(self) -> tuple[Screenshot, ...]:
        return tuple(self._screenshots)

    @property
    def has_screenshots(self) -> bool:
        return bool(self._screenshots)

    @property
    def outstanding(self) -> int:
        """Number of preview URLs granted and not yet revoked."""
        return len(self._previews)

    def add_files(self, files: Iterable[SelectedFile]) -> list[Screenshot]:
        """Attach the image files from a selection.

        Non-image files are skipped silently.

        Args:
            files: Files picked in one selection.

        Returns:
            The screenshots appended by this selection, in order.
        """
        added: list[Screenshot] = []
        for file in files:
            if not file.is_image:
                logger.debug(f"Skipping non-image attachment: {file.name} ({file.content_type})")
                continue
            screenshot = Screenshot(
                id=self._id_factory(file),
                name=file.name,
                preview_url=self._store.grant(file.data, file.content_type),
            )
            self._previews[screenshot.id] = screenshot.preview_url
            added.append(screenshot)

        self._screenshots.extend(added)
        return added

    def clear(self) -> None:
        """Revoke every preview and drop all attachments."""
        if not self._screenshots:
            return
        self._revoke_all()
        self._screenshots.clear()

    def close(self) -> None:
        """Teardown: revoke whatever previews are still outstanding."""
        self._revoke_all()
        self._screenshots.clear()

    def _revoke_all(self) -> None:
        previews, self._previews = self._previews, {}
        for url in previews.values():
            self._store.revoke(url)
