"""Unit tests for the screenshot tray and preview store."""

from unittest.mock import MagicMock

import pytest

from src.ui.attachments import PREVIEW_ROUTE, PreviewStore, ScreenshotTray, SelectedFile

PNG = SelectedFile(name="problem.png", content_type="image/png", data=b"\x89PNG")
JPEG = SelectedFile(name="graph.jpg", content_type="image/jpeg", data=b"\xff\xd8\xff")
TEXT = SelectedFile(name="notes.txt", content_type="text/plain", data=b"notes")


@pytest.fixture
def store() -> PreviewStore:
    return PreviewStore()


@pytest.fixture
def tray(store: PreviewStore) -> ScreenshotTray:
    return ScreenshotTray(store=store)


class TestPreviewStore:
    """Tests for granting and revoking preview URLs."""

    def test_grant_serves_bytes_until_revoked(self, store: PreviewStore) -> None:
        url = store.grant(b"abc", "image/png")
        token = url.rsplit("/", 1)[-1]

        assert url.startswith(f"{PREVIEW_ROUTE}/")
        assert store.get(token).data == b"abc"

        store.revoke(url)

        assert store.get(token) is None
        assert len(store) == 0

    def test_double_revoke_raises(self, store: PreviewStore) -> None:
        url = store.grant(b"abc", "image/png")
        store.revoke(url)

        with pytest.raises(KeyError):
            store.revoke(url)


class TestScreenshotTray:
    """Tests for attachment tracking and preview lifetimes."""

    def test_non_image_files_are_dropped(self, tray: ScreenshotTray, store: PreviewStore) -> None:
        """One image plus one text file leaves exactly one attachment."""
        added = tray.add_files([PNG, TEXT])

        assert [shot.name for shot in added] == ["problem.png"]
        assert len(tray.screenshots) == 1
        assert tray.outstanding == 1
        assert len(store) == 1

    def test_selections_append_in_order(self, tray: ScreenshotTray) -> None:
        tray.add_files([PNG])
        tray.add_files([JPEG, PNG])

        assert [shot.name for shot in tray.screenshots] == [
            "problem.png",
            "graph.jpg",
            "problem.png",
        ]
        assert len({shot.id for shot in tray.screenshots}) == 3

    def test_clear_revokes_all_previews(self, tray: ScreenshotTray, store: PreviewStore) -> None:
        tray.add_files([PNG, JPEG])

        tray.clear()

        assert tray.screenshots == ()
        assert tray.has_screenshots is False
        assert tray.outstanding == 0
        assert len(store) == 0

    def test_clear_then_close_revokes_once(self) -> None:
        """Teardown after clear revokes nothing a second time."""
        store = MagicMock(spec=PreviewStore)
        store.grant.side_effect = ["/previews/a", "/previews/b"]
        tray = ScreenshotTray(store=store)
        tray.add_files([PNG, JPEG])

        tray.clear()
        tray.close()

        assert sorted(call.args[0] for call in store.revoke.call_args_list) == [
            "/previews/a",
            "/previews/b",
        ]

    def test_clear_on_empty_tray_is_noop(self) -> None:
        store = MagicMock(spec=PreviewStore)
        tray = ScreenshotTray(store=store)

        tray.clear()

        store.revoke.assert_not_called()

    def test_context_exit_revokes_outstanding(self, store: PreviewStore) -> None:
        with ScreenshotTray(store=store) as tray:
            tray.add_files([PNG, JPEG])
            assert len(store) == 2

        assert len(store) == 0
        assert tray.outstanding == 0

    def test_context_exit_revokes_on_error(self, store: PreviewStore) -> None:
        with pytest.raises(RuntimeError), ScreenshotTray(store=store) as tray:
            tray.add_files([PNG])
            raise RuntimeError("page crashed")

        assert len(store) == 0
