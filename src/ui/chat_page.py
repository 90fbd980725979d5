"""NiceGUI homework page: question box, screenshot tray, and answer panel."""

import logging
from collections.abc import Iterable
from typing import Protocol

from fastapi import HTTPException, Response, status
from nicegui import Client, app, events, ui

from src.ui.attachments import PREVIEW_ROUTE, ScreenshotTray, SelectedFile, preview_store
from src.ui.client import SolveClient
from src.ui.state import ChatController

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #0f172a; min-height: 100vh; color: #e2e8f0; }

    .surface {
        background: #1e293b;
        border: 1px solid rgba(255, 255, 255, 0.05);
        border-radius: 16px;
    }

    .solution-panel {
        background: rgba(0, 0, 0, 0.2);
        border: 1px solid rgba(255, 255, 255, 0.1);
        border-radius: 16px;
    }

    .answer-block {
        background: rgba(255, 255, 255, 0.05);
        border-radius: 12px;
        white-space: pre-wrap;
    }

    .error-banner {
        color: #f87171;
        background: rgba(248, 113, 113, 0.1);
        border: 1px solid rgba(248, 113, 113, 0.3);
        border-radius: 12px;
    }

    .input-box {
        background: #1e293b;
        border: 1px solid rgba(255, 255, 255, 0.1);
        border-radius: 9999px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #6366f1; }
</style>
"""


@app.get(f"{PREVIEW_ROUTE}/{{token}}")
def serve_preview(token: str) -> Response:
    """Serve the bytes behind a live screenshot preview."""
    preview = preview_store.get(token)
    if preview is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Preview not found")
    return Response(content=preview.data, media_type=preview.content_type)


class UploadedFile(Protocol):
    """One file of a browser selection as handed over by ui.upload."""

    name: str
    content_type: str

    async def read(self) -> bytes: ...


async def read_selection(files: Iterable[UploadedFile]) -> list[SelectedFile]:
    """Read every file of one selection into memory, in selection order."""
    return [
        SelectedFile(name=file.name, content_type=file.content_type or "", data=await file.read())
        for file in files
    ]


def bind_tray_to_client(tray: ScreenshotTray, client: Client) -> None:
    """Revoke the tray's previews once the page client is deleted.

    Disconnects are not enough: a client may reconnect and keep its page.
    """
    client.on_delete(tray.close)


@ui.page("/")
def chat_page() -> None:
    """Main homework page."""
    ui.add_head_html(CUSTOM_CSS)

    answer_container: ui.column
    screenshots_container: ui.column

    def render_answer() -> None:
        answer_container.clear()
        with answer_container:
            if controller.error_message:
                ui.label(controller.error_message).classes("error-banner text-sm px-4 py-3")
            elif controller.is_loading:
                with ui.row().classes("items-center gap-3 text-slate-400"):
                    ui.spinner(size="sm")
                    ui.label("Working on it...")
            elif controller.answer_blocks:
                with ui.column().classes("w-full gap-3"):
                    for block in controller.answer_blocks:
                        ui.label(block).classes("answer-block w-full text-sm px-4 py-3")
            else:
                ui.label(
                    "Need help? Type a prompt like “Explain how to solve quadratic "
                    "equations” and I will walk you through it."
                ).classes("text-sm text-slate-400")

    def render_screenshots() -> None:
        screenshots_container.clear()
        with screenshots_container:
            if not tray.has_screenshots:
                return
            count = len(tray.screenshots)
            with ui.row().classes("w-full items-center justify-between"):
                with ui.column().classes("gap-0"):
                    ui.label("Selected screenshots").classes("text-lg font-semibold")
                    ui.label(
                        f"{count} file{'s' if count > 1 else ''} ready to analyze"
                    ).classes("text-sm text-slate-400")
                ui.button("Clear", on_click=clear_screenshots).props("flat dense no-caps")
            with ui.grid(columns=2).classes("w-full gap-4"):
                for shot in tray.screenshots:
                    with ui.column().classes("surface p-3 gap-3"):
                        ui.image(shot.preview_url).classes("w-full rounded-lg")
                        ui.label(shot.name).classes("text-xs text-slate-400 truncate")

    controller = ChatController(SolveClient(), on_change=render_answer)
    tray = ScreenshotTray()
    bind_tray_to_client(tray, ui.context.client)

    async def submit() -> None:
        await controller.submit()

    async def handle_upload(e: events.MultiUploadEventArguments) -> None:
        added = tray.add_files(await read_selection(e.files))
        if added:
            logger.debug(f"Attached {len(added)} screenshot(s)")
            render_screenshots()
        uploader.reset()

    def clear_screenshots() -> None:
        tray.clear()
        render_screenshots()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto p-4 md:p-8 gap-8 min-h-screen"):
        # Header
        with ui.row().classes("w-full items-center gap-2"):
            ui.label("AI").classes(
                "w-8 h-8 rounded bg-indigo-500 text-white font-bold "
                "flex items-center justify-center"
            )
            ui.label("HomeworkHelper").classes("text-xl font-bold")

        with ui.column().classes("w-full surface p-6 gap-6"):
            screenshots_container = ui.column().classes("w-full gap-6")

            # Solution
            with ui.column().classes("w-full solution-panel p-5 gap-4"):
                with ui.row().classes("w-full items-center justify-between"):
                    with ui.column().classes("gap-0"):
                        ui.label("AI Solution").classes("text-lg font-semibold")
                        ui.label().bind_text_from(controller, "status_text").classes(
                            "text-sm text-slate-400"
                        )
                    with ui.row().classes("items-center gap-2 text-xs text-slate-400").bind_visibility_from(
                        controller, "is_loading"
                    ):
                        ui.element("span").classes("h-2 w-2 rounded-full bg-indigo-500 animate-pulse")
                        ui.label("Thinking")
                answer_container = ui.column().classes("w-full")

        # Input
        uploader = (
            ui.upload(multiple=True, auto_upload=True, on_multi_upload=handle_upload)
            .props("accept=image/*")
            .classes("hidden")
        )
        with ui.row().classes("w-full input-box px-2 py-1 items-center gap-2 no-wrap"):
            ui.button(icon="add", on_click=lambda: uploader.run_method("pickFiles")).props(
                "flat round"
            ).tooltip("Add screenshots")
            (
                ui.input(placeholder="Type a question or upload a photo...")
                .props("borderless dense")
                .classes("flex-grow")
                .bind_value(controller, "question")
                .bind_enabled_from(controller, "is_loading", backward=lambda loading: not loading)
                .on("keydown.enter", submit)
            )
            ui.button(icon="send", on_click=submit).props("round unelevated").bind_enabled_from(
                controller, "can_submit"
            )

    render_answer()
    render_screenshots()


def main() -> None:
    ui.run(title="HomeworkHelper", port=8080, reload=False)


if __name__ == "__main__":
    main()
