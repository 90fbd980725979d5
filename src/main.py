"""HomeworkHelper launcher.

Starts the solve API and the homework page, either in one uvicorn process
or as two processes. Settings come from the environment and an optional
.env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# .env must be applied before the relay config and page client read the environment
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

RUN_MODES = ("integrated", "separate")
UI_PORT = 8080


def run_integrated() -> None:
    """Serve /api/solve and the homework page from one process.

    The NiceGUI page (and its /previews route) is mounted onto the FastAPI
    app that carries the relay, so both share HOST and PORT.
    """
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.relay.config import get_relay_config
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    config = get_relay_config()
    app = create_app(config)

    ui.run_with(
        app,
        title="HomeworkHelper",
        favicon="📚",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "homework-helper-secret"),
    )

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"HomeworkHelper on http://{host}:{port} (page at /, solve API at /api/solve)")
    logger.info(f"Relaying to {config.api_url} with model {config.model_name}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the solve API and the homework page as two processes.

    The API listens on PORT (default 8000) with auto-reload; the page listens
    on 8080 and posts questions to API_BASE_URL. Stops both as soon as either
    exits.
    """
    import asyncio
    import subprocess

    api_port = os.getenv("PORT", "8000")

    async def supervise() -> None:
        logger.info(f"Solve API on port {api_port}, homework page on port {UI_PORT}")

        api_proc = subprocess.Popen(
            [
                sys.executable,
                "-m",
                "uvicorn",
                "src.api.app:app",
                "--host",
                os.getenv("HOST", "0.0.0.0"),
                "--port",
                api_port,
                "--reload",
            ]
        )
        page_proc = subprocess.Popen(
            [sys.executable, "-c", "from src.ui.chat_page import main; main()"]
        )

        try:
            while api_proc.poll() is None and page_proc.poll() is None:
                await asyncio.sleep(1)
        except KeyboardInterrupt:
            logger.info("Stopping solve API and homework page...")
        finally:
            for proc in (api_proc, page_proc):
                proc.terminate()
                proc.wait()

    asyncio.run(supervise())


def main() -> None:
    """Pick the run mode from RUN_MODE (integrated by default)."""
    mode = os.getenv("RUN_MODE", "integrated").lower()
    if mode not in RUN_MODES:
        logger.warning(f"Unknown RUN_MODE {mode!r}, falling back to integrated")
        mode = "integrated"

    logger.info(f"Starting HomeworkHelper ({mode})")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
