"""DocChat entry point.

Two run modes, picked with ``RUN_MODE``:

    integrated (default)  one uvicorn server; the API and the NiceGUI pages
                          share ``PORT``
    separate              the API on ``PORT`` and the UI on ``UI_PORT`` as
                          child processes; the UI reaches the API through
                          ``API_BASE_URL``

The .env file is loaded before anything reads configuration.
"""

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

TITLE = "Document Assistant"


def _host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def _port(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _nicegui_options() -> dict[str, str]:
    """Keyword arguments shared by ``ui.run`` and ``ui.run_with``."""
    return {
        "title": TITLE,
        "favicon": "📄",
        "storage_secret": os.getenv("NICEGUI_STORAGE_SECRET", "docchat-secret"),
    }


def _register_pages() -> None:
    # Importing the modules registers their @ui.page routes.
    from docchat.ui import chat_page, login_page  # noqa: F401


def run_integrated() -> None:
    """Serve the API and the UI from one uvicorn process."""
    import uvicorn
    from nicegui import ui

    from docchat.api.app import create_app

    _register_pages()
    app = create_app()
    ui.run_with(app, **_nicegui_options())

    port = _port("PORT", 8000)
    logger.info(f"DocChat UI on http://localhost:{port}/, API docs on /docs")
    uvicorn.run(app, host=_host(), port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def run_ui() -> None:
    """Serve only the NiceGUI pages; the API runs elsewhere."""
    from nicegui import ui

    _register_pages()
    ui.run(port=_port("UI_PORT", 8080), reload=False, **_nicegui_options())


def _supervise(commands: dict[str, list[str]]) -> None:
    """Start each command and stop all of them once any one exits."""
    import subprocess
    import time

    processes = {name: subprocess.Popen(cmd) for name, cmd in commands.items()}
    try:
        while True:
            time.sleep(1)
            exited = [name for name, proc in processes.items() if proc.poll() is not None]
            if exited:
                logger.warning(f"{', '.join(exited)} exited, stopping the others")
                break
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in processes.values():
            proc.terminate()
        for proc in processes.values():
            proc.wait()


def run_separate() -> None:
    """Run the API and the UI as two child processes."""
    api_port = _port("PORT", 8000)
    ui_port = _port("UI_PORT", 8080)
    logger.info(f"API on http://localhost:{api_port}, UI on http://localhost:{ui_port}")

    _supervise(
        {
            "api": [
                sys.executable,
                "-m",
                "uvicorn",
                "docchat.api.app:app",
                "--host",
                _host(),
                "--port",
                str(api_port),
            ],
            "ui": [sys.executable, "-c", "from docchat.main import run_ui; run_ui()"],
        }
    )


def main() -> None:
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting DocChat in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
