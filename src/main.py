"""Main application entry point.

Runs the FastAPI Completion Gateway with the NiceGUI chat widget mounted on
the same server (default port 3001). Environment variables are loaded from
.env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles /api/chat and /health, NiceGUI serves the widget at /.
    The widget reaches the gateway over HTTP on the same port.
    """
    import uvicorn
    from nicegui import app as nicegui_app
    from nicegui import ui

    from src.api.app import create_app
    from src.chat.config import ClientConfig
    from src.chat.gateway_client import GatewayClient
    from src.ui.chat_page import register_chat_page

    port = int(os.getenv("PORT", "3001"))
    app = create_app()

    config = ClientConfig(gateway_url=os.getenv("GATEWAY_URL", f"http://localhost:{port}"))
    gateway = GatewayClient(config)
    register_chat_page(gateway, config)
    nicegui_app.on_shutdown(gateway.aclose)

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title="Alith AI",
        favicon="🤖",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "alith-chat-secret"),
    )

    logger.info(f"Alith AI server running at http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the gateway and the chat UI as two processes.

    Gateway on HOST:PORT (3001), NiceGUI on HOST:UI_PORT (8080). The UI
    process reaches the gateway through GATEWAY_URL. Stops both when either
    exits.
    """
    import subprocess
    import time

    host = os.getenv("HOST", "0.0.0.0")
    port = os.getenv("PORT", "3001")
    ui_port = os.getenv("UI_PORT", "8080")
    env = {
        **os.environ,
        "HOST": host,
        "UI_PORT": ui_port,
        "GATEWAY_URL": os.getenv("GATEWAY_URL", f"http://localhost:{port}"),
    }

    commands = {
        "gateway": [
            sys.executable, "-m", "uvicorn", "src.api.app:app", "--host", host, "--port", port,
        ],
        "ui": [sys.executable, "-c", "from src.ui.chat_page import main; main()"],
    }

    procs: dict[str, subprocess.Popen] = {}
    try:
        for name, command in commands.items():
            logger.info(f"Starting {name}: {' '.join(command[1:])}")
            procs[name] = subprocess.Popen(command, env=env)
        logger.info(f"Gateway at http://{host}:{port}, chat UI at http://{host}:{ui_port}")

        while all(proc.poll() is None for proc in procs.values()):
            time.sleep(1)
        exited = [name for name, proc in procs.items() if proc.poll() is not None]
        logger.warning(f"Process exited: {', '.join(exited)}; stopping the rest")
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in procs.values():
            proc.terminate()
        for proc in procs.values():
            proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode (both on one port).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Alith AI chat in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
