"""
Entrypoint for the Uploadcare Gallery service.
This file wires the FastAPI application together by importing the core package,
which initializes shared state and registers all routes.
"""

from __future__ import annotations

import argparse
import os
import platform
import signal
import sys

import core  # noqa: F401  # Ensure route modules are imported for side effects


def _force_exit(signum, frame):
    """Force immediate exit on Ctrl+C without waiting for graceful shutdown."""
    print("\nForced exit (Ctrl+C)")
    os._exit(0)


# Register handler for immediate exit on Ctrl+C
signal.signal(signal.SIGINT, _force_exit)
from core.app_state import app, config, logger  # noqa: E402


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Uploadcare Gallery")
    parser.add_argument("--host", default=None, help="Bind address (overrides APP_HOST)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (overrides APP_PORT)")
    args = parser.parse_args()

    host = args.host or config.APP_HOST
    port = args.port or config.APP_PORT

    if platform.system() == "Linux":
        import subprocess

        workers = config.APP_WORKERS
        cmd = [
            sys.executable,
            "-m",
            "gunicorn",
            "main:app",
            "--workers",
            str(workers),
            "--worker-class",
            "uvicorn.workers.UvicornWorker",
            "--bind",
            f"{host}:{port}",
        ]

        if config.APP_RELOAD:
            cmd.append("--reload")

        logger.info("Starting with gunicorn - %d workers", workers)
        logger.info("Command: %s", " ".join(cmd))
        subprocess.run(cmd, check=False)
    else:
        import uvicorn

        logger.info("Starting with uvicorn")
        uvicorn.run(
            "main:app",
            host=host,
            port=port,
            reload=config.APP_RELOAD,
        )
