"""
Launcher for the todo list API.
Supports several run modes.
"""

import logging
import os
import subprocess
import sys
from pathlib import Path

from .settings import parse_int_env

logger = logging.getLogger(__name__)


def get_port() -> int:
    """Return the port the server should bind to."""
    return parse_int_env(os.getenv("PORT"), 8080)


def get_workers() -> int:
    """Return the number of workers to use for production server."""
    return max(1, parse_int_env(os.getenv("WEB_CONCURRENCY"), 1))


def log_startup(port: int, workers: int) -> None:
    """Log a single startup line for process managers."""
    logger.info(
        "Starting on 0.0.0.0:%s (TODO_STORAGE_PATH=%s, WORKERS=%s)",
        port,
        os.getenv("TODO_STORAGE_PATH", "unset"),
        workers,
    )


def run_development():
    """Development mode with auto-reload and a local storage file."""
    import uvicorn

    logger.info("Running in development mode...")
    data_dir = Path("data")
    data_dir.mkdir(exist_ok=True)
    os.environ.setdefault("TODO_STORAGE_PATH", str(data_dir / "todos.json"))

    port = get_port()
    log_startup(port, 1)
    uvicorn.run(
        "todolist.main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
        log_level="info",
    )


def run_production():
    """Production mode."""
    import uvicorn

    port = get_port()
    workers = get_workers()
    if workers > 1 and os.getenv("TODO_STORAGE_PATH"):
        logger.warning("Each worker keeps its own todo list in memory; use WEB_CONCURRENCY=1 with file storage")
    log_startup(port, workers)
    uvicorn.run(
        "todolist.main:app",
        host="0.0.0.0",
        port=port,
        workers=workers,
        log_level="info"
    )


def run_tests():
    """Run the test suite."""
    logger.info("Running tests...")
    result = subprocess.run(["pytest", "tests/", "-v"], cwd=Path(__file__).resolve().parents[1])
    sys.exit(result.returncode)


def show_help():
    """Show usage."""
    print("""
Todo List API - Launch Utility

Usage:
  todolist-server [command]

Commands:
  dev        - Run in development mode
  prod       - Run in production mode
  test       - Run tests
  help       - Show this help message

Examples:
  todolist-server dev      # Start development server
  todolist-server test     # Run all tests
  todolist-server prod     # Start production server
    """.strip())


def main():
    """Entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    if len(sys.argv) < 2:
        mode = "prod"
    else:
        mode = sys.argv[1].lower()

    try:
        if mode == "dev":
            run_development()
        elif mode == "prod":
            run_production()
        elif mode == "test":
            run_tests()
        elif mode in ["help", "-h", "--help"]:
            show_help()
        else:
            print(f"Unknown mode: {mode}")
            show_help()
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Shutdown requested...")
        sys.exit(0)


if __name__ == "__main__":
    main()
