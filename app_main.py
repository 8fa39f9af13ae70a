"""Application entry point for the LaTeX symbol quiz."""

from __future__ import annotations

import argparse
import random
import socket
import sys

from PySide6.QtWidgets import QApplication
import uvicorn

from latex_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from latex_quiz.constants.quiz_constants import BUILTIN_SOURCE
from latex_quiz.constants.ui_constants import LOAD_ERROR_TITLE
from latex_quiz.core.question_store import QuestionBankError, QuestionStore, get_question_store
from latex_quiz.server.api_server import create_api_app, start_api_server
from latex_quiz.ui.dialog_helpers import show_error
from latex_quiz.ui.player_main_window import PlayerMainWindow
from latex_quiz.utils.logging_config import configure_logging


def _determine_player_url(port: int) -> str:
    """Best-effort determination of the local IP for the browser player URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="LaTeX symbol quiz")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--questions", help="CSV question bank to load instead of the bundled one")
    source.add_argument("--builtin", action="store_true", help="use the built-in question list")
    parser.add_argument("--headless", action="store_true", help="run only the browser server")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--seed", type=int, default=None, help="seed question sampling")
    return parser.parse_args(argv)


def _load_store(args: argparse.Namespace) -> QuestionStore:
    if args.builtin:
        return get_question_store(BUILTIN_SOURCE)
    return get_question_store(args.questions)


def main(argv: list[str] | None = None) -> None:
    """Initialize logging, load the question bank, start the API server and the Qt UI."""
    args = _parse_args(argv)
    logger = configure_logging()
    logger.info("Starting LaTeX symbol quiz…")

    try:
        store = _load_store(args)
    except (OSError, QuestionBankError) as exc:
        logger.error("Unable to load the question bank: %s", exc)
        if not args.headless:
            error_app = QApplication(sys.argv)
            show_error(None, LOAD_ERROR_TITLE, str(exc))
        sys.exit(1)

    rng_factory = random.Random if args.seed is None else (lambda: random.Random(args.seed))
    api_app = create_api_app(store, rng_factory=rng_factory)

    if args.headless:
        uvicorn.run(api_app, host=args.host, port=args.port, log_level="info")
        return

    start_api_server(api_app, host=args.host, port=args.port)
    player_url = _determine_player_url(args.port)
    logger.info("Browser player available at %s", player_url)

    app = QApplication(sys.argv)
    window = PlayerMainWindow(question_store=store, student_url=player_url, seed=args.seed)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
