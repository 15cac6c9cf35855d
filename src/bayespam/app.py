# =============================================================================
# bayespam Command Line
# =============================================================================
# Train a model and classify messages from the shell:
#
#   bayespam train-spam "Special promotion, only today!"
#   bayespam train-ham  "Hi Bob, see you at the meeting."
#   bayespam score      "Special promotion on our new weightloss"
#   echo "Hi Bob" | bayespam identify
#
# The model file comes from --model, else from config.toml, else model.json
# in the current directory.
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path

from bayespam import __app_name__, __version__
from bayespam.classifier import Classifier
from bayespam.config import Config, ConfigError, print_paths
from bayespam.model import BayespamError

logger = logging.getLogger(__name__)

COMMANDS = ("train-spam", "train-ham", "score", "identify")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line argument parser.

    Returns:
        Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="bayespam: a simple bayesian spam classifier",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration and model paths and exit",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--model",
        type=Path,
        help="Path to model file (default: from config, else ./model.json)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=COMMANDS,
        help="What to do with the message",
    )

    parser.add_argument(
        "message",
        nargs="?",
        help="Message text ('-' or omitted reads stdin)",
    )

    return parser


def read_message(message: str | None) -> str:
    """Return the message argument, or stdin when it is '-' or missing."""
    if message is None or message == "-":
        return sys.stdin.read()
    return message


def run_command(command: str, message: str, config: Config, model_path: Path) -> None:
    """
    Run one command against the model at model_path.

    Raises:
        BayespamError: If the model can't be loaded or saved.
    """
    if command in ("train-spam", "train-ham"):
        # Start a fresh model the first time around
        if model_path.exists():
            classifier = Classifier.from_file(model_path, config=config.classifier)
        else:
            logger.info(f"No model at {model_path}, starting a new one")
            classifier = Classifier(config=config.classifier)

        if command == "train-spam":
            classifier.train_spam(message)
        else:
            classifier.train_ham(message)

        classifier.save_file(model_path, pretty=config.model.pretty)
        return

    classifier = Classifier.from_file(model_path, config=config.classifier)
    if command == "score":
        print(f"{classifier.score(message):.6f}")
    else:
        print("spam" if classifier.identify(message) else "ham")


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for bayespam.

    This function:
        1. Parses command-line arguments
        2. Loads configuration
        3. Handles --paths
        4. Runs the requested command

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    model_path = args.model or config.model.path

    # Handle --paths flag
    if args.paths:
        print_paths(model_path)
        return 0

    if args.command is None:
        parser.error("a command is required")

    try:
        run_command(args.command, read_message(args.message), config, model_path)
    except BayespamError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
