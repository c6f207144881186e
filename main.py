# main.py

"""Entry point for the storefront client (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("storefront.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="storefront",
        description=f"{Settings.BRAND_NAME} terminal storefront.",
        epilog="Locations: /, /shop?q=esp32&sort=price_asc, "
        "/product/<id>, /cart, /checkout, /about",
    )
    parser.add_argument(
        "location",
        nargs="?",
        default="/",
        help="Page to open, e.g. '/shop?category=Sensors' (default: /).",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        dest="api_url",
        help=f"API base URL (default: {Settings.API_BASE_URL}).",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        default=False,
        help="Print the listing for a /shop location instead of the TUI.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Headless output format (default: json).",
    )
    parser.add_argument(
        "--suggest",
        default=None,
        metavar="TEXT",
        help="Print search suggestions for TEXT and exit.",
    )
    return parser


def _run_tui(location: str) -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import StorefrontApp

    try:
        app = StorefrontApp(start_location=location)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("Storefront TUI shutting down")


def _run_headless(args: argparse.Namespace) -> None:
    """Run a headless listing or suggestion lookup and exit."""
    from src.cli.runner import cli_list, cli_suggest

    if args.suggest is not None:
        exit_code = asyncio.run(cli_suggest(args.suggest, args.api_url))
    else:
        exit_code = asyncio.run(
            cli_list(args.location, args.output_format, args.api_url)
        )
    sys.exit(exit_code)


def main() -> None:
    """Route to the TUI or to a headless command."""
    parser = _build_parser()
    args = parser.parse_args()
    headless = args.headless or args.suggest is not None

    log_file = setup_logging(tui=not headless)
    logger.info("Storefront starting, log file: %s", log_file)

    if args.api_url:
        Settings.API_BASE_URL = args.api_url

    if headless:
        _run_headless(args)
    else:
        _run_tui(args.location)


if __name__ == "__main__":
    main()
