"""Browser Switcher command-line entry point

Usage:
    browser-switcher https://example.com/page   # resolve, launch, exit
    browser-switcher                            # interactive command loop
    browser-switcher --data-file ./rules.json   # use another rules file
    browser-switcher --strict-wildcards URL     # dot-boundary '*.suffix' matching

Register `browser-switcher %1` as the system's http/https handler to route
every clicked link through the rules.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from switcher.core.command_dispatcher import CommandDispatcher, WELCOME
from switcher.core.exceptions import PersistenceError
from switcher.core.store import SwitcherStore
from switcher.core.switcher_config import SwitcherConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="browser-switcher",
        description="Open URLs in different browsers based on hostname rules.",
    )
    parser.add_argument("url", nargs="?", help="URL to open (must start with 'http')")
    parser.add_argument("--config", type=Path, help="Alternate switcher.yaml")
    parser.add_argument("--data-file", type=Path, help="Rules file (overrides the configured one)")
    parser.add_argument(
        "--strict-wildcards",
        action="store_true",
        help="Require a dot boundary for '*.suffix' patterns",
    )
    return parser


def configure_logging(config: SwitcherConfig) -> None:
    """Logs go to stderr so they never mix with command output."""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format=config.log_format,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def run_interactive(dispatcher: CommandDispatcher, prompt: str) -> None:
    """Read-dispatch loop; ends on exit/quit, EOF or Ctrl-C."""
    print(WELCOME)
    dispatcher.show_help()
    while True:
        try:
            line = input(prompt)
            if not dispatcher.dispatch(line):
                break
        except (EOFError, KeyboardInterrupt):
            print()
            break


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.url is not None and not args.url.startswith("http"):
        parser.error(f"not a URL: '{args.url}' (run without arguments for interactive mode)")

    if args.config is not None:
        SwitcherConfig.use_file(args.config)
    config = SwitcherConfig.get()
    configure_logging(config)

    data_file = args.data_file or config.data_file
    strict = args.strict_wildcards or config.strict_wildcards

    try:
        store = SwitcherStore.open(data_file, strict_wildcards=strict)
    except PersistenceError as e:
        logging.error(f"Cannot start: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    dispatcher = CommandDispatcher(store, input_func=input)

    if args.url is not None:
        dispatcher.open_url(args.url)
        return 0

    run_interactive(dispatcher, config.prompt)
    return 0


if __name__ == "__main__":
    sys.exit(main())
