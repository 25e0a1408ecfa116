"""
Command line entry point

    smallsh [--log-level LEVEL] [--log-file PATH]
    python -m smallsh ...
"""
import argparse
import logging
from typing import List, Optional

from .config import ShellConfig
from .logging_setup import configure_logging
from .shell import Shell
from .signals import SignalHandler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='smallsh',
        description='A small shell: exit, cd and status built-ins, '
                    '< and > redirection, & background jobs.',
    )
    parser.add_argument('--log-level', default=None,
                        help='Logging level (default: $SMALLSH_LOG_LEVEL or WARNING)')
    parser.add_argument('--log-file', default=None,
                        help='Write logs to a rotating file instead of stderr '
                             '(default: $SMALLSH_LOG_FILE)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = ShellConfig.from_env()
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.log_file:
        config.log_file = args.log_file

    handler = configure_logging(config)
    logger = logging.getLogger('smallsh')

    shell = Shell(config)
    signals = SignalHandler(shell.state.foreground_only)
    signals.install()
    try:
        exit_code = shell.run()
    finally:
        signals.restore()
        logging.getLogger().removeHandler(handler)
        handler.close()

    logger.debug(f"Exiting with status {exit_code}")
    return exit_code
