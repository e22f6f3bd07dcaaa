#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Main entry point for NetCalc - adaptive launcher.
"""
import logging
import os
import sys
import typing

from . import __version__ as VERSION
from . import cli
from . import core

# Configure logging
logging.basicConfig(
    handlers=[logging.StreamHandler(sys.stderr)],
    level=logging.WARNING,
    format=core.LOG_FORMAT,
    datefmt=core.LOG_DATEFMT
)
logger = logging.getLogger(__name__)

try:
    from . import gui
except ImportError as e:
    logger.debug(f"PyQt5 not available - GUI mode disabled: {e}")
    gui = None

logger.debug(f"NetCalc {VERSION} starting...")


def is_headless_environment() -> bool:
    """
    Check if running in headless environment (no GUI available).

    Returns:
        True if headless, False if GUI is available
    """
    if any(os.environ.get(var) == 'true' for var in ['CI', 'GITHUB_ACTIONS', 'TRAVIS']):
        return True

    if os.environ.get('QT_QPA_PLATFORM') == 'offscreen':
        return True

    for var in ['DISPLAY', 'WAYLAND_DISPLAY', 'QT_QPA_PLATFORM']:
        if os.environ.get(var):
            return False

    if sys.platform.startswith('darwin') or sys.platform.startswith('win'):
        # Desktop platforms usually have a GUI available
        return False

    # Linux over SSH or without a display, and unknown platforms
    return True


def detect_interface_mode(argv: typing.Optional[list] = None) -> str:
    """
    Detect whether to use GUI or CLI mode based on environment.

    Returns:
        'gui' or 'cli'
    """
    if argv is None:
        argv = sys.argv

    if len(argv) > 1:
        return 'cli'

    if gui is None:
        return 'cli'

    if is_headless_environment():
        return 'cli'

    return 'gui'


def main(argv: typing.Optional[list] = None) -> int:
    """
    Main entry point for NetCalc.

    Runs the CLI when arguments are given; otherwise opens the GUI if PyQt5
    and a display are available, and falls back to CLI help.

    Args:
        argv: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if argv is None:
        argv = sys.argv

    if detect_interface_mode(argv) == 'gui':
        try:
            return gui.main()
        except Exception as e:
            logger.error(f"GUI failed: {type(e).__name__} {str(e)}")
            return cli.main([])

    # Skip the script name
    return cli.main(argv[1:])


if __name__ == "__main__":
    sys.exit(main())
