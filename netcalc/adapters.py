#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
External system adapters for NetCalc.

This module handles the one external interaction of the command line:
copying result text to the system clipboard with platform tools.
"""
import logging
import platform
import subprocess
import typing

logger = logging.getLogger(__name__)

CLIPBOARD_TIMEOUT = 5

CLIPBOARD_COMMANDS = {
    "Windows": [["clip"]],
    "Darwin": [["pbcopy"]],
    "Linux": [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ],
}


def get_clipboard_commands(system: typing.Optional[str] = None) -> typing.List[typing.List[str]]:
    """Return candidate clipboard commands for the platform, best first."""
    if system is None:
        system = platform.system()
    return CLIPBOARD_COMMANDS.get(system, CLIPBOARD_COMMANDS["Linux"])


def run_clipboard_command(cmd: typing.List[str], text: str) -> None:
    encoding = "utf-16le" if cmd[0] == "clip" else "utf-8"
    subprocess.run(
        cmd,
        input=text.encode(encoding),
        check=True,
        timeout=CLIPBOARD_TIMEOUT,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )


def copy_to_clipboard(text: str) -> bool:
    """
    Copy text to the system clipboard.

    Every available tool is tried in turn; failures are logged and ignored.

    Returns:
        True if one of the tools accepted the text, False otherwise
    """
    for cmd in get_clipboard_commands():
        try:
            run_clipboard_command(cmd, text)
            logger.debug(f"Copied {len(text)} chars with {cmd[0]}")
            return True
        except FileNotFoundError:
            logger.debug(f"Clipboard tool not found: {cmd[0]}")
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            logger.warning(f"Clipboard tool {cmd[0]} failed: {type(e).__name__} {str(e)}")
    logger.warning("No clipboard tool accepted the text")
    return False
