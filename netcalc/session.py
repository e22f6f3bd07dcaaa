#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Caller-side state for NetCalc front ends.

The core is stateless; this module owns the mutable presentation state
(current inputs, last result, last error) shared by the GUI and tests.

    Idle -> (calculate) -> Success | Failed -> (edit input) -> Idle
"""
import enum
import logging
from typing import Optional

from . import core

logger = logging.getLogger(__name__)

# "Copied" feedback: fully visible, fade starts, hidden
COPY_FADE_DELAY_MS = 1500
COPY_FADE_DURATION_MS = 500
COPY_HIDE_DELAY_MS = 2000


class State(enum.Enum):
    IDLE = "idle"
    SUCCESS = "success"
    FAILED = "failed"


class CalculatorSession:
    """Inputs plus the outcome of the last calculation attempt."""

    def __init__(self, network_text: str = "", ip_text: str = ""):
        self.network_text = network_text
        self.ip_text = ip_text
        self.result: Optional[core.CalculationResult] = None
        self.error: Optional[core.CalcError] = None
        self.state = State.IDLE

    def _reset(self) -> None:
        self.result = None
        self.error = None
        self.state = State.IDLE

    def set_network(self, text: str) -> None:
        if text != self.network_text:
            self.network_text = text
            self._reset()

    def set_ip(self, text: str) -> None:
        if text != self.ip_text:
            self.ip_text = text
            self._reset()

    def calculate(self) -> Optional[core.CalculationResult]:
        """
        Run a calculation on the current inputs.

        The previous result and error are cleared before the attempt, so a
        failed retry never leaves stale data next to the new error.

        Returns:
            The new result, or None if the calculation was rejected
        """
        self._reset()
        try:
            self.result = core.calculate(self.network_text, self.ip_text)
        except core.CalcError as e:
            logger.info(f"Calculation rejected: {e.kind} {str(e)}")
            self.error = e
            self.state = State.FAILED
            return None

        self.state = State.SUCCESS
        return self.result

    @property
    def error_message(self) -> str:
        return str(self.error) if self.error else ""

    def copy_text(self) -> Optional[str]:
        """Clipboard text of the current result, None unless in SUCCESS."""
        if self.state is not State.SUCCESS:
            return None
        return self.result.clipboard_text()
