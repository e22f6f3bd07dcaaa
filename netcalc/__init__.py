#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
NetCalc - IPv4 network calculator with GUI and CLI interfaces.

Computes the network address, gateway and subnet mask for a host inside a
network given in CIDR notation, and checks that the host belongs to it.
"""

__version__ = "0.1.0"
__author__ = 'NetCalc Developers'

# Import modules
from . import core
from . import session
from . import adapters
from . import cli
from .core import CalcError, CalculationResult, calculate

# GUI needs PyQt5
try:
    from .gui import NetCalcGUI
except ImportError:
    NetCalcGUI = None

__all__ = [
    "__version__",
    "__author__",
    "core",
    "session",
    "adapters",
    "cli",
    "calculate",
    "CalcError",
    "CalculationResult",
    "NetCalcGUI",
]
