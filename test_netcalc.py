#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import dataclasses
import json
import logging
import os
import subprocess
import sys

import pytest

from netcalc import cli, core
from netcalc.core import (
    AddressOutOfRange,
    CalcError,
    CalculationResult,
    InvalidCidr,
    InvalidFormat,
    MissingCidr,
    OutOfRange,
    calculate,
    cidr_to_mask_int,
    cidr_to_mask_string,
    format_address,
    format_clipboard_text,
    gateway,
    network_address,
    parse_address,
)

# Configure logging for tests
logging.basicConfig(
    handlers=[logging.StreamHandler(sys.stderr)],
    level=logging.DEBUG,
    format=core.LOG_FORMAT,
    datefmt=core.LOG_DATEFMT
)
logger = logging.getLogger(__name__)

REPO_DIR = os.path.dirname(os.path.abspath(__file__))


# --- Address codec ---

@pytest.mark.parametrize("address", [
    "0.0.0.0",
    "10.0.0.1",
    "172.16.254.3",
    "192.168.1.10",
    "255.255.255.255",
])
def test_address_round_trip(address):
    """Canonical dotted-decimal survives parse and format unchanged."""
    assert format_address(parse_address(address)) == address


def test_parse_address_big_endian():
    assert parse_address("10.0.0.1") == 0x0A000001
    assert parse_address("192.168.1.10") == 0xC0A8010A
    assert parse_address("255.255.255.255") == 0xFFFFFFFF


def test_parse_address_strips_surrounding_whitespace():
    assert parse_address("  10.0.0.1 ") == 0x0A000001


@pytest.mark.parametrize("text", ["", "192.168.1", "192.168.1.1.1", "192..1.1", "192.168.1.", ".1.2.3"])
def test_parse_address_invalid_format(text):
    with pytest.raises(InvalidFormat):
        parse_address(text)


@pytest.mark.parametrize("text", [
    "256.1.1.1",
    "1.2.3.999",
    "1.2.3.-1",
    "1.2.3.+4",
    "1.2.3.1e2",
    "1.2.3.0x1",
    "1.2. 3.4",
    "a.b.c.d",
    "1.2.3.²",
])
def test_parse_address_out_of_range(text):
    with pytest.raises(OutOfRange):
        parse_address(text)


def test_format_address_is_unsigned():
    assert format_address(0xFFFFFFFF) == "255.255.255.255"
    assert format_address(0x80000000) == "128.0.0.0"
    assert format_address(0) == "0.0.0.0"


# --- Mask deriver ---

@pytest.mark.parametrize("cidr", range(33))
def test_mask_leading_ones(cidr):
    """Mask has exactly cidr leading ones followed by zeros."""
    bits = format(cidr_to_mask_int(cidr), "032b")
    assert bits == "1" * cidr + "0" * (32 - cidr)


def test_mask_edges():
    assert cidr_to_mask_int(0) == 0
    assert cidr_to_mask_int(32) == 0xFFFFFFFF
    assert cidr_to_mask_string(0) == "0.0.0.0"
    assert cidr_to_mask_string(24) == "255.255.255.0"
    assert cidr_to_mask_string(27) == "255.255.255.224"
    assert cidr_to_mask_string(32) == "255.255.255.255"


@pytest.mark.parametrize("cidr", [-1, 33, 64])
def test_mask_rejects_out_of_range_prefix(cidr):
    with pytest.raises(InvalidCidr):
        cidr_to_mask_int(cidr)


# --- Subnet calculator ---

@pytest.mark.parametrize("ip,cidr", [
    ("192.168.1.77", 24),
    ("10.20.30.40", 8),
    ("255.255.255.255", 0),
    ("172.16.5.4", 31),
    ("1.2.3.4", 32),
])
def test_network_address_clears_host_bits(ip, cidr):
    mask = cidr_to_mask_int(cidr)
    net = network_address(parse_address(ip), mask)
    assert net & (~mask & core.MAX_ADDRESS) == 0


def test_gateway_is_network_plus_one():
    assert gateway(parse_address("192.168.1.0")) == parse_address("192.168.1.1")
    assert gateway(0) == 1


def test_gateway_wraps_at_top_of_address_space():
    assert gateway(0xFFFFFFFF) == 0


# --- Orchestrator ---

def test_calculate_scenario_inside_network():
    result = calculate("192.168.1.0/27", "192.168.1.10")
    assert result.network_address == "192.168.1.0/27"
    assert result.gateway == "192.168.1.1"
    assert result.subnet_mask == "255.255.255.224"
    assert result.ip == "192.168.1.10"
    assert result.dns1 == "8.8.8.8"
    assert result.dns2 == "8.8.4.4"


def test_calculate_scenario_outside_block():
    with pytest.raises(AddressOutOfRange) as exc_info:
        calculate("192.168.1.0/27", "192.168.1.40")
    assert str(exc_info.value) == "IP is not in the specified network range"


def test_calculate_scenario_below_network():
    with pytest.raises(AddressOutOfRange):
        calculate("10.0.0.0/8", "9.255.255.255")


def test_calculate_scenario_missing_slash():
    with pytest.raises(MissingCidr) as exc_info:
        calculate("192.168.1.0", "192.168.1.10")
    assert str(exc_info.value) == "Network must be in CIDR format, e.g. 192.168.100.0/24"


def test_calculate_scenario_prefix_too_large():
    with pytest.raises(InvalidCidr) as exc_info:
        calculate("192.168.1.0/33", "192.168.1.10")
    assert str(exc_info.value) == "CIDR must be between 0 and 32"


def test_calculate_scenario_octet_out_of_range():
    with pytest.raises(OutOfRange) as exc_info:
        calculate("192.168.1.999/24", "192.168.1.10")
    assert exc_info.value.field == "network"
    assert str(exc_info.value) == "Network: IP parts must be 0-255"


@pytest.mark.parametrize("network", ["192.168.1.0/24/8", "192.168.1.0//24", ""])
def test_calculate_requires_exactly_one_slash(network):
    with pytest.raises(MissingCidr):
        calculate(network, "192.168.1.10")


@pytest.mark.parametrize("network", ["192.168.1.0/", "192.168.1.0/abc", "192.168.1.0/-1", "192.168.1.0/24.5"])
def test_calculate_invalid_cidr(network):
    with pytest.raises(InvalidCidr):
        calculate(network, "192.168.1.10")


def test_calculate_tags_ip_field():
    with pytest.raises(InvalidFormat) as exc_info:
        calculate("192.168.1.0/24", "192.168.1")
    assert exc_info.value.field == "ip"
    assert exc_info.value.kind == "InvalidFormat"
    assert str(exc_info.value) == "IP: Invalid IP format"


def test_calculate_network_field_checked_before_ip():
    with pytest.raises(InvalidFormat) as exc_info:
        calculate("192.168/24", "not-an-ip")
    assert exc_info.value.field == "network"


def test_calculate_masks_host_bits_of_network_field():
    """Network field with host bits set still yields the masked network."""
    result = calculate("192.168.10.20/24", "192.168.10.77")
    assert result.network_address == "192.168.10.0/24"
    assert result.gateway == "192.168.10.1"


def test_calculate_prefix_zero_matches_everything():
    result = calculate("10.0.0.0/0", "8.8.8.8")
    assert result.network_address == "0.0.0.0/0"
    assert result.subnet_mask == "0.0.0.0"
    assert result.gateway == "0.0.0.1"


def test_calculate_host_route_gateway_wraps():
    result = calculate("255.255.255.255/32", "255.255.255.255")
    assert result.network_address == "255.255.255.255/32"
    assert result.subnet_mask == "255.255.255.255"
    assert result.gateway == "0.0.0.0"


def test_calculate_keeps_original_ip_text():
    result = calculate("10.0.0.0/8", " 10.1.2.3 ")
    assert result.ip == " 10.1.2.3 "


def test_calculate_prefix_whitespace():
    assert calculate("10.0.0.0/ 8", "10.1.2.3").network_address == "10.0.0.0/8"


def test_calc_errors_are_value_errors():
    for error_cls in (MissingCidr, InvalidCidr, InvalidFormat, OutOfRange, AddressOutOfRange):
        assert issubclass(error_cls, CalcError)
        assert issubclass(error_cls, ValueError)


def test_error_to_dict():
    err = OutOfRange(field="ip")
    assert err.to_dict() == {"error": "IP: IP parts must be 0-255", "kind": "OutOfRange", "field": "ip"}


# --- Result record ---

def test_result_is_immutable():
    result = calculate("192.168.1.0/27", "192.168.1.10")
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.gateway = "1.1.1.1"


def test_result_to_dict():
    result = calculate("192.168.1.0/27", "192.168.1.10")
    assert result.to_dict() == {
        "network_address": "192.168.1.0/27",
        "ip": "192.168.1.10",
        "gateway": "192.168.1.1",
        "subnet_mask": "255.255.255.224",
        "dns1": "8.8.8.8",
        "dns2": "8.8.4.4",
    }


def test_clipboard_text():
    result = CalculationResult(
        network_address="192.168.1.0/27",
        ip="192.168.1.10",
        gateway="192.168.1.1",
        subnet_mask="255.255.255.224",
    )
    expected = "IP: 192.168.1.10\nGateway: 192.168.1.1\nSubnet: 255.255.255.224\nDNS1: 8.8.8.8\nDNS2: 8.8.4.4"
    assert format_clipboard_text(result) == expected
    assert result.clipboard_text() == expected


def test_presets_are_ordinary_input():
    for label, value in core.PREDEFINED_NETWORKS:
        assert "/" in value
    result = calculate(core.PREDEFINED_NETWORKS[0][1], "192.168.1.10")
    assert result.network_address == "192.168.1.0/27"


def test_debug_mode_logging(monkeypatch, caplog):
    monkeypatch.setattr(core, "DEBUG_MODE", True)
    with caplog.at_level(logging.DEBUG, logger="netcalc.core"):
        calculate("192.168.1.0/27", "192.168.1.10")
        with pytest.raises(MissingCidr):
            calculate("192.168.1.0", "192.168.1.10")
    messages = [r.getMessage() for r in caplog.records]
    assert any("Entering calculate" in m for m in messages)
    assert any("Exception in calculate" in m for m in messages)


# --- CLI (in process) ---

def test_cli_text_output(capsys):
    assert cli.main(["192.168.1.0/27", "192.168.1.10"]) == 0
    lines = capsys.readouterr().out.strip().split("\n")
    assert lines == [
        "Network Address: 192.168.1.0/27",
        "IP: 192.168.1.10",
        "Gateway: 192.168.1.1",
        "Subnet Mask: 255.255.255.224",
        "DNS1: 8.8.8.8",
        "DNS2: 8.8.4.4",
    ]


def test_cli_json_output(capsys):
    assert cli.main(["10.0.0.0/8", "10.1.2.3", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["network_address"] == "10.0.0.0/8"
    assert data["gateway"] == "10.0.0.1"
    assert data["subnet_mask"] == "255.0.0.0"
    assert "_timing" not in data


def test_cli_clipboard_block(capsys):
    assert cli.main(["192.168.1.0/27", "192.168.1.10", "--text"]) == 0
    out = capsys.readouterr().out.strip()
    assert out == calculate("192.168.1.0/27", "192.168.1.10").clipboard_text()


def test_cli_error(capsys):
    assert cli.main(["192.168.1.0/27", "192.168.1.40"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error: IP is not in the specified network range" in captured.err


def test_cli_json_error(capsys):
    assert cli.main(["192.168.1.0", "192.168.1.10", "-j"]) == 1
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "MissingCidr"
    assert data["field"] is None


def test_cli_list_presets(capsys):
    assert cli.main(["--list-presets"]) == 0
    out = capsys.readouterr().out
    assert "1. Network1/CIDR (192.168.1.0/27)" in out
    assert "2. Network2/CIDR (192.168.10.20/24)" in out


def test_cli_preset(capsys):
    assert cli.main(["--preset", "2", "192.168.10.77"]) == 0
    out = capsys.readouterr().out
    assert "Network Address: 192.168.10.0/24" in out
    assert "Gateway: 192.168.10.1" in out


def test_cli_unknown_preset(capsys):
    assert cli.main(["--preset", "9", "192.168.10.77"]) == 1
    assert "Unknown preset 9" in capsys.readouterr().err


def test_cli_copy(monkeypatch, capsys):
    copied = []
    monkeypatch.setattr(cli.adapters, "copy_to_clipboard", lambda text: copied.append(text) or True)
    assert cli.main(["192.168.1.0/27", "192.168.1.10", "--copy"]) == 0
    assert copied == [calculate("192.168.1.0/27", "192.168.1.10").clipboard_text()]
    assert "Warning" not in capsys.readouterr().err


def test_cli_copy_failure_is_not_fatal(monkeypatch, capsys):
    monkeypatch.setattr(cli.adapters, "copy_to_clipboard", lambda text: False)
    assert cli.main(["192.168.1.0/27", "192.168.1.10", "--copy"]) == 0
    assert "could not copy" in capsys.readouterr().err


def test_cli_no_arguments_shows_help(capsys):
    assert cli.main([]) == 0
    assert "usage: netcalc" in capsys.readouterr().out


# --- CLI (subprocess) ---

def test_cli_module_json_output():
    """Test CLI JSON output via subprocess"""
    result = subprocess.run(
        [sys.executable, "-m", "netcalc", "192.168.1.0/27", "192.168.1.10", "--json"],
        capture_output=True,
        text=True,
        cwd=REPO_DIR
    )
    assert result.returncode == 0
    data = json.loads(result.stdout.strip())
    assert data["network_address"] == "192.168.1.0/27"
    assert data["gateway"] == "192.168.1.1"


def test_cli_module_debug_timing():
    result = subprocess.run(
        [sys.executable, "-m", "netcalc", "192.168.1.0/27", "192.168.1.10", "--json", "--debug"],
        capture_output=True,
        text=True,
        cwd=REPO_DIR
    )
    assert result.returncode == 0
    data = json.loads(result.stdout.strip())
    assert "computation_time" in data["_timing"]
    assert "Entering calculate" in result.stderr


def test_cli_module_error_exit_code():
    result = subprocess.run(
        [sys.executable, "-m", "netcalc", "192.168.1.0/33", "192.168.1.10"],
        capture_output=True,
        text=True,
        cwd=REPO_DIR
    )
    assert result.returncode == 1
    assert "CIDR must be between 0 and 32" in result.stderr


# --- Oversized numeric input ---

def test_parse_address_rejects_huge_octet():
    """Digit strings past int() conversion limits are still OutOfRange."""
    with pytest.raises(OutOfRange):
        parse_address("10.0.0." + "1" * 5000)


def test_parse_address_leading_zeros():
    assert parse_address("010.000.0001.0255") == parse_address("10.0.1.255")
    assert parse_address("0" * 5000 + ".0.0.1") == 1
    with pytest.raises(OutOfRange):
        parse_address("0256.0.0.1")


def test_calculate_huge_ip_octet():
    with pytest.raises(OutOfRange) as exc_info:
        calculate("10.0.0.0/8", "10.0.0." + "1" * 5000)
    assert exc_info.value.field == "ip"


def test_calculate_huge_prefix():
    with pytest.raises(InvalidCidr):
        calculate("10.0.0.0/" + "1" * 5000, "10.0.0.1")
    with pytest.raises(InvalidCidr):
        calculate("10.0.0.0/100", "10.0.0.1")
    assert calculate("10.0.0.0/008", "10.0.0.1").network_address == "10.0.0.0/8"


def test_cli_huge_prefix_is_calculation_error(capsys):
    assert cli.main(["10.0.0.0/" + "1" * 5000, "10.0.0.1"]) == 1
    err = capsys.readouterr().err
    assert "Error: CIDR must be between 0 and 32" in err
    assert "Unexpected error" not in err


def test_cli_json_and_text_are_exclusive(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["192.168.1.0/27", "192.168.1.10", "--json", "--text"])
    assert exc_info.value.code == 2
    assert "not allowed with argument" in capsys.readouterr().err
