"""Tests for running netpaths as a module (`python -m netpaths`)."""

from __future__ import annotations

import runpy
from unittest.mock import patch

import pytest


def test_module_help_exits_zero() -> None:
    """Running with --help should exit cleanly with code 0."""
    with patch("sys.argv", ["netpaths", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("netpaths", run_name="__main__")
    assert exc_info.value.code == 0


def test_module_without_arguments_exits_zero() -> None:
    with patch("sys.argv", ["netpaths"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("netpaths", run_name="__main__")
    assert exc_info.value.code == 0
