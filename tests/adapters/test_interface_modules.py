"""Adapter packages and entry points."""

from importlib import import_module

import pytest


@pytest.mark.parametrize(
    "package",
    [
        "src.adapters",
        "src.adapters.interface",
        "src.adapters.interface.streamlit",
    ],
)
def test_adapter_packages_export_nothing(package) -> None:
    assert import_module(package).__all__ == []


@pytest.mark.parametrize(
    "module",
    [
        "src.adapters.bootstrap_schema_cli",
        "src.adapters.test_db_connection",
    ],
)
def test_cli_modules_expose_main(module) -> None:
    assert callable(import_module(module).main)
