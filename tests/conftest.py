"""Shared fixtures for swaggergen tests.

The generated package is written under ``tmp_path`` and imported from
there, so each test that needs it gets a fresh copy.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest

from swaggergen.config import GeneratorConfig
from swaggergen.loader import load_spec
from swaggergen.orchestrator import generate
from swaggergen.schema_parser import parse_document

FIXTURES = Path(__file__).parent / "fixtures"
PETSTORE = FIXTURES / "petstore.yaml"


def _forget(package: str) -> None:
    """Drop a generated package from the import cache."""
    for name in list(sys.modules):
        if name == package or name.startswith(f"{package}."):
            del sys.modules[name]


@pytest.fixture(scope="session")
def petstore_spec():
    return load_spec(PETSTORE)


@pytest.fixture(scope="session")
def petstore_document(petstore_spec):
    return parse_document(petstore_spec)


@pytest.fixture
def generated(tmp_path, monkeypatch):
    """Generate the petstore package (more specificity) and import it.

    Returns ``(package module, GenerationSummary)``.
    """
    config = GeneratorConfig.create(
        "petstore", PETSTORE, tmp_path / "petstore", more_specificity=True,
    )
    summary = generate(config)
    monkeypatch.syspath_prepend(str(tmp_path))
    _forget("petstore")
    yield importlib.import_module("petstore"), summary
    _forget("petstore")
