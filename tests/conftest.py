"""Shared fixtures for the generator tests.

The petstore document under tests/fixtures exercises every schema shape,
both query-name conventions, both request body content types, and a
self-referencing model.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

import pytest

from apigen.compiler import declaration_path
from apigen.loader import load_spec

FIXTURES = Path(__file__).parent / "fixtures"
PETSTORE_PATH = FIXTURES / "petstore.json"


@pytest.fixture
def petstore() -> dict[str, Any]:
    """A fresh copy of the petstore document for each test."""
    return load_spec(PETSTORE_PATH)


# ---------------------------------------------------------------------------
# Compiler stand-in — js mode without a TypeScript toolchain
# ---------------------------------------------------------------------------

class FakeCompiler:
    """Records calls and returns marked-up text instead of running tsc."""

    def __init__(self) -> None:
        self.transpiled: list[str] = []
        self.declared: list[list[Path]] = []

    def transpile(self, source: str, file_name: str) -> str:
        self.transpiled.append(file_name)
        return f"// lowered from {file_name}\n"

    def declarations(self, paths: list[Path]) -> dict[Path, str]:
        # The .ts inputs must still be on disk while declarations are built.
        assert all(p.exists() for p in paths)
        self.declared.append(list(paths))
        return {declaration_path(p): f"// declarations for {p.name}\n" for p in paths}


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


# ---------------------------------------------------------------------------
# Real tsc — skip when the TypeScript compiler is not installed
# ---------------------------------------------------------------------------

@pytest.fixture
def tsc_command() -> list[str]:
    """Command for a tsc on PATH; skips the test otherwise."""
    tsc = shutil.which("tsc")
    if tsc is None:
        pytest.skip("tsc not found on PATH")
    return [tsc]
