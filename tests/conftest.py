"""Pytest configuration and fixtures."""

import importlib.util
from collections.abc import Iterator
from pathlib import Path

import pytest

import expect_bn.bn
from expect_bn import bignumber, use
from expect_bn.config import get_config, reset_config

# Assertions in every test module run with the bignumber plugin installed,
# which is also what exercises the unmarked fallback paths.
use(bignumber())


@pytest.fixture(autouse=True)
def restore_config() -> Iterator[None]:
    """Undo configure() calls made by a test."""
    saved = get_config()
    yield
    reset_config(saved)


def load_foreign_bn_module():  # type: ignore[no-untyped-def]
    """Load a second, independent copy of expect_bn.bn under another name."""
    path = Path(expect_bn.bn.__file__)
    spec = importlib.util.spec_from_file_location("foreign_bn_copy", path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="session")
def foreign_bn() -> type:
    """BN class from an independently loaded copy of the module."""
    return load_foreign_bn_module().BN
