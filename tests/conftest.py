"""
Pytest configuration and shared fixtures for Axiomatic tests.
"""

from dataclasses import dataclass

import numpy as np
import pytest

from axiomatic.algebra.capabilities import CapabilityRegistry
from axiomatic.config import Settings, set_settings
from axiomatic.core.primitives import register_primitive, unregister_primitive
from axiomatic.core.types import ScalarKind, Type


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test with default settings, independent of the environment."""
    set_settings(Settings())
    yield
    set_settings(None)


@pytest.fixture
def registry():
    """A fresh registry with the built-in rules."""
    return CapabilityRegistry.with_builtins()


@pytest.fixture
def empty_registry():
    """A registry with no rules at all."""
    return CapabilityRegistry()


@dataclass(frozen=True)
class OpaqueType(Type):
    """A descriptor with no operators and no identity constants."""

    name: str = "Opaque"

    def __str__(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OpaqueType) and other.name == self.name

    def __hash__(self) -> int:
        return hash(("opaque", self.name))


@pytest.fixture
def opaque_type():
    """A custom type descriptor that supports nothing."""
    return OpaqueType()


@pytest.fixture
def i16():
    """An extra signed primitive, removed again after the test."""
    primitive = register_primitive("i16", np.int16, ScalarKind.SIGNED)
    yield primitive
    unregister_primitive("i16")
