"""
Root pytest configuration for argcontracts tests.

Provides:
- An isolated TypeRegistry (with built-ins) per test
- A ContractFactory bound to that registry
- Snapshot/restore of the process-wide default registry
"""

import sys
from pathlib import Path

# Add repository root to Python path so `import argcontracts` works uninstalled
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

import pytest

from argcontracts import DEFAULT_REGISTRY, ContractFactory, TypeRegistry


@pytest.fixture
def registry():
    """Fresh registry with only the built-in types."""
    return TypeRegistry()


@pytest.fixture
def factory(registry):
    """Contract factory bound to the isolated registry."""
    return ContractFactory(registry)


@pytest.fixture
def restore_default_registry():
    """Undo any registrations a test makes on the default registry."""
    previous = dict(DEFAULT_REGISTRY._predicates)
    try:
        yield DEFAULT_REGISTRY
    finally:
        DEFAULT_REGISTRY._predicates.clear()
        DEFAULT_REGISTRY._predicates.update(previous)
