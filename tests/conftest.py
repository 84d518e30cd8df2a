"""
Pytest configuration and fixtures for the test suite
"""

import numpy as np
import pytest

from pointtensor import IndexType, Tensor


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for reproducible components"""
    return np.random.default_rng(20111)


@pytest.fixture
def identity() -> Tensor:
    """Identity map δ^a_b built component by component"""
    delta = Tensor(2, [IndexType.CONTRAVARIANT, IndexType.COVARIANT])
    for k in range(4):
        delta.set_component((k, k), 1.0)
    return delta


@pytest.fixture
def vector(rng) -> Tensor:
    """Random contravariant vector v^a"""
    return Tensor.from_array(rng.normal(size=4), [IndexType.UP])


@pytest.fixture
def covector(rng) -> Tensor:
    """Random covariant vector w_a"""
    return Tensor.from_array(rng.normal(size=4), [IndexType.DOWN])


@pytest.fixture
def mixed_tensor(rng) -> Tensor:
    """Random mixed tensor T^a_b"""
    return Tensor.from_array(rng.normal(size=(4, 4)), ["up", "down"])


@pytest.fixture
def minkowski() -> Tensor:
    """Minkowski metric g_ab with signature (-,+,+,+)"""
    return Tensor.from_array(np.diag([-1.0, 1.0, 1.0, 1.0]), ["down", "down"])


@pytest.fixture
def inverse_minkowski() -> Tensor:
    """Inverse Minkowski metric g^ab"""
    return Tensor.from_array(np.diag([-1.0, 1.0, 1.0, 1.0]), ["up", "up"])


@pytest.fixture
def numerical_tolerance() -> float:
    """Standard numerical tolerance for floating point comparisons"""
    return 1e-12


# Marks for test categorization
def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "numerical: Numerical accuracy tests")
    config.addinivalue_line("markers", "slow: Slow tests")


# Skip slow tests by default
def pytest_collection_modifyitems(config, items):
    """Modify test collection to handle slow tests"""
    if config.getoption("--run-slow"):
        return  # Don't skip anything if explicitly requested

    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def pytest_addoption(parser):
    """Add command line options"""
    parser.addoption("--run-slow", action="store_true", default=False, help="run slow tests")
