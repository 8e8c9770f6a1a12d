"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from aad_tape import GradientTape, HessianTape


@pytest.fixture
def gradient_tape():
    """Fresh first-order tape."""
    return GradientTape()


@pytest.fixture
def hessian_tape():
    """Fresh second-order tape."""
    return HessianTape()


@pytest.fixture(params=[GradientTape, HessianTape], ids=["gradient", "hessian"])
def any_tape(request):
    """Fixture that parametrizes over both tape kinds."""
    return request.param()


@pytest.fixture
def rng():
    """Seeded generator for reproducible random inputs."""
    return np.random.default_rng(42)
