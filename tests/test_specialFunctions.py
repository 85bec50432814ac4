import math

import numpy as np
import pytest
from scipy.special import lpmv

from specialFunctions import factorial, associatedLegendre


def test_factorial_small_values():
    assert factorial(0) == 1.0
    assert factorial(1) == 1.0
    assert factorial(5) == 120.0
    assert isinstance(factorial(3), float)


@pytest.mark.parametrize("x", [-1.0, -0.3, 0.0, 0.42, 1.0])
def test_legendre_closed_forms(x):
    assert associatedLegendre(0, 0, x) == pytest.approx(1.0)
    assert associatedLegendre(1, 0, x) == pytest.approx(x)
    assert associatedLegendre(1, 1, x) == pytest.approx(-math.sqrt(1 - x * x))
    assert associatedLegendre(2, 0, x) == pytest.approx(0.5 * (3 * x * x - 1))


def test_legendre_uses_absolute_m():
    assert associatedLegendre(2, -1, 0.3) == pytest.approx(associatedLegendre(2, 1, 0.3))


def test_legendre_matches_scipy():
    x = np.linspace(-1, 1, 41)
    for l in range(5):
        for m in range(l + 1):
            np.testing.assert_allclose(associatedLegendre(l, m, x), lpmv(m, l, x), atol=1e-10)


def test_legendre_outside_domain_is_zero():
    assert associatedLegendre(1, 2, 0.5) == 0.0
    out = associatedLegendre(2, -3, np.array([0.1, 0.2, 0.3]))
    assert out.shape == (3,)
    assert not out.any()
