import math
import numpy as np

from specialFunctions import factorial, associatedLegendre

# Visualization-tuned constants; not physical values.
RADIAL_SCALE = 0.65       # effective Bohr radius scale in rho = 2 * scale * r / n
N_BOOST_EXPONENT = 2.5    # outer shells are brightened by n ** 2.5
INTENSITY_FACTOR = 4.0    # global brightness multiplier

# (n, l) pairs with a closed-form radial polynomial below
RADIAL_TABLE = {(1, 0), (2, 0), (2, 1), (3, 0), (3, 1), (3, 2), (4, 0)}


def sphericalHarmonic(l, m, theta, phi):
    """
    Real spherical harmonic Y_lm(theta, phi).

    m > 0 uses cos(m*phi), m < 0 uses sin(|m|*phi), both scaled by sqrt(2).
    theta is the polar angle, phi the azimuth.
    """
    am = abs(m)
    norm = math.sqrt((2 * l + 1) * factorial(l - am) / (4 * math.pi * factorial(l + am)))
    legendre = associatedLegendre(l, am, np.cos(theta))
    if m == 0:
        return norm * legendre
    if m > 0:
        return math.sqrt(2) * norm * legendre * np.cos(m * phi)
    return math.sqrt(2) * norm * legendre * np.sin(am * phi)


def hasExactRadial(n: int, l: int) -> bool:
    return (n, l) in RADIAL_TABLE


def radialPart(n, l, r):
    """
    Dimensionless radial profile R(n, l, r) for shells K through N.

    Each entry is a degree (n-l-1) polynomial in rho times exp(-rho/2).
    Pairs outside RADIAL_TABLE fall back to plain exp(-rho/2), which is an
    approximation and not a hydrogen-like solution.
    """
    rho = 2 * RADIAL_SCALE * np.asarray(r, dtype=float) / n
    decay = np.exp(-rho / 2)

    if n == 1:
        return decay
    if n == 2:
        if l == 0:
            return (2 - rho) * decay
        if l == 1:
            return rho * decay
    if n == 3:
        if l == 0:
            return (6 - 6 * rho + rho ** 2) * decay
        if l == 1:
            return (4 - rho) * rho * decay
        if l == 2:
            return rho ** 2 * decay
    if n == 4 and l == 0:
        return (24 - 36 * rho + 12 * rho ** 2 - rho ** 3) * decay
    # TODO: add the 4p/4d/4f rows (k! * L_k^(2l+1)(rho) * rho^l) once the catalog needs them
    return decay


def probabilityDensity(n, l, m, r, theta, phi):
    """
    Boosted |psi|^2 at (r, theta, phi).

    Not normalized and not a probability: the value is only meaningful as a
    rejection threshold relative to a uniform draw in [0, 1).
    """
    psi = radialPart(n, l, r) * sphericalHarmonic(l, m, theta, phi)
    return np.abs(psi) ** 2 * n ** N_BOOST_EXPONENT * INTENSITY_FACTOR
