import numpy as np
from scipy.special import factorial as _factorial


def factorial(n):
    """Return n! as a float (n >= 0)."""
    return float(_factorial(n, exact=False))


def associatedLegendre(l, m, x):
    """
    Associated Legendre polynomial P_l^|m|(x) for x in [-1, 1].

    Includes the Condon-Shortley phase, so P_1^1(x) = -sqrt(1 - x^2).
    Works on scalars and numpy arrays. Returns 0 where |m| > l.
    """
    am = abs(m)
    x = np.asarray(x, dtype=float)
    if am > l:
        return np.zeros_like(x) if x.ndim else 0.0

    # P_m^m = (-1)^m (2m-1)!! (1-x^2)^(m/2)
    pmm = np.ones_like(x)
    if am > 0:
        somx2 = np.sqrt((1.0 - x) * (1.0 + x))
        fact = 1.0
        for _ in range(am):
            pmm = -pmm * fact * somx2
            fact += 2.0
    if l == am:
        return pmm if x.ndim else float(pmm)

    pmmp1 = x * (2.0 * am + 1.0) * pmm
    for ll in range(am + 2, l + 1):
        pll = (x * (2.0 * ll - 1.0) * pmmp1 - (ll + am - 1.0) * pmm) / (ll - am)
        pmm, pmmp1 = pmmp1, pll
    return pmmp1 if x.ndim else float(pmmp1)
