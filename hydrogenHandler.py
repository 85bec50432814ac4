from dataclasses import dataclass

import numpy as np
from tqdm import tqdm
from colorama import init, Fore, Style

from handler import probabilityDensity

# Initialize colorama for colored output
init()

ITERATION_FACTOR = 50   # hard cap: pointCount * ITERATION_FACTOR candidates
BATCH_SIZE = 65536      # candidates evaluated per numpy pass


@dataclass(frozen=True, eq=False)
class PointCloud:
    """Accepted sample points of one orbital, in draw order."""
    positions: np.ndarray    # (K, 3) cartesian x, y, z
    colors: np.ndarray       # (K, 3) orbital rgb scaled by intensity
    intensities: np.ndarray  # (K,) in [0.7, 1.0]
    requested: int
    iterations: int
    orbitalId: str | None = None
    cancelled: bool = False

    def __len__(self):
        return len(self.positions)

    @property
    def exhausted(self) -> bool:
        """True when the iteration cap ended sampling before `requested` points."""
        return not self.cancelled and len(self) < self.requested

    @property
    def acceptanceRate(self) -> float:
        return len(self) / self.iterations if self.iterations else 0.0


def samplingRadius(n):
    """Radius of the candidate ball; tight for 1s, growing with n otherwise."""
    return 4.0 if n == 1 else 10.0 * n


def sphericalToCartesian(r, theta, phi):
    sinTheta = np.sin(theta)
    return np.column_stack((
        r * sinTheta * np.cos(phi),
        r * sinTheta * np.sin(phi),
        r * np.cos(theta),
    ))


def spawnStreams(seed, count):
    """Independent random generators, one per concurrently sampled orbital."""
    return [np.random.default_rng(s) for s in np.random.SeedSequence(seed).spawn(count)]


def _readOnly(array):
    array.setflags(write=False)
    return array


def sampleOrbitalCloud(n, l, m, pointCount, color=(1.0, 1.0, 1.0), rng=None,
                       iterationFactor=ITERATION_FACTOR, batchSize=BATCH_SIZE,
                       cancel=None, progress=False, verbose=False, orbitalId=None):
    """
    Rejection-sample up to `pointCount` points from probabilityDensity(n, l, m).

    Every candidate consumes four uniforms (u, v, w, t) from `rng`:
    r = R * u^(1/3), theta = acos(2v - 1), phi = 2*pi*w, accepted iff
    t < density. Candidates are evaluated in batches but accepted in draw
    order, so a given stream always yields the same cloud.

    Sampling stops after pointCount accepted points or
    pointCount * iterationFactor candidates. A short cloud is a normal
    result, not an error. `cancel` is an optional zero-argument callable
    polled once per batch; when it returns True the partial cloud is
    returned.
    """
    if pointCount <= 0:
        raise ValueError(f"pointCount must be positive, got {pointCount}")
    rng = rng if rng is not None else np.random.default_rng()
    color = np.asarray(color, dtype=float)

    cutoff = samplingRadius(n)
    maxIterations = pointCount * iterationFactor
    positions, intensities = [], []
    accepted = 0
    iterations = 0
    cancelled = False

    with tqdm(total=pointCount, desc=f"Sampling n={n} l={l} m={m}", unit="pt",
              disable=not progress) as pbar:
        while accepted < pointCount and iterations < maxIterations:
            if cancel is not None and cancel():
                cancelled = True
                break
            size = min(batchSize, maxIterations - iterations)
            u, v, w, t = rng.random((size, 4)).T

            r = cutoff * np.cbrt(u)
            theta = np.arccos(2 * v - 1)
            phi = 2 * np.pi * w
            density = probabilityDensity(n, l, m, r, theta, phi)

            hits = np.flatnonzero(t < density)
            need = pointCount - accepted
            if hits.size >= need:
                hits = hits[:need]
                # candidates after the last needed point are never drawn in a sequential run
                iterations += int(hits[-1]) + 1
            else:
                iterations += size

            positions.append(sphericalToCartesian(r[hits], theta[hits], phi[hits]))
            intensities.append(0.7 + 0.3 * np.minimum(density[hits], 1.0))
            accepted += hits.size
            pbar.update(hits.size)

    positions = np.concatenate(positions) if positions else np.empty((0, 3))
    intensities = np.concatenate(intensities) if intensities else np.empty(0)
    colors = intensities[:, None] * color[None, :]

    if verbose and accepted < pointCount:
        reason = "cancelled" if cancelled else f"iteration cap {maxIterations} reached"
        print(f"{Fore.YELLOW}Warning: n={n}, l={l}, m={m} {reason}; "
              f"kept {accepted}/{pointCount} points "
              f"(acceptance {accepted / max(iterations, 1):.2%}).{Style.RESET_ALL}")

    return PointCloud(
        positions=_readOnly(positions),
        colors=_readOnly(colors),
        intensities=_readOnly(intensities),
        requested=pointCount,
        iterations=iterations,
        orbitalId=orbitalId,
        cancelled=cancelled,
    )


def generateCloud(orbital, config, rng=None, **kwargs):
    """Sample a catalog orbital with its tint at config.pointCount points."""
    return sampleOrbitalCloud(
        orbital.n, orbital.l, orbital.m, config.pointCount,
        color=orbital.rgb, rng=rng, orbitalId=orbital.id, **kwargs
    )
