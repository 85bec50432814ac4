from dataclasses import dataclass, replace as _replace

from colorama import Fore, Style

from handler import hasExactRadial

POINT_COUNT_RANGE = (5000, 80000)
OPACITY_RANGE = (0.1, 1.5)
SHELLS = ("K", "L", "M", "N")


def hexToRgb(color: str):
    """'#FF8C00' -> (1.0, 0.549..., 0.0)"""
    digits = color.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got '{color}'")
    try:
        return tuple(int(digits[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
    except ValueError:
        raise ValueError(f"Expected a #RRGGBB color, got '{color}'") from None


@dataclass(frozen=True)
class OrbitalInfo:
    id: str
    n: int
    l: int
    m: int
    label: str
    shell: str
    color: str
    description: str = ""

    @property
    def rgb(self):
        return hexToRgb(self.color)

    @property
    def quantumNumbers(self):
        return self.n, self.l, self.m


@dataclass(frozen=True)
class SimulationConfig:
    """
    Sampling and display settings.

    Only pointCount reaches the sampler. opacity, showContours, scale and
    autoRotate are handed to the renderer untouched.
    """
    pointCount: int = 40000
    opacity: float = 1.0
    showContours: bool = False
    scale: float = 1.0
    autoRotate: bool = True

    def __post_init__(self):
        if self.pointCount <= 0:
            raise ValueError(f"pointCount must be positive, got {self.pointCount}")
        if self.opacity < 0:
            raise ValueError(f"opacity must be non-negative, got {self.opacity}")

    def replace(self, **changes):
        return _replace(self, **changes)

    def isStructuralChange(self, other) -> bool:
        """Point clouds must be resampled only when the point count moves."""
        return self.pointCount != other.pointCount

    def clamped(self):
        """Copy with pointCount and opacity pulled into the UI slider ranges."""
        lo, hi = POINT_COUNT_RANGE
        olo, ohi = OPACITY_RANGE
        return self.replace(pointCount=min(max(self.pointCount, lo), hi),
                            opacity=min(max(self.opacity, olo), ohi))


IRON_ORBITALS = [
    # K
    OrbitalInfo('1s', 1, 0, 0, '1s', 'K', '#FF3D3D', 'core s orbital'),

    # L
    OrbitalInfo('2s', 2, 0, 0, '2s', 'L', '#FFD700', '2s orbital'),
    OrbitalInfo('2px', 2, 1, 1, '2px', 'L', '#FF8C00', '2p along x'),
    OrbitalInfo('2py', 2, 1, -1, '2py', 'L', '#FFA500', '2p along y'),
    OrbitalInfo('2pz', 2, 1, 0, '2pz', 'L', '#FF4500', '2p along z'),

    # M
    OrbitalInfo('3s', 3, 0, 0, '3s', 'M', '#00FFCC', '3s orbital'),
    OrbitalInfo('3px', 3, 1, 1, '3px', 'M', '#00BFFF', '3p along x'),
    OrbitalInfo('3py', 3, 1, -1, '3py', 'M', '#1E90FF', '3p along y'),
    OrbitalInfo('3pz', 3, 1, 0, '3pz', 'M', '#4169E1', '3p along z'),
    OrbitalInfo('3dxy', 3, 2, -2, '3dxy', 'M', '#CC00FF', '3d in the xy plane'),
    OrbitalInfo('3dyz', 3, 2, -1, '3dyz', 'M', '#FF00FF', '3d in the yz plane'),
    OrbitalInfo('3dxz', 3, 2, 1, '3dxz', 'M', '#8A2BE2', '3d in the xz plane'),
    OrbitalInfo('3dx2-y2', 3, 2, 2, '3dx²-y²', 'M', '#FF1493', '3d along the axes'),
    OrbitalInfo('3dz2', 3, 2, 0, '3dz²', 'M', '#FF69B4', '3d lobes with a ring'),

    # N
    OrbitalInfo('4s', 4, 0, 0, '4s', 'N', '#00FF7F', 'outer s orbital'),
]


def findOrbital(orbitalId: str) -> OrbitalInfo:
    for orbital in IRON_ORBITALS:
        if orbital.id == orbitalId:
            return orbital
    raise ValueError(f"Unknown orbital '{orbitalId}'")


def orbitalsInShell(shell: str):
    return [o for o in IRON_ORBITALS if o.shell == shell]


def validateOrbital(orbital: OrbitalInfo, verbose=False):
    """
    Reject quantum numbers outside 0 <= l < n, -l <= m <= l.

    The numeric core would silently return zero density for them instead.
    """
    n, l, m = orbital.quantumNumbers
    if not (n >= 1 and 0 <= l < n and -l <= m <= l):
        raise ValueError(f"Invalid quantum numbers for '{orbital.id}': "
                         "Ensure 0 <= l < n and -l <= m <= l")
    if orbital.shell not in SHELLS:
        raise ValueError(f"Unknown shell '{orbital.shell}' for '{orbital.id}'")
    hexToRgb(orbital.color)
    if verbose and not hasExactRadial(n, l):
        print(f"{Fore.YELLOW}Warning: no radial polynomial for n={n}, l={l}; "
              f"'{orbital.id}' uses the exp(-rho/2) approximation.{Style.RESET_ALL}")
    return orbital
