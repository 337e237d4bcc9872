"""graphvis.colors

Deterministic node-type colours.

Types are sorted ordinally and spread evenly round a cyclic rainbow scale
(the cubehelix "rainbow" used by d3), then brightened for contrast against
dark links. The mapping is recomputed from scratch for each type set: adding
a type shifts every other type's hue.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Tuple

RGB = Tuple[int, int, int]

# cubehelix basis
_A, _B, _C, _D, _E = -0.14861, 1.78277, -0.29227, -0.90649, 1.97294

BRIGHTER = 1 / 0.7


def _clamp_channel(x: float) -> int:
    if math.isnan(x):
        return 0
    return max(0, min(255, math.floor(x + 0.5)))


def cubehelix_to_rgb(h: float, s: float, l: float) -> Tuple[float, float, float]:
    h = math.radians(h + 120)
    a = s * l * (1 - l)
    cosh, sinh = math.cos(h), math.sin(h)
    return (
        255 * (l + a * (_A * cosh + _B * sinh)),
        255 * (l + a * (_C * cosh + _D * sinh)),
        255 * (l + a * (_E * cosh)),
    )


def interpolate_rainbow(t: float) -> RGB:
    if t < 0 or t > 1:
        t -= math.floor(t)
    ts = abs(t - 0.5)
    r, g, b = cubehelix_to_rgb(360 * t - 100, 1.5 - 1.5 * ts, 0.8 - 0.9 * ts)
    return _clamp_channel(r), _clamp_channel(g), _clamp_channel(b)


def brighter(rgb: RGB, k: float = 1.0) -> RGB:
    f = BRIGHTER ** k
    return tuple(_clamp_channel(c * f) for c in rgb)  # type: ignore[return-value]


def to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def assign_colors(types: Iterable[str]) -> Dict[str, str]:
    """type -> "#rrggbb"; the i-th of N sorted types sits at i/N on the scale."""
    ordered = sorted(set(types))
    n = len(ordered)
    return {t: to_hex(brighter(interpolate_rainbow(i / n))) for i, t in enumerate(ordered)}
