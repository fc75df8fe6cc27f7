from __future__ import annotations

from collections.abc import Callable
from typing import NewType

# =============================================================================
# SPATIAL TYPES
# =============================================================================

type Coord = float

# World positions - y is the vertical axis, wandering happens on the x/z plane
type Point3 = tuple[Coord, Coord, Coord]  # Example: (4.0, 0.0, -2.5)

# A fixed point or an accessor evaluated lazily each time it is needed
# (e.g. a moving target).
type PointSource = Point3 | Callable[[], Point3]

# =============================================================================
# TIME-RELATED TYPES
# =============================================================================

# Seconds elapsed since the previous agent tick. Supplied by the host loop.
DeltaTime = NewType("DeltaTime", float)

# =============================================================================
# RNG TYPES
# =============================================================================

type RandomSeed = int | str | None
