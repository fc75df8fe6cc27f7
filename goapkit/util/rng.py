"""Deterministic random number generation with isolated streams.

Every subsystem that needs randomness (wander destinations, sensor jitter in
host code, test scenarios) asks for its own named stream derived from a master
seed. Seeding once at startup makes agent behavior reproducible, and one
strategy consuming more random numbers never shifts another strategy's
sequence.

Usage:
    # At startup
    from goapkit.util import rng
    rng.init(config.RANDOM_SEED)

    # In any module - cache the stream reference
    _rng = rng.get("planning.wander")

    def pick_offset(radius: float) -> float:
        return _rng.uniform(-radius, radius)

Domain naming convention (hierarchical): "planning.wander", "agent.<name>".
"""

from __future__ import annotations

import zlib
from random import Random
from typing import TYPE_CHECKING

from goapkit import config

if TYPE_CHECKING:
    from goapkit.types import RandomSeed


class RNGStream:
    """Proxy that delegates to the current RNG for a domain.

    Callers can cache the proxy; it looks the underlying Random up on every
    call, so it keeps working after the provider is reseeded.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng().random()

    def uniform(self, a: float, b: float) -> float:
        """Return random float N such that a <= N <= b."""
        return self._rng().uniform(a, b)


class RNGProvider:
    """Hands out one isolated Random per named domain."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    def get(self, domain: str) -> RNGStream:
        """Return the (cacheable) stream proxy for ``domain``."""
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                self._streams[domain] = Random()
            else:
                # crc32 rather than hash(): hash() is salted per interpreter
                # session and would break cross-run determinism.
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reseed every domain. Cached proxies pick up the new streams."""
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize (or reseed) the global provider."""
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Get the stream for ``domain``, auto-initializing from config if needed."""
    global _provider
    if _provider is None:
        _provider = RNGProvider(config.RANDOM_SEED)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reseed all streams. Requires a prior init() or get()."""
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
