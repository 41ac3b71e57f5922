"""Deterministic RNG container with serializable state snapshots."""

from __future__ import annotations

import base64
import hashlib
import pickle
import random
from dataclasses import dataclass
from typing import Any, Protocol


class UniformIntSource(Protocol):
    """Opaque uniform-integer generator consumed by the simulation."""

    def randrange(self, stop: int) -> int:
        """Return an integer drawn uniformly from ``[0, stop)``."""


PLACEMENT_STREAM = "placement"
GENOTYPE_STREAM = "genotype"
PLANTS_STREAM = "plants"


@dataclass
class DeterministicRNG:
    """Owns deterministic RNG streams without touching global random state.

    Every consumer draws from its own named stream, so adding draws in one
    phase (e.g. more mutations) never shifts the sequence seen by another
    phase (e.g. plant placement).
    """

    seed: int

    def __post_init__(self) -> None:
        self._streams: dict[str, random.Random] = {}

    def stream(self, name: str) -> random.Random:
        """Return independent deterministic stream by name."""
        if name not in self._streams:
            # Use stable cross-process seed derivation instead of built-in hash().
            digest = hashlib.sha256(f"{self.seed}:{name}".encode("utf-8")).digest()
            derived_seed = int.from_bytes(digest[:8], byteorder="big", signed=False) & 0xFFFFFFFF
            self._streams[name] = random.Random(derived_seed)
        return self._streams[name]

    def snapshot(self) -> dict[str, Any]:
        """Export RNG state to JSON-compatible dictionary."""
        return {
            "seed": self.seed,
            "streams": {
                name: base64.b64encode(pickle.dumps(rng.getstate())).decode("ascii")
                for name, rng in self._streams.items()
            },
        }

    def restore(self, state: dict[str, Any]) -> None:
        """Restore RNG state exported by ``snapshot``."""
        self.seed = int(state["seed"])
        self._streams = {}
        for name, encoded in dict(state.get("streams", {})).items():
            stream_rng = random.Random(self.seed)
            stream_rng.setstate(pickle.loads(base64.b64decode(encoded.encode("ascii"))))
            self._streams[name] = stream_rng
