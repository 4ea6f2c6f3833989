"""
Weight Maps - Ordered Category Weights for Preference Learning

A WeightMap accumulates a running weight per category key (a color hex,
a shape tag, an animation tag or a layout tag). Keys iterate in insertion
order so snapshots are deterministic.

Weights are unbounded while accumulating. `normalize()` rescales them
min-max into [0, 1], so only the ranking between keys survives:

    {"#FF0000": 2.0, "#00FF00": 1.0, "#0000FF": -1.0}
        → {"#FF0000": 1.0, "#00FF00": 0.667, "#0000FF": 0.0}

A map whose values are all equal is left as it is.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np


class WeightMap:
    """Insertion-ordered mapping from category key to weight."""

    def __init__(self, weights: Optional[Dict[str, float]] = None):
        self._weights: Dict[str, float] = dict(weights) if weights else {}

    def get(self, key: str, default: float = 0.0) -> float:
        return self._weights.get(key, default)

    def add(self, key: str, amount: float) -> float:
        """Add `amount` to the weight of `key` (starting from 0) and return the new weight."""
        self._weights[key] = self._weights.get(key, 0.0) + amount
        return self._weights[key]

    def normalize(self) -> None:
        """Min-max rescale all weights into [0, 1]; no-op when empty or all equal."""
        if not self._weights:
            return

        values = np.fromiter(self._weights.values(), dtype=float)
        low, high = values.min(), values.max()
        if high == low:
            return

        scaled = (values - low) / (high - low)
        for key, value in zip(self._weights, scaled):
            self._weights[key] = float(value)

    def ranking(self) -> List[str]:
        """Keys from highest to lowest weight; ties keep insertion order."""
        return sorted(self._weights, key=lambda k: -self._weights[k])

    def items(self) -> List[Tuple[str, float]]:
        return list(self._weights.items())

    def to_dict(self) -> Dict[str, float]:
        return dict(self._weights)

    def copy(self) -> "WeightMap":
        return WeightMap(self._weights)

    def __getitem__(self, key: str) -> float:
        return self._weights[key]

    def __contains__(self, key: object) -> bool:
        return key in self._weights

    def __iter__(self) -> Iterator[str]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, WeightMap):
            return self.items() == other.items()
        return NotImplemented

    def __repr__(self) -> str:
        return f"WeightMap({self._weights!r})"


@dataclass
class UserPreferences:
    """The four weight maps learned from user feedback."""
    color_preferences: WeightMap = field(default_factory=WeightMap)
    shape_preferences: WeightMap = field(default_factory=WeightMap)
    animation_preferences: WeightMap = field(default_factory=WeightMap)
    layout_preferences: WeightMap = field(default_factory=WeightMap)

    def maps(self) -> List[WeightMap]:
        return [
            self.color_preferences,
            self.shape_preferences,
            self.animation_preferences,
            self.layout_preferences,
        ]

    def normalize(self) -> None:
        for weight_map in self.maps():
            weight_map.normalize()

    def copy(self) -> "UserPreferences":
        return UserPreferences(
            color_preferences=self.color_preferences.copy(),
            shape_preferences=self.shape_preferences.copy(),
            animation_preferences=self.animation_preferences.copy(),
            layout_preferences=self.layout_preferences.copy(),
        )

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        """Plain dicts for JSON export, keyed by the collaborators' field names."""
        return {
            "colorPreferences": self.color_preferences.to_dict(),
            "shapePreferences": self.shape_preferences.to_dict(),
            "animationPreferences": self.animation_preferences.to_dict(),
            "layoutPreferences": self.layout_preferences.to_dict(),
        }
