"""
Preference Learner - Learning Visual Preferences from User Feedback

Every time the user accepts, edits or replaces a recommended visual scheme,
the learner turns that action into a reward and adds the reward to the
weights of everything in the scheme the user ended up with.

Reward policy (checked in order):
    +1.0  the top recommendation was accepted unchanged
    -1.0  the user customized, but there was no recommendation to compare
    +0.5  the user customized, and the result is still similar (> 0.7)
    -1.0  the user customized into something different

Scheme similarity is the mean of five factors, each in [0, 1]:
    1. same layout (1 or 0)
    2. max(0, 1 - |element count difference| / 5)
    3. shared element types   / larger number of distinct types
    4. shared element colors  / larger number of distinct colors
    5. shared animation types / larger number of distinct animation types

After each action all four weight maps are min-max normalized, so the
ranking of categories is what persists, not raw magnitudes.
"""

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from scorevis.config import LEARNER_CONFIG, merge_config
from scorevis.data.visual import PreferenceStatistics, UserAction, VisualScheme
from scorevis.learning.weights import UserPreferences

logger = logging.getLogger(__name__)


# =============================================================================
# SIMILARITY
# =============================================================================

def overlap_ratio(values1: Iterable[str], values2: Iterable[str]) -> float:
    """
    Distinct values present in both, divided by the larger distinct count.

    Examples:
        overlap_ratio(["a", "b"], ["b", "c", "d"]) → 1/3
        overlap_ratio(["a", "a"], ["a"])           → 1.0
        overlap_ratio([], [])                      → 0.0
    """
    set1, set2 = set(values1), set(values2)
    larger = max(len(set1), len(set2))
    if larger == 0:
        return 0.0
    return len(set1 & set2) / larger


def scheme_similarity(
    scheme1: VisualScheme,
    scheme2: VisualScheme,
    element_count_scale: int = LEARNER_CONFIG["element_count_scale"]
) -> float:
    """Five-factor similarity between two visual schemes, in [0, 1]."""
    layout_score = 1.0 if scheme1.layout == scheme2.layout else 0.0

    count_diff = abs(len(scheme1.elements) - len(scheme2.elements))
    count_score = max(0.0, 1 - count_diff / element_count_scale)

    type_score = overlap_ratio(
        (e.type.value for e in scheme1.elements),
        (e.type.value for e in scheme2.elements),
    )
    color_score = overlap_ratio(
        (e.color for e in scheme1.elements),
        (e.color for e in scheme2.elements),
    )
    animation_score = overlap_ratio(
        (e.animation.type.value for e in scheme1.elements),
        (e.animation.type.value for e in scheme2.elements),
    )

    factors = [layout_score, count_score, type_score, color_score, animation_score]
    return sum(factors) / len(factors)


# =============================================================================
# LEARNER
# =============================================================================

class PreferenceLearner:
    """
    Accumulates preference weights from user actions.

    The learner owns its action log and weight maps; they only change
    through `record_action` and `clear`, which hold a lock so that
    update + normalize happens atomically per action.

    Example:
        >>> learner = PreferenceLearner()
        >>> learner.record_action(action)
        >>> learner.get_preferences().color_preferences.ranking()
        ['#FF6B6B', '#3498DB']
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config: Partial learner config merged over LEARNER_CONFIG
        """
        self.config = merge_config(LEARNER_CONFIG, config)
        self._lock = threading.Lock()
        self._actions: List[UserAction] = []
        self._preferences = UserPreferences()

    # -------------------------------------------------------------------------
    # Reward
    # -------------------------------------------------------------------------

    def calculate_reward(self, action: UserAction) -> float:
        """Reward for an action; pure, does not touch learner state."""
        if not action.is_customized:
            return self.config["accept_reward"]

        if not action.recommended_schemes:
            return self.config["reject_reward"]

        top_recommendation = action.recommended_schemes[0]
        similarity = scheme_similarity(
            top_recommendation,
            action.selected_scheme,
            self.config["element_count_scale"],
        )

        if similarity > self.config["similarity_threshold"]:
            return self.config["modify_reward"]
        return self.config["reject_reward"]

    # -------------------------------------------------------------------------
    # State updates
    # -------------------------------------------------------------------------

    def record_action(self, action: UserAction) -> None:
        """
        Compute the reward for `action`, log it and update the weights.

        The stored copy carries the computed reward; the caller's object is
        left untouched.
        """
        reward = self.calculate_reward(action)
        recorded = action.model_copy(update={"reward": reward})

        with self._lock:
            self._actions.append(recorded)
            self._update_preferences(recorded.selected_scheme, reward)

        logger.debug(
            "Recorded action for %s: customized=%s reward=%+.1f",
            action.structure_id, action.is_customized, reward
        )

    def _update_preferences(self, scheme: VisualScheme, reward: float) -> None:
        prefs = self._preferences
        for element in scheme.elements:
            prefs.color_preferences.add(element.color, reward)
            prefs.shape_preferences.add(element.type.value, reward)
            prefs.animation_preferences.add(element.animation.type.value, reward)
        prefs.layout_preferences.add(scheme.layout.value, reward)

        prefs.normalize()

    def clear(self) -> None:
        """Forget all actions and weights."""
        with self._lock:
            self._actions = []
            self._preferences = UserPreferences()
        logger.info("Cleared preference history")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_preferences(self) -> UserPreferences:
        """Snapshot of the current weights (changes to it don't affect the learner)."""
        with self._lock:
            return self._preferences.copy()

    def get_actions(self) -> List[UserAction]:
        """Recorded actions, oldest first, each with its computed reward."""
        with self._lock:
            return list(self._actions)

    def get_statistics(self) -> PreferenceStatistics:
        """Counts of accepted / modified / rejected actions and the mean reward."""
        with self._lock:
            rewards = [a.reward for a in self._actions]

        return PreferenceStatistics(
            total_actions=len(rewards),
            accepted_recommendations=sum(1 for r in rewards if r == self.config["accept_reward"]),
            modified_recommendations=sum(1 for r in rewards if r == self.config["modify_reward"]),
            rejected_recommendations=sum(1 for r in rewards if r == self.config["reject_reward"]),
            average_reward=sum(rewards) / len(rewards) if rewards else 0.0,
        )
