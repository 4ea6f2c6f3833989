"""
Learning Subpackage - Preference learning from user feedback

    - weights.py: WeightMap and UserPreferences (four ordered weight maps)
    - preference.py: Reward policy, scheme similarity, PreferenceLearner

Usage:
    from scorevis.learning import PreferenceLearner

    learner = PreferenceLearner()
    learner.record_action(action)
    learner.get_statistics().average_reward
"""

from scorevis.learning.preference import PreferenceLearner, scheme_similarity
from scorevis.learning.weights import UserPreferences, WeightMap
