"""
Score Structure Visualizer - Source Package

Explainable, rule-based structure analysis for symbolic music scores, and a
preference learner that adapts visual recommendations to user feedback.

Subpackages:
    - scorevis.data: Pydantic schemas for scores, structures and visual schemes
    - scorevis.analysis: Segmentation, features, relationships and patterns
    - scorevis.learning: Reward computation and preference weights

Example usage:
    from scorevis.analysis import StructureAnalysisEngine
    from scorevis.data.schema import MusicXMLData

    score = MusicXMLData.model_validate(parsed_score_dict)
    analysis = StructureAnalysisEngine().analyze(score)
    print(len(analysis.structures))     # 4
    print(analysis.relationships[0].type)  # RelationshipType.REPEAT
"""

__version__ = "0.1.0"
