"""
Grouping Module - Similarity Groups and Form Labels

Structures that repeat or resemble an earlier structure share its letter:

    phrase_1 → A
    phrase_2 repeats phrase_1 → A
    phrase_3 contrasts with both → B
    phrase_4 similar to phrase_1 → A
    form = "AABA"

A structure joins the group of the EARLIEST preceding structure it has a
REPEAT or SIMILAR relationship with; otherwise it opens a new group.
"""

from itertools import combinations
from typing import Dict, List, Tuple

import numpy as np

from scorevis.analysis.features import StructureFeatures
from scorevis.analysis.patterns import melodic_key, rhythmic_key
from scorevis.data.schema import (
    MusicStructure,
    RelationshipType,
    SimilarityGroup,
    StructureRelationship,
)

GROUPING_TYPES = (RelationshipType.REPEAT, RelationshipType.SIMILAR)


def group_label(index: int) -> str:
    """0 → "A", 25 → "Z", 26 → "AA", 27 → "AB", ..."""
    label = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        label = chr(ord("A") + remainder) + label
    return label


def _common_features(members: List[StructureFeatures]) -> List[str]:
    """Feature tags shared by every member of a group."""
    common = []

    contours = {f.pitch.contour for f in members}
    if len(contours) == 1:
        common.append(f"contour:{contours.pop().value}")

    melodic = {melodic_key(f) for f in members}
    if len(melodic) == 1 and "" not in melodic:
        common.append(f"melodic:{melodic.pop()}")

    rhythmic = {rhythmic_key(f) for f in members}
    if len(rhythmic) == 1 and "" not in rhythmic:
        common.append(f"rhythm:{rhythmic.pop()}")

    return common


def assign_similarity_groups(
    features: List[StructureFeatures],
    relationships: List[StructureRelationship]
) -> List[SimilarityGroup]:
    """
    Label structures with similarity groups.

    Sets `similarity_group` on each structure in `features` and returns
    one SimilarityGroup per label, in label order.
    """
    pairs: Dict[Tuple[str, str], StructureRelationship] = {
        (r.id1, r.id2): r for r in relationships
    }

    labels: Dict[str, str] = {}
    members: Dict[str, List[StructureFeatures]] = {}

    for j, f in enumerate(features):
        structure_id = f.structure.id
        label = None
        for i in range(j):
            earlier = features[i].structure.id
            relationship = pairs.get((earlier, structure_id))
            if relationship is not None and relationship.type in GROUPING_TYPES:
                label = labels[earlier]
                break

        if label is None:
            label = group_label(len(members))
            members[label] = []

        labels[structure_id] = label
        members[label].append(f)
        f.structure.similarity_group = label

    groups = []
    for label, group in members.items():
        ids = [f.structure.id for f in group]
        similarities = [
            pairs[(a, b)].similarity
            for a, b in combinations(ids, 2)
            if (a, b) in pairs
        ]
        score = float(np.mean(similarities)) if similarities else 1.0
        groups.append(SimilarityGroup(
            group_id=label,
            structure_ids=ids,
            similarity_score=score,
            common_features=_common_features(group),
        ))

    return groups


def describe_form(structures: List[MusicStructure]) -> str:
    """Concatenate group labels in structure order, e.g. "AABA" ("?" if ungrouped)."""
    return "".join(s.similarity_group or "?" for s in structures)
