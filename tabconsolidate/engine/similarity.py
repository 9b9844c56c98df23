from __future__ import annotations

import math
from collections.abc import Iterable

from rapidfuzz.distance import Indel, Levenshtein

from ..models.config_models import SimilarityMetric, SimilaritySettings
from ..models.keys import DataItem, Key, KeyItem
from .errors import count_with
from .grouping import Group

"""Near-duplicate and unmatched-record notices.

Key comparison sums a per-item score over key positions. With the LCS metric
each Data/Data pair scores the normalized LCS ratio (rapidfuzz Indel
similarity, 1.0 for identical text); with the edit metric it scores the
Levenshtein distance. A pair involving a synthetic Id item never looks
alike: it scores 0 similarity, or an infinite distance, so keys built from
column 0 are never reported as near-duplicates under the edit metric.
"""

__all__ = [
    "compare_items",
    "compare_keys",
    "format_score",
    "unmatched_notice",
    "similar_notices",
]


def compare_items(a: KeyItem, b: KeyItem, metric: SimilarityMetric) -> float:
    if not (isinstance(a, DataItem) and isinstance(b, DataItem)):
        # Id はどの行とも別物: 類似度 0 / 距離は無限大
        return math.inf if metric.is_distance else 0
    if metric is SimilarityMetric.EDIT:
        return Levenshtein.distance(a.text, b.text)
    return Indel.normalized_similarity(a.text, b.text)


def compare_keys(a: Key, b: Key, metric: SimilarityMetric) -> float:
    return sum(compare_items(x, y, metric) for x, y in zip(a, b))


def format_score(score: float, metric: SimilarityMetric) -> str:
    if metric.is_distance:
        return str(int(score))
    return f"{score:.2f}"


def unmatched_notice(group: Group) -> list[str] | None:
    """Lines describing a group whose per-source row counts differ, else None."""
    counts = group.counts
    if all(count == counts[0] for count in counts):
        return None
    # 最初に現れた最大・最小の入力を報告する
    max_index = max(range(len(counts)), key=lambda i: counts[i])
    min_index = min(range(len(counts)), key=lambda i: counts[i])
    most, least = counts[max_index], counts[min_index]
    return [
        f"{count_with(most - least, 'unmatched record')} encountered "
        f"(found {count_with(most, 'such record')} in input #{max_index + 1}, "
        f"but {count_with(least, 'such record')} in input #{min_index + 1}):",
        str(group.key),
    ]


def similar_notices(
    key: Key, pending: Iterable[Key], settings: SimilaritySettings
) -> list[list[str]]:
    """Compare ``key`` with every still-pending key; one notice per close pair."""
    notices = []
    for other in pending:
        score = compare_keys(key, other, settings.metric)
        if settings.crosses(score):
            notices.append([
                f"Similar records encountered "
                f"({settings.metric.label} = {format_score(score, settings.metric)}):",
                str(key),
                str(other),
            ])
    return notices
