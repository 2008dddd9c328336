"""
Compliance Scoring.

Aggregates violations into a single bounded score. Each category bucket
contributes a penalty proportional to its weighted error/warning counts,
capped at the category's own weight:

    multiplier = (errors * 1.5 + warnings) / total_apis
    penalty    = min(weight, multiplier * sensitivity)
    score      = max(0, round(100 - sum(penalties)))

The score depends only on per-category counts, never on violation order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .models import Category, Severity, Violation
from .policy import GovernancePolicy


@dataclass
class CategoryScore:
    """Penalty contributed by one category bucket."""

    category: str
    errors: int = 0
    warnings: int = 0
    weight: float = 0
    penalty: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "errors": self.errors,
            "warnings": self.warnings,
            "weight": self.weight,
            "penalty": round(self.penalty, 2),
        }


def _check_total_apis(total_apis: int) -> None:
    if isinstance(total_apis, bool) or not isinstance(total_apis, int) or total_apis < 1:
        raise ValueError(f"total_apis must be a positive integer, got {total_apis!r}")


def category_breakdown(
    violations: Iterable[Violation],
    total_apis: int = 1,
    policy: Optional[GovernancePolicy] = None,
) -> Dict[str, CategoryScore]:
    """
    Compute the per-category penalties behind a score.

    Args:
        violations: Violations to aggregate.
        total_apis: Normalization denominator (operations or specs scored).
        policy: Scoring policy; defaults to GovernancePolicy().

    Returns:
        Mapping of category name to CategoryScore, in first-seen order.
    """
    _check_total_apis(total_apis)
    policy = policy or GovernancePolicy()

    buckets: Dict[str, CategoryScore] = {}
    for violation in violations:
        category = getattr(violation, "category", None) or Category.OTHER
        name = category.value if isinstance(category, Category) else str(category)
        bucket = buckets.setdefault(name, CategoryScore(category=name))
        if violation.severity == Severity.ERROR:
            bucket.errors += 1
        else:
            bucket.warnings += 1

    for bucket in buckets.values():
        bucket.weight = policy.weight_for(bucket.category)
        multiplier = (
            bucket.errors * policy.error_multiplier
            + bucket.warnings * policy.warning_multiplier
        ) / total_apis
        bucket.penalty = min(bucket.weight, multiplier * policy.sensitivity)

    return buckets


def calculate_score(
    violations: Iterable[Violation],
    total_apis: int = 1,
    policy: Optional[GovernancePolicy] = None,
) -> int:
    """
    Calculate the weighted compliance score.

    Returns:
        Integer score in [0, 100]; 100 when there are no violations.
    """
    breakdown = category_breakdown(violations, total_apis, policy)
    total_penalty = sum(bucket.penalty for bucket in breakdown.values())
    # Half-up rounding: 87.5 -> 88
    score = math.floor(100 - total_penalty + 0.5)
    return max(0, min(100, score))
