"""
apigov: API governance checks and compliance scoring.

This package evaluates OpenAPI-style documents against governance rules
(info/versioning, naming, responses, security) and aggregates the
violations into a weighted 0-100 compliance score.
"""

__version__ = "1.0.0"

from .errors import (
    GovernanceError,
    DocumentLoadError,
    InvalidDocumentError,
    PolicyError,
)
from .models import (
    Category,
    Operation,
    Report,
    Severity,
    SpecDocument,
    Violation,
)
from .policy import GovernancePolicy
from .scoring import calculate_score, category_breakdown
from .validator import GovernanceEngine, run_all_rules

__all__ = [
    "Category",
    "Operation",
    "Report",
    "Severity",
    "SpecDocument",
    "Violation",
    "GovernancePolicy",
    "calculate_score",
    "category_breakdown",
    "GovernanceEngine",
    "run_all_rules",
    "GovernanceError",
    "DocumentLoadError",
    "InvalidDocumentError",
    "PolicyError",
]
