"""
Governance Rule Checks.

This package provides the rule checks run against an API description:
- Info/Versioning Check (title, description, semantic version)
- Naming Convention Check (paths and operationIds)
- Response Definition Check (status codes, descriptions, content)
- Security Scheme Check (HTTPS servers, schemes, per-operation security)
"""

from .base import RuleCheck
from .info import InfoCheck
from .naming import NamingCheck
from .responses import ResponsesCheck
from .security import SecurityCheck
from .engine import GovernanceEngine, default_checks, evaluate_spec, run_all_rules

__all__ = [
    "RuleCheck",
    # Checks
    "InfoCheck",
    "NamingCheck",
    "ResponsesCheck",
    "SecurityCheck",
    # Engine
    "GovernanceEngine",
    "default_checks",
    "evaluate_spec",
    "run_all_rules",
]
