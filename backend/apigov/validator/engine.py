"""
Governance Engine.

Runs the rule checks over a document, concatenates their violations and
scores the result:

    SpecDocument -> [info, naming, responses, security] -> score -> Report
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..errors import InvalidDocumentError
from ..loader import load_document
from ..models import Report, SpecDocument, Violation
from ..policy import GovernancePolicy
from ..scoring import calculate_score
from .base import RuleCheck
from .info import InfoCheck
from .naming import NamingCheck
from .responses import ResponsesCheck
from .security import SecurityCheck


logger = logging.getLogger(__name__)

Document = Union[SpecDocument, Dict[str, Any]]


def default_checks() -> List[RuleCheck]:
    """The built-in checks, in invocation order."""
    return [InfoCheck(), NamingCheck(), ResponsesCheck(), SecurityCheck()]


class GovernanceEngine:
    """
    Evaluates API descriptions against governance rules.

    Checks are independent: each reads the document and returns its own
    violations. The aggregated sequence is ordered by check, then by
    emission order within a check.
    """

    def __init__(
        self,
        checks: Optional[Sequence[RuleCheck]] = None,
        policy: Optional[GovernancePolicy] = None,
    ):
        """
        Initialize the governance engine.

        Args:
            checks: Rule checks to run, in order. Defaults to the built-in set.
            policy: Scoring policy. Defaults to GovernancePolicy().
        """
        self.checks: List[RuleCheck] = list(checks) if checks is not None else default_checks()
        self.policy = policy or GovernancePolicy()

    def collect(self, document: Document) -> List[Violation]:
        """Run every check and concatenate the violations."""
        spec = _prepare(document)
        violations: List[Violation] = []
        for check in self.checks:
            found = check(spec)
            logger.debug("Check %s found %d violation(s)", getattr(check, "name", check), len(found))
            violations.extend(found)
        return violations

    def evaluate(self, document: Document, total_apis: int = 1) -> Report:
        """
        Evaluate a document.

        Args:
            document: Parsed document mapping or SpecDocument.
            total_apis: Normalization denominator for scoring.

        Returns:
            Report with score and ordered violations.
        """
        violations = self.collect(document)
        score = calculate_score(violations, total_apis=total_apis, policy=self.policy)
        logger.info("Governance score %d with %d violation(s)", score, len(violations))
        return Report(score=score, violations=tuple(violations))

    def evaluate_file(self, path: Path, total_apis: int = 1) -> Report:
        """Load a JSON or YAML spec file and evaluate it."""
        return self.evaluate(load_document(path), total_apis=total_apis)


def _prepare(document: Document) -> SpecDocument:
    raw = document.raw if isinstance(document, SpecDocument) else document
    if not isinstance(raw, dict):
        raise InvalidDocumentError(
            f"Spec document must be a mapping, got {type(raw).__name__}"
        )
    paths = raw.get("paths")
    if paths is not None and not isinstance(paths, dict):
        raise InvalidDocumentError(
            f'"paths" must be a mapping, got {type(paths).__name__}'
        )
    servers = raw.get("servers")
    if servers is not None and not isinstance(servers, list):
        raise InvalidDocumentError(
            f'"servers" must be a list, got {type(servers).__name__}'
        )
    return SpecDocument.wrap(document)


def run_all_rules(
    document: Document,
    total_apis: int = 1,
    policy: Optional[GovernancePolicy] = None,
) -> Report:
    """
    Convenience function to evaluate a document with the default checks.

    Args:
        document: Parsed document mapping or SpecDocument.
        total_apis: Normalization denominator for scoring.
        policy: Optional scoring policy.

    Returns:
        Report with score and violations.
    """
    return GovernanceEngine(policy=policy).evaluate(document, total_apis=total_apis)


def evaluate_spec(
    spec_path: Path,
    total_apis: int = 1,
    policy_path: Optional[Path] = None,
) -> Report:
    """
    Convenience function to evaluate a spec file.

    Args:
        spec_path: Path to a JSON or YAML spec file.
        total_apis: Normalization denominator for scoring.
        policy_path: Optional path to a YAML governance policy.

    Returns:
        Report with score and violations.
    """
    policy = GovernancePolicy.from_file(policy_path) if policy_path else None
    engine = GovernanceEngine(policy=policy)
    return engine.evaluate_file(Path(spec_path), total_apis=total_apis)
