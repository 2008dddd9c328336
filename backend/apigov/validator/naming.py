"""
Naming Convention Check.

Validates path strings and operationIds:
- Paths live under the /api prefix
- Paths are lowercase, hyphenated and have no trailing slash
- Path segments are nouns, collections are plural
- Identifiers and parameters are followed by plural sub-collections
- operationIds exist and are snake_case

Path rules are heuristics and emit warnings. A missing operationId is an
error because client generators depend on it.
"""

from __future__ import annotations

import re
from typing import List

from ..models import Category, SpecDocument, Violation
from .base import RuleCheck


PATH_PREFIX = "/api"
VERB_SEGMENT_PATTERN = re.compile(
    r"(get|create|update|delete|add|remove|post|put|patch)s?", re.IGNORECASE
)
OPERATION_ID_PATTERN = re.compile(r"[a-z]+(_[a-z]+)*")
NUMERIC_SEGMENT_PATTERN = re.compile(r"\d+")


def split_segments(path: str) -> List[str]:
    """Return the non-empty segments of a path."""
    return [segment for segment in path.split("/") if segment]


def is_parameter(segment: str) -> bool:
    """True for placeholder segments such as ``{id}``."""
    return segment.startswith("{") and segment.endswith("}")


class NamingCheck(RuleCheck):
    """Checks path and operationId naming conventions."""

    name = "naming"
    category = Category.NAMING

    def check(self, document: SpecDocument) -> List[Violation]:
        violations: List[Violation] = []

        for path in document.paths:
            violations.extend(self._check_path(str(path)))

        for operation in document.operations():
            operation_id = operation.operation_id
            if not operation_id:
                violations.append(self.error(
                    operation.path, "Missing operationId", method=operation.method
                ))
            elif not OPERATION_ID_PATTERN.fullmatch(str(operation_id)):
                violations.append(self.warning(
                    operation.path,
                    f'operationId "{operation_id}" should be lowercase words joined by underscores',
                    method=operation.method,
                ))

        return violations

    def _check_path(self, path: str) -> List[Violation]:
        violations: List[Violation] = []

        if not path.startswith(PATH_PREFIX):
            violations.append(self.warning(path, f"Path should start with {PATH_PREFIX}"))

        if any(ch.isupper() for ch in path):
            violations.append(self.warning(path, "Path should be lowercase"))

        if "_" in path:
            violations.append(self.warning(
                path, "Path should use hyphens (-) instead of underscores (_)"
            ))

        if path.endswith("/") and path != "/":
            violations.append(self.warning(path, "Path should not have a trailing slash"))

        segments = split_segments(path)

        for segment in segments:
            if not is_parameter(segment) and VERB_SEGMENT_PATTERN.fullmatch(segment):
                violations.append(self.warning(
                    path,
                    f'Path segment "{segment}" looks like a verb; paths should use nouns, not verbs',
                ))

        if segments:
            last = segments[-1]
            if not is_parameter(last) and not last.endswith("s"):
                violations.append(self.warning(
                    path, f'Path segment "{last}" should be plural for collections'
                ))

        for current, following in zip(segments, segments[1:]):
            if is_parameter(current) or NUMERIC_SEGMENT_PATTERN.fullmatch(current):
                if not following.endswith("s"):
                    violations.append(self.warning(
                        path,
                        "Path hierarchy may not be clear: expected a plural noun after "
                        f'"{current}" but found "{following}"',
                    ))

        return violations
