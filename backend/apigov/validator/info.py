"""
Info and Versioning Check.

Validates the document's ``info`` block: title, description and a
semantic version string.
"""

from __future__ import annotations

import re
from typing import List

from ..models import Category, SpecDocument, Violation
from .base import RuleCheck


SEMVER_PATTERN = re.compile(r"\d+\.\d+\.\d+")
MIN_DESCRIPTION_LENGTH = 10


class InfoCheck(RuleCheck):
    """Checks the info block of a spec document."""

    name = "info"
    category = Category.VERSIONING

    def check(self, document: SpecDocument) -> List[Violation]:
        violations: List[Violation] = []
        info = document.info

        if info is None:
            violations.append(self.error("root", 'Missing "info" object'))
            return violations

        title = info.get("title")
        if not title or not str(title).strip():
            violations.append(self.error("info.title", "API title is missing"))

        description = info.get("description")
        if not description or len(str(description)) < MIN_DESCRIPTION_LENGTH:
            violations.append(self.warning(
                "info.description",
                f"API description is missing or shorter than {MIN_DESCRIPTION_LENGTH} characters",
            ))

        version = info.get("version")
        if not version or not str(version).strip():
            violations.append(self.error("info.version", "API version is missing"))
        elif not SEMVER_PATTERN.fullmatch(str(version)):
            violations.append(self.warning(
                "info.version",
                f'Version "{version}" should follow semantic versioning (e.g., 1.0.0)',
            ))

        return violations
