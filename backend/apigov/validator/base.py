"""
Rule check base class.

A rule check takes a SpecDocument and returns the violations it found.
Checks only read the document and never share state, so the engine can run
them in any order and simply concatenate their output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Category, Severity, SpecDocument, Violation


class RuleCheck(ABC):
    """A governance rule check emitting violations of a single category."""

    name: str = "rule"
    category: Category = Category.OTHER

    @abstractmethod
    def check(self, document: SpecDocument) -> List[Violation]:
        """Run the check and return violations in emission order."""

    def __call__(self, document: SpecDocument) -> List[Violation]:
        return self.check(document)

    def error(
        self,
        path: str,
        message: str,
        method: Optional[str] = None,
        status_code: Optional[str] = None,
    ) -> Violation:
        return self._violation(path, message, Severity.ERROR, method, status_code)

    def warning(
        self,
        path: str,
        message: str,
        method: Optional[str] = None,
        status_code: Optional[str] = None,
    ) -> Violation:
        return self._violation(path, message, Severity.WARNING, method, status_code)

    def _violation(
        self,
        path: str,
        message: str,
        severity: Severity,
        method: Optional[str],
        status_code: Optional[str],
    ) -> Violation:
        return Violation(
            path=path,
            message=message,
            severity=severity,
            category=self.category,
            method=method,
            status_code=status_code,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
