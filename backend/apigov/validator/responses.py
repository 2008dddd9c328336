"""
Response Definition Check.

Every operation must declare its responses. Missing success responses are
structural defects (errors); missing client and server error codes are
convention nudges (warnings).
"""

from __future__ import annotations

import re
from typing import Any, List

from ..models import Category, Operation, SpecDocument, Violation
from .base import RuleCheck


STATUS_CODE_PATTERN = re.compile(r"[1-5]\d\d")
SUCCESS_CODES = ("200", "201", "204")
CLIENT_ERROR_CODES = ("400", "401", "403", "404")
SERVER_ERROR_CODE = "500"


class ResponsesCheck(RuleCheck):
    """Checks that operations define well-formed responses."""

    name = "responses"
    category = Category.RESPONSES

    def check(self, document: SpecDocument) -> List[Violation]:
        violations: List[Violation] = []
        for operation in document.operations():
            violations.extend(self._check_operation(operation))
        return violations

    def _check_operation(self, operation: Operation) -> List[Violation]:
        violations: List[Violation] = []
        path, method = operation.path, operation.method
        responses = operation.responses

        if not responses:
            violations.append(self.error(
                path, "No responses defined for this operation", method=method
            ))
            return violations

        for status_code, response in responses.items():
            if not STATUS_CODE_PATTERN.fullmatch(status_code):
                violations.append(self.warning(
                    path, f"Invalid HTTP status code: {status_code}",
                    method=method, status_code=status_code,
                ))

            if not _has_text(_field(response, "description")):
                violations.append(self.warning(
                    path, "Response description is missing or empty",
                    method=method, status_code=status_code,
                ))

            if status_code.startswith("2") and not _field(response, "content"):
                violations.append(self.warning(
                    path, "Successful response should specify content and media types",
                    method=method, status_code=status_code,
                ))

        codes = set(responses)

        if not codes.intersection(SUCCESS_CODES):
            violations.append(self.error(
                path,
                "Successful response must be defined (200, 201 or 204)",
                method=method,
            ))

        if not codes.intersection(CLIENT_ERROR_CODES):
            violations.append(self.warning(
                path,
                "Client error responses (400, 401, 403 or 404) should be defined",
                method=method,
            ))

        if SERVER_ERROR_CODE not in codes:
            violations.append(self.warning(
                path, "Server error response 500 should be defined", method=method
            ))

        return violations


def _field(response: Any, key: str) -> Any:
    return response.get(key) if isinstance(response, dict) else None


def _has_text(value: Any) -> bool:
    return value is not None and str(value).strip() != ""
