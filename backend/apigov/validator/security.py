"""
Security Scheme Check.

Runs in two passes over the same read-only document:

1. Transport, scheme declarations and per-operation security. Returns the
   violations together with the names of every scheme an operation
   successfully referenced.
2. Declared schemes missing from that set are reported as unused.
"""

from __future__ import annotations

from typing import Any, Dict, List, Set, Tuple

from ..models import Category, Operation, SpecDocument, Violation
from .base import RuleCheck


SECURE_SCHEME = "https://"
VALID_SCHEME_TYPES = ("apiKey", "http", "oauth2", "openIdConnect")
VALID_API_KEY_LOCATIONS = ("header", "query", "cookie")
RATE_LIMIT_CODE = "429"


class SecurityCheck(RuleCheck):
    """Checks transport security, security schemes and their usage."""

    name = "security"
    category = Category.SECURITY

    def check(self, document: SpecDocument) -> List[Violation]:
        violations, used_schemes = self.scan(document)
        violations.extend(self.unused_schemes(document, used_schemes))
        return violations

    def scan(self, document: SpecDocument) -> Tuple[List[Violation], Set[str]]:
        """
        First pass: everything except unused-scheme detection.

        Returns:
            Tuple of (violations, names of schemes referenced by operations).
        """
        violations: List[Violation] = []
        used_schemes: Set[str] = set()

        violations.extend(self._check_servers(document))
        violations.extend(self._check_scheme_definitions(document.security_schemes))

        for operation in document.operations():
            operation_violations, referenced = self._check_operation(document, operation)
            violations.extend(operation_violations)
            used_schemes.update(referenced)

        return violations, used_schemes

    def unused_schemes(self, document: SpecDocument, used_schemes: Set[str]) -> List[Violation]:
        """Second pass: declared schemes never referenced by any operation."""
        return [
            self.warning(
                f"components.securitySchemes.{name}",
                f'Security scheme "{name}" declared but not used in any operation',
            )
            for name in document.security_schemes
            if name not in used_schemes
        ]

    def _check_servers(self, document: SpecDocument) -> List[Violation]:
        if document.servers is None:
            return [self.warning("servers", "No servers defined; HTTPS servers should be declared")]

        return [
            self.error("servers.url", f'Server URL "{url}" is not HTTPS; TLS is required')
            for url in document.server_urls
            if not url.startswith(SECURE_SCHEME)
        ]

    def _check_scheme_definitions(self, schemes: Dict[str, Any]) -> List[Violation]:
        violations: List[Violation] = []

        for name, scheme in schemes.items():
            location = f"components.securitySchemes.{name}"
            scheme = scheme if isinstance(scheme, dict) else {}
            scheme_type = scheme.get("type")

            if scheme_type not in VALID_SCHEME_TYPES:
                violations.append(self.error(
                    location, f'Security scheme "{name}" has invalid type "{scheme_type}"'
                ))

            if scheme_type == "apiKey" and scheme.get("in") not in VALID_API_KEY_LOCATIONS:
                violations.append(self.error(
                    location,
                    f'apiKey security scheme "{name}" must have "in" set to '
                    f'header, query or cookie (found "{scheme.get("in")}")',
                ))

        return violations

    def _check_operation(
        self, document: SpecDocument, operation: Operation
    ) -> Tuple[List[Violation], Set[str]]:
        violations: List[Violation] = []
        referenced: Set[str] = set()
        path, method = operation.path, operation.method
        schemes = document.security_schemes

        secured = operation.has_security or document.has_global_security
        if not secured:
            violations.append(self.error(
                path, "No security scheme defined globally or on this operation", method=method
            ))
            if operation.is_unsafe:
                violations.append(self.error(
                    path,
                    f"Unsafe HTTP method {method.upper()} is exposed without a security scheme",
                    method=method,
                ))

        if operation.has_security:
            for requirement in operation.security:
                for name in _scheme_names(requirement):
                    if name in schemes:
                        referenced.add(name)
                    else:
                        violations.append(self.error(
                            path,
                            f'Security scheme "{name}" is not defined in components.securitySchemes',
                            method=method,
                        ))

            if not any(_is_bearer(schemes.get(name)) for name in referenced):
                violations.append(self.warning(
                    path,
                    "Operation should use bearer token (JWT) authentication where applicable",
                    method=method,
                ))

        responses = operation.responses
        if responses is None:
            violations.append(self.error(
                path,
                "No responses defined; unable to check for rate limiting response",
                method=method,
            ))
        elif RATE_LIMIT_CODE not in responses:
            violations.append(self.warning(
                path,
                "Rate limiting response (429 Too Many Requests) is recommended",
                method=method,
            ))

        return violations, referenced


def _scheme_names(requirement: Any) -> List[str]:
    if isinstance(requirement, dict):
        return [str(name) for name in requirement]
    return []


def _is_bearer(scheme: Any) -> bool:
    return (
        isinstance(scheme, dict)
        and scheme.get("type") == "http"
        and scheme.get("scheme") == "bearer"
    )
