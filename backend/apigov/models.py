"""
Data model for the governance engine.

Provides a read-only view over an OpenAPI-style document and the value
records the rule checks emit:
- SpecDocument / Operation: structural access, tolerant of missing sections
- Violation: one detected deviation, tagged with severity and category
- Report: the (score, violations) pair returned to callers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    SECURITY = "security"
    RESPONSES = "responses"
    NAMING = "naming"
    VERSIONING = "versioning"
    OTHER = "other"


@dataclass(frozen=True)
class Violation:
    """
    A single governance rule violation.

    Category is required: every check stamps its own category at the point
    of emission so the scoring weights apply to the right bucket.
    """

    path: str
    message: str
    severity: Severity
    category: Category
    method: Optional[str] = None
    status_code: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        data: Dict[str, Any] = {"path": self.path}
        if self.method:
            data["method"] = self.method
        if self.status_code:
            data["statusCode"] = self.status_code
        data["message"] = self.message
        data["severity"] = self.severity.value
        data["category"] = self.category.value
        return data

    def __str__(self) -> str:
        loc = self.path
        if self.method:
            loc = f"{self.method.upper()} {loc}"
        if self.status_code:
            loc = f"{loc} [{self.status_code}]"
        return f"[{self.severity.value.upper()}] {self.category.value}: {loc}: {self.message}"


@dataclass(frozen=True)
class Operation:
    """One HTTP method entry under a path."""

    path: str
    method: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def operation_id(self) -> Optional[str]:
        return self.data.get("operationId")

    @property
    def responses(self) -> Optional[Dict[str, Any]]:
        """Responses keyed by status code string, or None when absent."""
        responses = self.data.get("responses")
        if responses is None:
            return None
        if not isinstance(responses, dict):
            return {}
        # YAML loads unquoted status codes as integers
        return {str(code): response for code, response in responses.items()}

    @property
    def security(self) -> Optional[List[Dict[str, Any]]]:
        return self.data.get("security")

    @property
    def has_security(self) -> bool:
        """True when the operation declares a non-empty security requirement list."""
        return isinstance(self.security, list) and len(self.security) > 0

    @property
    def parameters(self) -> List[Dict[str, Any]]:
        return self.data.get("parameters") or []

    @property
    def is_unsafe(self) -> bool:
        return self.method in ("post", "put", "delete", "patch")


class SpecDocument:
    """
    Read-only view over a parsed API description.

    Every accessor tolerates the absence of its section; absence is a
    condition some rules check for, never a crash.
    """

    def __init__(self, raw: Dict[str, Any]):
        self._raw = raw

    @classmethod
    def wrap(cls, document: Any) -> "SpecDocument":
        if isinstance(document, cls):
            return document
        return cls(document)

    @property
    def raw(self) -> Dict[str, Any]:
        return self._raw

    @property
    def info(self) -> Optional[Dict[str, Any]]:
        info = self._raw.get("info")
        return info if isinstance(info, dict) else None

    @property
    def title(self) -> Optional[str]:
        return self.info.get("title") if self.info else None

    @property
    def version(self) -> Optional[str]:
        return self.info.get("version") if self.info else None

    @property
    def servers(self) -> Optional[List[Dict[str, Any]]]:
        """Declared servers, or None when the key is absent."""
        servers = self._raw.get("servers")
        if servers is None:
            return None
        return list(servers) if isinstance(servers, list) else []

    @property
    def server_urls(self) -> List[str]:
        urls = []
        for server in self.servers or []:
            url = server.get("url") if isinstance(server, dict) else server
            urls.append(str(url) if url is not None else "")
        return urls

    @property
    def paths(self) -> Dict[str, Any]:
        paths = self._raw.get("paths")
        return paths if isinstance(paths, dict) else {}

    @property
    def security_schemes(self) -> Dict[str, Any]:
        components = self._raw.get("components")
        if not isinstance(components, dict):
            return {}
        schemes = components.get("securitySchemes")
        return schemes if isinstance(schemes, dict) else {}

    @property
    def global_security(self) -> Optional[List[Dict[str, Any]]]:
        return self._raw.get("security")

    @property
    def has_global_security(self) -> bool:
        security = self.global_security
        return isinstance(security, list) and len(security) > 0

    def operations(self) -> Iterator[Operation]:
        """Yield every operation in document order."""
        for path, path_item in self.paths.items():
            if not isinstance(path_item, dict):
                continue
            for key, data in path_item.items():
                method = str(key).lower()
                if method not in HTTP_METHODS:
                    continue
                yield Operation(
                    path=str(path),
                    method=method,
                    data=data if isinstance(data, dict) else {},
                )

    @property
    def operation_count(self) -> int:
        return sum(1 for _ in self.operations())


@dataclass(frozen=True)
class Report:
    """Score and ordered violations produced by one evaluation."""

    score: int
    violations: Tuple[Violation, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.violations

    @property
    def errors(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == Severity.WARNING]

    def by_severity(self) -> Dict[str, List[Violation]]:
        """Group violations by severity, errors first."""
        return {
            Severity.ERROR.value: self.errors,
            Severity.WARNING.value: self.warnings,
        }

    def by_category(self) -> Dict[str, List[Violation]]:
        grouped: Dict[str, List[Violation]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.category.value, []).append(violation)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "violations": [v.to_dict() for v in self.violations],
        }
