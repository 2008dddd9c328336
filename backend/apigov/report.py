"""
Compliance Report Generator.

Wraps an engine Report with document details and audit metadata, and
renders it as JSON or Markdown for CI logs and review tooling.
"""

from __future__ import annotations

import hashlib
import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .models import Report, SpecDocument
from .policy import GovernancePolicy
from .scoring import CategoryScore, category_breakdown


REPORT_VERSION = "governance-report/1.0"
MARKDOWN_VIOLATION_LIMIT = 50


@dataclass
class AuditMetadata:
    """Metadata for audit trail."""

    report_generated_at: str
    tool_version: str
    duration_ms: int
    source_checksum: Optional[str] = None

    @classmethod
    def generate(cls, duration_ms: int, source_path: Optional[Path] = None) -> "AuditMetadata":
        """Generate audit metadata."""
        metadata = cls(
            report_generated_at=datetime.now(timezone.utc).isoformat(),
            tool_version=__version__,
            duration_ms=duration_ms,
        )
        if source_path and source_path.exists():
            metadata.source_checksum = _compute_file_checksum(source_path)
        return metadata

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result: Dict[str, Any] = {
            "report_generated_at": self.report_generated_at,
            "tool_version": self.tool_version,
            "duration_ms": self.duration_ms,
        }
        if self.source_checksum:
            result["source_checksum"] = self.source_checksum
        return result


@dataclass
class ComplianceReport:
    """Full compliance report for one evaluated document."""

    report: Report
    api: Dict[str, str]
    audit_metadata: AuditMetadata
    total_apis: int = 1
    breakdown: List[CategoryScore] = field(default_factory=list)
    report_version: str = REPORT_VERSION

    @property
    def score(self) -> int:
        return self.report.score

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "report_version": self.report_version,
            "api": self.api,
            "score": self.report.score,
            "total_errors": len(self.report.errors),
            "total_warnings": len(self.report.warnings),
            "total_apis": self.total_apis,
            "categories": [bucket.to_dict() for bucket in self.breakdown],
            "violations": [v.to_dict() for v in self.report.violations],
            "audit_metadata": self.audit_metadata.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def to_markdown(self) -> str:
        """Convert to Markdown, violations grouped by severity."""
        lines = []
        status = "PASSED" if self.report.passed else "FAILED"

        lines.append(f"# Governance Report: {self.api.get('title') or 'Untitled API'}")
        lines.append("")
        lines.append(f"**Status:** {status}")
        lines.append(f"**Score:** {self.report.score}/100")
        lines.append(f"**Errors:** {len(self.report.errors)}")
        lines.append(f"**Warnings:** {len(self.report.warnings)}")
        lines.append("")

        if self.breakdown:
            lines.append("## Categories")
            lines.append("")
            lines.append("| Category | Errors | Warnings | Weight | Penalty |")
            lines.append("|----------|--------|----------|--------|---------|")
            for bucket in self.breakdown:
                lines.append(
                    f"| {bucket.category} | {bucket.errors} | {bucket.warnings} "
                    f"| {bucket.weight:g} | {bucket.penalty:.2f} |"
                )
            lines.append("")

        for severity, violations in self.report.by_severity().items():
            if not violations:
                continue
            lines.append(f"## {severity.capitalize()}s")
            lines.append("")
            for v in violations[:MARKDOWN_VIOLATION_LIMIT]:
                location = f"{v.method.upper()} {v.path}" if v.method else v.path
                if v.status_code:
                    location = f"{location} [{v.status_code}]"
                lines.append(f"- **{v.category.value}** at `{location}`: {v.message}")
            hidden = len(violations) - MARKDOWN_VIOLATION_LIMIT
            if hidden > 0:
                lines.append(f"- ... and {hidden} more")
            lines.append("")

        lines.append("## Audit Metadata")
        lines.append("")
        audit = self.audit_metadata.to_dict()
        lines.append(f"- **Generated At:** {audit.get('report_generated_at', '')}")
        lines.append(f"- **Tool Version:** {audit.get('tool_version', '')}")
        lines.append(f"- **Duration:** {audit.get('duration_ms', 0)}ms")
        if audit.get("source_checksum"):
            lines.append(f"- **Source Checksum:** {audit['source_checksum']}")
        lines.append("")

        return "\n".join(lines)

    def save(self, output_path: Path, format: str = "json") -> None:
        """
        Save report to file.

        Args:
            output_path: Path to save the report.
            format: Output format, either 'json' or 'markdown'.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if format == "markdown":
            output_path.write_text(self.to_markdown(), encoding="utf-8")
        else:
            output_path.write_text(self.to_json(), encoding="utf-8")


def generate_compliance_report(
    report: Report,
    document: Any,
    duration_ms: int = 0,
    source_path: Optional[Path] = None,
    total_apis: int = 1,
    policy: Optional[GovernancePolicy] = None,
) -> ComplianceReport:
    """
    Generate a compliance report from an engine Report.

    Args:
        report: Result from GovernanceEngine.evaluate().
        document: The evaluated document (mapping or SpecDocument).
        duration_ms: Evaluation duration in milliseconds.
        source_path: File the document was loaded from, if any.
        total_apis: Normalization denominator used for the score.
        policy: Scoring policy used for the score.

    Returns:
        ComplianceReport ready for serialization.
    """
    spec = SpecDocument.wrap(document)
    api = {
        "title": str(spec.title or ""),
        "version": str(spec.version or ""),
    }
    if source_path:
        api["source"] = str(source_path)

    breakdown = category_breakdown(report.violations, total_apis=total_apis, policy=policy)

    return ComplianceReport(
        report=report,
        api=api,
        audit_metadata=AuditMetadata.generate(duration_ms, source_path),
        total_apis=total_apis,
        breakdown=list(breakdown.values()),
    )


def _compute_file_checksum(path: Path) -> str:
    """Compute SHA-256 checksum of a file."""
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


class ReportTimer:
    """Context manager for timing evaluation."""

    def __init__(self):
        self.start_time: float = 0
        self.duration_ms: int = 0

    def __enter__(self) -> "ReportTimer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.duration_ms = int((time.perf_counter() - self.start_time) * 1000)
