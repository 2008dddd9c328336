"""
Exceptions raised by the governance engine.

Governance findings are reported as violations, never raised. These
exceptions cover precondition failures only: documents that cannot be
loaded or iterated, and invalid policy configuration.
"""


class GovernanceError(Exception):
    """Base class for all governance engine errors."""


class DocumentLoadError(GovernanceError):
    """A spec file could not be read or parsed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class InvalidDocumentError(GovernanceError):
    """The document is structurally unusable (not a mapping, paths not a mapping)."""


class PolicyError(GovernanceError):
    """A governance policy could not be loaded."""
