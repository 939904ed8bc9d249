"""Error types raised by the compliance engine."""


class ComplianceEngineError(Exception):
    """Base class for all engine errors."""


class ValidationError(ComplianceEngineError, ValueError):
    """Raised when a profile, status map, catalog or config is invalid."""


class UnknownReferenceError(ComplianceEngineError, KeyError):
    """A status refers to a requirement that is not in the catalog."""

    def __init__(self, requirement_id: str):
        super().__init__(requirement_id)
        self.requirement_id = requirement_id

    def __str__(self) -> str:
        return f"Unknown requirement reference: {self.requirement_id}"
