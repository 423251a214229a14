"""
Exception hierarchy for the seeding pipeline.

Each exception maps to one error class surfaced in the run statistics:
validation, referential or persistence.  SeedAborted wraps whichever of those
stopped a run when continue-on-error is off.
"""
from typing import Any, Dict, List, Optional


class SeedingError(Exception):
    """
    Base exception for all seeding errors.

    Attributes:
        message: Error message
        stage: Pipeline stage where the error occurred
        details: Additional error details
        original_exception: Underlying exception, if any
        partial: Result accumulated before the failure, set by the seeder
    """

    kind = "seeding"
    code = "SEEDING_ERROR"

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[BaseException] = None,
    ):
        self.message = message
        self.stage = stage
        self.details = details or {}
        self.original_exception = original_exception
        self.partial: Any = None

        full_message = message
        if stage:
            full_message = f"[{stage.upper()}] {message}"
        super().__init__(full_message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "kind": self.kind,
            "message": self.message,
            "stage": self.stage,
            "details": self.details,
            "original_exception": str(self.original_exception) if self.original_exception else None,
        }


class ValidationFailed(SeedingError):
    """A record was rejected by its factory before any write."""

    kind = "validation"
    code = "VALIDATION_FAILED"

    def __init__(self, message: str, errors: List[Any], stage: Optional[str] = None,
                 index: Optional[int] = None):
        self.errors = list(errors)
        self.index = index
        super().__init__(
            message,
            stage=stage,
            details={"index": index, "errors": [e.to_dict() for e in self.errors]},
        )


class ReferentialError(SeedingError):
    """A lookup key (supplier name, glass type name, solution key) has no persisted id."""

    kind = "referential"
    code = "REFERENCE_NOT_FOUND"

    def __init__(self, lookup: str, key: str, stage: Optional[str] = None,
                 index: Optional[int] = None):
        self.lookup = lookup
        self.key = key
        self.index = index
        super().__init__(
            f"{lookup} not found: {key}",
            stage=stage,
            details={"lookup": lookup, "key": key, "index": index},
        )


class PersistenceError(SeedingError):
    """The store rejected an insert, update or delete."""

    kind = "persistence"
    code = "UPSERT_ERROR"

    def __init__(self, message: str, stage: Optional[str] = None, index: Optional[int] = None,
                 key: Optional[str] = None, original_exception: Optional[BaseException] = None,
                 partial: Any = None):
        self.index = index
        self.key = key
        super().__init__(
            message,
            stage=stage,
            details={"index": index, "key": key},
            original_exception=original_exception,
        )
        self.partial = partial


class SeedAborted(SeedingError):
    """Raised by the orchestrator when a stage fails with continue-on-error off."""

    def __init__(self, stage: str, cause: SeedingError, stats: Any):
        self.cause = cause
        self.stats = stats
        super().__init__(
            f"Seeding aborted: {cause.message}",
            stage=stage,
            details=cause.details,
            original_exception=cause,
        )


class UnknownPresetError(SeedingError):
    def __init__(self, name: str, available: List[str]):
        self.name = name
        self.available = list(available)
        super().__init__(
            f"Unknown preset '{name}'. Available: {', '.join(self.available)}",
            details={"preset": name, "available": self.available},
        )


class ConfigError(SeedingError):
    """Environment-derived configuration is missing or malformed."""

    def __init__(self, message: str, variables: Optional[List[str]] = None):
        self.variables = list(variables or [])
        super().__init__(message, stage="config", details={"variables": self.variables})
