"""Run statistics for the seeding pipeline."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Stage names in execution order (clean is reported separately)
STAGES = (
    "tenant",
    "profile_suppliers",
    "glass_suppliers",
    "glass_types",
    "models",
    "services",
    "glass_solutions",
    "glass_type_solutions",
)

ERROR_KINDS = ("validation", "referential", "persistence")


@dataclass
class SeedErrorRecord:
    kind: str
    index: Optional[int]
    code: str
    message: str
    path: str = ""
    key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "index": self.index,
            "code": self.code,
            "message": self.message,
            "path": self.path,
            "key": self.key,
        }


@dataclass
class StageStats:
    created: int = 0
    updated: int = 0
    failed: int = 0
    skipped: int = 0
    errors: List[SeedErrorRecord] = field(default_factory=list)

    def record_error(self, error: SeedErrorRecord) -> None:
        self.errors.append(error)

    def count_kind(self, kind: str) -> int:
        # failed counts records, errors may hold several entries per record
        return len({e.index for e in self.errors if e.kind == kind})

    @property
    def validation_failures(self) -> int:
        return self.count_kind("validation")

    @property
    def referential_failures(self) -> int:
        return self.count_kind("referential")

    @property
    def persistence_failures(self) -> int:
        return self.count_kind("persistence")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "created": self.created,
            "updated": self.updated,
            "failed": self.failed,
            "skipped": self.skipped,
            "failures_by_kind": {k: self.count_kind(k) for k in ERROR_KINDS},
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass
class SeedStats:
    preset: str = ""
    stages: Dict[str, StageStats] = field(default_factory=lambda: {s: StageStats() for s in STAGES})
    cleaned: Dict[str, int] = field(default_factory=dict)
    cleanup_errors: List[str] = field(default_factory=list)
    duration_ms: int = 0
    status: str = "success"
    aborted_stage: Optional[str] = None

    def __getitem__(self, stage: str) -> StageStats:
        return self.stages[stage]

    @property
    def total_created(self) -> int:
        return sum(s.created for s in self.stages.values())

    @property
    def total_updated(self) -> int:
        return sum(s.updated for s in self.stages.values())

    @property
    def total_failed(self) -> int:
        return sum(s.failed for s in self.stages.values()) + len(self.cleanup_errors)

    @property
    def succeeded(self) -> bool:
        return self.status == "success" and self.total_failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preset": self.preset,
            "status": self.status,
            "aborted_stage": self.aborted_stage,
            "stages": {name: s.to_dict() for name, s in self.stages.items()},
            "cleaned": dict(self.cleaned),
            "cleanup_errors": list(self.cleanup_errors),
            "total_created": self.total_created,
            "total_updated": self.total_updated,
            "total_failed": self.total_failed,
            "duration_ms": self.duration_ms,
        }
