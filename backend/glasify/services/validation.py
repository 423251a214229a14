"""
Validation primitives shared by every seed factory.

A factory never raises on bad input: it returns a FactoryResult that is either
successful (typed, validated record in ``data``) or failed (a list of
field-level ValidationError entries).  pydantic schema errors and the
business-rule checks below are reported in the same structured shape:

    {code, message, path, context: {expected, received}}
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

T = TypeVar("T", bound=BaseModel)

# Default sanity ceiling for monetary values (COP)
DEFAULT_MAX_PRICE = 100_000_000


@dataclass
class ValidationError:
    """A single field-level validation failure."""
    code: str
    message: str
    path: List[str] = field(default_factory=list)
    context: Optional[Dict[str, Any]] = None

    @property
    def dotted_path(self) -> str:
        out = ""
        for part in self.path:
            if isinstance(part, int) or (isinstance(part, str) and part.isdigit()):
                out += f"[{part}]"
            else:
                out = f"{out}.{part}" if out else str(part)
        return out

    def to_dict(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "path": self.dotted_path,
        }
        if self.context:
            entry["context"] = self.context
        return entry

    def __str__(self) -> str:
        where = self.dotted_path or "<record>"
        return f"{where}: {self.message} ({self.code})"


@dataclass
class FactoryOptions:
    skip_validation: bool = False
    overrides: Optional[Dict[str, Any]] = None


@dataclass
class FactoryResult(Generic[T]):
    """Outcome of a factory call. ``data`` is set iff ``success``."""
    success: bool
    data: Optional[T] = None
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)

    @classmethod
    def ok(cls, data: T, warnings: Optional[List[ValidationError]] = None) -> "FactoryResult[T]":
        return cls(success=True, data=data, warnings=list(warnings or []))

    @classmethod
    def fail(cls, errors: List[ValidationError]) -> "FactoryResult[T]":
        return cls(success=False, errors=list(errors))


@dataclass
class BatchResult(Generic[T]):
    """Batch form of FactoryResult: valid records plus errors keyed by input index."""
    valid: List[T] = field(default_factory=list)
    valid_indexes: List[int] = field(default_factory=list)
    errors: Dict[int, List[ValidationError]] = field(default_factory=dict)
    warnings: Dict[int, List[ValidationError]] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Schema validation
# ---------------------------------------------------------------------------

def merge_overrides(data: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Shallow merge: top-level keys in ``overrides`` replace those in ``data``."""
    if not overrides:
        return dict(data)
    return {**data, **overrides}


def _pydantic_errors(exc: PydanticValidationError) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for err in exc.errors():
        ctx = err.get("ctx") or {}
        context: Dict[str, Any] = {"received": err.get("input")}
        if ctx:
            context["expected"] = {k: (v if isinstance(v, (int, float, str, bool)) else str(v)) for k, v in ctx.items()}
        errors.append(ValidationError(
            code=str(err.get("type", "validation_error")).upper(),
            message=err.get("msg", "Validation failed"),
            path=[str(p) for p in err.get("loc", ())],
            context=context,
        ))
    return errors


def validate_with_schema(schema: Type[T], data: Dict[str, Any]) -> FactoryResult[T]:
    try:
        return FactoryResult.ok(schema.model_validate(data))
    except PydanticValidationError as exc:
        return FactoryResult.fail(_pydantic_errors(exc))


def build_record(
    schema: Type[T],
    raw: Dict[str, Any],
    options: Optional[FactoryOptions],
) -> FactoryResult[T]:
    """
    Merge overrides and run schema validation.

    With ``skip_validation`` the merged input is wrapped with
    ``model_construct`` (defaults applied, no checks) so trusted callers still
    hand a typed record to persistence.
    """
    options = options or FactoryOptions()
    data = merge_overrides(raw, options.overrides)
    if options.skip_validation:
        return FactoryResult.ok(schema.model_construct(**data))
    return validate_with_schema(schema, data)


# ---------------------------------------------------------------------------
# Business-rule helpers
# ---------------------------------------------------------------------------

def validate_range(value: Optional[float], min_value: float, max_value: float, path: str) -> Optional[ValidationError]:
    if value is None:
        return None
    if value < min_value or value > max_value:
        return ValidationError(
            code="OUT_OF_RANGE",
            message=f"Value must be between {min_value} and {max_value}",
            path=[path],
            context={"expected": {"min": min_value, "max": max_value}, "received": value},
        )
    return None


def validate_min_max(min_value: float, max_value: float, prefix: str) -> Optional[ValidationError]:
    if min_value >= max_value:
        return ValidationError(
            code="INVALID_RANGE",
            message=f"min ({min_value}) must be less than max ({max_value})",
            path=[prefix],
            context={"expected": "min < max", "received": {"min": min_value, "max": max_value}},
        )
    return None


def validate_price(value: Optional[float], path: str, max_price: float = DEFAULT_MAX_PRICE) -> Optional[ValidationError]:
    if value is None:
        return None
    if value <= 0:
        return ValidationError(
            code="INVALID_PRICE",
            message="Price must be greater than zero",
            path=[path],
            context={"expected": "> 0", "received": value},
        )
    if value > max_price:
        return ValidationError(
            code="PRICE_TOO_HIGH",
            message=f"Price exceeds maximum allowed ({max_price})",
            path=[path],
            context={"expected": f"<= {max_price}", "received": value},
        )
    return None


def validate_non_empty(values: Optional[Sequence[Any]], path: str) -> Optional[ValidationError]:
    if not values:
        return ValidationError(
            code="EMPTY_ARRAY",
            message="At least one item is required",
            path=[path],
            context={"expected": "non-empty list", "received": 0},
        )
    return None

