"""
Glass Classification Engine

Maps raw glass characteristics to solution assignments (solution key,
performance rating, primary flag) with deterministic point scoring.

Scoring sources:
  Security           — EN 12600 (pendulum impact), EN 356 (burglar resistance)
  Sound insulation   — EN ISO 717-1 (Rw index)
  Thermal insulation — EN 673 (U-value calculation)
  Energy efficiency  — EN 410 (solar factor / light transmission)

Every score starts at 1; thresholds map it onto the rating ladder
basic < standard < good < very_good < excellent.
"""
import logging
from dataclasses import dataclass, replace
from typing import Iterable, List

logger = logging.getLogger("glasify-classification")

# Thickness breakpoints (mm)
THICKNESS_SAFETY_MM = 6
THICKNESS_ACOUSTIC_MM = 10
THICKNESS_INSULATED_MM = 20

# score >= threshold -> rating, checked top-down
RATING_THRESHOLDS = (
    (5, "excellent"),
    (4, "very_good"),
    (3, "good"),
    (2, "standard"),
)
BASE_SCORE = 1


@dataclass(frozen=True)
class GlassCharacteristics:
    is_tempered: bool = False
    is_laminated: bool = False
    is_low_e: bool = False
    is_triple_glazed: bool = False
    thickness_mm: float = 0
    purpose: str = "general"

    @classmethod
    def from_record(cls, record) -> "GlassCharacteristics":
        """Build from anything exposing the GlassType attribute names (ORM row or input schema)."""
        return cls(
            is_tempered=bool(record.is_tempered),
            is_laminated=bool(record.is_laminated),
            is_low_e=bool(record.is_low_e),
            is_triple_glazed=bool(record.is_triple_glazed),
            thickness_mm=record.thickness_mm,
            purpose=record.purpose or "general",
        )


@dataclass(frozen=True)
class SolutionAssignment:
    solution_key: str
    performance_rating: str
    is_primary: bool = False


def score_to_rating(score: int) -> str:
    for threshold, rating in RATING_THRESHOLDS:
        if score >= threshold:
            return rating
    return "basic"


# ---------------------------------------------------------------------------
# Scoring functions
# ---------------------------------------------------------------------------

def security_score(c: GlassCharacteristics) -> int:
    score = BASE_SCORE
    if c.is_tempered:
        score += 1
    if c.is_laminated:
        score += 2
    if c.thickness_mm >= THICKNESS_SAFETY_MM:
        score += 1
    if c.is_tempered and c.is_laminated:
        score += 1
    return score


def sound_score(c: GlassCharacteristics) -> int:
    score = BASE_SCORE
    if c.thickness_mm >= THICKNESS_SAFETY_MM:
        score += 1
    if c.thickness_mm >= THICKNESS_ACOUSTIC_MM:
        score += 1
    if c.is_laminated:
        score += 2
    if c.is_triple_glazed:
        score += 1
    return score


def thermal_score(c: GlassCharacteristics) -> int:
    score = BASE_SCORE
    if c.thickness_mm >= THICKNESS_ACOUSTIC_MM:
        score += 1
    if c.thickness_mm >= THICKNESS_INSULATED_MM:
        score += 1
    if c.is_low_e:
        score += 2
    if c.is_triple_glazed:
        score += 1
    return score


def energy_score(c: GlassCharacteristics) -> int:
    score = BASE_SCORE
    if c.thickness_mm >= THICKNESS_ACOUSTIC_MM:
        score += 1
    if c.is_low_e:
        score += 2
    if c.is_triple_glazed:
        score += 1
    if c.is_low_e and c.is_triple_glazed:
        score += 1
    return score


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def ensure_primary(assignments: Iterable[SolutionAssignment]) -> List[SolutionAssignment]:
    """If nothing is flagged primary, promote the first assignment."""
    out = list(assignments)
    if out and not any(a.is_primary for a in out):
        out[0] = replace(out[0], is_primary=True)
    return out


def classify(c: GlassCharacteristics) -> List[SolutionAssignment]:
    """
    Assignments in fixed order: security, sound, thermal, energy, decorative,
    general.  Order decides which entry is promoted when no rule marks one
    primary.
    """
    out: List[SolutionAssignment] = []

    security_rating = score_to_rating(security_score(c))
    if security_rating != "basic" or c.purpose == "security":
        out.append(SolutionAssignment("security", security_rating, c.purpose == "security"))

    if c.is_laminated or c.thickness_mm >= THICKNESS_SAFETY_MM:
        out.append(SolutionAssignment("sound_insulation", score_to_rating(sound_score(c)), False))

    if c.thickness_mm >= THICKNESS_ACOUSTIC_MM or c.is_low_e or c.is_triple_glazed:
        out.append(SolutionAssignment(
            "thermal_insulation", score_to_rating(thermal_score(c)), c.purpose == "insulation"))

    if c.is_low_e or c.is_triple_glazed:
        out.append(SolutionAssignment("energy_efficiency", score_to_rating(energy_score(c)), False))

    if c.purpose == "decorative":
        out.append(SolutionAssignment("decorative", "standard", True))

    if c.purpose == "general" or not out:
        out.append(SolutionAssignment("general", "standard", c.purpose == "general"))

    result = ensure_primary(out)
    logger.debug("classified %s -> %s", c, [(a.solution_key, a.performance_rating, a.is_primary) for a in result])
    return result
