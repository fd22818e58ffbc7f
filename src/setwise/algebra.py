"""Set operations between two canonical line sets."""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .errors import InvalidOperationError
from .sources import SourceSet

logger = logging.getLogger(__name__)

DIFFERENCE = "difference"
UNION = "union"
INTERSECTION = "intersection"
SYMMETRIC_DIFFERENCE = "symmetric-difference"

OPERATIONS = (DIFFERENCE, UNION, INTERSECTION, SYMMETRIC_DIFFERENCE)


@dataclass(frozen=True)
class RelationResult:
    """Outcome of a set operation between two sources."""

    operation: str
    set_a: SourceSet
    set_b: SourceSet
    primary: FrozenSet[str]
    # B - A for difference; None for other operations or in pipe mode
    secondary: Optional[FrozenSet[str]] = None

    @property
    def is_empty(self) -> bool:
        """True when no result set holds any token."""
        return not self.primary and not self.secondary


@dataclass(frozen=True)
class SetStatistics:
    """Size and overlap figures for two line sets."""

    size_a: int
    size_b: int
    overlap: int

    @property
    def only_a(self) -> int:
        return self.size_a - self.overlap

    @property
    def only_b(self) -> int:
        return self.size_b - self.overlap

    @property
    def percent_of_a(self) -> Optional[float]:
        """Overlap as a percentage of A; None when either set is empty."""
        if not self.size_a or not self.size_b:
            return None
        return self.overlap / self.size_a * 100

    @property
    def percent_of_b(self) -> Optional[float]:
        """Overlap as a percentage of B; None when either set is empty."""
        if not self.size_a or not self.size_b:
            return None
        return self.overlap / self.size_b * 100

    def to_dict(self) -> dict:
        """Convert statistics to dictionary for JSON serialization."""
        return {
            "size_a": self.size_a,
            "size_b": self.size_b,
            "overlap": self.overlap,
            "only_a": self.only_a,
            "only_b": self.only_b,
            "percent_of_a": _round_percent(self.percent_of_a),
            "percent_of_b": _round_percent(self.percent_of_b),
        }


def _round_percent(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 1)


def compute_relation(
    set_a: SourceSet, set_b: SourceSet, operation: str, pipe: bool = False
) -> RelationResult:
    """Compute ``operation`` between two sources.

    For difference, the reverse direction (B - A) is only computed when
    pipe mode is off, since it is never reported otherwise.
    """
    a, b = set_a.tokens, set_b.tokens
    secondary = None

    if operation == INTERSECTION:
        primary = a & b
    elif operation == UNION:
        primary = a | b
    elif operation == SYMMETRIC_DIFFERENCE:
        primary = a ^ b
    elif operation == DIFFERENCE:
        primary = a - b
        if not pipe:
            secondary = b - a
    else:
        raise InvalidOperationError(operation)

    logger.debug(
        "Computed relation",
        extra={
            "operation": operation,
            "primary": len(primary),
            "secondary": None if secondary is None else len(secondary),
        },
    )
    return RelationResult(
        operation=operation,
        set_a=set_a,
        set_b=set_b,
        primary=primary,
        secondary=secondary,
    )


def compute_statistics(set_a: SourceSet, set_b: SourceSet) -> SetStatistics:
    """Return size and overlap statistics for two sources."""
    return SetStatistics(
        size_a=len(set_a.tokens),
        size_b=len(set_b.tokens),
        overlap=len(set_a.tokens & set_b.tokens),
    )
