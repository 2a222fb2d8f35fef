"""Pay coefficients - single source of truth.

Coefficients depend on the program language/level (activity type) and the
hour kind. The defaults pay every hour kind of a program alike; individual
pairs can be overridden through settings.coefficient_overrides.
"""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

from declaration_engine.config.settings import settings
from declaration_engine.activity import ActivityType, HourKind

DEFAULT_PROGRAM_COEFFICIENTS: dict[ActivityType, float] = {
    ActivityType.LR: 1.0,
    ActivityType.LE: 1.2,
    ActivityType.MR: 1.1,
    ActivityType.ME: 1.3,
}


class CoefficientTable:
    """Coefficient lookup keyed by (activity type, hour kind)."""

    def __init__(
        self,
        coefficients: Mapping[tuple[ActivityType, HourKind], float],
        default: float = 1.0,
    ):
        self._coefficients = dict(coefficients)
        self._default = default

    @classmethod
    def default(cls) -> CoefficientTable:
        return cls(
            {
                (activity, kind): coefficient
                for activity, coefficient in DEFAULT_PROGRAM_COEFFICIENTS.items()
                for kind in HourKind
            },
            default=settings.default_coefficient,
        )

    @classmethod
    def from_settings(cls) -> CoefficientTable:
        """Default table with settings.coefficient_overrides applied."""
        table = cls.default()
        for key, coefficient in settings.coefficient_overrides.items():
            activity, kind = key.split(":")
            table = table.with_override(ActivityType(activity.strip().upper()), HourKind(kind.strip().lower()), coefficient)
        return table

    def with_override(self, activity_type: ActivityType, hour_kind: HourKind, coefficient: float) -> CoefficientTable:
        updated = dict(self._coefficients)
        updated[(activity_type, hour_kind)] = coefficient
        return CoefficientTable(updated, default=self._default)

    def lookup(self, activity_type: ActivityType, hour_kind: HourKind) -> float:
        coefficient = self._coefficients.get((activity_type, hour_kind))
        if coefficient is None:
            logger.warning(
                f"[COEFFICIENTS] No coefficient for ({activity_type}, {hour_kind}), using default {self._default}"
            )
            return self._default
        return coefficient

    def as_dict(self) -> dict[str, float]:
        return {f"{activity}:{kind}": value for (activity, kind), value in self._coefficients.items()}
