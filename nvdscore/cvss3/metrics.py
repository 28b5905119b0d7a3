"""CVSS v3 base and temporal metric values: codes, weights and parsing."""

from __future__ import annotations

from enum import Enum


class MetricError(ValueError):
    """Raised when a metric code cannot be parsed."""


class Metric(Enum):
    """A CVSS v3 metric value carrying its vector code and score weight.

    Every metric has a member with value 0 meaning "not defined".
    """

    def __new__(cls, index: int, code: str, weight: object) -> "Metric":
        member = object.__new__(cls)
        member._value_ = index
        member.code = code
        member._weight = weight
        return member

    @classmethod
    def _describe(cls) -> str:
        return _LABELS.get(cls, "metric code")

    @classmethod
    def parse(cls, code: str) -> "Metric":
        """Return the member whose vector code is ``code``."""
        for member in cls:
            if member.code == code:
                return member
        raise MetricError(f"illegal {cls._describe()} {code}")

    def defined(self) -> bool:
        """Whether the metric holds a value other than "not defined"."""
        return self.value != 0

    def weight(self) -> float:
        """The weight this value contributes to score calculations."""
        return self._weight

    def __str__(self) -> str:
        return self.code


# Base metrics


class AttackVector(Metric):
    NOT_DEFINED = (0, "", 0.0)
    NETWORK = (1, "N", 0.85)
    ADJACENT = (2, "A", 0.62)
    LOCAL = (3, "L", 0.55)
    PHYSICAL = (4, "P", 0.2)


class AttackComplexity(Metric):
    NOT_DEFINED = (0, "", 0.0)
    LOW = (1, "L", 0.77)
    HIGH = (2, "H", 0.44)


class PrivilegesRequired(Metric):
    """Privileges required; its weight depends on whether scope changed."""

    # weights: (scope unchanged, scope changed)
    NOT_DEFINED = (0, "", (0.0, 0.0))
    NONE = (1, "N", (0.85, 0.85))
    LOW = (2, "L", (0.62, 0.68))
    HIGH = (3, "H", (0.27, 0.5))

    def weight_for(self, scope_changed: bool) -> float:
        """The weight of this value given whether the scope changed."""
        unchanged, changed = self._weight
        return changed if scope_changed else unchanged

    def weight(self) -> float:
        """The weight of this value when the scope is unchanged."""
        return self.weight_for(False)


class UserInteraction(Metric):
    NOT_DEFINED = (0, "", 0.0)
    NONE = (1, "N", 0.85)
    REQUIRED = (2, "R", 0.62)


class Scope(Metric):
    """Scope carries no weight of its own; it switches the score formulas."""

    NOT_DEFINED = (0, "", None)
    UNCHANGED = (1, "U", None)
    CHANGED = (2, "C", None)

    def weight(self) -> float:
        raise TypeError("scope has no weight")


class Confidentiality(Metric):
    NOT_DEFINED = (0, "", 0.0)
    HIGH = (1, "H", 0.56)
    LOW = (2, "L", 0.22)
    NONE = (3, "N", 0.0)


class Integrity(Metric):
    NOT_DEFINED = (0, "", 0.0)
    HIGH = (1, "H", 0.56)
    LOW = (2, "L", 0.22)
    NONE = (3, "N", 0.0)


class Availability(Metric):
    NOT_DEFINED = (0, "", 0.0)
    HIGH = (1, "H", 0.56)
    LOW = (2, "L", 0.22)
    NONE = (3, "N", 0.0)


# Temporal metrics


class ExploitCodeMaturity(Metric):
    NOT_DEFINED = (0, "X", 1.0)
    HIGH = (1, "H", 1.0)
    FUNCTIONAL = (2, "F", 0.97)
    PROOF_OF_CONCEPT = (3, "P", 0.94)
    UNPROVEN = (4, "U", 0.91)


class RemediationLevel(Metric):
    NOT_DEFINED = (0, "X", 1.0)
    UNAVAILABLE = (1, "U", 1.0)
    WORKAROUND = (2, "W", 0.97)
    TEMPORARY_FIX = (3, "T", 0.96)
    OFFICIAL_FIX = (4, "O", 0.95)


class ReportConfidence(Metric):
    NOT_DEFINED = (0, "X", 1.0)
    CONFIRMED = (1, "C", 1.0)
    REASONABLE = (2, "R", 0.96)
    UNKNOWN = (3, "U", 0.92)


_LABELS: dict[type, str] = {
    AttackVector: "attack vector code",
    AttackComplexity: "attack complexity code",
    PrivilegesRequired: "privileges required code",
    UserInteraction: "user interaction code",
    Scope: "scope code",
    Confidentiality: "confidentiality code",
    Integrity: "integrity code",
    Availability: "availability code",
    ExploitCodeMaturity: "exploit code maturity code",
    RemediationLevel: "remediation level code",
    ReportConfidence: "report confidence code",
}