"""CVSS v2 metric values: codes, weights and parsing."""

from __future__ import annotations

from enum import Enum


class MetricError(ValueError):
    """Raised when a metric code cannot be parsed."""


class Metric(Enum):
    """A CVSS v2 metric value carrying its vector code and score weight.

    Every metric has a member with value 0 meaning "not defined".
    """

    def __new__(cls, index: int, code: str, weight: float) -> "Metric":
        member = object.__new__(cls)
        member._value_ = index
        member.code = code
        member._weight = weight
        return member

    @classmethod
    def parse(cls, code: str) -> "Metric":
        """Return the member whose vector code is ``code``."""
        for member in cls:
            if member.code == code:
                return member
        label = _LABELS.get(cls, "metric code")
        raise MetricError(f"illegal {label} {code}")

    def defined(self) -> bool:
        """Whether the metric holds a value other than "not defined"."""
        return self.value != 0

    def weight(self) -> float:
        """The weight this value contributes to score calculations."""
        return self._weight

    def __str__(self) -> str:
        return self.code


# Base metrics


class AccessVector(Metric):
    NOT_DEFINED = (0, "", 0.0)
    LOCAL = (1, "L", 0.395)
    ADJACENT_NETWORK = (2, "A", 0.646)
    NETWORK = (3, "N", 1.0)


class AccessComplexity(Metric):
    NOT_DEFINED = (0, "", 0.0)
    HIGH = (1, "H", 0.35)
    MEDIUM = (2, "M", 0.61)
    LOW = (3, "L", 0.71)


class Authentication(Metric):
    NOT_DEFINED = (0, "", 0.0)
    MULTIPLE = (1, "M", 0.45)
    SINGLE = (2, "S", 0.56)
    NONE = (3, "N", 0.704)


class ConfidentialityImpact(Metric):
    NOT_DEFINED = (0, "", 0.0)
    NONE = (1, "N", 0.0)
    PARTIAL = (2, "P", 0.275)
    COMPLETE = (3, "C", 0.66)


class IntegrityImpact(Metric):
    NOT_DEFINED = (0, "", 0.0)
    NONE = (1, "N", 0.0)
    PARTIAL = (2, "P", 0.275)
    COMPLETE = (3, "C", 0.66)


class AvailabilityImpact(Metric):
    NOT_DEFINED = (0, "", 0.0)
    NONE = (1, "N", 0.0)
    PARTIAL = (2, "P", 0.275)
    COMPLETE = (3, "C", 0.66)


# Temporal metrics


class Exploitability(Metric):
    NOT_DEFINED = (0, "ND", 1.0)
    UNPROVEN = (1, "U", 0.85)
    PROOF_OF_CONCEPT = (2, "POC", 0.9)
    FUNCTIONAL = (3, "F", 0.95)
    HIGH = (4, "H", 1.0)


class RemediationLevel(Metric):
    NOT_DEFINED = (0, "ND", 1.0)
    OFFICIAL_FIX = (1, "OF", 0.87)
    TEMPORARY_FIX = (2, "TF", 0.9)
    WORKAROUND = (3, "W", 0.95)
    UNAVAILABLE = (4, "U", 1.0)


class ReportConfidence(Metric):
    NOT_DEFINED = (0, "ND", 1.0)
    UNCONFIRMED = (1, "UC", 0.9)
    UNCORROBORATED = (2, "UR", 0.95)
    CONFIRMED = (3, "C", 1.0)


# Environmental metrics


class CollateralDamagePotential(Metric):
    NOT_DEFINED = (0, "ND", 0.0)
    NONE = (1, "N", 0.0)
    LOW = (2, "L", 0.1)
    LOW_MEDIUM = (3, "LM", 0.3)
    MEDIUM_HIGH = (4, "MH", 0.4)
    HIGH = (5, "H", 0.5)


class TargetDistribution(Metric):
    NOT_DEFINED = (0, "ND", 1.0)
    NONE = (1, "N", 0.0)
    LOW = (2, "L", 0.25)
    MEDIUM = (3, "M", 0.75)
    HIGH = (4, "H", 1.0)


class ConfidentialityRequirement(Metric):
    NOT_DEFINED = (0, "ND", 1.0)
    LOW = (1, "L", 0.5)
    MEDIUM = (2, "M", 1.0)
    HIGH = (3, "H", 1.51)


class IntegrityRequirement(Metric):
    NOT_DEFINED = (0, "ND", 1.0)
    LOW = (1, "L", 0.5)
    MEDIUM = (2, "M", 1.0)
    HIGH = (3, "H", 1.51)


class AvailabilityRequirement(Metric):
    NOT_DEFINED = (0, "ND", 1.0)
    LOW = (1, "L", 0.5)
    MEDIUM = (2, "M", 1.0)
    HIGH = (3, "H", 1.51)


_LABELS: dict[type, str] = {
    AccessVector: "access vector code",
    AccessComplexity: "access complexity code",
    Authentication: "authentication code",
    ConfidentialityImpact: "confidentiality impact",
    IntegrityImpact: "integrity impact code",
    AvailabilityImpact: "availability impact code",
    Exploitability: "exploitability code",
    RemediationLevel: "remediation level code",
    ReportConfidence: "report confidence code",
    CollateralDamagePotential: "collateral damage potential code",
    TargetDistribution: "target distribution code",
    ConfidentialityRequirement: "confidentiality requirement code",
    IntegrityRequirement: "integrity requirement code",
    AvailabilityRequirement: "availability requirement code",
}