"""CVSS v3 environmental metric values: requirements and modified base metrics."""

from __future__ import annotations

from nvdscore.cvss3.metrics import (
    AttackComplexity,
    AttackVector,
    Availability,
    Confidentiality,
    Integrity,
    Metric,
    MetricError,
    PrivilegesRequired,
    Scope,
    UserInteraction,
)

__all__ = [
    "MetricError",
    "ConfidentialityRequirement",
    "IntegrityRequirement",
    "AvailabilityRequirement",
    "ModifiedAttackVector",
    "ModifiedAttackComplexity",
    "ModifiedPrivilegesRequired",
    "ModifiedUserInteraction",
    "ModifiedScope",
    "ModifiedConfidentiality",
    "ModifiedIntegrity",
    "ModifiedAvailability",
]

_NOT_DEFINED_CODE = "X"


class _Requirement(Metric):
    """Security requirement of the affected asset."""

    @classmethod
    def _describe(cls) -> str:
        return _REQUIREMENT_LABELS.get(cls, "metric code")


class ConfidentialityRequirement(_Requirement):
    NOT_DEFINED = (0, "X", 1.0)
    HIGH = (1, "H", 1.5)
    MEDIUM = (2, "M", 1.0)
    LOW = (3, "L", 0.5)


class IntegrityRequirement(_Requirement):
    NOT_DEFINED = (0, "X", 1.0)
    HIGH = (1, "H", 1.5)
    MEDIUM = (2, "M", 1.0)
    LOW = (3, "L", 0.5)


class AvailabilityRequirement(_Requirement):
    NOT_DEFINED = (0, "X", 1.0)
    HIGH = (1, "H", 1.5)
    MEDIUM = (2, "M", 1.0)
    LOW = (3, "L", 0.5)


_REQUIREMENT_LABELS: dict[type, str] = {
    ConfidentialityRequirement: "confidentiality requirement code",
    IntegrityRequirement: "integrity requirement code",
    AvailabilityRequirement: "availability requirement code",
}


class _Modified(Metric):
    """A base metric overridden in the environmental group.

    Values mirror the base metric; "X" means not defined, with weight 1.0.
    """

    @classmethod
    def _base(cls) -> type[Metric]:
        return _BASES[cls]

    @classmethod
    def parse(cls, code: str) -> "Metric":
        """Return the member for ``code``; "X" means not defined."""
        if code == _NOT_DEFINED_CODE:
            return cls(0)
        return cls(cls._base().parse(code).value)

    def weight(self) -> float:
        if not self.defined():
            return 1.0
        return self._base()(self.value).weight()


class ModifiedAttackVector(_Modified):
    NOT_DEFINED = (0, "X", None)
    NETWORK = (1, "N", None)
    ADJACENT = (2, "A", None)
    LOCAL = (3, "L", None)
    PHYSICAL = (4, "P", None)


class ModifiedAttackComplexity(_Modified):
    NOT_DEFINED = (0, "X", None)
    LOW = (1, "L", None)
    HIGH = (2, "H", None)


class ModifiedPrivilegesRequired(_Modified):
    NOT_DEFINED = (0, "X", None)
    NONE = (1, "N", None)
    LOW = (2, "L", None)
    HIGH = (3, "H", None)

    def weight_for(self, scope_changed: bool) -> float:
        """The weight of this value given whether the scope changed."""
        if not self.defined():
            return 1.0
        return PrivilegesRequired(self.value).weight_for(scope_changed)

    def weight(self) -> float:
        """The weight of this value when the scope is unchanged."""
        return self.weight_for(False)


class ModifiedUserInteraction(_Modified):
    NOT_DEFINED = (0, "X", None)
    NONE = (1, "N", None)
    REQUIRED = (2, "R", None)


class ModifiedScope(_Modified):
    """Modified scope carries no weight; it switches the score formulas."""

    NOT_DEFINED = (0, "X", None)
    UNCHANGED = (1, "U", None)
    CHANGED = (2, "C", None)

    def weight(self) -> float:
        raise TypeError("scope has no weight")


class ModifiedConfidentiality(_Modified):
    NOT_DEFINED = (0, "X", None)
    HIGH = (1, "H", None)
    LOW = (2, "L", None)
    NONE = (3, "N", None)


class ModifiedIntegrity(_Modified):
    NOT_DEFINED = (0, "X", None)
    HIGH = (1, "H", None)
    LOW = (2, "L", None)
    NONE = (3, "N", None)


class ModifiedAvailability(_Modified):
    NOT_DEFINED = (0, "X", None)
    HIGH = (1, "H", None)
    LOW = (2, "L", None)
    NONE = (3, "N", None)


_BASES: dict[type, type[Metric]] = {
    ModifiedAttackVector: AttackVector,
    ModifiedAttackComplexity: AttackComplexity,
    ModifiedPrivilegesRequired: PrivilegesRequired,
    ModifiedUserInteraction: UserInteraction,
    ModifiedScope: Scope,
    ModifiedConfidentiality: Confidentiality,
    ModifiedIntegrity: Integrity,
    ModifiedAvailability: Availability,
}