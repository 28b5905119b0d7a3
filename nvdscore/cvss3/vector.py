"""CVSS v3 vectors: parsing, formatting and score calculation."""

from __future__ import annotations

import math
from dataclasses import dataclass

from nvdscore.cvss3.environmental import (
    AvailabilityRequirement,
    ConfidentialityRequirement,
    IntegrityRequirement,
    ModifiedAttackComplexity,
    ModifiedAttackVector,
    ModifiedAvailability,
    ModifiedConfidentiality,
    ModifiedIntegrity,
    ModifiedPrivilegesRequired,
    ModifiedScope,
    ModifiedUserInteraction,
)
from nvdscore.cvss3.metrics import (
    AttackComplexity,
    AttackVector,
    Availability,
    Confidentiality,
    ExploitCodeMaturity,
    Integrity,
    Metric,
    MetricError,
    PrivilegesRequired,
    RemediationLevel,
    ReportConfidence,
    Scope,
    UserInteraction,
)

_PREFIX = "CVSS:3.0/"
_PART_SEPARATOR = "/"
_METRIC_SEPARATOR = ":"

# Vector code -> (attribute name, metric class), in the canonical output order.
_METRICS: dict[str, tuple[str, type[Metric]]] = {
    "AV": ("attack_vector", AttackVector),
    "AC": ("attack_complexity", AttackComplexity),
    "PR": ("privileges_required", PrivilegesRequired),
    "UI": ("user_interaction", UserInteraction),
    "S": ("scope", Scope),
    "C": ("confidentiality", Confidentiality),
    "I": ("integrity", Integrity),
    "A": ("availability", Availability),
    "E": ("exploit_code_maturity", ExploitCodeMaturity),
    "RL": ("remediation_level", RemediationLevel),
    "RC": ("report_confidence", ReportConfidence),
    "CR": ("confidentiality_requirement", ConfidentialityRequirement),
    "IR": ("integrity_requirement", IntegrityRequirement),
    "AR": ("availability_requirement", AvailabilityRequirement),
    "MAV": ("modified_attack_vector", ModifiedAttackVector),
    "MAC": ("modified_attack_complexity", ModifiedAttackComplexity),
    "MPR": ("modified_privileges_required", ModifiedPrivilegesRequired),
    "MUI": ("modified_user_interaction", ModifiedUserInteraction),
    "MS": ("modified_scope", ModifiedScope),
    "MC": ("modified_confidentiality", ModifiedConfidentiality),
    "MI": ("modified_integrity", ModifiedIntegrity),
    "MA": ("modified_availability", ModifiedAvailability),
}

_REQUIRED = (
    ("attack_vector", "attack vector"),
    ("attack_complexity", "attack complexity"),
    ("privileges_required", "privileges required"),
    ("user_interaction", "user interaction"),
    ("scope", "scope"),
    ("confidentiality", "confidentiality"),
    ("integrity", "integrity"),
    ("availability", "availability"),
)


def round_up(x: float) -> float:
    """Round up to one decimal place."""
    return math.ceil(x * 10) / 10


def _pow(x: float, n: int) -> float:
    """Raise ``x`` to a non-negative integer power by squaring its mantissa.

    This keeps the exact rounding behaviour the reference scores were computed with.
    """
    a1, ae = 1.0, 0
    x1, xe = math.frexp(x)
    i = n
    while i:
        if xe < -(1 << 12) or (1 << 12) < xe:
            ae += xe
            break
        if i & 1:
            a1 *= x1
            ae += xe
        x1 *= x1
        xe <<= 1
        if x1 < 0.5:
            x1 += x1
            xe -= 1
        i >>= 1
    return math.ldexp(a1, ae)


def _impact(isc: float, scope_changed: bool) -> float:
    if scope_changed:
        return 7.52 * (isc - 0.029) - 3.25 * _pow(isc - 0.02, 15)
    return 6.42 * isc


@dataclass
class Vector:
    """A CVSS v3 vector holding base, temporal and environmental metrics."""

    attack_vector: AttackVector = AttackVector.NOT_DEFINED
    attack_complexity: AttackComplexity = AttackComplexity.NOT_DEFINED
    privileges_required: PrivilegesRequired = PrivilegesRequired.NOT_DEFINED
    user_interaction: UserInteraction = UserInteraction.NOT_DEFINED
    scope: Scope = Scope.NOT_DEFINED
    confidentiality: Confidentiality = Confidentiality.NOT_DEFINED
    integrity: Integrity = Integrity.NOT_DEFINED
    availability: Availability = Availability.NOT_DEFINED
    exploit_code_maturity: ExploitCodeMaturity = ExploitCodeMaturity.NOT_DEFINED
    remediation_level: RemediationLevel = RemediationLevel.NOT_DEFINED
    report_confidence: ReportConfidence = ReportConfidence.NOT_DEFINED
    confidentiality_requirement: ConfidentialityRequirement = (
        ConfidentialityRequirement.NOT_DEFINED
    )
    integrity_requirement: IntegrityRequirement = IntegrityRequirement.NOT_DEFINED
    availability_requirement: AvailabilityRequirement = (
        AvailabilityRequirement.NOT_DEFINED
    )
    modified_attack_vector: ModifiedAttackVector = ModifiedAttackVector.NOT_DEFINED
    modified_attack_complexity: ModifiedAttackComplexity = (
        ModifiedAttackComplexity.NOT_DEFINED
    )
    modified_privileges_required: ModifiedPrivilegesRequired = (
        ModifiedPrivilegesRequired.NOT_DEFINED
    )
    modified_user_interaction: ModifiedUserInteraction = (
        ModifiedUserInteraction.NOT_DEFINED
    )
    modified_scope: ModifiedScope = ModifiedScope.NOT_DEFINED
    modified_confidentiality: ModifiedConfidentiality = (
        ModifiedConfidentiality.NOT_DEFINED
    )
    modified_integrity: ModifiedIntegrity = ModifiedIntegrity.NOT_DEFINED
    modified_availability: ModifiedAvailability = ModifiedAvailability.NOT_DEFINED

    @classmethod
    def from_string(cls, text: str) -> "Vector":
        """Parse a vector such as ``CVSS:3.0/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H``.

        The text is case-insensitive and the ``CVSS:3.0/`` prefix is optional.
        """
        text = text.upper().removeprefix(_PREFIX)
        vector = cls()
        for part in text.split(_PART_SEPARATOR):
            pieces = part.split(_METRIC_SEPARATOR)
            if len(pieces) != 2:
                raise MetricError(
                    f"need two values separated by {_METRIC_SEPARATOR}, got {part!r}"
                )
            metric, value = pieces
            try:
                attribute, kind = _METRICS[metric]
            except KeyError:
                raise MetricError(
                    f"undefined metric {metric} with value {value}"
                ) from None
            try:
                setattr(vector, attribute, kind.parse(value))
            except MetricError as exc:
                raise MetricError(
                    f"error occurred while parsing metric {metric}: {exc}"
                ) from exc
        return vector

    def __str__(self) -> str:
        parts = (
            f"{code}{_METRIC_SEPARATOR}{getattr(self, attribute)}"
            for code, (attribute, _) in _METRICS.items()
            if getattr(self, attribute).defined()
        )
        return _PREFIX + _PART_SEPARATOR.join(parts)

    def absorb(self, other: "Vector") -> None:
        """Take over every metric that is defined in ``other``."""
        for attribute, _ in _METRICS.values():
            value = getattr(other, attribute)
            if value.defined():
                setattr(self, attribute, value)

    def validate(self) -> None:
        """Raise MetricError unless all base metrics are defined."""
        for attribute, label in _REQUIRED:
            if not getattr(self, attribute).defined():
                raise MetricError(f"base metric {label} not defined")

    def score(self) -> float:
        """The combined score of the whole vector."""
        return self.environmental_score()

    def base_score(self) -> float:
        impact = self._impact_score()
        exploitability = self._exploitability_score()
        if impact < 0:
            return 0.0
        factor = 1.08 if self._base_scope_changed() else 1.0
        return round_up(min(factor * (exploitability + impact), 10.0))

    def temporal_score(self) -> float:
        return round_up(self.base_score() * self._temporal_weight())

    def environmental_score(self) -> float:
        impact = self._modified_impact_score()
        exploitability = self._modified_exploitability_score()
        if impact < 0:
            return 0.0
        factor = 1.08 if self._modified_scope_changed() else 1.0
        return round_up(
            round_up(min(factor * (exploitability + impact), 10.0))
            * self._temporal_weight()
        )

    def _temporal_weight(self) -> float:
        return (
            self.exploit_code_maturity.weight()
            * self.remediation_level.weight()
            * self.report_confidence.weight()
        )

    def _impact_score(self) -> float:
        isc = 1 - (
            (1 - self.confidentiality.weight())
            * (1 - self.integrity.weight())
            * (1 - self.availability.weight())
        )
        return _impact(isc, self._base_scope_changed())

    def _exploitability_score(self) -> float:
        return (
            8.22
            * self.attack_vector.weight()
            * self.attack_complexity.weight()
            * self.privileges_required.weight_for(self._base_scope_changed())
            * self.user_interaction.weight()
        )

    @staticmethod
    def _pick(modified: Metric, base: Metric) -> float:
        return modified.weight() if modified.defined() else base.weight()

    def _modified_impact_score(self) -> float:
        mc = self._pick(self.modified_confidentiality, self.confidentiality)
        mi = self._pick(self.modified_integrity, self.integrity)
        ma = self._pick(self.modified_availability, self.availability)
        isc = min(
            1
            - (1 - mc * self.confidentiality_requirement.weight())
            * (1 - mi * self.integrity_requirement.weight())
            * (1 - ma * self.availability_requirement.weight()),
            0.915,
        )
        return _impact(isc, self._modified_scope_changed())

    def _modified_exploitability_score(self) -> float:
        changed = self._modified_scope_changed()
        mav = self._pick(self.modified_attack_vector, self.attack_vector)
        mac = self._pick(self.modified_attack_complexity, self.attack_complexity)
        if self.modified_privileges_required.defined():
            mpr = self.modified_privileges_required.weight_for(changed)
        else:
            mpr = self.privileges_required.weight_for(changed)
        mui = self._pick(self.modified_user_interaction, self.user_interaction)
        return 8.22 * mav * mac * mpr * mui

    def _base_scope_changed(self) -> bool:
        return self.scope is Scope.CHANGED

    def _modified_scope_changed(self) -> bool:
        if self.modified_scope.defined():
            return self.modified_scope is ModifiedScope.CHANGED
        return self._base_scope_changed()