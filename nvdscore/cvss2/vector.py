"""CVSS v2 vectors: parsing, formatting and score calculation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from nvdscore.cvss2.metrics import (
    AccessComplexity,
    AccessVector,
    Authentication,
    AvailabilityImpact,
    AvailabilityRequirement,
    CollateralDamagePotential,
    ConfidentialityImpact,
    ConfidentialityRequirement,
    Exploitability,
    IntegrityImpact,
    IntegrityRequirement,
    Metric,
    MetricError,
    RemediationLevel,
    ReportConfidence,
    TargetDistribution,
)

_PREFIX = "("
_SUFFIX = ")"
_PART_SEPARATOR = "/"
_METRIC_SEPARATOR = ":"

# Vector code -> (attribute name, metric class), in the canonical output order.
_METRICS: dict[str, tuple[str, type[Metric]]] = {
    "AV": ("access_vector", AccessVector),
    "AC": ("access_complexity", AccessComplexity),
    "Au": ("authentication", Authentication),
    "C": ("confidentiality_impact", ConfidentialityImpact),
    "I": ("integrity_impact", IntegrityImpact),
    "A": ("availability_impact", AvailabilityImpact),
    "E": ("exploitability", Exploitability),
    "RL": ("remediation_level", RemediationLevel),
    "RC": ("report_confidence", ReportConfidence),
    "CDP": ("collateral_damage_potential", CollateralDamagePotential),
    "TD": ("target_distribution", TargetDistribution),
    "CR": ("confidentiality_requirement", ConfidentialityRequirement),
    "IR": ("integrity_requirement", IntegrityRequirement),
    "AR": ("availability_requirement", AvailabilityRequirement),
}

_REQUIRED = (
    ("access_vector", "access vector"),
    ("access_complexity", "access complexity"),
    ("authentication", "authentication"),
    ("confidentiality_impact", "confidentiality impact"),
    ("integrity_impact", "integrity impact"),
    ("availability_impact", "availability impact"),
)


def round_to_1_decimal(x: float) -> float:
    """Round to one decimal place, halves away from zero."""
    scaled = x * 10
    whole = math.trunc(scaled)
    if abs(scaled - whole) >= 0.5:
        whole += math.copysign(1, scaled)
    return whole / 10


@dataclass
class Vector:
    """A CVSS v2 vector holding base, temporal and environmental metrics."""

    access_vector: AccessVector = AccessVector.NOT_DEFINED
    access_complexity: AccessComplexity = AccessComplexity.NOT_DEFINED
    authentication: Authentication = Authentication.NOT_DEFINED
    confidentiality_impact: ConfidentialityImpact = ConfidentialityImpact.NOT_DEFINED
    integrity_impact: IntegrityImpact = IntegrityImpact.NOT_DEFINED
    availability_impact: AvailabilityImpact = AvailabilityImpact.NOT_DEFINED
    exploitability: Exploitability = Exploitability.NOT_DEFINED
    remediation_level: RemediationLevel = RemediationLevel.NOT_DEFINED
    report_confidence: ReportConfidence = ReportConfidence.NOT_DEFINED
    collateral_damage_potential: CollateralDamagePotential = field(
        default=CollateralDamagePotential.NOT_DEFINED
    )
    target_distribution: TargetDistribution = TargetDistribution.NOT_DEFINED
    confidentiality_requirement: ConfidentialityRequirement = field(
        default=ConfidentialityRequirement.NOT_DEFINED
    )
    integrity_requirement: IntegrityRequirement = IntegrityRequirement.NOT_DEFINED
    availability_requirement: AvailabilityRequirement = field(
        default=AvailabilityRequirement.NOT_DEFINED
    )

    @classmethod
    def from_string(cls, text: str) -> "Vector":
        """Parse a vector such as ``(AV:N/AC:L/Au:N/C:P/I:N/A:N)``."""
        if text.startswith(_PREFIX):
            text = text[len(_PREFIX):]
        if text.endswith(_SUFFIX):
            text = text[: -len(_SUFFIX)]
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
        return _PREFIX + _PART_SEPARATOR.join(parts) + _SUFFIX

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
        return self._base_score_with(self._impact_score(adjust=False))

    def temporal_score(self) -> float:
        return self._temporal_score_with(self._impact_score(adjust=False))

    def environmental_score(self) -> float:
        adjusted_impact = min(10.0, self._impact_score(adjust=True))
        adjusted_temporal = self._temporal_score_with(adjusted_impact)
        return round_to_1_decimal(
            (
                adjusted_temporal
                + (10 - adjusted_temporal) * self.collateral_damage_potential.weight()
            )
            * self.target_distribution.weight()
        )

    def _impact_score(self, adjust: bool) -> float:
        c = self.confidentiality_impact.weight()
        i = self.integrity_impact.weight()
        a = self.availability_impact.weight()
        if adjust:
            c *= self.confidentiality_requirement.weight()
            i *= self.integrity_requirement.weight()
            a *= self.availability_requirement.weight()
        return 10.41 * (1 - (1 - c) * (1 - i) * (1 - a))

    def _temporal_score_with(self, impact: float) -> float:
        return round_to_1_decimal(
            self._base_score_with(impact)
            * self.exploitability.weight()
            * self.remediation_level.weight()
            * self.report_confidence.weight()
        )

    def _base_score_with(self, impact: float) -> float:
        if impact == 0.0:
            return 0.0
        exploitability = (
            20
            * self.access_vector.weight()
            * self.access_complexity.weight()
            * self.authentication.weight()
        )
        return round_to_1_decimal((0.6 * impact + 0.4 * exploitability - 1.5) * 1.176)