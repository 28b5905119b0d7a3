"""Data model of the NVD CVE JSON 1.0 feed."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, TypeVar

# strptime format of the timestamps the feed carries, e.g. "2018-07-31T07:00Z".
TIME_FORMAT = "%Y-%m-%dT%H:%MZ"

_T = TypeVar("_T")


def _expect_mapping(data: Any, cls: type) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{cls.__name__}: expected an object, got {type(data).__name__}")
    return data


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r}: expected a string, got {type(value).__name__}")
    return value


def _float(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r}: expected a number, got {type(value).__name__}")
    return float(value)


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {key!r}: expected a boolean, got {type(value).__name__}")
    return value


def _strings(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(s, str) for s in value):
        raise ValueError(f"field {key!r}: expected a list of strings")
    return list(value)


def _optional(cls: Any, data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    return None if value is None else cls.from_dict(value)


def _list(cls: Any, data: Mapping[str, Any], key: str) -> list:
    """Decode a list of objects, leaving out null entries."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"field {key!r}: expected a list, got {type(value).__name__}")
    return [cls.from_dict(entry) for entry in value if entry is not None]


def _nested_list(cls: Any, data: Mapping[str, Any], outer: str, inner: str) -> list:
    """Decode ``data[outer][inner]``, a list wrapped in a single-field object."""
    value = data.get(outer)
    if value is None:
        return []
    if not isinstance(value, Mapping):
        raise ValueError(f"field {outer!r}: expected an object, got {type(value).__name__}")
    return _list(cls, value, inner)


@dataclass
class CPEName:
    """A CPE name in both URI bindings."""

    cpe22_uri: str = ""
    cpe23_uri: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "CPEName":
        data = _expect_mapping(data, cls)
        return cls(cpe22_uri=_str(data, "cpe22Uri"), cpe23_uri=_str(data, "cpe23Uri"))


@dataclass
class CPEMatch:
    """A CPE match string, optionally bounded by a version range."""

    cpe_name: list[CPEName] = field(default_factory=list)
    cpe22_uri: str = ""
    cpe23_uri: str = ""
    version_end_excluding: str = ""
    version_end_including: str = ""
    version_start_excluding: str = ""
    version_start_including: str = ""
    vulnerable: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "CPEMatch":
        data = _expect_mapping(data, cls)
        return cls(
            cpe_name=_list(CPEName, data, "cpe_name"),
            cpe22_uri=_str(data, "cpe22Uri"),
            cpe23_uri=_str(data, "cpe23Uri"),
            version_end_excluding=_str(data, "versionEndExcluding"),
            version_end_including=_str(data, "versionEndIncluding"),
            version_start_excluding=_str(data, "versionStartExcluding"),
            version_start_including=_str(data, "versionStartIncluding"),
            vulnerable=_bool(data, "vulnerable"),
        )


@dataclass
class Node:
    """A node of an applicability statement: CPE matches and child nodes."""

    cpe_match: list[CPEMatch] = field(default_factory=list)
    children: list["Node"] = field(default_factory=list)
    negate: bool = False
    operator: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Node":
        data = _expect_mapping(data, cls)
        return cls(
            cpe_match=_list(CPEMatch, data, "cpe_match"),
            children=_list(Node, data, "children"),
            negate=_bool(data, "negate"),
            operator=_str(data, "operator"),
        )


@dataclass
class Configurations:
    """The product configurations a vulnerability applies to."""

    cve_data_version: str = ""
    nodes: list[Node] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Configurations":
        data = _expect_mapping(data, cls)
        return cls(
            cve_data_version=_str(data, "CVE_data_version"),
            nodes=_list(Node, data, "nodes"),
        )


@dataclass
class CVEDataMeta:
    """Identification of a CVE record."""

    assigner: str = ""
    id: str = ""
    state: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "CVEDataMeta":
        data = _expect_mapping(data, cls)
        return cls(
            assigner=_str(data, "ASSIGNER"),
            id=_str(data, "ID"),
            state=_str(data, "STATE"),
        )


@dataclass
class VersionData:
    """An affected product version."""

    version_affected: str = ""
    version_value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "VersionData":
        data = _expect_mapping(data, cls)
        return cls(
            version_affected=_str(data, "version_affected"),
            version_value=_str(data, "version_value"),
        )


@dataclass
class Product:
    """An affected product and its versions."""

    product_name: str = ""
    versions: list[VersionData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Product":
        data = _expect_mapping(data, cls)
        return cls(
            product_name=_str(data, "product_name"),
            versions=_nested_list(VersionData, data, "version", "version_data"),
        )


@dataclass
class VendorData:
    """A vendor and its affected products."""

    vendor_name: str = ""
    products: list[Product] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "VendorData":
        data = _expect_mapping(data, cls)
        return cls(
            vendor_name=_str(data, "vendor_name"),
            products=_nested_list(Product, data, "product", "product_data"),
        )


@dataclass
class Affects:
    """Vendors whose products a CVE affects."""

    vendors: list[VendorData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Affects":
        data = _expect_mapping(data, cls)
        return cls(vendors=_nested_list(VendorData, data, "vendor", "vendor_data"))


@dataclass
class LangString:
    """A text with its language tag."""

    lang: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "LangString":
        data = _expect_mapping(data, cls)
        return cls(lang=_str(data, "lang"), value=_str(data, "value"))


@dataclass
class ProblemtypeData:
    """A problem type, described as CWE identifiers."""

    description: list[LangString] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ProblemtypeData":
        data = _expect_mapping(data, cls)
        return cls(description=_list(LangString, data, "description"))


@dataclass
class Reference:
    """A reference to further information about a CVE."""

    name: str = ""
    refsource: str = ""
    tags: list[str] = field(default_factory=list)
    url: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Reference":
        data = _expect_mapping(data, cls)
        return cls(
            name=_str(data, "name"),
            refsource=_str(data, "refsource"),
            tags=_strings(data, "tags"),
            url=_str(data, "url"),
        )


@dataclass
class CVE:
    """A CVE record in the CVE JSON 4.0 format."""

    affects: Optional[Affects] = None
    data_meta: Optional[CVEDataMeta] = None
    data_format: str = ""
    data_type: str = ""
    data_version: str = ""
    description: list[LangString] = field(default_factory=list)
    problemtype: list[ProblemtypeData] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "CVE":
        data = _expect_mapping(data, cls)
        return cls(
            affects=_optional(Affects, data, "affects"),
            data_meta=_optional(CVEDataMeta, data, "CVE_data_meta"),
            data_format=_str(data, "data_format"),
            data_type=_str(data, "data_type"),
            data_version=_str(data, "data_version"),
            description=_nested_list(LangString, data, "description", "description_data"),
            problemtype=_nested_list(
                ProblemtypeData, data, "problemtype", "problemtype_data"
            ),
            references=_nested_list(Reference, data, "references", "reference_data"),
        )


_CVSSV2_STRINGS = {
    "access_complexity": "accessComplexity",
    "access_vector": "accessVector",
    "authentication": "authentication",
    "availability_impact": "availabilityImpact",
    "availability_requirement": "availabilityRequirement",
    "collateral_damage_potential": "collateralDamagePotential",
    "confidentiality_impact": "confidentialityImpact",
    "confidentiality_requirement": "confidentialityRequirement",
    "exploitability": "exploitability",
    "integrity_impact": "integrityImpact",
    "integrity_requirement": "integrityRequirement",
    "remediation_level": "remediationLevel",
    "report_confidence": "reportConfidence",
    "target_distribution": "targetDistribution",
    "vector_string": "vectorString",
    "version": "version",
}


@dataclass
class CVSSV2:
    """CVSS v2.0 metrics and scores."""

    access_complexity: str = ""
    access_vector: str = ""
    authentication: str = ""
    availability_impact: str = ""
    availability_requirement: str = ""
    base_score: float = 0.0
    collateral_damage_potential: str = ""
    confidentiality_impact: str = ""
    confidentiality_requirement: str = ""
    environmental_score: float = 0.0
    exploitability: str = ""
    integrity_impact: str = ""
    integrity_requirement: str = ""
    remediation_level: str = ""
    report_confidence: str = ""
    target_distribution: str = ""
    temporal_score: float = 0.0
    vector_string: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "CVSSV2":
        data = _expect_mapping(data, cls)
        return cls(
            base_score=_float(data, "baseScore"),
            environmental_score=_float(data, "environmentalScore"),
            temporal_score=_float(data, "temporalScore"),
            **{attr: _str(data, key) for attr, key in _CVSSV2_STRINGS.items()},
        )


@dataclass
class BaseMetricV2:
    """NVD's CVSS v2.0 assessment of a vulnerability."""

    ac_insuf_info: bool = False
    cvss_v2: Optional[CVSSV2] = None
    exploitability_score: float = 0.0
    impact_score: float = 0.0
    obtain_all_privilege: bool = False
    obtain_other_privilege: bool = False
    obtain_user_privilege: bool = False
    severity: str = ""
    user_interaction_required: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "BaseMetricV2":
        data = _expect_mapping(data, cls)
        return cls(
            ac_insuf_info=_bool(data, "acInsufInfo"),
            cvss_v2=_optional(CVSSV2, data, "cvssV2"),
            exploitability_score=_float(data, "exploitabilityScore"),
            impact_score=_float(data, "impactScore"),
            obtain_all_privilege=_bool(data, "obtainAllPrivilege"),
            obtain_other_privilege=_bool(data, "obtainOtherPrivilege"),
            obtain_user_privilege=_bool(data, "obtainUserPrivilege"),
            severity=_str(data, "severity"),
            user_interaction_required=_bool(data, "userInteractionRequired"),
        )


_CVSSV3_STRINGS = {
    "attack_complexity": "attackComplexity",
    "attack_vector": "attackVector",
    "availability_impact": "availabilityImpact",
    "availability_requirement": "availabilityRequirement",
    "base_severity": "baseSeverity",
    "confidentiality_impact": "confidentialityImpact",
    "confidentiality_requirement": "confidentialityRequirement",
    "environmental_severity": "environmentalSeverity",
    "exploit_code_maturity": "exploitCodeMaturity",
    "integrity_impact": "integrityImpact",
    "integrity_requirement": "integrityRequirement",
    "modified_attack_complexity": "modifiedAttackComplexity",
    "modified_attack_vector": "modifiedAttackVector",
    "modified_availability_impact": "modifiedAvailabilityImpact",
    "modified_confidentiality_impact": "modifiedConfidentialityImpact",
    "modified_integrity_impact": "modifiedIntegrityImpact",
    "modified_privileges_required": "modifiedPrivilegesRequired",
    "modified_scope": "modifiedScope",
    "modified_user_interaction": "modifiedUserInteraction",
    "privileges_required": "privilegesRequired",
    "remediation_level": "remediationLevel",
    "report_confidence": "reportConfidence",
    "scope": "scope",
    "temporal_severity": "temporalSeverity",
    "user_interaction": "userInteraction",
    "vector_string": "vectorString",
    "version": "version",
}


@dataclass
class CVSSV3:
    """CVSS v3.0 metrics and scores."""

    attack_complexity: str = ""
    attack_vector: str = ""
    availability_impact: str = ""
    availability_requirement: str = ""
    base_score: float = 0.0
    base_severity: str = ""
    confidentiality_impact: str = ""
    confidentiality_requirement: str = ""
    environmental_score: float = 0.0
    environmental_severity: str = ""
    exploit_code_maturity: str = ""
    integrity_impact: str = ""
    integrity_requirement: str = ""
    modified_attack_complexity: str = ""
    modified_attack_vector: str = ""
    modified_availability_impact: str = ""
    modified_confidentiality_impact: str = ""
    modified_integrity_impact: str = ""
    modified_privileges_required: str = ""
    modified_scope: str = ""
    modified_user_interaction: str = ""
    privileges_required: str = ""
    remediation_level: str = ""
    report_confidence: str = ""
    scope: str = ""
    temporal_score: float = 0.0
    temporal_severity: str = ""
    user_interaction: str = ""
    vector_string: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "CVSSV3":
        data = _expect_mapping(data, cls)
        return cls(
            base_score=_float(data, "baseScore"),
            environmental_score=_float(data, "environmentalScore"),
            temporal_score=_float(data, "temporalScore"),
            **{attr: _str(data, key) for attr, key in _CVSSV3_STRINGS.items()},
        )


@dataclass
class BaseMetricV3:
    """NVD's CVSS v3.0 assessment of a vulnerability."""

    cvss_v3: Optional[CVSSV3] = None
    exploitability_score: float = 0.0
    impact_score: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> "BaseMetricV3":
        data = _expect_mapping(data, cls)
        return cls(
            cvss_v3=_optional(CVSSV3, data, "cvssV3"),
            exploitability_score=_float(data, "exploitabilityScore"),
            impact_score=_float(data, "impactScore"),
        )


@dataclass
class Impact:
    """Impact scores of a vulnerability."""

    base_metric_v2: Optional[BaseMetricV2] = None
    base_metric_v3: Optional[BaseMetricV3] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Impact":
        data = _expect_mapping(data, cls)
        return cls(
            base_metric_v2=_optional(BaseMetricV2, data, "baseMetricV2"),
            base_metric_v3=_optional(BaseMetricV3, data, "baseMetricV3"),
        )


@dataclass
class CVEItem:
    """A vulnerability entry of the feed."""

    cve: Optional[CVE] = None
    configurations: Optional[Configurations] = None
    impact: Optional[Impact] = None
    last_modified_date: str = ""
    published_date: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "CVEItem":
        data = _expect_mapping(data, cls)
        return cls(
            cve=_optional(CVE, data, "cve"),
            configurations=_optional(Configurations, data, "configurations"),
            impact=_optional(Impact, data, "impact"),
            last_modified_date=_str(data, "lastModifiedDate"),
            published_date=_str(data, "publishedDate"),
        )

    def id(self) -> str:
        """The CVE identifier, or an empty string when the record has none."""
        if self.cve is None or self.cve.data_meta is None:
            return ""
        return self.cve.data_meta.id


@dataclass
class Feed:
    """A whole NVD CVE JSON 1.0 feed."""

    cve_data_format: str = ""
    cve_data_number_of_cves: str = ""
    cve_data_timestamp: str = ""
    cve_data_type: str = ""
    cve_data_version: str = ""
    items: list[CVEItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Feed":
        data = _expect_mapping(data, cls)
        return cls(
            cve_data_format=_str(data, "CVE_data_format"),
            cve_data_number_of_cves=_str(data, "CVE_data_numberOfCVEs"),
            cve_data_timestamp=_str(data, "CVE_data_timestamp"),
            cve_data_type=_str(data, "CVE_data_type"),
            cve_data_version=_str(data, "CVE_data_version"),
            items=_list(CVEItem, data, "CVE_Items"),
        )