from datetime import datetime

import pytest

from nvdscore.feed.schema import (
    CVE,
    CPEMatch,
    CPEName,
    CVEDataMeta,
    CVEItem,
    Configurations,
    Feed,
    Impact,
    LangString,
    Node,
    ProblemtypeData,
    Product,
    Reference,
    Affects,
    VendorData,
    VersionData,
    BaseMetricV2,
    BaseMetricV3,
    CVSSV2,
    CVSSV3,
    TIME_FORMAT,
)


def test_cpe_name_fields():
    name = CPEName.from_dict({"cpe22Uri": "cpe:/a:x:y", "cpe23Uri": "cpe:2.3:a:x:y:*:*:*:*:*:*:*:*"})
    assert name == CPEName("cpe:/a:x:y", "cpe:2.3:a:x:y:*:*:*:*:*:*:*:*")


def test_cpe_match_version_ranges():
    match = CPEMatch.from_dict(
        {
            "cpe23Uri": "cpe:2.3:a:microsoft:ie:*:*:*:*:*:*:*:*",
            "versionStartIncluding": "4.0",
            "versionEndExcluding": "6.0",
            "vulnerable": True,
            "cpe_name": [{"cpe23Uri": "cpe:2.3:a:microsoft:ie:5.0:*:*:*:*:*:*:*"}, None],
        }
    )
    assert match.version_start_including == "4.0"
    assert match.version_end_excluding == "6.0"
    assert match.version_end_including == ""
    assert match.vulnerable is True
    assert [n.cpe23_uri for n in match.cpe_name] == ["cpe:2.3:a:microsoft:ie:5.0:*:*:*:*:*:*:*"]


def test_cpe_match_defaults_from_empty_object():
    assert CPEMatch.from_dict({}) == CPEMatch()


def test_node_nested_children():
    node = Node.from_dict(
        {
            "operator": "AND",
            "negate": True,
            "children": [
                {"operator": "OR", "cpe_match": [{"cpe23Uri": "a", "vulnerable": True}]},
                {"operator": "OR", "cpe_match": [{"cpe23Uri": "b", "vulnerable": False}]},
            ],
        }
    )
    assert node.operator == "AND"
    assert node.negate is True
    assert [child.cpe_match[0].cpe23_uri for child in node.children] == ["a", "b"]
    assert node.cpe_match == []


def test_configurations_skip_null_nodes():
    conf = Configurations.from_dict(
        {"CVE_data_version": "4.0", "nodes": [None, {"operator": "OR"}]}
    )
    assert conf.cve_data_version == "4.0"
    assert [n.operator for n in conf.nodes] == ["OR"]


def test_cve_flattens_wrapped_lists():
    cve = CVE.from_dict(
        {
            "data_type": "CVE",
            "CVE_data_meta": {"ID": "CVE-2002-2436", "ASSIGNER": "cve@example.com"},
            "description": {"description_data": [{"lang": "en", "value": "text"}]},
            "problemtype": {
                "problemtype_data": [{"description": [{"lang": "en", "value": "CWE-79"}]}]
            },
            "references": {
                "reference_data": [
                    {"name": "ref", "url": "https://example.com/ref", "tags": ["Patch"]}
                ]
            },
        }
    )
    assert cve.data_meta == CVEDataMeta(assigner="cve@example.com", id="CVE-2002-2436")
    assert cve.description == [LangString("en", "text")]
    assert cve.problemtype == [ProblemtypeData([LangString("en", "CWE-79")])]
    assert cve.references == [Reference(name="ref", url="https://example.com/ref", tags=["Patch"])]
    assert cve.affects is None


def test_affects_flattens_vendors_and_products():
    affects = Affects.from_dict(
        {
            "vendor": {
                "vendor_data": [
                    {
                        "vendor_name": "mozilla",
                        "product": {
                            "product_data": [
                                {
                                    "product_name": "firefox",
                                    "version": {"version_data": [{"version_value": "3.6.24"}]},
                                }
                            ]
                        },
                    }
                ]
            }
        }
    )
    assert affects == Affects(
        [VendorData("mozilla", [Product("firefox", [VersionData(version_value="3.6.24")])])]
    )


def test_impact_scores():
    impact = Impact.from_dict(
        {
            "baseMetricV2": {
                "cvssV2": {"baseScore": 5, "vectorString": "AV:N/AC:L/Au:N/C:P/I:N/A:N"},
                "severity": "MEDIUM",
            },
            "baseMetricV3": {
                "cvssV3": {"baseScore": 9.8, "scope": "UNCHANGED"},
                "impactScore": 5.9,
            },
        }
    )
    assert impact.base_metric_v2.cvss_v2.base_score == 5.0
    assert impact.base_metric_v2.cvss_v2.vector_string == "AV:N/AC:L/Au:N/C:P/I:N/A:N"
    assert impact.base_metric_v2.severity == "MEDIUM"
    assert impact.base_metric_v3.cvss_v3.base_score == 9.8
    assert impact.base_metric_v3.cvss_v3.scope == "UNCHANGED"
    assert impact.base_metric_v3.impact_score == 5.9


def test_cvss_defaults_from_empty_objects():
    assert CVSSV2.from_dict({}) == CVSSV2()
    assert CVSSV3.from_dict({}) == CVSSV3()
    assert BaseMetricV2.from_dict({}).cvss_v2 is None
    assert BaseMetricV3.from_dict({}).cvss_v3 is None


def test_cve_item_id():
    item = CVEItem.from_dict({"cve": {"CVE_data_meta": {"ID": "TESTVE-2018-0001"}}})
    assert item.id() == "TESTVE-2018-0001"
    assert CVEItem.from_dict({}).id() == ""
    assert CVEItem.from_dict({"cve": None}).id() == ""
    assert CVEItem.from_dict({"cve": {}}).id() == ""


def test_feed_items():
    feed = Feed.from_dict(
        {
            "CVE_data_type": "CVE",
            "CVE_data_format": "MITRE",
            "CVE_data_version": "4.0",
            "CVE_data_numberOfCVEs": "7083",
            "CVE_data_timestamp": "2018-07-31T07:00Z",
            "CVE_Items": [{}, {"cve": None}],
        }
    )
    assert feed.cve_data_type == "CVE"
    assert feed.cve_data_number_of_cves == "7083"
    assert len(feed.items) == 2
    assert all(item.cve is None for item in feed.items)


def test_feed_timestamp_parses_with_time_format():
    feed = Feed.from_dict({"CVE_data_timestamp": "2018-07-31T07:00Z", "CVE_Items": []})
    stamp = datetime.strptime(feed.cve_data_timestamp, TIME_FORMAT)
    assert (stamp.year, stamp.month, stamp.day, stamp.hour, stamp.minute) == (2018, 7, 31, 7, 0)


@pytest.mark.parametrize("data", [[], "text", 3, None])
def test_non_object_rejected(data):
    with pytest.raises(ValueError):
        CVEItem.from_dict(data)


def test_wrong_field_types_rejected():
    with pytest.raises(ValueError):
        CPEName.from_dict({"cpe23Uri": 5})
    with pytest.raises(ValueError):
        CPEMatch.from_dict({"vulnerable": "yes"})
    with pytest.raises(ValueError):
        Node.from_dict({"children": {}})
    with pytest.raises(ValueError):
        CVSSV2.from_dict({"baseScore": "high"})
    with pytest.raises(ValueError):
        Reference.from_dict({"tags": [1]})