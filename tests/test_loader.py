import gzip
import io
import json

import pytest

from nvdscore.feed.loader import (
    FeedLoadError,
    load_feed,
    load_json_dictionary,
    parse_items,
    read_feed,
)
from nvdscore.feed.schema import CVEItem

ASSIGNER = "cve@example.com"


def _cve(cve_id):
    return {
        "data_type": "CVE",
        "data_format": "MITRE",
        "data_version": "4.0",
        "CVE_data_meta": {"ID": cve_id, "ASSIGNER": ASSIGNER},
    }


def _item(cve_id, nodes):
    return {
        "cve": _cve(cve_id),
        "configurations": {"CVE_data_version": "4.0", "nodes": nodes},
    }


def _match(uri23, uri22=None, **ranges):
    match = {"vulnerable": True, "cpe23Uri": uri23}
    if uri22 is not None:
        match["cpe22Uri"] = uri22
    match.update(ranges)
    return match


def _or(*matches):
    return {"operator": "OR", "cpe_match": list(matches)}


BROKEN_FEED = {
    "CVE_data_format": "",
    "CVE_data_type": "",
    "CVE_data_version": "",
    "CVE_Items": [
        {},
        {"cve": None},
        {"cve": _cve("TESTVE-2018-0001"), "configurations": None},
    ],
}

FEED = {
    "CVE_data_type": "CVE",
    "CVE_data_format": "MITRE",
    "CVE_data_version": "4.0",
    "CVE_data_numberOfCVEs": "7083",
    "CVE_data_timestamp": "2018-07-31T07:00Z",
    "CVE_Items": [
        _item(
            "TESTVE-2018-0001",
            [
                {
                    "operator": "AND",
                    "children": [
                        _or(_match("cpe:2.3:a:microsoft:ie:6.*:*:*:*:*:*:*:*", "cpe:/a:microsoft:ie:6.%01")),
                        _or(
                            _match(
                                "cpe:2.3:o:microsoft:windows_xp:*:sp?:*:*:*:*:*:*",
                                "cpe:/o:microsoft:windows_xp::sp%02",
                            )
                        ),
                    ],
                }
            ],
        ),
        _item(
            "TESTVE-2018-0002",
            [
                {
                    "operator": "AND",
                    "children": [
                        _or(
                            _match(
                                "cpe:2.3:a:microsoft:ie:*:*:*:*:*:*:*:*",
                                "cpe:/a:microsoft:ie",
                                versionStartIncluding="4.0",
                                versionEndExcluding="6.0",
                            )
                        )
                    ],
                }
            ],
        ),
        _item(
            "CVE-2002-2436",
            [_or(_match("cpe:2.3:a:mozilla:firefox:*:*:*:*:*:*:*:*", versionEndIncluding="3.6.24"))],
        ),
    ],
}

BROKEN_TEXT = json.dumps(BROKEN_FEED, indent=2)
FEED_TEXT = json.dumps(FEED, indent=2)

IDS = ["TESTVE-2018-0001", "TESTVE-2018-0002", "CVE-2002-2436"]


def _stream(text):
    return io.BytesIO(text.encode("utf-8"))


def test_bad_json_feed_is_ignored():
    assert parse_items(_stream(BROKEN_TEXT)) == []


def test_broken_feed_still_reads_all_items():
    feed = read_feed(_stream(BROKEN_TEXT))
    assert [item.id() for item in feed.items] == ["", "", "TESTVE-2018-0001"]
    assert feed.items[2].configurations is None


def test_parse_items_ids_in_order():
    items = parse_items(_stream(FEED_TEXT))
    assert [item.id() for item in items] == IDS


def test_parse_items_configuration_structure():
    items = parse_items(_stream(FEED_TEXT))
    rule0 = items[0].configurations.nodes[0]
    assert rule0.operator == "AND"
    assert [child.cpe_match[0].cpe23_uri for child in rule0.children] == [
        "cpe:2.3:a:microsoft:ie:6.*:*:*:*:*:*:*:*",
        "cpe:2.3:o:microsoft:windows_xp:*:sp?:*:*:*:*:*:*",
    ]
    rule1 = items[1].configurations.nodes[0].children[0].cpe_match[0]
    assert rule1.version_start_including == "4.0"
    assert rule1.version_end_excluding == "6.0"
    rule2 = items[2].configurations.nodes[0].cpe_match[0]
    assert rule2.version_end_including == "3.6.24"
    assert rule2.vulnerable is True


def test_gzip_feed_reads_like_plain():
    plain = read_feed(_stream(FEED_TEXT))
    zipped = read_feed(io.BytesIO(gzip.compress(FEED_TEXT.encode("utf-8"))))
    assert zipped == plain


def test_text_stream_is_accepted():
    assert [item.id() for item in parse_items(io.StringIO(FEED_TEXT))] == IDS


@pytest.mark.parametrize("payload", [b"", b"{", b"not json", b"[1, 2]", b"\x1f\x8b\x00garbage"])
def test_unreadable_feed_raises(payload):
    with pytest.raises(FeedLoadError):
        parse_items(io.BytesIO(payload))


def test_load_feed_with_callable():
    dictionary = load_feed(lambda _: parse_items(_stream(FEED_TEXT)), [""])
    assert sorted(dictionary) == sorted(IDS)
    assert dictionary["CVE-2002-2436"].id() == "CVE-2002-2436"


def test_load_feed_skips_entries_without_id():
    assert load_feed(lambda _: [CVEItem()], ["", "x"]) == {}


def test_load_feed_reports_failures_and_keeps_the_rest():
    def load(path):
        if path == "bad":
            raise OSError("no such feed")
        return parse_items(_stream(FEED_TEXT))

    with pytest.raises(FeedLoadError) as info:
        load_feed(load, ["good", "bad"])
    assert 'failed to load feed "bad"' in str(info.value)
    assert "no such feed" in str(info.value)
    assert sorted(info.value.dictionary) == sorted(IDS)


def test_load_feed_joins_all_errors():
    def load(path):
        raise ValueError(path)

    with pytest.raises(FeedLoadError) as info:
        load_feed(load, ["one", "two"])
    assert len(str(info.value).splitlines()) == 2
    assert info.value.dictionary == {}


def test_load_json_dictionary_from_files(tmp_path):
    plain = tmp_path / "feed.json"
    plain.write_text(BROKEN_TEXT, encoding="utf-8")
    zipped = tmp_path / "feed.json.gz"
    zipped.write_bytes(gzip.compress(FEED_TEXT.encode("utf-8")))
    dictionary = load_json_dictionary(str(plain), str(zipped))
    assert sorted(dictionary) == sorted(IDS)


def test_load_json_dictionary_missing_file(tmp_path):
    missing = tmp_path / "absent.json"
    with pytest.raises(FeedLoadError) as info:
        load_json_dictionary(str(missing))
    assert str(missing) in str(info.value)


def test_load_json_dictionary_without_paths_is_empty():
    assert load_json_dictionary() == {}