# nvdscore

A library for working with NVD vulnerability data:

- parse, print and score **CVSS v2** and **CVSS v3.0** vectors
  (base, temporal and environmental scores);
- read NVD CVE JSON 1.0 feeds, plain or gzip-compressed, into dataclass records;
- compare free-form software version strings;
- a least-recently-used eviction queue of cache keys.

It has no dependencies outside the standard library and needs Python 3.10 or later.

## Installation

```
pip install .
```

The tests use pytest, which the `test` extra installs: `pip install .[test]`.

## CVSS v2

```python
from nvdscore.cvss2.vector import Vector

v = Vector.from_string("(AV:A/AC:L/Au:S/C:C/I:P/A:C/E:F/RL:W/RC:UR/CDP:MH/TD:M/CR:M/IR:L/AR:H)")
v.validate()                    # raises MetricError if a base metric is missing
print(v.base_score())           # 7.4
print(v.temporal_score())       # 6.3
print(v.environmental_score())  # 6.0
print(v.score())                # same as environmental_score()
print(str(v))                   # same text it was parsed from
```

The surrounding parentheses are optional when parsing. Metrics are printed in
the fixed order `AV AC Au C I A E RL RC CDP TD CR IR AR`, leaving out those that
are not defined. Scores are rounded to one decimal, halves away from zero
(`nvdscore.cvss2.vector.round_to_1_decimal`).

Each metric is an enum in `nvdscore.cvss2.metrics` (`AccessVector`,
`Exploitability`, `TargetDistribution`, ...). Every member has a vector code
(`str(member)`), a `weight()` and `defined()`; `Metric.parse(code)` on a metric
class returns the member for a code.

## CVSS v3.0

```python
from nvdscore.cvss3.vector import Vector

v = Vector.from_string("CVSS:3.0/AV:N/AC:L/PR:N/UI:R/S:U/C:H/I:H/A:H/E:H/RL:O/RC:C")
print(v.base_score())   # 8.8
print(v.score())        # combined (environmental) score
```

Parsing is case-insensitive and the `CVSS:3.0/` prefix is optional; printing
always adds it. Scores are rounded up to one decimal
(`nvdscore.cvss3.vector.round_up`). Base and temporal metrics live in
`nvdscore.cvss3.metrics`; the requirement and modified metrics (`CR`, `MAV`,
`MS`, ...) live in `nvdscore.cvss3.environmental`, where the code `X` means
"not defined". `PrivilegesRequired.weight_for(scope_changed)` gives the weight
that depends on the scope.

## Working with both versions

`Vector.absorb(other)` copies only the metrics that are defined in `other`,
leaving the rest untouched:

```python
from nvdscore.cvss3.vector import Vector

v1 = Vector.from_string("CVSS:3.0/E:U/RL:W/RC:R")
v1.absorb(Vector.from_string("CVSS:3.0/E:H/RL:T"))
print(v1)   # CVSS:3.0/E:H/RL:T/RC:R
```

A malformed part, an unknown metric or an unknown code raises `MetricError`
(a `ValueError`) from the version's `metrics` module.

## NVD feeds

```python
from nvdscore.feed.loader import load_json_dictionary, parse_items

items = load_json_dictionary("nvdcve-1.0-2018.json.gz", "nvdcve-1.0-2019.json")
for cve_id, item in items.items():
    print(cve_id, item.impact)
```

- `read_feed(stream)` reads a whole feed from a binary stream into a
  `nvdscore.feed.schema.Feed`; gzip input is recognised by its magic bytes.
- `parse_items(stream)` returns the feed's `CVEItem`s that carry a configuration.
- `load_feed(load, paths)` calls a loader function on every path (in a thread
  pool) and merges the entries by their `id()`, leaving out entries with an
  empty ID. If any path fails it raises `FeedLoadError` listing every failure;
  the error's `dictionary` holds what did load.
- `load_json_dictionary(*paths)` does this for feed files on disk.

The records in `nvdscore.feed.schema` are dataclasses, each with a
`from_dict(data)` classmethod that raises `ValueError` on fields of the wrong
type. `CVEItem.id()` returns the CVE identifier or an empty string.

## Version comparison

```python
from nvdscore.smartvercmp import smart_ver_cmp

smart_ver_cmp("1.0.14", "1.0.4")   # 1
smart_ver_cmp("95SE", "98SP1")     # -1
smart_ver_cmp("1.0", "1.0")        # 0
```

Both strings are assumed to follow the same versioning convention; any
punctuation separates the parts.

## Eviction queue

```python
from nvdscore.evictionqueue import EvictionQueue

q = EvictionQueue()
i = q.push("a")   # returns the index the key ended up at
q.push("b")
q.touch(i)        # "a" becomes most recently used; returns its new index
q.pop()           # "b", the least recently used key
```

`keys()` lists the keys in heap order and `len(q)` counts them. Popping an
empty queue raises `IndexError`.

## What it does not do

The package does not match CPE names or software inventories against feed
entries, does not cache match results, and has no command-line interface. The
`EvictionQueue` is a building block for such a cache, not a cache itself.