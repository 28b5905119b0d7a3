[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nvdscore"
version = "0.1.0"
description = "CVSS v2 and v3.0 vector parsing and scoring, NVD CVE JSON feed reading, version comparison and an LRU eviction queue"
requires-python = ">=3.10"
dependencies = []
keywords = ["cvss", "nvd", "cve", "vulnerability", "security", "scoring"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nvdscore"]

[tool.pytest.ini_options]
addopts = "-ra"
