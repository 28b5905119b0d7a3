"""Comparison of software version strings of any convention."""

from __future__ import annotations


def _is_punctuation(ch: str) -> bool:
    return "!" <= ch <= "~" and not ("0" <= ch <= "9" or "A" <= ch <= "Z" or "a" <= ch <= "z")


def _parse_ver_parts(v: str) -> tuple[int, int, int]:
    """Split off the leading version part of ``v``.

    Returns the length of the leading run of digits, the end of the part to
    compare as text, and the index where the next part starts.
    """
    num = len(v) - len(v.lstrip("0123456789"))
    if num == len(v):
        return num, num, num
    skip = next((i for i, ch in enumerate(v) if _is_punctuation(ch)), -1)
    if skip == -1:
        return num, len(v), len(v)
    return num, skip, skip + 1


def smart_ver_cmp(v1: str, v2: str) -> int:
    """Compare two version strings; return -1, 0 or 1.

    Works for "95SE" vs "98SP1" and "16.3.2" vs "3.7.0", assuming both use
    the same versioning convention.
    """
    s1, s2 = v1, v2
    while s1 and s2:
        num1, cmp_to1, skip1 = _parse_ver_parts(s1)
        num2, cmp_to2, skip2 = _parse_ver_parts(s2)
        if num1 != num2:
            return 1 if num1 > num2 else -1
        part1, part2 = s1[:cmp_to1], s2[:cmp_to2]
        if part1 != part2:
            return 1 if part1 > part2 else -1
        s1 = s1[skip1:]
        s2 = s2[skip2:]
    if len(v1) != len(v2):
        return 1 if len(v1) > len(v2) else -1
    return 0