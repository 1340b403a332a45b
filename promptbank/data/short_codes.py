"""Short code generation for prompt names.

Every prompt gets a short abbreviation that can be typed instead of its full
name. Codes are only unique within one candidate list and are recomputed each
time the list is built, so callers must present names in a stable order.

Candidates, first unused one wins:
    "auth-basic" → "ab"          (initials of each segment)
    "auth-basic" → "auba"        (first two letters of each segment)
    "auth-basic" → "auba1"       (numbered, 1-9)
    "auth-basic" → "auth-basic"  (full name)
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable

_SEGMENT_SPLIT_RE = re.compile(r"[-_]")
_MAX_NUMBERED_SUFFIX = 9


def _segments(name: str) -> list[str]:
    return _SEGMENT_SPLIT_RE.split(name)


def _initials(name: str) -> str:
    return "".join(segment[:1] or "x" for segment in _segments(name))


def _two_letter(name: str) -> str:
    return "".join(segment[:2] for segment in _segments(name))


def generate_short_code(name: str, existing_codes: Collection[str]) -> str:
    """Derive a short code for ``name`` that is not already in ``existing_codes``.

    Falls back to the full name once every abbreviated form is taken.
    """
    code = _initials(name)
    if code not in existing_codes:
        return code

    code = _two_letter(name)
    if code not in existing_codes:
        return code

    for i in range(1, _MAX_NUMBERED_SUFFIX + 1):
        numbered = f"{code}{i}"
        if numbered not in existing_codes:
            return numbered

    return name


def assign_short_codes(names: Iterable[str]) -> list[tuple[str, str]]:
    """Assign codes sequentially, each one checked against those already handed out.

    Returns ``(name, code)`` pairs in input order. If a name's full-name fallback
    is itself already taken as another prompt's code, a numeric suffix is added
    so that codes stay pairwise distinct within the list.
    """
    assigned: list[tuple[str, str]] = []
    used: set[str] = set()
    for name in names:
        code = generate_short_code(name, used)
        suffix = _MAX_NUMBERED_SUFFIX
        while code in used:
            suffix += 1
            code = f"{name}{suffix}"
        used.add(code)
        assigned.append((name, code))
    return assigned
