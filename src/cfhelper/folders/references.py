"""Extract problem ids from URLs and pasted text."""

from __future__ import annotations

import re
from typing import Optional

_CONTEST_URL = re.compile(r"(?:contest|gym)/(\d+)/problem/(\w+)")
_PROBLEMSET_URL = re.compile(r"problemset/problem/(\d+)/(\w+)")
_BARE_ID = re.compile(r"(\d+)([A-Z]\d?)", re.IGNORECASE)


def parse_problem_reference(text: str) -> Optional[str]:
    """Return the problem id referenced by ``text``, or None.

    URLs of the form ``contest/<n>/problem/<idx>``, ``gym/<n>/problem/<idx>``
    and ``problemset/problem/<n>/<idx>`` are tried first; otherwise the first
    token like ``1850a`` or ``1950F2`` is used, uppercased.

    Examples:
        >>> parse_problem_reference("https://codeforces.com/contest/1850/problem/A")
        '1850A'
        >>> parse_problem_reference("1950f2 - Nene and the Passing Game")
        '1950F2'
    """
    for pattern in (_CONTEST_URL, _PROBLEMSET_URL):
        match = pattern.search(text)
        if match:
            return f"{match.group(1)}{match.group(2)}"
    match = _BARE_ID.search(text)
    if match:
        return match.group(0).upper()
    return None


__all__ = ["parse_problem_reference"]
