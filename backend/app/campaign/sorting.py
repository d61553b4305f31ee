"""
Natural, case-insensitive ordering for builder labels.
"""
import re
from typing import List, Tuple, Union

_CHUNK_RE = re.compile(r"(\d+)")

NaturalKey = Tuple[Tuple[str, int], ...]


def natural_sort_key(text: Union[str, None]) -> NaturalKey:
    """
    Sort key comparing like ``strnatcasecmp``.

    Whitespace is skipped wherever it appears, letters are folded with
    ``upper()`` (so "_" sorts after letters) and runs of digits compare by
    numeric value, so "Step 2" < "Step 10". Whitespace still ends a digit run.

    A digit run is encoded as ("0", value) and a text run as (text, 0). Text
    runs never contain digits, so a digit run against a text run is decided
    by the text run's first character, the same as comparing character codes.
    """
    chunks: List[Tuple[str, int]] = []
    for word in (text or "").split():
        for chunk in _CHUNK_RE.split(word):
            if not chunk:
                continue
            if chunk.isdecimal():
                chunks.append(("0", int(chunk)))
            elif chunks and chunks[-1][0] != "0":
                # text on both sides of skipped whitespace compares as one run
                chunks[-1] = (chunks[-1][0] + chunk.upper(), 0)
            else:
                chunks.append((chunk.upper(), 0))
    return tuple(chunks)


__all__ = ["natural_sort_key"]
