"""Conversion between hyphenated and compact option names.

Option names are hyphenated on the command line (``--include-line-items``)
and compact inside the pipeline (``includeLineItems``).  These two
functions are the only place either conversion happens, and they are
exact inverses for names made of lowercase alphanumeric segments joined
by single hyphens.
"""

from __future__ import annotations

import re

_HYPHEN_LETTER = re.compile(r"-([a-z])")
_UPPER = re.compile(r"([A-Z])")


def hyphen_to_compact(name: str) -> str:
    """``"order-id"`` → ``"orderId"``.

    Only a hyphen followed by a lowercase letter is collapsed; any other
    hyphen (``"page-2"``) is kept verbatim.
    """
    return _HYPHEN_LETTER.sub(lambda match: match.group(1).upper(), name)


def compact_to_hyphen(name: str) -> str:
    """``"includeLineItems"`` → ``"include-line-items"``."""
    return _UPPER.sub(r"-\1", name).lower()
