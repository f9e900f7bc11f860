"""Formula extraction from clipboard text.

Supports ``$$...$$``, ``\\[...\\]``, ``\\(...\\)`` and inline ``$...$``. Text
without any delimiters is taken as a single formula when it is short and looks
like math.
"""

import logging
import re
from typing import List

logger = logging.getLogger(__name__)

# Whole-text fallback only applies below this length.
FALLBACK_MAX_LENGTH = 200

# Alternatives are tried in this order at each scan position. Inline ``$``
# must not be escaped and must not close right before a digit (``$5``).
FORMULA_PATTERN = re.compile(
    r"\$\$[\s\S]*?\$\$"
    r"|\\\[[\s\S]*?\\\]"
    r"|\\\([\s\S]*?\\\)"
    r"|(?<!\\)\$[^$]+?\$(?!\d)"
)

_LEADING_DELIMITER = re.compile(r"\A(?:\$+|\\\[|\\\()")
_TRAILING_DELIMITER = re.compile(r"(?:\$+|\\\]|\\\))\Z")


def sanitize(candidate: str) -> str:
    """Strip the math delimiters from both ends of ``candidate``.

    Only the start and the end are touched; delimiter characters inside the
    formula survive.
    """
    s = candidate.strip()
    s = _LEADING_DELIMITER.sub("", s, count=1)
    s = _TRAILING_DELIMITER.sub("", s, count=1)
    return s.strip()


def looks_like_math(text: str) -> bool:
    return len(text) < FALLBACK_MAX_LENGTH and ("\\" in text or "=" in text)


def extract(text: str) -> List[str]:
    """Return the formulas found in ``text`` in order of appearance.

    Never raises: anything the pattern engine cannot handle yields ``[]``.
    """
    if not isinstance(text, str):
        return []

    clean = text.strip()
    if not clean:
        return []

    try:
        results = [sanitize(match.group(0)) for match in FORMULA_PATTERN.finditer(clean)]
        if not results and looks_like_math(clean):
            return [sanitize(clean)]
    except (re.error, RecursionError) as exc:
        logger.debug("Formula extraction failed: %s", exc)
        return []

    return results
