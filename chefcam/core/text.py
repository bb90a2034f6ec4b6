# chefcam/core/text.py
from __future__ import annotations

import re
from typing import Optional

_FENCE_RE = re.compile(r"```(?:json)?", flags=re.IGNORECASE)


def strip_code_fences(text: Optional[str]) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def json_candidate(text: str) -> str:
    """
    Narrow model output down to the span between the first "{" and the last "}".

    Heuristic only: when the braces are missing or out of order the text is
    returned unchanged and left for the JSON parser to reject. Responses with
    several objects or braces inside surrounding prose are not repaired.
    """
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last <= first:
        return text
    return text[first : last + 1]
