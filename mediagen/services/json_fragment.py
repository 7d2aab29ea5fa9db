# mediagen/services/json_fragment.py
import json, logging
from typing import Any, Dict, Optional

log = logging.getLogger("mediagen")


def extract_json_from_text(text: str) -> str:
    """
    Return the JSON object embedded in `text`, e.g. after "Here is the result:".

    The span runs from the first "{" to its matching "}". Braces inside
    double-quoted strings (backslash escapes honoured) do not count.
    Returns "" when there is no opening brace or it is never balanced.
    """
    start = text.find("{")
    if start == -1:
        return ""

    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(text)):
        c = text[i]
        if in_string:
            if escape:
                escape = False
            elif c == "\\":
                escape = True
            elif c == '"':
                in_string = False
            continue

        if c == '"':
            in_string = True
        elif c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return ""


def parse_json_fragment(text: str) -> Optional[Dict[str, Any]]:
    """
    Extract and decode the embedded object.
    None means "no usable fragment" (missing, unbalanced or malformed).
    """
    fragment = extract_json_from_text(text)
    if not fragment:
        return None
    try:
        parsed = json.loads(fragment)
    except ValueError as e:
        log.debug(f"[resolve] malformed json fragment skipped: {e}")
        return None
    return parsed if isinstance(parsed, dict) else None
