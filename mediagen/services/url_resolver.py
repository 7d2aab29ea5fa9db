# mediagen/services/url_resolver.py
"""
Recover the media URL from a chat model's answer.

The model is told to reply with bare JSON but often wraps it in prose or
markdown, or ignores the instruction altogether. Strategies are tried from the
most specific shape to the least specific one and the first non-empty hit
wins. Every strategy returns None for "nothing here"; none of them raise.
"""
import logging, re
from typing import Any, Callable, Dict, Optional, Tuple

from ..models.media_models import ExtractionRequest, MediaKind
from .json_fragment import parse_json_fragment

log = logging.getLogger("mediagen")

# compiled once, stateless, shared by every call
MARKDOWN_IMAGE_RE = re.compile(r"!\[[^\]]*\]\(([^)]+)\)")
BARE_URL_RE       = re.compile(r"https?://\S+")
HTTP_URL_RE       = re.compile(r"^https?://\S")

TRAILING_PUNCTUATION = ".,)"
EMBEDDED_IMAGE_PREFIX = "data:image/"

PRIMARY_FIELD = {
    MediaKind.image: "image_url",
    MediaKind.video: "video_url",
}

Strategy = Callable[[str, ExtractionRequest], Optional[str]]


def _trim(url: str) -> str:
    return url.rstrip(TRAILING_PUNCTUATION)


def _acceptable(url: Any, allow_embedded_data: bool) -> bool:
    """Only absolute http(s) URLs, plus inline image payloads where allowed."""
    if not isinstance(url, str) or not url:
        return False
    if HTTP_URL_RE.match(url):
        return True
    return allow_embedded_data and url.startswith(EMBEDDED_IMAGE_PREFIX)


def from_markdown_image(text: str, request: ExtractionRequest) -> Optional[str]:
    match = MARKDOWN_IMAGE_RE.search(text)
    if not match:
        return None
    url = _trim(match.group(1).strip())
    return url if _acceptable(url, request.allow_embedded_data) else None


def _first_data_item(parsed: Dict[str, Any]) -> Dict[str, Any]:
    data = parsed.get("data")
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    return {}


def from_json_fragment(text: str, request: ExtractionRequest) -> Optional[str]:
    parsed = parse_json_fragment(text)
    if parsed is None:
        return None

    allow = request.allow_embedded_data
    first = _first_data_item(parsed)
    candidates = [
        parsed.get(PRIMARY_FIELD[request.media_kind]),
        parsed.get("url"),
        first.get("url"),
    ]
    for value in candidates:
        if isinstance(value, str):
            value = value.strip()
        if _acceptable(value, allow):
            return value

    if allow and request.media_kind == MediaKind.image:
        payload = first.get("b64_json")
        if isinstance(payload, str) and payload:
            return f"data:image/png;base64,{payload}"
    return None


def from_raw_data_uri(text: str, request: ExtractionRequest) -> Optional[str]:
    if request.media_kind != MediaKind.image or not request.allow_embedded_data:
        return None
    return text if text.startswith(EMBEDDED_IMAGE_PREFIX) else None


def from_bare_url(text: str, request: ExtractionRequest) -> Optional[str]:
    match = BARE_URL_RE.search(text)
    if not match:
        return None
    url = _trim(match.group(0))
    return url if _acceptable(url, False) else None


# order matters: most specific first, bare-URL scan is the catch-all
STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("markdown", from_markdown_image),
    ("json", from_json_fragment),
    ("data_uri", from_raw_data_uri),
    ("bare_url", from_bare_url),
)


def resolve_media_url(normalized_text: str, request: ExtractionRequest) -> Optional[str]:
    """Run the strategies in order over already-normalized text."""
    for name, strategy in STRATEGIES:
        url = strategy(normalized_text, request)
        if url:
            log.debug(f"[resolve] kind={request.media_kind.value} strategy={name}")
            return url
    return None
