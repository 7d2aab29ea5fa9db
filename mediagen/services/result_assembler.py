# mediagen/services/result_assembler.py
from ..models.media_models import ExtractionResult, ExtractionFailure

SNIPPET_MAX_CHARS = 300
NO_FIELD_REASON = "no target field found in response"


def truncate_snippet(text: str, max_chars: int = SNIPPET_MAX_CHARS) -> str:
    # keep error messages and logs bounded: never echo the full model output
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def assemble_result(resolved_url: str) -> ExtractionResult:
    if not resolved_url:
        raise ValueError("resolved_url must be non-empty")
    return ExtractionResult(resolved_url=resolved_url)


def build_failure(raw_text: str, reason: str = NO_FIELD_REASON) -> ExtractionFailure:
    """`raw_text` is the model output as received, before normalization."""
    return ExtractionFailure(reason=reason, diagnostic_snippet=truncate_snippet(raw_text or ""))
