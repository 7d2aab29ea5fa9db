# mediagen/services/orchestrator.py
import logging
from typing import Union

from ..models.media_models import ExtractionRequest, ExtractionResult, ExtractionFailure
from .text_normalizer import normalize_text
from .url_resolver import resolve_media_url
from .result_assembler import assemble_result, build_failure

log = logging.getLogger("mediagen")


def extract_media_url(request: ExtractionRequest) -> Union[ExtractionResult, ExtractionFailure]:
    """
    Pure and synchronous: no I/O, no shared state, safe to call concurrently.
    Running it twice on the same request gives equal results.
    """
    # 1) raw -> normalized
    cleaned = normalize_text(request.raw_text)

    # 2) normalized -> url
    url = resolve_media_url(cleaned, request)

    # 3) 汇总
    if url:
        return assemble_result(url)
    failure = build_failure(request.raw_text)
    log.warning(f"[resolve] kind={request.media_kind.value} -> {failure.reason}: {failure.diagnostic_snippet!r}")
    return failure
