# mediagen/services/text_normalizer.py


def normalize_text(raw: str) -> str:
    """
    Prepare raw model output for pattern matching.

    Only surrounding whitespace is removed. The text is otherwise kept verbatim
    so that positions found by the resolvers still line up with the original.
    """
    return (raw or "").strip()
