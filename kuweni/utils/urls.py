from urllib.parse import quote

# encodeURIComponent 不转义的字符
_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a single path segment the way browsers' ``encodeURIComponent`` does."""
    return quote(value, safe=_COMPONENT_SAFE)
