"""Secret redaction utility for safe logging.

Admin keys arrive in request bodies and capability tokens in query
strings; neither may reach the logs verbatim. Uses case-insensitive
substring matching on normalized keys, so "apiKey", "api_key" and
"X-API-Key" are all caught.
"""

# Matched against keys lowercased with "_" and "-" removed
_DEFAULT_SENSITIVE_PATTERNS = frozenset({
    "secret", "token", "authorization", "apikey", "password",
})

_REDACTED = "***REDACTED***"

_TOKEN_VISIBLE_CHARS = 6


def _normalize_key(key: str) -> str:
    return key.lower().replace("_", "").replace("-", "")


def _is_sensitive_key(key: str, sensitive_patterns: frozenset[str]) -> bool:
    normalized = _normalize_key(key)
    return any(pattern in normalized for pattern in sensitive_patterns)


def redact_for_logging(
    obj: dict,
    sensitive_patterns: frozenset[str] = _DEFAULT_SENSITIVE_PATTERNS,
) -> dict:
    """Redact sensitive values from a dict for safe logging.

    Args:
        obj: Dict to redact (not mutated, returns a copy).
        sensitive_patterns: Substring patterns whose matching keys' values
            should be replaced.

    Returns:
        New dict with sensitive values replaced by '***REDACTED***'.
        Nested dicts and lists of dicts are handled recursively.
    """
    result = {}
    for key, value in obj.items():
        if _is_sensitive_key(str(key), sensitive_patterns):
            result[key] = _REDACTED
        elif isinstance(value, dict):
            result[key] = redact_for_logging(value, sensitive_patterns)
        elif isinstance(value, list):
            result[key] = [
                redact_for_logging(item, sensitive_patterns)
                if isinstance(item, dict)
                else item
                for item in value
            ]
        else:
            result[key] = value
    return result


def mask_token(token: str | None) -> str:
    """Shorten a bearer token to a loggable fingerprint, e.g. 'eyJwYX...(212)'."""
    if not token:
        return "<none>"
    return f"{token[:_TOKEN_VISIBLE_CHARS]}...({len(token)})"
