"""
Security utilities for credential handling.

This module keeps API keys out of logs and error messages. FMP takes the key
as a query parameter, so any URL we log has to be scrubbed first.
"""

import re

REDACTED = "***"

_APIKEY_PARAM = re.compile(r"(?i)([?&]apikey=)[^&#\s]*")


def redact_api_key(text: str) -> str:
    """
    Replace the value of every ``apikey`` query parameter in text.

    Args:
        text: URL or message that may embed an API key

    Returns:
        The text with key values replaced by ``***``

    Example:
        >>> redact_api_key("https://x/search-name?query=Apple&apikey=abc123")
        'https://x/search-name?query=Apple&apikey=***'
    """
    return _APIKEY_PARAM.sub(lambda m: m.group(1) + REDACTED, text)


def mask_secret(secret: str | None, visible: int = 4) -> str:
    """Show only the last few characters of a secret (for startup logs)."""
    if not secret:
        return "<not set>"
    if len(secret) <= visible:
        return REDACTED
    return f"{REDACTED}{secret[-visible:]}"
