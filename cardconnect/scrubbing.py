"""Redaction of sensitive data from HTTP transcripts."""

from __future__ import annotations

import re

FILTERED = "[FILTERED]"

SENSITIVE_FIELDS = ("account", "cvv2", "bankaba")

_BASIC_AUTH = re.compile(r"(Authorization:\s*Basic\s+)[A-Za-z0-9+/=\[\]]+", re.IGNORECASE)
# Quoted values are matched up to the closing quote so spaced numbers are fully masked.
_JSON_FIELD = re.compile(
    r'("(?:%s)"\s*:\s*)(?:(")[^"]*"|[^",}\s]*)' % "|".join(SENSITIVE_FIELDS)
)


def _mask_field(match: "re.Match[str]") -> str:
    quote = match.group(2) or ""
    return f"{match.group(1)}{quote}{FILTERED}{quote}"


def scrub_transcript(transcript: str) -> str:
    """Mask the basic-auth credential, card/account number, CVV and routing number."""
    if not transcript:
        return transcript
    scrubbed = _BASIC_AUTH.sub(rf"\g<1>{FILTERED}", transcript)
    return _JSON_FIELD.sub(_mask_field, scrubbed)
