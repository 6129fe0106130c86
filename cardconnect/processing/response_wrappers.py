from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from cardconnect.contracts.transactions import (
    AVSResult,
    CVVResult,
    StandardErrorCode,
    TransactionResult,
)
from cardconnect.errors import CallerContractError, ResponseFormatError

APPROVED = "A"

RawResponse = Mapping[str, Any]
ErrorCodeTable = Mapping[str, StandardErrorCode]


def parse_response(body: bytes) -> RawResponse:
    """Decode a processor body into a read-only mapping."""
    try:
        data = json.loads(body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ResponseFormatError(f"Processor response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ResponseFormatError(f"Processor response must be a JSON object; got {type(data).__name__}.")
    return MappingProxyType(data)


def coerce_error_codes(table: Optional[Mapping[str, Any]]) -> ErrorCodeTable:
    """Validate a processor-code -> StandardErrorCode table supplied by the caller."""
    coerced: Dict[str, StandardErrorCode] = {}
    for code, value in (table or {}).items():
        try:
            coerced[str(code)] = StandardErrorCode(value)
        except ValueError as exc:
            raise CallerContractError(f"Unknown standard error code {value!r} for processor code {code!r}.") from exc
    return MappingProxyType(coerced)


def success_from(raw: RawResponse) -> bool:
    return raw.get("respstat") == APPROVED


def message_from(raw: RawResponse) -> Optional[str]:
    text = raw.get("resptext")
    settlement = raw.get("setlstat")
    if settlement:
        return f"{text or ''} {settlement}".strip()
    return None if text is None else str(text)


def authorization_from(raw: RawResponse) -> Optional[str]:
    token = raw.get("token")
    return None if token is None else str(token)


def error_code_from(raw: RawResponse, error_codes: Optional[ErrorCodeTable] = None) -> Optional[StandardErrorCode]:
    if success_from(raw):
        return None
    code = raw.get("respcode")
    if code is None or not error_codes:
        return None
    return error_codes.get(str(code))


def classify_response(
    raw: RawResponse,
    *,
    error_codes: Optional[ErrorCodeTable] = None,
    test: bool = False,
) -> TransactionResult:
    return TransactionResult(
        success=success_from(raw),
        message=message_from(raw),
        authorization=authorization_from(raw),
        avs_result=AVSResult.from_code(raw.get("avsresp")),
        cvv_result=CVVResult.from_code(raw.get("cvvresp")),
        error_code=error_code_from(raw, error_codes),
        test=test,
        params=dict(raw),
    )
