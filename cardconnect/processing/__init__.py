"""
Processing layer: everything between a typed request and a typed result.

- field_mapper.py builds wire payloads from instruments and options
- response_wrappers.py classifies raw processor responses
- pipeline.py runs multi-step operations (purchase, verify)

Nothing in this package performs I/O.
"""

from .field_mapper import (
    build_address_fields,
    build_customer_fields,
    build_extended_fields,
    build_instrument_fields,
    build_invoice_fields,
    build_reference_fields,
    format_amount,
    format_expiry,
)
from .pipeline import PipelinePolicy, PipelineStep, run_pipeline
from .response_wrappers import classify_response, coerce_error_codes, parse_response

__all__ = [
    "build_address_fields", "build_customer_fields", "build_extended_fields",
    "build_instrument_fields", "build_invoice_fields", "build_reference_fields",
    "format_amount", "format_expiry",
    "PipelinePolicy", "PipelineStep", "run_pipeline",
    "classify_response", "coerce_error_codes", "parse_response",
]
