"""
CardConnect gateway.

Purpose:
- Exposes the six card operations: authorize, capture, purchase, refund,
  void and verify
- Builds each payload with processing.field_mapper, sends it through a
  Transport and classifies the answer with processing.response_wrappers

Composite operations:
- purchase (without purchase_order): authorize, then capture the returned
  token; the caller sees the authorization result
- verify: authorize a nominal amount, then void it; the void outcome is
  discarded

Declines come back as TransactionResult(success=False). Transport failures
raise TransportError and are never retried here.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from cardconnect.clients import select_transport
from cardconnect.config import GatewaySettings
from cardconnect.contracts.interfaces import Instrument, OptionsLike, TransactionOptions, Transport
from cardconnect.contracts.transactions import PipelineOutcome, TransactionResult
from cardconnect.errors import CallerContractError
from cardconnect.processing.field_mapper import (
    build_address_fields,
    build_customer_fields,
    build_extended_fields,
    build_instrument_fields,
    build_invoice_fields,
    build_reference_fields,
)
from cardconnect.processing.pipeline import PipelinePolicy, PipelineStep, run_pipeline
from cardconnect.processing.response_wrappers import classify_response, coerce_error_codes, parse_response
from cardconnect.scrubbing import scrub_transcript

logger = logging.getLogger(__name__)

VERIFY_AMOUNT = 100


class CardConnectGateway:
    supported_countries = ("US",)
    default_currency = "USD"
    supported_cardtypes = ("visa", "master", "american_express", "discover")
    homepage_url = "https://cardconnect.com/"
    display_name = "Card Connect"

    def __init__(
        self,
        settings: Optional[GatewaySettings] = None,
        *,
        transport: Optional[Transport] = None,
        **overrides: Any,
    ) -> None:
        base = settings or GatewaySettings.from_env()
        self.settings = base.with_overrides(**overrides).require_credentials()
        self.error_codes = coerce_error_codes(self.settings.error_codes)
        self.transport = transport or select_transport(self.settings)

        logger.info(
            "[CARDCONNECT] Gateway initialised merchant=%s test=%s transport=%s",
            self.settings.merchant_id,
            self.settings.test_mode,
            type(self.transport).__name__,
        )

    @property
    def test(self) -> bool:
        return self.settings.test_mode

    def close(self) -> None:
        """Release the transport's resources (the pooled HTTP client, for the real transport)."""
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "CardConnectGateway":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Single-call operations
    # ------------------------------------------------------------------

    def authorize(self, money: int, payment: Instrument, options: OptionsLike = None) -> TransactionResult:
        opts = TransactionOptions.coerce(options)
        post: Dict[str, Any] = {"tokenize": "Y"}
        self._add_sale_fields(post, money, payment, opts)
        return self._commit("authonly", post)

    def capture(self, money: int, authorization: str, options: OptionsLike = None) -> TransactionResult:
        return self._commit("capture", self._reference_post(authorization, "capture"))

    def refund(self, money: int, authorization: str, options: OptionsLike = None) -> TransactionResult:
        return self._commit("refund", self._reference_post(authorization, "refund"))

    def void(self, authorization: str, options: OptionsLike = None) -> TransactionResult:
        return self._commit("void", self._reference_post(authorization, "void"))

    # ------------------------------------------------------------------
    # Composite operations
    # ------------------------------------------------------------------

    def purchase(self, money: int, payment: Instrument, options: OptionsLike = None) -> TransactionResult:
        return self.purchase_outcome(money, payment, options).primary

    def purchase_outcome(self, money: int, payment: Instrument, options: OptionsLike = None) -> PipelineOutcome:
        opts = TransactionOptions.coerce(options)

        if opts.purchase_order:
            post: Dict[str, Any] = {}
            self._add_sale_fields(post, money, payment, opts)
            post.update(build_extended_fields(opts))
            post["capture"] = "Y"
            result = self._commit("authorize", post)
            return PipelineOutcome(results=(result,), primary=result, success=result.success)

        return run_pipeline(
            [
                PipelineStep(lambda prior: self.authorize(money, payment, opts), name="authorize"),
                PipelineStep(lambda prior: self._capture_authorized(money, prior[-1], opts), name="capture"),
            ],
            policy=PipelinePolicy.USE_FIRST,
        )

    def verify(self, payment: Instrument, options: OptionsLike = None) -> TransactionResult:
        return self.verify_outcome(payment, options).primary

    def verify_outcome(self, payment: Instrument, options: OptionsLike = None) -> PipelineOutcome:
        opts = TransactionOptions.coerce(options)
        return run_pipeline(
            [
                PipelineStep(lambda prior: self.authorize(VERIFY_AMOUNT, payment, opts), name="authorize"),
                PipelineStep(
                    lambda prior: self.void(prior[0].authorization, opts),
                    policy=PipelinePolicy.IGNORE_RESULT,
                    guard=lambda prior: bool(prior) and bool(prior[0].authorization),
                    name="void",
                ),
            ],
            policy=PipelinePolicy.USE_FIRST,
        )

    # ------------------------------------------------------------------
    # Scrubbing
    # ------------------------------------------------------------------

    def supports_scrubbing(self) -> bool:
        return True

    def scrub(self, transcript: str) -> str:
        return scrub_transcript(transcript)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _add_sale_fields(self, post: Dict[str, Any], money: int, payment: Instrument, opts: TransactionOptions) -> None:
        post.update(build_invoice_fields(money, opts, self.settings.default_currency))
        post.update(build_instrument_fields(payment))
        post.update(build_address_fields(opts))
        post.update(build_customer_fields(opts))

    def _capture_authorized(
        self, money: int, authorization: TransactionResult, opts: TransactionOptions
    ) -> TransactionResult:
        if not authorization.authorization:
            logger.warning("[CARDCONNECT] authonly approved without a token; capture not sent")
            return TransactionResult(
                success=False,
                message="Approved authorization carried no token to capture.",
                test=self.test,
            )
        return self.capture(money, authorization.authorization, opts)

    @staticmethod
    def _reference_post(authorization: Optional[str], action: str) -> Dict[str, Any]:
        if not authorization:
            raise CallerContractError(f"{action} requires an authorization token.")
        return build_reference_fields(authorization)

    def _commit(self, action: str, parameters: Dict[str, Any]) -> TransactionResult:
        payload = {"merchid": self.settings.merchant_id, **parameters}
        logger.info("[CARDCONNECT] %s amount=%s", action, payload.get("amount", "-"))

        body = self.transport.send(action, payload)
        result = classify_response(parse_response(body), error_codes=self.error_codes, test=self.test)

        if result.success:
            logger.info("[CARDCONNECT] %s approved", action)
        else:
            logger.info(
                "[CARDCONNECT] %s declined respcode=%s message=%s",
                action,
                result.params.get("respcode"),
                result.message,
            )
        return result
