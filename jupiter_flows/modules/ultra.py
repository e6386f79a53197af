"""
Ultra Module

/ultra/v1/order -> sign -> /ultra/v1/execute
"""

from __future__ import annotations

import logging
from typing import Optional

from .base import FlowModule
from ..errors import SubmissionError
from ..types import TradeRequest, UltraOrder, SubmissionResult, SOL_MINT, USDC_MINT

logger = logging.getLogger(__name__)

# 0.01 SOL -> USDC
DEFAULT_ULTRA_REQUEST = TradeRequest(
    input_mint=SOL_MINT,
    output_mint=USDC_MINT,
    amount=10_000_000,
)


class UltraModule(FlowModule):
    """
    Ultra flow: Jupiter builds, lands and confirms the transaction

    Slippage is chosen by Ultra; request.slippage_bps is not sent.
    """

    name = "ultra"
    default_request = DEFAULT_ULTRA_REQUEST

    def order(self, request: Optional[TradeRequest] = None) -> UltraOrder:
        """Get an order, adding the referral fee when configured"""
        fee = self._client.integrator_fee
        return self._client.api.get_ultra_order(
            self._resolve_request(request),
            taker=self.pubkey,
            referral_account=fee[0] if fee else None,
            referral_fee_bps=fee[1] if fee else None,
        )

    def execute(self, order: UltraOrder) -> SubmissionResult:
        """
        Sign and execute an order

        Raises:
            SubmissionError: Order has no transaction, or execute refused or failed it
        """
        if not order.transaction:
            raise SubmissionError.rejected(
                f"ultra order {order.request_id} has no transaction: {order.error}"
            )

        signed = self.decode_and_sign(order.transaction)
        executed = self.execute_with_jupiter(self._client.api.execute_ultra_order, signed, order.request_id)

        if not executed.is_success:
            raise SubmissionError.execute_failed(
                self.name, executed.status, executed.error, executed.signature, executed.code
            )

        logger.info(f"[{self.name}] executed {executed.signature} at slot {executed.slot}")
        return SubmissionResult.success(
            executed.signature or signed.signature,
            flow=self.name,
            slot=executed.slot,
            raw=executed.raw,
        )

    def run(self, request: Optional[TradeRequest] = None) -> SubmissionResult:
        return self.execute(self.order(request))
