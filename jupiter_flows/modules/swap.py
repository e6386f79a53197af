"""
Swap Module

/swap/v1/quote -> /swap/v1/swap -> sign -> RPC sendTransaction -> confirm
"""

from __future__ import annotations

import logging
from typing import Optional

from .base import FlowModule
from ..types import TradeRequest, QuoteResponse, SubmissionResult, SOL_MINT, USDC_MINT

logger = logging.getLogger(__name__)

# 0.05 SOL -> USDC
DEFAULT_SWAP_REQUEST = TradeRequest(
    input_mint=SOL_MINT,
    output_mint=USDC_MINT,
    amount=50_000_000,
    slippage_bps=50,
)


class SwapModule(FlowModule):
    """
    Swap flow

    Usage:
        with JupiterClient() as client:
            result = client.swap.run(request)

        # or step by step
        quote = client.swap.quote(request)
        result = client.swap.execute(quote)
    """

    name = "swap"
    default_request = DEFAULT_SWAP_REQUEST

    def quote(self, request: Optional[TradeRequest] = None) -> QuoteResponse:
        """Get a quote, adding the integrator platform fee when configured"""
        fee = self._client.integrator_fee
        return self._client.api.get_quote(
            self._resolve_request(request),
            platform_fee_bps=fee[1] if fee else None,
        )

    def execute(
        self,
        quote: QuoteResponse,
        wait_confirmation: Optional[bool] = None,
    ) -> SubmissionResult:
        """Build, sign and submit the swap transaction for a quote"""
        fee = self._client.integrator_fee
        swap = self._client.api.get_swap_transaction(
            quote,
            self.pubkey,
            fee_account=fee[0] if fee else None,
        )
        signed = self.decode_and_sign(swap.swap_transaction)
        return self.send_and_confirm(signed, wait_confirmation)

    def run(
        self,
        request: Optional[TradeRequest] = None,
        wait_confirmation: Optional[bool] = None,
    ) -> SubmissionResult:
        return self.execute(self.quote(request), wait_confirmation)
