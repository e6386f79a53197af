"""
Swap Instructions Module

/swap/v1/quote -> /swap/v1/swap-instructions -> assemble v0 transaction
-> sign -> RPC sendTransaction -> confirm
"""

from __future__ import annotations

from typing import Optional

from .swap import SwapModule
from ..infra import TxBuilder
from ..types import TradeRequest, QuoteResponse, SubmissionResult, SOL_MINT, USDC_MINT

# 1 USDC -> SOL
DEFAULT_SWAP_INSTRUCTIONS_REQUEST = TradeRequest(
    input_mint=USDC_MINT,
    output_mint=SOL_MINT,
    amount=1_000_000,
    slippage_bps=50,
)


class SwapInstructionsModule(SwapModule):
    """Swap flow where the caller assembles the transaction from raw instructions"""

    name = "swap-instructions"
    default_request = DEFAULT_SWAP_INSTRUCTIONS_REQUEST

    def execute(
        self,
        quote: QuoteResponse,
        wait_confirmation: Optional[bool] = None,
    ) -> SubmissionResult:
        fee = self._client.integrator_fee
        instructions = self._client.api.get_swap_instructions(
            quote,
            self.pubkey,
            fee_account=fee[0] if fee else None,
        )

        unsigned = TxBuilder(self._client.rpc).build_swap(instructions, payer=self.pubkey)
        signed = self._client.signer.sign_transaction(unsigned)
        return self.send_and_confirm(signed, wait_confirmation)
