"""
Trigger Module

/trigger/v1/createOrder -> sign -> /trigger/v1/execute
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from .base import OrderFlowModule
from ..errors import ConfigurationError
from ..types import (
    TradeRequest,
    TriggerParams,
    CreateOrderResponse,
    ExecuteResponse,
    SOL_MINT,
    USDC_MINT,
    TRIGGER_MIN_ORDER_USD,
    usd_value,
)

# Sell 0.03 SOL for 5 USDC
DEFAULT_TRIGGER_REQUEST = TradeRequest(
    input_mint=SOL_MINT,
    output_mint=USDC_MINT,
    amount=30_000_000,
    trigger=TriggerParams(taking_amount=5_000_000),
)


class TriggerModule(OrderFlowModule):
    """Limit order flow; request.amount is the making amount"""

    name = "trigger"
    default_request = DEFAULT_TRIGGER_REQUEST
    minimum_usd = TRIGGER_MIN_ORDER_USD

    def order_value_usd(self, request: TradeRequest) -> Optional[Decimal]:
        if request.trigger is None:
            raise ConfigurationError.missing("trigger parameters (TradeRequest.trigger)")
        value = usd_value(request.input_mint, request.amount)
        if value is None:
            value = usd_value(request.output_mint, request.trigger.taking_amount)
        return value

    def create_order(self, request: TradeRequest) -> CreateOrderResponse:
        fee = self._client.integrator_fee
        return self._client.api.create_trigger_order(
            request,
            maker=self.pubkey,
            fee_bps=fee[1] if fee else None,
            fee_account=fee[0] if fee else None,
        )

    def execute_order(self, signed_transaction: str, request_id: str) -> ExecuteResponse:
        return self._client.api.execute_trigger_order(signed_transaction, request_id)
