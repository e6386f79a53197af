"""
Recurring Module

/recurring/v1/createOrder -> sign -> /recurring/v1/execute
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from .base import OrderFlowModule
from ..errors import ConfigurationError
from ..types import (
    TradeRequest,
    RecurringParams,
    CreateOrderResponse,
    ExecuteResponse,
    SOL_MINT,
    USDC_MINT,
    RECURRING_MIN_ORDER_USD,
    usd_value,
)

# 100 USDC -> SOL, two daily orders
DEFAULT_RECURRING_REQUEST = TradeRequest(
    input_mint=USDC_MINT,
    output_mint=SOL_MINT,
    amount=100_000_000,
    recurring=RecurringParams(number_of_orders=2, interval=86_400),
)


class RecurringModule(OrderFlowModule):
    """Time-based DCA flow; request.amount is the total input amount"""

    name = "recurring"
    default_request = DEFAULT_RECURRING_REQUEST
    minimum_usd = RECURRING_MIN_ORDER_USD

    def order_value_usd(self, request: TradeRequest) -> Optional[Decimal]:
        if request.recurring is None:
            raise ConfigurationError.missing("recurring parameters (TradeRequest.recurring)")
        return usd_value(request.input_mint, request.amount)

    def create_order(self, request: TradeRequest) -> CreateOrderResponse:
        return self._client.api.create_recurring_order(request, user=self.pubkey)

    def execute_order(self, signed_transaction: str, request_id: str) -> ExecuteResponse:
        return self._client.api.execute_recurring_order(signed_transaction, request_id)
