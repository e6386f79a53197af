"""
Type definitions for Jupiter flows
"""

from .request import TradeRequest, TriggerParams, RecurringParams
from .result import (
    QuoteResponse,
    SwapTransaction,
    SwapInstructions,
    UltraOrder,
    CreateOrderResponse,
    ExecuteResponse,
    SignedTransaction,
    SubmissionResult,
    SubmissionStatus,
)
from .solana_tokens import (
    SOL_MINT,
    USDC_MINT,
    USDT_MINT,
    SOLANA_TOKEN_MINTS,
    SOLANA_TOKEN_DECIMALS,
    USD_STABLE_MINTS,
    TRIGGER_MIN_ORDER_USD,
    RECURRING_MIN_ORDER_USD,
    resolve_token_mint,
    usd_value,
)

__all__ = [
    # Requests
    "TradeRequest",
    "TriggerParams",
    "RecurringParams",
    # Responses
    "QuoteResponse",
    "SwapTransaction",
    "SwapInstructions",
    "UltraOrder",
    "CreateOrderResponse",
    "ExecuteResponse",
    "SignedTransaction",
    "SubmissionResult",
    "SubmissionStatus",
    # Token registry
    "SOL_MINT",
    "USDC_MINT",
    "USDT_MINT",
    "SOLANA_TOKEN_MINTS",
    "SOLANA_TOKEN_DECIMALS",
    "USD_STABLE_MINTS",
    "TRIGGER_MIN_ORDER_USD",
    "RECURRING_MIN_ORDER_USD",
    "resolve_token_mint",
    "usd_value",
]
