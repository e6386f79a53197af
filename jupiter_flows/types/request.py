"""
Trade request definitions
"""

from dataclasses import dataclass
from typing import Optional

from ..errors import ConfigurationError


@dataclass(frozen=True)
class TriggerParams:
    """
    Limit order parameters

    Attributes:
        taking_amount: Amount of the output token to receive (raw units)
        expired_at: Optional expiry as unix timestamp in seconds
        slippage_bps: Optional slippage applied when the order fills
    """
    taking_amount: int
    expired_at: Optional[int] = None
    slippage_bps: Optional[int] = None

    def __post_init__(self):
        if self.taking_amount <= 0:
            raise ConfigurationError.invalid("taking_amount", "must be positive")


@dataclass(frozen=True)
class RecurringParams:
    """
    Time-based DCA parameters

    Attributes:
        number_of_orders: How many times the order executes (>= 2)
        interval: Seconds between executions
        min_price: Optional lower price bound per execution
        max_price: Optional upper price bound per execution
        start_at: Optional unix timestamp of the first execution
    """
    number_of_orders: int
    interval: int
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    start_at: Optional[int] = None

    def __post_init__(self):
        if self.number_of_orders < 2:
            raise ConfigurationError.invalid("number_of_orders", "at least 2 orders are required")
        if self.interval <= 0:
            raise ConfigurationError.invalid("interval", "must be positive")


@dataclass(frozen=True)
class TradeRequest:
    """
    Immutable input of a single flow invocation

    Attributes:
        input_mint: Mint of the token sold
        output_mint: Mint of the token bought
        amount: Input amount in smallest units (lamports for SOL)
        slippage_bps: Slippage tolerance in basis points
        trigger: Limit order parameters (Trigger flow)
        recurring: Schedule parameters (Recurring flow)
    """
    input_mint: str
    output_mint: str
    amount: int
    slippage_bps: int = 50
    trigger: Optional[TriggerParams] = None
    recurring: Optional[RecurringParams] = None

    def __post_init__(self):
        if not self.input_mint or not self.output_mint:
            raise ConfigurationError.missing("input_mint/output_mint")
        if self.input_mint == self.output_mint:
            raise ConfigurationError.invalid("output_mint", "must differ from input_mint")
        if self.amount <= 0:
            raise ConfigurationError.invalid("amount", "must be positive")
        if not 0 <= self.slippage_bps <= 10_000:
            raise ConfigurationError.invalid("slippage_bps", "must be between 0 and 10000")

    def __str__(self) -> str:
        return f"TradeRequest({self.amount} {self.input_mint[:8]}... -> {self.output_mint[:8]}...)"
