"""
Jupiter Flows - Jupiter aggregator flows with local signing

Runs a single Jupiter operation end to end:
- Swap: quote -> swap transaction -> sign -> RPC submit
- Swap instructions: quote -> instructions -> local v0 tx -> sign -> RPC submit
- Ultra: order -> sign -> execute
- Trigger (limit order): createOrder -> sign -> execute
- Recurring (DCA): createOrder -> sign -> execute
"""

from .client import JupiterClient
from .types import (
    TradeRequest,
    TriggerParams,
    RecurringParams,
    SubmissionResult,
    SubmissionStatus,
    SOL_MINT,
    USDC_MINT,
)
from .errors import (
    ErrorCode,
    JupiterFlowError,
    RemoteError,
    RpcError,
    ParseError,
    DecodeError,
    SigningError,
    SubmissionError,
    ConfigurationError,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "JupiterClient",
    # Types
    "TradeRequest",
    "TriggerParams",
    "RecurringParams",
    "SubmissionResult",
    "SubmissionStatus",
    "SOL_MINT",
    "USDC_MINT",
    # Errors
    "ErrorCode",
    "JupiterFlowError",
    "RemoteError",
    "RpcError",
    "ParseError",
    "DecodeError",
    "SigningError",
    "SubmissionError",
    "ConfigurationError",
]
