"""
Response and result type definitions

Each response type parses one Jupiter JSON body and keeps the untouched
payload in ``raw`` so it can be passed through to the next request.
"""

import base64
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

from ..errors import ParseError

if TYPE_CHECKING:
    from solders.transaction import VersionedTransaction


def _require_object(data: Any, schema: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ParseError(f"{schema} response is not a JSON object", payload=data)
    return data


def _require(data: Dict[str, Any], key: str, schema: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise ParseError.missing_field(schema, key, data)
    return value


def _first(data: Dict[str, Any], *keys: str) -> Any:
    """First non-empty value among aliased keys"""
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


def _as_int(value: Any, name: str, schema: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"{schema} field '{name}' is not an integer: {value!r}", original_error=e)


def _optional_int(value: Any, name: str, schema: str) -> Optional[int]:
    if value in (None, ""):
        return None
    return _as_int(value, name, schema)


def _error_message(data: Dict[str, Any]) -> Optional[str]:
    value = _first(data, "error", "errorMessage", "message", "cause")
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass
class QuoteResponse:
    """
    Swap quote returned by /swap/v1/quote

    Attributes:
        input_mint: Input token mint
        output_mint: Output token mint
        in_amount: Input amount (raw)
        out_amount: Output amount (raw)
        other_amount_threshold: Minimum output after slippage (raw)
        swap_mode: "ExactIn" or "ExactOut"
        slippage_bps: Applied slippage in basis points
        price_impact_pct: Price impact as reported by the API
        route: DEX labels of each route step
        raw: Raw response, sent back verbatim as quoteResponse
    """
    input_mint: str
    output_mint: str
    in_amount: int
    out_amount: int
    other_amount_threshold: Optional[int] = None
    swap_mode: str = "ExactIn"
    slippage_bps: int = 0
    price_impact_pct: Decimal = Decimal(0)
    route: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Any) -> "QuoteResponse":
        schema = "quote"
        data = _require_object(data, schema)
        try:
            price_impact = Decimal(str(data.get("priceImpactPct") or 0))
        except InvalidOperation as e:
            raise ParseError("quote field 'priceImpactPct' is not numeric", original_error=e)

        route_plan = data.get("routePlan") or []
        route = [
            (step.get("swapInfo") or {}).get("label", "")
            for step in route_plan
            if isinstance(step, dict)
        ]

        return cls(
            input_mint=_require(data, "inputMint", schema),
            output_mint=_require(data, "outputMint", schema),
            in_amount=_as_int(_require(data, "inAmount", schema), "inAmount", schema),
            out_amount=_as_int(_require(data, "outAmount", schema), "outAmount", schema),
            other_amount_threshold=_optional_int(data.get("otherAmountThreshold"), "otherAmountThreshold", schema),
            swap_mode=data.get("swapMode") or "ExactIn",
            slippage_bps=_as_int(data.get("slippageBps", 0), "slippageBps", schema),
            price_impact_pct=price_impact,
            route=route,
            raw=data,
        )

    def __str__(self) -> str:
        return f"Quote({self.in_amount} -> {self.out_amount}, impact={self.price_impact_pct}, route={self.route})"


@dataclass
class SwapTransaction:
    """Serialized swap transaction returned by /swap/v1/swap"""
    swap_transaction: str
    last_valid_block_height: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Any) -> "SwapTransaction":
        schema = "swap"
        data = _require_object(data, schema)
        return cls(
            swap_transaction=_require(data, "swapTransaction", schema),
            last_valid_block_height=_optional_int(
                data.get("lastValidBlockHeight"), "lastValidBlockHeight", schema
            ),
            raw=data,
        )


# Order in which instruction groups are assembled into the transaction;
# otherInstructions go last, after cleanup
SWAP_INSTRUCTION_GROUPS = (
    "tokenLedgerInstruction",
    "computeBudgetInstructions",
    "setupInstructions",
    "swapInstruction",
    "cleanupInstruction",
    "otherInstructions",
)


@dataclass
class SwapInstructions:
    """
    Raw instruction set returned by /swap/v1/swap-instructions

    Attributes:
        instructions: Instruction objects in execution order; an entry is a
            JSON instruction dict, or a string when the API returned a
            compiled instruction
        address_lookup_table_addresses: ALT addresses for the v0 message
    """
    instructions: List[Union[Dict[str, Any], str]]
    address_lookup_table_addresses: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Any) -> "SwapInstructions":
        schema = "swap-instructions"
        data = _require_object(data, schema)

        instructions: List[Union[Dict[str, Any], str]] = []
        for group in SWAP_INSTRUCTION_GROUPS:
            value = data.get(group)
            if value is None:
                continue
            if isinstance(value, list):
                instructions.extend(value)
            else:
                instructions.append(value)

        if not instructions:
            raise ParseError(
                "swap-instructions API returned no instructions - check amount/slippage",
                payload=data,
            )

        alts = data.get("addressLookupTableAddresses") or []
        if not isinstance(alts, list):
            raise ParseError("swap-instructions field 'addressLookupTableAddresses' is not a list", payload=data)

        return cls(
            instructions=instructions,
            address_lookup_table_addresses=[str(a) for a in alts],
            raw=data,
        )


@dataclass
class UltraOrder:
    """
    Order returned by /ultra/v1/order

    transaction is None when the API cannot build one (e.g. insufficient
    funds); error then carries the reason.
    """
    request_id: str
    transaction: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[Any] = None
    in_amount: Optional[int] = None
    out_amount: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Any) -> "UltraOrder":
        schema = "ultra order"
        data = _require_object(data, schema)
        return cls(
            request_id=_require(data, "requestId", schema),
            transaction=_first(data, "transaction"),
            error=_error_message(data),
            error_code=_first(data, "errorCode", "code"),
            in_amount=_optional_int(data.get("inAmount"), "inAmount", schema),
            out_amount=_optional_int(data.get("outAmount"), "outAmount", schema),
            raw=data,
        )


@dataclass
class CreateOrderResponse:
    """Unsigned order transaction returned by Trigger / Recurring createOrder"""
    transaction: Optional[str] = None
    request_id: Optional[str] = None
    order: Optional[str] = None
    error: Optional[str] = None
    code: Optional[Any] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Any) -> "CreateOrderResponse":
        data = _require_object(data, "createOrder")
        transaction = _first(data, "transaction", "tx", "transactions")
        if isinstance(transaction, list):
            transaction = transaction[0] if transaction else None
        return cls(
            transaction=transaction,
            request_id=_first(data, "requestId", "request_id"),
            order=_first(data, "order"),
            error=_error_message(data),
            code=data.get("code"),
            raw=data,
        )


@dataclass
class ExecuteResponse:
    """Result of Ultra / Trigger / Recurring execute"""
    status: str
    signature: Optional[str] = None
    slot: Optional[int] = None
    order: Optional[str] = None
    error: Optional[str] = None
    code: Optional[Any] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_success(self) -> bool:
        return self.status.lower() == "success"

    @classmethod
    def from_json(cls, data: Any) -> "ExecuteResponse":
        schema = "execute"
        data = _require_object(data, schema)
        return cls(
            status=str(_require(data, "status", schema)),
            signature=_first(data, "signature"),
            slot=_optional_int(data.get("slot"), "slot", schema),
            order=_first(data, "order"),
            error=_error_message(data),
            code=data.get("code"),
            raw=data,
        )


@dataclass
class SignedTransaction:
    """Versioned transaction carrying the local keypair's signature"""
    transaction: "VersionedTransaction"
    signature: str

    def to_bytes(self) -> bytes:
        return bytes(self.transaction)

    def to_base64(self) -> str:
        return base64.b64encode(self.to_bytes()).decode("ascii")


class SubmissionStatus(Enum):
    """Terminal status of a flow"""
    SUCCESS = "success"
    TIMEOUT = "timeout"
    PENDING = "pending"


@dataclass
class SubmissionResult:
    """
    Terminal result of a flow

    Attributes:
        status: Submission status
        signature: Transaction signature (base58)
        flow: Flow name that produced the result
        slot: Slot reported by the execute endpoint
        order: Order account (Trigger / Recurring)
        raw: Raw execute response, if any
    """
    status: SubmissionStatus
    signature: str
    flow: str = ""
    slot: Optional[int] = None
    order: Optional[str] = None
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False)

    @property
    def is_success(self) -> bool:
        return self.status == SubmissionStatus.SUCCESS

    @property
    def is_timeout(self) -> bool:
        return self.status == SubmissionStatus.TIMEOUT

    @classmethod
    def success(cls, signature: str, flow: str = "", **kwargs) -> "SubmissionResult":
        return cls(status=SubmissionStatus.SUCCESS, signature=signature, flow=flow, **kwargs)

    @classmethod
    def timeout(cls, signature: str, flow: str = "", **kwargs) -> "SubmissionResult":
        """Sent but not confirmed in time; check the signature on-chain"""
        return cls(status=SubmissionStatus.TIMEOUT, signature=signature, flow=flow, **kwargs)

    @classmethod
    def pending(cls, signature: str, flow: str = "", **kwargs) -> "SubmissionResult":
        return cls(status=SubmissionStatus.PENDING, signature=signature, flow=flow, **kwargs)

    def __str__(self) -> str:
        parts = [self.status.value, self.signature]
        if self.order:
            parts.append(f"order={self.order}")
        if self.slot is not None:
            parts.append(f"slot={self.slot}")
        return f"SubmissionResult({self.flow}: {', '.join(parts)})"
