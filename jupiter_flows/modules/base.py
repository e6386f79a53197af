"""
Shared steps of the quote-and-execute flows
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional

from ..config import config
from ..errors import RemoteError, SubmissionError
from ..infra import decode_transaction
from ..types import (
    TradeRequest,
    CreateOrderResponse,
    ExecuteResponse,
    SignedTransaction,
    SubmissionResult,
)

if TYPE_CHECKING:
    from ..client import JupiterClient

logger = logging.getLogger(__name__)


class FlowModule:
    """
    Base class for a single fetch -> sign -> submit flow

    Subclasses implement run(request) and return a SubmissionResult.
    """

    name = "flow"
    default_request: Optional[TradeRequest] = None
    minimum_usd: Optional[Decimal] = None

    def __init__(self, client: "JupiterClient"):
        self._client = client

    @property
    def pubkey(self) -> str:
        return self._client.signer.pubkey

    def _resolve_request(self, request: Optional[TradeRequest]) -> TradeRequest:
        return request if request is not None else self.default_request

    def decode_and_sign(self, payload: str) -> SignedTransaction:
        """Decode a base64 transaction and sign it with the local keypair"""
        unsigned = decode_transaction(payload)
        signed = self._client.signer.sign_transaction(unsigned)
        logger.info(f"[{self.name}] signed transaction {signed.signature}")
        return signed

    def send_and_confirm(
        self,
        signed: SignedTransaction,
        wait_confirmation: Optional[bool] = None,
    ) -> SubmissionResult:
        """Submit to the RPC node and optionally poll for confirmation"""
        if wait_confirmation is None:
            wait_confirmation = config.tx.wait_confirmation

        rpc = self._client.rpc
        signature = rpc.send_transaction(signed.to_bytes())
        logger.info(f"[{self.name}] submitted {signature}")

        if not wait_confirmation:
            return SubmissionResult.pending(signature, flow=self.name)

        if rpc.confirm_transaction(signature):
            logger.info(f"[{self.name}] confirmed {signature}")
            return SubmissionResult.success(signature, flow=self.name)

        return SubmissionResult.timeout(signature, flow=self.name)

    def execute_with_jupiter(
        self,
        execute: Callable[[str, str], ExecuteResponse],
        signed: SignedTransaction,
        request_id: str,
    ) -> ExecuteResponse:
        """
        Hand a signed transaction to one of Jupiter's execute endpoints

        Raises:
            SubmissionError: Endpoint unreachable or the order was refused
        """
        try:
            return execute(signed.to_base64(), request_id)
        except RemoteError as e:
            logger.warning(f"[{self.name}] execute refused request {request_id}: {e.message}")
            if mentions_minimum(e.message):
                raise SubmissionError.below_minimum(self.name, self.minimum_usd, error=e) from e
            raise SubmissionError.rejected(e.message, e) from e

    def run(self, request: Optional[TradeRequest] = None) -> SubmissionResult:
        raise NotImplementedError


def mentions_minimum(message: Optional[str]) -> bool:
    """Whether an API error message reports a minimum order size violation"""
    if not message:
        return False
    lowered = message.lower()
    return "minimum" in lowered or "min order" in lowered


class OrderFlowModule(FlowModule):
    """
    createOrder -> sign -> execute flow shared by Trigger and Recurring

    Subclasses provide the create/execute calls and the minimum order check.
    """

    minimum_usd: Decimal = Decimal(0)

    def order_value_usd(self, request: TradeRequest) -> Optional[Decimal]:
        """USD value of the order when it can be computed locally"""
        return None

    def check_minimum(self, request: TradeRequest):
        """
        Raises:
            SubmissionError: Order value is known and below the minimum
        """
        value = self.order_value_usd(request)
        if value is not None and value < self.minimum_usd:
            logger.warning(f"[{self.name}] order of {value} USD is below minimum {self.minimum_usd} USD")
            raise SubmissionError.below_minimum(self.name, self.minimum_usd, value)

    def create_order(self, request: TradeRequest) -> CreateOrderResponse:
        raise NotImplementedError

    def execute_order(self, signed_transaction: str, request_id: str) -> ExecuteResponse:
        raise NotImplementedError

    def run(self, request: Optional[TradeRequest] = None) -> SubmissionResult:
        """
        Create, sign and execute an order

        Raises:
            SubmissionError: Below minimum, no transaction returned, or
                execute status other than Success
        """
        request = self._resolve_request(request)
        self.check_minimum(request)

        try:
            created = self.create_order(request)
        except RemoteError as e:
            if mentions_minimum(e.message):
                raise SubmissionError.below_minimum(self.name, self.minimum_usd, error=e) from e
            raise

        if not created.transaction:
            if mentions_minimum(created.error):
                raise SubmissionError.below_minimum(self.name, self.minimum_usd)
            raise SubmissionError.rejected(f"{self.name} createOrder returned no transaction: {created.error}")

        logger.info(f"[{self.name}] created order {created.order} (request {created.request_id})")
        signed = self.decode_and_sign(created.transaction)
        executed = self.execute_with_jupiter(self.execute_order, signed, created.request_id or "")

        if not executed.is_success:
            raise SubmissionError.execute_failed(
                self.name, executed.status, executed.error, executed.signature, executed.code
            )

        logger.info(f"[{self.name}] executed {executed.signature}")
        return SubmissionResult.success(
            executed.signature or signed.signature,
            flow=self.name,
            slot=executed.slot,
            order=executed.order or created.order,
            raw=executed.raw,
        )
