"""
Jupiter API Client

REST API client for the Jupiter Swap, Ultra, Trigger and Recurring APIs.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ...types import (
    TradeRequest,
    QuoteResponse,
    SwapTransaction,
    SwapInstructions,
    UltraOrder,
    CreateOrderResponse,
    ExecuteResponse,
)
from ...config import config as global_config
from ...errors import RemoteError, ParseError, ConfigurationError

logger = logging.getLogger(__name__)

QUOTE_PATH = "/swap/v1/quote"
SWAP_PATH = "/swap/v1/swap"
SWAP_INSTRUCTIONS_PATH = "/swap/v1/swap-instructions"
ULTRA_ORDER_PATH = "/ultra/v1/order"
ULTRA_EXECUTE_PATH = "/ultra/v1/execute"
TRIGGER_CREATE_PATH = "/trigger/v1/createOrder"
TRIGGER_EXECUTE_PATH = "/trigger/v1/execute"
RECURRING_CREATE_PATH = "/recurring/v1/createOrder"
RECURRING_EXECUTE_PATH = "/recurring/v1/execute"

# Ultra rejects referral fees below this value
ULTRA_MIN_REFERRAL_FEE_BPS = 50


def _error_detail(response: httpx.Response) -> str:
    """Best-effort error message from a failed response body"""
    try:
        data = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(data, dict):
        for key in ("error", "errorMessage", "message", "cause"):
            if data.get(key):
                return str(data[key])
    return str(data)[:500]


class JupiterAPI:
    """
    Jupiter REST API client

    Every call is a single request: no retries. Failures surface as
    RemoteError (transport / HTTP status) or ParseError (response schema).

    Usage:
        api = JupiterAPI()
        quote = api.get_quote(request)
        swap = api.get_swap_transaction(quote, user_pubkey)
    """

    def __init__(
        self,
        base_url: str = None,
        api_key: str = None,
        timeout: float = None,
    ):
        """
        Initialize Jupiter API client

        Args:
            base_url: API base URL (default from config)
            api_key: Optional API key sent as X-API-KEY (default from config)
            timeout: Request timeout in seconds (default from config)
        """
        base_url = base_url if base_url is not None else global_config.jupiter.base_url
        if not base_url:
            raise ConfigurationError.missing("JUPITER_BASE_URL")

        self._base_url = base_url.rstrip("/")
        self._api_key = api_key if api_key is not None else global_config.jupiter.api_key
        self._timeout = timeout if timeout is not None else global_config.jupiter.timeout
        self._client: Optional[httpx.Client] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client"""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self._api_key:
                headers["X-API-KEY"] = self._api_key
            self._client = httpx.Client(timeout=self._timeout, headers=headers)
        return self._client

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body

        Raises:
            RemoteError: Transport failure or non-success status
            ParseError: Body is not JSON
        """
        client = self._get_client()
        url = f"{self._base_url}{path}"

        try:
            if method == "GET":
                response = client.get(url, params=params)
            else:
                response = client.post(url, json=body)
        except httpx.TimeoutException as e:
            raise RemoteError.timeout(url, self._timeout) from e
        except httpx.RequestError as e:
            raise RemoteError.connection_failed(url, e) from e

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning(f"Jupiter {method} {path} failed: HTTP {response.status_code} {detail}")
            raise RemoteError.http_status(url, response.status_code, detail)

        try:
            return response.json()
        except ValueError as e:
            raise ParseError.invalid_json(url, e) from e

    # ------------------------------------------------------------------
    # Swap API
    # ------------------------------------------------------------------

    def get_quote(
        self,
        request: TradeRequest,
        platform_fee_bps: Optional[int] = None,
    ) -> QuoteResponse:
        """
        Get swap quote

        Args:
            request: Trade request (mints, raw amount, slippage)
            platform_fee_bps: Optional integrator fee in basis points

        Returns:
            QuoteResponse with the raw payload kept for the swap request
        """
        params = {
            "inputMint": request.input_mint,
            "outputMint": request.output_mint,
            "amount": str(request.amount),
            "slippageBps": request.slippage_bps,
        }
        if platform_fee_bps:
            params["platformFeeBps"] = platform_fee_bps

        quote = QuoteResponse.from_json(self._request("GET", QUOTE_PATH, params=params))
        logger.info(f"Jupiter quote: {quote}")
        return quote

    def _swap_body(
        self,
        quote: QuoteResponse,
        user_pubkey: str,
        fee_account: Optional[str],
    ) -> Dict[str, Any]:
        body = {
            "quoteResponse": quote.raw,
            "userPublicKey": user_pubkey,
            "payer": user_pubkey,
        }
        if fee_account:
            body["feeAccount"] = fee_account
        return body

    def get_swap_transaction(
        self,
        quote: QuoteResponse,
        user_pubkey: str,
        fee_account: Optional[str] = None,
    ) -> SwapTransaction:
        """
        Get serialized swap transaction built against a quote

        Args:
            quote: Quote from get_quote()
            user_pubkey: User wallet public key (also fee payer)
            fee_account: Optional integrator fee token account

        Returns:
            SwapTransaction with base64 transaction
        """
        body = self._swap_body(quote, user_pubkey, fee_account)
        return SwapTransaction.from_json(self._request("POST", SWAP_PATH, body=body))

    def get_swap_instructions(
        self,
        quote: QuoteResponse,
        user_pubkey: str,
        fee_account: Optional[str] = None,
    ) -> SwapInstructions:
        """Get the raw instructions of a swap, in JSON instruction format"""
        body = self._swap_body(quote, user_pubkey, fee_account)
        body["instructionFormat"] = "json"
        return SwapInstructions.from_json(self._request("POST", SWAP_INSTRUCTIONS_PATH, body=body))

    # ------------------------------------------------------------------
    # Ultra API
    # ------------------------------------------------------------------

    def get_ultra_order(
        self,
        request: TradeRequest,
        taker: str,
        referral_account: Optional[str] = None,
        referral_fee_bps: Optional[int] = None,
    ) -> UltraOrder:
        """
        Get an Ultra order with an unsigned transaction

        The referral fee is raised to ULTRA_MIN_REFERRAL_FEE_BPS when lower.
        """
        params = {
            "inputMint": request.input_mint,
            "outputMint": request.output_mint,
            "amount": str(request.amount),
            "taker": taker,
        }
        if referral_account and referral_fee_bps:
            params["referralAccount"] = referral_account
            params["referralFee"] = max(referral_fee_bps, ULTRA_MIN_REFERRAL_FEE_BPS)

        order = UltraOrder.from_json(self._request("GET", ULTRA_ORDER_PATH, params=params))
        logger.info(f"Ultra order {order.request_id}: in={order.in_amount} out={order.out_amount}")
        return order

    def execute_ultra_order(self, signed_transaction: str, request_id: str) -> ExecuteResponse:
        """Submit a signed Ultra transaction"""
        body = {"signedTransaction": signed_transaction, "requestId": request_id}
        return ExecuteResponse.from_json(self._request("POST", ULTRA_EXECUTE_PATH, body=body))

    # ------------------------------------------------------------------
    # Trigger API
    # ------------------------------------------------------------------

    def create_trigger_order(
        self,
        request: TradeRequest,
        maker: str,
        fee_bps: Optional[int] = None,
        fee_account: Optional[str] = None,
    ) -> CreateOrderResponse:
        """
        Create a limit order

        Args:
            request: Trade request; amount is the making amount and
                request.trigger carries the taking amount and expiry
            maker: Order owner, also fee payer
            fee_bps: Optional integrator fee in basis points
            fee_account: Optional integrator fee account
        """
        trigger = request.trigger
        if trigger is None:
            raise ConfigurationError.missing("trigger parameters (TradeRequest.trigger)")

        params = {
            "makingAmount": str(request.amount),
            "takingAmount": str(trigger.taking_amount),
        }
        if trigger.expired_at is not None:
            params["expiredAt"] = str(trigger.expired_at)
        if trigger.slippage_bps is not None:
            params["slippageBps"] = str(trigger.slippage_bps)
        if fee_bps:
            params["feeBps"] = str(fee_bps)

        body = {
            "inputMint": request.input_mint,
            "outputMint": request.output_mint,
            "maker": maker,
            "payer": maker,
            "params": params,
        }
        if fee_bps and fee_account:
            body["feeAccount"] = fee_account

        return CreateOrderResponse.from_json(self._request("POST", TRIGGER_CREATE_PATH, body=body))

    def execute_trigger_order(self, signed_transaction: str, request_id: str) -> ExecuteResponse:
        """Submit a signed limit order transaction"""
        body = {"signedTransaction": signed_transaction, "requestId": request_id}
        return ExecuteResponse.from_json(self._request("POST", TRIGGER_EXECUTE_PATH, body=body))

    # ------------------------------------------------------------------
    # Recurring API
    # ------------------------------------------------------------------

    def create_recurring_order(self, request: TradeRequest, user: str) -> CreateOrderResponse:
        """
        Create a time-based recurring (DCA) order

        request.amount is the total input amount split across
        request.recurring.number_of_orders executions.
        """
        recurring = request.recurring
        if recurring is None:
            raise ConfigurationError.missing("recurring parameters (TradeRequest.recurring)")

        time_params = {
            "inAmount": request.amount,
            "numberOfOrders": recurring.number_of_orders,
            "interval": recurring.interval,
            "minPrice": recurring.min_price,
            "maxPrice": recurring.max_price,
            "startAt": recurring.start_at,
        }
        body = {
            "user": user,
            "inputMint": request.input_mint,
            "outputMint": request.output_mint,
            "params": {"time": time_params},
        }
        return CreateOrderResponse.from_json(self._request("POST", RECURRING_CREATE_PATH, body=body))

    def execute_recurring_order(self, signed_transaction: str, request_id: str) -> ExecuteResponse:
        """Submit a signed recurring order transaction"""
        body = {"signedTransaction": signed_transaction, "requestId": request_id}
        return ExecuteResponse.from_json(self._request("POST", RECURRING_EXECUTE_PATH, body=body))

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
