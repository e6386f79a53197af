"""
RPC Client for Solana

Minimal JSON-RPC client covering what the flows need: blockhash, account
lookups, transaction submission and confirmation polling.
"""

from __future__ import annotations

import base64
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..errors import RemoteError, RpcError, SubmissionError, ConfigurationError
from ..config import config as global_config

logger = logging.getLogger(__name__)


@dataclass
class RpcClientConfig:
    """Timeout and commitment for one RpcClient; None falls back to RPC_* env settings"""
    timeout_seconds: float = None
    commitment: str = None

    def __post_init__(self):
        if self.timeout_seconds is None:
            self.timeout_seconds = global_config.rpc.timeout_seconds
        if self.commitment is None:
            self.commitment = global_config.rpc.commitment


class RpcClient:
    """
    Solana JSON-RPC client

    Usage:
        rpc = RpcClient("https://api.mainnet-beta.solana.com")
        blockhash = rpc.get_latest_blockhash()["blockhash"]
        sig = rpc.send_transaction(signed_tx_bytes)
        rpc.confirm_transaction(sig)
    """

    def __init__(
        self,
        endpoint: str,
        config: Optional[RpcClientConfig] = None,
    ):
        if not endpoint:
            raise ConfigurationError.missing("RPC endpoint (RPC_URL)")

        self._endpoint = endpoint
        self._config = config or RpcClientConfig()
        self._client: Optional[httpx.Client] = None
        self._request_id = 0

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def commitment(self) -> str:
        return self._config.commitment

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._config.timeout_seconds)
        return self._client

    def call(self, method: str, params: List[Any]) -> Any:
        """
        Make JSON-RPC call

        Args:
            method: RPC method name
            params: RPC parameters

        Returns:
            RPC result

        Raises:
            RemoteError: Transport failure or non-success HTTP status
            RpcError: Node returned a JSON-RPC error object
        """
        self._request_id += 1
        body = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        try:
            response = self._http().post(self._endpoint, json=body)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise RemoteError.timeout(self._endpoint, self._config.timeout_seconds) from e
        except httpx.HTTPStatusError as e:
            raise RemoteError.http_status(self._endpoint, e.response.status_code, e.response.text) from e
        except httpx.RequestError as e:
            raise RemoteError.connection_failed(self._endpoint, e) from e

        try:
            result = response.json()
        except ValueError as e:
            raise RemoteError(
                f"RPC {method} returned a non-JSON body",
                original_error=e,
                url=self._endpoint,
                status_code=response.status_code,
            ) from e

        if "error" in result:
            error = result["error"] or {}
            raise RpcError(
                f"RPC error: {error.get('message', error)}",
                url=self._endpoint,
                rpc_code=error.get("code"),
                rpc_data=error.get("data"),
            )

        return result.get("result")

    def get_latest_blockhash(self, commitment: Optional[str] = None) -> Dict[str, Any]:
        """The `value` object of getLatestBlockhash (blockhash, lastValidBlockHeight)"""
        result = self.call("getLatestBlockhash", [{"commitment": commitment or self.commitment}])
        return (result or {}).get("value", {})

    def get_multiple_accounts(
        self,
        addresses: List[str],
        encoding: str = "base64",
        commitment: Optional[str] = None,
    ) -> List[Optional[Dict[str, Any]]]:
        """Account infos in the order of addresses, None where an account does not exist"""
        if not addresses:
            return []
        options = {"encoding": encoding, "commitment": commitment or self.commitment}
        result = self.call("getMultipleAccounts", [addresses, options])
        return (result or {}).get("value", [])

    def send_transaction(
        self,
        transaction: bytes,
        skip_preflight: Optional[bool] = None,
        preflight_commitment: Optional[str] = None,
    ) -> str:
        """
        Send signed transaction

        Args:
            transaction: Serialized, fully signed transaction
            skip_preflight: Skip preflight simulation (default from config)
            preflight_commitment: Commitment used for the preflight simulation

        Returns:
            Base58 signature echoed by the node

        Raises:
            SubmissionError: Node rejected the transaction or could not be reached
        """
        if skip_preflight is None:
            skip_preflight = global_config.tx.skip_preflight

        params = [
            base64.b64encode(transaction).decode("ascii"),
            {
                "skipPreflight": skip_preflight,
                "preflightCommitment": preflight_commitment or self.commitment,
                "encoding": "base64",
            },
        ]

        try:
            signature = self.call("sendTransaction", params)
        except RpcError as e:
            rejected = SubmissionError.rejected(e.message, e)
            rejected.details["rpc_code"] = e.rpc_code
            if isinstance(e.rpc_data, dict):
                rejected.details["logs"] = e.rpc_data.get("logs")
            raise rejected from e
        except RemoteError as e:
            raise SubmissionError.rejected(e.message, e) from e

        if not signature:
            raise SubmissionError.rejected("sendTransaction returned no signature")
        return signature

    def get_signature_statuses(self, signatures: List[str]) -> List[Optional[Dict[str, Any]]]:
        """Get confirmation status of signatures"""
        result = self.call("getSignatureStatuses", [signatures])
        return (result or {}).get("value") or []

    def confirm_transaction(
        self,
        signature: str,
        timeout_seconds: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> Optional[bool]:
        """
        Poll getSignatureStatuses until the signature reaches confirmed

        Args:
            signature: Signature returned by send_transaction
            timeout_seconds: Max wait time (default from config)
            poll_interval: Seconds between status queries (default from config)

        Returns:
            True if confirmed, None if timeout

        Raises:
            SubmissionError: Transaction failed on-chain
        """
        if timeout_seconds is None:
            timeout_seconds = global_config.tx.confirmation_timeout
        if poll_interval is None:
            poll_interval = global_config.tx.poll_interval

        deadline = time.monotonic() + timeout_seconds
        last_status = None

        while time.monotonic() < deadline:
            try:
                statuses = self.get_signature_statuses([signature])
            except RemoteError as e:
                logger.debug(f"Status poll for {signature} failed: {e}")
                statuses = []

            status = statuses[0] if statuses else None
            if status:
                last_status = status
                if status.get("err"):
                    logger.warning(f"Transaction {signature} failed on-chain: {status.get('err')}")
                    raise SubmissionError.failed_on_chain(signature, status.get("err"))
                if status.get("confirmationStatus") in ("confirmed", "finalized"):
                    return True

            time.sleep(poll_interval)

        if last_status is None:
            logger.warning(f"Transaction {signature} was never seen on chain (dropped/expired)")
        else:
            seen = last_status.get("confirmationStatus") or "unknown"
            logger.warning(f"Gave up waiting on {signature} after {timeout_seconds}s (last seen: {seen})")
        return None

    def close(self):
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
