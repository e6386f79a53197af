"""
Exception definitions for Jupiter flows
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes for flow steps

    1xxx - Remote (HTTP / RPC transport) errors
    2xxx - Response parsing / payload decoding errors
    3xxx - Signing errors
    4xxx - Submission errors
    9xxx - Configuration errors
    """
    # Remote errors
    REMOTE_CONNECTION_FAILED = "1001"
    REMOTE_TIMEOUT = "1002"
    REMOTE_HTTP_STATUS = "1003"
    RPC_ERROR = "1004"

    # Parse / decode errors
    PARSE_FAILED = "2001"
    DECODE_FAILED = "2002"

    # Signing errors
    SIGNER_NOT_CONFIGURED = "3001"
    SIGNER_INVALID_KEY = "3002"
    SIGNER_NOT_REQUIRED = "3003"
    SIGNER_RELEASED = "3004"

    # Submission errors
    SUBMISSION_REJECTED = "4001"
    SUBMISSION_FAILED_ON_CHAIN = "4002"
    ORDER_BELOW_MINIMUM = "4003"
    EXECUTE_FAILED = "4004"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class JupiterFlowError(Exception):
    """
    Base exception for all flow errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class RemoteError(JupiterFlowError):
    """
    Network or HTTP failure talking to a remote service

    Raised when:
    - Connection to the Jupiter API or RPC node fails
    - Request times out
    - Response has a non-success HTTP status
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.REMOTE_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            message,
            code,
            original_error=original_error,
            details={"url": url, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code

    @classmethod
    def connection_failed(cls, url: str, error: Exception = None) -> "RemoteError":
        return cls(
            f"Failed to connect to {url}: {error}",
            ErrorCode.REMOTE_CONNECTION_FAILED,
            original_error=error,
            url=url,
        )

    @classmethod
    def timeout(cls, url: str, timeout_seconds: float) -> "RemoteError":
        return cls(
            f"Request to {url} timed out after {timeout_seconds}s",
            ErrorCode.REMOTE_TIMEOUT,
            url=url,
        )

    @classmethod
    def http_status(cls, url: str, status_code: int, body: str = "") -> "RemoteError":
        message = f"HTTP {status_code} from {url}"
        if body:
            message = f"{message}: {body}"
        return cls(
            message,
            ErrorCode.REMOTE_HTTP_STATUS,
            url=url,
            status_code=status_code,
        )


class RpcError(RemoteError):
    """JSON-RPC error object returned by the Solana node"""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        rpc_code: Optional[int] = None,
        rpc_data: Optional[object] = None,
    ):
        super().__init__(message, ErrorCode.RPC_ERROR, url=url)
        self.rpc_code = rpc_code
        self.rpc_data = rpc_data
        self.details["rpc_code"] = rpc_code
        self.details["rpc_data"] = rpc_data


class ParseError(JupiterFlowError):
    """Response body cannot be decoded into the expected schema"""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        payload: Optional[object] = None,
    ):
        super().__init__(
            message,
            ErrorCode.PARSE_FAILED,
            original_error=original_error,
            details={"payload": payload} if payload is not None else None,
        )
        self.payload = payload

    @classmethod
    def missing_field(cls, schema: str, name: str, payload: object = None) -> "ParseError":
        return cls(f"{schema} response is missing '{name}'", payload=payload)

    @classmethod
    def invalid_json(cls, url: str, error: Exception = None) -> "ParseError":
        return cls(f"Response from {url} is not valid JSON", original_error=error)


class DecodeError(JupiterFlowError):
    """Transaction payload has a malformed wire encoding"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DECODE_FAILED, original_error=original_error)

    @classmethod
    def invalid_base64(cls, error: Exception = None) -> "DecodeError":
        return cls(f"Transaction payload is not valid base64: {error}", original_error=error)

    @classmethod
    def invalid_transaction(cls, error: Exception = None) -> "DecodeError":
        return cls(f"Payload is not a serialized versioned transaction: {error}", original_error=error)


class SigningError(JupiterFlowError):
    """
    Signing-related errors

    Raised when:
    - No keypair configured
    - Key material is invalid
    - Keypair is not a required signer of the message
    - Signer was used after being released
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SIGNER_INVALID_KEY,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, code, original_error=original_error)

    @classmethod
    def not_configured(cls) -> "SigningError":
        return cls(
            "No keypair configured. Set SECRET_KEY or KEYPAIR_PATH.",
            ErrorCode.SIGNER_NOT_CONFIGURED,
        )

    @classmethod
    def invalid_key(cls, reason: str, error: Exception = None) -> "SigningError":
        return cls(f"Invalid keypair: {reason}", ErrorCode.SIGNER_INVALID_KEY, original_error=error)

    @classmethod
    def not_a_signer(cls, pubkey: str, expected: list) -> "SigningError":
        return cls(
            f"Wallet {pubkey} is not in the required signers list. Expected signers: {expected}",
            ErrorCode.SIGNER_NOT_REQUIRED,
        )

    @classmethod
    def released(cls) -> "SigningError":
        return cls("Signer has been released; keypair is no longer available", ErrorCode.SIGNER_RELEASED)


class SubmissionError(JupiterFlowError):
    """
    Submission errors

    Raised when:
    - RPC node rejects the transaction
    - Transaction fails on-chain
    - Jupiter execute reports a failure
    - Order is below the minimum size
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SUBMISSION_REJECTED,
        signature: Optional[str] = None,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        merged = {"signature": signature}
        if details:
            merged.update(details)
        super().__init__(message, code, original_error=original_error, details=merged)
        self.signature = signature

    @classmethod
    def rejected(cls, reason: str, error: Exception = None) -> "SubmissionError":
        return cls(
            f"Transaction rejected: {reason}",
            ErrorCode.SUBMISSION_REJECTED,
            original_error=error,
        )

    @classmethod
    def failed_on_chain(cls, signature: str, err: object) -> "SubmissionError":
        return cls(
            f"Transaction {signature} failed on-chain: {err}",
            ErrorCode.SUBMISSION_FAILED_ON_CHAIN,
            signature=signature,
            details={"err": err},
        )

    @classmethod
    def below_minimum(
        cls,
        flow: str,
        minimum: object = None,
        actual: object = None,
        error: Exception = None,
    ) -> "SubmissionError":
        message = f"{flow} order is below the minimum order size"
        if minimum is not None:
            message = f"{message} of {minimum} USD"
        if actual is not None:
            message = f"{message} (got {actual} USD)"
        return cls(
            message,
            ErrorCode.ORDER_BELOW_MINIMUM,
            original_error=error,
            details={
                "flow": flow,
                "minimum": None if minimum is None else str(minimum),
                "actual": None if actual is None else str(actual),
            },
        )

    @classmethod
    def execute_failed(
        cls,
        flow: str,
        status: Optional[str],
        error: Optional[str],
        signature: Optional[str] = None,
        code: object = None,
    ) -> "SubmissionError":
        return cls(
            f"{flow} execute failed: status={status}, error={error}",
            ErrorCode.EXECUTE_FAILED,
            signature=signature,
            details={"flow": flow, "status": status, "error": error, "code": code},
        )


class ConfigurationError(JupiterFlowError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration or request values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
