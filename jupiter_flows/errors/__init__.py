"""
Error definitions for Jupiter flows
"""

from .exceptions import (
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

__all__ = [
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
