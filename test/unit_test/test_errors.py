"""
Test Errors Module

Tests for jupiter_flows.errors package.
"""

import sys
from decimal import Decimal
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_error_code():
    """Test ErrorCode enum"""
    from jupiter_flows.errors import ErrorCode

    print("Testing ErrorCode...")

    assert ErrorCode.REMOTE_CONNECTION_FAILED.value == "1001"
    assert ErrorCode.PARSE_FAILED.value == "2001"
    assert ErrorCode.DECODE_FAILED.value == "2002"
    assert ErrorCode.SIGNER_RELEASED.value == "3004"
    assert ErrorCode.ORDER_BELOW_MINIMUM.value == "4003"
    assert ErrorCode.CONFIG_MISSING.value == "9002"

    print("  ErrorCode: PASSED")


def test_jupiter_flow_error():
    """Test JupiterFlowError base class"""
    from jupiter_flows.errors import JupiterFlowError, ErrorCode

    print("Testing JupiterFlowError...")

    cause = ValueError("boom")
    error = JupiterFlowError("Test error", ErrorCode.PARSE_FAILED, original_error=cause)

    # __str__ returns "[code] message" format
    assert str(error) == "[2001] Test error"
    assert error.original_error is cause
    assert error.details == {}

    print("  JupiterFlowError: PASSED")


def test_remote_error():
    """Test RemoteError constructors"""
    from jupiter_flows.errors import RemoteError, ErrorCode

    print("Testing RemoteError...")

    error1 = RemoteError.connection_failed("https://lite-api.jup.ag/swap/v1/quote")
    assert error1.code == ErrorCode.REMOTE_CONNECTION_FAILED
    assert error1.url == "https://lite-api.jup.ag/swap/v1/quote"

    error2 = RemoteError.timeout("https://rpc.example.com", 30)
    assert error2.code == ErrorCode.REMOTE_TIMEOUT
    assert "30" in error2.message

    error3 = RemoteError.http_status("https://lite-api.jup.ag/ultra/v1/order", 429, "Rate limited")
    assert error3.code == ErrorCode.REMOTE_HTTP_STATUS
    assert error3.status_code == 429
    assert "Rate limited" in str(error3)

    print("  RemoteError: PASSED")


def test_rpc_error():
    """Test RpcError is a RemoteError"""
    from jupiter_flows.errors import RpcError, RemoteError, ErrorCode

    print("Testing RpcError...")

    error = RpcError("RPC error: Blockhash not found", rpc_code=-32002, rpc_data={"logs": []})
    assert isinstance(error, RemoteError)
    assert error.code == ErrorCode.RPC_ERROR
    assert error.rpc_code == -32002
    assert error.details["rpc_data"] == {"logs": []}

    print("  RpcError: PASSED")


def test_signing_error():
    """Test SigningError constructors"""
    from jupiter_flows.errors import SigningError, ErrorCode

    print("Testing SigningError...")

    assert SigningError.not_configured().code == ErrorCode.SIGNER_NOT_CONFIGURED
    assert "SECRET_KEY" in SigningError.not_configured().message
    assert SigningError.released().code == ErrorCode.SIGNER_RELEASED

    error = SigningError.not_a_signer("Abc", ["Def"])
    assert error.code == ErrorCode.SIGNER_NOT_REQUIRED
    assert "Def" in error.message

    print("  SigningError: PASSED")


def test_submission_error():
    """Test SubmissionError constructors"""
    from jupiter_flows.errors import SubmissionError, ErrorCode

    print("Testing SubmissionError...")

    on_chain = SubmissionError.failed_on_chain("5sig", {"InstructionError": [0, "Custom"]})
    assert on_chain.code == ErrorCode.SUBMISSION_FAILED_ON_CHAIN
    assert on_chain.signature == "5sig"
    assert on_chain.details["err"] == {"InstructionError": [0, "Custom"]}

    below = SubmissionError.below_minimum("trigger", Decimal(5), Decimal(1))
    assert below.code == ErrorCode.ORDER_BELOW_MINIMUM
    assert below.signature is None
    assert "minimum order size of 5 USD" in below.message
    assert below.details["actual"] == "1"

    failed = SubmissionError.execute_failed("ultra", "Failed", "Slippage exceeded", "5sig", -1005)
    assert failed.code == ErrorCode.EXECUTE_FAILED
    assert failed.details["code"] == -1005
    assert "Slippage exceeded" in str(failed)

    print("  SubmissionError: PASSED")


def test_error_inheritance():
    """Test error class hierarchy"""
    from jupiter_flows.errors import (
        JupiterFlowError,
        RemoteError,
        RpcError,
        ParseError,
        DecodeError,
        SigningError,
        SubmissionError,
        ConfigurationError,
    )

    print("Testing error inheritance...")

    for cls in (RemoteError, RpcError, ParseError, DecodeError, SigningError, SubmissionError, ConfigurationError):
        assert issubclass(cls, JupiterFlowError), f"{cls.__name__} should derive from JupiterFlowError"

    assert not issubclass(ParseError, DecodeError)

    print("  Error inheritance: PASSED")


def main():
    """Run all error tests"""
    print("=" * 60)
    print("Jupiter Flows Errors Tests")
    print("=" * 60)

    tests = [
        test_error_code,
        test_jupiter_flow_error,
        test_remote_error,
        test_rpc_error,
        test_signing_error,
        test_submission_error,
        test_error_inheritance,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
