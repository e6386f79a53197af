"""
Transaction wire codec

Jupiter returns transactions as base64-encoded bincode-serialized
VersionedTransaction bytes; execute endpoints expect the same encoding back.
"""

import base64
import binascii

from solders.transaction import VersionedTransaction

from ..errors import DecodeError


def decode_transaction(payload: str) -> VersionedTransaction:
    """
    Decode a base64 transaction payload

    Args:
        payload: Base64 string from a Jupiter response

    Returns:
        Unsigned VersionedTransaction

    Raises:
        DecodeError: Payload is empty, not base64, or not a transaction
    """
    if not isinstance(payload, str) or not payload.strip():
        raise DecodeError("Transaction payload is empty")

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError.invalid_base64(e) from e

    try:
        transaction = VersionedTransaction.from_bytes(raw)
    except Exception as e:
        raise DecodeError.invalid_transaction(e) from e

    # from_bytes stops at the end of the message and ignores anything after it
    serialized = bytes(transaction)
    if serialized != raw:
        raise DecodeError.invalid_transaction(
            ValueError(f"payload is {len(raw)} bytes but the transaction spans {len(serialized)}")
        )
    return transaction


def encode_transaction(transaction: VersionedTransaction) -> str:
    """Serialize a transaction to base64"""
    return base64.b64encode(bytes(transaction)).decode("ascii")
