"""
Transaction signing

Local keypair signer modeled as a scoped resource: use it as a context
manager and the keypair reference is dropped when the scope exits.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Optional, Protocol, runtime_checkable

import base58
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from ..errors import SigningError
from ..config import config as global_config
from ..types import SignedTransaction

logger = logging.getLogger(__name__)


@runtime_checkable
class Signer(Protocol):
    """Anything that can fill its own slot in a VersionedTransaction"""

    @property
    def pubkey(self) -> str:
        ...

    def sign(self, message: bytes) -> bytes:
        """Sign message bytes, returning a 64-byte signature"""
        ...

    def sign_transaction(self, transaction: VersionedTransaction) -> SignedTransaction:
        """Sign a transaction in the signer's required slot"""
        ...


def message_bytes(transaction: VersionedTransaction) -> bytes:
    """
    Bytes covered by the transaction signatures

    MessageV0 is signed with its 0x80 version prefix; legacy messages are
    signed as-is.
    """
    message = transaction.message
    raw = bytes(message)
    if isinstance(message, MessageV0):
        raw = bytes([0x80]) + raw
    return raw


class LocalSigner:
    """
    Local signer using a Solana keypair

    Usage:
        with LocalSigner.from_file("~/.config/solana/id.json") as signer:
            signed = signer.sign_transaction(unsigned_tx)
    """

    def __init__(self, keypair: Keypair):
        self._keypair: Optional[Keypair] = keypair
        self._pubkey = str(keypair.pubkey())

    @property
    def pubkey(self) -> str:
        return self._pubkey

    @property
    def released(self) -> bool:
        return self._keypair is None

    def _require_keypair(self) -> Keypair:
        if self._keypair is None:
            raise SigningError.released()
        return self._keypair

    def sign(self, message: bytes) -> bytes:
        """Sign message bytes"""
        return bytes(self._require_keypair().sign_message(message))

    def sign_transaction(self, transaction: VersionedTransaction) -> SignedTransaction:
        """
        Sign a versioned transaction

        Args:
            transaction: Unsigned (or partially signed) VersionedTransaction

        Returns:
            SignedTransaction with our signature in its signer slot

        Raises:
            SigningError: Signer released, or keypair is not a required signer
        """
        keypair = self._require_keypair()
        message = transaction.message
        num_required = message.header.num_required_signatures
        # signers occupy the first num_required_signatures account keys
        signer_keys = list(message.account_keys)[:num_required]
        try:
            slot = signer_keys.index(keypair.pubkey())
        except ValueError:
            raise SigningError.not_a_signer(self._pubkey, [str(k) for k in signer_keys]) from None

        signature = keypair.sign_message(message_bytes(transaction))

        # Keep signatures already present for other signer slots
        signatures = list(transaction.signatures)[:num_required]
        signatures += [Signature.default()] * (num_required - len(signatures))
        signatures[slot] = signature

        signed = VersionedTransaction.populate(message, signatures)
        logger.debug(f"Signed transaction {signature} with {self._pubkey}")
        return SignedTransaction(transaction=signed, signature=str(signature))

    def close(self):
        """Drop the keypair reference"""
        self._keypair = None

    def __enter__(self) -> "LocalSigner":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __repr__(self) -> str:
        state = "released" if self.released else "active"
        return f"LocalSigner({self._pubkey}, {state})"

    @classmethod
    def from_bytes(cls, secret_key: bytes) -> "LocalSigner":
        """From the raw 64-byte secret+public key pair"""
        if len(secret_key) != 64:
            raise SigningError.invalid_key(f"expected 64 bytes, got {len(secret_key)}")
        try:
            keypair = Keypair.from_bytes(secret_key)
        except ValueError as e:
            raise SigningError.invalid_key(str(e), e) from e
        return cls(keypair)

    @classmethod
    def from_base58(cls, secret_key: str) -> "LocalSigner":
        """From the base58 string printed by most wallets"""
        try:
            secret_bytes = base58.b58decode(secret_key.strip())
        except ValueError as e:
            raise SigningError.invalid_key("secret key is not valid base58", e) from e
        return cls.from_bytes(secret_bytes)

    @classmethod
    def from_file(cls, path: str) -> "LocalSigner":
        """
        From a keypair file on disk

        Accepts the solana-keygen JSON byte array or a bare 64-byte file.
        A leading ~ is expanded.
        """
        path = os.path.expanduser(path)
        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise SigningError.invalid_key(f"cannot read keypair file {path}: {e}", e) from e

        try:
            data = json.loads(content.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            data = None

        if isinstance(data, list):
            try:
                secret_bytes = bytes(data)
            except (TypeError, ValueError) as e:
                raise SigningError.invalid_key(f"keypair file {path} is not a byte array", e) from e
            return cls.from_bytes(secret_bytes)

        if len(content) == 64:
            return cls.from_bytes(content)

        raise SigningError.invalid_key(f"cannot parse keypair file: {path}")


def create_signer(
    secret_key: Optional[str] = None,
    keypair_path: Optional[str] = None,
    keypair: Optional[Keypair] = None,
) -> LocalSigner:
    """
    Build the local signer

    An explicit keypair wins. Otherwise secret_key (SECRET_KEY, base58) is
    tried before keypair_path (KEYPAIR_PATH). Arguments left as None are
    read from the environment config.

    Raises:
        SigningError: If no keypair is configured or the key is invalid
    """
    if keypair is not None:
        return LocalSigner(keypair)

    secret_key = secret_key if secret_key is not None else global_config.signer.secret_key
    if secret_key:
        return LocalSigner.from_base58(secret_key)

    keypair_path = keypair_path if keypair_path is not None else global_config.signer.keypair_path
    if keypair_path:
        return LocalSigner.from_file(keypair_path)

    raise SigningError.not_configured()
