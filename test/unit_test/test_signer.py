"""
Unit tests for transaction codec and local signer
"""

import base64
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import base58
from solders.keypair import Keypair
from solders.signature import Signature

sys.path.insert(0, str(Path(__file__).parent.parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from jupiter_flows.errors import DecodeError, SigningError, ErrorCode
from jupiter_flows.infra import (
    LocalSigner,
    create_signer,
    decode_transaction,
    encode_transaction,
    message_bytes,
)
from flow_fixtures import make_unsigned_transaction, encode


class TestCodec(unittest.TestCase):
    """Tests for base64 transaction decoding"""

    def test_decode_round_trips_real_transaction(self):
        tx = make_unsigned_transaction(Keypair().pubkey())
        decoded = decode_transaction(encode(tx))
        self.assertEqual(bytes(decoded), bytes(tx))
        self.assertEqual(encode_transaction(decoded), encode(tx))

    def test_empty_payload(self):
        with self.assertRaises(DecodeError):
            decode_transaction("")

    def test_invalid_base64(self):
        with self.assertRaises(DecodeError) as ctx:
            decode_transaction("not base64 at all!!")
        self.assertEqual(ctx.exception.code, ErrorCode.DECODE_FAILED)

    def test_truncated_transaction(self):
        raw = bytes(make_unsigned_transaction(Keypair().pubkey()))
        corrupted = base64.b64encode(raw[: len(raw) // 2]).decode("ascii")
        with self.assertRaises(DecodeError):
            decode_transaction(corrupted)

    def test_trailing_bytes(self):
        raw = bytes(make_unsigned_transaction(Keypair().pubkey()))
        padded = base64.b64encode(raw + b"\x00" * 32).decode("ascii")
        with self.assertRaises(DecodeError) as ctx:
            decode_transaction(padded)
        self.assertEqual(ctx.exception.code, ErrorCode.DECODE_FAILED)

    def test_garbage_bytes(self):
        with self.assertRaises(DecodeError):
            decode_transaction(base64.b64encode(b"\xff" * 7).decode("ascii"))


class TestLocalSigner(unittest.TestCase):
    """Tests for LocalSigner"""

    def setUp(self):
        self.keypair = Keypair()
        self.signer = LocalSigner(self.keypair)

    def test_pubkey(self):
        self.assertEqual(self.signer.pubkey, str(self.keypair.pubkey()))

    def test_sign_transaction_verifies(self):
        tx = make_unsigned_transaction(self.keypair.pubkey())
        signed = self.signer.sign_transaction(tx)

        signature = signed.transaction.signatures[0]
        self.assertEqual(str(signature), signed.signature)
        self.assertTrue(signature.verify(self.keypair.pubkey(), message_bytes(tx)))
        self.assertNotEqual(signature, Signature.default())

    def test_repeated_signing_is_stable(self):
        """Ed25519 is deterministic: same key + same message -> same valid signature"""
        tx = make_unsigned_transaction(self.keypair.pubkey())
        first = self.signer.sign_transaction(tx)
        for _ in range(3):
            again = self.signer.sign_transaction(tx)
            self.assertEqual(again.signature, first.signature)
            self.assertTrue(
                again.transaction.signatures[0].verify(self.keypair.pubkey(), message_bytes(tx))
            )

    def test_signed_bytes_decode(self):
        tx = make_unsigned_transaction(self.keypair.pubkey())
        signed = self.signer.sign_transaction(tx)
        decoded = decode_transaction(signed.to_base64())
        self.assertEqual(str(decoded.signatures[0]), signed.signature)

    def test_not_a_signer(self):
        tx = make_unsigned_transaction(Keypair().pubkey())
        with self.assertRaises(SigningError) as ctx:
            self.signer.sign_transaction(tx)
        self.assertEqual(ctx.exception.code, ErrorCode.SIGNER_NOT_REQUIRED)

    def test_released_signer(self):
        tx = make_unsigned_transaction(self.keypair.pubkey())
        with LocalSigner(self.keypair) as scoped:
            scoped.sign_transaction(tx)
        self.assertTrue(scoped.released)

        with self.assertRaises(SigningError) as ctx:
            scoped.sign_transaction(tx)
        self.assertEqual(ctx.exception.code, ErrorCode.SIGNER_RELEASED)

        with self.assertRaises(SigningError):
            scoped.sign(b"message")

    def test_from_base58(self):
        secret = base58.b58encode(bytes(self.keypair)).decode("ascii")
        signer = LocalSigner.from_base58(secret)
        self.assertEqual(signer.pubkey, self.signer.pubkey)

    def test_from_base58_wrong_length(self):
        with self.assertRaises(SigningError) as ctx:
            LocalSigner.from_base58(base58.b58encode(b"\x01" * 32).decode("ascii"))
        self.assertEqual(ctx.exception.code, ErrorCode.SIGNER_INVALID_KEY)

    def test_from_file_json_array(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "id.json")
            with open(path, "w") as f:
                json.dump(list(bytes(self.keypair)), f)
            signer = LocalSigner.from_file(path)
        self.assertEqual(signer.pubkey, self.signer.pubkey)

    def test_from_file_raw_bytes(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "id.bin")
            with open(path, "wb") as f:
                f.write(bytes(self.keypair))
            signer = LocalSigner.from_file(path)
        self.assertEqual(signer.pubkey, self.signer.pubkey)

    def test_from_missing_file(self):
        with self.assertRaises(SigningError):
            LocalSigner.from_file("/nonexistent/id.json")


class TestCreateSigner(unittest.TestCase):
    """Tests for create_signer priority"""

    def setUp(self):
        self.secret_keypair = Keypair()
        self.file_keypair = Keypair()
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "id.json")
        with open(self.path, "w") as f:
            json.dump(list(bytes(self.file_keypair)), f)

    def tearDown(self):
        self.tmp.cleanup()

    def test_secret_key_takes_priority(self):
        secret = base58.b58encode(bytes(self.secret_keypair)).decode("ascii")
        signer = create_signer(secret_key=secret, keypair_path=self.path)
        self.assertEqual(signer.pubkey, str(self.secret_keypair.pubkey()))

    def test_keypair_path(self):
        signer = create_signer(secret_key="", keypair_path=self.path)
        self.assertEqual(signer.pubkey, str(self.file_keypair.pubkey()))

    def test_explicit_keypair(self):
        keypair = Keypair()
        signer = create_signer(secret_key="ignored", keypair=keypair)
        self.assertEqual(signer.pubkey, str(keypair.pubkey()))

    @patch("jupiter_flows.infra.solana_signer.global_config")
    def test_not_configured(self, mock_config):
        mock_config.signer.secret_key = ""
        mock_config.signer.keypair_path = ""
        with self.assertRaises(SigningError) as ctx:
            create_signer()
        self.assertEqual(ctx.exception.code, ErrorCode.SIGNER_NOT_CONFIGURED)


if __name__ == "__main__":
    unittest.main()
