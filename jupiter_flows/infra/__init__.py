"""
Infrastructure layer: RPC, signing, transaction codec and builder
"""

from .rpc import RpcClient, RpcClientConfig
from .solana_signer import Signer, LocalSigner, create_signer, message_bytes
from .codec import decode_transaction, encode_transaction
from .tx_builder import TxBuilder, instruction_from_json

__all__ = [
    "RpcClient",
    "RpcClientConfig",
    "Signer",
    "LocalSigner",
    "create_signer",
    "message_bytes",
    "decode_transaction",
    "encode_transaction",
    "TxBuilder",
    "instruction_from_json",
]
