"""
Transaction builder

Assembles a v0 transaction from the JSON instructions returned by the
swap-instructions endpoint, resolving address lookup tables over RPC.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, List, Optional, Union

from solders.address_lookup_table_account import AddressLookupTable, AddressLookupTableAccount
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from .rpc import RpcClient
from ..errors import ParseError, RemoteError
from ..types import SwapInstructions

logger = logging.getLogger(__name__)


def instruction_from_json(item: Union[Dict[str, Any], str]) -> Instruction:
    """
    Convert one Jupiter JSON instruction into a solders Instruction

    Raises:
        ParseError: Compiled (string) instruction or malformed fields
    """
    if isinstance(item, str):
        raise ParseError(
            'legacy compiled instruction returned - re-issue the request with "instructionFormat": "json"'
        )
    if not isinstance(item, dict):
        raise ParseError(f"instruction is not a JSON object: {item!r}")

    try:
        program_id = Pubkey.from_string(item["programId"])
        accounts = [
            AccountMeta(
                Pubkey.from_string(account["pubkey"]),
                bool(account["isSigner"]),
                bool(account["isWritable"]),
            )
            for account in item["accounts"]
        ]
        data = base64.b64decode(item["data"])
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(f"malformed instruction: {e}", original_error=e, payload=item) from e

    return Instruction(program_id, data, accounts)


class TxBuilder:
    """
    Builds unsigned versioned transactions

    Usage:
        builder = TxBuilder(rpc)
        unsigned = builder.build_swap(swap_instructions, payer=signer.pubkey)
    """

    def __init__(self, rpc: RpcClient):
        self._rpc = rpc

    def fetch_lookup_tables(self, addresses: List[str]) -> List[AddressLookupTableAccount]:
        """
        Fetch and decode address lookup tables

        Tables that are missing or cannot be decoded are skipped.
        """
        if not addresses:
            return []

        accounts = self._rpc.get_multiple_accounts(addresses, encoding="base64")
        tables: List[AddressLookupTableAccount] = []

        for address, account in zip(addresses, accounts):
            if not account:
                logger.warning(f"Address lookup table {address} not found, skipping")
                continue
            try:
                raw = base64.b64decode(account["data"][0])
                table = AddressLookupTable.deserialize(raw)
                tables.append(AddressLookupTableAccount(
                    key=Pubkey.from_string(address),
                    addresses=list(table.addresses),
                ))
            except Exception as e:
                logger.warning(f"Cannot decode address lookup table {address}, skipping: {e}")

        return tables

    def build(
        self,
        instructions: List[Instruction],
        payer: str,
        lookup_tables: Optional[List[AddressLookupTableAccount]] = None,
        recent_blockhash: Optional[str] = None,
    ) -> VersionedTransaction:
        """
        Build unsigned v0 transaction

        Args:
            instructions: Instructions in execution order
            payer: Fee payer pubkey (base58)
            lookup_tables: Resolved address lookup tables
            recent_blockhash: Optional blockhash (fetched if not provided)

        Returns:
            VersionedTransaction with placeholder signatures
        """
        if recent_blockhash is None:
            recent_blockhash = self._rpc.get_latest_blockhash().get("blockhash")

        if not recent_blockhash:
            raise RemoteError("Failed to get recent blockhash", url=self._rpc.endpoint)

        try:
            message = MessageV0.try_compile(
                Pubkey.from_string(payer),
                instructions,
                lookup_tables or [],
                Hash.from_string(recent_blockhash),
            )
        except Exception as e:
            raise ParseError(f"cannot compile swap instructions into a message: {e}", original_error=e) from e

        num_signers = message.header.num_required_signatures
        return VersionedTransaction.populate(message, [Signature.default()] * num_signers)

    def build_swap(self, swap: SwapInstructions, payer: str) -> VersionedTransaction:
        """Build the unsigned transaction for a swap-instructions response"""
        instructions = [instruction_from_json(item) for item in swap.instructions]
        lookup_tables = self.fetch_lookup_tables(swap.address_lookup_table_addresses)
        logger.info(
            f"Assembling {len(instructions)} instructions with {len(lookup_tables)} lookup tables"
        )
        return self.build(instructions, payer, lookup_tables)
