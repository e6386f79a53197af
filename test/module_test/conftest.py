"""
Shared configuration and fixtures for live flow tests.

WARNING: These tests execute real transactions and spend real tokens!

Environment Variables:
    RPC_URL: RPC endpoint URL (required; SOLANA_RPC_URL also accepted)
    SECRET_KEY: Base58 encoded secret key (required if no keypair path)
    KEYPAIR_PATH: Path to keypair JSON file (alternative to secret key)
    RUN_LIVE_FLOWS: Must be "1" to run anything that submits a transaction
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from jupiter_flows.config import reload_config


def skip_if_no_config():
    """Return a skip message when live configuration is missing"""
    config = reload_config()
    if os.getenv("RUN_LIVE_FLOWS") != "1":
        return "Set RUN_LIVE_FLOWS=1 to run live flows (spends real tokens)"
    if not config.rpc.url:
        return "Missing RPC_URL environment variable"
    if not (config.signer.secret_key or config.signer.keypair_path):
        return "No wallet configured. Set SECRET_KEY or KEYPAIR_PATH"
    return None


def create_client():
    """Create JupiterClient from environment"""
    from jupiter_flows import JupiterClient

    config = reload_config()
    return JupiterClient(
        rpc_url=config.rpc.url,
        secret_key=config.signer.secret_key,
        keypair_path=config.signer.keypair_path,
        jupiter_base_url=config.jupiter.base_url,
        api_key=config.jupiter.api_key,
        fee=config.fee,
    )


@pytest.fixture
def client():
    """JupiterClient fixture, released after each test"""
    skip_msg = skip_if_no_config()
    if skip_msg:
        pytest.skip(skip_msg)
    with create_client() as live_client:
        yield live_client
