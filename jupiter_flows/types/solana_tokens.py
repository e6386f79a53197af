"""
Token registry

Mint addresses, decimals and USD-pegged stablecoins used by the default
flow requests and the minimum order size checks.
"""

from decimal import Decimal
from typing import Dict, FrozenSet, Optional


SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDT_MINT = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"
USD1_MINT = "USD1ttGY1N17NEEHLmELoaybftRBUSErhqYiQzvEmuB"

# Keys are uppercase for case-insensitive lookup
SOLANA_TOKEN_MINTS: Dict[str, str] = {
    "SOL": SOL_MINT,
    "WSOL": SOL_MINT,
    "USDC": USDC_MINT,
    "USDT": USDT_MINT,
    "USD1": USD1_MINT,
    "JUP": "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",
    "BONK": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
}

SOLANA_TOKEN_DECIMALS: Dict[str, int] = {
    SOL_MINT: 9,
    USDC_MINT: 6,
    USDT_MINT: 6,
    USD1_MINT: 6,
    "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN": 6,
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263": 5,
}

# 1 token == 1 USD, so raw amounts convert to USD exactly
USD_STABLE_MINTS: FrozenSet[str] = frozenset({USDC_MINT, USDT_MINT, USD1_MINT})

# Minimum order sizes enforced by the Jupiter Trigger and Recurring APIs
TRIGGER_MIN_ORDER_USD = Decimal(5)
RECURRING_MIN_ORDER_USD = Decimal(50)


def resolve_token_mint(token: str) -> str:
    """Resolve a symbol (SOL, USDC, ...) or a mint address to a mint address"""
    return SOLANA_TOKEN_MINTS.get(token.upper(), token)


def usd_value(mint: str, raw_amount: int) -> Optional[Decimal]:
    """
    USD value of a raw amount when mint is a USD stablecoin

    Returns:
        Decimal USD value, or None when the mint is not USD-pegged
    """
    if mint not in USD_STABLE_MINTS:
        return None
    decimals = SOLANA_TOKEN_DECIMALS[mint]
    return Decimal(raw_amount) / Decimal(10 ** decimals)
