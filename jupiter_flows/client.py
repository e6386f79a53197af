"""
JupiterClient - Unified entry point for the Jupiter flows

Owns the Jupiter HTTP client, the Solana RPC client and the local signer,
and exposes one lazily created module per flow (swap, swap_instructions,
ultra, trigger, recurring).
"""

from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from solders.keypair import Keypair

from .config import config as global_config, FeeConfig
from .infra import RpcClient, RpcClientConfig, create_signer, LocalSigner
from .protocols import JupiterAPI
from .errors import ConfigurationError


class JupiterClient:
    """
    Jupiter flows client

    Provides access to the flows through modules:
    - swap: quote -> swap transaction -> sign -> RPC submit
    - swap_instructions: quote -> instructions -> build v0 tx -> sign -> RPC submit
    - ultra: order -> sign -> execute
    - trigger: createOrder -> sign -> execute
    - recurring: createOrder -> sign -> execute

    Usage:
        # Everything from environment (.env)
        with JupiterClient() as client:
            result = client.swap.run()

        # Explicit keypair and RPC
        from solders.keypair import Keypair

        client = JupiterClient(
            rpc_url="https://api.mainnet-beta.solana.com",
            keypair=Keypair(),
        )
        result = client.ultra.run(request)
        client.close()

    The keypair is released on close(); signing afterwards raises SigningError.
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        keypair: Optional["Keypair"] = None,
        secret_key: Optional[str] = None,
        keypair_path: Optional[str] = None,
        jupiter_base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        rpc_config: Optional[RpcClientConfig] = None,
        fee: Optional[FeeConfig] = None,
    ):
        """
        Initialize JupiterClient

        Args:
            rpc_url: RPC endpoint URL (default RPC_URL); only the swap and
                swap-instructions flows need it
            keypair: Optional Keypair for local signing
            secret_key: Optional base58 secret key (default SECRET_KEY)
            keypair_path: Optional path to keypair file (default KEYPAIR_PATH)
            jupiter_base_url: Jupiter API base URL (default JUPITER_BASE_URL)
            api_key: Jupiter API key (default API_KEY)
            rpc_config: Optional RPC configuration
            fee: Integrator fee configuration (default FEE_ACCOUNT/FEE_BPS)
        """
        self._rpc_url = rpc_url if rpc_url is not None else global_config.rpc.url
        self._rpc_config = rpc_config
        self._rpc: Optional[RpcClient] = None

        # API first: a bad base URL must fail before any keypair is loaded
        self._api = JupiterAPI(base_url=jupiter_base_url, api_key=api_key)
        self._signer = create_signer(
            secret_key=secret_key,
            keypair_path=keypair_path,
            keypair=keypair,
        )
        self._fee = fee if fee is not None else global_config.fee

        # Lazy-loaded modules
        self._swap: Optional["SwapModule"] = None
        self._swap_instructions: Optional["SwapInstructionsModule"] = None
        self._ultra: Optional["UltraModule"] = None
        self._trigger: Optional["TriggerModule"] = None
        self._recurring: Optional["RecurringModule"] = None

    @property
    def rpc(self) -> RpcClient:
        """
        Access to RPC client

        Raises:
            ConfigurationError: RPC_URL is not configured
        """
        if self._rpc is None:
            if not self._rpc_url:
                raise ConfigurationError.missing("RPC endpoint (RPC_URL)")
            self._rpc = RpcClient(self._rpc_url, config=self._rpc_config)
        return self._rpc

    @property
    def api(self) -> JupiterAPI:
        """Access to Jupiter HTTP client"""
        return self._api

    @property
    def signer(self) -> LocalSigner:
        """Access to signer"""
        return self._signer

    @property
    def pubkey(self) -> str:
        """Owner's public key"""
        return self._signer.pubkey

    @property
    def integrator_fee(self) -> Optional[Tuple[str, int]]:
        """(fee_account, fee_bps) when an integrator fee is configured"""
        return self._fee.integrator_fee

    @property
    def swap(self) -> "SwapModule":
        """
        Swap flow

        Provides:
        - quote(request): Get quote
        - execute(quote): Build, sign and submit
        - run(request): Quote and execute
        """
        if self._swap is None:
            from .modules.swap import SwapModule
            self._swap = SwapModule(self)
        return self._swap

    @property
    def swap_instructions(self) -> "SwapInstructionsModule":
        """Swap flow assembling the transaction locally from instructions"""
        if self._swap_instructions is None:
            from .modules.swap_instructions import SwapInstructionsModule
            self._swap_instructions = SwapInstructionsModule(self)
        return self._swap_instructions

    @property
    def ultra(self) -> "UltraModule":
        """
        Ultra flow

        Provides:
        - order(request): Get order with unsigned transaction
        - execute(order): Sign and execute
        - run(request): Order and execute
        """
        if self._ultra is None:
            from .modules.ultra import UltraModule
            self._ultra = UltraModule(self)
        return self._ultra

    @property
    def trigger(self) -> "TriggerModule":
        """Trigger (limit order) flow"""
        if self._trigger is None:
            from .modules.trigger import TriggerModule
            self._trigger = TriggerModule(self)
        return self._trigger

    @property
    def recurring(self) -> "RecurringModule":
        """Recurring (DCA) flow"""
        if self._recurring is None:
            from .modules.recurring import RecurringModule
            self._recurring = RecurringModule(self)
        return self._recurring

    def flow(self, name: str):
        """
        Get flow module by CLI name

        Args:
            name: swap, swap-instructions, ultra, trigger or recurring

        Raises:
            ConfigurationError: Unknown flow name
        """
        attr = name.replace("-", "_")
        if attr not in ("swap", "swap_instructions", "ultra", "trigger", "recurring"):
            raise ConfigurationError.invalid("flow", f"unknown flow {name!r}")
        return getattr(self, attr)

    def close(self):
        """Close client connections and release the keypair"""
        self._api.close()
        if self._rpc is not None:
            self._rpc.close()
        self._signer.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        pubkey = "released" if self._signer.released else f"{self.pubkey[:8]}..."
        return f"JupiterClient(api={self._api.base_url}, pubkey={pubkey})"


# Type hints for modules (resolved at runtime)
if TYPE_CHECKING:
    from .modules.swap import SwapModule
    from .modules.swap_instructions import SwapInstructionsModule
    from .modules.ultra import UltraModule
    from .modules.trigger import TriggerModule
    from .modules.recurring import RecurringModule
