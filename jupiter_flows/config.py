"""
Configuration management for Jupiter flows

Loads settings from environment variables and .env file.
Includes logging configuration with file and console output.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

from dotenv import load_dotenv


_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


def _load_env_file():
    """Pick up a .env beside the package, if there is one"""
    if _ENV_FILE.is_file():
        load_dotenv(_ENV_FILE)


_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    return os.environ.get(key, default)


def _get_env_any(keys: Tuple[str, ...], default: Optional[str] = "") -> Optional[str]:
    """Get the first non-empty environment variable among keys"""
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return default


def _parse_env(key: str, default: Any, cast: Callable[[str], Any]) -> Any:
    """Read key and convert it with cast, keeping default on a bad value"""
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Ignoring {key}={raw!r}: not a valid {cast.__name__}, keeping {default}"
        )
        return default


def _get_env_float(key: str, default: float) -> float:
    return _parse_env(key, default, float)


def _get_env_int(key: str, default: int) -> int:
    return _parse_env(key, default, int)


def _as_bool(raw: str) -> bool:
    return raw.lower() in {"1", "true", "yes", "on"}


def _get_env_bool(key: str, default: bool) -> bool:
    return _parse_env(key, default, _as_bool)


DEFAULT_JUPITER_BASE_URL = "https://lite-api.jup.ag"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


@dataclass
class RpcConfig:
    """Solana RPC configuration"""
    url: str = field(default_factory=lambda: _get_env_any(("RPC_URL", "SOLANA_RPC_URL"), ""))
    timeout_seconds: float = field(default_factory=lambda: _get_env_float("RPC_TIMEOUT_SECONDS", 30.0))
    commitment: str = field(default_factory=lambda: _get_env("RPC_COMMITMENT", "confirmed"))


@dataclass
class SignerConfig:
    """
    Local keypair configuration

    SECRET_KEY (base58) takes priority over KEYPAIR_PATH.
    """
    keypair_path: str = field(default_factory=lambda: _get_env_any(("KEYPAIR_PATH", "SOLANA_KEYPAIR_PATH"), ""))
    secret_key: str = field(default_factory=lambda: _get_env("SECRET_KEY", ""), repr=False)


@dataclass
class JupiterConfig:
    """Jupiter API configuration"""
    base_url: str = field(default_factory=lambda: _get_env("JUPITER_BASE_URL", DEFAULT_JUPITER_BASE_URL))
    api_key: str = field(default_factory=lambda: _get_env("API_KEY", ""), repr=False)
    timeout: float = field(default_factory=lambda: _get_env_float("JUPITER_TIMEOUT", 30.0))


@dataclass
class FeeConfig:
    """Optional integrator fee (platform / referral fee)"""
    fee_account: str = field(default_factory=lambda: _get_env("FEE_ACCOUNT", ""))
    fee_bps: int = field(default_factory=lambda: _get_env_int("FEE_BPS", 0))

    @property
    def integrator_fee(self) -> Optional[Tuple[str, int]]:
        """(account, bps) when both are set and bps > 0, otherwise None"""
        if self.fee_account and self.fee_bps > 0:
            return self.fee_account, self.fee_bps
        return None


@dataclass
class TxConfig:
    """Transaction submission configuration"""
    wait_confirmation: bool = field(default_factory=lambda: _get_env_bool("TX_WAIT_CONFIRMATION", True))
    confirmation_timeout: float = field(default_factory=lambda: _get_env_float("TX_CONFIRMATION_TIMEOUT", 60.0))
    poll_interval: float = field(default_factory=lambda: _get_env_float("TX_POLL_INTERVAL", 1.0))
    skip_preflight: bool = field(default_factory=lambda: _get_env_bool("TX_SKIP_PREFLIGHT", False))


@dataclass
class LoggingConfig:
    """
    Where flow logs go

    LOG_FILE enables a rotating file (size LOG_MAX_BYTES, LOG_BACKUP_COUNT
    backups). LOG_CONSOLE=false silences stderr. LOG_LEVEL and LOG_FORMAT
    apply to both handlers.
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", ""))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env("LOG_FORMAT", DEFAULT_LOG_FORMAT))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 5 * 1024 * 1024))
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 3))

    @property
    def level(self) -> int:
        value = logging.getLevelName(self.log_level.upper())
        return value if isinstance(value, int) else logging.INFO


@dataclass
class Config:
    """
    Everything a flow run reads from the environment

        from jupiter_flows.config import get_config

        cfg = get_config()
        cfg.jupiter.base_url, cfg.tx.confirmation_timeout
    """
    rpc: RpcConfig = field(default_factory=RpcConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    jupiter: JupiterConfig = field(default_factory=JupiterConfig)
    fee: FeeConfig = field(default_factory=FeeConfig)
    tx: TxConfig = field(default_factory=TxConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        _load_env_file()
        return cls()


config = Config()


def get_config() -> Config:
    return config


def reload_config() -> Config:
    """Re-read .env and the environment, replacing the shared config"""
    global config
    config = Config.reload()
    return config


def _build_handlers(log_config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        Path(log_config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding="utf-8",
        ))

    if log_config.console_output:
        handlers.append(logging.StreamHandler())

    return handlers


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "jupiter_flows",
) -> logging.Logger:
    """
    Attach file and console handlers to the package logger.

    Calling it again replaces (and closes) the handlers from the previous
    call, so the CLI and tests can reconfigure freely.

    Args:
        log_config: Logging settings, defaults to the shared config
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    log_config = log_config or config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(log_config.log_format)
    for handler in _build_handlers(log_config):
        handler.setLevel(log_config.level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_config.log_file:
        logger.debug(f"Writing logs to {log_config.log_file} at {log_config.log_level}")

    return logger
