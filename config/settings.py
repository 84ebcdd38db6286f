"""Configuration management for the UPI wallet."""
import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    value = raw.strip().lower()
    if value in ('1', 'true', 'yes', 'on'):
        return True
    if value in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass
class Settings:
    """Configuration settings for the UPI wallet.

    This class centralizes all configuration values so the ledger and the
    console never read the environment directly.
    """

    # Ledger
    history_limit: int = 10
    verify_credential_first: bool = False
    seed_sample_data: bool = True
    max_amount: int = 1_000_000_000_000  # 1T

    # Presentation
    currency_symbol: str = '₹'

    # Logging
    log_path: str = 'upiwallet.log'
    log_level: str = 'INFO'

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from environment variables.

        Returns:
            Settings: A Settings instance with values from environment variables.

        Raises:
            ValueError: If an environment variable holds a malformed value.
        """
        defaults = cls()
        history_limit = _env_int('WALLET_HISTORY_LIMIT', defaults.history_limit)
        if history_limit < 1:
            raise ValueError("WALLET_HISTORY_LIMIT must be at least 1")

        log_level = os.getenv('WALLET_LOG_LEVEL', defaults.log_level).strip().upper()
        if log_level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"WALLET_LOG_LEVEL is not a logging level: {log_level!r}")

        max_amount = _env_int('WALLET_MAX_AMOUNT', defaults.max_amount)
        if max_amount < 1:
            raise ValueError("WALLET_MAX_AMOUNT must be at least 1")

        return cls(
            history_limit=history_limit,
            max_amount=max_amount,
            verify_credential_first=_env_bool(
                'WALLET_VERIFY_CREDENTIAL_FIRST', defaults.verify_credential_first),
            seed_sample_data=_env_bool('WALLET_SEED_SAMPLE_DATA', defaults.seed_sample_data),
            currency_symbol=os.getenv('WALLET_CURRENCY_SYMBOL', defaults.currency_symbol),
            log_path=os.getenv('WALLET_LOG_PATH', defaults.log_path),
            log_level=log_level,
        )
