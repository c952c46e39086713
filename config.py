"""Configuration management for the budget ledger.

Reads configuration from ~/.config/budget-ledger.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    store_dir: Path
    log_level: str
    log_dir: Path
    period_type: str
    anchor_date: Optional[date]
    starting_balance: Decimal
    bank_name: str
    account_name: str
    currency: str

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "budget-ledger"
        return cls(
            base_dir=base_dir,
            store_dir=base_dir / "store",
            log_level="INFO",
            log_dir=base_dir / "logs",
            period_type="FIXED_DATE",
            anchor_date=None,
            starting_balance=Decimal("0"),
            bank_name="Placeholder Bank",
            account_name="Current Account",
            currency="GBP",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "budget-ledger.toml"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return parse_config(data)


def parse_config(data: dict) -> Config:
    """Build a Config from parsed TOML data, filling in defaults.

    Args:
        data: Dictionary as returned by tomllib.

    Returns:
        Config object.
    """
    defaults = Config.default()
    base_dir = Path(data.get("base_dir", defaults.base_dir))

    store_config = data.get("store", {})
    store_dir = Path(store_config.get("data_dir", base_dir / "store"))

    log_config = data.get("logging", {})
    log_level = log_config.get("level", defaults.log_level)
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    budget_config = data.get("budget", {})
    period_type = budget_config.get("period_type", defaults.period_type)
    # tomllib returns native dates for unquoted TOML dates
    anchor_date = budget_config.get("anchor_date")
    if isinstance(anchor_date, str):
        anchor_date = date.fromisoformat(anchor_date)
    starting_balance = Decimal(
        str(budget_config.get("starting_balance", defaults.starting_balance))
    )

    account_config = data.get("account", {})

    return Config(
        base_dir=base_dir,
        store_dir=store_dir,
        log_level=log_level,
        log_dir=log_dir,
        period_type=period_type,
        anchor_date=anchor_date,
        starting_balance=starting_balance,
        bank_name=account_config.get("bank_name", defaults.bank_name),
        account_name=account_config.get("account_name", defaults.account_name),
        currency=account_config.get("currency", defaults.currency),
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    budget = {
        "period_type": config.period_type,
        "starting_balance": str(config.starting_balance),
    }
    if config.anchor_date is not None:
        budget["anchor_date"] = config.anchor_date

    data = {
        "base_dir": str(config.base_dir),
        "store": {
            "data_dir": str(config.store_dir),
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "budget": budget,
        "account": {
            "bank_name": config.bank_name,
            "account_name": config.account_name,
            "currency": config.currency,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
