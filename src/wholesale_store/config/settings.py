"""
Centralized settings and path configuration for the store engine.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def get_default_data_dir() -> Path:
    """Seed catalog shipped with the package."""
    return Path(__file__).resolve().parent.parent / 'data' / 'seed'


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('true', '1', 'yes', 'on')


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path
    data_dir: Path

    # Seed files
    products_csv: Path
    customers_csv: Path
    pricing_rules_csv: Path

    # Stock commit mode. False keeps the validate-then-reduce split.
    atomic_stock_reservation: bool = False

    # Money
    money_places: int = 2

    # Search defaults and bounds (inclusive)
    search_default_results: int = 20
    search_max_results: int = 100
    suggestions_default: int = 5
    suggestions_max: int = 20
    comprehensive_results: int = 10

    @classmethod
    def load(cls, project_root: Optional[Path] = None, data_dir: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()

        env_dir = os.environ.get('STORE_DATA_DIR')
        seed_dir = data_dir or (Path(env_dir) if env_dir else get_default_data_dir())

        return cls(
            project_root=root,
            data_dir=seed_dir,
            products_csv=seed_dir / 'products.csv',
            customers_csv=seed_dir / 'customers.csv',
            pricing_rules_csv=seed_dir / 'pricing_rules.csv',
            atomic_stock_reservation=_env_flag('STORE_ATOMIC_STOCK_RESERVATION'),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings():
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
