"""Configuration management for loantrack."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from loantrack.exceptions import ConfigurationError


@dataclass
class StorageConfig:
    """Locations of the loans file and the derived output folders."""

    data_dir: Path = field(default_factory=lambda: Path("data"))

    @property
    def loans_path(self) -> Path:
        """Path of the JSON loans file."""
        return self.data_dir / "loans.json"

    @property
    def export_dir(self) -> Path:
        return self.data_dir / "exports"

    @property
    def backup_dir(self) -> Path:
        return self.data_dir / "backups"

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"


@dataclass
class OutputConfig:
    """Output configuration."""

    pretty_json: bool = True


@dataclass
class CurrencyConfig:
    """Display currency. Aggregation never rounds; only presentation does."""

    code: str = "NGN"
    symbol: str = "₦"
    decimals: int = 0


@dataclass
class ValidationConfig:
    """Limits applied when loan input is validated."""

    lender_name_min_length: int = 2
    lender_name_max_length: int = 50
    phone_min_digits: int = 10
    phone_max_digits: int = 15
    min_amount: int = 100
    max_amount: int = 10_000_000
    min_interest_rate: int = 0
    max_interest_rate: int = 100


@dataclass
class RiskConfig:
    """Weights and thresholds of the portfolio risk heuristic.

    Factor order is: overdue rate, concentration, interest rate,
    payment velocity, portfolio size.
    """

    weights: tuple[float, float, float, float, float] = (0.30, 0.25, 0.15, 0.20, 0.10)

    overdue_high: float = 30.0
    overdue_medium: float = 15.0

    concentration_high: float = 50.0
    concentration_medium: float = 30.0
    concentration_scores: tuple[int, int, int] = (80, 50, 20)

    no_interest_high: float = 70.0
    no_interest_medium: float = 40.0
    interest_scores: tuple[int, int, int] = (60, 30, 10)

    velocity_low: float = 50.0
    velocity_medium: float = 70.0
    velocity_scores: tuple[int, int, int] = (70, 40, 20)

    size_small: int = 5
    size_medium: int = 10
    size_scores: tuple[int, int, int] = (40, 20, 10)

    summary_high: int = 70
    summary_moderate: int = 40

    def __post_init__(self) -> None:
        if len(self.weights) != 5:
            raise ConfigurationError(f"Risk weights need 5 entries, got {len(self.weights)}")


@dataclass
class ProjectionConfig:
    """Assumptions of the cash flow projection."""

    pending_payment_probability: float = 0.85
    overdue_payment_probability: float = 0.30
    collection_cost_rate: float = 0.10


@dataclass
class AnalyticsConfig:
    """Configuration for aggregation and analytics."""

    monthly_window: int = 12
    trend_windows: tuple[int, ...] = (7, 30, 90, 180, 365)
    trend_threshold: float = 5.0
    normalize_lender_names: bool = False
    risk: RiskConfig = field(default_factory=RiskConfig)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)


@dataclass
class LoanTrackConfig:
    """Main configuration for loantrack."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    currency: CurrencyConfig = field(default_factory=CurrencyConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LoanTrackConfig":
        """Create config from environment variables."""
        storage = StorageConfig(data_dir=Path(os.getenv("LOANTRACK_DATA_DIR", "data")))

        output = OutputConfig(
            pretty_json=os.getenv("PRETTY_JSON", "true").lower() == "true",
        )

        currency = CurrencyConfig(
            code=os.getenv("CURRENCY_CODE", "NGN"),
            symbol=os.getenv("CURRENCY_SYMBOL", "₦"),
        )

        analytics = AnalyticsConfig(
            monthly_window=_int_env("MONTHLY_WINDOW", 12),
            normalize_lender_names=os.getenv("NORMALIZE_LENDER_NAMES", "false").lower() == "true",
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            storage=storage,
            output=output,
            currency=currency,
            analytics=analytics,
            seed=_int_env("SEED", None),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
