"""Configuration management for ledger-cycles."""

from dataclasses import dataclass, field
from pathlib import Path

from ledger_cycles.exceptions import ConfigurationError
from ledger_cycles.models.ledger.enums import RoundingPolicy


@dataclass
class DateConfig:
    """Date normalization configuration."""

    normalized_hour: int = 12  # noon keeps the calendar day stable across timezones

    def __post_init__(self) -> None:
        if not 0 <= self.normalized_hour <= 23:
            raise ConfigurationError(f"normalized_hour must be in 0..23, got {self.normalized_hour}")


@dataclass
class InstallmentConfig:
    """Installment series configuration."""

    rounding_policy: RoundingPolicy = RoundingPolicy.INDEPENDENT


@dataclass
class ImportConfig:
    """Statement import configuration."""

    date_format: str = "%d/%m/%Y"
    default_closing_day: int = 1


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class LedgerConfig:
    """Main configuration for ledger-cycles."""

    dates: DateConfig = field(default_factory=DateConfig)
    installments: InstallmentConfig = field(default_factory=InstallmentConfig)
    importing: ImportConfig = field(default_factory=ImportConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    locale: str = "pt_BR"
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        policy_name = os.getenv("ROUNDING_POLICY", RoundingPolicy.INDEPENDENT.value).upper()
        try:
            rounding_policy = RoundingPolicy(policy_name)
        except ValueError:
            raise ConfigurationError(f"Unknown rounding policy: {policy_name}") from None

        try:
            normalized_hour = int(os.getenv("NORMALIZED_HOUR", "12"))
            default_closing_day = int(os.getenv("DEFAULT_CLOSING_DAY", "1"))
            seed = int(os.environ["SEED"]) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid integer setting: {exc}") from exc

        dates = DateConfig(normalized_hour=normalized_hour)

        importing = ImportConfig(
            date_format=os.getenv("STATEMENT_DATE_FORMAT", "%d/%m/%Y"),
            default_closing_day=default_closing_day,
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            dates=dates,
            installments=InstallmentConfig(rounding_policy=rounding_policy),
            importing=importing,
            output=output,
            seed=seed,
            locale=os.getenv("FAKER_LOCALE", "pt_BR"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
