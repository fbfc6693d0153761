"""Application configuration primitives."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# Statutory maximum transition compensation per calendar year (EUR).
DEFAULT_CAP_TABLE = "2024:94000,2025:98000,2026:102000"
# Caps are stored next to each result in a DECIMAL(20, 2) column.
MAX_CAP_AMOUNT = Decimal(10) ** 18


def _load_env(dotenv_path: Optional[Path] = None) -> None:
    """Load the .env file once for the process."""

    if getattr(_load_env, "_loaded", False):  # type: ignore[attr-defined]
        return

    load_dotenv(dotenv_path)
    setattr(_load_env, "_loaded", True)  # type: ignore[attr-defined]


def parse_cap_table(value: str) -> dict[int, Decimal]:
    """Parse ``"<year>:<amount>,..."`` into a year to amount mapping."""

    caps: dict[int, Decimal] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        if ":" not in item:
            raise ValueError("Cap definitions must follow '<year>:<amount>' format.")
        raw_year, raw_amount = (part.strip() for part in item.split(":", 1))
        if not raw_year.isdigit():
            raise ValueError(f"Invalid cap year: {raw_year!r}")
        try:
            amount = Decimal(raw_amount)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid cap amount for {raw_year}: {raw_amount!r}") from exc
        if not amount.is_finite() or amount <= 0:
            raise ValueError(f"Cap amount for {raw_year} must be positive.")
        if amount >= MAX_CAP_AMOUNT:
            raise ValueError(f"Cap amount for {raw_year} is too large.")
        year = int(raw_year)
        if year in caps:
            raise ValueError(f"Duplicate cap year: {year}")
        caps[year] = amount
    if not caps:
        raise ValueError("At least one statutory cap year must be configured.")
    return caps


@dataclass(frozen=True)
class DatabaseSettings:
    """Configuration for the relational database."""

    driver: str = "sqlite"
    user: str = "app"
    password: str = "apppwd"
    host: str = "127.0.0.1"
    port: int = 3306
    name: str = "transitie.db"
    url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Instantiate settings using environment overrides when present."""

        defaults = cls()
        return cls(
            driver=os.getenv("DB_DRIVER", defaults.driver),
            user=os.getenv("DB_USER", defaults.user),
            password=os.getenv("DB_PASSWORD", defaults.password),
            host=os.getenv("DB_HOST", defaults.host),
            port=int(os.getenv("DB_PORT", defaults.port)),
            name=os.getenv("DB_NAME", defaults.name),
            url=os.getenv("DATABASE_URL") or None,
        )

    @property
    def sqlalchemy_url(self) -> str:
        """Return a SQLAlchemy compatible URL."""

        if self.url:
            return self.url
        if self.driver.startswith("sqlite"):
            return f"{self.driver}:///{self.name}"
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"

    @property
    def masked_url(self) -> str:
        """Return the URL with the password blanked out, for logging."""

        if self.url or self.driver.startswith("sqlite"):
            return self.sqlalchemy_url.split("@")[-1]
        pwd = "***" if self.password else ""
        return f"{self.driver}://{self.user}:{pwd}@{self.host}:{self.port}/{self.name}"


@dataclass(frozen=True)
class ReportSettings:
    """Branding handed to the report exporter."""

    firm_name: str = "Workx Advocaten"
    document_title: str = "Transitievergoeding Berekening"

    @classmethod
    def from_env(cls) -> "ReportSettings":
        defaults = cls()
        return cls(
            firm_name=os.getenv("REPORT_FIRM_NAME", defaults.firm_name),
            document_title=os.getenv("REPORT_TITLE", defaults.document_title),
        )


@dataclass(frozen=True)
class Settings:
    """Container for application configuration."""

    database: DatabaseSettings
    cap_table: Mapping[int, Decimal] = field(
        default_factory=lambda: parse_cap_table(DEFAULT_CAP_TABLE)
    )
    report: ReportSettings = field(default_factory=ReportSettings)
    sqlalchemy_echo: bool = False

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "Settings":
        """Build ``Settings`` using environment variables (optionally from ``.env``)."""

        _load_env(dotenv_path)

        database = DatabaseSettings.from_env()
        cap_table = parse_cap_table(os.getenv("TRANSITIE_CAP_TABLE", DEFAULT_CAP_TABLE))
        sqlalchemy_echo = os.getenv("SQLALCHEMY_ECHO", "false").lower() == "true"

        return cls(
            database=database,
            cap_table=cap_table,
            report=ReportSettings.from_env(),
            sqlalchemy_echo=sqlalchemy_echo,
        )


@lru_cache()
def get_settings(dotenv_path: Optional[Path] = None) -> Settings:
    """Return a cached settings instance."""

    return Settings.from_env(dotenv_path=dotenv_path)
