"""Runtime configuration read from the environment.

A ``.env`` file in the working directory is loaded first, so local
development can keep store credentials out of the shell.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DATA_DIR = Path(__file__).resolve().parent / "data" / "files"

DEFAULT_COST_TABLE_PATH = DATA_DIR / "hilton_cost.csv"
DEFAULT_ASSEMBLIES_PATH = DATA_DIR / "hilton_assemblies.csv"
DEFAULT_CITIES_PATH = DATA_DIR / "cities.csv"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000",)


def _first_env(*names: str) -> str:
    for name in names:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


@dataclass(frozen=True)
class Settings:
    """Paths and credentials for the reference data sources."""

    cost_table_path: Path = DEFAULT_COST_TABLE_PATH
    assemblies_path: Path = DEFAULT_ASSEMBLIES_PATH
    cities_path: Path = DEFAULT_CITIES_PATH
    supabase_url: str = ""
    supabase_key: str = ""
    cities_table: str = "cities"
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @property
    def has_location_store(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> Settings:
        """Build settings from environment variables.

        Unset variables fall back to the bundled data files and to
        CSV-only location data.
        """
        if dotenv:
            load_dotenv()

        origins = _first_env("HOTELCOST_CORS_ORIGINS")
        return cls(
            cost_table_path=Path(
                _first_env("HOTELCOST_COST_TABLE_PATH") or DEFAULT_COST_TABLE_PATH
            ),
            assemblies_path=Path(
                _first_env("HOTELCOST_ASSEMBLIES_PATH") or DEFAULT_ASSEMBLIES_PATH
            ),
            cities_path=Path(_first_env("HOTELCOST_CITIES_PATH") or DEFAULT_CITIES_PATH),
            supabase_url=_first_env("SUPABASE_URL", "VITE_SUPABASE_URL"),
            supabase_key=_first_env("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY"),
            cities_table=_first_env("HOTELCOST_CITIES_TABLE") or "cities",
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins
                else DEFAULT_CORS_ORIGINS
            ),
        )
