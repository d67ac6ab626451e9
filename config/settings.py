"""Centralised configuration handling for the Payday Planner."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import streamlit as st
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_DATA_PATH = BASE_DIR / "data" / "budget.json"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    data_path: Path = DEFAULT_DATA_PATH
    category_horizon_months: int = 3
    near_limit_ratio: float = 0.8
    currency_symbol: str = "$"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="BUDGET_", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("budget")
    if secrets_section:
        overrides = {
            "data_path": secrets_section.get("data_path"),
            "category_horizon_months": secrets_section.get("category_horizon_months"),
            "near_limit_ratio": secrets_section.get("near_limit_ratio"),
            "currency_symbol": secrets_section.get("currency_symbol"),
            "log_level": secrets_section.get("log_level"),
        }

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
