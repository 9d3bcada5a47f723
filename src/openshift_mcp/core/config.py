from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_SERVER_URL = "https://openshift.redhat.com"
DEFAULT_TIMEOUT_SECONDS = 180.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class OpenShiftConfig:
    """Everything the transport needs; passed explicitly, never read globally."""

    login: str
    password: str
    server_url: str = DEFAULT_SERVER_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    verify_ssl: bool = True
    proxy: Optional[str] = None

    @property
    def api_url(self) -> str:
        return self.server_url.rstrip("/") + "/broker/rest/api"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_env_config(*, use_dotenv: bool = True) -> OpenShiftConfig:
    """Load connection settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()

    login = os.getenv("OPENSHIFT_LOGIN", "").strip()
    password = os.getenv("OPENSHIFT_PASSWORD", "").strip()
    if not login or not password:
        raise ValueError("Missing OPENSHIFT_LOGIN or OPENSHIFT_PASSWORD in environment.")

    return OpenShiftConfig(
        login=login,
        password=password,
        server_url=os.getenv("OPENSHIFT_SERVER", "").strip() or DEFAULT_SERVER_URL,
        timeout_seconds=_env_float("OPENSHIFT_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        verify_ssl=os.getenv("OPENSHIFT_VERIFY_SSL", "true").strip().lower()
        in _TRUE_VALUES,
        proxy=os.getenv("OPENSHIFT_PROXY", "").strip() or None,
    )


__all__ = [
    "OpenShiftConfig",
    "load_env_config",
    "DEFAULT_SERVER_URL",
    "DEFAULT_TIMEOUT_SECONDS",
]
