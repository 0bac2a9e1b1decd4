from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping
import os
import sys

from prodman.domain.errors import ConfigError

WRITE_MODES = ("optimistic", "confirmed")


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    logs_dir: Path


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    timeout: float = 10.0
    # "optimistic": patch local state whatever the response status.
    # "confirmed": only on 2xx, adopting the server id on create.
    write_mode: str = "optimistic"

    def products_url(self, product_id: int | None = None) -> str:
        url = f"{self.base_url.rstrip('/')}/products"
        if product_id is None:
            return url
        return f"{url}/{product_id}"


def _windows_appdata() -> Path:
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))


def _mac_app_support() -> Path:
    return Path.home() / "Library" / "Application Support"


def get_app_paths(app_name: str = "ProductManager") -> AppPaths:
    if sys.platform.startswith("win"):
        base = _windows_appdata() / app_name
    elif sys.platform == "darwin":
        base = _mac_app_support() / app_name
    else:
        base = Path.home() / ".prodman"

    logs = base / "logs"

    base.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)

    return AppPaths(base_dir=base, logs_dir=logs)


def load_api_config(env: Mapping[str, str] | None = None) -> ApiConfig:
    env = os.environ if env is None else env

    base_url = (env.get("PRODMAN_API_URL") or "").strip()
    if not base_url:
        raise ConfigError("PRODMAN_API_URL is not set.")

    raw_timeout = (env.get("PRODMAN_API_TIMEOUT") or "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"PRODMAN_API_TIMEOUT must be a number. Received: {raw_timeout}")
        if timeout <= 0:
            raise ConfigError(f"PRODMAN_API_TIMEOUT must be > 0. Received: {timeout}")
    else:
        timeout = 10.0

    write_mode = (env.get("PRODMAN_WRITE_MODE") or "optimistic").strip().lower()
    if write_mode not in WRITE_MODES:
        raise ConfigError(f"PRODMAN_WRITE_MODE must be one of {', '.join(WRITE_MODES)}.")

    return ApiConfig(base_url=base_url.rstrip("/"), timeout=timeout, write_mode=write_mode)
