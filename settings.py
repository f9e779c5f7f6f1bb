from __future__ import annotations

import os
from typing import Mapping, Optional


class SettingsError(RuntimeError):
    pass


class Settings:
    META_API_BASE_URL: str = "https://api.metaapi.cloud"
    DEFAULT_SYMBOL: str = "XAUUSD"
    HOST: str = "127.0.0.1"
    PORT: int = 5000

    def __init__(
        self,
        meta_api_token: str,
        account_id: str,
        default_symbol: Optional[str] = None,
        port: Optional[int] = None,
        host: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        if not meta_api_token or not account_id:
            raise SettingsError("Missing required environment variables (META_API_TOKEN, ACCOUNT_ID)")
        self.meta_api_token = meta_api_token
        self.account_id = account_id
        self.default_symbol = default_symbol or self.DEFAULT_SYMBOL
        self.port = int(port or self.PORT)
        self.host = host or self.HOST
        self.base_url = (base_url or self.META_API_BASE_URL).rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        try:
            port = int(env.get("PORT") or cls.PORT)
        except ValueError:
            raise SettingsError(f"PORT must be an integer, got {env.get('PORT')!r}")
        return cls(
            meta_api_token=(env.get("META_API_TOKEN") or "").strip(),
            account_id=(env.get("ACCOUNT_ID") or "").strip(),
            default_symbol=(env.get("DEFAULT_SYMBOL") or "").strip() or None,
            port=port,
            host=env.get("HOST"),
            base_url=env.get("META_API_BASE_URL"),
        )

    def __repr__(self) -> str:
        return (
            f"Settings(account_id={self.account_id!r}, default_symbol={self.default_symbol!r}, "
            f"host={self.host!r}, port={self.port}, base_url={self.base_url!r})"
        )
