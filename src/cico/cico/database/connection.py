from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from supabase import Client, create_client


@dataclass
class SupabaseConfig:
    url: str
    service_role_key: str


class SupabaseConnection:
    """Singleton-like Supabase client factory.

    Note: The service-role client bypasses row-level security, so every query
    built on top of it must filter by `company_id` itself.
    """

    _instance: Optional["SupabaseConnection"] = None

    def __init__(self, config: SupabaseConfig):
        self._config = config
        self._client: Optional[Client] = None

    @classmethod
    def get_instance(cls, config: SupabaseConfig) -> "SupabaseConnection":
        if cls._instance is None:
            cls._instance = SupabaseConnection(config)
        return cls._instance

    def client(self) -> Client:
        if self._client is None:
            self._client = create_client(self._config.url, self._config.service_role_key)
        return self._client
