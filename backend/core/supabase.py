from supabase import create_client, Client
import os
from typing import Optional

from core.errors import ConfigError


class SupabaseClient:
    _instance: Optional[Client] = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._instance is None:
            supabase_url = os.getenv("SUPABASE_URL")
            # History writes need a key allowed to insert; prefer the service role key
            supabase_key = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_KEY")

            if not supabase_url or not supabase_key:
                raise ConfigError("HISTORY_BACKEND=supabase needs SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_ANON_KEY)")

            cls._instance = create_client(supabase_url, supabase_key)
            print(f"🔌 Connected to Supabase at {supabase_url}")

        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
