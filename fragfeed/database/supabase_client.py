from supabase import create_client, Client, ClientOptions
from fragfeed.config import settings
from typing import Callable


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Use for identity webhooks."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def create_session_client(cls) -> Client:
        """Throwaway anon-key client for one sign-up, sign-in or sign-out.

        supabase-py copies the session of a signed-in user into the client's
        Authorization header, so these calls must never run on the shared client.
        """
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(auto_refresh_token=False, persist_session=False),
        )

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()


def get_session_client_factory() -> Callable[[], Client]:
    return SupabaseClient.create_session_client
