from typing import Optional
from supabase import create_client, Client

from boutique.config import Settings
from boutique.errors import StorageError


class SupabaseClientFactory:
    """
    Client Supabase 'service' créé à la première utilisation.
    - Permet de démarrer l'application sans base configurée (pages statiques, /config)
    - Les repositories appellent l'instance pour obtenir le client
    """

    def __init__(self, url: str, key: str):
        self._url = url
        self._key = key
        self._client: Optional[Client] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseClientFactory":
        return cls(settings.supabase_url, settings.supabase_key)

    def __call__(self) -> Client:
        if self._client is None:
            if not self._url or not self._key:
                raise StorageError("SUPABASE_URL / SUPABASE_SERVICE_KEY manquant")
            self._client = create_client(self._url, self._key)
        return self._client
