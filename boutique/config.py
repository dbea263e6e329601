# boutique.config
"""
Configuration centrale de la boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les chemins utiles (PUBLIC_DIR, TEMPLATES_DIR)
- Construit une seule fois un objet Settings immuable, transmis ensuite
  explicitement aux composants (app.state.settings + dépendance get_settings)
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple
import os

from dotenv import load_dotenv
from fastapi import Request

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"

PUBLIC_DIR = BASE_DIR / "public"
TEMPLATES_DIR = BASE_DIR / "templates"

ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "change-me-strong"
DEFAULT_SHIPPING_COUNTRIES = ("FR", "BE", "TN", "IT", "DE", "NL")


def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")


def _split_list(v: str) -> Tuple[str, ...]:
    return tuple(x.strip() for x in (v or "").split(",") if x.strip())


@dataclass(frozen=True)
class Settings:
    """Configuration immuable, construite au démarrage du process."""

    port: int = 3000
    admin_username: str = ADMIN_USERNAME
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    admin_password_hash: str = ""
    stripe_secret_key: str = ""
    stripe_publishable_key: str = ""
    stripe_webhook_secret: str = ""
    public_base_url: str = "http://localhost:3000"
    currency: str = "EUR"
    shipping_countries: Tuple[str, ...] = DEFAULT_SHIPPING_COUNTRIES
    supabase_url: str = ""
    supabase_key: str = ""
    upload_dir: Path = field(default=PUBLIC_DIR / "uploads")
    cors_origins: Tuple[str, ...] = ("*",)
    allowed_hosts: Tuple[str, ...] = ("*",)
    cookie_secure: bool = False
    rate_limit_redis_url: str = ""
    rate_limit_local_fallback: bool = False

    @property
    def stripe_enabled(self) -> bool:
        return bool(self.stripe_secret_key)


def load_settings(env_path: Path = ENV_PATH) -> Settings:
    """
    Lit l'environnement (après chargement du .env) et retourne un Settings.
    - PUBLIC_BASE_URL: par défaut http://localhost:<PORT>, sans slash final
    - SUPABASE_URL: préfixé en https:// si le schéma est absent
    - CURRENCY: normalisé en majuscules
    """
    load_dotenv(dotenv_path=env_path, override=False)

    port = int(_clean_env(os.getenv("PORT")) or 3000)

    supabase_url = _clean_env(os.getenv("SUPABASE_URL") or "")
    if supabase_url and not supabase_url.startswith("http"):
        supabase_url = "https://" + supabase_url
    supabase_url = supabase_url.rstrip("/")

    public_base_url = _clean_env(os.getenv("PUBLIC_BASE_URL") or "") or f"http://localhost:{port}"

    upload_dir = _clean_env(os.getenv("UPLOAD_DIR") or "")

    return Settings(
        port=port,
        admin_password=_clean_env(os.getenv("ADMIN_PASSWORD") or "") or DEFAULT_ADMIN_PASSWORD,
        admin_password_hash=_clean_env(os.getenv("ADMIN_PASSWORD_HASH") or ""),
        stripe_secret_key=_clean_env(os.getenv("STRIPE_SECRET_KEY") or ""),
        stripe_publishable_key=_clean_env(os.getenv("STRIPE_PUBLISHABLE_KEY") or ""),
        stripe_webhook_secret=_clean_env(os.getenv("STRIPE_WEBHOOK_SECRET") or ""),
        public_base_url=public_base_url.rstrip("/"),
        currency=(_clean_env(os.getenv("CURRENCY") or "") or "EUR").upper(),
        shipping_countries=_split_list(os.getenv("SHIPPING_COUNTRIES", "")) or DEFAULT_SHIPPING_COUNTRIES,
        supabase_url=supabase_url,
        supabase_key=_clean_env(os.getenv("SUPABASE_SERVICE_KEY") or os.getenv("SUPABASE_KEY") or ""),
        upload_dir=Path(upload_dir) if upload_dir else PUBLIC_DIR / "uploads",
        cors_origins=_split_list(os.getenv("CORS_ORIGINS", "*")) or ("*",),
        allowed_hosts=_split_list(os.getenv("ALLOWED_HOSTS", "*")) or ("*",),
        cookie_secure=os.getenv("COOKIE_SECURE", "false").lower() == "true",
        rate_limit_redis_url=_clean_env(os.getenv("RATE_LIMIT_REDIS_URL") or ""),
        rate_limit_local_fallback=os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1",
    )


def get_settings(request: Request) -> Settings:
    """Dépendance FastAPI: le Settings attaché à l'application."""
    return request.app.state.settings
