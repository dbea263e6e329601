"""
Garde d'administration: HTTP Basic, un seul couple d'identifiants.
- Utilisateur fixe (admin), mot de passe en clair (ADMIN_PASSWORD) ou hash bcrypt (ADMIN_PASSWORD_HASH)
- 401 + WWW-Authenticate avant toute logique de handler
"""
import secrets

import bcrypt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from boutique.config import Settings, get_settings

ADMIN_REALM = "Chogan Admin"

basic_auth = HTTPBasic(realm=ADMIN_REALM, auto_error=False)


def _challenge() -> HTTPException:
    return HTTPException(
        status_code=401,
        detail="Authentification requise",
        headers={"WWW-Authenticate": f'Basic realm="{ADMIN_REALM}"'},
    )


def check_admin_credentials(username: str, password: str, settings: Settings) -> bool:
    """Comparaison en temps constant; le hash bcrypt est prioritaire s'il est configuré."""
    user_ok = secrets.compare_digest(username.encode("utf-8"), settings.admin_username.encode("utf-8"))
    if settings.admin_password_hash:
        try:
            password_ok = bcrypt.checkpw(password.encode("utf-8"), settings.admin_password_hash.encode("utf-8"))
        except ValueError:
            password_ok = False
    else:
        password_ok = secrets.compare_digest(password.encode("utf-8"), settings.admin_password.encode("utf-8"))
    return user_ok and password_ok


def require_admin(
    credentials: HTTPBasicCredentials | None = Depends(basic_auth),
    settings: Settings = Depends(get_settings),
) -> str:
    if credentials is None:
        raise _challenge()
    if not check_admin_credentials(credentials.username, credentials.password, settings):
        raise _challenge()
    return credentials.username


def generate_password_hash(password: str) -> str:
    # Génère un hash bcrypt avec salt auto (pour ADMIN_PASSWORD_HASH)
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
