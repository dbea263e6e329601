"""
Stockage des images produit envoyées depuis l'admin.
"""
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import BinaryIO, Optional
import logging
import re
import shutil
import time

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "imageFile"
UPLOAD_URL_PREFIX = "/uploads"

_WHITESPACE = re.compile(r"\s+")


def build_upload_name(original_name: str, now_ms: Optional[int] = None) -> str:
    """
    Nom de fichier sans collision (best-effort):
    base (espaces -> '-', minuscules) + '-' + horodatage ms + extension en minuscules.
    Les composants de chemin du nom d'origine sont ignorés.
    """
    name = PureWindowsPath(PurePosixPath(original_name or "").name).name
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        # pas d'extension (ou fichier caché type ".env")
        stem, ext = name, ""
    base = _WHITESPACE.sub("-", stem).lower()
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = f".{ext.lower()}" if ext else ""
    return f"{base}-{stamp}{suffix}"


def store_upload(
    original_name: str,
    fileobj: BinaryIO,
    *,
    upload_dir: Path,
    now_ms: Optional[int] = None,
) -> str:
    """
    Écrit le fichier dans upload_dir et retourne le chemin public (/uploads/<nom>).
    Aucune validation de type ni de taille (endpoint admin).
    """
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = build_upload_name(original_name, now_ms=now_ms)
    with open(upload_dir / filename, "wb") as out:
        shutil.copyfileobj(fileobj, out)
    logger.info("uploads.store_upload saved %s", filename)
    return f"{UPLOAD_URL_PREFIX}/{filename}"


def discard_upload(public_path: str, *, upload_dir: Path) -> None:
    """Supprime un fichier stocké par store_upload (écriture produit échouée)."""
    name = PurePosixPath(public_path or "").name
    if not name:
        return
    (upload_dir / name).unlink(missing_ok=True)
    logger.info("uploads.discard_upload removed %s", name)
