"""
Montage des fichiers statiques.
Expose:
- /static  -> répertoire public (css, js, images)
- /uploads -> images produit téléversées depuis l'admin
"""
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from boutique.config import PUBLIC_DIR, Settings


def mount_static_files(app: FastAPI, settings: Settings) -> None:
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/static", StaticFiles(directory=str(PUBLIC_DIR)), name="static")
    app.mount("/uploads", StaticFiles(directory=str(settings.upload_dir)), name="uploads")
