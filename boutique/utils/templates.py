from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from boutique.config import TEMPLATES_DIR

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_not_found(request: Request) -> HTMLResponse:
    """Page 404 dédiée (produit inconnu, route non trouvée)."""
    return templates.TemplateResponse(request, "404.html", {}, status_code=404)
