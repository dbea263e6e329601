"""
Registre central des routers.
- Web: catalogue, panier/succès/config
- API: checkout
- Webhook Stripe (body brut)
- Admin (HTTP Basic) et Health
"""
from fastapi import FastAPI

from boutique.admin.views import router as admin_router
from boutique.catalog.views import router as catalog_router
from boutique.health.router import router as health_router
from boutique.payments import views as payments_views


def register_routers(app: FastAPI) -> None:
    # Pages web (HTML)
    app.include_router(catalog_router)
    app.include_router(payments_views.web_router)
    # API
    app.include_router(payments_views.api_router)
    app.include_router(payments_views.webhook_router)
    # Admin
    app.include_router(admin_router)
    # Health & monitoring
    app.include_router(health_router)
