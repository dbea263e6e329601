"""
Factory d'application utilisée par les entrypoints (boutique.asgi, python -m boutique).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import Optional

from fastapi import FastAPI

from boutique.catalog.repository import ProductRepository
from boutique.config import Settings, load_settings
from boutique.infra.supabase_client import SupabaseClientFactory
from boutique.orders.repository import OrderRepository
from boutique.payments.gateway import PaymentGateway
from boutique.payments.stripe_client import StripeGateway
from .exception_handlers import register_exception_handlers
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_no_cache_middleware, register_security_middleware
from .routers import register_routers
from .static import mount_static_files


def create_app(
    settings: Optional[Settings] = None,
    *,
    gateway: Optional[PaymentGateway] = None,
    products: Optional[ProductRepository] = None,
    orders: Optional[OrderRepository] = None,
) -> FastAPI:
    """
    Construit l'app FastAPI:
      1) Settings immuable (chargé depuis l'environnement si absent)
      2) dépendances partagées sur app.state: repositories Supabase, passerelle Stripe
      3) middlewares de base, statiques, sécurité, no-cache
      4) gestionnaires d'exceptions puis routers
    Les paramètres optionnels permettent d'injecter des doublures en test.
    """
    settings = settings or load_settings()
    app = FastAPI(title="Boutique Chogan", lifespan=lifespan)

    app.state.settings = settings
    if products is None or orders is None:
        client = SupabaseClientFactory.from_settings(settings)
        if products is None:
            products = ProductRepository(client)
        if orders is None:
            orders = OrderRepository(client)
    app.state.products = products
    app.state.orders = orders
    app.state.gateway = gateway or StripeGateway.from_settings(settings)

    register_basic_middlewares(app, settings)
    mount_static_files(app, settings)
    register_security_middleware(app, settings)
    register_no_cache_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
