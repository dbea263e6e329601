"""
Middlewares transverses de la boutique.
- register_basic_middlewares: CORS et TrustedHost, pilotés par Settings.
- register_security_middleware: en-têtes de sécurité + CSP ouverte à Stripe.js / Checkout.
- register_no_cache_middleware: pages /admin jamais mises en cache.
Pas de session ni de CSRF: l'admin s'authentifie en HTTP Basic à chaque requête.
"""
from typing import Dict, Iterable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from boutique.config import Settings

STRIPE_SOURCES = ("https://js.stripe.com", "https://checkout.stripe.com")
STRIPE_API = "https://api.stripe.com"
# Swagger (/docs) charge ses assets depuis jsdelivr
DOCS_CDN = "https://cdn.jsdelivr.net"

SECURITY_HEADERS: Dict[str, str] = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=(), payment=(self)",
}
HSTS_VALUE = "max-age=63072000; includeSubDomains"

NO_CACHE_HEADERS: Dict[str, str] = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _join(sources: Iterable[str]) -> str:
    return " ".join(sources)


def build_csp() -> str:
    """
    Content-Security-Policy de la boutique:
    - scripts: self + Stripe.js (+ CDN de la doc)
    - frames: Stripe Checkout uniquement
    - images: self, data/blob et https (visuels produits hébergés ailleurs)
    """
    directives = [
        "default-src 'self'",
        "base-uri 'self'",
        "object-src 'none'",
        "frame-ancestors 'none'",
        "img-src 'self' data: blob: https:",
        f"style-src 'self' 'unsafe-inline' {DOCS_CDN}",
        f"script-src 'self' 'unsafe-inline' {_join(STRIPE_SOURCES)} {DOCS_CDN}",
        f"frame-src {_join(STRIPE_SOURCES)}",
        f"connect-src 'self' {STRIPE_API}",
        "form-action 'self' https://checkout.stripe.com",
    ]
    return "; ".join(directives)


def register_basic_middlewares(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization", "Stripe-Signature"],
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=list(settings.allowed_hosts))


def register_security_middleware(app: FastAPI, settings: Settings) -> None:
    csp = build_csp()

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        # HSTS seulement derrière HTTPS
        if settings.cookie_secure:
            response.headers.setdefault("Strict-Transport-Security", HSTS_VALUE)
        response.headers["Content-Security-Policy"] = csp
        return response


def register_no_cache_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def no_cache_for_admin(request: Request, call_next):
        response = await call_next(request)
        path = request.url.path
        if request.method == "GET" and (path == "/admin" or path.startswith("/admin/")):
            response.headers.update(NO_CACHE_HEADERS)
        return response
