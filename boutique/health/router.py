from fastapi import APIRouter, Depends, Request

from boutique.config import Settings, get_settings
from boutique.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_root(request: Request, settings: Settings = Depends(get_settings)):
    return {
        "ok": True,
        "stripe": settings.stripe_enabled,
        "webhook_signed": bool(settings.stripe_webhook_secret),
        "rate_limit": rate_limit_health_info(request),
    }
