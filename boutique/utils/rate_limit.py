"""
Rate limiting optionnel des endpoints sensibles (checkout).
- Redis via fastapi-limiter quand le lifespan l'a initialisé
- Fenêtre glissante en mémoire si LOCAL_RATE_LIMIT_FALLBACK=1 (dev/tests, un seul process)
- Sinon aucune limite
"""
from collections import defaultdict, deque
from typing import Any, Deque, Dict, Optional
from urllib.parse import urlparse
import time

from fastapi import HTTPException, Request, Response
from fastapi_limiter.depends import RateLimiter


class SlidingWindow:
    """Compteur de hits par clé sur une fenêtre de `seconds` secondes."""

    def __init__(self):
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._last_sweep = 0.0

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, now: float, seconds: int) -> None:
        # Clés dont tous les hits sont sortis de la fenêtre (IP de passage)
        stale = [k for k, hits in self._hits.items() if not hits or now - hits[-1] >= seconds]
        for k in stale:
            del self._hits[k]
        self._last_sweep = now

    def hit(self, key: str, times: int, seconds: int, now: Optional[float] = None) -> bool:
        """Enregistre un hit; False si le quota est déjà atteint."""
        now = time.monotonic() if now is None else now
        if now - self._last_sweep >= seconds:
            self._sweep(now, seconds)
        hits = self._hits[key]
        while hits and now - hits[0] >= seconds:
            hits.popleft()
        if len(hits) >= times:
            return False
        hits.append(now)
        return True


def _client_key(req: Request) -> str:
    ip = req.client.host if req.client else "local"
    return f"ip:{ip}:{req.url.path}"


async def _identifier(req: Request) -> str:
    return _client_key(req)


def _local_window(request: Request) -> SlidingWindow:
    window = getattr(request.app.state, "rate_limit_window", None)
    if window is None:
        window = request.app.state.rate_limit_window = SlidingWindow()
    return window


def optional_rate_limit(times: int, seconds: int):
    """Dépendance FastAPI: 429 au-delà de `times` requêtes par IP et par chemin."""
    limiter = RateLimiter(times=times, seconds=seconds, identifier=_identifier)

    async def _dep(request: Request, response: Response):
        settings = getattr(request.app.state, "settings", None)
        if settings is not None and settings.rate_limit_local_fallback:
            if not _local_window(request).hit(_client_key(request), times, seconds):
                raise HTTPException(status_code=429, detail="Too Many Requests")
            return
        if getattr(request.app.state, "rate_limit_enabled", False):
            await limiter(request, response)

    return _dep


def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    settings = getattr(request.app.state, "settings", None)
    enabled = bool(getattr(request.app.state, "rate_limit_enabled", False))
    backend = None
    if enabled:
        backend = "redis"
    elif settings is not None and settings.rate_limit_local_fallback:
        backend = "memory"
    info: Dict[str, Any] = {"enabled": enabled, "backend": backend}
    if enabled and settings is not None and settings.rate_limit_redis_url:
        p = urlparse(settings.rate_limit_redis_url)
        info["redis"] = {"scheme": p.scheme, "host": p.hostname, "port": p.port}
    return info
