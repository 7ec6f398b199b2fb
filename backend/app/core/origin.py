"""Origin trust check.

A request is trusted when its Origin header (or, failing that, the origin part
of its Referer) is one of ``settings.TRUSTED_ORIGINS``. The result is computed
once per request and handed to the services as a plain boolean.
"""
import logging
from typing import Iterable, Optional
from urllib.parse import urlsplit

from fastapi import Request

from app.core.config import settings
from app.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def _normalize_origin(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    parts = urlsplit(value.strip())
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def is_trusted_origin(request: Request, trusted_origins: Iterable[str]) -> bool:
    allowed = {o for o in (_normalize_origin(t) for t in trusted_origins) if o}
    origin = _normalize_origin(request.headers.get("origin"))
    if origin is None:
        origin = _normalize_origin(request.headers.get("referer"))
    return origin is not None and origin in allowed


async def get_origin_trust(request: Request) -> bool:
    """FastAPI dependency returning whether the caller is a trusted surface."""
    return is_trusted_origin(request, settings.TRUSTED_ORIGINS)


async def require_trusted_origin(request: Request) -> bool:
    """
    Dependency for write routes: reject untrusted callers before the body is validated.

    Raises:
        UnauthorizedError: origin is not in TRUSTED_ORIGINS
    """
    if not is_trusted_origin(request, settings.TRUSTED_ORIGINS):
        logger.warning(f"Rejected {request.method} {request.url.path} from untrusted origin")
        raise UnauthorizedError("Revisions can only be proposed from a trusted origin")
    return True
