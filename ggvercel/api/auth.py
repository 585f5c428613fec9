"""Bearer-token gate for the mutating dashboard routes."""

from __future__ import annotations

import hmac
import logging

from fastapi import Depends, Header

from ggvercel.api.dependencies import get_settings
from ggvercel.config import Settings
from ggvercel.errors import AuthError

logger = logging.getLogger(__name__)


def token_accepted(token: str, accepted: tuple[str, ...]) -> bool:
    return any(hmac.compare_digest(token.encode(), secret.encode()) for secret in accepted)


async def require_bearer(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    if not authorization:
        raise AuthError(401, "Authorization header required")
    token = authorization.removeprefix("Bearer ")
    if not token_accepted(token, settings.accepted_tokens):
        logger.warning("Rejected request with an invalid bearer token")
        raise AuthError(403, "Invalid token")
