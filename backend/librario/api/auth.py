"""Auth Dependency — bearer-token gate for protected routes.

Invariants:
    - No Authorization header (or a non-Bearer scheme) → AuthMissingError (401)
    - Token present but not verifiable → AuthInvalidError (403)
    - On success the decoded identity {id, usuario} is returned to the route

Design Decisions:
    - HTTPBearer(auto_error=False): we raise our own errors so 401/403 share the error envelope
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from librario.api.dependencies import get_token_codec
from librario.core.errors import AuthMissingError
from librario.infrastructure.security import TokenCodec, TokenIdentity

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def require_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    codec: TokenCodec = Depends(get_token_codec),
) -> TokenIdentity:
    """Resolve the authenticated identity or fail closed."""
    if credentials is None or not credentials.credentials:
        logger.info(
            "Protected route called without token",
            extra={"path": request.url.path},
        )
        raise AuthMissingError()
    identity = codec.decode(credentials.credentials)
    request.state.user = identity
    return identity
