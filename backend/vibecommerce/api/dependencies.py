import logging
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from vibecommerce.core.exceptions import Forbidden, InvalidToken, Unauthenticated
from vibecommerce.core.security import Identity, token_service

logger = logging.getLogger(__name__)

# Extracts "Authorization: Bearer <token>"; auto_error=False so we raise our own 401
bearer_scheme = HTTPBearer(auto_error=False)

CREDENTIALS_MESSAGE = "Could not validate credentials"


async def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """
    Resolve the caller from their bearer token.

    Stateless: only the token signature and expiry are checked. The identity
    is also attached to request.state so downstream code can read it.
    Cart and order routes use identity.id as the owner - never a user id
    from the request body.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated(CREDENTIALS_MESSAGE)

    try:
        identity = token_service.verify(credentials.credentials)
    except InvalidToken as e:
        # Expired vs. tampered is only visible in logs
        logger.debug(f"Rejected bearer token: {e.message}")
        raise Unauthenticated(CREDENTIALS_MESSAGE)

    request.state.identity = identity
    return identity


async def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    """
    Allow only admin identities.

    The role comes from the token, so a demoted admin keeps access until
    their token expires.
    """
    if not identity.is_admin:
        raise Forbidden("Admin access required")
    return identity
