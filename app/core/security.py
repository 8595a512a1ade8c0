from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, Request, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.config import settings
import structlog

logger = structlog.get_logger()

security = HTTPBearer(auto_error=False)


def verify_token(token: str) -> Optional[str]:
    """Return the identity carried by a session token, or None if it has none."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning("Session token rejected", error=str(e))
        return None

    user_id = payload.get(settings.jwt_identity_claim)
    if not user_id or not isinstance(user_id, str):
        logger.warning("Session token missing identity", claim=settings.jwt_identity_claim)
        return None
    return user_id


def resolve_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """
    Resolve the caller identity from the bearer token, falling back to the
    session cookie. Absence of an identity is a normal outcome, never an error.
    """
    if credentials is not None:
        token = credentials.credentials
    else:
        token = request.cookies.get(settings.session_cookie_name)

    if not token:
        return None
    return verify_token(token)


def require_user_id(user_id: Optional[str] = Depends(resolve_identity)) -> str:
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return user_id
