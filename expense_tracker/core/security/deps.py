from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Header, HTTPException, status

from expense_tracker.core.logger import logger
from expense_tracker.core.security.jwt import verify_token

@dataclass(frozen=True)
class AuthUser:
    user_id: str
    email: str | None = None

class AuthDeps:
    async def claims(self, authorization: str | None) -> Dict[str, Any]:
        if not authorization:
            raise ValueError("missing Authorization header")
        if not authorization.startswith("Bearer "):
            raise ValueError("invalid auth scheme")
        token = authorization.split(" ", 1)[1].strip()
        if not token:
            raise ValueError("missing token")
        return await verify_token(token)

    async def current_user(self, authorization: str | None) -> AuthUser:
        claims = await self.claims(authorization)
        sub = claims.get("sub")
        if not sub:
            raise ValueError("missing sub in token")
        email = claims.get("email")
        return AuthUser(user_id=str(sub), email=email if isinstance(email, str) else None)

auth_deps = AuthDeps()

async def get_current_user(
    authorization: Optional[str] = Header(default=None),
) -> AuthUser:
    """Resolve the caller from the bearer token or raise 401."""
    try:
        return await auth_deps.current_user(authorization)
    except ValueError as e:
        logger.warning("[Auth] verify_token failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except Exception as e:
        logger.error("[Auth] identity provider unavailable: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
