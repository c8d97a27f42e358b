import json, time, asyncio
from typing import Any, Dict, List, Tuple
import httpx
from jose import JWTError, jwt as jose_jwt
from jose.utils import base64url_decode
from expense_tracker.core.logger import logger
from expense_tracker.core.settings import settings

# JWKS cache per issuer (RS256)
_JWKS_CACHE: Dict[str, Tuple[List[Dict[str, Any]], float]] = {}
_LOCKS: Dict[str, asyncio.Lock] = {}
_TTL = 600

def _b64json(part: str) -> Dict[str, Any]:
    try:
        return json.loads(base64url_decode(part.encode()).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        raise ValueError("malformed token")

def _hs_secret() -> str:
    return settings.AUTH_JWT_SECRET.get_secret_value()

def _decode_options() -> Dict[str, Any]:
    return {"verify_aud": bool(settings.AUTH_AUDIENCE)}

async def _fetch_jwks(iss: str) -> List[Dict[str, Any]]:
    base = iss.rstrip("/")
    urls = [f"{base}/.well-known/jwks.json", f"{base}/keys"]
    async with httpx.AsyncClient(timeout=10) as cli:
        for url in urls:
            r = await cli.get(url)
            logger.info("[JWT] JWKS %s -> %s", url, r.status_code)
            if r.status_code == 200:
                data = r.json()
                keys = data.get("keys") if isinstance(data, dict) else data
                if keys:
                    return keys
    raise RuntimeError(f"no jwks for issuer: {iss}")

async def _get_jwks(iss: str) -> List[Dict[str, Any]]:
    keys, exp = _JWKS_CACHE.get(iss, (None, 0.0))
    now = time.time()
    if keys and now < exp:
        return keys
    lock = _LOCKS.setdefault(iss, asyncio.Lock())
    async with lock:
        keys, exp = _JWKS_CACHE.get(iss, (None, 0.0))
        if keys and now < exp:
            return keys
        keys = await _fetch_jwks(iss)
        _JWKS_CACHE[iss] = (keys, time.time() + _TTL)
        return keys

async def _verify_rs256(token: str, header: Dict[str, Any]) -> Dict[str, Any]:
    kid = header.get("kid")
    if not kid:
        raise ValueError("missing kid")
    iss = settings.AUTH_ISSUER
    if not iss:
        raise ValueError("RS256 requires AUTH_ISSUER")

    keys = await _get_jwks(iss)
    key = next((k for k in keys if k.get("kid") == kid), None)
    if not key:
        # keys may have rotated
        _JWKS_CACHE.pop(iss, None)
        keys = await _get_jwks(iss)
        key = next((k for k in keys if k.get("kid") == kid), None)
        if not key:
            raise ValueError("kid not found in JWKS")

    try:
        return jose_jwt.decode(
            token,
            key,
            algorithms=["RS256"],
            audience=settings.AUTH_AUDIENCE,
            issuer=f"{iss}/",
            options=_decode_options(),
        )
    except JWTError:
        # Auth0 issues `iss` with a trailing slash, other providers don't
        try:
            return jose_jwt.decode(
                token,
                key,
                algorithms=["RS256"],
                audience=settings.AUTH_AUDIENCE,
                issuer=iss,
                options=_decode_options(),
            )
        except JWTError as e:
            raise ValueError(str(e))

async def _verify_hs256(token: str) -> Dict[str, Any]:
    secret = _hs_secret()
    if not secret:
        raise ValueError("HS256 requires AUTH_JWT_SECRET")
    try:
        claims = jose_jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            audience=settings.AUTH_AUDIENCE,
            options=_decode_options(),
        )
    except JWTError as e:
        raise ValueError(str(e))
    iss = settings.AUTH_ISSUER
    if iss and str(claims.get("iss", "")).rstrip("/") != iss:
        raise ValueError("invalid issuer")
    return claims

async def verify_token(token: str) -> Dict[str, Any]:
    try:
        header_b64, _, _ = token.split(".")
    except ValueError:
        raise ValueError("malformed token")

    header = _b64json(header_b64)
    alg = str(header.get("alg", ""))
    logger.debug("[JWT] verify alg=%s", alg)

    if alg.upper() == "HS256":
        claims = await _verify_hs256(token)
    elif alg.upper() == "RS256":
        claims = await _verify_rs256(token, header)
    else:
        raise ValueError(f"unsupported algorithm: {alg}")

    exp = claims.get("exp")
    if isinstance(exp, (int, float)) and time.time() > float(exp):
        raise ValueError("token expired")
    return claims
