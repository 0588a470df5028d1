# teamtasks/utils/auth.py
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError

from teamtasks.config.settings import settings
from teamtasks.utils.claims import Claims, claims_from_payload
from teamtasks.utils.exceptions import SessionExpired, Unauthorized
from teamtasks.utils.permissions import Action, authorize
from teamtasks.utils.security import decode_access_token

# auto_error is off so a cookie can stand in for the Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)


def verify(token: Optional[str]) -> Claims:
    """Turn a session token into claims, or raise Unauthorized / SessionExpired"""
    if not token:
        raise Unauthorized("Authentication required")
    try:
        payload = decode_access_token(token)
    except ExpiredSignatureError:
        raise SessionExpired()
    except JWTError:
        raise Unauthorized("Invalid or expired token")

    try:
        return claims_from_payload(payload)
    except ValueError:
        raise Unauthorized("Invalid or expired token")


def get_token(request: Request, bearer: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    return bearer or request.cookies.get(settings.COOKIE_NAME)


def get_current_claims(token: Optional[str] = Depends(get_token)) -> Claims:
    return verify(token)


def require_action(action: Action):
    """Dependency that applies the role-level policy for ``action``"""

    def dependency(claims: Claims = Depends(get_current_claims)) -> Claims:
        authorize(claims, action)
        return claims

    return dependency
