from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from teamtasks.config.settings import settings
from teamtasks.database import get_db
from teamtasks.models.user import User
from teamtasks.schemas.employee import EmployeeOut
from teamtasks.schemas.user import AuthOut, MeOut, UserCreate, UserLogin
from teamtasks.services.accounts import AccountService
from teamtasks.utils.auth import get_current_claims
from teamtasks.utils.claims import Claims

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def _auth_payload(user: User, token: str) -> AuthOut:
    return AuthOut(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        admin_code=user.admin_code,
        tenant_id=user.tenant_id,
        token=token,
    )


@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, response: Response, db: Session = Depends(get_db)):
    """Self-service registration. Admins get a fresh admin code; employees join with one."""
    user, token = AccountService(db).register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        admin_code=payload.admin_code,
    )
    _set_session_cookie(response, token)
    return _auth_payload(user, token)


@router.post("/login", response_model=AuthOut)
def login(payload: UserLogin, response: Response, db: Session = Depends(get_db)):
    user, token = AccountService(db).login(payload.username, payload.password)
    _set_session_cookie(response, token)
    return _auth_payload(user, token)


@router.post("/logout")
def logout(response: Response):
    # tokens are stateless; dropping the cookie is all there is to do
    response.delete_cookie(settings.COOKIE_NAME)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeOut)
def me(claims: Claims = Depends(get_current_claims), db: Session = Depends(get_db)):
    user, employee = AccountService(db).get_profile(claims)
    profile = MeOut.model_validate(user)
    if employee is not None:
        profile.employee = EmployeeOut.model_validate(employee)
    return profile
