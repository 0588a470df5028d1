# teamtasks/utils/claims.py
from dataclasses import dataclass
from typing import ClassVar, Union

from teamtasks.models.user import User, UserRole


@dataclass(frozen=True)
class AdminClaims:
    """Verified identity of an admin. An admin is the root of its own tenant."""

    id: int
    username: str
    email: str

    role: ClassVar[UserRole] = UserRole.ADMIN

    @property
    def tenant_id(self) -> int:
        return self.id


@dataclass(frozen=True)
class EmployeeClaims:
    """Verified identity of an employee, bound to the admin whose code it registered with."""

    id: int
    username: str
    email: str
    admin_id: int

    role: ClassVar[UserRole] = UserRole.EMPLOYEE

    @property
    def tenant_id(self) -> int:
        return self.admin_id


Claims = Union[AdminClaims, EmployeeClaims]


def claims_for_user(user: User) -> Claims:
    if user.is_admin:
        return AdminClaims(id=user.id, username=user.username, email=user.email)
    return EmployeeClaims(id=user.id, username=user.username, email=user.email, admin_id=user.admin_id)


def claims_to_payload(claims: Claims) -> dict:
    """Token payload for the given claims (jose requires a string subject)"""
    return {
        "sub": str(claims.id),
        "username": claims.username,
        "email": claims.email,
        "role": claims.role.value,
        "tenant_id": claims.tenant_id,
    }


def claims_from_payload(payload: dict) -> Claims:
    """Rebuild claims from a decoded token; raises ValueError if the payload is malformed"""
    try:
        user_id = int(payload["sub"])
        username = payload["username"]
        email = payload["email"]
        role = UserRole(payload["role"])
        tenant_id = int(payload["tenant_id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"malformed token payload: {exc}") from exc

    if role is UserRole.ADMIN:
        if tenant_id != user_id:
            raise ValueError("admin token bound to a foreign tenant")
        return AdminClaims(id=user_id, username=username, email=email)
    return EmployeeClaims(id=user_id, username=username, email=email, admin_id=tenant_id)
