# teamtasks/services/accounts.py
import logging
from typing import Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from teamtasks.config.settings import settings
from teamtasks.models.employee import Employee
from teamtasks.models.user import User, UserRole
from teamtasks.services.tenant_registry import TenantRegistry
from teamtasks.utils.claims import Claims, claims_for_user, claims_to_payload
from teamtasks.utils.exceptions import Conflict, InvalidInput, NotFound, Unauthorized
from teamtasks.utils.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def issue_token(user: User) -> str:
    return create_access_token(claims_to_payload(claims_for_user(user)))


class AccountService:
    """Registration, login and profile lookup for identities"""

    def __init__(self, db: Session):
        self.db = db
        self.registry = TenantRegistry(db)

    def _identity_taken(self, username: str, email: str) -> bool:
        return (
            self.db.query(User.id)
            .filter(or_(User.username == username, User.email == email))
            .first()
            is not None
        )

    def _validate_password(self, password: str) -> None:
        if len(password) < settings.MIN_PASSWORD_LENGTH:
            raise InvalidInput(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise InvalidInput(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    def register(
        self,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.EMPLOYEE,
        admin_code: Optional[str] = None,
    ) -> Tuple[User, str]:
        username = (username or "").strip()
        email = (email or "").strip().lower()
        if not username or not email or not password:
            raise InvalidInput("Username, email, and password are required")
        self._validate_password(password)

        if self._identity_taken(username, email):
            raise Conflict("Username or email already exists")

        admin_id = None
        if role is UserRole.EMPLOYEE:
            if not admin_code:
                raise InvalidInput("Admin code is required for employee registration")
            try:
                admin_id = self.registry.resolve_code(admin_code)
            except NotFound:
                raise InvalidInput("Invalid admin code")

        hashed = hash_password(password)

        # the unique index on admin_code is what guarantees uniqueness, so a
        # collision with a concurrent registration is retried with a fresh code
        for attempt in range(1, self.registry.max_attempts + 1):
            user = User(
                username=username,
                email=email,
                hashed_password=hashed,
                role=role,
                admin_code=self.registry.mint_code() if role is UserRole.ADMIN else None,
                admin_id=admin_id,
            )
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                if self._identity_taken(username, email):
                    raise Conflict("Username or email already exists")
                if role is UserRole.EMPLOYEE:
                    # the tenant admin disappeared between lookup and insert
                    raise InvalidInput("Invalid admin code")
                if attempt == self.registry.max_attempts:
                    raise
                logger.warning("Admin code taken concurrently, retrying (attempt %d)", attempt)
                continue

            self.db.refresh(user)
            logger.info("Registered %s %s (id=%s, tenant=%s)", role.value, username, user.id, user.tenant_id)
            return user, issue_token(user)

    def login(self, username: str, password: str) -> Tuple[User, str]:
        if not username or not password:
            raise InvalidInput("Username and password are required")

        user = self.db.query(User).filter(User.username == username.strip()).first()
        # same answer for unknown user and wrong password
        if not user or not verify_password(password, user.hashed_password):
            logger.info("Failed login for %r", username)
            raise Unauthorized("Invalid credentials")

        return user, issue_token(user)

    def get_profile(self, claims: Claims) -> Tuple[User, Optional[Employee]]:
        """The caller's identity and, for employees, the linked Employee if onboarded"""
        user = self.db.query(User).filter(User.id == claims.id).first()
        if user is None:
            raise NotFound("User not found")

        employee = None
        if claims.role is UserRole.EMPLOYEE:
            employee = (
                self.db.query(Employee)
                .filter(Employee.user_id == user.id, Employee.admin_id == claims.tenant_id)
                .first()
            )
        return user, employee
