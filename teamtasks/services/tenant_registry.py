# teamtasks/services/tenant_registry.py
import logging
import secrets

from sqlalchemy.orm import Session

from teamtasks.config.settings import settings
from teamtasks.models.user import User, UserRole
from teamtasks.utils.exceptions import NotFound

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


class TenantRegistry:
    """Mints and resolves the join codes admins hand out to their employees"""

    def __init__(self, db: Session, code_bytes: int = None, max_attempts: int = None):
        self.db = db
        self.code_bytes = code_bytes or settings.ADMIN_CODE_BYTES
        self.max_attempts = max_attempts or settings.ADMIN_CODE_MAX_ATTEMPTS

    def generate_code(self) -> str:
        return secrets.token_hex(self.code_bytes).upper()

    def code_exists(self, code: str) -> bool:
        return self.db.query(User.id).filter(User.admin_code == code).first() is not None

    def mint_code(self) -> str:
        """Return a code no admin currently holds.

        This is only a pre-check: two concurrent registrations can still draw
        the same code, so the unique index on users.admin_code decides and
        the caller retries on IntegrityError.
        """
        for _ in range(self.max_attempts):
            code = self.generate_code()
            if not self.code_exists(code):
                return code
            logger.warning("Admin code collision while minting, drawing again")
        raise RuntimeError(f"Could not mint a unique admin code after {self.max_attempts} attempts")

    def resolve_code(self, code: str) -> int:
        """Return the id of the admin that owns ``code``"""
        admin_id = (
            self.db.query(User.id)
            .filter(User.admin_code == normalize_code(code), User.role == UserRole.ADMIN)
            .scalar()
        )
        if admin_id is None:
            raise NotFound("Invalid admin code")
        return admin_id
