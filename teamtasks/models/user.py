# teamtasks/models/user.py
import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from teamtasks.database import Base


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        # an admin is its own tenant root; an employee identity always points at one
        CheckConstraint(
            "(role = 'admin' AND admin_code IS NOT NULL AND admin_id IS NULL) OR "
            "(role = 'employee' AND admin_code IS NULL AND admin_id IS NOT NULL)",
            name="ck_users_tenant_binding",
        ),
        # target of the composite (user_id, admin_id) key on employees
        UniqueConstraint("id", "admin_id", name="uq_users_id_admin"),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(80), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", native_enum=False, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
    )
    admin_code = Column(String(32), unique=True, index=True, nullable=True)
    admin_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    employee = relationship(
        "Employee",
        back_populates="user",
        primaryjoin="User.id == Employee.user_id",
        foreign_keys="Employee.user_id",
        uselist=False,
        passive_deletes=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def tenant_id(self) -> int:
        """Id of the admin that owns this identity's tenant"""
        return self.id if self.is_admin else self.admin_id
