# teamtasks/models/employee.py
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, ForeignKeyConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from teamtasks.database import Base


class Employee(Base):
    __tablename__ = "employees"
    __table_args__ = (
        # target of the composite (employee_id, admin_id) key on tasks
        UniqueConstraint("id", "admin_id", name="uq_employees_id_admin"),
        # the linked identity must belong to the same tenant; unlinked rows (user_id NULL) pass
        ForeignKeyConstraint(
            ["user_id", "admin_id"],
            ["users.id", "users.admin_id"],
            ondelete="CASCADE",
            name="fk_employees_user_tenant",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    # copied from the linked identity when the admin onboards it
    name = Column(String(80), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    department = Column(String(120), nullable=False)
    position = Column(String(120), nullable=False)
    user_id = Column(Integer, unique=True, nullable=True)
    admin_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship(
        "User",
        primaryjoin="Employee.user_id == User.id",
        foreign_keys=[user_id],
        back_populates="employee",
    )
    tasks = relationship(
        "Task",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
