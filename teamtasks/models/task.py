# teamtasks/models/task.py
import enum
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, ForeignKeyConstraint, Integer, String, Text
from sqlalchemy.orm import relationship

from teamtasks.database import Base


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        # a task can only point at an employee of the same tenant, and dies with it
        ForeignKeyConstraint(
            ["employee_id", "admin_id"],
            ["employees.id", "employees.admin_id"],
            ondelete="CASCADE",
            name="fk_tasks_employee_tenant",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)

    status = Column(
        Enum(TaskStatus, name="task_status", native_enum=False, values_callable=_enum_values),
        default=TaskStatus.PENDING,
        nullable=False,
    )
    priority = Column(
        Enum(TaskPriority, name="task_priority", native_enum=False, values_callable=_enum_values),
        default=TaskPriority.MEDIUM,
        nullable=False,
    )

    employee_id = Column(Integer, nullable=False, index=True)
    admin_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Dates (date only, no time component)
    due_date = Column(Date, nullable=True)

    # System dates
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    employee = relationship("Employee", back_populates="tasks")

    @property
    def employee_name(self):
        return self.employee.name if self.employee else None
