from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from teamtasks.database import get_db
from teamtasks.models.task import TaskPriority, TaskStatus
from teamtasks.schemas.task import TaskCreate, TaskOut, TaskStatusUpdate, TaskUpdate
from teamtasks.services.tasks import TaskService
from teamtasks.utils.auth import require_action
from teamtasks.utils.claims import Claims
from teamtasks.utils.permissions import Action

router = APIRouter()


@router.get("", response_model=List[TaskOut])
def list_tasks(
    status: Optional[TaskStatus] = None,
    priority: Optional[TaskPriority] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.LIST_TASKS)),
):
    """Tasks visible to the caller, newest first, with optional filters"""
    return TaskService.for_claims(db, claims).list(status=status, priority=priority, employee_id=employee_id)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.READ_TASK)),
):
    return TaskService.for_claims(db, claims).get(task_id)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.CREATE_TASK)),
):
    return TaskService.for_claims(db, claims).create(**task.model_dump())


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.UPDATE_TASK)),
):
    return TaskService.for_claims(db, claims).update(task_id, **task_update.model_dump())


@router.patch("/{task_id}/status", response_model=TaskOut)
def update_task_status(
    task_id: int,
    status_update: TaskStatusUpdate,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.UPDATE_TASK_STATUS)),
):
    """Status-only change; employees may only move their own tasks"""
    return TaskService.for_claims(db, claims).update_status(task_id, status_update.status)


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.DELETE_TASK)),
):
    TaskService.for_claims(db, claims).delete(task_id)
    return {"message": "Task deleted successfully"}
