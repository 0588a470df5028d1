from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from teamtasks.database import get_db
from teamtasks.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeUpdate
from teamtasks.services.employees import EmployeeService
from teamtasks.utils.auth import require_action
from teamtasks.utils.claims import Claims
from teamtasks.utils.permissions import Action

router = APIRouter()


@router.get("", response_model=List[EmployeeOut])
def list_employees(
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.LIST_EMPLOYEES)),
):
    """Admins get their whole roster, employees only their own record"""
    return EmployeeService.for_claims(db, claims).list()


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.READ_EMPLOYEE)),
):
    return EmployeeService.for_claims(db, claims).get(employee_id)


@router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def create_employee(
    employee: EmployeeCreate,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.CREATE_EMPLOYEE)),
):
    """Link a registered identity of this tenant as an employee"""
    return EmployeeService.for_claims(db, claims).create(
        email=employee.email,
        department=employee.department,
        position=employee.position,
    )


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: int,
    employee_update: EmployeeUpdate,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.UPDATE_EMPLOYEE)),
):
    return EmployeeService.for_claims(db, claims).update(
        employee_id,
        department=employee_update.department,
        position=employee_update.position,
    )


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.DELETE_EMPLOYEE)),
):
    EmployeeService.for_claims(db, claims).delete(employee_id)
    return {"message": "Employee deleted successfully"}
