# teamtasks/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from teamtasks.database import get_db
from teamtasks.schemas.dashboard import DashboardOut
from teamtasks.services.dashboard import DashboardService
from teamtasks.utils.auth import require_action
from teamtasks.utils.claims import Claims
from teamtasks.utils.permissions import Action

router = APIRouter()


@router.get("", response_model=DashboardOut)
def get_dashboard(
    db: Session = Depends(get_db),
    claims: Claims = Depends(require_action(Action.READ_DASHBOARD)),
):
    """Tenant-wide statistics for admins, personal statistics for employees"""
    return DashboardService.for_claims(db, claims).summary()
