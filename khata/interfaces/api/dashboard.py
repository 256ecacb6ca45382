"""Dashboard API."""

from fastapi import APIRouter, Depends

from khata.application.services.report_service import dashboard_summary
from khata.core.responses import success
from khata.domain.repositories.transaction_repository import TransactionRepository
from khata.domain.schemas.auth import CurrentUser
from khata.interfaces.api.deps import get_current_user
from khata.interfaces.deps import get_transaction_repository

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/summary")
def summary(
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: CurrentUser = Depends(get_current_user),
):
    """Totals across every customer plus the five most recent entries."""
    return success(dashboard_summary(repo, user))
