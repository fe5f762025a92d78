from dataclasses import asdict

from fastapi import APIRouter, Depends

from ..dependencies import get_current_user, get_history_service
from ..exceptions import create_success_response
from ..application.services.history_service import HistoryService
from ..schemas.videos.video import DashboardStatsResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats")
def dashboard_stats(
    user_id: str = Depends(get_current_user),
    history: HistoryService = Depends(get_history_service),
):
    stats = history.dashboard_stats(user_id)
    return create_success_response(DashboardStatsResponse(**asdict(stats)).model_dump())
