import logging

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_comparison_service, get_current_user
from ..exceptions import create_success_response
from ..application.services.comparison_service import ComparisonService
from ..schemas.comparison.comparison import ComparisonResponse
from ..schemas.common.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comparisons", tags=["Comparisons"])


@router.get("", responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 502: {"model": ErrorResponse}})
async def compare_videos(
    student_id: str = Query(...),
    teacher_id: str = Query(...),
    include_narrative: bool = Query(True),
    user_id: str = Depends(get_current_user),
    service: ComparisonService = Depends(get_comparison_service),
):
    """Gap report between a student's video and a teacher reference video."""
    logger.info(f"User {user_id} comparing student {student_id} with teacher {teacher_id}")
    report = await service.compare(user_id, student_id, teacher_id, include_narrative=include_narrative)
    return create_success_response(ComparisonResponse.from_report(report).model_dump())
