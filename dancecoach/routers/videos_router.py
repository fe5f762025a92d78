from typing import Literal, Optional
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from starlette.concurrency import run_in_threadpool

from ..core.config import settings
from ..dependencies import (
    get_analysis_pipeline,
    get_current_user,
    get_history_service,
    get_storage_repository,
)
from ..exceptions import create_success_response
from ..application.ports.storage_repo import StorageRepository
from ..application.services.analysis_pipeline import AnalysisPipeline, VideoSubmission, validate_submission
from ..application.services.history_service import HistoryService
from ..schemas.videos.video import VideoAnalysisResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/videos", tags=["Videos"])


@router.post("")
async def upload_video(
    file: UploadFile = File(...),
    video_type: str = Form(...),
    student_name: Optional[str] = Form(None),
    dance_style: str = Form(""),
    notes: str = Form(""),
    title: Optional[str] = Form(None),
    user_id: str = Depends(get_current_user),
    pipeline: AnalysisPipeline = Depends(get_analysis_pipeline),
    storage: StorageRepository = Depends(get_storage_repository),
):
    """Store an uploaded dance video and run the analysis pipeline on it."""
    content_type = file.content_type or ""
    if not content_type.startswith("video/") or content_type not in settings.ALLOWED_VIDEO_TYPES:
        raise HTTPException(status_code=415, detail=f"File type {content_type or 'unknown'} not allowed")

    file.file.seek(0, 2)
    file_size = file.file.tell()
    file.file.seek(0)
    if file_size > settings.MAX_FILE_SIZE:
        raise HTTPException(status_code=413, detail=f"File too large (max {settings.MAX_FILE_SIZE // (1024*1024)}MB)")

    submission = VideoSubmission(
        user_id=user_id,
        title=title or file.filename or "Untitled video",
        video_url="",
        role=video_type,
        dance_style=dance_style,
        notes=notes,
        student_name=student_name,
    )
    # Reject bad role data before anything is written to storage
    validate_submission(submission)

    content = await file.read()
    submission.video_url = await run_in_threadpool(storage.save_bytes, settings.VIDEO_SUBDIR, file.filename, content)

    logger.info(f"Stored upload {file.filename} for user {user_id} at {submission.video_url}")
    record = await pipeline.run(submission)
    return create_success_response(VideoAnalysisResponse.from_record(record).model_dump())


@router.get("")
def list_videos(
    search: Optional[str] = Query(None),
    video_type: Literal["all", "teacher", "student"] = Query("all"),
    sort_by: Literal["date", "score", "name"] = Query("date"),
    user_id: str = Depends(get_current_user),
    history: HistoryService = Depends(get_history_service),
):
    records = history.list_history(user_id, search=search, role=video_type, sort_by=sort_by)
    return create_success_response([VideoAnalysisResponse.from_record(r).model_dump() for r in records])


@router.get("/{video_id}")
def get_video(
    video_id: str,
    user_id: str = Depends(get_current_user),
    history: HistoryService = Depends(get_history_service),
):
    record = history.get_video(user_id, video_id)
    return create_success_response(VideoAnalysisResponse.from_record(record).model_dump())
