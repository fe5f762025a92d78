import logging
from functools import lru_cache
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from .core.config import settings
from .database import get_session
from .application.ports.storage_repo import StorageRepository
from .application.ports.text_generator import TextGenerator
from .application.ports.video_repo import VideoRepository
from .application.services.analysis_pipeline import AnalysisPipeline
from .application.services.comparison_service import ComparisonService
from .application.services.feedback_parser import get_feedback_parser
from .application.services.history_service import HistoryService
from .infrastructure.ai.gemini_provider import GeminiTextGenerator
from .infrastructure.persistence.sqlalchemy.repositories.video_repository_sql import SqlVideoRepository
from .infrastructure.storage.local_storage import LocalStorageRepository

logger = logging.getLogger(__name__)

oauth2_scheme = HTTPBearer(auto_error=False)


def decode_jwt_token(token: Optional[str]):
    """Decode and verify JWT token"""
    if not token:
        return None
    # Refuse to trust tokens signed with the placeholder secret
    if not settings.SECRET_KEY or settings.SECRET_KEY == "change-me-in-prod":
        return None
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_current_user(request: Request, credentials: HTTPAuthorizationCredentials = Depends(oauth2_scheme)) -> str:
    token = None
    if credentials and credentials.credentials:
        token = credentials.credentials
    else:
        token = request.cookies.get("access_token")
    payload = decode_jwt_token(token)
    if not payload:
        logger.warning("JWT token decode failed - invalid or expired token")
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing user ID")
        raise HTTPException(status_code=401, detail="Invalid token: missing user ID")
    return user_id


def get_video_repository(session: Session = Depends(get_session)) -> VideoRepository:
    return SqlVideoRepository(session)


@lru_cache()
def get_text_generator() -> TextGenerator:
    return GeminiTextGenerator()


def get_storage_repository() -> StorageRepository:
    return LocalStorageRepository()


def get_analysis_pipeline(
    video_repo: VideoRepository = Depends(get_video_repository),
    text_generator: TextGenerator = Depends(get_text_generator),
) -> AnalysisPipeline:
    return AnalysisPipeline(
        video_repo=video_repo,
        text_generator=text_generator,
        feedback_parser=get_feedback_parser(settings.FEEDBACK_PARSER),
        max_tokens=settings.ANALYSIS_MAX_TOKENS,
    )


def get_comparison_service(
    video_repo: VideoRepository = Depends(get_video_repository),
    text_generator: TextGenerator = Depends(get_text_generator),
) -> ComparisonService:
    return ComparisonService(
        video_repo=video_repo,
        text_generator=text_generator,
        max_tokens=settings.COMPARISON_MAX_TOKENS,
    )


def get_history_service(video_repo: VideoRepository = Depends(get_video_repository)) -> HistoryService:
    return HistoryService(video_repo=video_repo)
