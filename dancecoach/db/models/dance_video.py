# dancecoach/db/models/dance_video.py
from typing import Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Text
from datetime import datetime, timezone
import uuid


class DanceVideo(SQLModel, table=True):
    __tablename__ = "dance_videos"

    id: str = Field(default_factory=lambda: f"video_{uuid.uuid4().hex}", primary_key=True)
    user_id: str = Field(index=True, max_length=64)
    title: str = Field(max_length=255)
    video_url: str
    video_type: str = Field(max_length=10)  # teacher, student
    student_name: Optional[str] = Field(default=None, max_length=100)
    dance_style: str = Field(default="", max_length=50)
    notes: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    status: str = Field(default="submitted", max_length=16)  # submitted, analyzing, completed, failed
    analysis_text: Optional[str] = Field(default=None, sa_column=Column(Text))
    technique_score: Optional[int] = Field(default=None, ge=0, le=100)
    rhythm_score: Optional[int] = Field(default=None, ge=0, le=100)
    expression_score: Optional[int] = Field(default=None, ge=0, le=100)
    overall_score: Optional[int] = Field(default=None, ge=0, le=100)
    feedback: Optional[str] = Field(default=None, sa_column=Column(Text))  # JSON string
    failure_reason: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    analyzed_at: Optional[datetime] = None
