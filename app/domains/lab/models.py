# app/domains/lab/models.py

from typing import Optional
from datetime import datetime, UTC

from sqlalchemy import Text
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP
from sqlmodel import Field, SQLModel, Column


class LabSetting(SQLModel, table=True):
    """
    lab_settings 테이블 모델을 정의하는 클래스입니다.
    이 테이블은 항상 단 하나의 행만 유지합니다.
    """
    __tablename__ = "lab_settings"

    id: int = Field(default=1, primary_key=True, description="고유 ID (항상 1)")
    name: str = Field(max_length=255, description="실험실명")
    address: str = Field(default="", max_length=500, description="주소")
    phone: str = Field(default="", max_length=20, description="대표 전화")
    email: str = Field(default="", max_length=255, description="대표 이메일")
    # URL, 로컬 파일 경로 또는 data URI
    logo: Optional[str] = Field(default=None, sa_column=Column(Text), description="로고")
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=lambda: datetime.now(UTC)),
        description="레코드 마지막 업데이트 일시"
    )
