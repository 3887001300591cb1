# app/domains/pat/models.py

"""
'pat' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from enum import Enum
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, UTC

from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from sqlmodel import Field, Relationship, SQLModel, Column

# 순환 임포트 방지를 위한 TYPE_CHECKING
if TYPE_CHECKING:
    from app.domains.lims.models import Sample


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


# =============================================================================
# 1. patients 테이블 모델
# =============================================================================
class PatientBase(SQLModel):
    name: str = Field(max_length=255, index=True, description="환자 이름")
    age: Optional[int] = Field(default=None, description="나이 (0-150)")
    gender: Optional[str] = Field(default=None, max_length=10, description="성별 (Male/Female/Other)")
    phone: Optional[str] = Field(default=None, max_length=20, description="연락처")
    email: Optional[str] = Field(default=None, max_length=255, description="이메일")
    address: Optional[str] = Field(default=None, max_length=500, description="주소")
    doctor: Optional[str] = Field(default=None, max_length=255, description="의뢰 의사")


class Patient(PatientBase, table=True):
    __tablename__ = "patients"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=lambda: datetime.now(UTC)),
        description="레코드 마지막 업데이트 일시"
    )

    # --- 관계 정의 ---
    # 환자 삭제 시 시료(및 시료의 검사 항목)도 함께 삭제됩니다.
    samples: List["Sample"] = Relationship(
        back_populates="patient",
        sa_relationship_kwargs={'cascade': 'all, delete-orphan', 'order_by': 'Sample.id'}
    )
