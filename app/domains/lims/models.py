# app/domains/lims/models.py

"""
'lims' 도메인 (검사 카탈로그, 시료, 시료-검사 작업 항목)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional, List, Dict, Any, TYPE_CHECKING
from datetime import datetime, date, time, UTC

from sqlalchemy import JSON, Numeric, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from sqlmodel import Field, Relationship, SQLModel, Column

from .lifecycle import INITIAL_WORK_STATUS, SampleStatus, derive_sample_status

# 순환 임포트 방지를 위한 TYPE_CHECKING
if TYPE_CHECKING:
    from app.domains.pat.models import Patient


def json_column(**kwargs) -> Column:
    """PostgreSQL 에서는 JSONB, 그 외에서는 JSON 으로 저장합니다. None 은 SQL NULL 입니다."""
    return Column(JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"), **kwargs)


# =============================================================================
# 1. tests 테이블 모델 (검사 카탈로그)
# =============================================================================
class TestBase(SQLModel):
    code: str = Field(max_length=20, unique=True, index=True, description="검사 코드 (고유)")
    name: str = Field(max_length=255, description="검사명")
    category: Optional[str] = Field(default=None, max_length=100, description="검사 분류")
    department: Optional[str] = Field(default=None, max_length=100, description="담당 부서")
    price: float = Field(default=0, sa_column=Column(Numeric(8, 2), nullable=False, server_default="0"), description="검사 비용")
    duration: Optional[str] = Field(default=None, max_length=100, description="소요 시간 (예: 2-4 hours)")
    status: str = Field(default="Active", sa_column=Column(String(10), nullable=False, server_default="Active"), description="카탈로그 상태 (Active/Inactive)")
    sample_types: List[str] = Field(default_factory=list, sa_column=json_column(nullable=False), description="검사 가능한 검체 종류 목록")
    description: Optional[str] = Field(default=None, sa_column=Column(Text), description="설명")


class Test(TestBase, table=True):
    __tablename__ = "tests"
    __test__ = False  # pytest 수집 대상 아님

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
    parameters: List["TestParameter"] = Relationship(
        back_populates="test",
        sa_relationship_kwargs={
            'cascade': 'all, delete-orphan',
            'order_by': '[TestParameter.sort_order, TestParameter.id]',
        }
    )
    # 검사 삭제 시 해당 검사의 시료-검사 항목도 삭제됩니다.
    sample_links: List["SampleTest"] = Relationship(
        back_populates="test", sa_relationship_kwargs={'cascade': 'all, delete-orphan'}
    )


# =============================================================================
# 2. test_parameters 테이블 모델 (검사 측정 항목)
# =============================================================================
class TestParameter(SQLModel, table=True):
    __tablename__ = "test_parameters"
    __table_args__ = (UniqueConstraint("test_id", "name", name="uq_test_parameters_test_name"),)
    __test__ = False

    id: Optional[int] = Field(default=None, primary_key=True)
    test_id: int = Field(foreign_key="tests.id", ondelete="CASCADE", index=True, description="검사 ID (FK)")
    name: str = Field(max_length=255, description="파라미터명 (결과 키)")
    unit: Optional[str] = Field(default=None, max_length=50, description="단위")
    normal_range: Optional[str] = Field(default=None, max_length=255, description="정상 범위")
    sort_order: int = Field(default=0, description="표시 순서")

    test: Optional["Test"] = Relationship(back_populates="parameters")


# =============================================================================
# 3. samples 테이블 모델
# =============================================================================
class SampleBase(SQLModel):
    patient_id: int = Field(foreign_key="patients.id", ondelete="CASCADE", index=True, description="환자 ID (FK)")
    accession_number: str = Field(max_length=50, unique=True, index=True, description="접수 번호 (고유)")
    sample_type: str = Field(sa_column=Column(String(20), nullable=False), description="검체 종류")
    collection_date: date = Field(description="채취 일자")
    collection_time: time = Field(description="채취 시각")
    priority: str = Field(default="Normal", sa_column=Column(String(10), nullable=False, server_default="Normal"), description="우선순위")
    location: Optional[str] = Field(default=None, max_length=255, description="보관 위치")
    notes: Optional[str] = Field(default=None, sa_column=Column(Text), description="비고")


class Sample(SampleBase, table=True):
    __tablename__ = "samples"

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
    patient: Optional["Patient"] = Relationship(back_populates="samples")
    sample_tests: List["SampleTest"] = Relationship(
        back_populates="sample",
        sa_relationship_kwargs={'cascade': 'all, delete-orphan', 'order_by': 'SampleTest.id'}
    )

    @property
    def status(self) -> SampleStatus:
        """검사 항목 상태로부터 계산한 시료 상태 (sample_tests 가 로드되어 있어야 합니다)"""
        return derive_sample_status(item.status for item in self.sample_tests)


# =============================================================================
# 4. sample_tests 테이블 모델 (시료-검사 작업 항목, 결과 저장소)
# =============================================================================
class SampleTest(SQLModel, table=True):
    __tablename__ = "sample_tests"
    __table_args__ = (UniqueConstraint("sample_id", "test_id", name="uq_sample_tests_sample_test"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    sample_id: int = Field(foreign_key="samples.id", ondelete="CASCADE", index=True, description="시료 ID (FK)")
    test_id: int = Field(foreign_key="tests.id", ondelete="CASCADE", index=True, description="검사 ID (FK)")
    status: str = Field(
        default=INITIAL_WORK_STATUS.value,
        sa_column=Column(String(20), nullable=False, server_default=INITIAL_WORK_STATUS.value),
        description="작업 상태 (Pending/In Progress/Completed/Cancelled)"
    )
    results: Optional[Dict[str, Any]] = Field(default=None, sa_column=json_column(), description="파라미터명 -> 결과 값")
    unrecognized_results: Optional[Dict[str, Any]] = Field(
        default=None, sa_column=json_column(), description="검사에 선언되지 않은 결과 키 (별도 보관)"
    )
    notes: Optional[str] = Field(default=None, sa_column=Column(Text), description="검사자 메모")
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
    sample: Optional["Sample"] = Relationship(back_populates="sample_tests")
    test: Optional["Test"] = Relationship(back_populates="sample_links")
