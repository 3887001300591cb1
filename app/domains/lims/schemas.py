# app/domains/lims/schemas.py

"""
'lims' 도메인 (검사 카탈로그, 시료, 시료-검사 작업 항목, 결과)의 Pydantic 스키마를 정의하는 모듈입니다.

이 스키마들은 API 요청(Request) 및 응답(Response) 데이터의 유효성을 검사하고,
데이터를 직렬화(Serialization) 및 역직렬화(Deserialization)하는 데 사용됩니다.
"""

from typing import List, Optional, Dict, Any
from datetime import date, datetime, time
from pydantic import BaseModel, Field as PydanticField, field_validator

from app.domains.pat.schemas import PatientSummary
from .lifecycle import CatalogStatus, Priority, SampleStatus, SpecimenType, WorkStatus


# =============================================================================
# 1. 검사 측정 항목 (TestParameter) 스키마
# =============================================================================
class TestParameterCreate(BaseModel):
    name: str = PydanticField(min_length=1, max_length=255, description="파라미터명")
    unit: Optional[str] = PydanticField(default=None, max_length=50, description="단위")
    normal_range: Optional[str] = PydanticField(default=None, max_length=255, description="정상 범위")


class TestParameterResponse(TestParameterCreate):
    id: int
    sort_order: int = PydanticField(description="표시 순서")

    class Config:
        from_attributes = True


def _coerce_parameters(value: Any) -> Any:
    """문자열만 주어진 파라미터는 이름만 가진 항목으로 변환하고, 이름 중복을 거부합니다."""
    if value is None:
        return value
    items = [{"name": item} if isinstance(item, str) else item for item in value]
    names = [item.get("name") if isinstance(item, dict) else getattr(item, "name", None) for item in items]
    duplicates = sorted({n for n in names if n is not None and names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate parameter names: {', '.join(duplicates)}")
    return items


# =============================================================================
# 2. 검사 카탈로그 (Test) 스키마
# =============================================================================
class TestBase(BaseModel):
    code: str = PydanticField(min_length=1, max_length=20, description="검사 코드 (고유)")
    name: str = PydanticField(min_length=1, max_length=255, description="검사명")
    category: Optional[str] = PydanticField(default=None, max_length=100, description="검사 분류")
    department: Optional[str] = PydanticField(default=None, max_length=100, description="담당 부서")
    price: float = PydanticField(default=0, ge=0, description="검사 비용")
    duration: Optional[str] = PydanticField(default=None, max_length=100, description="소요 시간")
    status: CatalogStatus = PydanticField(default=CatalogStatus.ACTIVE.value, description="카탈로그 상태")
    sample_types: List[SpecimenType] = PydanticField(min_length=1, description="검사 가능한 검체 종류")
    description: Optional[str] = PydanticField(default=None, description="설명")


class TestCreate(TestBase):
    # 목록 순서가 표시 순서입니다.
    parameters: List[TestParameterCreate] = PydanticField(default_factory=list, description="측정 항목 목록")

    @field_validator("parameters", mode="before")
    @classmethod
    def coerce_parameters(cls, value: Any) -> Any:
        return _coerce_parameters(value)

    class Config:
        use_enum_values = True


class TestUpdate(BaseModel):  # 업데이트는 모두 Optional
    code: Optional[str] = PydanticField(None, min_length=1, max_length=20, description="검사 코드")
    name: Optional[str] = PydanticField(None, min_length=1, max_length=255, description="검사명")
    category: Optional[str] = PydanticField(None, max_length=100, description="검사 분류")
    department: Optional[str] = PydanticField(None, max_length=100, description="담당 부서")
    price: Optional[float] = PydanticField(None, ge=0, description="검사 비용")
    duration: Optional[str] = PydanticField(None, max_length=100, description="소요 시간")
    status: Optional[CatalogStatus] = PydanticField(None, description="카탈로그 상태")
    sample_types: Optional[List[SpecimenType]] = PydanticField(None, min_length=1, description="검사 가능한 검체 종류")
    description: Optional[str] = PydanticField(None, description="설명")
    # 주어지면 전체 목록을 교체합니다.
    parameters: Optional[List[TestParameterCreate]] = PydanticField(None, description="측정 항목 목록 (전체 교체)")

    @field_validator("parameters", mode="before")
    @classmethod
    def coerce_parameters(cls, value: Any) -> Any:
        return _coerce_parameters(value)

    class Config:
        use_enum_values = True


class TestResponse(BaseModel):
    id: int = PydanticField(description="검사 고유 ID")
    code: str
    name: str
    category: Optional[str] = None
    department: Optional[str] = None
    price: float
    duration: Optional[str] = None
    status: str
    sample_types: List[str] = []
    description: Optional[str] = None
    parameters: List[TestParameterResponse] = []
    samples_count: int = PydanticField(0, description="이 검사가 연결된 시료 수")
    created_at: datetime = PydanticField(description="레코드 생성 일시")
    updated_at: datetime = PydanticField(description="레코드 마지막 업데이트 일시")

    class Config:
        from_attributes = True


class TestSummary(BaseModel):
    """작업 항목/결과 응답에 포함되는 검사 요약"""
    id: int
    code: str
    name: str
    category: Optional[str] = None
    department: Optional[str] = None
    sample_types: List[str] = []
    parameters: List[TestParameterResponse] = []

    class Config:
        from_attributes = True


# =============================================================================
# 3. 시료 (Sample) 스키마
# =============================================================================
class SampleBase(BaseModel):
    patient_id: int = PydanticField(description="환자 ID")
    accession_number: str = PydanticField(min_length=1, max_length=50, description="접수 번호 (고유)")
    sample_type: SpecimenType = PydanticField(description="검체 종류")
    collection_date: date = PydanticField(description="채취 일자")
    collection_time: time = PydanticField(description="채취 시각")
    priority: Priority = PydanticField(default=Priority.NORMAL.value, description="우선순위")
    location: Optional[str] = PydanticField(default=None, max_length=255, description="보관 위치")
    notes: Optional[str] = PydanticField(default=None, description="비고")


class SampleCreate(SampleBase):
    # 중복된 ID 는 한 번만 연결됩니다.
    tests: List[int] = PydanticField(default_factory=list, description="의뢰 검사 ID 목록")

    class Config:
        use_enum_values = True


class SampleUpdate(BaseModel):  # 업데이트는 모두 Optional
    patient_id: Optional[int] = PydanticField(None, description="환자 ID")
    accession_number: Optional[str] = PydanticField(None, min_length=1, max_length=50, description="접수 번호")
    sample_type: Optional[SpecimenType] = PydanticField(None, description="검체 종류")
    collection_date: Optional[date] = PydanticField(None, description="채취 일자")
    collection_time: Optional[time] = PydanticField(None, description="채취 시각")
    priority: Optional[Priority] = PydanticField(None, description="우선순위")
    location: Optional[str] = PydanticField(None, max_length=255, description="보관 위치")
    notes: Optional[str] = PydanticField(None, description="비고")
    # 주어지면 검사 목록을 이 집합으로 동기화합니다 (제거된 검사의 작업 항목은 삭제).
    tests: Optional[List[int]] = PydanticField(None, description="검사 ID 목록 (집합 교체)")

    class Config:
        use_enum_values = True


class SampleTestsAttach(BaseModel):
    tests: List[int] = PydanticField(min_length=1, description="추가할 검사 ID 목록")


class SampleTestUpdate(BaseModel):
    status: Optional[WorkStatus] = PydanticField(None, description="작업 상태")
    results: Optional[Dict[str, Any]] = PydanticField(None, description="파라미터명 -> 결과 값")
    notes: Optional[str] = PydanticField(None, description="검사자 메모")

    class Config:
        use_enum_values = True


class SampleTestResponse(BaseModel):
    id: int
    sample_id: int
    test_id: int
    status: str
    results: Optional[Dict[str, Any]] = None
    unrecognized_results: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    test: TestSummary
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SampleResponse(BaseModel):
    id: int = PydanticField(description="시료 고유 ID")
    patient_id: int
    accession_number: str
    sample_type: str
    collection_date: date
    collection_time: time
    priority: str
    location: Optional[str] = None
    notes: Optional[str] = None
    status: SampleStatus = PydanticField(description="검사 항목 상태로부터 계산된 시료 상태")
    patient: Optional[PatientSummary] = None
    sample_tests: List[SampleTestResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# =============================================================================
# 4. 시료 결과 (SampleResult) 스키마 - 결과가 기록된 작업 항목의 보기
# =============================================================================
class SampleResultCreate(BaseModel):
    sample_id: int = PydanticField(description="시료 ID")
    test_id: int = PydanticField(description="검사 ID")
    results: Dict[str, Any] = PydanticField(description="파라미터명 -> 결과 값")
    notes: Optional[str] = PydanticField(None, description="검사자 메모")


class SampleResultUpdate(BaseModel):
    test_id: int = PydanticField(description="검사 ID")
    results: Dict[str, Any] = PydanticField(description="파라미터명 -> 결과 값")
    notes: Optional[str] = PydanticField(None, description="검사자 메모")


class SampleBrief(BaseModel):
    id: int
    accession_number: str
    sample_type: str
    patient: Optional[PatientSummary] = None

    class Config:
        from_attributes = True


class SampleResultResponse(BaseModel):
    sample_id: int
    test_id: int
    status: str
    results: Dict[str, Any] = {}
    unrecognized_results: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    updated_at: datetime
    sample: SampleBrief
    test: TestSummary

    class Config:
        from_attributes = True
