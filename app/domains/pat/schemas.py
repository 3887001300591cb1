# app/domains/pat/schemas.py

"""
'pat' 도메인 (환자)의 Pydantic 스키마를 정의하는 모듈입니다.
"""

from typing import List, Optional
from datetime import date, datetime, time
from pydantic import BaseModel, EmailStr, Field as PydanticField, field_validator

from .models import Gender


# =============================================================================
# 1. 환자 (Patient) 스키마
# =============================================================================
class PatientBase(BaseModel):
    name: str = PydanticField(min_length=1, max_length=255, description="환자 이름")
    age: Optional[int] = PydanticField(default=None, ge=0, le=150, description="나이")
    gender: Optional[Gender] = PydanticField(default=None, description="성별")
    phone: Optional[str] = PydanticField(default=None, max_length=20, description="연락처")
    email: Optional[EmailStr] = PydanticField(default=None, description="이메일")
    address: Optional[str] = PydanticField(default=None, max_length=500, description="주소")
    doctor: Optional[str] = PydanticField(default=None, max_length=255, description="의뢰 의사")


class PatientCreate(PatientBase):
    class Config:
        use_enum_values = True


class PatientUpdate(BaseModel):  # 업데이트는 모두 Optional
    name: Optional[str] = PydanticField(None, min_length=1, max_length=255, description="환자 이름")
    age: Optional[int] = PydanticField(None, ge=0, le=150, description="나이")
    gender: Optional[Gender] = PydanticField(None, description="성별")
    phone: Optional[str] = PydanticField(None, max_length=20, description="연락처")
    email: Optional[EmailStr] = PydanticField(None, description="이메일")
    address: Optional[str] = PydanticField(None, max_length=500, description="주소")
    doctor: Optional[str] = PydanticField(None, max_length=255, description="의뢰 의사")

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: Optional[str]) -> str:
        # 생략은 허용하지만 명시적 null 은 필수 컬럼을 비우므로 거부합니다.
        if value is None:
            raise ValueError("name cannot be null")
        return value

    class Config:
        use_enum_values = True


class PatientSummary(BaseModel):
    """시료/보고서 응답에 포함되는 환자 요약"""
    id: int
    name: str
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    doctor: Optional[str] = None

    class Config:
        from_attributes = True


class PatientSampleBrief(BaseModel):
    id: int
    accession_number: str
    sample_type: str
    collection_date: date
    collection_time: time
    priority: str
    status: str

    class Config:
        from_attributes = True


class PatientResponse(BaseModel):
    id: int = PydanticField(description="환자 고유 ID")
    name: str
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    doctor: Optional[str] = None
    samples_count: int = PydanticField(0, description="시료 수")
    created_at: datetime = PydanticField(description="레코드 생성 일시")
    updated_at: datetime = PydanticField(description="레코드 마지막 업데이트 일시")

    class Config:
        from_attributes = True


class PatientDetailResponse(PatientResponse):
    samples: List[PatientSampleBrief] = []
