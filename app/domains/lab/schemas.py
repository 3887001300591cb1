# app/domains/lab/schemas.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field as PydanticField


class LabSettingBase(BaseModel):
    """
    실험실 브랜딩의 기본 속성을 정의하는 Pydantic Base 스키마입니다.
    """
    name: str = PydanticField(..., min_length=1, max_length=255, description="실험실명")
    address: str = PydanticField(..., min_length=1, max_length=500, description="주소")
    phone: str = PydanticField(..., min_length=1, max_length=20, description="대표 전화")
    email: EmailStr = PydanticField(..., description="대표 이메일")
    logo: Optional[str] = PydanticField(None, description="로고 (URL, 파일 경로 또는 data URI)")


class LabSettingUpdate(LabSettingBase):
    """단일 갱신 연산: 행이 없으면 생성, 있으면 전체 값을 덮어씁니다."""
    pass


class LabSettingResponse(BaseModel):
    # 저장된 행이 없을 때의 기본 브랜딩은 id 가 None 입니다.
    id: Optional[int] = None
    name: str
    address: str = ""
    phone: str = ""
    email: str = ""
    logo: Optional[str] = None
    is_default: bool = PydanticField(False, description="설정 기본값 여부 (저장된 행 없음)")
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
