# app/domains/rpt/schemas.py

"""
시료 보고서 문서 모델입니다.

HTML, 인쇄용 HTML, PDF 출력이 모두 이 모델 하나로부터 만들어지며,
출력 형식은 표현만 다릅니다.
"""

from typing import Any, Dict, List, Optional
from datetime import date
from pydantic import BaseModel, Field, computed_field


PLACEHOLDER = "N/A"
EMPTY_CELL = "-"


class Branding(BaseModel):
    name: str
    address: str = ""
    phone: str = ""
    email: str = ""
    logo: Optional[str] = None
    is_default: bool = False


class PatientBlock(BaseModel):
    name: str = PLACEHOLDER
    age: str = PLACEHOLDER
    gender: str = PLACEHOLDER
    phone: str = PLACEHOLDER
    doctor: str = PLACEHOLDER


class SampleBlock(BaseModel):
    accession_number: str = PLACEHOLDER
    sample_type: str = PLACEHOLDER
    collection_date: str = PLACEHOLDER
    collection_time: str = PLACEHOLDER
    priority: str = PLACEHOLDER
    location: str = PLACEHOLDER
    status: str = PLACEHOLDER


class ParameterRow(BaseModel):
    """Parameter | Value | Unit | Normal Range 표의 한 행"""
    name: str
    value: str = ""
    unit: str = EMPTY_CELL
    normal_range: str = EMPTY_CELL


class TestBlock(BaseModel):
    __test__ = False  # pytest 수집 대상 아님

    test_id: int
    code: str
    name: str
    sample_types: List[str] = []
    status: str = PLACEHOLDER
    rows: List[ParameterRow] = []
    notes: Optional[str] = None
    unrecognized_results: Dict[str, Any] = {}

    @computed_field
    @property
    def title(self) -> str:
        if self.sample_types:
            return f"Test: {self.name} ({', '.join(self.sample_types)})"
        return f"Test: {self.name}"


class ReportPage(BaseModel):
    page_number: int
    # 1 페이지에만 환자/시료 정보가 표시됩니다.
    show_patient_info: bool = False
    test: Optional[TestBlock] = None


class ReportDocument(BaseModel):
    branding: Branding
    patient: PatientBlock
    sample: SampleBlock
    report_date: date
    pages: List[ReportPage] = Field(min_length=1)

    @computed_field
    @property
    def total_pages(self) -> int:
        return len(self.pages)

    @computed_field
    @property
    def footer_text(self) -> str:
        return f"{self.branding.name} © {self.report_date.year} | {self.branding.address} | Phone: {self.branding.phone}"

    def page_label(self, page_number: int) -> str:
        return f"Page {page_number} of {self.total_pages}"
