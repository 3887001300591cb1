# app/domains/rpt/services.py

"""
시료 보고서 문서(ReportDocument)를 구성하는 서비스 모듈입니다.

- 접수 번호로 시료 하나를 찾고, 없으면 ReportNotFound 를 발생시킵니다.
- 페이지 규칙: 1 페이지 = 헤더 + 환자/시료 정보 + 첫 번째 검사,
  이후 검사는 각각 새 페이지에서 시작합니다. 검사가 없으면 헤더 페이지 1장입니다.
- 누락된 값은 "N/A" 또는 빈 표로 대체하여 문서를 끝까지 만듭니다.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from app.domains.lab import crud as lab_crud
from app.domains.lims import crud as lims_crud
from app.domains.lims import models as lims_models

from . import schemas as rpt_schemas

logger = logging.getLogger(__name__)


class ReportNotFound(LookupError):
    def __init__(self, accession_number: str):
        self.accession_number = accession_number
        super().__init__(f"No sample found for accession number '{accession_number}'.")


def _text(value: Any, placeholder: str = rpt_schemas.PLACEHOLDER) -> str:
    if value is None or value == "":
        return placeholder
    return str(getattr(value, "value", value))


def _patient_block(patient) -> rpt_schemas.PatientBlock:
    if patient is None:
        return rpt_schemas.PatientBlock()
    return rpt_schemas.PatientBlock(
        name=_text(patient.name),
        age=_text(patient.age),
        gender=_text(patient.gender),
        phone=_text(patient.phone),
        doctor=_text(patient.doctor),
    )


def _sample_block(sample: lims_models.Sample) -> rpt_schemas.SampleBlock:
    return rpt_schemas.SampleBlock(
        accession_number=_text(sample.accession_number),
        sample_type=_text(sample.sample_type),
        collection_date=sample.collection_date.isoformat() if sample.collection_date else rpt_schemas.PLACEHOLDER,
        collection_time=sample.collection_time.strftime("%H:%M:%S") if sample.collection_time else rpt_schemas.PLACEHOLDER,
        priority=_text(sample.priority),
        location=_text(sample.location),
        status=_text(sample.status),
    )


def _test_block(item: lims_models.SampleTest) -> rpt_schemas.TestBlock:
    """선언된 파라미터 순서대로 값/단위/정상 범위 행을 만듭니다."""
    test_obj = item.test
    results: Dict[str, Any] = item.results or {}
    rows = [
        rpt_schemas.ParameterRow(
            name=parameter.name,
            value="" if results.get(parameter.name) is None else str(results[parameter.name]),
            unit=parameter.unit or rpt_schemas.EMPTY_CELL,
            normal_range=parameter.normal_range or rpt_schemas.EMPTY_CELL,
        )
        for parameter in (test_obj.parameters or [])
    ]
    return rpt_schemas.TestBlock(
        test_id=test_obj.id,
        code=test_obj.code,
        name=test_obj.name or test_obj.code,
        sample_types=list(test_obj.sample_types or []),
        status=item.status,
        rows=rows,
        notes=item.notes or None,
        unrecognized_results=item.unrecognized_results or {},
    )


def paginate(tests: List[rpt_schemas.TestBlock]) -> List[rpt_schemas.ReportPage]:
    """검사 n 개(n >= 1)면 정확히 n 페이지, 없으면 헤더 페이지 1장입니다."""
    if not tests:
        return [rpt_schemas.ReportPage(page_number=1, show_patient_info=True, test=None)]
    return [
        rpt_schemas.ReportPage(page_number=index + 1, show_patient_info=(index == 0), test=block)
        for index, block in enumerate(tests)
    ]


def build_document(
    sample: lims_models.Sample,
    branding: rpt_schemas.Branding,
    today: Optional[date] = None,
) -> rpt_schemas.ReportDocument:
    """
    로드된 시료 그래프(환자, 작업 항목, 검사, 측정 항목)로 보고서 문서를 만듭니다.
    데이터베이스에 접근하지 않습니다.
    """
    tests = [_test_block(item) for item in (sample.sample_tests or []) if item.test is not None]
    return rpt_schemas.ReportDocument(
        branding=branding,
        patient=_patient_block(sample.patient),
        sample=_sample_block(sample),
        report_date=today or date.today(),
        pages=paginate(tests),
    )


async def compose_report(db: AsyncSession, accession_number: str, today: Optional[date] = None) -> rpt_schemas.ReportDocument:
    """접수 번호로 보고서 문서를 구성합니다."""
    sample = await lims_crud.sample.get_by_accession(db, accession_number=accession_number)
    if sample is None:
        raise ReportNotFound(accession_number)

    lab = await lab_crud.lab_setting.get_branding(db)
    branding = rpt_schemas.Branding.model_validate(lab.model_dump())
    document = build_document(sample, branding, today)
    logger.info("보고서 구성: %s (%d 페이지)", accession_number, document.total_pages)
    return document
