# app/domains/rpt/routers.py

"""
'rpt' 도메인 (시료 보고서) 관련 API 엔드포인트를 정의하는 모듈입니다.
"""
import asyncio

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import HTMLResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from . import renderers, schemas, services

router = APIRouter(
    tags=["Report Management (보고서 관리)"],
    responses={404: {"description": "Not found"}},
)


async def _compose_or_404(db: AsyncSession, accession_number: str) -> schemas.ReportDocument:
    try:
        return await services.compose_report(db, accession_number)
    except services.ReportNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/reports/{accession_number}", response_model=schemas.ReportDocument, summary="시료 보고서 문서 조회")
async def read_report(
    accession_number: str, db: AsyncSession = Depends(deps.get_db_session)
):
    """HTML/PDF 출력의 기반이 되는 보고서 문서 모델을 반환합니다."""
    return await _compose_or_404(db, accession_number)


@router.get("/reports/{accession_number}/html", response_class=HTMLResponse, summary="시료 보고서 (HTML)")
async def read_report_html(
    accession_number: str, db: AsyncSession = Depends(deps.get_db_session)
):
    document = await _compose_or_404(db, accession_number)
    return HTMLResponse(renderers.render_html(document))


@router.get("/reports/{accession_number}/print", response_class=HTMLResponse, summary="시료 보고서 (인쇄용 HTML)")
async def read_report_print(
    accession_number: str, db: AsyncSession = Depends(deps.get_db_session)
):
    document = await _compose_or_404(db, accession_number)
    return HTMLResponse(renderers.render_html(document, print_mode=True))


@router.get("/reports/{accession_number}/pdf", summary="시료 보고서 (PDF 다운로드)")
async def read_report_pdf(
    accession_number: str, db: AsyncSession = Depends(deps.get_db_session)
):
    """PDF 파일명은 SampleReport_<접수 번호>.pdf 입니다."""
    document = await _compose_or_404(db, accession_number)
    content = await asyncio.to_thread(renderers.render_pdf, document)
    filename = f"SampleReport_{document.sample.accession_number}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
