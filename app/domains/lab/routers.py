# app/domains/lab/routers.py

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from . import schemas, crud


router = APIRouter(
    tags=["Lab Settings (실험실 설정 관리)"],
    responses={404: {"description": "Not found"}},
)


@router.get("/lab-settings", response_model=schemas.LabSettingResponse, summary="실험실 설정 조회")
async def get_lab_settings(
    session: AsyncSession = Depends(deps.get_db_session)
):
    """
    보고서에 사용되는 실험실 브랜딩 정보를 조회합니다.
    - 저장된 데이터가 없으면 설정 기본값(`is_default=true`)을 반환합니다.
    """
    return await crud.lab_setting.get_branding(session)


@router.post("/lab-settings", response_model=schemas.LabSettingResponse, summary="실험실 설정 저장")
@router.put("/lab-settings", response_model=schemas.LabSettingResponse, summary="실험실 설정 수정")
async def save_lab_settings(
    *,
    session: AsyncSession = Depends(deps.get_db_session),
    settings_in: schemas.LabSettingUpdate,
):
    """
    실험실 브랜딩 정보를 저장합니다. 최초 호출 시 단일 행(id=1)을 생성합니다.
    """
    return await crud.lab_setting.update_or_create(session, obj_in=settings_in)
