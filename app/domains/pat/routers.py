# app/domains/pat/routers.py

"""
'pat' 도메인 (환자) 관련 API 엔드포인트를 정의하는 모듈입니다.
"""
from typing import List
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.core import dependencies as deps
from app.domains.lims import crud as lims_crud
from app.domains.lims import schemas as lims_schemas

from . import crud as pat_crud
from . import models as pat_models
from . import schemas as pat_schemas

router = APIRouter(
    tags=["Patient Management (환자 관리)"],
    responses={404: {"description": "Not found"}},
)


def _with_count(patient: pat_models.Patient, samples_count: int) -> pat_schemas.PatientResponse:
    return pat_schemas.PatientResponse.model_validate(patient).model_copy(update={"samples_count": samples_count})


async def _get_patient_or_404(db: AsyncSession, patient_id: int) -> pat_models.Patient:
    db_obj = await pat_crud.patient.get_with_samples(db, id=patient_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found.")
    return db_obj


@router.get("/patients", response_model=List[pat_schemas.PatientResponse], summary="환자 목록 조회")
async def read_patients(
    skip: int = 0,
    limit: int = Query(100, le=1000),
    db: AsyncSession = Depends(deps.get_db_session)
):
    """모든 환자를 시료 수와 함께 조회합니다."""
    rows = await pat_crud.patient.get_multi_with_counts(db, skip=skip, limit=limit)
    return [_with_count(patient, count) for patient, count in rows]


@router.post("/patients", response_model=pat_schemas.PatientResponse, status_code=status.HTTP_201_CREATED, summary="환자 등록")
async def create_patient(
    patient_in: pat_schemas.PatientCreate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    db_obj = await pat_crud.patient.create(db, obj_in=patient_in)
    return _with_count(db_obj, 0)


# '/patients/{patient_id}' 보다 먼저 선언해야 합니다.
@router.get("/patients/search", response_model=List[pat_schemas.PatientResponse], summary="환자 이름 검색")
async def search_patients(
    name: str = Query(..., min_length=1, description="이름 (부분 일치, 대소문자 무시)"),
    skip: int = 0,
    limit: int = Query(100, le=1000),
    db: AsyncSession = Depends(deps.get_db_session)
):
    rows = await pat_crud.patient.get_multi_with_counts(db, skip=skip, limit=limit, name=name)
    return [_with_count(patient, count) for patient, count in rows]


@router.get("/patients/{patient_id}", response_model=pat_schemas.PatientDetailResponse, summary="특정 환자 조회")
async def read_patient(
    patient_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    """ID를 기준으로 환자와 그 시료 목록을 조회합니다."""
    db_obj = await _get_patient_or_404(db, patient_id)
    return pat_schemas.PatientDetailResponse.model_validate(db_obj).model_copy(
        update={"samples_count": len(db_obj.samples)}
    )


@router.put("/patients/{patient_id}", response_model=pat_schemas.PatientResponse, summary="환자 정보 수정")
async def update_patient(
    patient_id: int,
    patient_in: pat_schemas.PatientUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    db_obj = await _get_patient_or_404(db, patient_id)
    samples_count = len(db_obj.samples)
    db_obj = await pat_crud.patient.update(db, db_obj=db_obj, obj_in=patient_in)
    return _with_count(db_obj, samples_count)


@router.delete("/patients/{patient_id}", status_code=status.HTTP_204_NO_CONTENT, summary="환자 삭제")
async def delete_patient(
    patient_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    """환자를 삭제합니다. 환자의 시료와 시료별 검사 항목(결과 포함)도 함께 삭제됩니다."""
    if not await pat_crud.patient.delete(db, id=patient_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/patients/{patient_id}/samples", response_model=List[lims_schemas.SampleResponse], summary="환자의 시료 목록 조회")
async def read_patient_samples(
    patient_id: int,
    skip: int = 0,
    limit: int = Query(100, le=1000),
    db: AsyncSession = Depends(deps.get_db_session)
):
    if not await pat_crud.patient.get(db, id=patient_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found.")
    return await lims_crud.sample.get_multi_filtered(db, skip=skip, limit=limit, patient_id=patient_id)
