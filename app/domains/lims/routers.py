# app/domains/lims/routers.py

"""
'lims' 도메인 (검사 카탈로그, 시료, 시료 결과) 관련 API 엔드포인트를 정의하는 모듈입니다.
"""
from typing import List, Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

# 중앙 의존성 관리 모듈 임포트
from app.core import dependencies as deps

# 도메인 관련 모듈 임포트
from . import crud as lims_crud
from . import models as lims_models
from . import schemas as lims_schemas
from .lifecycle import CatalogStatus, Priority, SpecimenType

router = APIRouter(
    tags=["Laboratory Information Management (실험실 정보 관리)"],  # Swagger UI에 표시될 태그
    responses={404: {"description": "Not found"}},  # 이 라우터의 공통 응답 정의
)


def _test_response(test_obj: lims_models.Test, samples_count: int) -> lims_schemas.TestResponse:
    return lims_schemas.TestResponse.model_validate(test_obj).model_copy(update={"samples_count": samples_count})


async def _get_sample_or_404(db: AsyncSession, sample_id: int) -> lims_models.Sample:
    db_obj = await lims_crud.sample.get(db, id=sample_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sample not found.")
    return db_obj


# =============================================================================
# 1. 검사 카탈로그 (Test) 라우터
# =============================================================================
@router.get("/tests", response_model=List[lims_schemas.TestResponse], summary="검사 목록 조회")
async def read_tests(
    skip: int = 0,
    limit: int = Query(100, le=1000),
    sample_type: Optional[SpecimenType] = Query(None, description="해당 검체 종류를 지원하는 검사만"),
    usage: Optional[str] = Query(None, description="'active' 이면 시료에 연결된 검사만"),
    category: Optional[str] = None,
    department: Optional[str] = None,
    status_filter: Optional[CatalogStatus] = Query(None, alias="status", description="카탈로그 상태"),
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    검사 카탈로그를 조회합니다. 각 항목에는 연결된 시료 수(`samples_count`)가 포함됩니다.
    """
    rows = await lims_crud.test.get_multi_filtered(
        db,
        skip=skip,
        limit=limit,
        sample_type=sample_type.value if sample_type else None,
        usage=usage,
        category=category,
        department=department,
        status_filter=status_filter.value if status_filter else None,
    )
    return [_test_response(test_obj, count) for test_obj, count in rows]


@router.post("/tests", response_model=lims_schemas.TestResponse, status_code=status.HTTP_201_CREATED, summary="새 검사 등록")
async def create_test(
    test_in: lims_schemas.TestCreate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """새 검사를 측정 항목과 함께 등록합니다. 측정 항목은 목록 순서대로 표시됩니다."""
    db_obj = await lims_crud.test.create(db=db, obj_in=test_in)
    return _test_response(db_obj, 0)


@router.get("/tests/{test_id}", response_model=lims_schemas.TestResponse, summary="특정 검사 조회")
async def read_test(
    test_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    db_obj = await lims_crud.test.get(db, id=test_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Test not found.")
    return _test_response(db_obj, await lims_crud.test.count_samples(db, test_id=test_id))


@router.put("/tests/{test_id}", response_model=lims_schemas.TestResponse, summary="검사 정보 수정")
async def update_test(
    test_id: int,
    test_in: lims_schemas.TestUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """`parameters`가 주어지면 측정 항목 전체를 교체합니다."""
    db_obj = await lims_crud.test.get(db, id=test_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Test not found.")
    db_obj = await lims_crud.test.update(db=db, db_obj=db_obj, obj_in=test_in)
    return _test_response(db_obj, await lims_crud.test.count_samples(db, test_id=test_id))


@router.delete("/tests/{test_id}", status_code=status.HTTP_204_NO_CONTENT, summary="검사 삭제")
async def delete_test(
    test_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    if not await lims_crud.test.delete(db, id=test_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Test not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# 2. 시료 (Sample) 라우터
# =============================================================================
@router.get("/samples", response_model=List[lims_schemas.SampleResponse], summary="시료 목록 조회")
async def read_samples(
    skip: int = 0,
    limit: int = Query(100, le=1000),
    patient_id: Optional[int] = None,
    sample_type: Optional[SpecimenType] = None,
    priority: Optional[Priority] = None,
    accession: Optional[str] = Query(None, description="접수 번호 (부분 일치)"),
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await lims_crud.sample.get_multi_filtered(
        db,
        skip=skip,
        limit=limit,
        patient_id=patient_id,
        sample_type=sample_type.value if sample_type else None,
        priority=priority.value if priority else None,
        accession=accession,
    )


@router.post("/samples", response_model=lims_schemas.SampleResponse, status_code=status.HTTP_201_CREATED, summary="시료 접수")
async def create_sample(
    sample_in: lims_schemas.SampleCreate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    시료를 접수하고 의뢰된 검사마다 Pending 상태의 작업 항목을 만듭니다.
    """
    return await lims_crud.sample.create(db=db, obj_in=sample_in)


@router.get("/samples/accession/{accession_number}", response_model=lims_schemas.SampleResponse, summary="접수 번호로 시료 조회")
async def read_sample_by_accession(
    accession_number: str, db: AsyncSession = Depends(deps.get_db_session)
):
    db_obj = await lims_crud.sample.get_by_accession(db, accession_number=accession_number)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sample not found.")
    return db_obj


@router.get("/samples/{sample_id}", response_model=lims_schemas.SampleResponse, summary="특정 시료 조회")
async def read_sample(
    sample_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    return await _get_sample_or_404(db, sample_id)


@router.put("/samples/{sample_id}", response_model=lims_schemas.SampleResponse, summary="시료 정보 수정")
async def update_sample(
    sample_id: int,
    sample_in: lims_schemas.SampleUpdate,
    force: bool = Query(False, description="기록된 결과가 있는 검사도 제거"),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    시료 메타데이터를 수정합니다. `tests`가 주어지면 검사 목록을 그 집합으로 동기화합니다.
    결과가 기록되었거나 진행 중인 검사를 제거해야 하면 `force=true` 없이는 409 입니다.
    """
    db_obj = await _get_sample_or_404(db, sample_id)
    return await lims_crud.sample.update(db=db, db_obj=db_obj, obj_in=sample_in, force=force)


@router.delete("/samples/{sample_id}", status_code=status.HTTP_204_NO_CONTENT, summary="시료 삭제")
async def delete_sample(
    sample_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    """시료를 삭제합니다. 시료의 작업 항목과 결과도 함께 삭제됩니다."""
    if not await lims_crud.sample.delete(db, id=sample_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sample not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/samples/{sample_id}/complete", response_model=lims_schemas.SampleResponse, summary="시료 완료 처리")
async def complete_sample(
    sample_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    """취소되지 않은 모든 검사 항목을 Completed 로 진행시킵니다."""
    db_obj = await _get_sample_or_404(db, sample_id)
    return await lims_crud.sample.complete(db=db, db_obj=db_obj)


# =============================================================================
# 3. 시료-검사 작업 항목 (SampleTest) 라우터
# =============================================================================
@router.get("/samples/{sample_id}/tests", response_model=List[lims_schemas.SampleTestResponse], summary="시료의 검사 항목 조회")
async def read_sample_tests(
    sample_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    db_obj = await _get_sample_or_404(db, sample_id)
    return db_obj.sample_tests


@router.post("/samples/{sample_id}/tests", response_model=lims_schemas.SampleResponse, summary="시료에 검사 추가")
async def attach_sample_tests(
    sample_id: int,
    attach_in: lims_schemas.SampleTestsAttach,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """검사를 추가로 연결합니다. 이미 연결된 검사는 변경되지 않습니다."""
    db_obj = await _get_sample_or_404(db, sample_id)
    return await lims_crud.sample.attach_tests(db=db, db_obj=db_obj, test_ids=attach_in.tests)


@router.put("/samples/{sample_id}/tests/{test_id}", response_model=lims_schemas.SampleTestResponse, summary="검사 항목 상태/결과 수정")
async def update_sample_test(
    sample_id: int,
    test_id: int,
    item_in: lims_schemas.SampleTestUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    검사 항목의 상태, 결과, 메모를 수정합니다.
    허용되지 않는 상태 전이와 취소된 항목에 대한 결과 저장은 409 입니다.
    """
    db_obj = await _get_sample_or_404(db, sample_id)
    return await lims_crud.sample.update_work_item(db=db, db_obj=db_obj, test_id=test_id, obj_in=item_in)


@router.delete("/samples/{sample_id}/tests/{test_id}", response_model=lims_schemas.SampleResponse, summary="시료에서 검사 제거")
async def detach_sample_test(
    sample_id: int,
    test_id: int,
    force: bool = Query(False, description="기록된 결과가 있어도 제거"),
    db: AsyncSession = Depends(deps.get_db_session),
):
    db_obj = await _get_sample_or_404(db, sample_id)
    return await lims_crud.sample.detach_test(db=db, db_obj=db_obj, test_id=test_id, force=force)


# =============================================================================
# 4. 시료 결과 (SampleResult) 라우터
# =============================================================================
@router.get("/sample-results", response_model=List[lims_schemas.SampleResultResponse], summary="기록된 결과 전체 조회")
async def read_sample_results(
    skip: int = 0,
    limit: int = Query(100, le=1000),
    db: AsyncSession = Depends(deps.get_db_session)
):
    """결과가 기록된 모든 시료-검사 항목을 조회합니다. 없으면 빈 목록입니다."""
    return await lims_crud.sample_result.get_multi(db, skip=skip, limit=limit)


@router.post("/sample-results", response_model=lims_schemas.SampleResultResponse, status_code=status.HTTP_201_CREATED, summary="결과 저장")
async def upsert_sample_result(
    result_in: lims_schemas.SampleResultCreate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    (시료, 검사)의 결과를 저장합니다. 기존 결과는 전체가 덮어써집니다.
    검사가 시료에 연결되어 있지 않으면 먼저 연결합니다.
    """
    return await lims_crud.sample_result.upsert(db=db, obj_in=result_in)


@router.get("/sample-results-by-sample", response_model=List[lims_schemas.SampleResultResponse], summary="시료별 결과 조회 (쿼리)")
async def read_sample_results_by_query(
    sample_id: Optional[int] = None,
    db: AsyncSession = Depends(deps.get_db_session)
):
    if sample_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="sample_id query parameter is required.")
    return await lims_crud.sample_result.get_by_sample(db, sample_id=sample_id)


@router.get("/sample-results/{sample_id}", response_model=List[lims_schemas.SampleResultResponse], summary="시료의 결과 조회")
async def read_results_of_sample(
    sample_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    await _get_sample_or_404(db, sample_id)
    return await lims_crud.sample_result.get_by_sample(db, sample_id=sample_id)


@router.post("/sample-results/{sample_id}", response_model=lims_schemas.SampleResultResponse, status_code=status.HTTP_201_CREATED, summary="시료의 결과 저장")
async def upsert_result_of_sample(
    sample_id: int,
    result_in: lims_schemas.SampleResultUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """경로의 시료에 대해 `POST /sample-results` 와 같은 upsert 를 수행합니다."""
    obj_in = lims_schemas.SampleResultCreate(sample_id=sample_id, **result_in.model_dump())
    return await lims_crud.sample_result.upsert(db=db, obj_in=obj_in)


@router.put("/sample-results/{sample_id}", response_model=lims_schemas.SampleResultResponse, summary="결과 수정")
async def update_sample_result(
    sample_id: int,
    result_in: lims_schemas.SampleResultUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """이미 기록된 결과만 수정합니다."""
    return await lims_crud.sample_result.update(db=db, sample_id=sample_id, obj_in=result_in)


@router.get("/sample-results/{sample_id}/{test_id}", response_model=lims_schemas.SampleResultResponse, summary="특정 결과 조회")
async def read_sample_result(
    sample_id: int, test_id: int, db: AsyncSession = Depends(deps.get_db_session)
):
    db_obj = await lims_crud.sample_result.get(db, sample_id=sample_id, test_id=test_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sample result not found.")
    return db_obj
