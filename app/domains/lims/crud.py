# app/domains/lims/crud.py

"""
'lims' 도메인의 CRUD 로직을 담당하는 모듈입니다.

- 검사 카탈로그(Test) 및 측정 항목(TestParameter)
- 시료(Sample) 접수, 메타데이터 수정, 검사 목록 관리(동기화/추가/제거)
- 시료-검사 작업 항목(SampleTest)의 상태 전이 및 결과 기록
- 결과가 기록된 작업 항목을 보여주는 시료 결과(SampleResult) 보기

결과의 단일 저장소는 sample_tests 행입니다.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.crud_base import CRUDBase

from . import lifecycle
from . import models as lims_models
from . import schemas as lims_schemas

logger = logging.getLogger(__name__)

# 명시적 null 로 덮어쓰지 않는 필수 컬럼
REQUIRED_TEST_FIELDS = {"code", "name", "price", "status", "sample_types"}
REQUIRED_SAMPLE_FIELDS = {"patient_id", "accession_number", "sample_type", "collection_date", "collection_time", "priority"}


def _unique_ids(ids: Sequence[int]) -> List[int]:
    """순서를 유지하면서 중복 ID 를 제거합니다."""
    return list(dict.fromkeys(ids))


def _new_work_item(test_obj: lims_models.Test) -> lims_models.SampleTest:
    return lims_models.SampleTest(
        test=test_obj,
        status=lifecycle.INITIAL_WORK_STATUS.value,
        results=None,
        notes=None,
    )


def _find_item(db_sample: lims_models.Sample, test_id: int) -> Optional[lims_models.SampleTest]:
    return next((item for item in db_sample.sample_tests if item.test_id == test_id), None)


def _ensure_writable(item: lims_models.SampleTest) -> None:
    if item.status == lifecycle.WorkStatus.CANCELLED.value:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Cannot record results for a cancelled test.")


def _apply_results(item: lims_models.SampleTest, results: Dict[str, Any]) -> None:
    """
    결과 전체를 덮어씁니다. 검사에 선언된 파라미터 키는 results 에,
    선언되지 않은 키는 unrecognized_results 에 저장합니다.
    """
    names = [parameter.name for parameter in item.test.parameters]
    known, unknown = lifecycle.split_results(results, names)
    if unknown:
        logger.warning("검사 %s 에 선언되지 않은 결과 키를 별도 보관합니다: %s", item.test.code, sorted(unknown))
    item.results = known
    item.unrecognized_results = unknown or None


def _check_specimen(sample_type: str, tests: Sequence[lims_models.Test]) -> None:
    """ENFORCE_SPECIMEN_COMPATIBILITY 가 켜져 있을 때만 검체 종류 호환성을 강제합니다."""
    if not settings.ENFORCE_SPECIMEN_COMPATIBILITY:
        return
    incompatible = [t.code for t in tests if not lifecycle.supports_specimen(t.sample_types, sample_type)]
    if incompatible:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Tests do not support specimen type '{sample_type}': {', '.join(incompatible)}",
        )


def _guard_removal(db_sample: lims_models.Sample, items: Sequence[lims_models.SampleTest], *, force: bool) -> None:
    """기록된 결과나 진행 중인 작업이 있는 검사 항목의 제거는 force 없이는 거부합니다."""
    lossy = [
        item.test_id for item in items
        if lifecycle.has_recorded_work(item.status, item.results, item.unrecognized_results)
    ]
    if lossy and not force:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "Removing these tests would discard recorded results or work in progress. "
                           "Retry with force=true to proceed.",
                "test_ids": lossy,
            },
        )
    if lossy:
        logger.warning("시료 %s: 기록된 데이터가 있는 검사 %s 를 강제로 제거합니다.", db_sample.accession_number, lossy)


# =============================================================================
# 1. 검사 카탈로그 (Test) CRUD
# =============================================================================
class CRUDTest(CRUDBase[lims_models.Test, lims_schemas.TestCreate, lims_schemas.TestUpdate]):
    def __init__(self):
        super().__init__(model=lims_models.Test)

    async def get(self, db: AsyncSession, id: Any) -> Optional[lims_models.Test]:
        """측정 항목을 즉시 로드하여 검사를 조회합니다."""
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(selectinload(self.model.parameters))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_by_code(self, db: AsyncSession, *, code: str) -> Optional[lims_models.Test]:
        """검사 코드로 조회합니다."""
        statement = select(self.model).where(self.model.code == code)
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_many_or_404(self, db: AsyncSession, *, ids: Sequence[int]) -> List[lims_models.Test]:
        """
        주어진 ID 의 검사를 중복 없이 요청 순서대로 반환합니다.
        하나라도 없으면 누락된 ID 목록과 함께 404 를 발생시킵니다.
        """
        ids = _unique_ids(ids)
        if not ids:
            return []
        statement = (
            select(self.model)
            .where(self.model.id.in_(ids))
            .options(selectinload(self.model.parameters))
        )
        result = await db.execute(statement)
        found = {t.id: t for t in result.scalars().all()}
        missing = [i for i in ids if i not in found]
        if missing:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Tests not found: {missing}")
        return [found[i] for i in ids]

    async def count_samples(self, db: AsyncSession, *, test_id: int) -> int:
        statement = select(func.count(lims_models.SampleTest.id)).where(lims_models.SampleTest.test_id == test_id)
        result = await db.execute(statement)
        return result.scalar_one()

    async def get_multi_filtered(
        self,
        db: AsyncSession,
        *,
        skip: int = 0,
        limit: int = 100,
        sample_type: Optional[str] = None,
        usage: Optional[str] = None,
        category: Optional[str] = None,
        department: Optional[str] = None,
        status_filter: Optional[str] = None,
    ) -> List[Tuple[lims_models.Test, int]]:
        """
        검사 목록과 검사별 연결 시료 수를 조회합니다.

        - `usage="active"`: 1개 이상의 시료에 연결된 검사만
        - `sample_type`: 해당 검체 종류를 지원하는 검사만
        """
        samples_count = func.count(lims_models.SampleTest.id)
        statement = (
            select(self.model, samples_count)
            .outerjoin(lims_models.SampleTest, lims_models.SampleTest.test_id == self.model.id)
            .group_by(self.model.id)
            .options(selectinload(self.model.parameters))
            .order_by(self.model.id)
        )
        if category:
            statement = statement.where(self.model.category == category)
        if department:
            statement = statement.where(self.model.department == department)
        if status_filter:
            statement = statement.where(self.model.status == status_filter)
        if usage == "active":
            statement = statement.having(samples_count > 0)
        if sample_type is None:
            statement = statement.offset(skip).limit(limit)

        result = await db.execute(statement)
        rows = [(test_obj, count) for test_obj, count in result.all()]

        if sample_type is not None:
            # JSON 배열 포함 검색은 DB 마다 문법이 달라 메모리에서 거른 뒤 페이징합니다.
            rows = [row for row in rows if lifecycle.supports_specimen(row[0].sample_types, sample_type)]
            rows = rows[skip:skip + limit]
        return rows

    async def create(self, db: AsyncSession, *, obj_in: lims_schemas.TestCreate) -> lims_models.Test:
        """코드 중복을 확인하고 측정 항목과 함께 생성합니다."""
        if await self.get_by_code(db, code=obj_in.code):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Test with this code already exists.")

        db_obj = self.model(**obj_in.model_dump(exclude={"parameters"}))
        db_obj.parameters = [
            lims_models.TestParameter(sort_order=index, **parameter.model_dump())
            for index, parameter in enumerate(obj_in.parameters)
        ]
        db.add(db_obj)
        await db.commit()
        logger.info("검사 등록: %s (측정 항목 %d개)", obj_in.code, len(obj_in.parameters))
        return await self.get(db, id=db_obj.id)

    async def update(self, db: AsyncSession, *, db_obj: lims_models.Test, obj_in: lims_schemas.TestUpdate) -> lims_models.Test:
        """업데이트 시 코드 중복 검사. parameters 가 주어지면 전체 목록을 교체합니다."""
        if obj_in.code is not None and obj_in.code != db_obj.code:
            existing_by_code = await self.get_by_code(db, code=obj_in.code)
            if existing_by_code and existing_by_code.id != db_obj.id:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Test with this code already exists.")

        update_data = obj_in.model_dump(exclude_unset=True, exclude={"parameters"})
        for key, value in update_data.items():
            if value is None and key in REQUIRED_TEST_FIELDS:
                continue
            setattr(db_obj, key, value)

        if obj_in.parameters is not None:
            # 같은 이름이 다시 들어올 수 있으므로 기존 항목 삭제를 먼저 반영합니다.
            db_obj.parameters.clear()
            await db.flush()
            db_obj.parameters.extend(
                lims_models.TestParameter(sort_order=index, **parameter.model_dump())
                for index, parameter in enumerate(obj_in.parameters)
            )

        db.add(db_obj)
        await db.commit()
        return await self.get(db, id=db_obj.id)

    async def delete(self, db: AsyncSession, *, id: Any) -> Optional[lims_models.Test]:
        """검사를 삭제합니다. 이 검사를 연결한 시료-검사 항목(결과 포함)도 함께 삭제됩니다."""
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(selectinload(self.model.parameters), selectinload(self.model.sample_links))
        )
        result = await db.execute(statement)
        db_obj = result.scalars().first()
        if db_obj:
            logger.info("검사 삭제: %s (연결된 작업 항목 %d건 함께 삭제)", db_obj.code, len(db_obj.sample_links))
            await db.delete(db_obj)
            await db.commit()
        return db_obj


test = CRUDTest()


# =============================================================================
# 2. 시료 (Sample) CRUD 및 검사 항목 생명주기
# =============================================================================
class CRUDSample(CRUDBase[lims_models.Sample, lims_schemas.SampleCreate, lims_schemas.SampleUpdate]):
    def __init__(self):
        super().__init__(model=lims_models.Sample)

    def _with_graph(self, statement):
        """환자, 작업 항목, 검사, 측정 항목까지 즉시 로드하고 식별 맵의 값을 새로 채웁니다."""
        return statement.options(
            selectinload(self.model.patient),
            selectinload(self.model.sample_tests)
            .selectinload(lims_models.SampleTest.test)
            .selectinload(lims_models.Test.parameters),
        ).execution_options(populate_existing=True)

    async def get(self, db: AsyncSession, id: Any) -> Optional[lims_models.Sample]:
        result = await db.execute(self._with_graph(select(self.model).where(self.model.id == id)))
        return result.scalars().first()

    async def get_by_accession(self, db: AsyncSession, *, accession_number: str) -> Optional[lims_models.Sample]:
        """접수 번호로 시료 전체 정보를 조회합니다."""
        statement = select(self.model).where(self.model.accession_number == accession_number)
        result = await db.execute(self._with_graph(statement))
        return result.scalars().first()

    async def get_multi_filtered(
        self,
        db: AsyncSession,
        *,
        skip: int = 0,
        limit: int = 100,
        patient_id: Optional[int] = None,
        sample_type: Optional[str] = None,
        priority: Optional[str] = None,
        accession: Optional[str] = None,
    ) -> List[lims_models.Sample]:
        statement = select(self.model)
        if patient_id is not None:
            statement = statement.where(self.model.patient_id == patient_id)
        if sample_type:
            statement = statement.where(self.model.sample_type == sample_type)
        if priority:
            statement = statement.where(self.model.priority == priority)
        if accession:
            statement = statement.where(self.model.accession_number.ilike(f"%{accession}%"))

        statement = statement.order_by(self.model.id).offset(skip).limit(limit)
        result = await db.execute(self._with_graph(statement))
        return list(result.scalars().all())

    async def _ensure_accession_free(self, db: AsyncSession, accession_number: str, *, exclude_id: Optional[int] = None) -> None:
        existing = await self.get_by_attribute(db, attribute="accession_number", value=accession_number)
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Sample with this accession number already exists.")

    async def create(self, db: AsyncSession, *, obj_in: lims_schemas.SampleCreate) -> lims_models.Sample:
        """
        시료를 접수합니다. 의뢰된 검사마다 Pending 상태의 작업 항목을 만들며,
        시료와 작업 항목은 하나의 트랜잭션으로 저장됩니다.
        """
        from app.domains.pat.crud import patient as pat_patient_crud

        if not await pat_patient_crud.get(db, id=obj_in.patient_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found.")
        await self._ensure_accession_free(db, obj_in.accession_number)
        tests = await test.get_many_or_404(db, ids=obj_in.tests)
        _check_specimen(obj_in.sample_type, tests)

        db_obj = self.model(**obj_in.model_dump(exclude={"tests"}))
        db_obj.sample_tests = [_new_work_item(test_obj) for test_obj in tests]
        db.add(db_obj)
        await db.commit()
        logger.info("시료 접수: %s (환자 %s, 검사 %d건)", db_obj.accession_number, obj_in.patient_id, len(tests))
        return await self.get(db, id=db_obj.id)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: lims_models.Sample,
        obj_in: lims_schemas.SampleUpdate,
        force: bool = False,
    ) -> lims_models.Sample:
        """
        시료 메타데이터를 수정합니다.
        `tests`가 주어지면 검사 목록을 그 집합으로 동기화하며, 기록된 데이터가 있는
        검사를 제거해야 하는 경우 `force=True`가 아니면 409 를 발생시킵니다.
        모든 검증을 마친 뒤에 변경을 반영합니다.
        """
        from app.domains.pat.crud import patient as pat_patient_crud

        update_data = {
            key: value
            for key, value in obj_in.model_dump(exclude_unset=True, exclude={"tests"}).items()
            if not (value is None and key in REQUIRED_SAMPLE_FIELDS)
        }

        # --- 검증 ---
        if "patient_id" in update_data and update_data["patient_id"] != db_obj.patient_id:
            if not await pat_patient_crud.get(db, id=update_data["patient_id"]):
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found.")
        if "accession_number" in update_data and update_data["accession_number"] != db_obj.accession_number:
            await self._ensure_accession_free(db, update_data["accession_number"], exclude_id=db_obj.id)

        sample_type = update_data.get("sample_type", db_obj.sample_type)
        removed: List[lims_models.SampleTest] = []
        added: List[lims_models.Test] = []
        if obj_in.tests is not None:
            wanted = await test.get_many_or_404(db, ids=obj_in.tests)
            wanted_ids = {t.id for t in wanted}
            current_ids = {item.test_id for item in db_obj.sample_tests}
            removed = [item for item in db_obj.sample_tests if item.test_id not in wanted_ids]
            added = [t for t in wanted if t.id not in current_ids]
            _guard_removal(db_obj, removed, force=force)
            _check_specimen(sample_type, wanted)
        elif "sample_type" in update_data:
            _check_specimen(sample_type, [item.test for item in db_obj.sample_tests])

        # --- 반영 ---
        for key, value in update_data.items():
            setattr(db_obj, key, value)
        for item in removed:
            db_obj.sample_tests.remove(item)
        for test_obj in added:
            db_obj.sample_tests.append(_new_work_item(test_obj))

        db.add(db_obj)
        await db.commit()
        if obj_in.tests is not None:
            logger.info(
                "시료 %s 검사 목록 동기화: 추가 %s, 제거 %s",
                db_obj.accession_number, [t.code for t in added], [item.test_id for item in removed],
            )
        return await self.get(db, id=db_obj.id)

    async def attach_tests(self, db: AsyncSession, *, db_obj: lims_models.Sample, test_ids: Sequence[int]) -> lims_models.Sample:
        """검사를 추가로 연결합니다. 이미 연결된 검사는 그대로 둡니다."""
        tests = await test.get_many_or_404(db, ids=test_ids)
        current_ids = {item.test_id for item in db_obj.sample_tests}
        added = [t for t in tests if t.id not in current_ids]
        _check_specimen(db_obj.sample_type, added)

        for test_obj in added:
            db_obj.sample_tests.append(_new_work_item(test_obj))
        await db.commit()
        logger.info("시료 %s 검사 추가: %s", db_obj.accession_number, [t.code for t in added])
        return await self.get(db, id=db_obj.id)

    async def detach_test(
        self, db: AsyncSession, *, db_obj: lims_models.Sample, test_id: int, force: bool = False
    ) -> lims_models.Sample:
        """검사 하나의 연결을 해제합니다. 작업 항목과 결과가 삭제됩니다."""
        item = _find_item(db_obj, test_id)
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Test is not attached to this sample.")
        _guard_removal(db_obj, [item], force=force)

        db_obj.sample_tests.remove(item)
        await db.commit()
        logger.info("시료 %s 검사 제거: test_id=%s", db_obj.accession_number, test_id)
        return await self.get(db, id=db_obj.id)

    async def get_work_item(self, db: AsyncSession, *, sample_id: int, test_id: int) -> Optional[lims_models.SampleTest]:
        statement = (
            select(lims_models.SampleTest)
            .where(lims_models.SampleTest.sample_id == sample_id, lims_models.SampleTest.test_id == test_id)
            .options(
                selectinload(lims_models.SampleTest.test).selectinload(lims_models.Test.parameters),
                selectinload(lims_models.SampleTest.sample).selectinload(lims_models.Sample.patient),
            )
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def update_work_item(
        self,
        db: AsyncSession,
        *,
        db_obj: lims_models.Sample,
        test_id: int,
        obj_in: lims_schemas.SampleTestUpdate,
    ) -> lims_models.SampleTest:
        """
        작업 항목 하나의 상태/결과/메모를 수정합니다.
        상태 전이는 상태 규칙을 따르며, 결과 저장은 상태를 바꾸지 않습니다.
        """
        item = _find_item(db_obj, test_id)
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Test is not attached to this sample.")

        target = None
        if obj_in.status is not None:
            try:
                target = lifecycle.check_transition(item.status, obj_in.status)
            except lifecycle.InvalidTransition as e:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
        if obj_in.results is not None:
            _ensure_writable(item)

        if obj_in.results is not None:
            _apply_results(item, obj_in.results)
        if "notes" in obj_in.model_fields_set:
            item.notes = obj_in.notes
        if target is not None and target.value != item.status:
            logger.info("시료 %s / 검사 %s 상태 변경: %s -> %s", db_obj.accession_number, item.test.code, item.status, target.value)
            item.status = target.value

        await db.commit()
        return await self.get_work_item(db, sample_id=db_obj.id, test_id=test_id)

    async def complete(self, db: AsyncSession, *, db_obj: lims_models.Sample) -> lims_models.Sample:
        """취소되지 않은 모든 작업 항목을 Completed 로 진행시킵니다 (명시적 완료 처리)."""
        active = [item for item in db_obj.sample_tests if item.status != lifecycle.WorkStatus.CANCELLED.value]
        if not active:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Sample has no active tests to complete.")

        for item in active:
            for step in lifecycle.completion_path(item.status):
                item.status = lifecycle.check_transition(item.status, step).value
        await db.commit()
        logger.info("시료 %s 완료 처리: 작업 항목 %d건", db_obj.accession_number, len(active))
        return await self.get(db, id=db_obj.id)

    async def delete(self, db: AsyncSession, *, id: Any) -> Optional[lims_models.Sample]:
        """시료를 삭제합니다. 작업 항목(결과 포함)도 함께 삭제됩니다."""
        db_obj = await self.get(db, id=id)
        if db_obj:
            logger.info("시료 삭제: %s (작업 항목 %d건 함께 삭제)", db_obj.accession_number, len(db_obj.sample_tests))
            await db.delete(db_obj)
            await db.commit()
        return db_obj


sample = CRUDSample()


# =============================================================================
# 3. 시료 결과 (SampleResult) - 결과가 기록된 작업 항목 보기
# =============================================================================
class CRUDSampleResult:
    """
    (sample_id, test_id) 키의 결과 조회/저장을 담당합니다.
    별도 테이블 없이 results 가 기록된 sample_tests 행을 대상으로 합니다.
    """

    def _recorded(self):
        return (
            select(lims_models.SampleTest)
            .where(lims_models.SampleTest.results.is_not(None))
            .options(
                selectinload(lims_models.SampleTest.test).selectinload(lims_models.Test.parameters),
                selectinload(lims_models.SampleTest.sample).selectinload(lims_models.Sample.patient),
            )
            .order_by(lims_models.SampleTest.id)
            .execution_options(populate_existing=True)
        )

    async def get_multi(self, db: AsyncSession, *, skip: int = 0, limit: int = 100) -> List[lims_models.SampleTest]:
        result = await db.execute(self._recorded().offset(skip).limit(limit))
        return list(result.scalars().all())

    async def get_by_sample(self, db: AsyncSession, *, sample_id: int) -> List[lims_models.SampleTest]:
        statement = self._recorded().where(lims_models.SampleTest.sample_id == sample_id)
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def get(self, db: AsyncSession, *, sample_id: int, test_id: int) -> Optional[lims_models.SampleTest]:
        statement = self._recorded().where(
            lims_models.SampleTest.sample_id == sample_id,
            lims_models.SampleTest.test_id == test_id,
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def upsert(self, db: AsyncSession, *, obj_in: lims_schemas.SampleResultCreate) -> lims_models.SampleTest:
        """
        (시료, 검사)의 결과를 저장합니다. 기존 결과는 통째로 덮어쓰며(마지막 저장 우선),
        검사가 시료에 연결되어 있지 않으면 Pending 작업 항목으로 연결한 뒤 저장합니다.
        """
        db_sample = await sample.get(db, id=obj_in.sample_id)
        if not db_sample:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sample not found.")

        item = _find_item(db_sample, obj_in.test_id)
        if item is None:
            test_obj = await test.get(db, id=obj_in.test_id)
            if not test_obj:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Test not found.")
            _check_specimen(db_sample.sample_type, [test_obj])
            item = _new_work_item(test_obj)
            db_sample.sample_tests.append(item)
            logger.info("시료 %s 에 검사 %s 를 연결하고 결과를 저장합니다.", db_sample.accession_number, test_obj.code)
        else:
            _ensure_writable(item)

        _apply_results(item, obj_in.results)
        if obj_in.notes is not None:
            item.notes = obj_in.notes
        await db.commit()
        logger.info("결과 저장: 시료 %s / 검사 %s", db_sample.accession_number, obj_in.test_id)
        return await self.get(db, sample_id=obj_in.sample_id, test_id=obj_in.test_id)

    async def update(
        self, db: AsyncSession, *, sample_id: int, obj_in: lims_schemas.SampleResultUpdate
    ) -> lims_models.SampleTest:
        """이미 기록된 결과만 수정합니다. 없으면 404 입니다."""
        item = await self.get(db, sample_id=sample_id, test_id=obj_in.test_id)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sample result not found.")
        _ensure_writable(item)

        _apply_results(item, obj_in.results)
        if obj_in.notes is not None:
            item.notes = obj_in.notes
        await db.commit()
        logger.info("결과 수정: 시료 id=%s / 검사 %s", sample_id, obj_in.test_id)
        return await self.get(db, sample_id=sample_id, test_id=obj_in.test_id)


sample_result = CRUDSampleResult()
