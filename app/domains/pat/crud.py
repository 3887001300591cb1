# app/domains/pat/crud.py

"""
'pat' 도메인 (환자)과 관련된 CRUD 로직을 담당하는 모듈입니다.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.domains.lims import models as lims_models
from . import models as pat_models
from . import schemas as pat_schemas

logger = logging.getLogger(__name__)


# =============================================================================
# 1. 환자 (Patient) CRUD
# =============================================================================
class CRUDPatient(CRUDBase[pat_models.Patient, pat_schemas.PatientCreate, pat_schemas.PatientUpdate]):
    def __init__(self):
        super().__init__(model=pat_models.Patient)

    async def get_with_samples(self, db: AsyncSession, *, id: int) -> Optional[pat_models.Patient]:
        """시료 및 시료의 검사 항목을 즉시 로드하여 환자를 조회합니다."""
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(
                selectinload(self.model.samples).selectinload(lims_models.Sample.sample_tests)
            )
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_multi_with_counts(
        self, db: AsyncSession, *, skip: int = 0, limit: int = 100, name: Optional[str] = None
    ) -> List[Tuple[pat_models.Patient, int]]:
        """
        환자 목록과 환자별 시료 수를 함께 조회합니다.
        `name`이 주어지면 대소문자 구분 없이 부분 일치 검색합니다.
        """
        statement = (
            select(self.model, func.count(lims_models.Sample.id))
            .outerjoin(lims_models.Sample, lims_models.Sample.patient_id == self.model.id)
            .group_by(self.model.id)
            .order_by(self.model.id)
        )
        if name:
            statement = statement.where(self.model.name.ilike(f"%{name}%"))

        result = await db.execute(statement.offset(skip).limit(limit))
        return [(patient, count) for patient, count in result.all()]

    async def delete(self, db: AsyncSession, *, id: int) -> Optional[pat_models.Patient]:
        """환자를 삭제합니다. 소유한 시료와 검사 항목도 함께 삭제됩니다."""
        db_obj = await self.get_with_samples(db, id=id)
        if db_obj:
            logger.info("환자 삭제: id=%s, 시료 %d건 함께 삭제", id, len(db_obj.samples))
            await db.delete(db_obj)
            await db.commit()
        return db_obj


patient = CRUDPatient()
