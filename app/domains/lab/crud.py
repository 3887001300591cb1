# app/domains/lab/crud.py

import logging
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.crud_base import CRUDBase
from . import models, schemas

logger = logging.getLogger(__name__)

SINGLETON_ID = 1


class CRUDLabSetting(CRUDBase[models.LabSetting, schemas.LabSettingUpdate, schemas.LabSettingUpdate]):
    def __init__(self):
        super().__init__(model=models.LabSetting)

    def default_branding(self) -> schemas.LabSettingResponse:
        """저장된 행이 없을 때 사용할 설정 기반 기본 브랜딩"""
        return schemas.LabSettingResponse(
            id=None,
            name=settings.LAB_NAME,
            address=settings.LAB_ADDRESS,
            phone=settings.LAB_PHONE,
            email=settings.LAB_EMAIL,
            logo=None,
            is_default=True,
        )

    async def get_singleton(self, db: AsyncSession) -> Optional[models.LabSetting]:
        return await self.get(db, id=SINGLETON_ID)

    async def get_branding(self, db: AsyncSession) -> schemas.LabSettingResponse:
        """
        실험실 브랜딩을 조회합니다. 행이 없으면 기본 브랜딩을 반환하며 행을 만들지는 않습니다.
        """
        db_obj = await self.get_singleton(db)
        if db_obj is None:
            return self.default_branding()
        return schemas.LabSettingResponse.model_validate(db_obj)

    async def update_or_create(self, db: AsyncSession, *, obj_in: schemas.LabSettingUpdate) -> models.LabSetting:
        """브랜딩 행을 생성하거나 전체 값을 덮어씁니다."""
        data = obj_in.model_dump(mode="json")
        db_obj = await self.get_singleton(db)
        if db_obj is None:
            db_obj = self.model(id=SINGLETON_ID, **data)
            logger.info("실험실 설정을 새로 생성합니다: %s", data["name"])
        else:
            for key, value in data.items():
                setattr(db_obj, key, value)
            logger.info("실험실 설정을 갱신합니다: %s", data["name"])

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj


lab_setting = CRUDLabSetting()
