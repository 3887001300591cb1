# tests/conftest.py

import os
from datetime import date, time
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# app.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from app.main import app as main_app
from app.core import dependencies as deps
from app.core.database import get_session

# --- 모든 모델 임포트 ---
#  SQLModel.metadata.create_all()이 모든 테이블을 인식하려면,
#  모든 모델 클래스가 한 번 이상 임포트되어야 합니다.
from app.domains.models import *    # noqa: F401, F403

from app.domains.pat import crud as pat_crud
from app.domains.pat import models as pat_models
from app.domains.pat import schemas as pat_schemas
from app.domains.lims import crud as lims_crud
from app.domains.lims import models as lims_models
from app.domains.lims import schemas as lims_schemas


# --- 테스트용 데이터베이스 설정 ---
# 실제 운영 DB와 분리된 테스트 전용 DB URL을 사용합니다.
# 기본값은 메모리 SQLite 이며, PostgreSQL 로 돌리려면 TEST_DATABASE_URL 을 지정합니다.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _test_engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # 메모리 DB 는 연결이 하나뿐이어야 테이블이 유지됩니다.
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"poolclass": NullPool}


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    테스트마다 모든 테이블을 새로 만들고, 끝나면 삭제합니다.
    """
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, future=True, **_test_engine_options(TEST_DATABASE_URL))
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    각 테스트 함수가 사용할 비동기 데이터베이스 세션을 제공합니다.
    API 요청도 같은 세션을 사용합니다.
    """
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


# --- 비동기 테스트 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient 인스턴스를 생성하고, 테스트용 비동기 DB 세션을 주입합니다.
    """

    def override_get_session_and_dependency():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()

    try:
        # get_session과 deps.get_db_session 모두 오버라이드
        main_app.dependency_overrides[get_session] = override_get_session_and_dependency
        main_app.dependency_overrides[deps.get_db_session] = override_get_session_and_dependency

        async with AsyncClient(transport=ASGITransport(app=main_app), base_url="http://test") as async_client:
            yield async_client

    finally:
        # 클라이언트 픽스처가 끝나면 오버라이드를 반드시 복원해야 합니다.
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


# --- 도메인별 공통 픽스처 ---
@pytest_asyncio.fixture(name="test_patient")
async def test_patient_fixture(db_session: AsyncSession) -> pat_models.Patient:
    """테스트용 환자 John Doe 를 생성하고 반환합니다."""
    return await pat_crud.patient.create(
        db_session,
        obj_in=pat_schemas.PatientCreate(
            name="John Doe", age=42, gender="Male", phone="010-1234-5678", doctor="Dr. Kim"
        ),
    )


@pytest_asyncio.fixture(name="test_cbc")
async def test_cbc_fixture(db_session: AsyncSession) -> lims_models.Test:
    """Hemoglobin, WBC 두 항목을 가진 CBC 검사를 생성하고 반환합니다."""
    return await lims_crud.test.create(
        db_session,
        obj_in=lims_schemas.TestCreate(
            code="CBC",
            name="Complete Blood Count",
            category="Hematology",
            department="Laboratory",
            price=45,
            sample_types=["Blood"],
            parameters=[
                {"name": "Hemoglobin", "unit": "g/dL", "normal_range": "13.0-17.0"},
                {"name": "WBC", "unit": "10^3/uL", "normal_range": "4.0-11.0"},
            ],
        ),
    )


@pytest_asyncio.fixture(name="test_lipid")
async def test_lipid_fixture(db_session: AsyncSession) -> lims_models.Test:
    """Lipid Profile 검사를 생성하고 반환합니다."""
    return await lims_crud.test.create(
        db_session,
        obj_in=lims_schemas.TestCreate(
            code="LIP",
            name="Lipid Profile",
            category="Clinical Chemistry",
            price=35,
            sample_types=["Blood"],
            parameters=["Total Cholesterol", "Triglycerides"],
        ),
    )


@pytest_asyncio.fixture(name="test_urinalysis")
async def test_urinalysis_fixture(db_session: AsyncSession) -> lims_models.Test:
    """소변 검체 전용 Urinalysis 검사를 생성하고 반환합니다."""
    return await lims_crud.test.create(
        db_session,
        obj_in=lims_schemas.TestCreate(
            code="UA",
            name="Urinalysis",
            price=25,
            sample_types=["Urine"],
            parameters=["Color", "pH"],
        ),
    )


@pytest_asyncio.fixture(name="test_sample")
async def test_sample_fixture(
    db_session: AsyncSession,
    test_patient: pat_models.Patient,
    test_cbc: lims_models.Test,
) -> lims_models.Sample:
    """John Doe 의 ACC001 시료(CBC 의뢰)를 생성하고 반환합니다."""
    return await lims_crud.sample.create(
        db_session,
        obj_in=lims_schemas.SampleCreate(
            patient_id=test_patient.id,
            accession_number="ACC001",
            sample_type="Blood",
            collection_date=date(2026, 10, 1),
            collection_time=time(9, 30),
            priority="Normal",
            tests=[test_cbc.id],
        ),
    )
