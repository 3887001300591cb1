# flake8: noqa
# scripts/seed_data.py

"""
검사 카탈로그(측정 항목의 단위/정상 범위 포함)와 기본 실험실 설정을 등록하는 CLI 입니다.
이미 존재하는 검사 코드는 건너뛰므로 여러 번 실행해도 안전합니다.

    python -m scripts.seed_data --create-tables
"""

import asyncio
from typing import Dict, List, Tuple

import typer
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.database import AsyncSessionLocal, create_db_and_tables, engine
from app.domains.lab import crud as lab_crud
from app.domains.lab import schemas as lab_schemas
from app.domains.lims import crud as lims_crud
from app.domains.lims import schemas as lims_schemas

cli = typer.Typer()

# 파라미터명 -> (단위, 정상 범위)
PARAMETER_META: Dict[str, Tuple[str, str]] = {
    # Hematology
    "Hemoglobin": ("g/dL", "13.0-17.0 (M), 12.0-15.0 (F)"),
    "WBC": ("10^3/uL", "4.0-11.0"),
    "RBC": ("10^6/uL", "4.5-5.9 (M), 4.1-5.1 (F)"),
    "Platelets": ("10^3/uL", "150-400"),
    "Hematocrit": ("%", "40-52 (M), 36-48 (F)"),
    "MCV": ("fL", "80-100"),
    "MCH": ("pg", "27-33"),
    "MCHC": ("g/dL", "32-36"),
    "RDW": ("%", "11.5-14.5"),
    # Chemistry
    "Glucose": ("mg/dL", "70-99 (Fasting)"),
    "Urea (BUN)": ("mg/dL", "7-20"),
    "Creatinine": ("mg/dL", "0.7-1.3 (M), 0.6-1.1 (F)"),
    "Uric Acid": ("mg/dL", "3.5-7.2 (M), 2.6-6.0 (F)"),
    "Sodium (Na+)": ("mmol/L", "135-145"),
    "Potassium (K+)": ("mmol/L", "3.5-5.1"),
    "Chloride (Cl-)": ("mmol/L", "98-107"),
    "Bicarbonate (HCO3- or Total CO2)": ("mmol/L", "22-29"),
    "eGFR (Calculated)": ("mL/min/1.73m2", ">60"),
    "Albumin": ("g/dL", "3.5-5.0"),
    "Total Protein": ("g/dL", "6.0-8.3"),
    "Globulin": ("g/dL", "2.0-3.5"),
    "A/G Ratio": ("ratio", "1.2-2.2"),
    "Total Bilirubin": ("mg/dL", "0.1-1.2"),
    "Direct Bilirubin": ("mg/dL", "0.0-0.3"),
    "ALT (SGPT)": ("U/L", "7-56"),
    "AST (SGOT)": ("U/L", "5-40"),
    "ALP (Alkaline Phosphatase)": ("U/L", "44-147"),
    "GGT": ("U/L", "9-48"),
    "HbA1c %": ("%", "<5.7"),
    "Estimated Average Glucose (eAG)": ("mg/dL", "<117"),
    "Total Cholesterol": ("mg/dL", "<200"),
    "HDL Cholesterol": ("mg/dL", ">40 (M), >50 (F)"),
    "LDL Cholesterol (Calculated)": ("mg/dL", "<100"),
    "Triglycerides": ("mg/dL", "<150"),
    # Urinalysis
    "Color": ("", "Yellow"),
    "Appearance": ("", "Clear"),
    "Specific Gravity": ("", "1.005-1.030"),
    "pH": ("", "4.6-8.0"),
    "Protein": ("", "Negative"),
    "Ketones": ("", "Negative"),
    "Nitrite": ("", "Negative"),
    "Leukocyte Esterase": ("", "Negative"),
}

TEST_CATALOG: List[dict] = [
    {
        "code": "CBC", "name": "Complete Blood Count", "sample_types": ["Blood"],
        "category": "Hematology", "price": 45.00, "duration": "2-4 hours",
        "parameters": ["RBC", "WBC", "Platelets", "Hemoglobin", "Hematocrit", "MCV", "MCH", "MCHC", "RDW"],
    },
    {
        "code": "LIP", "name": "Lipid Profile", "sample_types": ["Blood"],
        "category": "Clinical Chemistry", "price": 35.00, "duration": "1-2 hours",
        "parameters": ["Total Cholesterol", "HDL Cholesterol", "LDL Cholesterol (Calculated)", "Triglycerides"],
    },
    {
        "code": "UA", "name": "Urinalysis", "sample_types": ["Urine"],
        "category": "Clinical Chemistry", "price": 25.00, "duration": "30 minutes - 1 hour",
        "parameters": ["Color", "Appearance", "Specific Gravity", "pH", "Protein", "Glucose", "Ketones", "Nitrite", "Leukocyte Esterase"],
    },
    {
        "code": "LFT", "name": "Liver Function Test", "sample_types": ["Blood"],
        "category": "Clinical Chemistry", "price": 60.00, "duration": "2-4 hours",
        "parameters": ["Total Protein", "Albumin", "Globulin", "A/G Ratio", "Total Bilirubin", "Direct Bilirubin",
                       "ALT (SGPT)", "AST (SGOT)", "ALP (Alkaline Phosphatase)", "GGT"],
    },
    {
        "code": "KFT", "name": "Kidney Function Test (Renal Panel)", "sample_types": ["Blood"],
        "category": "Clinical Chemistry", "price": 55.00, "duration": "2-3 hours",
        "parameters": ["Urea (BUN)", "Creatinine", "Uric Acid", "Sodium (Na+)", "Potassium (K+)", "Chloride (Cl-)", "eGFR (Calculated)"],
    },
    {
        "code": "FBS", "name": "Fasting Blood Sugar", "sample_types": ["Blood"],
        "category": "Clinical Chemistry", "price": 15.00, "duration": "1-2 hours",
        "parameters": ["Glucose"],
    },
    {
        "code": "HBA1C", "name": "Glycated Hemoglobin (HbA1c)", "sample_types": ["Blood"],
        "category": "Clinical Chemistry", "price": 40.00, "duration": "4-6 hours",
        "parameters": ["HbA1c %", "Estimated Average Glucose (eAG)"],
    },
    {
        "code": "ELECTRO", "name": "Electrolyte Panel", "sample_types": ["Blood"],
        "category": "Clinical Chemistry", "price": 30.00, "duration": "1-2 hours",
        "parameters": ["Sodium (Na+)", "Potassium (K+)", "Chloride (Cl-)", "Bicarbonate (HCO3- or Total CO2)"],
    },
]


def build_test_create(entry: dict) -> lims_schemas.TestCreate:
    """카탈로그 항목에 단위/정상 범위를 붙여 TestCreate 스키마로 만듭니다."""
    parameters = []
    for name in entry["parameters"]:
        unit, normal_range = PARAMETER_META.get(name, ("", ""))
        parameters.append({"name": name, "unit": unit or None, "normal_range": normal_range or None})
    return lims_schemas.TestCreate(
        **{key: value for key, value in entry.items() if key != "parameters"},
        department="Laboratory",
        parameters=parameters,
    )


async def seed_catalog(db: AsyncSession) -> int:
    created = 0
    for entry in TEST_CATALOG:
        if await lims_crud.test.get_by_code(db, code=entry["code"]):
            print(f"건너뜀: 이미 존재하는 검사 코드 {entry['code']}")
            continue
        await lims_crud.test.create(db, obj_in=build_test_create(entry))
        created += 1
        print(f"검사 등록: {entry['code']} ({len(entry['parameters'])}개 항목)")
    return created


async def seed_lab_settings(db: AsyncSession, email: str) -> None:
    if await lab_crud.lab_setting.get_singleton(db):
        print("건너뜀: 실험실 설정이 이미 존재합니다.")
        return
    await lab_crud.lab_setting.update_or_create(
        db,
        obj_in=lab_schemas.LabSettingUpdate(
            name=settings.LAB_NAME,
            address=settings.LAB_ADDRESS or "-",
            phone=settings.LAB_PHONE or "-",
            email=settings.LAB_EMAIL or email,
        ),
    )
    print(f"실험실 설정 등록: {settings.LAB_NAME}")


async def run(create_tables: bool, email: str) -> None:
    if create_tables:
        await create_db_and_tables()
    try:
        async with AsyncSessionLocal() as db:
            created = await seed_catalog(db)
            await seed_lab_settings(db, email)
        print(f"완료: 검사 {created}건 등록")
    finally:
        await engine.dispose()


@cli.command()
def main(
    create_tables: bool = typer.Option(
        False, "--create-tables",
        help="시드 전에 테이블을 생성합니다 (Alembic 을 쓰지 않는 개발 환경용)."
    ),
    email: str = typer.Option(
        "lab@example.com", "--email", "-e",
        help="LAB_EMAIL 이 설정되지 않았을 때 사용할 실험실 이메일입니다."
    ),
):
    """
    검사 카탈로그와 기본 실험실 설정을 데이터베이스에 등록합니다.
    """
    asyncio.run(run(create_tables, email))


if __name__ == "__main__":
    cli()
