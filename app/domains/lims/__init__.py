# app/domains/lims/__init__.py

"""
FastAPI 애플리케이션의 'lims' 도메인 패키지입니다.

검사 카탈로그(Test, TestParameter), 시료(Sample)와 시료-검사 작업 항목(SampleTest)을
관리합니다. 검사 결과는 작업 항목에 저장되며, 시료 상태는 작업 항목 상태로부터 계산됩니다.

주요 서브모듈:
- `lifecycle.py`: 열거형과 상태 전이 규칙 (DB 비의존 순수 함수).
- `models.py`: 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 요청 및 응답 유효성 검사용 Pydantic 모델.
- `crud.py`: 비동기 CRUD 및 시료 생명주기 로직.
- `routers.py`: API 엔드포인트 정의.
"""

__title__ = "LIMS Catalog & Sample Domain"
__description__ = "Manages the test catalog, samples, per-test work items and results."
__version__ = "0.1.0"
__all__ = []
