# app/domains/pat/__init__.py

"""
FastAPI 애플리케이션의 'pat' 도메인 패키지입니다.

'pat' 도메인은 검사를 의뢰하는 환자(Patient)의 신원 및 인구통계 정보
(이름, 나이, 성별, 연락처, 주소, 의뢰 의사)를 관리합니다.
환자는 0개 이상의 시료(Sample)를 소유하며, 환자 삭제 시 시료도 함께 삭제됩니다.

주요 서브모듈:
- `models.py`: 'patients' 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 환자 데이터에 대한 Pydantic 모델 (요청 및 응답 유효성 검사).
- `crud.py`: 환자 테이블에 대한 비동기 CRUD 로직 및 이름 검색.
- `routers.py`: 환자 데이터에 접근하기 위한 FastAPI API 엔드포인트 정의.
"""

__title__ = "LIMS Patient Domain"
__description__ = "Manages patient identity and demographics."
__version__ = "0.1.0"
__all__ = []
