# tests/__init__.py

"""
LIMS FastAPI 애플리케이션의 테스트 스위트 패키지입니다.

- `conftest.py`: DB 엔진, 세션, 테스트 클라이언트 및 도메인 공통 픽스처.
- `test_main.py`: 루트/헬스 체크 엔드포인트와 워커 태스크.
- `domains/`: 도메인별(pat, lims, lab, rpt) 테스트 모듈.
"""

__title__ = "LIMS API Tests"
__description__ = "Test suite for the LIMS FastAPI application."
__version__ = "0.1.0"
__all__ = []
