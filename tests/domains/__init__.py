# tests/domains/__init__.py

"""
도메인별 테스트 모듈 패키지입니다.

- `test_pat_n.py`: 환자
- `test_lifecycle_n.py`: 작업 항목 상태 규칙 (DB 미사용)
- `test_lims_n.py`: 검사 카탈로그, 시료, 작업 항목, 결과
- `test_lab_n.py`: 실험실 브랜딩 설정
- `test_rpt_n.py`: 시료 보고서 (JSON, HTML, PDF)
"""

__title__ = "LIMS Domain Tests"
__description__ = "Categorized tests for each business domain in the LIMS FastAPI application."
__version__ = "0.1.0"
__all__ = []
