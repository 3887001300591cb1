# app/domains/rpt/__init__.py

"""
FastAPI 애플리케이션의 'rpt' 도메인 패키지입니다.

접수 번호로 시료 보고서 문서(ReportDocument)를 구성하고,
이를 HTML, 인쇄용 HTML, PDF 로 출력합니다. 별도 테이블은 없습니다.

주요 서브모듈:
- `schemas.py`: 보고서 문서 모델.
- `services.py`: 문서 구성 및 페이지 규칙.
- `renderers.py`: jinja2 HTML, reportlab PDF 출력.
- `routers.py`: API 엔드포인트 정의.
"""
