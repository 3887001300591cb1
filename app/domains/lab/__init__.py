# app/domains/lab/__init__.py

"""
FastAPI 애플리케이션의 'lab' 도메인 패키지입니다.

'lab' 도메인은 보고서 머리글/바닥글에 찍히는 실험실 브랜딩 정보
(실험실명, 주소, 전화, 이메일, 로고)를 관리합니다.
이 테이블은 항상 단 하나의 행(id=1)만 유지하며,
행이 없으면 설정(config)의 기본 브랜딩을 사용합니다.
"""

__title__ = "LIMS Lab Settings Domain"
__description__ = "Manages the lab branding singleton used on printed reports."
__version__ = "0.1.0"
__all__ = ["models", "schemas", "routers", "crud"]
