# app/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

- `config.py`: 애플리케이션 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 비동기 엔진과 세션 관리 (SQLModel, SQLAlchemy asyncio).
- `dependencies.py`: FastAPI 의존성 주입용 공통 함수.
- `crud_base.py`: 도메인 CRUD 클래스의 공통 기반.
- `tasks.py`: arq 워커에서 실행되는 공통 백그라운드 작업.
"""

__title__ = "LIMS Core"
__description__ = "Core components for the LIMS FastAPI application."
__version__ = "0.1.0"
__all__ = []
