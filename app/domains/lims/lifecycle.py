# app/domains/lims/lifecycle.py

"""
시료/검사 항목의 상태 규칙을 정의하는 모듈입니다.

- 검체 종류, 우선순위, 카탈로그 상태 등 고정 열거형
- 검사 항목(SampleTest) 상태 전이 규칙: Pending -> In Progress -> Completed,
  Pending/In Progress 에서 Cancelled 로 전이 가능, Completed/Cancelled 는 종료 상태
- 시료 상태는 저장하지 않고 검사 항목 상태로부터 계산합니다.
- 결과 값 키를 검사의 파라미터 이름 기준으로 분리합니다.

데이터베이스에 의존하지 않는 순수 함수만 둡니다.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple


class SpecimenType(str, Enum):
    BLOOD = "Blood"
    URINE = "Urine"
    STOOL = "Stool"
    SPUTUM = "Sputum"
    TISSUE = "Tissue"


class Priority(str, Enum):
    NORMAL = "Normal"
    URGENT = "Urgent"
    STAT = "Stat"


class CatalogStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class WorkStatus(str, Enum):
    """시료-검사 항목(작업 단위)의 상태"""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class SampleStatus(str, Enum):
    """검사 항목 상태로부터 계산되는 시료 상태"""
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


INITIAL_WORK_STATUS = WorkStatus.PENDING

ALLOWED_TRANSITIONS: Dict[WorkStatus, frozenset] = {
    WorkStatus.PENDING: frozenset({WorkStatus.IN_PROGRESS, WorkStatus.CANCELLED}),
    WorkStatus.IN_PROGRESS: frozenset({WorkStatus.COMPLETED, WorkStatus.CANCELLED}),
    WorkStatus.COMPLETED: frozenset(),
    WorkStatus.CANCELLED: frozenset(),
}


class InvalidTransition(ValueError):
    def __init__(self, current: WorkStatus, target: WorkStatus):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change test status from '{current.value}' to '{target.value}'.")


def can_transition(current: str, target: str) -> bool:
    current, target = WorkStatus(current), WorkStatus(target)
    return current == target or target in ALLOWED_TRANSITIONS[current]


def check_transition(current: str, target: str) -> WorkStatus:
    """전이가 허용되면 대상 상태를 반환하고, 아니면 InvalidTransition 을 발생시킵니다."""
    if not can_transition(current, target):
        raise InvalidTransition(WorkStatus(current), WorkStatus(target))
    return WorkStatus(target)


def completion_path(current: str) -> List[WorkStatus]:
    """
    현재 상태에서 Completed 까지 거쳐야 하는 상태 목록을 반환합니다.
    이미 종료 상태(Completed/Cancelled)이면 빈 목록입니다.
    """
    current = WorkStatus(current)
    if current == WorkStatus.PENDING:
        return [WorkStatus.IN_PROGRESS, WorkStatus.COMPLETED]
    if current == WorkStatus.IN_PROGRESS:
        return [WorkStatus.COMPLETED]
    return []


def derive_sample_status(statuses: Iterable[str]) -> SampleStatus:
    """
    검사 항목 상태 목록으로 시료 상태를 계산합니다.

    - 취소되지 않은 항목이 1개 이상이고 모두 Completed 이면 Completed
    - 연결된 항목이 모두 Cancelled 이면 Cancelled
    - 그 외(검사가 없는 경우 포함)는 Processing
    """
    statuses = [WorkStatus(s) for s in statuses]
    active = [s for s in statuses if s != WorkStatus.CANCELLED]
    if active and all(s == WorkStatus.COMPLETED for s in active):
        return SampleStatus.COMPLETED
    if statuses and not active:
        return SampleStatus.CANCELLED
    return SampleStatus.PROCESSING


def has_recorded_work(status: str, results: Optional[Dict[str, Any]], unrecognized: Optional[Dict[str, Any]] = None) -> bool:
    """검사 항목을 제거하면 기록된 데이터(결과 또는 진행 상태)가 사라지는지 여부"""
    return bool(results) or bool(unrecognized) or WorkStatus(status) != INITIAL_WORK_STATUS


def split_results(
    results: Dict[str, Any], parameter_names: Iterable[str]
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    결과 값을 (선언된 파라미터 키, 선언되지 않은 키) 두 묶음으로 나눕니다.
    누락된 파라미터는 허용합니다.
    """
    declared = set(parameter_names)
    known = {k: v for k, v in results.items() if k in declared}
    unknown = {k: v for k, v in results.items() if k not in declared}
    return known, unknown


def supports_specimen(sample_types: Optional[Iterable[str]], specimen: str) -> bool:
    return SpecimenType(specimen).value in set(sample_types or [])
