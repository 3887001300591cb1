# tests/domains/test_lifecycle_n.py

"""
시료/검사 항목 상태 규칙(app.domains.lims.lifecycle)에 대한 단위 테스트 모듈입니다.
데이터베이스를 사용하지 않습니다.
"""

import pytest

from app.domains.lims import lifecycle
from app.domains.lims.lifecycle import SampleStatus, WorkStatus


@pytest.mark.parametrize(
    "current, target",
    [
        ("Pending", "In Progress"),
        ("Pending", "Cancelled"),
        ("In Progress", "Completed"),
        ("In Progress", "Cancelled"),
        ("Completed", "Completed"),
    ],
)
def test_allowed_transitions(current, target):
    """[성공] 허용된 전이와 같은 상태 재지정은 대상 상태를 반환합니다."""
    assert lifecycle.check_transition(current, target) == WorkStatus(target)


@pytest.mark.parametrize(
    "current, target",
    [
        ("Pending", "Completed"),
        ("Completed", "In Progress"),
        ("Completed", "Cancelled"),
        ("Cancelled", "Pending"),
        ("In Progress", "Pending"),
    ],
)
def test_rejected_transitions(current, target):
    """[실패] 허용되지 않은 전이는 InvalidTransition 을 발생시킵니다."""
    assert not lifecycle.can_transition(current, target)
    with pytest.raises(lifecycle.InvalidTransition):
        lifecycle.check_transition(current, target)


def test_completion_path():
    assert lifecycle.completion_path("Pending") == [WorkStatus.IN_PROGRESS, WorkStatus.COMPLETED]
    assert lifecycle.completion_path("In Progress") == [WorkStatus.COMPLETED]
    assert lifecycle.completion_path("Completed") == []
    assert lifecycle.completion_path("Cancelled") == []


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ([], SampleStatus.PROCESSING),
        (["Pending"], SampleStatus.PROCESSING),
        (["Completed", "In Progress"], SampleStatus.PROCESSING),
        (["Completed", "Completed"], SampleStatus.COMPLETED),
        (["Completed", "Cancelled"], SampleStatus.COMPLETED),
        (["Cancelled", "Cancelled"], SampleStatus.CANCELLED),
    ],
)
def test_derive_sample_status(statuses, expected):
    """시료 상태는 취소되지 않은 항목이 모두 완료되면 Completed 입니다."""
    assert lifecycle.derive_sample_status(statuses) == expected


def test_has_recorded_work():
    assert not lifecycle.has_recorded_work("Pending", None)
    assert not lifecycle.has_recorded_work("Pending", {})
    assert lifecycle.has_recorded_work("Pending", {"WBC": "6.1"})
    assert lifecycle.has_recorded_work("Pending", None, {"extra": 1})
    assert lifecycle.has_recorded_work("In Progress", None)


def test_split_results_keeps_unknown_keys():
    """선언되지 않은 키는 버리지 않고 별도 묶음으로 분리됩니다."""
    known, unknown = lifecycle.split_results(
        {"Hemoglobin": "14.2", "WBC": "6.1", "Foo": "bar"}, ["Hemoglobin", "WBC", "Platelets"]
    )
    assert known == {"Hemoglobin": "14.2", "WBC": "6.1"}
    assert unknown == {"Foo": "bar"}


def test_supports_specimen():
    assert lifecycle.supports_specimen(["Blood", "Urine"], "Urine")
    assert not lifecycle.supports_specimen(["Blood"], "Urine")
    assert not lifecycle.supports_specimen(None, "Blood")
