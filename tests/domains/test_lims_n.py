# tests/domains/test_lims_n.py

"""
'lims' 도메인 (검사 카탈로그, 시료, 시료-검사 작업 항목, 결과) 관련 API 엔드포인트에 대한 통합 테스트 모듈입니다.

- 검사 카탈로그 CRUD 및 측정 항목 순서/교체
- 시료 접수, 검사 목록 동기화(기록된 결과 보호), 추가/제거
- 작업 항목 상태 전이 및 결과 기록
- 시료 결과(sample-results) 보기
"""

import pytest
from httpx import AsyncClient

from app.core.config import settings
from app.domains.lims import models as lims_models
from app.domains.pat import models as pat_models


# -----------------------------------------------------------------------------
# 참고:
# 공통 픽스처(client, db_session, test_patient, test_cbc, test_lipid, test_urinalysis,
# test_sample)는 conftest.py 파일에 중앙 관리되고 있습니다.
# -----------------------------------------------------------------------------
async def _create_sample(client: AsyncClient, patient_id: int, accession: str, tests, **extra):
    payload = {
        "patient_id": patient_id,
        "accession_number": accession,
        "sample_type": "Blood",
        "collection_date": "2026-10-01",
        "collection_time": "09:30:00",
        "priority": "Normal",
        "tests": tests,
    }
    payload.update(extra)
    return await client.post("/api/v1/samples", json=payload)


# =============================================================================
# 1. 검사 카탈로그 (Test)
# =============================================================================
@pytest.mark.asyncio
async def test_create_test_with_mixed_parameters(client: AsyncClient):
    """
    [성공] 파라미터는 객체 또는 문자열로 줄 수 있으며, 목록 순서가 표시 순서입니다.
    """
    test_data = {
        "code": "LFT",
        "name": "Liver Function Test",
        "category": "Clinical Chemistry",
        "price": 60,
        "sample_types": ["Blood"],
        "parameters": [
            {"name": "Total Protein", "unit": "g/dL", "normal_range": "6.0-8.3"},
            "Albumin",
            {"name": "GGT", "unit": "U/L"},
        ],
    }
    response = await client.post("/api/v1/tests", json=test_data)
    created = response.json()

    assert response.status_code == 201
    assert created["code"] == "LFT"
    assert created["status"] == "Active"
    assert created["samples_count"] == 0
    assert [p["name"] for p in created["parameters"]] == ["Total Protein", "Albumin", "GGT"]
    assert [p["sort_order"] for p in created["parameters"]] == [0, 1, 2]
    assert created["parameters"][1]["unit"] is None


@pytest.mark.asyncio
async def test_create_test_duplicate_code(client: AsyncClient, test_cbc: lims_models.Test):
    """
    [실패/무결성] 이미 존재하는 검사 코드로 생성 시 400 을 반환합니다.
    """
    response = await client.post(
        "/api/v1/tests", json={"code": "CBC", "name": "Duplicate", "sample_types": ["Blood"]}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Test with this code already exists."


@pytest.mark.asyncio
async def test_create_test_validation_errors(client: AsyncClient):
    """
    [실패/유효성] 중복 파라미터명, 허용되지 않은 검체 종류, 빈 검체 목록은 422 입니다.
    """
    base = {"code": "X1", "name": "X", "sample_types": ["Blood"]}

    response = await client.post("/api/v1/tests", json={**base, "parameters": ["A", "A"]})
    assert response.status_code == 422

    response = await client.post("/api/v1/tests", json={**base, "sample_types": ["Plasma"]})
    assert response.status_code == 422

    response = await client.post("/api/v1/tests", json={**base, "sample_types": []})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_test_replaces_parameters(client: AsyncClient, test_cbc: lims_models.Test):
    """
    [성공] parameters 를 주면 전체 목록이 새 순서로 교체됩니다 (기존 이름 재사용 포함).
    """
    response = await client.put(
        f"/api/v1/tests/{test_cbc.id}",
        json={"price": 50, "parameters": ["WBC", {"name": "Hemoglobin", "unit": "g/dL"}, "Platelets"]},
    )
    updated = response.json()

    assert response.status_code == 200
    assert updated["price"] == 50
    assert updated["name"] == "Complete Blood Count"
    assert [p["name"] for p in updated["parameters"]] == ["WBC", "Hemoglobin", "Platelets"]

    response = await client.put(f"/api/v1/tests/{test_cbc.id}", json={"name": "CBC v2"})
    assert [p["name"] for p in response.json()["parameters"]] == ["WBC", "Hemoglobin", "Platelets"]


@pytest.mark.asyncio
async def test_update_test_duplicate_code(
    client: AsyncClient, test_cbc: lims_models.Test, test_lipid: lims_models.Test
):
    """
    [실패/무결성] 다른 검사의 코드로 변경하면 400 입니다.
    """
    response = await client.put(f"/api/v1/tests/{test_lipid.id}", json={"code": "CBC"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_read_test_not_found(client: AsyncClient):
    response = await client.get("/api/v1/tests/9999")
    assert response.status_code == 404

    response = await client.put("/api/v1/tests/9999", json={"name": "none"})
    assert response.status_code == 404

    response = await client.delete("/api/v1/tests/9999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_read_tests_filters(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_lipid: lims_models.Test,
    test_urinalysis: lims_models.Test,
):
    """
    [성공] 검체 종류, 사용 여부, 분류 필터와 samples_count 를 확인합니다.
    """
    response = await client.get("/api/v1/tests")
    rows = {t["code"]: t for t in response.json()}
    assert response.status_code == 200
    assert set(rows) == {"CBC", "LIP", "UA"}
    assert rows["CBC"]["samples_count"] == 1
    assert rows["LIP"]["samples_count"] == 0

    response = await client.get("/api/v1/tests", params={"sample_type": "Urine"})
    assert [t["code"] for t in response.json()] == ["UA"]

    response = await client.get("/api/v1/tests", params={"usage": "active"})
    assert [t["code"] for t in response.json()] == ["CBC"]

    response = await client.get("/api/v1/tests", params={"category": "Clinical Chemistry"})
    assert [t["code"] for t in response.json()] == ["LIP"]

    response = await client.get("/api/v1/tests", params={"sample_type": "Blood", "skip": 1, "limit": 1})
    assert [t["code"] for t in response.json()] == ["LIP"]

    response = await client.get(f"/api/v1/tests/{test_lipid.id}")
    assert response.json()["samples_count"] == 0


@pytest.mark.asyncio
async def test_delete_test_removes_work_items(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
):
    """
    [성공] 검사를 삭제하면 시료에 연결된 작업 항목도 삭제됩니다.
    """
    response = await client.delete(f"/api/v1/tests/{test_cbc.id}")
    assert response.status_code == 204

    response = await client.get(f"/api/v1/samples/{test_sample.id}")
    assert response.status_code == 200
    assert response.json()["sample_tests"] == []


# =============================================================================
# 2. 시료 접수 및 조회 (Sample)
# =============================================================================
@pytest.mark.asyncio
async def test_create_sample_creates_pending_items(
    client: AsyncClient,
    test_patient: pat_models.Patient,
    test_cbc: lims_models.Test,
    test_lipid: lims_models.Test,
):
    """
    [성공] 접수 시 중복 없는 검사마다 Pending 작업 항목이 만들어집니다.
    """
    response = await _create_sample(
        client, test_patient.id, "ACC100", [test_cbc.id, test_lipid.id, test_cbc.id], location="Fridge A"
    )
    created = response.json()

    assert response.status_code == 201
    assert created["accession_number"] == "ACC100"
    assert created["status"] == "Processing"
    assert created["patient"]["name"] == "John Doe"
    assert [item["test_id"] for item in created["sample_tests"]] == [test_cbc.id, test_lipid.id]
    assert all(item["status"] == "Pending" for item in created["sample_tests"])
    assert all(item["results"] is None for item in created["sample_tests"])


@pytest.mark.asyncio
async def test_create_sample_rejections(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_patient: pat_models.Patient,
    test_cbc: lims_models.Test,
):
    """
    [실패] 없는 환자(404), 없는 검사(404), 중복 접수 번호(400), 허용되지 않은 우선순위(422).
    """
    response = await _create_sample(client, 9999, "ACC200", [test_cbc.id])
    assert response.status_code == 404
    assert response.json()["detail"] == "Patient not found."

    response = await _create_sample(client, test_patient.id, "ACC201", [test_cbc.id, 777, 778])
    assert response.status_code == 404
    assert "777" in response.json()["detail"] and "778" in response.json()["detail"]

    response = await _create_sample(client, test_patient.id, "ACC001", [test_cbc.id])
    assert response.status_code == 400

    response = await _create_sample(client, test_patient.id, "ACC202", [test_cbc.id], priority="Low")
    assert response.status_code == 422

    response = await _create_sample(client, test_patient.id, "ACC203", [test_cbc.id], sample_type="Plasma")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_read_sample_by_accession(client: AsyncClient, test_sample: lims_models.Sample):
    response = await client.get("/api/v1/samples/accession/ACC001")
    assert response.status_code == 200
    assert response.json()["id"] == test_sample.id

    response = await client.get("/api/v1/samples/accession/NOPE")
    assert response.status_code == 404

    response = await client.get("/api/v1/samples/9999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_read_samples_filters_and_pagination(
    client: AsyncClient,
    test_patient: pat_models.Patient,
    test_cbc: lims_models.Test,
):
    """
    [성공] 시료 목록 필터(우선순위, 접수 번호 부분 일치)와 페이지네이션.
    """
    for index, priority in enumerate(["Normal", "Urgent", "Stat"], start=1):
        response = await _create_sample(client, test_patient.id, f"LAB-{index:03d}", [test_cbc.id], priority=priority)
        assert response.status_code == 201

    response = await client.get("/api/v1/samples", params={"skip": 1, "limit": 1})
    assert [s["accession_number"] for s in response.json()] == ["LAB-002"]

    response = await client.get("/api/v1/samples", params={"priority": "Stat"})
    assert [s["accession_number"] for s in response.json()] == ["LAB-003"]

    response = await client.get("/api/v1/samples", params={"accession": "lab-00"})
    assert len(response.json()) == 3

    response = await client.get("/api/v1/samples", params={"patient_id": test_patient.id + 1})
    assert response.json() == []


# =============================================================================
# 3. 시료 수정 및 검사 목록 관리
# =============================================================================
@pytest.mark.asyncio
async def test_update_sample_metadata_keeps_tests(client: AsyncClient, test_sample: lims_models.Sample):
    """
    [성공] tests 없이 메타데이터만 수정하면 작업 항목은 그대로입니다.
    """
    response = await client.put(
        f"/api/v1/samples/{test_sample.id}", json={"priority": "Urgent", "notes": "hemolyzed"}
    )
    updated = response.json()

    assert response.status_code == 200
    assert updated["priority"] == "Urgent"
    assert updated["notes"] == "hemolyzed"
    assert len(updated["sample_tests"]) == 1


@pytest.mark.asyncio
async def test_update_sample_syncs_tests(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
    test_lipid: lims_models.Test,
):
    """
    [성공] tests 를 주면 집합으로 동기화됩니다. 기록 없는 검사는 그대로 제거됩니다.
    """
    response = await client.put(f"/api/v1/samples/{test_sample.id}", json={"tests": [test_lipid.id]})
    updated = response.json()

    assert response.status_code == 200
    assert [item["test_id"] for item in updated["sample_tests"]] == [test_lipid.id]
    assert updated["sample_tests"][0]["status"] == "Pending"


@pytest.mark.asyncio
async def test_update_sample_lossy_sync_requires_force(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
    test_lipid: lims_models.Test,
):
    """
    [실패→성공] 결과가 기록된 검사를 제거하는 동기화는 409, force=true 이면 진행됩니다.
    """
    response = await client.put(
        f"/api/v1/samples/{test_sample.id}/tests/{test_cbc.id}",
        json={"results": {"Hemoglobin": "14.2"}},
    )
    assert response.status_code == 200

    response = await client.put(
        f"/api/v1/samples/{test_sample.id}", json={"priority": "Stat", "tests": [test_lipid.id]}
    )
    assert response.status_code == 409
    assert response.json()["detail"]["test_ids"] == [test_cbc.id]

    response = await client.get(f"/api/v1/samples/{test_sample.id}")
    assert response.json()["priority"] == "Normal"
    assert [item["test_id"] for item in response.json()["sample_tests"]] == [test_cbc.id]

    response = await client.put(
        f"/api/v1/samples/{test_sample.id}",
        params={"force": "true"},
        json={"priority": "Stat", "tests": [test_lipid.id]},
    )
    assert response.status_code == 200
    assert response.json()["priority"] == "Stat"
    assert [item["test_id"] for item in response.json()["sample_tests"]] == [test_lipid.id]


@pytest.mark.asyncio
async def test_attach_tests_is_additive(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
    test_lipid: lims_models.Test,
):
    """
    [성공] 검사 추가는 기존 항목을 건드리지 않고 중복을 무시합니다.
    """
    await client.put(
        f"/api/v1/samples/{test_sample.id}/tests/{test_cbc.id}", json={"status": "In Progress"}
    )

    response = await client.post(
        f"/api/v1/samples/{test_sample.id}/tests", json={"tests": [test_cbc.id, test_lipid.id]}
    )
    items = {item["test_id"]: item for item in response.json()["sample_tests"]}

    assert response.status_code == 200
    assert items[test_cbc.id]["status"] == "In Progress"
    assert items[test_lipid.id]["status"] == "Pending"

    response = await client.get(f"/api/v1/samples/{test_sample.id}/tests")
    assert response.status_code == 200
    assert len(response.json()) == 2

    response = await client.post(f"/api/v1/samples/{test_sample.id}/tests", json={"tests": [999]})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_detach_test(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
    test_lipid: lims_models.Test,
):
    """
    [성공/실패] 진행 중인 검사는 force 없이 제거할 수 없고, 연결되지 않은 검사는 404 입니다.
    """
    response = await client.delete(f"/api/v1/samples/{test_sample.id}/tests/{test_lipid.id}")
    assert response.status_code == 404

    await client.put(
        f"/api/v1/samples/{test_sample.id}/tests/{test_cbc.id}", json={"status": "In Progress"}
    )
    response = await client.delete(f"/api/v1/samples/{test_sample.id}/tests/{test_cbc.id}")
    assert response.status_code == 409

    response = await client.delete(
        f"/api/v1/samples/{test_sample.id}/tests/{test_cbc.id}", params={"force": "true"}
    )
    assert response.status_code == 200
    assert response.json()["sample_tests"] == []


@pytest.mark.asyncio
async def test_delete_sample(client: AsyncClient, test_sample: lims_models.Sample):
    response = await client.delete(f"/api/v1/samples/{test_sample.id}")
    assert response.status_code == 204

    response = await client.get(f"/api/v1/samples/{test_sample.id}")
    assert response.status_code == 404

    response = await client.delete(f"/api/v1/samples/{test_sample.id}")
    assert response.status_code == 404


# =============================================================================
# 4. 작업 항목 상태 전이 및 결과 기록
# =============================================================================
@pytest.mark.asyncio
async def test_work_item_transitions(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
):
    """
    [성공/실패] Pending -> Completed 직행은 409, 단계별 전이는 허용됩니다.
    """
    url = f"/api/v1/samples/{test_sample.id}/tests/{test_cbc.id}"

    response = await client.put(url, json={"status": "Completed"})
    assert response.status_code == 409

    response = await client.put(url, json={"status": "In Progress"})
    assert response.status_code == 200
    assert response.json()["status"] == "In Progress"

    response = await client.put(url, json={"status": "In Progress"})
    assert response.status_code == 200

    response = await client.put(url, json={"status": "Completed"})
    assert response.json()["status"] == "Completed"

    response = await client.get(f"/api/v1/samples/{test_sample.id}")
    assert response.json()["status"] == "Completed"

    response = await client.put(url, json={"status": "Cancelled"})
    assert response.status_code == 409

    response = await client.put(url, json={"status": "Done"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_saving_results_keeps_status_and_unknown_keys(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
):
    """
    [성공] 결과 저장은 상태를 바꾸지 않으며, 선언되지 않은 키는 별도로 보관됩니다.
    """
    response = await client.put(
        f"/api/v1/samples/{test_sample.id}/tests/{test_cbc.id}",
        json={"results": {"Hemoglobin": "14.2", "Foo": "1"}, "notes": "rerun"},
    )
    item = response.json()

    assert response.status_code == 200
    assert item["status"] == "Pending"
    assert item["results"] == {"Hemoglobin": "14.2"}
    assert item["unrecognized_results"] == {"Foo": "1"}
    assert item["notes"] == "rerun"


@pytest.mark.asyncio
async def test_results_rejected_for_cancelled_item(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
):
    """
    [실패] 취소된 작업 항목에는 결과를 기록할 수 없습니다.
    """
    url = f"/api/v1/samples/{test_sample.id}/tests/{test_cbc.id}"
    response = await client.put(url, json={"status": "Cancelled"})
    assert response.status_code == 200

    response = await client.put(url, json={"results": {"WBC": "6.1"}})
    assert response.status_code == 409

    response = await client.post(
        "/api/v1/sample-results",
        json={"sample_id": test_sample.id, "test_id": test_cbc.id, "results": {"WBC": "6.1"}},
    )
    assert response.status_code == 409

    response = await client.get(f"/api/v1/samples/{test_sample.id}")
    assert response.json()["status"] == "Cancelled"


@pytest.mark.asyncio
async def test_complete_sample(
    client: AsyncClient,
    test_patient: pat_models.Patient,
    test_cbc: lims_models.Test,
    test_lipid: lims_models.Test,
    test_urinalysis: lims_models.Test,
):
    """
    [성공] 명시적 완료는 취소되지 않은 모든 항목을 Completed 로 진행시킵니다.
    """
    response = await _create_sample(
        client, test_patient.id, "ACC300", [test_cbc.id, test_lipid.id, test_urinalysis.id]
    )
    sample_id = response.json()["id"]
    await client.put(f"/api/v1/samples/{sample_id}/tests/{test_lipid.id}", json={"status": "In Progress"})
    await client.put(f"/api/v1/samples/{sample_id}/tests/{test_urinalysis.id}", json={"status": "Cancelled"})

    response = await client.post(f"/api/v1/samples/{sample_id}/complete")
    completed = response.json()
    statuses = {item["test_id"]: item["status"] for item in completed["sample_tests"]}

    assert response.status_code == 200
    assert completed["status"] == "Completed"
    assert statuses == {test_cbc.id: "Completed", test_lipid.id: "Completed", test_urinalysis.id: "Cancelled"}


@pytest.mark.asyncio
async def test_complete_sample_without_active_tests(
    client: AsyncClient,
    test_patient: pat_models.Patient,
):
    """
    [실패] 진행할 검사가 없는 시료의 완료 처리는 409 입니다.
    """
    response = await _create_sample(client, test_patient.id, "ACC301", [])
    response = await client.post(f"/api/v1/samples/{response.json()['id']}/complete")
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_specimen_compatibility_opt_in(
    client: AsyncClient,
    monkeypatch,
    test_patient: pat_models.Patient,
    test_urinalysis: lims_models.Test,
):
    """
    [성공/실패] 기본은 권고 수준이며, 설정을 켜면 지원하지 않는 검체의 검사는 422 입니다.
    """
    response = await _create_sample(client, test_patient.id, "ACC400", [test_urinalysis.id])
    assert response.status_code == 201

    monkeypatch.setattr(settings, "ENFORCE_SPECIMEN_COMPATIBILITY", True)
    response = await _create_sample(client, test_patient.id, "ACC401", [test_urinalysis.id])
    assert response.status_code == 422

    response = await _create_sample(
        client, test_patient.id, "ACC402", [test_urinalysis.id], sample_type="Urine"
    )
    assert response.status_code == 201


# =============================================================================
# 5. 시료 결과 (SampleResult)
# =============================================================================
@pytest.mark.asyncio
async def test_sample_results_empty_list(client: AsyncClient, test_sample: lims_models.Sample):
    """
    [성공] 기록된 결과가 없으면 빈 목록입니다.
    """
    response = await client.get("/api/v1/sample-results")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_upsert_sample_result_overwrites(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
):
    """
    [성공] 결과 저장은 (시료, 검사) 기준 upsert 이며 전체를 덮어씁니다.
    """
    payload = {"sample_id": test_sample.id, "test_id": test_cbc.id, "results": {"Hemoglobin": "14.2", "WBC": "6.1"}}
    response = await client.post("/api/v1/sample-results", json=payload)
    created = response.json()

    assert response.status_code == 201
    assert created["results"] == {"Hemoglobin": "14.2", "WBC": "6.1"}
    assert created["sample"]["accession_number"] == "ACC001"
    assert created["sample"]["patient"]["name"] == "John Doe"
    assert created["test"]["code"] == "CBC"

    payload["results"] = {"WBC": "7.0"}
    response = await client.post("/api/v1/sample-results", json=payload)
    assert response.json()["results"] == {"WBC": "7.0"}

    response = await client.get("/api/v1/sample-results")
    assert len(response.json()) == 1

    response = await client.get(f"/api/v1/samples/{test_sample.id}")
    assert response.json()["sample_tests"][0]["status"] == "Pending"


@pytest.mark.asyncio
async def test_upsert_sample_result_idempotent(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
):
    """
    [성공] 같은 결과를 두 번 저장해도 기록은 하나이며, 값과 항목 상태는 그대로입니다.
    """
    payload = {"sample_id": test_sample.id, "test_id": test_cbc.id, "results": {"Hemoglobin": "14.2", "WBC": "6.1"}}
    first = await client.post("/api/v1/sample-results", json=payload)
    second = await client.post("/api/v1/sample-results", json=payload)

    assert first.status_code == 201
    assert second.status_code == 201
    assert (second.json()["sample_id"], second.json()["test_id"]) == (test_sample.id, test_cbc.id)

    response = await client.get("/api/v1/sample-results")
    records = response.json()
    assert len(records) == 1
    assert records[0]["results"] == payload["results"]

    response = await client.get(f"/api/v1/samples/{test_sample.id}")
    assert response.json()["sample_tests"][0]["status"] == "Pending"


@pytest.mark.asyncio
async def test_upsert_sample_result_attaches_test(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_lipid: lims_models.Test,
):
    """
    [성공] 연결되지 않은 검사의 결과를 저장하면 Pending 항목으로 연결됩니다.
    """
    response = await client.post(
        "/api/v1/sample-results",
        json={"sample_id": test_sample.id, "test_id": test_lipid.id, "results": {"Triglycerides": "120"}},
    )
    assert response.status_code == 201

    response = await client.get(f"/api/v1/samples/{test_sample.id}")
    test_ids = [item["test_id"] for item in response.json()["sample_tests"]]
    assert test_lipid.id in test_ids


@pytest.mark.asyncio
async def test_upsert_result_by_sample_path(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
):
    """
    [성공/실패] 경로의 시료로 결과를 저장하며, 없는 시료는 404 입니다.
    """
    response = await client.post(
        f"/api/v1/sample-results/{test_sample.id}", json={"test_id": test_cbc.id, "results": {"WBC": "6.1"}}
    )
    assert response.status_code == 201
    assert response.json()["sample_id"] == test_sample.id
    assert response.json()["results"] == {"WBC": "6.1"}

    response = await client.post(
        "/api/v1/sample-results/9999", json={"test_id": test_cbc.id, "results": {"WBC": "6.1"}}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_upsert_sample_result_not_found(client: AsyncClient, test_sample: lims_models.Sample):
    response = await client.post(
        "/api/v1/sample-results", json={"sample_id": 9999, "test_id": 1, "results": {}}
    )
    assert response.status_code == 404

    response = await client.post(
        "/api/v1/sample-results", json={"sample_id": test_sample.id, "test_id": 9999, "results": {}}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_read_and_update_sample_result(
    client: AsyncClient,
    test_sample: lims_models.Sample,
    test_cbc: lims_models.Test,
):
    """
    [성공/실패] 기록 전 단건 조회/수정은 404, 기록 후에는 조회/수정이 됩니다.
    """
    one_url = f"/api/v1/sample-results/{test_sample.id}/{test_cbc.id}"

    response = await client.get(one_url)
    assert response.status_code == 404

    response = await client.put(
        f"/api/v1/sample-results/{test_sample.id}", json={"test_id": test_cbc.id, "results": {"WBC": "5"}}
    )
    assert response.status_code == 404

    await client.post(
        "/api/v1/sample-results",
        json={"sample_id": test_sample.id, "test_id": test_cbc.id, "results": {"WBC": "5"}},
    )
    response = await client.put(
        f"/api/v1/sample-results/{test_sample.id}",
        json={"test_id": test_cbc.id, "results": {"WBC": "5.5", "Hemoglobin": "13"}, "notes": "checked"},
    )
    assert response.status_code == 200
    assert response.json()["results"] == {"WBC": "5.5", "Hemoglobin": "13"}
    assert response.json()["notes"] == "checked"

    response = await client.get(one_url)
    assert response.status_code == 200
    assert response.json()["results"]["WBC"] == "5.5"

    response = await client.get(f"/api/v1/sample-results/{test_sample.id}")
    assert len(response.json()) == 1

    response = await client.get("/api/v1/sample-results-by-sample", params={"sample_id": test_sample.id})
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_sample_results_by_sample_requires_query(client: AsyncClient):
    response = await client.get("/api/v1/sample-results-by-sample")
    assert response.status_code == 400

    response = await client.get("/api/v1/sample-results/9999")
    assert response.status_code == 404
