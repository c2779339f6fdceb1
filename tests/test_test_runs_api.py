"""
API tests for test run endpoints.
"""
import time

import pytest
from fastapi.testclient import TestClient

from conftest import ScriptedExecutor, node_payload
from workflow_builder.main import create_app


def wait_for_terminal(client: TestClient, run_id: str, timeout: float = 5.0) -> dict:
    """Poll a run until it leaves the running status."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        run = client.get(f"/api/tests/{run_id}").json()
        if run["status"] != "running":
            return run
        time.sleep(0.02)
    raise AssertionError(f"Test run {run_id} did not finish within {timeout}s")


@pytest.fixture
def slow_client(test_settings):
    """Client whose executor takes 0.2s per node, long enough to observe a running test."""
    app = create_app(config=test_settings, executor=ScriptedExecutor(delay=0.2))
    with TestClient(app) as c:
        yield c


class TestStartTestRun:
    """Tests for POST /api/workflows/{id}/test."""

    def test_sample_workflow_run(self, client: TestClient):
        """Starts running with every node pending, then finishes."""
        response = client.post("/api/workflows/wf-sample/test")

        assert response.status_code == 201
        run = response.json()
        assert run["id"].startswith("run-")
        assert run["workflowId"] == "wf-sample"
        assert run["status"] == "running"
        assert [r["nodeId"] for r in run["results"]] == ["node-1", "node-2", "node-3"]
        assert all(r["status"] == "pending" for r in run["results"])
        assert "completedAt" not in run

        final = wait_for_terminal(client, run["id"])
        assert final["status"] == "completed"
        assert final["completedAt"]
        assert all(r["status"] == "success" for r in final["results"])
        assert final["results"][0]["output"] == {"data": "Sample output data"}

    def test_failing_node_halts_run(self, test_settings):
        """Nodes after the failure are never executed."""
        executor = ScriptedExecutor(fail={"node-2"})
        with TestClient(create_app(config=test_settings, executor=executor)) as client:
            run_id = client.post("/api/workflows/wf-sample/test").json()["id"]
            final = wait_for_terminal(client, run_id)

        assert final["status"] == "failed"
        assert [r["status"] for r in final["results"]] == ["success", "error", "pending"]
        assert final["results"][1]["error"] == "Simulated error for testing"
        assert executor.calls == ["node-1", "node-2"]

    def test_unknown_workflow(self, client: TestClient):
        response = client.post("/api/workflows/wf-missing/test")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_empty_workflow(self, client: TestClient):
        """A workflow without nodes cannot be tested and no run is recorded."""
        workflow_id = client.post("/api/workflows", json={"name": "Empty"}).json()["id"]

        response = client.post(f"/api/workflows/{workflow_id}/test")

        assert response.status_code == 400
        assert response.json()["error"] == "no nodes to run"
        assert client.get(f"/api/workflows/{workflow_id}/tests").json() == []

    def test_concurrent_start_rejected(self, slow_client: TestClient):
        """Only one test per workflow may run at a time."""
        first = slow_client.post("/api/workflows/wf-sample/test")
        second = slow_client.post("/api/workflows/wf-sample/test")

        assert first.status_code == 201
        assert second.status_code == 409
        assert first.json()["id"] in second.json()["error"]

        wait_for_terminal(slow_client, first.json()["id"])
        third = slow_client.post("/api/workflows/wf-sample/test")
        assert third.status_code == 201

    def test_different_workflows_run_concurrently(self, slow_client: TestClient):
        other = slow_client.post(
            "/api/workflows", json={"name": "Other", "nodes": [node_payload("node-1")]}
        ).json()

        first = slow_client.post("/api/workflows/wf-sample/test")
        second = slow_client.post(f"/api/workflows/{other['id']}/test")

        assert first.status_code == 201
        assert second.status_code == 201


class TestReadTestRuns:
    """Tests for listing and fetching runs."""

    def test_list_runs_for_workflow(self, client: TestClient):
        first = client.post("/api/workflows/wf-sample/test").json()
        wait_for_terminal(client, first["id"])
        second = client.post("/api/workflows/wf-sample/test").json()
        wait_for_terminal(client, second["id"])

        response = client.get("/api/workflows/wf-sample/tests")

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [first["id"], second["id"]]

    def test_list_runs_for_unknown_workflow_is_empty(self, client: TestClient):
        response = client.get("/api/workflows/wf-missing/tests")

        assert response.status_code == 200
        assert response.json() == []

    def test_get_unknown_run(self, client: TestClient):
        response = client.get("/api/tests/run-missing")

        assert response.status_code == 404


class TestCancelTestRun:
    """Tests for POST /api/tests/{id}/cancel."""

    def test_cancel_running_test(self, slow_client: TestClient):
        """The run stops at the next node boundary."""
        run_id = slow_client.post("/api/workflows/wf-sample/test").json()["id"]

        response = slow_client.post(f"/api/tests/{run_id}/cancel")

        assert response.status_code == 200
        final = wait_for_terminal(slow_client, run_id)
        assert final["status"] == "cancelled"
        assert final["completedAt"]
        assert final["results"][-1]["status"] == "pending"
        assert all(r["status"] != "running" for r in final["results"])

    def test_cancel_finished_run(self, client: TestClient):
        run_id = client.post("/api/workflows/wf-sample/test").json()["id"]
        wait_for_terminal(client, run_id)

        response = client.post(f"/api/tests/{run_id}/cancel")

        assert response.status_code == 409

    def test_cancel_unknown_run(self, client: TestClient):
        assert client.post("/api/tests/run-missing/cancel").status_code == 404


class TestStreamTestRun:
    """Tests for GET /api/tests/{id}/stream."""

    def test_finished_run_streams_snapshot(self, client: TestClient):
        run_id = client.post("/api/workflows/wf-sample/test").json()["id"]
        wait_for_terminal(client, run_id)

        response = client.get(f"/api/tests/{run_id}/stream")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert "event: snapshot" in response.text
        assert run_id in response.text

    def test_stream_unknown_run(self, client: TestClient):
        assert client.get("/api/tests/run-missing/stream").status_code == 404
