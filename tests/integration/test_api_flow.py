"""
Integration Tests for API Flow
샘플 데이터 위에서 HTTP 엔드포인트 전체 흐름 테스트

Run: pytest tests/integration/test_api_flow.py -v
"""

import pytest

pytestmark = pytest.mark.integration


class TestSystemEndpoints:
    """시스템 엔드포인트"""

    def test_root(self, api_client):
        response = api_client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, api_client):
        body = api_client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["services"]["storage"]["backend"] == "memory"
        assert body["services"]["cache"]["status"] == "unavailable"


class TestAnalyticsFlow:
    """분석 스냅샷 / 내보내기"""

    def test_post_analytics_twice_keeps_snapshot(self, api_client):
        body = {"start": "2024-03-01T00:00:00", "end": "2024-03-15T12:00:00"}

        first = api_client.post("/api/v1/analytics/demo-user", json=body)
        second = api_client.post("/api/v1/analytics/demo-user", json=body)

        assert first.status_code == 200
        assert first.json()["id"] == second.json()["id"]
        snapshot = first.json()
        assert snapshot["competitor_analysis"] is not None
        assert {m["platform"] for m in snapshot["platform_metrics"]} == {"youtube", "tiktok", "twitch"}
        assert len(snapshot["growth_metrics"]["follower_growth"]) == 15

    def test_get_analytics_with_query(self, api_client):
        response = api_client.get(
            "/api/v1/analytics/demo-user",
            params={"start": "2024-03-10T00:00:00", "end": "2024-03-10T00:00:00"}
        )
        assert response.status_code == 200
        assert len(response.json()["growth_metrics"]["follower_growth"]) == 1

    def test_default_period_reuses_snapshot(self, api_client):
        """기본 기간은 일 단위로 고정되어 반복 조회 시 같은 스냅샷"""
        ids = {api_client.get("/api/v1/analytics/demo-user").json()["id"] for _ in range(3)}
        assert len(ids) == 1

        period = api_client.get("/api/v1/analytics/demo-user").json()["period"]
        assert period["start"].endswith("T00:00:00")
        assert period["end"].endswith("T23:59:59.999999")

    def test_track_event(self, api_client):
        response = api_client.post(
            "/api/v1/analytics/demo-user/events",
            json={"event_type": "view", "event_data": {"path": "/dashboard"}}
        )
        assert response.status_code == 201

        body = response.json()
        assert body["event_id"].startswith("evt_")
        assert body["event_data"] == {"path": "/dashboard"}

    def test_track_event_requires_type(self, api_client):
        response = api_client.post("/api/v1/analytics/demo-user/events", json={"event_type": "  "})
        assert response.status_code == 422

    def test_invalid_period_is_422(self, api_client):
        response = api_client.post(
            "/api/v1/analytics/demo-user",
            json={"start": "2024-03-15T00:00:00", "end": "2024-03-01T00:00:00"}
        )
        assert response.status_code == 422
        assert response.json()["type"] == "validation"

    def test_unknown_user_is_404(self, api_client):
        response = api_client.post(
            "/api/v1/analytics/ghost",
            json={"start": "2024-03-01T00:00:00", "end": "2024-03-02T00:00:00"}
        )
        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"

    def test_export_csv(self, api_client):
        response = api_client.post(
            "/api/v1/analytics/demo-user/export",
            json={"start": "2024-03-01T00:00:00", "end": "2024-03-15T00:00:00", "format": "csv", "sections": ["metrics"]}
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        assert response.text.startswith("field,value")

    def test_export_pdf_without_renderer(self, api_client):
        response = api_client.post(
            "/api/v1/analytics/demo-user/export",
            json={"start": "2024-03-01T00:00:00", "end": "2024-03-15T00:00:00", "format": "pdf"}
        )
        assert response.status_code == 422


class TestProgressFlow:
    """진행률 분석"""

    def test_progress(self, api_client):
        response = api_client.get("/api/v1/progress-analytics/demo-user")
        assert response.status_code == 200

        body = response.json()
        assert body["overview"]["total_tasks_completed"] > 0
        assert body["predictions"]["current_pace"] in {"ahead", "on-track", "behind"}
        assert len(body["platform_stats"]) == 3

    def test_prediction(self, api_client):
        response = api_client.get("/api/v1/progress-analytics/demo-user/prediction")
        assert response.status_code == 200
        body = response.json()
        assert 0 <= body["days_remaining"] <= 90
        assert body["tasks_remaining"] >= 0

    def test_progress_refresh(self, api_client):
        response = api_client.get("/api/v1/progress-analytics/demo-user", params={"refresh": "true"})
        assert response.status_code == 200

    def test_progress_for_new_user(self, api_client):
        body = api_client.get("/api/v1/progress-analytics/newcomer").json()
        assert body["overview"]["current_streak"] == 0
        assert body["overview"]["predicted_completion_date"] is None


class TestContentFlow:
    """콘텐츠 변환 / 동기화"""

    def test_adapt(self, api_client):
        response = api_client.post("/api/v1/content/adapt", json={
            "source": {"platform": "youtube", "title": "x" * 120, "format": "tutorial"},
            "target_platform": "tiktok"
        })
        assert response.status_code == 200

        changes = {c["field"]: c["value"] for c in response.json()["changes"]}
        assert len(changes["title"]) == 100
        assert changes["format"] == "quick-tip"

    def test_adapt_unsupported_platform_is_400(self, api_client):
        response = api_client.post("/api/v1/content/adapt", json={
            "source": {"platform": "youtube", "title": "Hello", "format": "tutorial"},
            "target_platform": "myspace"
        })
        assert response.status_code == 400
        assert response.json()["type"] == "unsupported_platform"

    def test_strategy(self, api_client):
        body = api_client.get("/api/v1/content/strategy", params={"content_type": "tutorial"}).json()
        assert [s["platform"] for s in body["strategies"]] == ["youtube", "tiktok", "twitch"]

    def test_sync_then_status(self, api_client):
        response = api_client.post("/api/v1/content/sync", json={
            "user_id": "demo-user",
            "source_content_id": "demo-user-source-1",
            "target_platforms": ["tiktok", "instagram"]
        })
        assert response.status_code == 200
        synced = response.json()["synced"]
        assert [s["success"] for s in synced] == [True, False]

        status = api_client.get("/api/v1/content/sync-status/demo-user").json()
        counts = {p["platform"]: p["content_count"] for p in status["platforms"]}
        assert counts == {"youtube": 1, "tiktok": 1, "twitch": 0}

    def test_sync_empty_targets_is_422(self, api_client):
        response = api_client.post("/api/v1/content/sync", json={
            "user_id": "demo-user",
            "source_content_id": "demo-user-source-1",
            "target_platforms": []
        })
        assert response.status_code == 422

    def test_sync_missing_source_is_404(self, api_client):
        response = api_client.post("/api/v1/content/sync", json={
            "user_id": "demo-user",
            "source_content_id": "missing",
            "target_platforms": ["tiktok"]
        })
        assert response.status_code == 404
