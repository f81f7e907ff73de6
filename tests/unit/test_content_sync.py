"""
Unit Tests for Content Sync
크로스 플랫폼 동기화 / 동기화 현황 테스트

Run: pytest tests/unit/test_content_sync.py -v
"""

import pytest
from unittest.mock import MagicMock

from creatorhub.core.exceptions import NotFoundError, ValidationError
from creatorhub.domain.models import Platform, ContentItem
from creatorhub.services.content.sync import ContentSyncService, format_reach, to_platform_content


@pytest.fixture
def source_item(memory_store):
    return memory_store.create_content_item(ContentItem(
        content_id="source-1",
        user_id="user-1",
        platform="youtube",
        content_type="tutorial",
        title="T" * 120,
        body={'description': "Walkthrough of the editing workflow. Covers cuts and color."},
        metadata={'duration': 720, 'tags': ["editing"]}
    ))


@pytest.fixture
def sync_service(memory_store):
    return ContentSyncService(memory_store)


class TestSyncContent:
    """sync_content_across_platforms() 테스트"""

    def test_sync_creates_adapted_items(self, sync_service, memory_store, source_item):
        report = sync_service.sync_content_across_platforms("user-1", "source-1", ["tiktok"])

        assert len(report.synced) == 1
        result = report.synced[0]
        assert result.success
        assert result.platform == "tiktok"

        created = memory_store.get_content_item(result.content_id)
        assert created.platform == "tiktok"
        assert len(created.title) == 100
        assert created.content_type == "quick-tip"
        assert created.metadata['duration'] == 180
        assert created.metadata['source_content_id'] == "source-1"
        assert "fyp" in created.metadata['tags']

    def test_unsummarizable_description_keeps_source_text(self, sync_service, memory_store):
        """문장 단위로 줄일 수 없는 긴 설명은 원본 유지"""
        description = "word " * 100
        memory_store.create_content_item(ContentItem(
            content_id="long-source",
            user_id="user-1",
            platform="youtube",
            content_type="tutorial",
            title="Long description",
            body={'description': description},
            metadata={'duration': 720}
        ))

        report = sync_service.sync_content_across_platforms("user-1", "long-source", ["twitch"])

        created = memory_store.get_content_item(report.synced[0].content_id)
        assert created.body['description'] == description

    def test_invalid_target_is_isolated(self, sync_service, source_item):
        """잘못된 대상 하나가 있어도 예외 없이 두 결과 반환"""
        report = sync_service.sync_content_across_platforms("user-1", "source-1", ["tiktok", "instagram"])

        assert len(report.synced) == 2
        assert [r.platform for r in report.synced] == ["tiktok", "instagram"]
        assert report.synced[0].success
        assert not report.synced[1].success
        assert "instagram" in report.synced[1].error
        assert report.failed == [report.synced[1]]

    def test_results_keep_input_order(self, sync_service, source_item):
        report = sync_service.sync_content_across_platforms("user-1", "source-1", ["twitch", "tiktok"])
        assert [r.platform for r in report.synced] == ["twitch", "tiktok"]

    def test_recommendations_deduplicated(self, sync_service, source_item):
        report = sync_service.sync_content_across_platforms(
            "user-1", "source-1", ["tiktok", "tiktok", "twitch"]
        )
        assert len(report.recommendations) == len(set(report.recommendations))
        assert len(report.recommendations) == 10

    def test_same_platform_target_fails_alone(self, sync_service, source_item):
        report = sync_service.sync_content_across_platforms("user-1", "source-1", ["youtube", "twitch"])
        assert [r.success for r in report.synced] == [False, True]

    def test_empty_targets_rejected(self, sync_service, source_item):
        with pytest.raises(ValidationError):
            sync_service.sync_content_across_platforms("user-1", "source-1", [])

    def test_missing_source(self, sync_service):
        with pytest.raises(NotFoundError):
            sync_service.sync_content_across_platforms("user-1", "missing", ["tiktok"])

    def test_store_failure_on_create_is_isolated(self, source_item):
        store = MagicMock()
        store.get_content_item.return_value = source_item
        store.create_content_item.side_effect = RuntimeError("write failed")

        report = ContentSyncService(store).sync_content_across_platforms("user-1", "source-1", ["tiktok"])

        assert not report.synced[0].success
        assert report.synced[0].error == "write failed"


class TestSyncStatus:
    """get_content_sync_status() 테스트"""

    def test_status_counts_and_suggestions(self, sync_service, source_item):
        status = sync_service.get_content_sync_status("user-1")

        counts = {s.platform: s.content_count for s in status.platforms}
        assert counts == {Platform.YOUTUBE: 1, Platform.TIKTOK: 0, Platform.TWITCH: 0}

        pairs = [(s.source, s.target) for s in status.suggestions]
        assert pairs == [(Platform.YOUTUBE, Platform.TIKTOK), (Platform.YOUTUBE, Platform.TWITCH)]
        assert status.suggestions[0].estimated_reach == "2K"

    def test_status_empty_user(self, sync_service):
        status = sync_service.get_content_sync_status("nobody")
        assert all(s.content_count == 0 for s in status.platforms)
        assert status.suggestions == []


class TestHelpers:
    """헬퍼 테스트"""

    def test_format_reach(self):
        assert format_reach(2_500_000) == "2.5M"
        assert format_reach(25_000) == "25K"
        assert format_reach(800) == "800"

    def test_to_platform_content(self, source_item):
        content = to_platform_content(source_item)
        assert content.duration == 720
        assert content.tags == ["editing"]
        assert content.description.startswith("Walkthrough")
