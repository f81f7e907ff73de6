"""
Unit Tests for Content Adapter
플랫폼 간 변환 / 전략 / 참조 데이터 테스트

Run: pytest tests/unit/test_content_adapter.py -v
"""

import pytest

from creatorhub.core.exceptions import UnsupportedPlatformError
from creatorhub.domain.models import Platform
from creatorhub.models.content import AdaptableField, PlatformContent
from creatorhub.services.content.adapter import (
    ContentAdapter,
    truncate_title,
    summarize_description,
    clamp_duration,
    merge_tags,
)


@pytest.fixture
def adapter():
    return ContentAdapter()


def _content(**overrides) -> PlatformContent:
    data = {
        'id': "c-1",
        'platform': "youtube",
        'title': "Short title",
        'description': "A short description.",
        'format': "tutorial",
        'duration': 600,
        'tags': ["editing"],
    }
    data.update(overrides)
    return PlatformContent(**data)


class TestFieldHelpers:
    """필드 변환 헬퍼 테스트"""

    def test_truncate_title_keeps_max_length(self):
        """max - 3 글자 + 말줄임표"""
        result = truncate_title("x" * 120, 100)
        assert len(result) == 100
        assert result.endswith("...")
        assert result[:97] == "x" * 97

    def test_summarize_description_whole_sentences(self):
        text = "First sentence. Second sentence. Third sentence that is long."
        result = summarize_description(text, 35)
        assert result == "First sentence. Second sentence."

    def test_summarize_description_first_sentence_too_long(self):
        """첫 문장이 한도를 넘으면 빈 문자열"""
        assert summarize_description("x" * 50 + ". Short.", 20) == ""

    def test_summarize_description_adds_period(self):
        assert summarize_description("No period here", 100) == "No period here."

    def test_clamp_duration(self):
        assert clamp_duration(30, 480, 900) == 480
        assert clamp_duration(2000, 480, 900) == 900
        assert clamp_duration(600, 480, 900) == 600

    def test_merge_tags_dedup_and_cap(self):
        tags = [f"tag{i}" for i in range(12)] + ["tag1"]
        merged = merge_tags(tags, ["fyp", "tag2"])
        assert len(merged) == 10
        assert len(set(merged)) == 10
        assert merged[0] == "tag0"

    def test_merge_tags_drops_long_tags(self):
        merged = merge_tags(["ok", "y" * 31], ["fyp"])
        assert merged == ["ok", "fyp"]


class TestAdapt:
    """adapt() 테스트"""

    def test_youtube_to_tiktok_long_title(self, adapter):
        """120자 제목 -> 100자"""
        adaptation = adapter.adapt(_content(title="a" * 120), "tiktok")

        title = adaptation.get(AdaptableField.TITLE)
        assert len(title) == 100
        assert title.endswith("...")
        assert adaptation.source_platform == Platform.YOUTUBE
        assert adaptation.target_platform == Platform.TIKTOK

    def test_twitch_to_youtube_short_duration(self, adapter):
        """30초 -> 480초"""
        source = _content(platform="twitch", format="stream", duration=30)
        adaptation = adapter.adapt(source, Platform.YOUTUBE)

        assert adaptation.get(AdaptableField.DURATION) == 480

    def test_unchanged_fields_are_absent(self, adapter):
        source = _content(tags=["tutorial", "howto", "youtube", "creator"], duration=600)
        adaptation = adapter.adapt(source, "twitch")

        assert AdaptableField.TITLE not in adaptation.changed_fields
        assert adaptation.get(AdaptableField.TITLE) is None
        # 600초 < twitch 최소 3600초
        assert adaptation.get(AdaptableField.DURATION) == 3600

    def test_no_duration_is_not_clamped(self, adapter):
        adaptation = adapter.adapt(_content(duration=None), "tiktok")
        assert AdaptableField.DURATION not in adaptation.changed_fields

    def test_format_mapped_to_target(self, adapter):
        adaptation = adapter.adapt(_content(format="tutorial"), "tiktok")
        assert adaptation.get(AdaptableField.FORMAT) == "quick-tip"

    def test_unknown_format_falls_back_to_primary(self, adapter):
        adaptation = adapter.adapt(_content(format="podcast"), "twitch")
        assert adaptation.get(AdaptableField.FORMAT) == "stream"

    def test_description_summarized_for_twitch(self, adapter):
        description = ". ".join(f"Sentence number {i}" for i in range(40))
        adaptation = adapter.adapt(_content(description=description), "twitch")

        summary = adaptation.get(AdaptableField.DESCRIPTION)
        assert 0 < len(summary) <= 300
        assert summary.endswith(".")

    def test_tags_capped_at_ten(self, adapter):
        source = _content(tags=[f"tag{i}" for i in range(9)])
        tags = adapter.adapt(source, "tiktok").get(AdaptableField.TAGS)

        assert len(tags) == 10
        assert len(set(tags)) == 10
        assert tags[-1] == "fyp"

    def test_suggestions_from_rule(self, adapter):
        adaptation = adapter.adapt(_content(), "tiktok")
        assert len(adaptation.suggestions) == 5
        assert "Add trending audio" in adaptation.suggestions
        assert adaptation.guidance['title'] == "Create catchy hook from first 3 seconds"

    def test_unsupported_platform(self, adapter):
        with pytest.raises(UnsupportedPlatformError):
            adapter.adapt(_content(), "instagram")

    def test_same_platform_has_no_rule(self, adapter):
        with pytest.raises(UnsupportedPlatformError):
            adapter.adapt(_content(), "youtube")


class TestStrategy:
    """strategy() 테스트"""

    def test_known_content_type(self, adapter):
        strategy = adapter.strategy("tutorial")

        platforms = [s.platform for s in strategy.strategies]
        assert platforms == [Platform.YOUTUBE, Platform.TIKTOK, Platform.TWITCH]
        assert all(s.approach for s in strategy.strategies)
        assert strategy.strategies[0].estimated_effort == "low"
        assert strategy.strategies[1].estimated_effort == "medium"

    def test_unknown_type_uses_default(self, adapter):
        unknown = adapter.strategy("cooking")
        default = adapter.strategy("entertainment")

        assert [s.approach for s in unknown.strategies] == [s.approach for s in default.strategies]

    def test_generate_strategy_carries_content_id(self, adapter):
        strategy = adapter.generate_strategy("content-9", "educational")
        assert strategy.content_id == "content-9"
        assert strategy.content_type == "educational"
