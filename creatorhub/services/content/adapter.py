"""
Content Adapter
플랫폼 간 콘텐츠 변환 및 크로스 플랫폼 전략
"""

import logging
from typing import List, Optional, Union

from creatorhub.domain.models import Platform
from creatorhub.models.content import (
    AdaptableField,
    PlatformContent,
    FieldChange,
    ContentAdaptation,
    PlatformStrategy,
    CrossPlatformStrategy,
)
from creatorhub.services.content.catalog import PlatformCatalog, load_catalog

logger = logging.getLogger(__name__)

ELLIPSIS = "..."
MAX_TAG_LENGTH = 30
MAX_TAGS = 10
SENTENCE_SEPARATOR = ". "


# ============================================================
# Field Helpers
# ============================================================

def truncate_title(title: str, max_length: int) -> str:
    """max_length - 3 글자 + 말줄임표"""
    return title[:max_length - len(ELLIPSIS)] + ELLIPSIS


def summarize_description(description: str, max_length: int) -> str:
    """
    문장 단위 요약

    ". " 기준으로 나눈 문장을 앞에서부터 한도 내에서 이어붙인다.
    문장 중간에서 자르지 않으므로 첫 문장이 한도를 넘으면 빈 문자열
    """
    parts: List[str] = []
    length = 0

    for sentence in description.split(SENTENCE_SEPARATOR):
        sentence = sentence.strip()
        if not sentence:
            continue
        if not sentence.endswith(('.', '!', '?')):
            sentence += "."

        added = len(sentence) + (1 if parts else 0)
        if length + added > max_length:
            break

        parts.append(sentence)
        length += added

    return " ".join(parts)


def clamp_duration(duration: int, minimum: int, maximum: int) -> int:
    if duration < minimum:
        return minimum
    if duration > maximum:
        return maximum
    return duration


def merge_tags(tags: List[str], platform_tags: List[str]) -> List[str]:
    """길이 필터 + 플랫폼 해시태그, 중복 제거 후 최대 10개"""
    merged: List[str] = []
    for tag in list(tags) + list(platform_tags):
        if not tag or len(tag) > MAX_TAG_LENGTH or tag in merged:
            continue
        merged.append(tag)
        if len(merged) == MAX_TAGS:
            break
    return merged


# ============================================================
# Adapter
# ============================================================

class ContentAdapter:
    """
    플랫폼 간 콘텐츠 변환기

    Usage:
        adapter = ContentAdapter()
        adaptation = adapter.adapt(content, "tiktok")
        adaptation.get(AdaptableField.TITLE)
    """

    def __init__(self, catalog: Optional[PlatformCatalog] = None):
        self.catalog = catalog or load_catalog()

    def adapt(
        self,
        source: PlatformContent,
        target: Union[Platform, str]
    ) -> ContentAdaptation:
        """
        대상 플랫폼 제약에 맞게 변환

        Args:
            source: 원본 콘텐츠
            target: 대상 플랫폼

        Returns:
            변경이 필요한 필드만 담은 ContentAdaptation

        Raises:
            UnsupportedPlatformError: 지원하지 않는 플랫폼 또는 규칙 없음
        """
        source_platform = Platform.from_string(source.platform)
        target_platform = Platform.from_string(target)

        rule = self.catalog.rule_for(source_platform, target_platform)
        constraints = self.catalog.constraint_for(target_platform)
        changes: List[FieldChange] = []

        if len(source.title) > constraints.title_max_length:
            changes.append(FieldChange(
                field=AdaptableField.TITLE,
                value=truncate_title(source.title, constraints.title_max_length)
            ))

        if len(source.description) > constraints.description_max_length:
            changes.append(FieldChange(
                field=AdaptableField.DESCRIPTION,
                value=summarize_description(source.description, constraints.description_max_length)
            ))

        if source.format not in constraints.formats:
            changes.append(FieldChange(
                field=AdaptableField.FORMAT,
                value=self.suggest_format(source.format, target_platform)
            ))

        if source.duration is not None:
            duration = clamp_duration(source.duration, constraints.min_duration, constraints.max_duration)
            if duration != source.duration:
                changes.append(FieldChange(field=AdaptableField.DURATION, value=duration))

        tags = merge_tags(source.tags, self.catalog.hashtags.get(target_platform, []))
        if tags != list(source.tags):
            changes.append(FieldChange(field=AdaptableField.TAGS, value=tags))

        logger.debug(
            f"[ContentAdapter] {source_platform.value} -> {target_platform.value}: "
            f"{[c.field.value for c in changes]}"
        )

        return ContentAdaptation(
            source_platform=source_platform,
            target_platform=target_platform,
            changes=changes,
            suggestions=list(rule.suggestions),
            guidance=rule.guidance()
        )

    def suggest_format(self, current_format: str, target: Platform) -> str:
        """대상 플랫폼 첫 포맷 기준 변환표 조회, 없으면 첫 포맷"""
        formats = self.catalog.constraint_for(target).formats
        primary = formats[0]
        return self.catalog.format_map.get(current_format, {}).get(primary, primary)

    def suggestions_for(self, source: Platform, target: Platform) -> List[str]:
        return list(self.catalog.rule_for(source, target).suggestions)

    def strategy(self, content_type: str, content_id: Optional[str] = None) -> CrossPlatformStrategy:
        """콘텐츠 유형별 플랫폼 전략 (미정의 유형은 entertainment)"""
        profile = self.catalog.strategy_profile(content_type)

        return CrossPlatformStrategy(
            content_id=content_id,
            content_type=content_type,
            strategies=[
                PlatformStrategy(platform=platform, **entry)
                for platform, entry in profile.items()
            ]
        )

    def generate_strategy(self, content_id: str, content_type: str) -> CrossPlatformStrategy:
        return self.strategy(content_type, content_id=content_id)
