"""
Recommendation Rules
계산된 지표로부터 개선 추천 생성

규칙은 서로 독립적이며 테이블 순서대로 평가됨
"""

from dataclasses import dataclass
from typing import List, Optional, Callable

from creatorhub.domain.models import Platform
from creatorhub.models.analytics import (
    ContentMetrics,
    AudienceMetrics,
    EngagementMetrics,
    GrowthMetrics,
    TrendAnalysis,
    Recommendation,
    ExpectedResult,
)

TARGET_WEEKLY_POSTS = 4
TARGET_CTR = 5.0
TARGET_COMPLETION_RATE = 50.0


@dataclass
class RecommendationInputs:
    """추천 규칙 입력 (계산 완료된 카테고리)"""
    metrics: ContentMetrics
    platform_metrics: list
    audience: AudienceMetrics
    engagement: EngagementMetrics
    growth: GrowthMetrics
    trends: TrendAnalysis

    def platform(self, platform: Platform):
        for entry in self.platform_metrics:
            if entry.platform == platform:
                return entry
        return None


# ============================================================
# Rules
# ============================================================

def publishing_frequency_rule(inputs: RecommendationInputs) -> Optional[Recommendation]:
    frequency = inputs.metrics.publishing_frequency
    if frequency >= TARGET_WEEKLY_POSTS:
        return None

    views = inputs.growth.projected_growth.get('views')
    current_views = views.current if views else 0.0

    return Recommendation(
        id="publishing-frequency",
        category="content",
        title="Increase Publishing Frequency",
        description=(
            f"You publish {frequency} posts per week, below the optimal rate. "
            "Aim for 4-5 posts per week."
        ),
        impact="high",
        effort="medium",
        priority=9,
        action_items=[
            "Create a content calendar",
            "Batch produce content on weekends",
            "Use templates to speed up production",
        ],
        expected_results=[
            ExpectedResult(
                metric="Views",
                current_value=current_views,
                expected_value=round(current_views * 1.4, 2),
                timeframe=30
            )
        ]
    )


def publishing_time_rule(inputs: RecommendationInputs) -> Optional[Recommendation]:
    peak = inputs.engagement.peak_hour()
    if peak is None:
        return None

    hour = peak.hour
    rate = inputs.engagement.engagement_rate

    return Recommendation(
        id="publishing-time",
        category="timing",
        title="Optimize Publishing Times",
        description=f"Your audience is most active at {hour}:00. Schedule posts around this time.",
        impact="medium",
        effort="low",
        priority=7,
        action_items=[
            f"Schedule posts between {(hour - 1) % 24}:00 and {(hour + 1) % 24}:00",
            "Use platform scheduling tools",
            "Test different times for different content types",
        ],
        expected_results=[
            ExpectedResult(
                metric="Engagement Rate",
                current_value=rate,
                expected_value=round(rate * 1.2, 2),
                timeframe=14
            )
        ]
    )


def youtube_ctr_rule(inputs: RecommendationInputs) -> Optional[Recommendation]:
    youtube = inputs.platform(Platform.YOUTUBE)
    if youtube is None or youtube.impressions <= 0 or youtube.click_through_rate >= TARGET_CTR:
        return None

    return Recommendation(
        id="youtube-thumbnails",
        category="platform",
        title="Improve YouTube Thumbnails",
        description="Your CTR is below average. Better thumbnails could significantly increase views.",
        impact="high",
        effort="low",
        priority=8,
        action_items=[
            "Use bright, contrasting colors",
            "Include faces with expressions",
            "Add compelling text overlays",
            "A/B test different thumbnail styles",
        ],
        expected_results=[
            ExpectedResult(
                metric="Click-Through Rate",
                current_value=youtube.click_through_rate,
                expected_value=6.5,
                timeframe=21
            )
        ]
    )


def tiktok_completion_rule(inputs: RecommendationInputs) -> Optional[Recommendation]:
    tiktok = inputs.platform(Platform.TIKTOK)
    if tiktok is None or tiktok.views <= 0 or tiktok.completion_rate >= TARGET_COMPLETION_RATE:
        return None

    return Recommendation(
        id="tiktok-completion",
        category="platform",
        title="Hook Viewers Earlier on TikTok",
        description="Less than half of your viewers finish your videos. Stronger openings keep them watching.",
        impact="medium",
        effort="medium",
        priority=6,
        action_items=[
            "Show the payoff in the first 3 seconds",
            "Cut intros and dead air",
            "Test shorter edits of your best videos",
        ],
        expected_results=[
            ExpectedResult(
                metric="Completion Rate",
                current_value=tiktok.completion_rate,
                expected_value=60.0,
                timeframe=21
            )
        ]
    )


def underperforming_content_rule(inputs: RecommendationInputs) -> Optional[Recommendation]:
    underperforming = inputs.metrics.underperforming_content
    if not underperforming:
        return None

    quality = inputs.metrics.content_quality_score

    return Recommendation(
        id="underperforming-content",
        category="content",
        title="Rework Underperforming Content",
        description=f"{len(underperforming)} posts scored below 40 this period.",
        impact="medium",
        effort="medium",
        priority=5,
        action_items=[
            f"Review what separates \"{underperforming[0].title}\" from your top posts",
            "Refresh titles and thumbnails on weak posts",
            "Repurpose strong segments into new formats",
        ],
        expected_results=[
            ExpectedResult(
                metric="Content Quality Score",
                current_value=quality,
                expected_value=min(100.0, round(quality + 10, 2)),
                timeframe=30
            )
        ]
    )


def rising_trend_rule(inputs: RecommendationInputs) -> Optional[Recommendation]:
    rising = [t for t in inputs.trends.content_trends if t.trend == "rising"]
    if not rising:
        return None

    types = ", ".join(t.type for t in rising)
    frequency = inputs.metrics.publishing_frequency

    return Recommendation(
        id="rising-formats",
        category="content",
        title="Lean Into Rising Formats",
        description=f"{types} content is gaining momentum with your audience.",
        impact="medium",
        effort="low",
        priority=4,
        action_items=[t.recommendation for t in rising],
        expected_results=[
            ExpectedResult(
                metric="Publishing Frequency",
                current_value=frequency,
                expected_value=round(frequency + 1, 2),
                timeframe=14
            )
        ]
    )


RULES: List[Callable[[RecommendationInputs], Optional[Recommendation]]] = [
    publishing_frequency_rule,
    publishing_time_rule,
    youtube_ctr_rule,
    tiktok_completion_rule,
    underperforming_content_rule,
    rising_trend_rule,
]


def generate_recommendations(inputs: RecommendationInputs) -> List[Recommendation]:
    """규칙 테이블 순서대로 평가하여 해당되는 추천 반환"""
    recommendations = []
    for rule in RULES:
        recommendation = rule(inputs)
        if recommendation is not None:
            recommendations.append(recommendation)
    return recommendations
