"""
Competitor Analysis
추적 중인 경쟁 크리에이터 대비 벤치마크

추세는 경쟁자 평균 대비 ±5% 고정 비교 (과거 스냅샷 비교 아님)
"""

from typing import Dict, List

from creatorhub.domain.models import CompetitorRecord, TrendDirection
from creatorhub.models.analytics import (
    CompetitorSummary,
    BenchmarkComparison,
    MarketPosition,
    CompetitorAnalysis,
)

TREND_BAND = 0.05

# 벤치마크 키 -> CompetitorRecord 필드
BENCHMARK_FIELDS = {
    'follower_growth': 'follower_growth_rate',
    'engagement_rate': 'engagement_rate',
    'content_frequency': 'content_frequency',
    'content_quality': 'content_quality',
}

BENCHMARK_LABELS = {
    'follower_growth': "Follower growth",
    'engagement_rate': "Engagement rate",
    'content_frequency': "Publishing frequency",
    'content_quality': "Content quality",
}


def percentile(yours: float, values: List[float]) -> float:
    """내 값 이하인 경쟁자 비율 (경쟁자 없으면 100)"""
    if not values:
        return 100.0
    return round(sum(1 for v in values if v <= yours) / len(values) * 100, 1)


def compare(yours: float, average: float, band: float = TREND_BAND) -> TrendDirection:
    if average == 0:
        return TrendDirection.IMPROVING if yours > 0 else TrendDirection.STABLE
    ratio = (yours - average) / abs(average)
    if ratio > band:
        return TrendDirection.IMPROVING
    if ratio < -band:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


def benchmark(yours: float, values: List[float]) -> BenchmarkComparison:
    average = sum(values) / len(values) if values else 0.0
    return BenchmarkComparison(
        your_value=round(yours, 2),
        competitor_average=round(average, 2),
        top_performer=round(max(values), 2) if values else round(yours, 2),
        percentile=percentile(yours, values),
        trend=compare(yours, average)
    )


def analyze_competitors(
    competitors: List[CompetitorRecord],
    yours: Dict[str, float],
    followers: int
) -> CompetitorAnalysis:
    """
    경쟁자 분석

    Args:
        competitors: 추적 중인 경쟁자
        yours: BENCHMARK_FIELDS 키별 내 지표
        followers: 내 총 팔로워 (시장 위치 계산)
    """
    benchmarks = {
        key: benchmark(yours.get(key, 0.0), [getattr(c, field) for c in competitors])
        for key, field in BENCHMARK_FIELDS.items()
    }

    advantages = []
    improvements = []
    for key, comparison in benchmarks.items():
        if comparison.trend == TrendDirection.IMPROVING:
            advantages.append(f"{BENCHMARK_LABELS[key]} above competitor average")
        elif comparison.trend == TrendDirection.DECLINING:
            improvements.append(f"{BENCHMARK_LABELS[key]} below competitor average")

    rank = 1 + sum(1 for c in competitors if c.followers > followers)

    return CompetitorAnalysis(
        competitors=[
            CompetitorSummary(
                id=c.competitor_id,
                name=c.name,
                platform=c.platform,
                followers=c.followers,
                engagement_rate=c.engagement_rate,
                content_frequency=c.content_frequency,
                estimated_revenue=c.estimated_revenue,
                strengths=list(c.strengths),
                weaknesses=list(c.weaknesses)
            )
            for c in competitors
        ],
        market_position=MarketPosition(
            rank=rank,
            total_competitors=len(competitors),
            percentile=percentile(followers, [c.followers for c in competitors])
        ),
        competitive_advantages=advantages,
        improvement_areas=improvements,
        benchmarks=benchmarks
    )
