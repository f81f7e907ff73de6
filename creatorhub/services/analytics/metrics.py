"""
Analytics Metric Builders
카테고리별 지표 계산 (입력 레코드만 사용하는 순수 함수)

- content / platform / audience / engagement / growth / trends
"""

import math
import statistics
from collections import Counter, OrderedDict
from datetime import date, timedelta
from typing import List, Dict, Optional, Callable, Iterable

from creatorhub.domain.models import (
    Platform,
    ContentStatus,
    ContentPerformance,
    PlatformAccount,
    DailyMetric,
)
from creatorhub.models.analytics import (
    AnalyticsPeriod,
    ContentPerformanceSummary,
    ContentMetrics,
    ChannelAnalytics,
    YouTubeMetrics,
    TikTokMetrics,
    TwitchMetrics,
    Demographics,
    AudienceMetrics,
    EngagementByType,
    TimeBasedMetric,
    DayBasedMetric,
    EngagementMetrics,
    TimeSeriesPoint,
    ProjectedMetric,
    MilestoneEta,
    GrowthMetrics,
    ContentTrend,
    PlatformTrend,
    Opportunity,
    TrendAnalysis,
)

TOP_CONTENT_LIMIT = 5
UNDERPERFORMING_SCORE = 40.0
VIRAL_MULTIPLIER = 10
TREND_THRESHOLD = 10.0  # %
OPPORTUNITY_LIFT = 1.2

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
DEMOGRAPHIC_DIMENSIONS = ("age", "gender", "location", "interests", "devices")

# 예측 신뢰도 (휴리스틱 상수, 분산 기반 아님)
PROJECTION_CONFIDENCE = {
    'followers': 85,
    'views': 78,
    'engagement': 82,
    'revenue': 72,
}

FOLLOWER_MILESTONES = [
    (100, "100 Followers"),
    (1_000, "1K Followers"),
    (10_000, "10K Followers"),
    (100_000, "100K Followers"),
    (1_000_000, "1M Followers"),
    (10_000_000, "10M Followers"),
]

SHORT_TYPES = {"short", "shorts"}
LIVE_TYPES = {"live", "stream"}
COMMUNITY_TYPES = {"community", "post"}


# ============================================================
# Helpers
# ============================================================

def _mean(values: Iterable[float]) -> float:
    values = list(values)
    return sum(values) / len(values) if values else 0.0


def _pct(part: float, whole: float) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def summarize(content: ContentPerformance) -> ContentPerformanceSummary:
    return ContentPerformanceSummary(
        id=content.content_id,
        title=content.title,
        type=content.content_type,
        platform=content.platform,
        published_at=content.activity_time,
        views=content.views,
        engagement=content.engagement,
        shares=content.shares,
        revenue=content.revenue,
        performance_score=content.performance_score
    )


def _published(content: List[ContentPerformance]) -> List[ContentPerformance]:
    return [c for c in content if c.status == ContentStatus.PUBLISHED]


def _top(content: List[ContentPerformance], limit: int = TOP_CONTENT_LIMIT) -> List[ContentPerformanceSummary]:
    ranked = sorted(content, key=lambda c: c.performance_score, reverse=True)
    return [summarize(c) for c in ranked[:limit]]


def _follower_growth(daily: List[DailyMetric]) -> int:
    if not daily:
        return 0
    return daily[-1].followers - daily[0].followers


def _extra(daily: List[DailyMetric], key: str) -> List[float]:
    return [d.extra[key] for d in daily if key in d.extra]


# ============================================================
# Content
# ============================================================

def build_content_metrics(content: List[ContentPerformance], period_days: int) -> ContentMetrics:
    """콘텐츠 지표"""
    published = _published(content)
    scores = [c.performance_score for c in published]
    hours = [c.production_hours for c in content if c.production_hours is not None]

    underperforming = sorted(
        (c for c in published if c.performance_score < UNDERPERFORMING_SCORE),
        key=lambda c: c.performance_score
    )

    return ContentMetrics(
        total_content=len(content),
        published_content=len(published),
        scheduled_content=sum(1 for c in content if c.status == ContentStatus.SCHEDULED),
        content_by_type=dict(Counter(c.content_type for c in content)),
        content_by_platform=dict(Counter(c.platform.value for c in content)),
        top_performing_content=_top(published),
        underperforming_content=[summarize(c) for c in underperforming[:TOP_CONTENT_LIMIT]],
        average_production_time=round(_mean(hours), 2),
        publishing_frequency=round(len(published) * 7 / period_days, 2) if period_days else 0.0,
        content_quality_score=round(_mean(scores), 2)
    )


# ============================================================
# Platform
# ============================================================

def _youtube(account: PlatformAccount, content: List[ContentPerformance], daily: List[DailyMetric]) -> YouTubeMetrics:
    published = _published(content)
    views = sum(c.views for c in published)
    watch_time = sum(c.watch_time_minutes for c in published)
    impressions = sum(c.impressions for c in published)
    types = [c.content_type.lower() for c in published]

    return YouTubeMetrics(
        subscribers=account.followers,
        subscriber_growth=_follower_growth(daily),
        views=views,
        watch_time=round(watch_time, 2),
        average_view_duration=round(watch_time * 60 / views, 2) if views else 0.0,
        impressions=impressions,
        click_through_rate=_pct(views, impressions),
        likes=sum(c.likes for c in published),
        comments=sum(c.comments for c in published),
        shares=sum(c.shares for c in published),
        estimated_revenue=round(sum(c.revenue or 0 for c in published), 2),
        top_videos=_top(published),
        channel_analytics=ChannelAnalytics(
            videos_published=sum(1 for t in types if t not in SHORT_TYPES | LIVE_TYPES | COMMUNITY_TYPES),
            shorts_published=sum(1 for t in types if t in SHORT_TYPES),
            lives_hosted=sum(1 for t in types if t in LIVE_TYPES),
            community_posts=sum(1 for t in types if t in COMMUNITY_TYPES)
        )
    )


def _tiktok(account: PlatformAccount, content: List[ContentPerformance], daily: List[DailyMetric]) -> TikTokMetrics:
    published = _published(content)
    views = sum(c.views for c in published)

    watch_times = _extra(daily, 'average_watch_time')
    if watch_times:
        average_watch_time = _mean(watch_times)
    else:
        average_watch_time = sum(c.watch_time_minutes for c in published) * 60 / views if views else 0.0

    median_views = statistics.median([c.views for c in published]) if published else 0
    viral = [c for c in published if median_views > 0 and c.views >= VIRAL_MULTIPLIER * median_views]

    return TikTokMetrics(
        followers=account.followers,
        follower_growth=_follower_growth(daily),
        views=views,
        likes=sum(c.likes for c in published),
        comments=sum(c.comments for c in published),
        shares=sum(c.shares for c in published),
        average_watch_time=round(average_watch_time, 2),
        completion_rate=round(_mean(_extra(daily, 'completion_rate')), 2),
        viral_videos=_top(viral, limit=len(viral)),
        hashtag_performance=[]
    )


def _twitch(account: PlatformAccount, content: List[ContentPerformance], daily: List[DailyMetric]) -> TwitchMetrics:
    peaks = _extra(daily, 'peak_viewers')
    return TwitchMetrics(
        followers=account.followers,
        subscribers=account.paid_subscribers,
        average_viewers=round(_mean(_extra(daily, 'average_viewers')), 2),
        peak_viewers=int(max(peaks)) if peaks else 0,
        stream_time=round(sum(_extra(daily, 'stream_hours')), 2),
        chat_messages=int(sum(_extra(daily, 'chat_messages'))),
        bits_received=int(sum(_extra(daily, 'bits'))),
        subscription_revenue=round(sum(_extra(daily, 'subscription_revenue')), 2),
        donation_revenue=round(sum(_extra(daily, 'donation_revenue')), 2),
        top_streams=_top(_published(content))
    )


PLATFORM_BUILDERS: Dict[Platform, Callable] = {
    Platform.YOUTUBE: _youtube,
    Platform.TIKTOK: _tiktok,
    Platform.TWITCH: _twitch,
}


def build_platform_metrics(
    accounts: List[PlatformAccount],
    content: List[ContentPerformance],
    daily: List[DailyMetric]
) -> list:
    """연결된 계정별 플랫폼 지표 (Platform enum 순서)"""
    by_platform = {a.platform: a for a in accounts}
    metrics = []
    for platform in Platform:
        account = by_platform.get(platform)
        if account is None:
            continue
        builder = PLATFORM_BUILDERS[platform]
        metrics.append(builder(
            account,
            [c for c in content if c.platform == platform],
            [d for d in daily if d.platform == platform]
        ))
    return metrics


# ============================================================
# Audience
# ============================================================

def _weighted_demographics(accounts: List[PlatformAccount]) -> Demographics:
    """팔로워 수 가중 평균"""
    result = {}
    for dimension in DEMOGRAPHIC_DIMENSIONS:
        weighted: Dict[str, float] = OrderedDict()
        weight_total = 0
        for account in accounts:
            buckets = account.demographics.get(dimension)
            if not buckets or account.followers <= 0:
                continue
            weight_total += account.followers
            for bucket, share in buckets.items():
                weighted[bucket] = weighted.get(bucket, 0.0) + share * account.followers
        result[dimension] = {
            bucket: round(value / weight_total, 2) for bucket, value in weighted.items()
        } if weight_total else {}
    return Demographics(**result)


def build_audience_metrics(
    accounts: List[PlatformAccount],
    content: List[ContentPerformance],
    daily: List[DailyMetric]
) -> AudienceMetrics:
    """오디언스 지표"""
    published = _published(content)
    total = sum(a.followers for a in accounts)
    growth = sum(
        _follower_growth([d for d in daily if d.platform == platform])
        for platform in Platform
    )

    views = sum(c.views for c in published)
    watched_seconds = sum(c.watch_time_minutes * 60 for c in published if c.duration_seconds)
    available_seconds = sum(c.views * c.duration_seconds for c in published if c.duration_seconds)
    revenue = sum(c.revenue or 0 for c in published)

    return AudienceMetrics(
        total_audience=total,
        audience_growth=growth,
        audience_growth_rate=_pct(growth, total - growth) if total - growth > 0 else 0.0,
        demographics=_weighted_demographics(accounts),
        engagement_rate=_pct(sum(c.engagement for c in published), views),
        audience_retention=min(100.0, _pct(watched_seconds, available_seconds)),
        audience_lifetime_value=round(revenue / total, 4) if total else 0.0
    )


# ============================================================
# Engagement
# ============================================================

def build_engagement_metrics(content: List[ContentPerformance]) -> EngagementMetrics:
    """참여 지표 (시간대 24칸, 요일 7칸 히스토그램 포함)"""
    published = _published(content)
    total = sum(c.engagement for c in published)
    views = sum(c.views for c in published)

    hours = [0] * 24
    weekdays = [0] * 7
    for c in published:
        when = c.activity_time
        if when is None:
            continue
        hours[when.hour] += c.engagement
        weekdays[when.weekday()] += c.engagement

    return EngagementMetrics(
        total_engagements=total,
        engagement_rate=_pct(total, views),
        average_engagement_per_post=round(total / len(published), 2) if published else 0.0,
        engagement_by_type=EngagementByType(
            likes=sum(c.likes for c in published),
            comments=sum(c.comments for c in published),
            shares=sum(c.shares for c in published),
            saves=sum(c.saves for c in published),
            clicks=sum(c.clicks for c in published)
        ),
        engagement_by_time=[
            TimeBasedMetric(hour=hour, value=value, percentage=_pct(value, total))
            for hour, value in enumerate(hours)
        ],
        engagement_by_day=[
            DayBasedMetric(day=WEEKDAYS[index], value=value, percentage=_pct(value, total))
            for index, value in enumerate(weekdays)
        ]
    )


# ============================================================
# Growth
# ============================================================

def build_series(days: List[date], values: List[float]) -> List[TimeSeriesPoint]:
    """일별 값 -> 직전 대비 변화량 포함 시계열"""
    points = []
    previous: Optional[float] = None
    for day, value in zip(days, values):
        change = value - previous if previous is not None else 0.0
        points.append(TimeSeriesPoint(
            date=day,
            value=round(value, 2),
            change=round(change, 2),
            change_percentage=_pct(change, previous) if previous else 0.0
        ))
        previous = value
    return points


def _follower_values(
    days: List[date],
    accounts: List[PlatformAccount],
    daily: List[DailyMetric]
) -> List[float]:
    """플랫폼별 팔로워를 이월하며 합산 (첫 기록 이전은 첫 기록값)"""
    platforms = {a.platform for a in accounts} | {d.platform for d in daily}
    per_platform: Dict[Platform, Dict[date, int]] = {p: {} for p in platforms}
    for d in daily:
        per_platform[d.platform][d.day] = d.followers

    account_followers = {a.platform: a.followers for a in accounts}
    totals = [0.0] * len(days)

    for platform, by_day in per_platform.items():
        if by_day:
            current = by_day[min(by_day)]
        else:
            current = account_followers.get(platform, 0)
        for index, day in enumerate(days):
            current = by_day.get(day, current)
            totals[index] += current

    return totals


def _flow_values(days: List[date], daily: List[DailyMetric], attr: str) -> List[float]:
    totals = {day: 0.0 for day in days}
    for d in daily:
        if d.day in totals:
            totals[d.day] += getattr(d, attr)
    return [totals[day] for day in days]


def _project_flow(values: List[float], confidence: int) -> ProjectedMetric:
    """기간 누적 + 일평균 선형 외삽"""
    current = sum(values)
    per_day = _mean(values)
    return ProjectedMetric(
        current=round(current, 2),
        projected_30_days=round(current + per_day * 30, 2),
        projected_90_days=round(current + per_day * 90, 2),
        projected_1_year=round(current + per_day * 365, 2),
        confidence=confidence
    )


def _follower_slope(values: List[float]) -> float:
    if len(values) < 2:
        return 0.0
    return (values[-1] - values[0]) / (len(values) - 1)


def _project_level(values: List[float], confidence: int) -> ProjectedMetric:
    """현재값 + 일평균 증가량 선형 외삽"""
    current = values[-1] if values else 0.0
    slope = _follower_slope(values)
    return ProjectedMetric(
        current=round(current, 2),
        projected_30_days=round(max(0.0, current + slope * 30), 2),
        projected_90_days=round(max(0.0, current + slope * 90), 2),
        projected_1_year=round(max(0.0, current + slope * 365), 2),
        confidence=confidence
    )


def next_milestone(followers: float, slope: float, reference: date) -> Optional[MilestoneEta]:
    """다음 팔로워 마일스톤과 예상 도달일 (성장 없으면 날짜 None)"""
    for target, name in FOLLOWER_MILESTONES:
        if followers < target:
            estimated = None
            if slope > 0:
                estimated = reference + timedelta(days=math.ceil((target - followers) / slope))
            return MilestoneEta(next_follower_milestone=target, milestone_name=name, estimated_date=estimated)
    return None


def build_growth_metrics(
    accounts: List[PlatformAccount],
    daily: List[DailyMetric],
    period: AnalyticsPeriod
) -> GrowthMetrics:
    """
    성장 지표

    기간의 각 날짜마다 포인트 1개 (start == end면 1개)
    마일스톤 ETA는 기간 종료일 기준이라 같은 입력이면 같은 결과
    """
    start = period.start.date()
    days = [start + timedelta(days=offset) for offset in range(period.days)]

    followers = _follower_values(days, accounts, daily)
    views = _flow_values(days, daily, 'views')
    engagement = _flow_values(days, daily, 'engagements')
    revenue = _flow_values(days, daily, 'revenue')

    follower_series = build_series(days, followers)

    return GrowthMetrics(
        follower_growth=follower_series,
        views_growth=build_series(days, views),
        engagement_growth=build_series(days, engagement),
        revenue_growth=build_series(days, revenue),
        projected_growth={
            'followers': _project_level(followers, PROJECTION_CONFIDENCE['followers']),
            'views': _project_flow(views, PROJECTION_CONFIDENCE['views']),
            'engagement': _project_flow(engagement, PROJECTION_CONFIDENCE['engagement']),
            'revenue': _project_flow(revenue, PROJECTION_CONFIDENCE['revenue']),
        },
        growth_velocity=round(_mean(p.change_percentage for p in follower_series[1:]), 2),
        time_to_milestone=next_milestone(
            followers[-1] if followers else 0,
            _follower_slope(followers),
            period.end.date()
        )
    )


# ============================================================
# Trends
# ============================================================

def momentum(first: List[float], second: List[float]) -> float:
    """전반부 대비 후반부 평균 변화율 (%)"""
    before = _mean(first)
    after = _mean(second)
    if before > 0:
        return round((after - before) / before * 100, 2)
    return 100.0 if after > 0 else 0.0


def classify_trend(value: float, threshold: float = TREND_THRESHOLD) -> str:
    if value > threshold:
        return "rising"
    if value < -threshold:
        return "declining"
    return "stable"


TREND_ADVICE = {
    "rising": "Increase {type} production to capitalize on this trend",
    "stable": "Maintain your current {type} schedule",
    "declining": "Refresh the {type} format or reduce its share of your schedule",
}


def _split_halves(content: List[ContentPerformance], period: AnalyticsPeriod):
    midpoint = period.start + (period.end - period.start) / 2
    first = [c for c in content if c.activity_time < midpoint]
    second = [c for c in content if c.activity_time >= midpoint]
    return first, second


def analyze_trends(content: List[ContentPerformance], period: AnalyticsPeriod) -> TrendAnalysis:
    """
    추세 분석

    기간 후반부 평균 조회수를 전반부와 비교 (±10% 고정 임계값)
    """
    published = [c for c in _published(content) if c.activity_time is not None]
    first, second = _split_halves(published, period)

    content_trends = []
    for content_type in OrderedDict.fromkeys(c.content_type for c in published):
        value = momentum(
            [c.views for c in first if c.content_type == content_type],
            [c.views for c in second if c.content_type == content_type]
        )
        trend = classify_trend(value)
        examples = sorted(
            (c for c in published if c.content_type == content_type),
            key=lambda c: c.views,
            reverse=True
        )
        content_trends.append(ContentTrend(
            type=content_type,
            trend=trend,
            momentum=value,
            examples=[c.title for c in examples[:3]],
            recommendation=TREND_ADVICE[trend].format(type=content_type)
        ))

    platform_trends = []
    for platform in Platform:
        if not any(c.platform == platform for c in published):
            continue
        value = momentum(
            [c.views for c in first if c.platform == platform],
            [c.views for c in second if c.platform == platform]
        )
        platform_trends.append(PlatformTrend(platform=platform, trend=classify_trend(value), momentum=value))

    return TrendAnalysis(
        content_trends=content_trends,
        platform_trends=platform_trends,
        emerging_opportunities=_opportunities(published)
    )


def _opportunities(published: List[ContentPerformance]) -> List[Opportunity]:
    """평균 대비 20% 이상 높은 점수의 콘텐츠 유형"""
    overall = _mean(c.performance_score for c in published)
    if overall <= 0:
        return []

    opportunities = []
    for content_type in OrderedDict.fromkeys(c.content_type for c in published):
        items = [c for c in published if c.content_type == content_type]
        score = _mean(c.performance_score for c in items)
        if score < overall * OPPORTUNITY_LIFT:
            continue
        lift = round((score - overall) / overall * 100, 1)
        opportunities.append(Opportunity(
            id=f"opportunity-{content_type}",
            type="content",
            title=f"Double down on {content_type}",
            description=f"Your {content_type} content scores {lift}% above your average",
            potential_impact={
                'engagement': round(_mean(c.engagement for c in items) * lift / 100, 2),
            },
            difficulty="easy",
            time_to_implement=7,
            priority="high" if lift >= 50 else "medium"
        ))
    return opportunities
