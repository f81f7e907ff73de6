"""
Seed Data
로드맵 태스크/마일스톤 참조 데이터 및 데모 사용자 샘플 데이터
"""

import random
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

from creatorhub.domain.models import (
    Platform,
    SubscriptionTier,
    ContentStatus,
    UserRecord,
    UserProfile,
    ContentPerformance,
    PlatformAccount,
    DailyMetric,
    CompetitorRecord,
    DailyTask,
    TaskCompletion,
    Milestone,
    MilestoneAchievement,
    ContentItem,
)
from creatorhub.services.storage.base import Store

logger = logging.getLogger(__name__)

DEMO_USER_ID = "demo-user"

# 3 phase x 30 days
ROADMAP_DAYS = 90
TASK_CATEGORIES = ["technical", "content", "analytics", "content", "community", "technical"]

MILESTONES = [
    ("First Video Published", {"type": "task_completion", "value": 1}),
    ("Week 1 Champion", {"type": "task_completion", "value": 5}),
    ("Consistency Streak", {"type": "time_based", "value": "7_day_streak"}),
    ("Phase 1 Complete", {"type": "task_completion", "value": 30}),
    ("Phase 2 Complete", {"type": "task_completion", "value": 60}),
]

CONTENT_TYPES = {
    Platform.YOUTUBE: ["tutorial", "long-form", "vlog", "short"],
    Platform.TIKTOK: ["short-form", "trend", "quick-tip"],
    Platform.TWITCH: ["stream", "gameplay"],
}


def seed_reference_data(store: Store, niche: str = "general") -> Dict[str, int]:
    """로드맵 태스크와 마일스톤 생성"""
    tasks = 0
    milestones = 0

    for platform in Platform:
        for index in range(ROADMAP_DAYS):
            store.add_task(DailyTask(
                task_id=f"{platform.value}-{niche}-day{index + 1}",
                title=f"{platform.value.title()} day {index + 1}",
                platform=platform,
                niche=niche,
                category=TASK_CATEGORIES[index % len(TASK_CATEGORIES)],
                phase=index // 30 + 1,
                day=index + 1
            ))
            tasks += 1

        for order, (name, requirement) in enumerate(MILESTONES, start=1):
            store.add_milestone(Milestone(
                milestone_id=f"{platform.value}_milestone_{order}",
                name=name,
                platform=platform,
                order_index=order,
                requirement=requirement
            ))
            milestones += 1

    logger.info(f"[Seed] {tasks} tasks, {milestones} milestones")
    return {'tasks': tasks, 'milestones': milestones}


def seed_sample_data(
    store: Store,
    user_id: str = DEMO_USER_ID,
    now: Optional[datetime] = None,
    days: int = 30,
    seed: int = 42
) -> Dict[str, int]:
    """
    데모 사용자 샘플 데이터 생성

    Args:
        store: 저장소
        user_id: 사용자 ID
        now: 기준 시각 (기본: 현재)
        days: 생성할 일수
        seed: 난수 시드 (재현용)

    Returns:
        생성된 레코드 수
    """
    rng = random.Random(seed)
    now = (now or datetime.now()).replace(minute=0, second=0, microsecond=0)
    start = now - timedelta(days=days - 1)

    store.add_user(UserRecord(
        user_id=user_id,
        email=f"{user_id}@example.com",
        subscription_tier=SubscriptionTier.PRO,
        created_at=start
    ))
    store.add_profile(UserProfile(
        user_id=user_id,
        start_date=start,
        current_phase=2,
        current_week=days // 7 + 1,
        selected_platform=Platform.YOUTUBE,
        selected_niche="general"
    ))

    counts = {'content': 0, 'daily_metrics': 0, 'completions': 0, 'competitors': 0}
    followers = {Platform.YOUTUBE: 1200, Platform.TIKTOK: 4500, Platform.TWITCH: 300}

    # 일간 지표
    for offset in range(days):
        day = (start + timedelta(days=offset)).date()
        for platform in Platform:
            followers[platform] += rng.randint(0, 40)
            views = rng.randint(200, 3000)
            store.add_daily_metric(DailyMetric(
                user_id=user_id,
                platform=platform,
                day=day,
                followers=followers[platform],
                views=views,
                engagements=int(views * rng.uniform(0.02, 0.09)),
                revenue=round(views * rng.uniform(0.001, 0.004), 2),
                extra=_extra_metrics(platform, rng)
            ))
            counts['daily_metrics'] += 1

    for platform, total in followers.items():
        store.add_account(PlatformAccount(
            user_id=user_id,
            platform=platform,
            handle=f"@{user_id}",
            followers=total,
            paid_subscribers=rng.randint(5, 60) if platform == Platform.TWITCH else 0,
            demographics={
                'age': {'18-24': 38.0, '25-34': 41.0, '35-44': 21.0},
                'gender': {'female': 46.0, 'male': 52.0, 'other': 2.0},
                'devices': {'mobile': 71.0, 'desktop': 24.0, 'tv': 5.0},
            }
        ))

    # 게시 콘텐츠
    for index in range(days // 2):
        platform = list(Platform)[index % 3]
        published = start + timedelta(days=index * 2, hours=rng.choice([9, 12, 18, 20]))
        views = rng.randint(300, 20000)
        store.add_content_performance(ContentPerformance(
            content_id=f"{user_id}-post-{index + 1}",
            user_id=user_id,
            title=f"Sample {platform.value} post #{index + 1}",
            content_type=rng.choice(CONTENT_TYPES[platform]),
            platform=platform,
            status=ContentStatus.PUBLISHED,
            published_at=published,
            views=views,
            engagement=int(views * rng.uniform(0.01, 0.12)),
            shares=int(views * rng.uniform(0.0, 0.02)),
            likes=int(views * rng.uniform(0.01, 0.08)),
            comments=int(views * rng.uniform(0.0, 0.01)),
            saves=int(views * rng.uniform(0.0, 0.01)),
            clicks=int(views * rng.uniform(0.0, 0.02)),
            impressions=views * rng.randint(8, 25),
            watch_time_minutes=round(views * rng.uniform(0.5, 4.0), 1),
            duration_seconds=rng.choice([45, 180, 600, 3600]),
            production_hours=round(rng.uniform(0.5, 6.0), 1),
            revenue=round(views * rng.uniform(0.001, 0.005), 2)
        ))
        counts['content'] += 1

    # 태스크 완료 로그 (가끔 쉬는 날)
    task_index = 0
    for offset in range(days):
        if rng.random() < 0.2:
            continue
        for _ in range(rng.randint(1, 3)):
            task_index += 1
            store.add_task_completion(TaskCompletion(
                completion_id=f"{user_id}-completion-{task_index}",
                user_id=user_id,
                task_id=f"youtube-general-day{min(task_index, ROADMAP_DAYS)}",
                completed_at=start + timedelta(days=offset, hours=rng.randint(8, 22)),
                time_spent=rng.randint(10, 90),
                quality=rng.randint(2, 5)
            ))
            counts['completions'] += 1

    store.add_achievement(MilestoneAchievement(
        user_id=user_id,
        milestone_id="youtube_milestone_1",
        achieved_at=start + timedelta(days=1)
    ))

    for index, name in enumerate(["Creator Alpha", "Creator Beta", "Creator Gamma"]):
        store.add_competitor(CompetitorRecord(
            competitor_id=f"{user_id}-competitor-{index + 1}",
            user_id=user_id,
            name=name,
            platform=Platform.YOUTUBE,
            followers=rng.randint(800, 50000),
            follower_growth_rate=round(rng.uniform(0.5, 8.0), 2),
            engagement_rate=round(rng.uniform(1.5, 9.0), 2),
            content_frequency=round(rng.uniform(1.0, 6.0), 1),
            content_quality=round(rng.uniform(40, 90), 1),
            estimated_revenue=round(rng.uniform(200, 8000), 2),
            strengths=["consistent uploads"],
            weaknesses=["low community interaction"]
        ))
        counts['competitors'] += 1

    store.create_content_item(ContentItem(
        content_id=f"{user_id}-source-1",
        user_id=user_id,
        platform=Platform.YOUTUBE.value,
        content_type="tutorial",
        title="How I edit a YouTube video in under an hour",
        body={'description': "A full walkthrough of my editing workflow. Covers cuts, color and sound."},
        metadata={'duration': 720, 'tags': ['editing', 'workflow']},
        created_at=now
    ))

    logger.info(f"[Seed] sample data for {user_id}: {counts}")
    return counts


def _extra_metrics(platform: Platform, rng: random.Random) -> Dict[str, float]:
    """플랫폼 전용 일간 카운터"""
    if platform == Platform.TWITCH:
        return {
            'average_viewers': rng.randint(10, 80),
            'peak_viewers': rng.randint(80, 200),
            'stream_hours': round(rng.uniform(0, 4), 1),
            'chat_messages': rng.randint(50, 900),
            'bits': rng.randint(0, 500),
            'subscription_revenue': round(rng.uniform(0, 25), 2),
            'donation_revenue': round(rng.uniform(0, 15), 2),
        }
    if platform == Platform.TIKTOK:
        return {
            'completion_rate': round(rng.uniform(30, 75), 1),
            'average_watch_time': round(rng.uniform(5, 25), 1),
        }
    return {}
