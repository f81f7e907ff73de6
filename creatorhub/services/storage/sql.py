"""
SQL Store - SQLAlchemy 기반 영구 저장소

PostgreSQL(운영) / SQLite(개발, 테스트) 모두 지원
SQLAlchemy 에러는 StorageError로 변환하여 전파
"""

import uuid
import logging
from datetime import datetime, date
from typing import List, Optional, Dict, Tuple
from contextlib import contextmanager

from sqlalchemy import (
    create_engine, Column, String, Text, DateTime, Date, Integer, Float, JSON,
    Index, UniqueConstraint, and_, or_, func,
)
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from creatorhub.core.config import settings
from creatorhub.core.exceptions import StorageError
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
    AnalyticsEvent,
    utc_now,
)
from creatorhub.models.analytics import AnalyticsSnapshot
from creatorhub.services.storage.base import Store

logger = logging.getLogger(__name__)

Base = declarative_base()


# ============================================
# SQLAlchemy Models
# ============================================

class UserModel(Base):
    """사용자 테이블"""
    __tablename__ = 'users'

    id = Column(String(64), primary_key=True)
    email = Column(String(255), default="")
    subscription_tier = Column(String(16), default=SubscriptionTier.FREE.value)
    created_at = Column(DateTime, default=utc_now)


class UserProfileModel(Base):
    """온보딩 프로필 테이블"""
    __tablename__ = 'user_profiles'

    user_id = Column(String(64), primary_key=True)
    start_date = Column(DateTime, nullable=True)
    current_phase = Column(Integer, default=1)
    current_week = Column(Integer, default=1)
    selected_platform = Column(String(16), nullable=True)
    selected_niche = Column(String(64), nullable=True)


class ContentPerformanceModel(Base):
    """게시 콘텐츠 성과 테이블"""
    __tablename__ = 'content_performance'

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(Text, nullable=False)
    content_type = Column(String(32), nullable=False)
    platform = Column(String(16), nullable=False, index=True)
    status = Column(String(16), default=ContentStatus.PUBLISHED.value)
    published_at = Column(DateTime, nullable=True, index=True)
    scheduled_for = Column(DateTime, nullable=True)
    views = Column(Integer, default=0)
    engagement = Column(Integer, default=0)
    shares = Column(Integer, default=0)
    likes = Column(Integer, default=0)
    comments = Column(Integer, default=0)
    saves = Column(Integer, default=0)
    clicks = Column(Integer, default=0)
    impressions = Column(Integer, default=0)
    watch_time_minutes = Column(Float, default=0.0)
    duration_seconds = Column(Integer, nullable=True)
    production_hours = Column(Float, nullable=True)
    revenue = Column(Float, nullable=True)

    __table_args__ = (
        Index('idx_content_user_published', 'user_id', 'published_at'),
    )


class PlatformAccountModel(Base):
    """플랫폼 계정 테이블"""
    __tablename__ = 'platform_accounts'

    user_id = Column(String(64), primary_key=True)
    platform = Column(String(16), primary_key=True)
    handle = Column(String(128), default="")
    followers = Column(Integer, default=0)
    paid_subscribers = Column(Integer, default=0)
    demographics = Column(JSON, default=dict)


class DailyMetricModel(Base):
    """일간 지표 테이블"""
    __tablename__ = 'daily_metrics'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False)
    platform = Column(String(16), nullable=False)
    day = Column(Date, nullable=False)
    followers = Column(Integer, default=0)
    views = Column(Integer, default=0)
    engagements = Column(Integer, default=0)
    revenue = Column(Float, default=0.0)
    extra = Column(JSON, default=dict)

    __table_args__ = (
        Index('idx_daily_user_day', 'user_id', 'day'),
    )


class CompetitorModel(Base):
    """경쟁자 테이블"""
    __tablename__ = 'competitors'

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(128), nullable=False)
    platform = Column(String(16), nullable=False)
    followers = Column(Integer, default=0)
    follower_growth_rate = Column(Float, default=0.0)
    engagement_rate = Column(Float, default=0.0)
    content_frequency = Column(Float, default=0.0)
    content_quality = Column(Float, default=0.0)
    estimated_revenue = Column(Float, default=0.0)
    strengths = Column(JSON, default=list)
    weaknesses = Column(JSON, default=list)


class DailyTaskModel(Base):
    """로드맵 태스크 테이블"""
    __tablename__ = 'daily_tasks'

    id = Column(String(64), primary_key=True)
    title = Column(Text, nullable=False)
    platform = Column(String(16), nullable=False)
    niche = Column(String(64), default="general")
    category = Column(String(64), nullable=True)
    phase = Column(Integer, default=1)
    day = Column(Integer, default=1)

    __table_args__ = (
        Index('idx_task_platform_niche', 'platform', 'niche'),
    )


class TaskCompletionModel(Base):
    """태스크 완료 로그 테이블"""
    __tablename__ = 'task_completions'

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False)
    task_id = Column(String(64), nullable=False)
    completed_at = Column(DateTime, nullable=False)
    time_spent = Column(Integer, nullable=True)
    quality = Column(Integer, nullable=True)
    category = Column(String(64), nullable=True)
    platform = Column(String(16), nullable=True)

    __table_args__ = (
        Index('idx_completion_user_time', 'user_id', 'completed_at'),
    )


class MilestoneModel(Base):
    """마일스톤 테이블"""
    __tablename__ = 'milestones'

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    platform = Column(String(16), nullable=False)
    order_index = Column(Integer, default=0)
    requirement = Column(JSON, default=dict)


class MilestoneAchievementModel(Base):
    """마일스톤 달성 테이블"""
    __tablename__ = 'milestone_achievements'

    user_id = Column(String(64), primary_key=True)
    milestone_id = Column(String(64), primary_key=True)
    achieved_at = Column(DateTime, default=utc_now)


class ContentItemModel(Base):
    """작성 콘텐츠 테이블"""
    __tablename__ = 'content_items'

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    platform = Column(String(32), nullable=False)
    content_type = Column(String(32), nullable=False)
    title = Column(Text, nullable=False)
    body = Column(JSON, default=dict)
    metadata_ = Column('metadata', JSON, default=dict)
    created_at = Column(DateTime, default=utc_now, index=True)


class AnalyticsEventModel(Base):
    """추적 이벤트 테이블 (append-only)"""
    __tablename__ = 'analytics_events'

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False)
    event_type = Column(String(64), nullable=False)
    event_data = Column(JSON, default=dict)
    timestamp = Column(DateTime, default=utc_now)

    __table_args__ = (
        Index('ix_analytics_events_user_time', 'user_id', 'timestamp'),
    )


class AnalyticsSnapshotModel(Base):
    """분석 스냅샷 테이블 (user, period 당 1건)"""
    __tablename__ = 'analytics_snapshots'

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False)
    period_start = Column(DateTime, nullable=False)
    period_end = Column(DateTime, nullable=False)
    period_type = Column(String(16), nullable=False)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    __table_args__ = (
        UniqueConstraint('user_id', 'period_start', 'period_end', name='uq_snapshot_user_period'),
    )


# ============================================
# SQL Store
# ============================================

def _values(platforms: Optional[List[Platform]]) -> List[str]:
    return [p.value for p in platforms] if platforms else []


def _platform_or_none(value: Optional[str]) -> Optional[Platform]:
    return Platform(value) if value else None


class SqlStore(Store):
    """
    SQLAlchemy 저장소

    스냅샷 upsert는 단일 트랜잭션으로 수행되며
    동시 insert 충돌 시 update로 재시도 (last-writer-wins)
    """

    backend = "sql"

    def __init__(self, database_url: Optional[str] = None, echo: Optional[bool] = None):
        self.database_url = database_url or settings.database_url
        self.engine = self._create_engine(
            self.database_url,
            settings.DB_ECHO if echo is None else echo
        )
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)
        self._ensure_tables()

    def _create_engine(self, database_url: str, echo: bool):
        """엔진 생성"""
        if database_url.startswith("sqlite"):
            kwargs = {'connect_args': {'check_same_thread': False}}
            if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
                kwargs['poolclass'] = StaticPool
            logger.info(f"Connecting to SQLite: {database_url}")
            return create_engine(database_url, echo=echo, **kwargs)

        logger.info(f"Connecting to database: {database_url.split('@')[-1]}")
        return create_engine(
            database_url,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,
            echo=echo
        )

    def _ensure_tables(self):
        """테이블 생성"""
        try:
            Base.metadata.create_all(self.engine)
            logger.info("Storage tables ensured")
        except SQLAlchemyError as e:
            logger.error(f"Failed to create tables: {e}")
            raise StorageError(f"Failed to create tables: {e}") from e

    @contextmanager
    def _get_db(self):
        """DB 세션 컨텍스트 매니저"""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Database operation failed: {e}") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # ========================================
    # Analytics
    # ========================================

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._get_db() as db:
            row = db.query(UserModel).filter(UserModel.id == user_id).first()
            if not row:
                return None
            return UserRecord(
                user_id=row.id,
                email=row.email or "",
                subscription_tier=SubscriptionTier(row.subscription_tier),
                created_at=row.created_at
            )

    def list_content(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
        platforms: Optional[List[Platform]] = None,
        content_types: Optional[List[str]] = None
    ) -> List[ContentPerformance]:
        with self._get_db() as db:
            M = ContentPerformanceModel
            query = db.query(M).filter(
                M.user_id == user_id,
                M.status != ContentStatus.DRAFT.value,
                or_(
                    and_(M.published_at.isnot(None), M.published_at >= start, M.published_at <= end),
                    and_(M.published_at.is_(None), M.scheduled_for >= start, M.scheduled_for <= end),
                )
            )

            if platforms:
                query = query.filter(M.platform.in_(_values(platforms)))
            if content_types:
                query = query.filter(M.content_type.in_(content_types))

            return [
                ContentPerformance(
                    content_id=r.id,
                    user_id=r.user_id,
                    title=r.title,
                    content_type=r.content_type,
                    platform=Platform(r.platform),
                    status=ContentStatus(r.status),
                    published_at=r.published_at,
                    scheduled_for=r.scheduled_for,
                    views=r.views or 0,
                    engagement=r.engagement or 0,
                    shares=r.shares or 0,
                    likes=r.likes or 0,
                    comments=r.comments or 0,
                    saves=r.saves or 0,
                    clicks=r.clicks or 0,
                    impressions=r.impressions or 0,
                    watch_time_minutes=r.watch_time_minutes or 0.0,
                    duration_seconds=r.duration_seconds,
                    production_hours=r.production_hours,
                    revenue=r.revenue
                )
                for r in query.order_by(M.published_at.asc()).all()
            ]

    def list_accounts(
        self,
        user_id: str,
        platforms: Optional[List[Platform]] = None
    ) -> List[PlatformAccount]:
        with self._get_db() as db:
            query = db.query(PlatformAccountModel).filter(
                PlatformAccountModel.user_id == user_id
            )
            if platforms:
                query = query.filter(PlatformAccountModel.platform.in_(_values(platforms)))

            return [
                PlatformAccount(
                    user_id=r.user_id,
                    platform=Platform(r.platform),
                    handle=r.handle or "",
                    followers=r.followers or 0,
                    paid_subscribers=r.paid_subscribers or 0,
                    demographics=r.demographics or {}
                )
                for r in query.all()
            ]

    def list_daily_metrics(
        self,
        user_id: str,
        start: date,
        end: date,
        platforms: Optional[List[Platform]] = None
    ) -> List[DailyMetric]:
        with self._get_db() as db:
            query = db.query(DailyMetricModel).filter(
                DailyMetricModel.user_id == user_id,
                DailyMetricModel.day >= start,
                DailyMetricModel.day <= end
            )
            if platforms:
                query = query.filter(DailyMetricModel.platform.in_(_values(platforms)))

            return [
                DailyMetric(
                    user_id=r.user_id,
                    platform=Platform(r.platform),
                    day=r.day,
                    followers=r.followers or 0,
                    views=r.views or 0,
                    engagements=r.engagements or 0,
                    revenue=r.revenue or 0.0,
                    extra=r.extra or {}
                )
                for r in query.order_by(DailyMetricModel.day.asc(), DailyMetricModel.id.asc()).all()
            ]

    def list_competitors(self, user_id: str) -> List[CompetitorRecord]:
        with self._get_db() as db:
            rows = db.query(CompetitorModel).filter(CompetitorModel.user_id == user_id).all()
            return [
                CompetitorRecord(
                    competitor_id=r.id,
                    user_id=r.user_id,
                    name=r.name,
                    platform=Platform(r.platform),
                    followers=r.followers or 0,
                    follower_growth_rate=r.follower_growth_rate or 0.0,
                    engagement_rate=r.engagement_rate or 0.0,
                    content_frequency=r.content_frequency or 0.0,
                    content_quality=r.content_quality or 0.0,
                    estimated_revenue=r.estimated_revenue or 0.0,
                    strengths=list(r.strengths or []),
                    weaknesses=list(r.weaknesses or [])
                )
                for r in rows
            ]

    def upsert_snapshot(self, snapshot: AnalyticsSnapshot) -> AnalyticsSnapshot:
        try:
            return self._write_snapshot(snapshot)
        except StorageError as e:
            if not isinstance(e.__cause__, IntegrityError):
                raise
            # 동시 insert 충돌: 먼저 들어간 행을 덮어쓴다
            logger.info(f"Snapshot insert raced for {snapshot.user_id}, retrying as update")
            return self._write_snapshot(snapshot)

    def _write_snapshot(self, snapshot: AnalyticsSnapshot) -> AnalyticsSnapshot:
        payload = snapshot.content_dict()
        now = utc_now()

        with self._get_db() as db:
            row = db.query(AnalyticsSnapshotModel).filter(
                AnalyticsSnapshotModel.user_id == snapshot.user_id,
                AnalyticsSnapshotModel.period_start == snapshot.period.start,
                AnalyticsSnapshotModel.period_end == snapshot.period.end
            ).first()

            if row:
                row.payload = payload
                row.period_type = snapshot.period.type.value
                row.updated_at = now
            else:
                row = AnalyticsSnapshotModel(
                    id=f"snap_{uuid.uuid4().hex[:12]}",
                    user_id=snapshot.user_id,
                    period_start=snapshot.period.start,
                    period_end=snapshot.period.end,
                    period_type=snapshot.period.type.value,
                    payload=payload,
                    created_at=now,
                    updated_at=now
                )
                db.add(row)

            db.flush()
            snapshot_id, created_at = row.id, row.created_at

        logger.debug(f"Upserted snapshot {snapshot_id} for {snapshot.user_id}")

        return snapshot.model_copy(deep=True, update={
            'id': snapshot_id,
            'created_at': created_at,
            'updated_at': now,
        })

    def get_snapshot(
        self,
        user_id: str,
        start: datetime,
        end: datetime
    ) -> Optional[AnalyticsSnapshot]:
        with self._get_db() as db:
            row = db.query(AnalyticsSnapshotModel).filter(
                AnalyticsSnapshotModel.user_id == user_id,
                AnalyticsSnapshotModel.period_start == start,
                AnalyticsSnapshotModel.period_end == end
            ).first()

            if not row:
                return None

            return AnalyticsSnapshot.model_validate({
                **row.payload,
                'id': row.id,
                'created_at': row.created_at,
                'updated_at': row.updated_at,
            })

    def add_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        event_id = event.event_id or f"evt_{uuid.uuid4().hex[:12]}"
        timestamp = event.timestamp or utc_now()

        with self._get_db() as db:
            db.add(AnalyticsEventModel(
                id=event_id,
                user_id=event.user_id,
                event_type=event.event_type,
                event_data=event.event_data,
                timestamp=timestamp
            ))

        return AnalyticsEvent(
            event_id=event_id,
            user_id=event.user_id,
            event_type=event.event_type,
            event_data=dict(event.event_data),
            timestamp=timestamp
        )

    def list_events(self, user_id: str, event_type: Optional[str] = None) -> List[AnalyticsEvent]:
        with self._get_db() as db:
            query = db.query(AnalyticsEventModel).filter(AnalyticsEventModel.user_id == user_id)
            if event_type:
                query = query.filter(AnalyticsEventModel.event_type == event_type)

            return [
                AnalyticsEvent(
                    event_id=row.id,
                    user_id=row.user_id,
                    event_type=row.event_type,
                    event_data=dict(row.event_data or {}),
                    timestamp=row.timestamp
                )
                for row in query.order_by(AnalyticsEventModel.timestamp).all()
            ]

    # ========================================
    # Progress
    # ========================================

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        with self._get_db() as db:
            row = db.query(UserProfileModel).filter(UserProfileModel.user_id == user_id).first()
            if not row:
                return None
            return UserProfile(
                user_id=row.user_id,
                start_date=row.start_date,
                current_phase=row.current_phase or 1,
                current_week=row.current_week or 1,
                selected_platform=_platform_or_none(row.selected_platform),
                selected_niche=row.selected_niche
            )

    def list_task_completions(self, user_id: str) -> List[TaskCompletion]:
        with self._get_db() as db:
            rows = db.query(TaskCompletionModel, DailyTaskModel).outerjoin(
                DailyTaskModel, DailyTaskModel.id == TaskCompletionModel.task_id
            ).filter(
                TaskCompletionModel.user_id == user_id
            ).order_by(
                TaskCompletionModel.completed_at.asc()
            ).all()

            return [
                TaskCompletion(
                    completion_id=c.id,
                    user_id=c.user_id,
                    task_id=c.task_id,
                    completed_at=c.completed_at,
                    time_spent=c.time_spent,
                    quality=c.quality,
                    category=c.category or (t.category if t else None),
                    platform=_platform_or_none(c.platform or (t.platform if t else None))
                )
                for c, t in rows
            ]

    def count_tasks(self, platform: Platform, niche: str) -> int:
        with self._get_db() as db:
            return db.query(func.count(DailyTaskModel.id)).filter(
                DailyTaskModel.platform == platform.value,
                DailyTaskModel.niche == niche
            ).scalar() or 0

    def list_milestones(self, platform: Optional[Platform] = None) -> List[Milestone]:
        with self._get_db() as db:
            query = db.query(MilestoneModel)
            if platform is not None:
                query = query.filter(MilestoneModel.platform == platform.value)

            return [
                Milestone(
                    milestone_id=r.id,
                    name=r.name,
                    platform=Platform(r.platform),
                    order_index=r.order_index or 0,
                    requirement=r.requirement or {}
                )
                for r in query.order_by(MilestoneModel.order_index.asc()).all()
            ]

    def list_achievements(self, user_id: str) -> List[MilestoneAchievement]:
        with self._get_db() as db:
            rows = db.query(MilestoneAchievementModel).filter(
                MilestoneAchievementModel.user_id == user_id
            ).all()
            return [
                MilestoneAchievement(
                    user_id=r.user_id,
                    milestone_id=r.milestone_id,
                    achieved_at=r.achieved_at
                )
                for r in rows
            ]

    # ========================================
    # Content
    # ========================================

    def get_content_item(self, content_id: str) -> Optional[ContentItem]:
        with self._get_db() as db:
            row = db.query(ContentItemModel).filter(ContentItemModel.id == content_id).first()
            if not row:
                return None
            return ContentItem(
                content_id=row.id,
                user_id=row.user_id,
                platform=row.platform,
                content_type=row.content_type,
                title=row.title,
                body=dict(row.body or {}),
                metadata=dict(row.metadata_ or {}),
                created_at=row.created_at
            )

    def create_content_item(self, item: ContentItem) -> ContentItem:
        content_id = item.content_id or f"content_{uuid.uuid4().hex[:12]}"
        created_at = item.created_at or utc_now()

        with self._get_db() as db:
            db.add(ContentItemModel(
                id=content_id,
                user_id=item.user_id,
                platform=item.platform,
                content_type=item.content_type,
                title=item.title,
                body=item.body,
                metadata_=item.metadata,
                created_at=created_at
            ))

        logger.debug(f"Created content item: {content_id} ({item.platform})")

        return ContentItem(
            content_id=content_id,
            user_id=item.user_id,
            platform=item.platform,
            content_type=item.content_type,
            title=item.title,
            body=item.body,
            metadata=item.metadata,
            created_at=created_at
        )

    def content_stats(self, user_id: str) -> Dict[str, Tuple[int, Optional[datetime]]]:
        with self._get_db() as db:
            rows = db.query(
                ContentItemModel.platform,
                func.count(ContentItemModel.id),
                func.max(ContentItemModel.created_at)
            ).filter(
                ContentItemModel.user_id == user_id
            ).group_by(ContentItemModel.platform).all()

            return {r[0]: (r[1], r[2]) for r in rows}

    # ========================================
    # Writers
    # ========================================

    def add_user(self, user: UserRecord) -> None:
        with self._get_db() as db:
            db.merge(UserModel(
                id=user.user_id,
                email=user.email,
                subscription_tier=user.subscription_tier.value,
                created_at=user.created_at or utc_now()
            ))

    def add_profile(self, profile: UserProfile) -> None:
        with self._get_db() as db:
            db.merge(UserProfileModel(
                user_id=profile.user_id,
                start_date=profile.start_date,
                current_phase=profile.current_phase,
                current_week=profile.current_week,
                selected_platform=profile.selected_platform.value if profile.selected_platform else None,
                selected_niche=profile.selected_niche
            ))

    def add_content_performance(self, content: ContentPerformance) -> None:
        with self._get_db() as db:
            db.merge(ContentPerformanceModel(
                id=content.content_id,
                user_id=content.user_id,
                title=content.title,
                content_type=content.content_type,
                platform=content.platform.value,
                status=content.status.value,
                published_at=content.published_at,
                scheduled_for=content.scheduled_for,
                views=content.views,
                engagement=content.engagement,
                shares=content.shares,
                likes=content.likes,
                comments=content.comments,
                saves=content.saves,
                clicks=content.clicks,
                impressions=content.impressions,
                watch_time_minutes=content.watch_time_minutes,
                duration_seconds=content.duration_seconds,
                production_hours=content.production_hours,
                revenue=content.revenue
            ))

    def add_account(self, account: PlatformAccount) -> None:
        with self._get_db() as db:
            db.merge(PlatformAccountModel(
                user_id=account.user_id,
                platform=account.platform.value,
                handle=account.handle,
                followers=account.followers,
                paid_subscribers=account.paid_subscribers,
                demographics=account.demographics
            ))

    def add_daily_metric(self, metric: DailyMetric) -> None:
        with self._get_db() as db:
            db.add(DailyMetricModel(
                user_id=metric.user_id,
                platform=metric.platform.value,
                day=metric.day,
                followers=metric.followers,
                views=metric.views,
                engagements=metric.engagements,
                revenue=metric.revenue,
                extra=metric.extra
            ))

    def add_competitor(self, competitor: CompetitorRecord) -> None:
        with self._get_db() as db:
            db.merge(CompetitorModel(
                id=competitor.competitor_id,
                user_id=competitor.user_id,
                name=competitor.name,
                platform=competitor.platform.value,
                followers=competitor.followers,
                follower_growth_rate=competitor.follower_growth_rate,
                engagement_rate=competitor.engagement_rate,
                content_frequency=competitor.content_frequency,
                content_quality=competitor.content_quality,
                estimated_revenue=competitor.estimated_revenue,
                strengths=competitor.strengths,
                weaknesses=competitor.weaknesses
            ))

    def add_task(self, task: DailyTask) -> None:
        with self._get_db() as db:
            db.merge(DailyTaskModel(
                id=task.task_id,
                title=task.title,
                platform=task.platform.value,
                niche=task.niche,
                category=task.category,
                phase=task.phase,
                day=task.day
            ))

    def add_task_completion(self, completion: TaskCompletion) -> None:
        with self._get_db() as db:
            db.merge(TaskCompletionModel(
                id=completion.completion_id,
                user_id=completion.user_id,
                task_id=completion.task_id,
                completed_at=completion.completed_at,
                time_spent=completion.time_spent,
                quality=completion.quality,
                category=completion.category,
                platform=completion.platform.value if completion.platform else None
            ))

    def add_milestone(self, milestone: Milestone) -> None:
        with self._get_db() as db:
            db.merge(MilestoneModel(
                id=milestone.milestone_id,
                name=milestone.name,
                platform=milestone.platform.value,
                order_index=milestone.order_index,
                requirement=milestone.requirement
            ))

    def add_achievement(self, achievement: MilestoneAchievement) -> None:
        with self._get_db() as db:
            db.merge(MilestoneAchievementModel(
                user_id=achievement.user_id,
                milestone_id=achievement.milestone_id,
                achieved_at=achievement.achieved_at or utc_now()
            ))

    def health_check(self) -> Dict[str, str]:
        try:
            with self._get_db() as db:
                db.query(func.count(UserModel.id)).scalar()
            return {'status': 'healthy', 'backend': self.backend}
        except StorageError as e:
            return {'status': 'unhealthy', 'backend': self.backend, 'error': str(e)}

    def close(self):
        self.engine.dispose()
        logger.info("Storage engine disposed")
