"""
Analytics Services
스냅샷 계산 / 추천 / 경쟁자 분석 / 내보내기
"""
from creatorhub.services.analytics.aggregator import MetricsAggregator, normalize_period
from creatorhub.services.analytics.recommendations import RecommendationInputs, generate_recommendations
from creatorhub.services.analytics.competitors import analyze_competitors
from creatorhub.services.analytics.export import (
    AnalyticsExporter,
    ExportRenderer,
    ExportResult,
    EXPORT_SECTIONS,
)

__all__ = [
    'MetricsAggregator',
    'normalize_period',
    'RecommendationInputs',
    'generate_recommendations',
    'analyze_competitors',
    'AnalyticsExporter',
    'ExportRenderer',
    'ExportResult',
    'EXPORT_SECTIONS',
]
