"""
Analytics Export
스냅샷을 선택한 섹션만 포맷별로 렌더링

JSON / CSV는 기본 제공, PDF / Excel은 외부 렌더러를 등록해서 사용
"""

import io
import csv
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Iterator, Tuple, Union

from creatorhub.core.exceptions import ValidationError
from creatorhub.domain.models import ExportFormat
from creatorhub.models.analytics import AnalyticsPeriod
from creatorhub.services.analytics.aggregator import MetricsAggregator

logger = logging.getLogger(__name__)

EXPORT_SECTIONS = [
    "metrics",
    "platform_metrics",
    "audience_metrics",
    "engagement_metrics",
    "growth_metrics",
    "trends",
    "recommendations",
    "competitor_analysis",
]


# ============================================================
# Renderers
# ============================================================

class ExportRenderer(ABC):
    """내보내기 렌더러 인터페이스"""

    media_type: str = "application/octet-stream"
    extension: str = "bin"

    @abstractmethod
    def render(self, payload: Dict[str, Any]) -> bytes:
        pass


class JsonRenderer(ExportRenderer):
    media_type = "application/json"
    extension = "json"

    def render(self, payload: Dict[str, Any]) -> bytes:
        return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def flatten(value: Any, prefix: str = "") -> Iterator[Tuple[str, Any]]:
    """중첩 구조를 (a.b.0.c, 값) 쌍으로 펼침"""
    if isinstance(value, dict):
        for key, item in value.items():
            yield from flatten(item, f"{prefix}.{key}" if prefix else str(key))
    elif isinstance(value, list):
        if not value:
            yield prefix, ""
        for index, item in enumerate(value):
            yield from flatten(item, f"{prefix}.{index}")
    else:
        yield prefix, "" if value is None else value


class CsvRenderer(ExportRenderer):
    """field,value 2열 CSV"""
    media_type = "text/csv"
    extension = "csv"

    def render(self, payload: Dict[str, Any]) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(["field", "value"])
        for key, value in flatten(payload):
            writer.writerow([key, value])
        return buffer.getvalue().encode("utf-8")


# ============================================================
# Exporter
# ============================================================

@dataclass
class ExportResult:
    content: bytes
    media_type: str
    filename: str


class AnalyticsExporter:
    """
    분석 내보내기

    Usage:
        exporter = AnalyticsExporter(aggregator)
        exporter.register(ExportFormat.PDF, MyPdfRenderer())
        result = exporter.export_analytics(user_id, period, "json", ["metrics"])
    """

    def __init__(
        self,
        aggregator: MetricsAggregator,
        renderers: Optional[Dict[ExportFormat, ExportRenderer]] = None
    ):
        self.aggregator = aggregator
        self.renderers: Dict[ExportFormat, ExportRenderer] = {
            ExportFormat.JSON: JsonRenderer(),
            ExportFormat.CSV: CsvRenderer(),
        }
        if renderers:
            self.renderers.update(renderers)

    def register(self, fmt: ExportFormat, renderer: ExportRenderer):
        self.renderers[ExportFormat(fmt)] = renderer

    def export_analytics(
        self,
        user_id: str,
        period: AnalyticsPeriod,
        fmt: Union[ExportFormat, str],
        sections: Optional[List[str]] = None
    ) -> ExportResult:
        """
        스냅샷 재계산 후 선택 섹션만 렌더링

        Raises:
            ValidationError: 알 수 없는 포맷/섹션, 또는 렌더러 미등록
            NotFoundError: 사용자 없음
        """
        try:
            export_format = ExportFormat(fmt)
        except ValueError:
            raise ValidationError(f"Unknown export format: {fmt}", {'format': str(fmt)})

        renderer = self.renderers.get(export_format)
        if renderer is None:
            raise ValidationError(
                f"No renderer registered for format: {export_format.value}",
                {'format': export_format.value}
            )

        selected = list(sections) if sections else list(EXPORT_SECTIONS)
        unknown = [s for s in selected if s not in EXPORT_SECTIONS]
        if unknown:
            raise ValidationError(f"Unknown export sections: {', '.join(unknown)}", {'sections': unknown})

        snapshot = self.aggregator.compute_analytics(user_id, period)
        data = snapshot.model_dump(mode="json")

        payload = {
            'user_id': user_id,
            'period': data['period'],
        }
        for section in selected:
            payload[section] = data[section]

        content = renderer.render(payload)
        filename = (
            f"analytics_{user_id}_{snapshot.period.start.date()}_{snapshot.period.end.date()}"
            f".{renderer.extension}"
        )
        logger.info(f"[Export] {filename} ({len(content)} bytes, {len(selected)} sections)")

        return ExportResult(content=content, media_type=renderer.media_type, filename=filename)
