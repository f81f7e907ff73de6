"""
Platform Catalog
플랫폼 제약/변환 규칙/전략 참조 데이터 (YAML)

configs/platforms.yaml, configs/strategies.yaml을 한 번만 로드
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Tuple, Optional, Any

import yaml

from creatorhub.core.exceptions import UnsupportedPlatformError
from creatorhub.domain.models import Platform

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"


# ============================================================
# Reference Types
# ============================================================

@dataclass(frozen=True)
class PlatformConstraints:
    """플랫폼 제약"""
    platform: Platform
    title_max_length: int
    description_max_length: int
    min_duration: int
    max_duration: int
    formats: Tuple[str, ...]
    features: Tuple[str, ...]


@dataclass(frozen=True)
class AdaptationRule:
    """방향별 변환 규칙"""
    source: Platform
    target: Platform
    title_hint: str
    description_hint: str
    format_hint: str
    suggestions: Tuple[str, ...]

    def guidance(self) -> Dict[str, str]:
        return {
            'title': self.title_hint,
            'description': self.description_hint,
            'format': self.format_hint,
        }


@dataclass
class PlatformCatalog:
    """참조 데이터 묶음"""
    constraints: Dict[Platform, PlatformConstraints]
    rules: Dict[Tuple[Platform, Platform], AdaptationRule]
    format_map: Dict[str, Dict[str, str]] = field(default_factory=dict)
    hashtags: Dict[Platform, List[str]] = field(default_factory=dict)
    reach_multipliers: Dict[Platform, Dict[Platform, float]] = field(default_factory=dict)
    strategies: Dict[str, Dict[Platform, Dict[str, Any]]] = field(default_factory=dict)
    default_strategy: str = "entertainment"

    def constraint_for(self, platform: Platform) -> PlatformConstraints:
        try:
            return self.constraints[platform]
        except KeyError:
            raise UnsupportedPlatformError(platform.value)

    def rule_for(self, source: Platform, target: Platform) -> AdaptationRule:
        """(source, target) 규칙 조회 (없으면 UnsupportedPlatformError)"""
        rule = self.rules.get((source, target))
        if rule is None:
            raise UnsupportedPlatformError(
                target.value,
                f"No adaptation rules for {source.value} to {target.value}"
            )
        return rule

    def strategy_profile(self, content_type: str) -> Dict[Platform, Dict[str, Any]]:
        """콘텐츠 유형별 전략 (없으면 기본 프로필)"""
        key = (content_type or "").strip().lower()
        return self.strategies.get(key) or self.strategies[self.default_strategy]


# ============================================================
# Loader
# ============================================================

def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def build_catalog(platforms_doc: Dict[str, Any], strategies_doc: Dict[str, Any]) -> PlatformCatalog:
    """YAML 문서에서 카탈로그 생성"""
    constraints = {}
    for name, constraint in platforms_doc.get('constraints', {}).items():
        platform = Platform(name)
        duration = constraint.get('optimal_duration', {})
        constraints[platform] = PlatformConstraints(
            platform=platform,
            title_max_length=int(constraint['title_max_length']),
            description_max_length=int(constraint['description_max_length']),
            min_duration=int(duration.get('min', 0)),
            max_duration=int(duration.get('max', 0)),
            formats=tuple(constraint.get('formats', [])),
            features=tuple(constraint.get('features', [])),
        )

    rules = {}
    for entry in platforms_doc.get('adaptation_rules', []):
        rule = AdaptationRule(
            source=Platform(entry['source']),
            target=Platform(entry['target']),
            title_hint=entry.get('title', ''),
            description_hint=entry.get('description', ''),
            format_hint=entry.get('format', ''),
            suggestions=tuple(entry.get('suggestions', [])),
        )
        rules[(rule.source, rule.target)] = rule

    strategies = {
        content_type: {Platform(p): dict(s) for p, s in per_platform.items()}
        for content_type, per_platform in strategies_doc.get('strategies', {}).items()
    }

    return PlatformCatalog(
        constraints=constraints,
        rules=rules,
        format_map=platforms_doc.get('format_map', {}),
        hashtags={Platform(p): list(tags) for p, tags in platforms_doc.get('hashtags', {}).items()},
        reach_multipliers={
            Platform(src): {Platform(tgt): float(m) for tgt, m in targets.items()}
            for src, targets in platforms_doc.get('reach_multipliers', {}).items()
        },
        strategies=strategies,
        default_strategy=strategies_doc.get('default', 'entertainment'),
    )


@lru_cache(maxsize=4)
def load_catalog(config_dir: Optional[str] = None) -> PlatformCatalog:
    """카탈로그 로드 (프로세스당 1회)"""
    base = Path(config_dir) if config_dir else CONFIG_DIR
    catalog = build_catalog(
        _read_yaml(base / "platforms.yaml"),
        _read_yaml(base / "strategies.yaml"),
    )
    logger.info(
        f"[Catalog] loaded {len(catalog.constraints)} platforms, "
        f"{len(catalog.rules)} rules, {len(catalog.strategies)} strategy profiles"
    )
    return catalog
