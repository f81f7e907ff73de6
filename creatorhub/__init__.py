"""
CreatorHub Analytics
크리에이터 분석 / 진행도 예측 / 크로스 플랫폼 콘텐츠 변환 서비스
"""

__version__ = "1.0.0"
