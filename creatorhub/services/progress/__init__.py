"""진행률 분석 서비스"""
from creatorhub.services.progress.projector import ProgressProjector, calculate_streaks, classify_pace

__all__ = ['ProgressProjector', 'calculate_streaks', 'classify_pace']
