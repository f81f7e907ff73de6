"""
Services 패키지
- storage: 저장소 포트 (SQL / 인메모리)
- shared: 공통 인프라 (Cache)
- analytics: 분석 스냅샷 / 추천 / 경쟁자 / 내보내기
- progress: 로드맵 진행률
- content: 크로스 플랫폼 변환 / 동기화
"""
