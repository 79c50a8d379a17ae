"""
POS 대시보드 패키지

매장 판매/재고/고객/지출/레이바이 지표를 Supabase에서 불러와
KPI 카드, 차트, 비즈니스 알림으로 보여주는 Streamlit 대시보드입니다.
주요 구성:
- 도메인 로직(집계, 알림 규칙)과 UI 로직의 분리
- Streamlit 의존성을 UI 계층으로 격리
- 알림 임계값을 하나의 설정 테이블로 통합
"""

from __future__ import annotations

__version__ = "1.0.0"
