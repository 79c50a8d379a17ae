"""
도메인 계층 예외 정의

이 모듈은 POS 대시보드 도메인 계층에서 발생할 수 있는
모든 예외를 정의합니다. UI 계층은 이 예외들을 잡아서
사용자 친화적인 에러 메시지로 변환합니다.
"""

from __future__ import annotations


class DomainError(Exception):
    """
    도메인 계층의 기본 예외 클래스.

    모든 도메인 예외는 이 클래스를 상속합니다.
    """

    pass


class ValidationError(DomainError):
    """
    데이터 검증 실패 시 발생하는 예외.

    조회 결과가 집계에 필요한 형태를 갖추지 못했을 때 발생합니다.
    예: 필수 컬럼 누락
    """

    pass


class DataLoadError(DomainError):
    """
    데이터 로드 실패 시 발생하는 예외.

    Supabase 테이블 조회 중 오류가 발생한 경우 사용합니다.
    """

    def __init__(self, message: str, *, table: str | None = None) -> None:
        super().__init__(message)
        self.table = table


class ConfigError(DomainError):
    """
    설정 누락 시 발생하는 예외.

    Supabase URL/키가 secrets와 환경변수 어디에도 없을 때,
    알림 임계값의 시각 설정이 범위를 벗어났을 때 사용합니다.
    """

    pass


class AlertRuleError(DomainError):
    """
    알림 규칙 테이블이 잘못 구성되었을 때 발생하는 예외.

    예: 규칙 ID 중복, 알 수 없는 심각도/카테고리
    """

    pass
