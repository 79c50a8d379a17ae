"""알림 보드: 최신 알림 목록과 세션 동안의 숨김(dismiss) 상태."""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List

from pos_dashboard.domain.models import Alert

logger = logging.getLogger(__name__)


class AlertBoard:
    """
    최신 알림 목록과 숨긴 알림 ID 집합.

    - replace()는 새로 계산된 목록으로 통째로 교체 (이전 목록과 병합하지 않음)
    - 숨김은 해당 규칙이 계속 발생하는 동안 유지되고,
      규칙이 한 번 멈추면 잊혀서 다시 발생하면 다시 보임

    Examples:
        >>> board = AlertBoard()
        >>> board.replace(alerts)
        >>> board.dismiss("low-stock")
        True
        >>> [a.id for a in board.active]
    """

    def __init__(self) -> None:
        self._alerts: List[Alert] = []
        self._dismissed: set[str] = set()

    def replace(self, alerts: Iterable[Alert]) -> None:
        self._alerts = list(alerts)
        firing = {alert.id for alert in self._alerts}
        forgotten = self._dismissed - firing
        if forgotten:
            logger.debug(f"Forgetting dismissals for resolved alerts: {sorted(forgotten)}")
        self._dismissed &= firing

    def dismiss(self, alert_id: str) -> bool:
        """
        알림 하나를 숨깁니다.

        Returns:
            활성 목록에서 실제로 제거되었으면 True
        """
        if alert_id in self._dismissed or all(a.id != alert_id for a in self._alerts):
            return False
        self._dismissed.add(alert_id)
        logger.info(f"Alert dismissed: {alert_id}")
        return True

    @property
    def alerts(self) -> List[Alert]:
        """숨긴 알림을 포함한 최신 목록."""
        return list(self._alerts)

    @property
    def active(self) -> List[Alert]:
        return [a for a in self._alerts if a.id not in self._dismissed]

    @property
    def dismissed(self) -> FrozenSet[str]:
        return frozenset(self._dismissed)

    def counts(self) -> Dict[str, int]:
        """활성 알림의 심각도별 개수 (critical, warning, opportunity, total)."""
        active = self.active
        return {
            "critical": sum(1 for a in active if a.severity == "critical"),
            "warning": sum(1 for a in active if a.severity == "warning"),
            "opportunity": sum(1 for a in active if a.severity == "opportunity"),
            "total": len(active),
        }
