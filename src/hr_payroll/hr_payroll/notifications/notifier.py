"""Salary notifications.

Delivery (email) belongs to the serverless function behind NOTIFY_URL; this
module only fires the request, off the request thread. Every failure is
logged and swallowed so a salary write is never blocked or rolled back by
a notification.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Protocol

import httpx

from ..core.constants import DEFAULT_NOTIFY_TIMEOUT_SECONDS
from ..core.enums import NotificationType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SalaryNotification:
    type: NotificationType
    employee_id: str
    month: date
    net_salary: Decimal

    def to_payload(self) -> dict:
        return {
            "type": self.type.value,
            "userId": self.employee_id,
            "month": self.month.strftime("%Y-%m"),
            "netSalary": float(self.net_salary),
        }


class SalaryNotifier(Protocol):
    def notify(self, notification: SalaryNotification) -> None:
        raise NotImplementedError


class NullNotifier(SalaryNotifier):
    """Used when no notification endpoint is configured."""

    def notify(self, notification: SalaryNotification) -> None:
        logger.debug("Notification %s for %s skipped (no endpoint)", notification.type.value, notification.employee_id)


class HttpSalaryNotifier(SalaryNotifier):
    def __init__(
        self,
        url: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
    ):
        self._url = url
        self._api_key = api_key
        self._timeout = timeout
        self._client = client

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def notify(self, notification: SalaryNotification) -> None:
        payload = notification.to_payload()
        try:
            if self._client is not None:
                response = self._client.post(self._url, json=payload, headers=self._headers(), timeout=self._timeout)
            else:
                response = httpx.post(self._url, json=payload, headers=self._headers(), timeout=self._timeout)
            response.raise_for_status()
            logger.info("Sent %s notification for employee %s", notification.type.value, notification.employee_id)
        except httpx.HTTPError as e:
            logger.error("Failed to send %s notification for %s: %s", notification.type.value, notification.employee_id, e)


class BackgroundNotifier(SalaryNotifier):
    """Hand each notification to a single worker thread; `notify` returns at once."""

    def __init__(self, inner: SalaryNotifier, *, executor: Optional[ThreadPoolExecutor] = None):
        self._inner = inner
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="salary-notify")

    @property
    def inner(self) -> SalaryNotifier:
        return self._inner

    def notify(self, notification: SalaryNotification) -> None:
        def _done(future: Future) -> None:
            if future.cancelled():
                logger.warning("%s notification for %s was cancelled", notification.type.value, notification.employee_id)
                return
            exc = future.exception()
            if exc is not None:
                logger.error("%s notification for %s failed: %s", notification.type.value, notification.employee_id, exc)

        self._executor.submit(self._inner.notify, notification).add_done_callback(_done)

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


def build_notifier(url: Optional[str], *, api_key: Optional[str] = None, timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS) -> SalaryNotifier:
    if not url:
        return NullNotifier()
    return BackgroundNotifier(HttpSalaryNotifier(url, api_key=api_key, timeout=timeout))
