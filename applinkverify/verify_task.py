"""A verification task covering every host of one application."""

from __future__ import annotations

import logging
import re
import time
from typing import Callable, Optional

from .domain_verifier import verify_host
from .http_task import HttpRequest, HttpResponse, VerifyHttpTask
from .models import (
    AppVerifyBaseInfo,
    InnerVerifyStatus,
    TaskType,
    VerifyResultInfo,
    asset_url,
)

_LOG = logging.getLogger(__name__)

CLIENT_ERR_MAX_RETRY_COUNTS = 7
CLIENT_ERR_BASE_RETRY_DURATION_S = 3600

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Saver = Callable[[str, VerifyResultInfo], bool]
TaskSink = Callable[[VerifyHttpTask], object]


def calc_retry_duration(verify_cnt: int) -> int:
    """Seconds to wait before retrying after ``verify_cnt`` client errors."""
    return int(pow(2, verify_cnt) * CLIENT_ERR_BASE_RETRY_DURATION_S)


def _now() -> int:
    return int(time.time())


class VerifyTask:
    """Verifies the hosts of one app and saves the results once all are done.

    ``saver`` persists results and returns whether it succeeded; ``task_sink``
    receives each HTTP task that :meth:`execute` creates; ``clock`` returns the
    current time in epoch seconds.
    """

    def __init__(
        self,
        task_type: TaskType,
        base_info: AppVerifyBaseInfo,
        result_info: VerifyResultInfo,
        *,
        saver: Optional[Saver] = None,
        task_sink: Optional[TaskSink] = None,
        clock: Callable[[], int] = _now,
    ) -> None:
        self.task_type = task_type
        self.base_info = base_info
        self.result_info = VerifyResultInfo(
            app_identifier=result_info.app_identifier,
            host_verify_status_map=dict(result_info.host_verify_status_map),
        )
        self._saver = saver
        self._task_sink = task_sink
        self._clock = clock
        self._handlers: dict[InnerVerifyStatus, Callable[[str, int], bool]] = {
            InnerVerifyStatus.STATE_SUCCESS: lambda _time, _cnt: False,
            InnerVerifyStatus.FAILURE_CLIENT_ERROR: self._handle_client_error,
            InnerVerifyStatus.FORBIDDEN_FOREVER: lambda _time, _cnt: False,
        }
        self.unverified = {
            host
            for host, info in self.result_info.host_verify_status_map.items()
            if self.is_need_retry(info)
        }

    @property
    def uri_verify_map(self) -> dict[str, tuple[InnerVerifyStatus, str, int]]:
        """Current results keyed by host."""
        return self.result_info.host_verify_status_map

    def on_pre_request(self, request: HttpRequest, uri: str) -> bool:
        """Point ``request`` at the asset document of ``uri``."""
        request.url = asset_url(uri)
        request.method = "GET"
        return True

    def on_post_verify(self, uri: str, response: HttpResponse) -> InnerVerifyStatus:
        """Record the outcome for ``uri``; save everything once no host is pending."""
        status = verify_host(response.response_code, response.result, self.base_info)
        self.update_verify_result_info(uri, status)
        self.unverified.discard(uri)
        if not self.unverified:
            self.on_save_verify_result()
        _LOG.info(
            "verify result app=%s bundle=%s type=%s status=%s",
            self.base_info.app_identifier,
            self.base_info.bundle_name,
            self.task_type.name,
            status.name,
        )
        return status

    def on_save_verify_result(self) -> None:
        """Persist the collected results."""
        if not self.save_domain_verify_status(self.base_info.bundle_name, self.result_info):
            _LOG.error("saving verify result failed")

    def save_domain_verify_status(
        self, bundle_name: str, result_info: VerifyResultInfo
    ) -> bool:
        """Hand results to the saver; False when there is none or it fails."""
        if self._saver is None:
            return False
        return bool(self._saver(bundle_name, result_info))

    def execute(self) -> list[VerifyHttpTask]:
        """Create an HTTP task for each pending host and pass it to the task sink."""
        tasks = [
            VerifyHttpTask(host, self)
            for host in self.result_info.host_verify_status_map
            if host in self.unverified
        ]
        if self._task_sink is not None:
            for task in tasks:
                self._task_sink(task)
        return tasks

    def is_need_retry(self, info: tuple[InnerVerifyStatus, str, int]) -> bool:
        """Whether a host with this recorded result should be verified again."""
        status, verify_time, verify_cnt = info
        handler = self._handlers.get(status)
        if handler is None:
            return True
        return handler(verify_time, verify_cnt)

    def _handle_client_error(self, verify_time: str, verify_cnt: int) -> bool:
        if not verify_time:
            return True
        match = _LEADING_INT.match(verify_time)
        if match is None:
            _LOG.error("invalid verify time %r", verify_time)
            return False
        last_ts = int(match.group(1))
        duration = self._clock() - last_ts
        retry_duration = calc_retry_duration(verify_cnt)
        if duration <= retry_duration:
            _LOG.info(
                "duration %d is within retry duration %d, not retrying",
                duration,
                retry_duration,
            )
            return False
        return True

    def update_verify_result_info(self, uri: str, status: InnerVerifyStatus) -> None:
        """Record ``status`` for ``uri`` with the current time and retry count."""
        verify_ts = str(self._clock())
        status_map = self.result_info.host_verify_status_map
        previous = status_map.get(uri)
        verify_cnt = 0
        if previous is not None and status is InnerVerifyStatus.FAILURE_CLIENT_ERROR:
            verify_cnt = previous[2] + 1
            if verify_cnt >= CLIENT_ERR_MAX_RETRY_COUNTS:
                status = InnerVerifyStatus.FORBIDDEN_FOREVER
        status_map[uri] = (status, verify_ts, verify_cnt)