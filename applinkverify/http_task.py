"""HTTP requests that fetch a host's asset document for a verification task."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

_LOG = logging.getLogger(__name__)

MAX_RESPONSE_LEN = 20 * 1024


@dataclass
class HttpRequest:
    """An outgoing HTTP request."""

    url: str = ""
    method: str = ""


@dataclass
class HttpResponse:
    """A received HTTP response: status code and body text."""

    response_code: int = 0
    result: str = ""


@dataclass
class HttpClientTask:
    """A request ready to be sent, which may be cancelled while in flight."""

    request: HttpRequest
    cancelled: bool = False

    def cancel(self) -> None:
        """Mark the request as cancelled."""
        self.cancelled = True


class VerifyTaskCallbacks(Protocol):
    """What an HTTP task needs from the verification task that owns it."""

    def on_pre_request(self, request: HttpRequest, uri: str) -> bool:
        ...

    def on_post_verify(self, uri: str, response: HttpResponse) -> Any:
        ...


class VerifyHttpTask:
    """Fetches the asset document of one host and reports back to its task."""

    def __init__(self, uri: str, verify_task: Optional[VerifyTaskCallbacks]) -> None:
        self.uri = uri
        self.verify_task = verify_task
        self.received = 0

    def create_client_task(self) -> Optional[HttpClientTask]:
        """Build the client task, or return None if the request can not be prepared."""
        if self.verify_task is None:
            _LOG.error("no verify task to prepare the request")
            return None
        request = HttpRequest()
        if not self.verify_task.on_pre_request(request, self.uri):
            _LOG.error("preparing the request failed")
            return None
        return HttpClientTask(request)

    def _report(self, response: HttpResponse) -> None:
        if self.verify_task is not None:
            self.verify_task.on_post_verify(self.uri, response)

    def on_success(self, request: HttpRequest, response: HttpResponse) -> None:
        """Forward a completed response to the verification task."""
        self._report(response)

    def on_fail(self, request: HttpRequest, response: HttpResponse, error: Any) -> None:
        """Forward a failed response to the verification task."""
        _LOG.error("request to %s failed: %s", self.uri, error)
        self._report(response)

    def on_cancel(self, request: HttpRequest, response: HttpResponse) -> None:
        """Forward a cancelled response to the verification task."""
        _LOG.warning("request to %s cancelled", self.uri)
        self._report(response)

    def on_data_receive(
        self, task: Optional[HttpClientTask], request: HttpRequest, data: bytes
    ) -> None:
        """Count received bytes and cancel the task once the limit would be exceeded."""
        length = len(data)
        if self.received + length > MAX_RESPONSE_LEN:
            _LOG.warning("received data exceeds limit, cancelling")
            if task is not None:
                task.cancel()
        else:
            self.received += length