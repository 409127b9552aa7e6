# This file is part of kubelet-summary.
#
# kubelet-summary is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# kubelet-summary is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with kubelet-summary. If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class KubeSummaryError(Exception):
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        msg = super().__str__()
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            msg += f" (context: {ctx_str})"
        if self.cause:
            msg += f" (caused by: {self.cause})"
        return msg


class ConfigurationError(KubeSummaryError):
    pass


class ValidationError(KubeSummaryError):
    pass


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    HTTP_STATUS = "http_status"
    DECODE = "decode"


class SummaryRequestError(KubeSummaryError):
    """A kubelet answered, but not with a usable summary."""

    kind: ErrorKind

    def __init__(self, message: str, url: str, cause: Optional[Exception] = None):
        super().__init__(message, cause=cause)
        self.url = url


class NotFoundError(SummaryRequestError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, url: str):
        super().__init__(f"{url!r} not found", url)


class HTTPStatusError(SummaryRequestError):
    kind = ErrorKind.HTTP_STATUS

    def __init__(self, url: str, status_code: int, status: str, body: str):
        super().__init__(f"request failed - {status!r}, response: {body!r}", url)
        self.status_code = status_code
        self.body = body


class DecodeError(SummaryRequestError):
    kind = ErrorKind.DECODE

    def __init__(self, url: str, body: str, cause: Exception):
        super().__init__(f"failed to parse output. Response: {body!r}", url, cause=cause)
        self.body = body


def is_not_found(err: Optional[BaseException]) -> bool:
    """Tell whether `err` means the node has no summary endpoint (HTTP 404)."""
    return getattr(err, "kind", None) is ErrorKind.NOT_FOUND
