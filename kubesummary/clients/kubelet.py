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

import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple
from urllib.parse import quote

import httpx

from kubesummary.core.exceptions import (
    ConfigurationError,
    DecodeError,
    HTTPStatusError,
    NotFoundError,
)
from kubesummary.domain.config import KubeletClientConfig
from kubesummary.domain.summary import Summary


log = logging.getLogger("kubesummary.kubelet")


_DEFAULT_PORTS = {"http": 80, "https": 443}


def _bracket(host: str) -> str:
    return f"[{host}]" if ":" in host else host


def join_host_port(host: str, port: Optional[int]) -> str:
    if port is None:
        return _bracket(host)
    return f"{_bracket(host)}:{port}"


def _apiserver_address(raw: str, required: bool) -> Tuple[str, Optional[int]]:
    """Split the apiserver URL into host and port.

    httpx drops a port equal to the scheme default, so it is restored from
    the apiserver URL's own scheme; the request scheme may differ from it.
    """
    if not raw:
        if required:
            raise ConfigurationError("apiserver host is required in proxy mode")
        return "", None
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as e:
        raise ConfigurationError("invalid apiserver host", {"apiserver_host": raw}, cause=e)
    if not url.host:
        if required:
            raise ConfigurationError("apiserver host has no host part", {"apiserver_host": raw})
        return "", None
    return url.host, url.port or _DEFAULT_PORTS.get(url.scheme)


class SummaryFetcher(ABC):
    """Knows how to fetch summary metrics from a kubelet."""

    @abstractmethod
    async def get_summary(self, node: str) -> Summary:
        """Fetch summary metrics for the given node."""


class KubeletClient(SummaryFetcher):
    """Fetches `/stats/summary/` from kubelets, directly or via the apiserver proxy.

    The transport is owned by the caller and carries TLS and auth settings;
    certificate hostname validation is whatever that transport does.
    Instances hold no per-call state and may be shared between tasks.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport, config: KubeletClientConfig):
        if transport is None:
            raise ConfigurationError("a transport is required")
        if not config.use_proxy and not 0 < config.port < 65536:
            raise ConfigurationError("kubelet port out of range", {"port": config.port})
        self.port = config.port
        self.insecure_no_tls = config.insecure_no_tls
        self.use_proxy = config.use_proxy
        self._apiserver, self._apiserver_port = _apiserver_address(config.apiserver_host, required=config.use_proxy)
        self.apiserver_host = join_host_port(self._apiserver, self._apiserver_port) if self._apiserver else ""
        self._client = httpx.AsyncClient(transport=transport, timeout=config.timeout_sec)

    def summary_url(self, node: str) -> httpx.URL:
        scheme = "http" if self.insecure_no_tls else "https"
        if self.use_proxy:
            path = f"/api/v1/nodes/{quote(node)}/proxy/stats/summary/"
            host, port = self._apiserver, self._apiserver_port
        else:
            path = "/stats/summary/"
            host, port = node, self.port
        return httpx.URL(scheme=scheme, host=_bracket(host), port=port, path=path)

    async def get_summary(self, node: str) -> Summary:
        url = self.summary_url(node)
        response = await self._client.get(url)
        body = response.text
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(str(url))
        if not response.is_success:
            status = f"{response.status_code} {response.reason_phrase}".strip()
            raise HTTPStatusError(str(url), response.status_code, status, body)

        log.debug("Raw response from kubelet at %s: %s", url.netloc.decode("ascii"), body)
        try:
            return Summary.from_json(body)
        except ValueError as e:
            raise DecodeError(str(url), body, e)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "KubeletClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


def new_kubelet_client(transport: httpx.AsyncBaseTransport, config: KubeletClientConfig) -> KubeletClient:
    return KubeletClient(transport, config)
