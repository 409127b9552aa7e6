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
import ssl
from pathlib import Path
from typing import Optional

import httpx

from kubesummary.core.exceptions import ConfigurationError
from kubesummary.domain.config import TransportConfig


log = logging.getLogger("kubesummary.transport")


class BearerTokenTransport(httpx.AsyncBaseTransport):
    """Adds an `Authorization: Bearer` header to every request."""

    def __init__(self, inner: httpx.AsyncBaseTransport, token: str):
        self._inner = inner
        self._token = token

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        request.headers["Authorization"] = f"Bearer {self._token}"
        return await self._inner.handle_async_request(request)

    async def aclose(self) -> None:
        await self._inner.aclose()


def build_ssl_context(cfg: TransportConfig) -> ssl.SSLContext:
    try:
        ctx = ssl.create_default_context(cafile=cfg.ca_file)
        if cfg.insecure_skip_tls_verify:
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
        if cfg.client_cert_file:
            ctx.load_cert_chain(cfg.client_cert_file, cfg.client_key_file)
    except (OSError, ssl.SSLError) as e:
        raise ConfigurationError("failed to set up TLS", {"ca_file": cfg.ca_file}, cause=e)
    return ctx


def _read_token(cfg: TransportConfig) -> Optional[str]:
    if cfg.bearer_token:
        return cfg.bearer_token
    if not cfg.token_file:
        return None
    try:
        token = Path(cfg.token_file).read_text(encoding="utf-8").strip()
    except OSError as e:
        raise ConfigurationError("failed to read token file", {"token_file": cfg.token_file}, cause=e)
    return token or None


def build_transport(cfg: TransportConfig) -> httpx.AsyncBaseTransport:
    if cfg.insecure_skip_tls_verify:
        log.warning("TLS certificate verification is disabled")
    transport: httpx.AsyncBaseTransport = httpx.AsyncHTTPTransport(verify=build_ssl_context(cfg))
    token = _read_token(cfg)
    if token:
        transport = BearerTokenTransport(transport, token)
    return transport
