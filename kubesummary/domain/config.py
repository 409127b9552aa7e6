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

import os
from dataclasses import dataclass
from typing import Optional

from kubesummary.core.exceptions import ConfigurationError, ValidationError


DEFAULT_KUBELET_PORT = 10250


@dataclass(frozen=True)
class KubeletClientConfig:
    port: int = DEFAULT_KUBELET_PORT
    insecure_no_tls: bool = False  # deprecated, plain HTTP to the kubelet
    use_proxy: bool = False
    apiserver_host: str = ""
    timeout_sec: Optional[float] = None  # None: rely on caller cancellation


@dataclass(frozen=True)
class TransportConfig:
    ca_file: Optional[str] = None
    insecure_skip_tls_verify: bool = False
    client_cert_file: Optional[str] = None
    client_key_file: Optional[str] = None
    bearer_token: Optional[str] = None
    token_file: Optional[str] = None


def _load_dotenv(path: str) -> dict:
    data: dict[str, str] = {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            for raw in f:
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip("'\"")
                data[k] = v
    except FileNotFoundError:
        pass
    return data


def _get(env: dict, name: str, default: Optional[str] = None) -> Optional[str]:
    # Support lowercase and uppercase keys
    return (
        os.environ.get(name)
        or os.environ.get(name.lower())
        or env.get(name)
        or env.get(name.lower())
        or default
    )


def _get_bool(env: dict, name: str, default: bool = False) -> bool:
    val = _get(env, name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_int(env: dict, name: str, default: int) -> int:
    val = _get(env, name)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer", {"value": val}, cause=e)


def _get_optional_float(env: dict, name: str) -> Optional[float]:
    val = _get(env, name)
    if val is None or not val.strip():
        return None
    try:
        return float(val)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number", {"value": val}, cause=e)


@dataclass
class Config:
    kubelet_port: int = DEFAULT_KUBELET_PORT
    kubelet_insecure_no_tls: bool = False
    use_api_proxy: bool = False
    apiserver_host: str = ""
    http_timeout_sec: Optional[float] = None

    # TLS / auth for the transport
    ca_file: Optional[str] = None
    insecure_skip_tls_verify: bool = False
    client_cert_file: Optional[str] = None
    client_key_file: Optional[str] = None
    bearer_token: Optional[str] = None
    token_file: Optional[str] = None

    log_level: str = "INFO"

    def __post_init__(self):
        self._validate()

    def _validate(self):
        errors = []

        if not 0 < self.kubelet_port < 65536:
            errors.append("kubelet_port must be between 1 and 65535")

        if self.use_api_proxy and not self.apiserver_host.strip():
            errors.append("apiserver_host is required when use_api_proxy is set")

        if self.http_timeout_sec is not None and self.http_timeout_sec <= 0:
            errors.append("http_timeout_sec must be positive")

        if self.client_key_file and not self.client_cert_file:
            errors.append("client_key_file requires client_cert_file")

        if self.bearer_token and self.token_file:
            errors.append("bearer_token and token_file are mutually exclusive")

        if errors:
            raise ValidationError("Configuration validation failed", {"errors": errors})

    def client_config(self) -> KubeletClientConfig:
        return KubeletClientConfig(
            port=self.kubelet_port,
            insecure_no_tls=self.kubelet_insecure_no_tls,
            use_proxy=self.use_api_proxy,
            apiserver_host=self.apiserver_host,
            timeout_sec=self.http_timeout_sec,
        )

    def transport_config(self) -> TransportConfig:
        return TransportConfig(
            ca_file=self.ca_file,
            insecure_skip_tls_verify=self.insecure_skip_tls_verify,
            client_cert_file=self.client_cert_file,
            client_key_file=self.client_key_file,
            bearer_token=self.bearer_token,
            token_file=self.token_file,
        )


def load_config() -> Config:
    try:
        envfile = os.environ.get("ENV_FILE", ".env")
        env = _load_dotenv(envfile)

        return Config(
            kubelet_port=_get_int(env, "KUBELET_PORT", DEFAULT_KUBELET_PORT),
            kubelet_insecure_no_tls=_get_bool(env, "KUBELET_INSECURE_NO_TLS", False),
            use_api_proxy=_get_bool(env, "KUBELET_USE_API_PROXY", False),
            apiserver_host=_get(env, "APISERVER_HOST", "") or "",
            http_timeout_sec=_get_optional_float(env, "HTTP_TIMEOUT_SEC"),
            ca_file=_get(env, "CA_FILE"),
            insecure_skip_tls_verify=_get_bool(env, "INSECURE_SKIP_TLS_VERIFY", False),
            client_cert_file=_get(env, "CLIENT_CERT_FILE"),
            client_key_file=_get(env, "CLIENT_KEY_FILE"),
            bearer_token=_get(env, "BEARER_TOKEN"),
            token_file=_get(env, "TOKEN_FILE"),
            log_level=_get(env, "LOG_LEVEL", "INFO") or "INFO",
        )
    except Exception as e:
        if isinstance(e, (ConfigurationError, ValidationError)):
            raise
        raise ConfigurationError("Failed to load configuration", cause=e)
