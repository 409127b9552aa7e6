"""Shared fixtures: canned kubelet payloads and a MockTransport that records requests."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List

import httpx
import pytest


SUMMARY_PAYLOAD: Dict[str, Any] = {
    "node": {
        "nodeName": "node-1",
        "startTime": "2026-10-01T08:00:00Z",
        "cpu": {"time": "2026-10-18T10:00:00Z", "usageNanoCores": 123456789, "usageCoreNanoSeconds": 987654321000},
        "memory": {"time": "2026-10-18T10:00:00Z", "availableBytes": 2048000000, "usageBytes": 1024000000, "workingSetBytes": 900000000},
        "fs": {"availableBytes": 50000000000, "capacityBytes": 100000000000, "usedBytes": 50000000000},
    },
    "pods": [
        {
            "podRef": {"name": "web-0", "namespace": "default", "uid": "0b1c"},
            "startTime": "2026-10-17T12:00:00Z",
            "containers": [
                {"name": "web", "cpu": {"usageNanoCores": 1000000}, "memory": {"workingSetBytes": 52428800}},
            ],
        },
    ],
}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], Any]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def summary_payload() -> Dict[str, Any]:
    return json.loads(json.dumps(SUMMARY_PAYLOAD))


@pytest.fixture
def ok_transport(summary_payload) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(200, json=summary_payload))


@pytest.fixture
def recording_transport():
    return RecordingTransport


@pytest.fixture
def package_logger():
    """Restore the `kubesummary` logger after a test configures it."""
    logger = logging.getLogger("kubesummary")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
