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

import argparse
import asyncio
import json
import sys
from typing import List, Optional

import httpx

from kubesummary.clients.kubelet import new_kubelet_client
from kubesummary.clients.transport import build_transport
from kubesummary.core.exceptions import KubeSummaryError, is_not_found
from kubesummary.core.logging import setup_logging
from kubesummary.domain.config import Config, load_config
from kubesummary.version import get_version


async def run(cfg: Config, nodes: List[str]) -> int:
    log = setup_logging(cfg.log_level)
    log.info("kubelet-summary version: %s", get_version())

    transport = build_transport(cfg.transport_config())
    async with new_kubelet_client(transport, cfg.client_config()) as client:
        for node in nodes:
            try:
                summary = await client.get_summary(node)
            except KubeSummaryError as e:
                if is_not_found(e):
                    log.warning("No summary for node %s: %s", node, e)
                    continue
                raise
            print(json.dumps({"node": node, "summary": summary.to_dict()}))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch kubelet summary statistics for nodes")
    parser.add_argument("nodes", nargs="+", help="node names as known to the kubelet / apiserver")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    args = parser.parse_args(argv)

    try:
        cfg = load_config()
        if args.log_level:
            cfg.log_level = args.log_level
        return asyncio.run(run(cfg, args.nodes))
    except (KubeSummaryError, httpx.HTTPError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
