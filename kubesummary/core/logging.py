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
import os
from typing import IO, Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "kubesummary"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: Optional[str] = None, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Configure the `kubesummary` logger and return it.

    Level comes from the argument or env `LOG_LEVEL` (default INFO); unknown
    names fall back to INFO. Calling it again only changes the level. The
    httpx/httpcore request chatter stays at WARNING unless running at DEBUG,
    which is also the only level that shows raw kubelet responses.
    """
    lvl = _resolve_level(level)
    logger = logging.getLogger("kubesummary")
    logger.setLevel(lvl)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.DEBUG if lvl <= logging.DEBUG else logging.WARNING)
    return logger
