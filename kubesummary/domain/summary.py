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

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Summary:
    """Decoded `/stats/summary` payload.

    The kubelet owns the schema; only the two top-level sections are named
    here and everything else is carried through untouched in `extra`.
    """

    node: Dict[str, Any] = field(default_factory=dict)
    pods: List[Dict[str, Any]] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)
    _keys: tuple = field(default=(), repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "Summary":
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        node = data.get("node", {})
        pods = data.get("pods", [])
        if not isinstance(node, dict):
            raise ValueError("'node' must be an object")
        if not isinstance(pods, list) or not all(isinstance(p, dict) for p in pods):
            raise ValueError("'pods' must be a list of objects")
        extra = {k: v for k, v in data.items() if k not in ("node", "pods")}
        return cls(node=node, pods=pods, extra=extra, _keys=tuple(data.keys()))

    @classmethod
    def from_json(cls, text: str) -> "Summary":
        try:
            data = json.loads(text)
        except RecursionError as e:
            raise ValueError(f"JSON nested too deeply: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = {"node": self.node, "pods": self.pods, **self.extra}
        keys = self._keys or tuple(merged.keys())
        return {k: merged[k] for k in keys}

    @property
    def node_name(self) -> Optional[str]:
        return self.node.get("nodeName")

    @property
    def pod_count(self) -> int:
        return len(self.pods)
