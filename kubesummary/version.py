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
import subprocess
from importlib import metadata


def get_version() -> str:
    env_override = os.environ.get('KUBESUMMARY_VERSION')
    if env_override:
        return env_override
    try:
        return metadata.version('kubelet-summary')
    except metadata.PackageNotFoundError:
        pass
    try:
        result = subprocess.run(
            ['git', 'describe', '--tags', '--always', '--dirty'],
            check=True,
            capture_output=True,
            text=True,
        )
        version = result.stdout.strip()
        if version:
            return version
    except (OSError, subprocess.CalledProcessError):
        pass
    return 'unknown'
