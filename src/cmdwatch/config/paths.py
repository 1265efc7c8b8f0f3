"""Where cmdwatch looks for config.yaml.

Three layers, merged lowest first:

    system   /etc/cmdwatch/config.yaml        %PROGRAMDATA%\\cmdwatch\\config.yaml
    user     $XDG_CONFIG_HOME/cmdwatch/...    %APPDATA%\\cmdwatch\\config.yaml
             (~/.config/cmdwatch/... when XDG_CONFIG_HOME is unset)
    project  <project_root>/.cmdwatch/config.yaml

A file given with --config is applied on top of these by the loader.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

CONFIG_FILENAME = "config.yaml"


def get_config_paths(project_root: str | Path | None = None) -> list[Path]:
    """Candidate config files, lowest priority first. None of them need exist.

    A layer whose base directory cannot be determined (an unset
    PROGRAMDATA or APPDATA on Windows) is left out.
    """
    env = os.environ
    if sys.platform == "win32":
        bases = [env.get("PROGRAMDATA"), env.get("APPDATA")]
    else:
        bases = ["/etc", env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")]

    paths = [Path(base) / "cmdwatch" / CONFIG_FILENAME for base in bases if base]
    if project_root:
        paths.append(Path(project_root) / ".cmdwatch" / CONFIG_FILENAME)
    return paths
