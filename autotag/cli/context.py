from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from autotag.output.console import ConsoleProtocol, RichConsole
from autotag.services.release.params import INPUT_KEYS


@dataclass(frozen=True, slots=True)
class CLIContext:
    workspace_root: Path
    console: ConsoleProtocol


def build_context() -> CLIContext:
    root = os.environ.get("GITHUB_WORKSPACE")
    workspace_root = Path(root) if root and Path(root).is_dir() else Path.cwd()
    return CLIContext(workspace_root=workspace_root, console=RichConsole())


def read_action_inputs(env: Mapping[str, str]) -> dict[str, str]:
    """Collect ``INPUT_<NAME>`` variables the way the Actions runner sets them.

    The runner upper-cases the name and keeps hyphens (``INPUT_DRY-RUN``);
    the underscore spelling is accepted too for local runs.
    """
    out: dict[str, str] = {}
    for key in INPUT_KEYS:
        upper = key.upper()
        for name in (f"INPUT_{upper}", f"INPUT_{upper.replace('-', '_')}"):
            value = env.get(name)
            if value is not None:
                out[key] = value
                break
    return out
