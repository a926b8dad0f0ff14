"""Action outputs (``tag`` and ``new-tag``)."""

from __future__ import annotations

from pathlib import Path

from autotag.core.result import Err, Ok, Result
from autotag.output.console import ConsoleProtocol, Style
from autotag.services.release.errors import ReleaseError


class ActionOutputs:
    """Collects outputs and appends them to ``$GITHUB_OUTPUT`` when set.

    Values already written stay written if the run fails later.
    """

    def __init__(self, *, path: Path | None, console: ConsoleProtocol) -> None:
        self._path = path
        self._console = console
        self.values: dict[str, str] = {}

    def set(self, key: str, value: str) -> Result[None, ReleaseError]:
        if "\n" in value:
            return Err(
                ReleaseError(kind="output_failed", message=f"multi-line value for output {key}")
            )

        self.values[key] = value
        self._console.print(f"output {key}={value}", Style.DIM)

        if self._path is None:
            return Ok(None)
        try:
            with self._path.open("a", encoding="utf-8") as f:
                f.write(f"{key}={value}\n")
        except OSError as e:
            return Err(
                ReleaseError(
                    kind="output_failed",
                    message=f"failed to write output {key}: {e}",
                    hint=str(self._path),
                )
            )
        return Ok(None)
