from __future__ import annotations

import os
from pathlib import Path
from typing import NoReturn

import typer

from autotag import __version__
from autotag.cli.context import build_context, read_action_inputs
from autotag.core.errors import ErrorCode
from autotag.core.result import Err
from autotag.output.console import ConsoleProtocol, Style
from autotag.services.release.commits import classify_commit
from autotag.services.release.errors import ReleaseError
from autotag.services.release.gh import GhRepositoryClient, ensure_gh_available
from autotag.services.release.model import RunContext
from autotag.services.release.outputs import ActionOutputs
from autotag.services.release.params import INPUT_KEYS, build_parameters
from autotag.services.release.service import run_release

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def release_error_code(error: ReleaseError) -> ErrorCode:
    if error.kind in {"gh_missing", "gh_auth_required"}:
        return ErrorCode.ENV_ERROR
    if error.kind in {"gh_failed", "tag_create_failed"}:
        return ErrorCode.NETWORK_ERROR
    if error.kind == "output_failed":
        return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR


def _fail(error: ReleaseError, *, console: ConsoleProtocol) -> NoReturn:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error)))


def _parse_overrides(values: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or key not in INPUT_KEYS:
            typer.echo(f"error: invalid --input {item!r}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        out[key] = value
    return out


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def run(
    repo: str = typer.Option(
        "", "--repo", envvar="GITHUB_REPOSITORY", help="owner/name of the repository"
    ),
    ref: str = typer.Option("", "--ref", envvar="GITHUB_REF", help="Ref that triggered the run"),
    output_file: Path | None = typer.Option(
        None, "--output-file", envvar="GITHUB_OUTPUT", help="File receiving action outputs"
    ),
    inputs: list[str] = typer.Option(
        [], "--input", "-i", help="Override an action input: KEY=VALUE (repeatable)"
    ),
) -> None:
    """Decide on the next tag for the triggering branch and apply it."""
    ctx = build_context()
    console = ctx.console

    raw = read_action_inputs(os.environ)
    raw.update(_parse_overrides(inputs))

    params = build_parameters(raw)
    if isinstance(params, Err):
        _fail(params.error, console=console)

    if not repo:
        _fail(
            ReleaseError(
                kind="invalid_input",
                message="repository is not set",
                hint="Pass --repo owner/name or set GITHUB_REPOSITORY.",
            ),
            console=console,
        )

    gh = ensure_gh_available()
    if isinstance(gh, Err):
        _fail(gh.error, console=console)

    client = GhRepositoryClient(
        repo=repo,
        workspace_root=ctx.workspace_root,
        token=params.value.token,
    )
    outputs = ActionOutputs(path=output_file, console=console)

    result = run_release(
        params=params.value,
        client=client,
        context=RunContext(repo=repo, ref=ref),
        console=console,
        outputs=outputs,
    )
    if isinstance(result, Err):
        _fail(result.error, console=console)

    report = result.value
    match report.decision.outcome:
        case "candidate":
            verb = "applied" if report.applied else "computed (dry run)"
            console.success(f"{report.decision.tag} {verb}")
        case "tag_exists":
            console.info("tag already exists, nothing applied")
        case "no_change":
            console.info("nothing to tag")
    console.info("success")


@app.command()
def classify(message: str = typer.Argument(..., help="Commit message to classify")) -> None:
    """Show how a commit message counts towards the next version."""
    typer.echo(str(classify_commit(message)))


def main() -> None:
    app()
