"""Command line interface for cfhelper."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from cfhelper.config import ConfigError, ConfigManager, flatten_for_env
from cfhelper.export import (
    ExportFormat,
    NothingToExportError,
    default_filename,
    export_submissions,
    format_timestamp,
    verdict_text,
)
from cfhelper.folders import (
    IMPORTED_PROBLEM_NAME,
    DuplicateProblemError,
    FolderError,
    FolderNotFoundError,
    parse_problem_reference,
)
from cfhelper.remote import NetworkError, RemoteStatusError
from cfhelper.search import (
    CatalogEmptyError,
    FilterEmptyError,
    ProblemFilter,
    pick,
    problem_url,
    search as run_search,
)
from cfhelper.state import StateError
from cfhelper.state.models import Folder, Problem
from cfhelper.submissions import StoreError
from cfhelper.submissions.models import SubmissionRecord
from cfhelper.submissions.sync import sync_submissions
from cfhelper.workspace import Workspace

console = Console()

_ERROR_CODES: tuple[tuple[type[Exception], str], ...] = (
    (NetworkError, "network_error"),
    (RemoteStatusError, "remote_status"),
    (StateError, "state_error"),
    (StoreError, "store_error"),
    (FolderNotFoundError, "folder_not_found"),
    (DuplicateProblemError, "duplicate_problem"),
    (FolderError, "folder_error"),
    (CatalogEmptyError, "catalog_empty"),
    (FilterEmptyError, "filter_empty"),
    (NothingToExportError, "nothing_to_export"),
    (ConfigError, "config_error"),
)
_HANDLED_ERRORS = tuple(error_type for error_type, _ in _ERROR_CODES)


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output.
        click.ClickException: For non-JSON flows.
    """
    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    raise click.ClickException(message) from original


def _fail(exc: Exception, *, json_output: bool = False) -> None:
    """Report a known domain error through ``_handle_cli_error``."""
    code = next(
        (name for error_type, name in _ERROR_CODES if isinstance(exc, error_type)),
        "internal_error",
    )
    details = {"comment": exc.comment} if isinstance(exc, RemoteStatusError) else None
    _handle_cli_error(str(exc), code=code, json_output=json_output, details=details, original=exc)


def _emit(message: Any, *, quiet: bool) -> None:
    if not quiet:
        console.print(message)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _workspace(ctx: click.Context) -> Workspace:
    """Load configuration once per invocation and return the shared workspace.

    Raises:
        click.ClickException: If the configuration cannot be loaded.
    """
    root = ctx.find_root()
    state = root.ensure_object(dict)
    workspace = state.get("workspace")
    if workspace is None:
        try:
            config = ConfigManager().load()
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc
        _configure_logging("DEBUG" if state.get("verbose") else config.logging.level)
        workspace = Workspace(config)
        state["workspace"] = workspace
        root.call_on_close(workspace.close)
    return workspace


def _quiet(ctx: click.Context, workspace: Workspace) -> bool:
    return bool(ctx.find_root().ensure_object(dict).get("quiet")) or workspace.config.cli.quiet_default


def _problem_payload(problem: Problem) -> dict[str, Any]:
    return problem.model_dump(mode="json", by_alias=True, exclude_none=True)


def _problem_table(title: str, problems: Iterable[Problem]) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Rating", justify="right")
    table.add_column("Tags", style="dim")
    for problem in problems:
        rating = str(problem.rating) if problem.rating else "-"
        table.add_row(problem.id, problem.name, rating, ", ".join(problem.tags))
    return table


def _folder_table(title: str, folders: Iterable[Folder]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Problems", justify="right")
    for folder in folders:
        table.add_row(folder.id, folder.title, str(len(folder.problems)))
    return table


def _submission_table(records: Iterable[SubmissionRecord]) -> Table:
    table = Table(title="Submissions")
    table.add_column("ID", justify="right", no_wrap=True)
    table.add_column("Problem", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Verdict")
    table.add_column("Language", style="dim")
    table.add_column("When", no_wrap=True)
    for record in records:
        style = "green" if record.accepted else "red"
        table.add_row(
            str(record.id),
            record.problem_id,
            record.name,
            f"[{style}]{verdict_text(record)}[/{style}]",
            record.programming_language,
            format_timestamp(record.creation_time_seconds),
        )
    return table


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="cfhelper")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """cfhelper keeps an offline Codeforces catalog alongside your folders and submissions."""
    state = ctx.ensure_object(dict)
    state["verbose"] = verbose
    state["quiet"] = quiet


# Catalog ---------------------------------------------------------------


@cli.group()
def catalog() -> None:
    """Download and inspect the cached problem catalog."""


@catalog.command("refresh")
@click.option("--if-stale", is_flag=True, help="Only download when the cache is stale.")
@click.option("--json", "json_output", is_flag=True, help="Emit the result as JSON.")
@click.pass_context
def catalog_refresh(ctx: click.Context, if_stale: bool, json_output: bool) -> None:
    """Replace the cached catalog with a fresh download."""
    workspace = _workspace(ctx)
    quiet = _quiet(ctx, workspace)
    try:
        problems = workspace.catalog()
        if if_stale and not problems.is_stale(workspace.catalog_ttl):
            if json_output:
                console.print_json(data={"refreshed": False, "problems": len(problems)})
            else:
                _emit(
                    f"[green]Catalog is fresh ({len(problems)} problems); nothing to do.[/green]",
                    quiet=quiet,
                )
            return
        count = problems.refresh()
    except _HANDLED_ERRORS as exc:
        _fail(exc, json_output=json_output)
        return

    if json_output:
        console.print_json(data={"refreshed": True, "problems": count})
        return
    _emit(f"[green]Catalog refreshed: {count} problems.[/green]", quiet=quiet)


@catalog.command("info")
@click.option("--json", "json_output", is_flag=True, help="Emit the summary as JSON.")
@click.pass_context
def catalog_info(ctx: click.Context, json_output: bool) -> None:
    """Show the catalog size and cache age."""
    workspace = _workspace(ctx)
    try:
        problems = workspace.catalog()
    except _HANDLED_ERRORS as exc:
        _fail(exc, json_output=json_output)
        return

    fetched_at = problems.fetched_at
    payload = {
        "problems": len(problems),
        "fetched_at": fetched_at.isoformat() if fetched_at else None,
        "stale": problems.is_stale(workspace.catalog_ttl),
        "ttl_hours": workspace.config.catalog.ttl_hours,
    }
    if json_output:
        console.print_json(data=payload)
        return

    if fetched_at is None:
        console.print("[yellow]Catalog has never been downloaded. Run `cfhelper catalog refresh`.[/yellow]")
        return
    state = "[red]stale[/red]" if payload["stale"] else "[green]fresh[/green]"
    console.print(f"{len(problems)} problems, fetched {fetched_at:%Y-%m-%d %H:%M} UTC ({state}).")


@catalog.command("tags")
@click.argument("tag", required=False)
@click.option("--json", "json_output", is_flag=True, help="Emit folders as JSON.")
@click.pass_context
def catalog_tags(ctx: click.Context, tag: Optional[str], json_output: bool) -> None:
    """List the per-tag folders, or the problems of one TAG."""
    workspace = _workspace(ctx)
    try:
        folders = workspace.catalog().system_folders
    except _HANDLED_ERRORS as exc:
        _fail(exc, json_output=json_output)
        return

    if tag is not None:
        wanted = tag.lower()
        folders = [folder for folder in folders if folder.id == f"sys_{wanted}"]
        if not folders:
            _handle_cli_error(
                f"Tag {tag!r} is not in the configured registry.",
                code="unknown_tag",
                json_output=json_output,
            )
            return

    if json_output:
        console.print_json(data=[folder.model_dump(mode="json", by_alias=True) for folder in folders])
        return
    if tag is not None:
        console.print(_problem_table(folders[0].title, folders[0].problems))
        return
    console.print(_folder_table("Tag folders", folders))


# Search ----------------------------------------------------------------


@cli.command()
@click.argument("query", required=False, default="")
@click.option("--min-rating", type=int, default=None, help="Lowest rating to include.")
@click.option("--max-rating", type=int, default=None, help="Highest rating to include.")
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON.")
@click.pass_context
def search(
    ctx: click.Context,
    query: str,
    min_rating: Optional[int],
    max_rating: Optional[int],
    json_output: bool,
) -> None:
    """Search your folders and the catalog by id, name, tag, and rating."""
    workspace = _workspace(ctx)
    try:
        problems = workspace.catalog()
        custom = workspace.folders().list_folders()
    except _HANDLED_ERRORS as exc:
        _fail(exc, json_output=json_output)
        return

    results = run_search(
        query,
        min_rating,
        max_rating,
        custom,
        problems.problems,
        limit=workspace.config.search.result_limit,
        default_max_rating=workspace.config.search.default_max_rating,
    )
    active = ProblemFilter(query, min_rating, max_rating).is_active

    if json_output:
        console.print_json(
            data={
                "active": active,
                "my": [_problem_payload(problem) for problem in results.my],
                "global": [_problem_payload(problem) for problem in results.global_],
            }
        )
        return

    if not active:
        console.print("[yellow]No active search; showing folders instead.[/yellow]")
        console.print(_folder_table("My folders", custom))
        console.print(_folder_table("Tag folders", problems.system_folders))
        return
    if results.is_empty:
        console.print("[yellow]No problems match.[/yellow]")
        return
    if results.my:
        console.print(_problem_table("In my folders", results.my))
    console.print(_problem_table("Catalog", results.global_))


@cli.command("random")
@click.argument("query", required=False, default="")
@click.option("--min-rating", type=int, default=None, help="Lowest rating to include.")
@click.option("--max-rating", type=int, default=None, help="Highest rating to include.")
@click.option(
    "--unsolved",
    is_flag=True,
    help="Skip problems you already solved (always on when user.exclude_solved is set).",
)
@click.option("--json", "json_output", is_flag=True, help="Emit the pick as JSON.")
@click.pass_context
def random_problem(
    ctx: click.Context,
    query: str,
    min_rating: Optional[int],
    max_rating: Optional[int],
    unsolved: bool,
    json_output: bool,
) -> None:
    """Pick a random catalog problem matching QUERY and the rating bounds."""
    workspace = _workspace(ctx)
    exclude_solved = unsolved or workspace.config.user.exclude_solved
    problem_filter = ProblemFilter(
        query,
        min_rating,
        max_rating,
        default_max_rating=workspace.config.search.default_max_rating,
    )
    try:
        problems = workspace.catalog()
        exclude = workspace.store().solved_ids() if exclude_solved else None
        chosen = pick(problems.problems, problem_filter, exclude)
    except _HANDLED_ERRORS as exc:
        _fail(exc, json_output=json_output)
        return

    url = problem_url(chosen)
    if json_output:
        console.print_json(data={"problem": _problem_payload(chosen), "url": url})
        return
    rating = f" ({chosen.rating})" if chosen.rating else ""
    console.print(f"[cyan]{chosen.id}[/cyan] {chosen.name}{rating}")
    console.print(url)


# Folders ---------------------------------------------------------------


@cli.group()
def folders() -> None:
    """Manage your own problem folders."""


@folders.command("list")
@click.option("--json", "json_output", is_flag=True, help="Emit folders as JSON.")
@click.pass_context
def folders_list(ctx: click.Context, json_output: bool) -> None:
    """List custom folders."""
    workspace = _workspace(ctx)
    try:
        items = workspace.folders().list_folders()
    except _HANDLED_ERRORS as exc:
        _fail(exc, json_output=json_output)
        return
    if json_output:
        console.print_json(data=[folder.model_dump(mode="json", by_alias=True) for folder in items])
        return
    console.print(_folder_table("My folders", items))


@folders.command("show")
@click.argument("folder_id")
@click.pass_context
def folders_show(ctx: click.Context, folder_id: str) -> None:
    """Show the problems in FOLDER_ID."""
    workspace = _workspace(ctx)
    try:
        folder = workspace.folders().get(folder_id)
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    console.print(_problem_table(folder.title, folder.problems))


@folders.command("create")
@click.argument("title")
@click.pass_context
def folders_create(ctx: click.Context, title: str) -> None:
    """Create an empty folder called TITLE."""
    workspace = _workspace(ctx)
    try:
        folder = workspace.folders().create(title)
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    _emit(f"[green]Created folder {folder.title!r} ({folder.id}).[/green]", quiet=_quiet(ctx, workspace))


@folders.command("rename")
@click.argument("folder_id")
@click.argument("title")
@click.pass_context
def folders_rename(ctx: click.Context, folder_id: str, title: str) -> None:
    """Rename FOLDER_ID to TITLE."""
    workspace = _workspace(ctx)
    try:
        folder = workspace.folders().rename(folder_id, title)
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    _emit(f"[green]Renamed {folder.id} to {folder.title!r}.[/green]", quiet=_quiet(ctx, workspace))


@folders.command("delete")
@click.argument("folder_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def folders_delete(ctx: click.Context, folder_id: str, yes: bool) -> None:
    """Delete FOLDER_ID and the problem list it holds."""
    workspace = _workspace(ctx)
    if not yes:
        click.confirm(f"Delete folder {folder_id}?", abort=True)
    try:
        workspace.folders().delete(folder_id)
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    _emit(f"[green]Deleted folder {folder_id}.[/green]", quiet=_quiet(ctx, workspace))


@folders.command("add")
@click.argument("folder_id")
@click.argument("problem")
@click.pass_context
def folders_add(ctx: click.Context, folder_id: str, problem: str) -> None:
    """Add PROBLEM (an id such as 1850A or a problem URL) to FOLDER_ID."""
    workspace = _workspace(ctx)
    problem_id = parse_problem_reference(problem)
    if problem_id is None:
        raise click.ClickException(f"Cannot find a problem id in {problem!r}.")
    try:
        known = workspace.catalog().get(problem_id)
        entry = known or Problem(id=problem_id, name=IMPORTED_PROBLEM_NAME)
        folder = workspace.folders().add_problem(folder_id, entry)
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    _emit(f"[green]Added {problem_id} to {folder.title!r}.[/green]", quiet=_quiet(ctx, workspace))


@folders.command("remove")
@click.argument("folder_id")
@click.argument("problem_id")
@click.pass_context
def folders_remove(ctx: click.Context, folder_id: str, problem_id: str) -> None:
    """Remove PROBLEM_ID from FOLDER_ID."""
    workspace = _workspace(ctx)
    try:
        removed = workspace.folders().remove_problem(folder_id, problem_id.upper())
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    if not removed:
        raise click.ClickException(f"{problem_id} is not in folder {folder_id}.")
    _emit(f"[green]Removed {problem_id.upper()} from {folder_id}.[/green]", quiet=_quiet(ctx, workspace))


@folders.command("import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_context
def folders_import(ctx: click.Context, source: Any) -> None:
    """Create a folder from SOURCE: a title line followed by problem ids or URLs."""
    workspace = _workspace(ctx)
    try:
        folder = workspace.folders().import_text(source.read(), workspace.catalog())
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    _emit(
        f"[green]Imported {folder.title!r} with {len(folder.problems)} problems ({folder.id}).[/green]",
        quiet=_quiet(ctx, workspace),
    )


@folders.command("backup")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path), default="cf_helper_backup.json")
@click.pass_context
def folders_backup(ctx: click.Context, output: Path) -> None:
    """Write every folder to OUTPUT as JSON."""
    workspace = _workspace(ctx)
    try:
        data = workspace.folders().backup()
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    output.write_bytes(data)
    _emit(f"[green]Folders written to {output}.[/green]", quiet=_quiet(ctx, workspace))


@folders.command("restore")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def folders_restore(ctx: click.Context, source: Path) -> None:
    """Replace all folders with the contents of a backup file."""
    workspace = _workspace(ctx)
    try:
        restored = workspace.folders().restore(source.read_bytes())
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    _emit(f"[green]Restored {len(restored)} folders.[/green]", quiet=_quiet(ctx, workspace))


# Submissions -----------------------------------------------------------


@cli.group()
def submissions() -> None:
    """Sync, browse, and export your submission history."""


@submissions.command("sync")
@click.argument("handle", required=False)
@click.option("--json", "json_output", is_flag=True, help="Emit the result as JSON.")
@click.pass_context
def submissions_sync(ctx: click.Context, handle: Optional[str], json_output: bool) -> None:
    """Download the submissions of HANDLE (defaults to user.handle) into the local store."""
    workspace = _workspace(ctx)
    effective = handle or workspace.config.user.handle
    if not effective:
        _handle_cli_error(
            "No handle given. Pass HANDLE or run `cfhelper config set user.handle --value <handle>`.",
            code="missing_handle",
            json_output=json_output,
        )
        return
    try:
        store = workspace.store()
        merged = sync_submissions(workspace.client(), store, effective)
        total = store.count()
    except _HANDLED_ERRORS as exc:
        _fail(exc, json_output=json_output)
        return

    if json_output:
        console.print_json(data={"handle": effective, "merged": merged, "total": total})
        return
    _emit(
        f"[green]Synced {merged} submissions for {effective}; {total} stored.[/green]",
        quiet=_quiet(ctx, workspace),
    )


@submissions.command("recent")
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=None,
    help="Number of submissions (defaults to cli.recent_limit).",
)
@click.option("--json", "json_output", is_flag=True, help="Emit submissions as JSON.")
@click.pass_context
def submissions_recent(ctx: click.Context, limit: Optional[int], json_output: bool) -> None:
    """Show the most recent stored submissions."""
    workspace = _workspace(ctx)
    effective = workspace.config.cli.recent_limit if limit is None else limit
    try:
        records = workspace.store().recent(effective)
    except _HANDLED_ERRORS as exc:
        _fail(exc, json_output=json_output)
        return
    if json_output:
        console.print_json(
            data=[record.model_dump(mode="json", by_alias=True, exclude_none=True) for record in records]
        )
        return
    console.print(_submission_table(records))


@submissions.command("count")
@click.pass_context
def submissions_count(ctx: click.Context) -> None:
    """Print the number of stored submissions."""
    workspace = _workspace(ctx)
    try:
        count = workspace.store().count()
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    console.print(str(count))


@submissions.command("status")
@click.option("--json", "json_output", is_flag=True, help="Emit the status map as JSON.")
@click.pass_context
def submissions_status(ctx: click.Context, json_output: bool) -> None:
    """Summarize solved and attempted problems from stored submissions."""
    workspace = _workspace(ctx)
    try:
        status = workspace.store().status_map()
    except _HANDLED_ERRORS as exc:
        _fail(exc, json_output=json_output)
        return
    if json_output:
        console.print_json(data=status)
        return
    solved = sum(1 for value in status.values() if value == "OK")
    console.print(f"Solved {solved} problems; attempted {len(status) - solved} more without success.")


@submissions.command("clear")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def submissions_clear(ctx: click.Context, yes: bool) -> None:
    """Delete every stored submission."""
    workspace = _workspace(ctx)
    if not yes:
        click.confirm("Delete all stored submissions?", abort=True)
    try:
        workspace.store().clear()
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    _emit("[green]Submission history cleared.[/green]", quiet=_quiet(ctx, workspace))


@submissions.command("export")
@click.option(
    "--format",
    "fmt",
    type=click.Choice([item.value for item in ExportFormat]),
    default=ExportFormat.CSV.value,
    show_default=True,
    help="Output format.",
)
@click.option("--only-accepted", is_flag=True, help="Export accepted submissions only.")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Destination file (defaults to cf_submissions[_ac].<format>).",
)
@click.pass_context
def submissions_export(
    ctx: click.Context, fmt: str, only_accepted: bool, output: Optional[Path]
) -> None:
    """Export stored submissions, newest first, as CSV or JSON."""
    workspace = _workspace(ctx)
    destination = output or Path(default_filename(fmt, only_accepted=only_accepted))
    try:
        data = export_submissions(workspace.store(), fmt, only_accepted=only_accepted)
    except NothingToExportError as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        return
    except _HANDLED_ERRORS as exc:
        _fail(exc)
        return
    destination.write_bytes(data)
    _emit(f"[green]Exported to {destination}.[/green]", quiet=_quiet(ctx, workspace))


# Configuration ---------------------------------------------------------


@cli.group()
def config() -> None:
    """Manage cfhelper configuration."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
@click.option("--as-env", is_flag=True, help="Print settings as CFHELPER__ environment variables.")
def config_view(no_env: bool, as_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    manager = ConfigManager()
    try:
        settings = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_env:
        for key, value in flatten_for_env(settings).items():
            click.echo(f"{key}={value}")
        return
    yaml_text = yaml.safe_dump(settings.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY (parsed as YAML).")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY."""
    try:
        change = ConfigManager().set_value(key, value)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if not change.changed:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return
    diff = difflib.unified_diff(
        change.before.splitlines(),
        change.after.splitlines(),
        fromfile="config.yaml (before)",
        tofile="config.yaml (after)",
        lineterm="",
    )
    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {change.key}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
