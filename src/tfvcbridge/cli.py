"""Command-line interface for tfvc-bridge."""

from __future__ import annotations

import argparse
import asyncio
import os
from collections.abc import Sequence
from dataclasses import replace

from rich.console import Console
from rich.table import Table

from tfvcbridge import __version__
from tfvcbridge.config import load_config
from tfvcbridge.context import ServerContext
from tfvcbridge.errors import TfvcError
from tfvcbridge.logging import setup_logging
from tfvcbridge.models import AutoResolveType
from tfvcbridge.repository import Repository

console = Console()
err_console = Console(stderr=True)

_AUTO_RESOLVE_CHOICES = {t.value: t for t in AutoResolveType}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tfvc-bridge",
        description="Run TFVC operations through the tf command-line client",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=None,
        help="Increase log verbosity (can be repeated)",
    )
    parser.add_argument(
        "--root",
        default=os.getcwd(),
        help="Workspace root the commands run in (default: current directory)",
    )
    parser.add_argument(
        "--location",
        help="Path to tf / tf.exe (overrides config and TFVC_LOCATION)",
    )
    parser.add_argument(
        "--proxy",
        help="TFS proxy URL (CLC only)",
    )
    parser.add_argument(
        "--collection",
        help="Team project collection URL (overrides TFVC_COLLECTION_URL)",
    )
    parser.add_argument(
        "--restrict-workspace",
        action="store_true",
        default=None,
        help="Limit status and workspace lookup to the root folder",
    )

    subparsers = parser.add_subparsers(dest="command", help="Operation")

    subparsers.add_parser("version", help="Show and check the tf version")

    workspace_parser = subparsers.add_parser("workspace", help="Show the workspace for a folder")
    workspace_parser.add_argument("path", nargs="?", help="Local folder (default: root)")

    status_parser = subparsers.add_parser("status", help="List pending changes")
    status_parser.add_argument(
        "--include-folders",
        action="store_true",
        help="Keep pending changes on existing folders",
    )

    info_parser = subparsers.add_parser("info", help="Show item information")
    info_parser.add_argument("paths", nargs="+")

    for name, help_text in (
        ("add", "Pend adds"),
        ("delete", "Pend deletes"),
        ("undo", "Undo pending changes ('*' for everything under the root)"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("paths", nargs="+")

    rename_parser = subparsers.add_parser("rename", help="Pend a rename")
    rename_parser.add_argument("source")
    rename_parser.add_argument("destination")

    checkin_parser = subparsers.add_parser("checkin", help="Check in pending changes")
    checkin_parser.add_argument("paths", nargs="+")
    checkin_parser.add_argument("-m", "--comment", help="Check-in comment")
    checkin_parser.add_argument(
        "--associate",
        type=int,
        nargs="*",
        default=[],
        help="Work item IDs to associate (CLC only)",
    )

    get_parser = subparsers.add_parser("get", help="Get latest")
    get_parser.add_argument("paths", nargs="*", help="Items to get (default: root)")
    get_parser.add_argument("-r", "--recursive", action="store_true")

    conflicts_parser = subparsers.add_parser("conflicts", help="List conflicts")
    conflicts_parser.add_argument("path", nargs="?", help="Item to check (default: root)")

    resolve_parser = subparsers.add_parser("resolve", help="Auto-resolve conflicts")
    resolve_parser.add_argument("paths", nargs="+")
    resolve_parser.add_argument(
        "--auto",
        required=True,
        choices=sorted(_AUTO_RESOLVE_CHOICES),
        help="Resolution to apply",
    )

    print_parser = subparsers.add_parser("print", help="Print file contents")
    print_parser.add_argument("path")
    print_parser.add_argument("--at", dest="version_spec", help="Version spec (e.g. C42, T)")

    return parser


def run_cli(args: Sequence[str]) -> int:
    """Run the CLI with the given arguments."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.command is None:
        parser.print_help()
        return 1

    config = load_config(workspace_root=parsed.root)
    logging_config = config.logging
    if parsed.verbose is not None:
        logging_config = replace(logging_config, verbose=parsed.verbose)
    setup_logging(logging_config)

    tfvc_config = config.tfvc
    if parsed.location:
        tfvc_config = replace(tfvc_config, location=parsed.location)
    if parsed.proxy:
        tfvc_config = replace(tfvc_config, proxy=parsed.proxy)
    if parsed.restrict_workspace is not None:
        tfvc_config = replace(tfvc_config, restrict_workspace=parsed.restrict_workspace)

    server_context = ServerContext.from_secrets()
    if parsed.collection:
        server_context = ServerContext(
            collection_url=parsed.collection,
            credential_info=server_context.credential_info if server_context else None,
        )

    try:
        repository = Repository(tfvc_config, parsed.root, server_context)
    except TfvcError as e:
        _print_error(e)
        return 1
    return asyncio.run(_run(repository, parsed))


async def _run(repository: Repository, parsed: argparse.Namespace) -> int:
    try:
        await _dispatch(repository, parsed)
    except TfvcError as e:
        _print_error(e)
        return 1
    finally:
        await repository.dispose()
    return 0


async def _dispatch(repository: Repository, parsed: argparse.Namespace) -> None:
    command = parsed.command
    root = repository.path

    if command == "version":
        version = await repository.check_version()
        console.print(f"tf {version or 'unknown'} at {repository.tfvc_location}")
    elif command == "workspace":
        _print_workspace(await repository.find_workspace(parsed.path or root))
    elif command == "status":
        _print_status(await repository.get_status(ignore_files=not parsed.include_folders))
    elif command == "info":
        _print_info(await repository.get_info(parsed.paths))
    elif command == "add":
        _print_paths("Added", await repository.add(parsed.paths))
    elif command == "delete":
        _print_paths("Deleted", await repository.delete(parsed.paths))
    elif command == "undo":
        _print_paths("Undone", await repository.undo(parsed.paths))
    elif command == "rename":
        renamed = await repository.rename(parsed.source, parsed.destination)
        console.print(f"Renamed to {renamed or parsed.destination}")
    elif command == "checkin":
        changeset = await repository.checkin(parsed.paths, parsed.comment, parsed.associate)
        console.print(f"Changeset [bold]{changeset}[/bold] checked in.")
    elif command == "get":
        _print_sync(await repository.sync(parsed.paths or [root], parsed.recursive))
    elif command == "conflicts":
        _print_conflicts("Conflicts", await repository.find_conflicts(parsed.path))
    elif command == "resolve":
        resolved = await repository.resolve_conflicts(
            parsed.paths, _AUTO_RESOLVE_CHOICES[parsed.auto]
        )
        _print_conflicts("Resolved", resolved)
    elif command == "print":
        content = await repository.get_file_content(parsed.path, parsed.version_spec)
        console.print(content, markup=False, highlight=False, end="")


def _print_error(error: TfvcError) -> None:
    err_console.print(f"[red]{error.message}[/red] ({error.error_code.value})", highlight=False)
    for option in error.message_options:
        err_console.print(f"  {option.title}: {option.url}", highlight=False)


def _print_paths(title: str, paths: list[str]) -> None:
    if not paths:
        console.print("[dim]Nothing to do.[/dim]")
        return
    table = Table(title=title)
    table.add_column("Path")
    for path in paths:
        table.add_row(path)
    console.print(table)


def _print_workspace(workspace) -> None:
    console.print(f"[bold]Workspace:[/bold] {workspace.name}")
    console.print(f"[bold]Collection:[/bold] {workspace.server}")
    console.print(f"[bold]Team project:[/bold] {workspace.default_team_project}")

    table = Table(title="Mappings")
    table.add_column("Server path")
    table.add_column("Local path")
    for mapping in workspace.mappings:
        local = "(cloaked)" if mapping.cloaked else mapping.local_path or "-"
        table.add_row(mapping.server_path, local)
    console.print(table)


def _print_status(changes) -> None:
    if not changes:
        console.print("[dim]No pending changes.[/dim]")
        return
    table = Table(title="Pending Changes")
    table.add_column("Change", style="bold")
    table.add_column("Local item")
    table.add_column("Server item")
    table.add_column("Candidate")
    for change in changes:
        table.add_row(
            change.change_type or "-",
            change.local_item or "-",
            change.server_item or "-",
            "yes" if change.is_candidate else "",
        )
    console.print(table)


def _print_info(items) -> None:
    table = Table(title="Item Info")
    table.add_column("Local path")
    table.add_column("Server path")
    table.add_column("Local version")
    table.add_column("Server version")
    table.add_column("Change")
    for item in items:
        table.add_row(
            item.local_item or "-",
            item.server_item or "-",
            item.local_version or "-",
            item.server_version or "-",
            item.change or "-",
        )
    console.print(table)


def _print_sync(results) -> None:
    if not results.item_results:
        console.print("All files are up to date.")
        return
    table = Table(title="Get")
    table.add_column("Result", style="bold")
    table.add_column("Path")
    table.add_column("Message")
    for item in results.item_results:
        table.add_row(item.sync_type.value, item.item_path or "-", item.message or "")
    console.print(table)
    if results.has_conflicts:
        console.print("[yellow]Conflicts were reported.[/yellow]")
    if results.has_errors:
        console.print("[red]Errors were reported.[/red]")


def _print_conflicts(title: str, conflicts) -> None:
    if not conflicts:
        console.print("[dim]No conflicts.[/dim]")
        return
    table = Table(title=title)
    table.add_column("Type", style="bold")
    table.add_column("Path")
    for conflict in conflicts:
        table.add_row(conflict.type.value, conflict.local_path)
    console.print(table)
