# -*- coding: utf-8 -*-
"""Command-line interface for the Classroom assistant.

Examples:
    # Store settings
    classroom-assistant set-api-key AIza...
    classroom-assistant courses
    classroom-assistant set-course 123456789

    # Run a natural-language command
    classroom-assistant ask "create an assignment called Essay due Friday"

    # Show what the LLM would do without calling Classroom
    classroom-assistant ask --dry-run "delete assignment test"
"""
from __future__ import annotations

import json
import logging
import typing as t

import click
from rich.console import Console
from rich.json import JSON
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from classroom_api.gateway import ClassroomGateway
from orchestrator.config import PropertyStore, Settings
from orchestrator.errors import CommandError
from orchestrator.models import ApiCallSpec
from orchestrator.run import run_command
from orchestrator.translator import translate_command
from orchestrator.utils import console, display_name, mask_secret
from registry import list_operation_schemas


def make_gateway() -> ClassroomGateway:
    """Gateway over the live Classroom API."""
    return ClassroomGateway()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _settings(ctx: click.Context) -> Settings:
    store: PropertyStore = ctx.obj["store"]
    return store.load()


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--properties",
    "properties_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the settings file (default: ~/.classroom_assistant/properties.json).",
)
@click.option("--verbose", "-v", is_flag=True, help="Write the operational log to stderr.")
@click.pass_context
def main(ctx: click.Context, properties_path: t.Optional[str], verbose: bool) -> None:
    """Manage a Google Classroom course with natural-language commands."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["store"] = PropertyStore(properties_path)


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.option(
    "--dry-run",
    "dry_run",
    is_flag=True,
    help="Translate the command and display the API calls without executing them.",
)
@click.pass_context
def ask(ctx: click.Context, text: tuple[str, ...], dry_run: bool) -> None:
    """Run a natural-language command against the active course."""
    settings = _settings(ctx)
    user_text = " ".join(text)

    if dry_run:
        try:
            envelope = translate_command(user_text, settings)
        except CommandError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise SystemExit(1)
        console.print(JSON(envelope.model_dump_json(by_alias=True, exclude_none=True)))
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Translating command...", total=None)

        def on_progress(current: int, total: int, call: ApiCallSpec, outcome: t.Optional[str]) -> None:
            if outcome is None:
                label = call.summary or f"{call.resource}.{call.method}"
                progress.update(task, description=f"({current}/{total}) {escape(label)}")

        report = run_command(
            user_text,
            settings,
            gateway=make_gateway(),
            translate=translate_command,
            progress_callback=on_progress,
        )

    console.print(Panel(Text(report), title="📋 Result", border_style="blue", expand=False))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw operation schemas as JSON.")
def operations(as_json: bool) -> None:
    """List the Classroom operations commands can use."""
    schemas = list_operation_schemas()
    if as_json:
        console.print(JSON(json.dumps(schemas, indent=2)))
        return

    by_resource: dict[str, list[dict]] = {}
    for schema in schemas:
        by_resource.setdefault(schema["resource"], []).append(schema)

    for resource, resource_ops in by_resource.items():
        table = Table(title=f"🔧 {resource}", show_header=True, header_style="bold cyan")
        table.add_column("Method", style="green")
        table.add_column("Params", style="yellow")
        table.add_column("Description", style="white")
        for op in resource_ops:
            table.add_row(op["method"], op["params"], op["description"])
        console.print(table)
        console.print()


@main.command()
def courses() -> None:
    """List the courses visible to the Classroom access token."""
    try:
        result = make_gateway().invoke("Courses", "list", [])
    except CommandError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if not result.items:
        console.print("[yellow]No courses found[/yellow]")
        return
    table = Table(title="📚 Courses", show_header=True, header_style="bold magenta")
    table.add_column("Id", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Section", style="green")
    for course in result.items:
        table.add_row(str(course.get("id", "")), display_name(course), course.get("section", ""))
    console.print(table)


@main.command()
@click.pass_context
def roster(ctx: click.Context) -> None:
    """List the students of the active course."""
    settings = _settings(ctx)
    try:
        course_id = settings.require_course_id()
        result = make_gateway().invoke("Courses.Students", "list", [course_id])
    except CommandError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if not result.items:
        console.print("[yellow]No students enrolled[/yellow]")
        return
    table = Table(title=f"👥 Roster of course {course_id}", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="white")
    table.add_column("Email", style="cyan")
    table.add_column("User Id", style="dim")
    for student in result.items:
        profile = student.get("profile") or {}
        table.add_row(display_name(student), profile.get("emailAddress", ""), str(student.get("userId", "")))
    console.print(table)


@main.command("set-course")
@click.argument("course_id")
@click.pass_context
def set_course(ctx: click.Context, course_id: str) -> None:
    """Set the active course id."""
    store: PropertyStore = ctx.obj["store"]
    try:
        settings = store.set_course(course_id)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="COURSE_ID")
    console.print(f"[green]✓[/green] Active course set to [bold]{settings.course_id}[/bold]")


@main.command("set-api-key")
@click.argument("api_key")
@click.pass_context
def set_api_key(ctx: click.Context, api_key: str) -> None:
    """Store the Gemini API key."""
    store: PropertyStore = ctx.obj["store"]
    try:
        settings = store.set_api_key(api_key)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="API_KEY")
    console.print(f"[green]✓[/green] Gemini API key saved ({mask_secret(settings.gemini_api_key)})")


@main.command("show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the current settings."""
    settings = _settings(ctx)
    store: PropertyStore = ctx.obj["store"]
    table = Table(show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Settings file", str(store.path))
    table.add_row("course_id", settings.course_id or "(not set)")
    table.add_row("gemini_api_key", mask_secret(settings.gemini_api_key))
    console.print(table)


if __name__ == "__main__":
    main()
