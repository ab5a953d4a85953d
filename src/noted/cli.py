"""noted CLI - journal and task tracker."""

import logging
import sys
from datetime import datetime

import click

from .config import ensure_directories, load_config
from .controller import ListController
from .core.status import status_label
from .core.tasks import format_timestamp
from .errors import NotedError
from .workflows import add_journal_entry, get_journal, get_task_store, load_tasks

logger = logging.getLogger(__name__)


def _configure_logging(config, debug: bool) -> None:
    level = logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING)
    log_path = config.log_path
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=str(log_path),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=level,
        )
    else:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=level,
        )


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _interactive(plain: bool) -> bool:
    return not plain and sys.stdin.isatty() and sys.stdout.isatty()


@click.group()
@click.version_option(package_name="noted")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Configuration file (default is ~/.noted.conf)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, config_path: str | None, debug: bool):
    """noted - a note taking tool."""
    config = load_config(config_path)
    try:
        ensure_directories(config)
        _configure_logging(config, debug)
    except (NotedError, OSError) as e:
        _fail(e)
    logger.debug("Logger configured")
    ctx.obj = config


# ============== Journal ==============


@main.group()
def journal():
    """Maintain your journal."""
    pass


@journal.command("add")
@click.argument("message", nargs=-1)
@click.pass_obj
def journal_add(config, message: tuple[str, ...]):
    """Create a new journal entry."""
    text = " ".join(message).strip()
    if not text:
        text = click.prompt("a new thing that happened").strip()
    if not text:
        click.echo("Nothing to add.")
        return

    try:
        add_journal_entry(config, text)
    except OSError as e:
        logger.error(f"Failed to save entry: {e}")
        _fail(e)
    click.echo("Added to journal.")


@journal.command("list")
@click.option("--oldest-first", is_flag=True, help="Show oldest entries first")
@click.option("--plain", is_flag=True, help="Print entries instead of opening the browser")
@click.pass_obj
def journal_list(config, oldest_first: bool, plain: bool):
    """List recent journal entries."""
    try:
        entries = get_journal(config).entries(oldest_first=oldest_first)
    except OSError as e:
        _fail(e)

    if _interactive(plain):
        from .tui import run_list

        run_list(ListController(entries, title="Recent Journal Entries"))
        return

    if not entries:
        click.echo("Journal is empty.")
        return

    for entry in entries:
        click.echo(f"{entry.description}  {entry.message}")


# ============== Tasks ==============


@main.group()
def task():
    """Use tasks to remind yourself to do a thing."""
    pass


@task.command("add")
@click.argument("title", required=False)
@click.option("--detail", "-d", default="", help="Longer description")
@click.option("--due", type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%d %H:%M"]), default=None,
              help="Due date (YYYY-MM-DD or 'YYYY-MM-DD HH:MM')")
@click.pass_obj
def task_add(config, title: str | None, detail: str, due: datetime | None):
    """Create a new task."""
    if not title:
        title = click.prompt("task description").strip()

    try:
        view = get_task_store(config).create_task(title, detail, due)
    except NotedError as e:
        _fail(e)

    click.echo(f"Added task {view.id}: {view.task}")


@task.command("list")
@click.option("--include-completed/--hide-done", default=True,
              help="Show or hide done and cancelled tasks (shown by default)")
@click.option("--plain", is_flag=True, help="Print tasks instead of opening the browser")
@click.pass_obj
def task_list(config, include_completed: bool, plain: bool):
    """List and alter todo list items."""
    store = get_task_store(config)
    try:
        views, warnings = load_tasks(store, hide_done=not include_completed)
    except NotedError as e:
        _fail(e)

    for warning in warnings:
        click.echo(f"Warning: {warning}", err=True)

    if _interactive(plain):
        from .tui import run_list

        run_list(ListController(views, store=store, title="Tasks"))
        return

    if not views:
        click.echo("No tasks.")
        return

    for view in views:
        due = f" (due {format_timestamp(view.due_at)})" if view.due_at else ""
        click.echo(f"[{status_label(view.status):11}] {view.task}{due}")
        if view.detail:
            click.echo(f"              {view.detail}")


if __name__ == "__main__":
    main()
