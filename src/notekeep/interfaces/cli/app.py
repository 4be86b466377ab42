"""CLI application for Notekeep using Rich and Typer."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from notekeep.core.config import NOTEKEEP_ENV
from notekeep.core.container import DependencyContainer, get_container
from notekeep.core.loading import OperationType
from notekeep.core.types import Category, Note

T = TypeVar("T")

app = typer.Typer(
    name="notekeep",
    help="Notekeep - notes organised into categories",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main_options(
    ctx: typer.Context,
    db: Optional[str] = typer.Option(
        None,
        "--db",
        help="Path to the SQLite database (default: ~/.notekeep/notekeep.db)",
    ),
    env: Optional[str] = typer.Option(
        None,
        "--env",
        help="Environment preset: debug, testing or production",
    ),
):
    """Manage notes and categories."""
    if db or env:
        ctx.obj = DependencyContainer.for_environment(env or NOTEKEEP_ENV, db)
        ctx.call_on_close(ctx.obj.close)
    else:
        ctx.obj = get_container()


async def _run(
    container: DependencyContainer,
    operation: OperationType,
    task: Callable[[], Awaitable[T]],
) -> T:
    """Run a repository call, exiting with status 1 if it fails."""
    result = await container.loading.perform_operation(operation, task)
    state = container.loading.get_state(operation)
    if state.is_failure:
        console.print(f"[red]{state.error_message}[/red]")
        raise typer.Exit(1)
    return result  # type: ignore[return-value]


def _pick(items: Sequence[T], prefix: str, kind: str) -> T:
    """Select the single item whose id starts with prefix."""
    matches = [item for item in items if item.id.startswith(prefix)]  # type: ignore[attr-defined]
    if len(matches) == 1:
        return matches[0]
    if matches:
        console.print(f"[yellow]Multiple {kind}s match '{prefix}'. Be more specific.[/yellow]")
    else:
        console.print(f"[red]{kind.capitalize()} not found: {prefix}[/red]")
    raise typer.Exit(1)


def _notes_table(title: str, notes: list[Note], categories: list[Category]) -> Table:
    names = {category.id: category.name for category in categories}
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Category", style="cyan")
    table.add_column("Updated")
    for note in notes:
        table.add_row(
            note.id[:8],
            note.title,
            names.get(note.category_id or "", ""),
            note.updated_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


@app.command("categories")
def list_categories(ctx: typer.Context):
    """List all categories, newest first."""

    async def _list():
        container: DependencyContainer = ctx.obj
        repo = container.repository
        categories = await _run(container, OperationType.FETCH, repo.fetch_categories)
        notes = await _run(container, OperationType.FETCH, repo.fetch_notes)

        if not categories:
            console.print("[dim]No categories yet.[/dim]")
            return

        counts: dict[str, int] = {}
        for note in notes:
            if note.category_id:
                counts[note.category_id] = counts.get(note.category_id, 0) + 1

        table = Table(title="Categories", show_header=True)
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Notes")
        table.add_column("Created")
        for category in categories:
            table.add_row(
                category.id[:8],
                category.name,
                str(counts.get(category.id, 0)),
                category.created_at.strftime("%Y-%m-%d %H:%M"),
            )
        console.print(table)

    asyncio.run(_list())


@app.command("add-category")
def add_category(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Category name"),
):
    """Create a category."""

    async def _add():
        container: DependencyContainer = ctx.obj
        category = await _run(
            container,
            OperationType.CREATE,
            lambda: container.repository.create_category(name),
        )
        console.print(f"[green]Created category '{category.name}' ({category.id[:8]})[/green]")

    asyncio.run(_add())


@app.command("rename-category")
def rename_category(
    ctx: typer.Context,
    category_id: str = typer.Argument(..., help="Category ID or unique prefix"),
    name: str = typer.Argument(..., help="New name"),
):
    """Rename a category."""

    async def _rename():
        container: DependencyContainer = ctx.obj
        repo = container.repository
        categories = await _run(container, OperationType.FETCH, repo.fetch_categories)
        category = _pick(categories, category_id, "category")
        updated = await _run(
            container,
            OperationType.UPDATE,
            lambda: repo.update_category(category, name),
        )
        console.print(
            f"[green]Renamed '{category.name}' to '{updated.name}'[/green]"
        )

    asyncio.run(_rename())


@app.command("delete-category")
def delete_category(
    ctx: typer.Context,
    category_id: str = typer.Argument(..., help="Category ID or unique prefix"),
):
    """Delete a category and every note filed under it."""

    async def _delete():
        container: DependencyContainer = ctx.obj
        repo = container.repository
        categories = await _run(container, OperationType.FETCH, repo.fetch_categories)
        category = _pick(categories, category_id, "category")
        related = await _run(
            container,
            OperationType.FETCH,
            lambda: repo.fetch_notes_for_category(category),
        )
        await _run(container, OperationType.DELETE, lambda: repo.delete_category(category))
        console.print(
            f"[green]Deleted category '{category.name}' "
            f"(+ {len(related)} related notes)[/green]"
        )

    asyncio.run(_delete())


@app.command("notes")
def list_notes(
    ctx: typer.Context,
    category_id: Optional[str] = typer.Option(
        None,
        "--category",
        "-c",
        help="Only notes in this category (ID or unique prefix)",
    ),
):
    """List notes, most recently updated first."""

    async def _list():
        container: DependencyContainer = ctx.obj
        repo = container.repository
        categories = await _run(container, OperationType.FETCH, repo.fetch_categories)
        if category_id:
            category = _pick(categories, category_id, "category")
            notes = await _run(
                container,
                OperationType.FETCH,
                lambda: repo.fetch_notes_for_category(category),
            )
            title = f"Notes in {category.name}"
        else:
            notes = await _run(container, OperationType.FETCH, repo.fetch_notes)
            title = "Notes"

        if not notes:
            console.print("[dim]No notes yet.[/dim]")
            return
        console.print(_notes_table(title, notes, categories))

    asyncio.run(_list())


@app.command("add-note")
def add_note(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Note title"),
    content: str = typer.Option("", "--content", "-m", help="Note body"),
    category_id: Optional[str] = typer.Option(
        None,
        "--category",
        "-c",
        help="Category ID or unique prefix",
    ),
):
    """Create a note, optionally filed under a category."""

    async def _add():
        container: DependencyContainer = ctx.obj
        repo = container.repository
        category = None
        if category_id:
            categories = await _run(
                container, OperationType.FETCH, repo.fetch_categories
            )
            category = _pick(categories, category_id, "category")
        note = await _run(
            container,
            OperationType.CREATE,
            lambda: repo.create_note(title, content, category),
        )
        console.print(f"[green]Created note '{note.title}' ({note.id[:8]})[/green]")

    asyncio.run(_add())


@app.command("edit-note")
def edit_note(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note ID or unique prefix"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-m", help="New body"),
    category_id: Optional[str] = typer.Option(
        None,
        "--category",
        "-c",
        help="Move to this category (ID or unique prefix)",
    ),
    uncategorize: bool = typer.Option(
        False,
        "--no-category",
        help="Remove the note from its category",
    ),
):
    """Edit a note. Options left out keep their current value."""

    async def _edit():
        container: DependencyContainer = ctx.obj
        repo = container.repository
        notes = await _run(container, OperationType.FETCH, repo.fetch_notes)
        note = _pick(notes, note_id, "note")
        categories = await _run(container, OperationType.FETCH, repo.fetch_categories)

        if uncategorize:
            category = None
        elif category_id:
            category = _pick(categories, category_id, "category")
        else:
            category = next(
                (c for c in categories if c.id == note.category_id), None
            )

        updated = await _run(
            container,
            OperationType.UPDATE,
            lambda: repo.update_note(
                note,
                note.title if title is None else title,
                note.content if content is None else content,
                category,
            ),
        )
        console.print(f"[green]Updated note '{updated.title}'[/green]")

    asyncio.run(_edit())


@app.command("delete-note")
def delete_note(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note ID or unique prefix"),
):
    """Delete a single note."""

    async def _delete():
        container: DependencyContainer = ctx.obj
        repo = container.repository
        notes = await _run(container, OperationType.FETCH, repo.fetch_notes)
        note = _pick(notes, note_id, "note")
        await _run(container, OperationType.DELETE, lambda: repo.delete_note(note))
        console.print(f"[green]Deleted note '{note.title}'[/green]")

    asyncio.run(_delete())


@app.command()
def search(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text to look for"),
):
    """Search note titles, bodies and category names."""

    async def _search():
        container: DependencyContainer = ctx.obj
        repo = container.repository
        notes = await _run(
            container, OperationType.SEARCH, lambda: repo.search_notes(text)
        )
        if not notes:
            console.print(f"[dim]No notes match '{text}'.[/dim]")
            return
        categories = await _run(container, OperationType.FETCH, repo.fetch_categories)
        console.print(
            _notes_table(f"{len(notes)} results for '{text}'", notes, categories)
        )

    asyncio.run(_search())


@app.command()
def purge(
    ctx: typer.Context,
    notes_only: bool = typer.Option(False, "--notes", help="Delete only notes"),
    categories_only: bool = typer.Option(
        False,
        "--categories",
        help="Delete only categories (and the notes filed under them)",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete stored data in bulk."""
    if notes_only and categories_only:
        console.print("[red]Choose at most one of --notes and --categories[/red]")
        raise typer.Exit(2)

    if notes_only:
        target = "all notes"
    elif categories_only:
        target = "all categories and their notes"
    else:
        target = "ALL notes and categories"
    if not yes and not typer.confirm(f"Delete {target}?"):
        console.print("[dim]Cancelled.[/dim]")
        raise typer.Exit(0)

    async def _purge():
        container: DependencyContainer = ctx.obj
        repo = container.repository
        if notes_only:
            count = await _run(container, OperationType.DELETE_ALL, repo.delete_all_notes)
            console.print(f"[green]Deleted {count} notes[/green]")
        elif categories_only:
            count = await _run(
                container, OperationType.DELETE_ALL, repo.delete_all_categories
            )
            console.print(f"[green]Deleted {count} categories[/green]")
        else:
            result = await _run(container, OperationType.DELETE_ALL, repo.delete_all_data)
            console.print(
                f"[green]Deleted {result.notes_deleted} notes and "
                f"{result.categories_deleted} categories[/green]"
            )

    asyncio.run(_purge())


if __name__ == "__main__":
    app()
