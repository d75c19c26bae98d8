from typing import List, Optional
import typer

from cli.core.api import (
    get_client,
    api_create_project,
    api_delete_project,
    api_get_project,
    api_list_projects,
    api_update_project,
)
from cli.core.tracker import PROJECT_STATUSES, STATUS_TITLES, ProjectBoard
from cli.core.utils import api_errors


app = typer.Typer(help="Project commands (list, create, board, move, etc.)")


def _check_status(status: Optional[str]) -> None:
    if status is not None and status not in PROJECT_STATUSES:
        typer.echo(f"Invalid status '{status}'. Use one of: {', '.join(PROJECT_STATUSES)}.")
        raise typer.Exit(code=1)


def _print_board(board: ProjectBoard) -> None:
    for status, cards in board.columns().items():
        typer.echo(f"{STATUS_TITLES[status]} ({len(cards)})")
        for card in cards:
            typer.echo(f"  [{card['id']}] {card['title']}")


def _echo_notification(level: str, message: str) -> None:
    typer.echo(message, err=(level == "error"))


@app.command("list")
def list_projects(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Only projects with this status"),
    archived: Optional[bool] = typer.Option(None, "--archived/--active", help="Filter on archived flag"),
):
    """
    List your projects.
    """
    _check_status(status)
    with api_errors():
        projects = api_list_projects(get_client(), status=status, archived=archived)

    if not projects:
        typer.echo("No projects found.")
        return
    for p in projects:
        flags = " (archived)" if p.get("archived") else ""
        typer.echo(f"[{p['id']}] {p['title']} - {p['status']}{flags}")


@app.command("show")
def show_project(project_id: int = typer.Argument(..., help="Project ID")):
    """
    Show one project.
    """
    with api_errors():
        p = api_get_project(get_client(), project_id)

    typer.echo(f"[{p['id']}] {p['title']}")
    typer.echo(f"Status: {p['status']}")
    typer.echo(f"Enthusiasm: {p.get('enthusiasm_level')}")
    if p.get("technologies"):
        typer.echo(f"Technologies: {', '.join(p['technologies'])}")
    typer.echo("")
    typer.echo(p.get("description", ""))


@app.command("create")
def create_project(
    title: str = typer.Option(..., "--title", "-t", prompt=True, help="Title"),
    description: str = typer.Option(..., "--description", "-d", prompt=True, help="Description"),
    status: str = typer.Option("planning", "--status", "-s", help="Initial status"),
    technologies: List[str] = typer.Option([], "--tech", help="Technology (repeatable)"),
):
    """
    Create a project.
    """
    _check_status(status)
    if not title.strip():
        typer.echo("Title cannot be empty.")
        raise typer.Exit(code=1)

    with api_errors():
        project = api_create_project(get_client(), {
            "title": title.strip(),
            "description": description,
            "status": status,
            "technologies": technologies,
        })
    typer.echo(f"Project '{project['title']}' created with ID {project['id']}.")


@app.command("update")
def update_project(
    project_id: int = typer.Argument(..., help="Project ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    status: Optional[str] = typer.Option(None, "--status", "-s"),
    archived: Optional[bool] = typer.Option(None, "--archive/--unarchive"),
    featured: Optional[bool] = typer.Option(None, "--featured/--not-featured"),
):
    """
    Update fields of a project.
    """
    _check_status(status)
    update_data = {
        key: value
        for key, value in {
            "title": title,
            "description": description,
            "status": status,
            "archived": archived,
            "featured": featured,
        }.items()
        if value is not None
    }
    if not update_data:
        typer.echo("Nothing to update.")
        raise typer.Exit(code=1)

    with api_errors():
        project = api_update_project(get_client(), project_id, update_data)
    typer.echo(f"Project '{project['title']}' updated.")


@app.command("delete")
def delete_project(
    project_id: int = typer.Argument(..., help="Project ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Delete without confirmation"),
):
    """
    Delete a project.
    """
    if not force and not typer.confirm(f"Delete project {project_id}?"):
        typer.echo("Aborted.")
        raise typer.Exit(code=1)

    with api_errors():
        api_delete_project(get_client(), project_id)
    typer.echo("Project deleted.")


@app.command("board")
def show_board():
    """
    Show the project tracker, one column per status.
    """
    board = ProjectBoard(get_client(), notify=_echo_notification)
    try:
        with api_errors():
            board.load()
        _print_board(board)
    finally:
        board.close()


@app.command("move")
def move_project(
    project_id: int = typer.Argument(..., help="Project ID"),
    to_status: str = typer.Argument(..., help="Destination column"),
    position: Optional[int] = typer.Option(None, "--position", "-p", help="Position in the destination column (0-based)"),
):
    """
    Move a project card to another column (or another position in its column).
    """
    _check_status(to_status)
    board = ProjectBoard(get_client(), notify=_echo_notification)
    try:
        with api_errors():
            board.load()
        try:
            from_status, from_index = board.locate(project_id)
        except (KeyError, ValueError):
            typer.echo(f"Project {project_id} is not on the board.")
            raise typer.Exit(code=1)

        if position is None:
            position = from_index if to_status == from_status else len(board.columns()[to_status])

        future = board.move_project(project_id, from_status, to_status, from_index, position)
        if future is None:
            typer.echo("Project is already there.")
            return

        ok = future.result()
        _print_board(board)
        if not ok:
            raise typer.Exit(code=1)
    finally:
        board.close()
