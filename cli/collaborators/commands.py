from typing import List, Optional
import typer

from cli.core.api import (
    get_client,
    api_collaborator_stats,
    api_create_collaborator,
    api_delete_collaborator,
    api_list_collaborators,
)
from cli.core.utils import api_errors, validate_email


app = typer.Typer(help="Collaborator commands (list, add, delete, stats)")

TYPES = (
    "postdoc", "junior_faculty", "senior_faculty",
    "industry_tech", "industry_finance", "industry_healthcare",
    "undergraduate", "graduate", "professional_ethicist", "journalist",
)


@app.command("list")
def list_collaborators():
    """
    List your active collaborators, newest first.
    """
    with api_errors():
        collaborators = api_list_collaborators(get_client())

    if not collaborators:
        typer.echo("No collaborators found.")
        return

    for collaborator in collaborators:
        where = f" @ {collaborator['institution']}" if collaborator.get("institution") else ""
        typer.echo(f"[{collaborator['id']}] {collaborator['name']} - {collaborator['type']}{where}")


@app.command("add")
def add_collaborator(
    name: str = typer.Argument(..., help="Collaborator name"),
    kind: str = typer.Option(..., "--type", "-t", prompt=True, help=f"One of: {', '.join(TYPES)}"),
    email: Optional[str] = typer.Option(None, "--email", "-e"),
    institution: Optional[str] = typer.Option(None, "--institution", "-i"),
    role: Optional[str] = typer.Option(None, "--role", "-r"),
    skills: List[str] = typer.Option([], "--skill", "-s", help="Repeat for each skill"),
):
    """
    Add a collaborator.
    """
    if kind not in TYPES:
        typer.echo(f"Invalid type. Use one of: {', '.join(TYPES)}.")
        raise typer.Exit(code=1)
    if email and not validate_email(email):
        raise typer.Exit(code=1)

    with api_errors():
        collaborator = api_create_collaborator(get_client(), {
            "name": name,
            "type": kind,
            "email": email,
            "institution": institution,
            "role": role,
            "skills": list(skills),
        })
    typer.echo(f"Collaborator '{collaborator['name']}' added with ID {collaborator['id']}.")


@app.command("delete")
def delete_collaborator(collaborator_id: int = typer.Argument(..., help="Collaborator ID")):
    with api_errors():
        api_delete_collaborator(get_client(), collaborator_id)
    typer.echo("Collaborator deleted.")


@app.command("stats")
def collaborator_stats():
    """
    Count active collaborators per type.
    """
    with api_errors():
        stats = api_collaborator_stats(get_client())

    if not stats:
        typer.echo("No collaborators found.")
        return
    for row in stats:
        typer.echo(f"{row['type']}: {row['count']}")
