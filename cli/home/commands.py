from typing import List, Optional
import typer

from cli.core.api import get_client, api_get_home_content, api_update_home_content
from cli.core.utils import api_errors


app = typer.Typer(help="Home page commands (show, update)")

SOCIAL_NETWORKS = ("linkedin", "github", "twitter", "bluesky")


@app.command("show")
def show_home():
    """
    Show the home page content and the collaborator summary.
    """
    with api_errors():
        content = api_get_home_content(get_client())

    typer.echo(content["header_text"])
    typer.echo(f"{content['name']} - {content['tagline']}")
    typer.echo(content["bio"])
    typer.echo(f"Years of experience: {content['years_experience']}")
    if content.get("core_expertise"):
        typer.echo(f"Expertise: {', '.join(content['core_expertise'])}")
    for network in SOCIAL_NETWORKS:
        url = (content.get("social_links") or {}).get(network)
        if url:
            typer.echo(f"{network.capitalize()}: {url}")

    groups = content.get("collaborator_stats") or {}
    if any(group["total"] for group in groups.values()):
        typer.echo("Collaborators:")
        for name, group in groups.items():
            typer.echo(f"  {name.capitalize()}: {group['total']}")


@app.command("update")
def update_home(
    name: Optional[str] = typer.Option(None, "--name"),
    tagline: Optional[str] = typer.Option(None, "--tagline"),
    bio: Optional[str] = typer.Option(None, "--bio"),
    header: Optional[str] = typer.Option(None, "--header"),
    years: Optional[int] = typer.Option(None, "--years", min=0),
    expertise: Optional[List[str]] = typer.Option(None, "--expertise", "-x", help="Repeat for each area; replaces the list"),
    linkedin: Optional[str] = typer.Option(None, "--linkedin"),
    github: Optional[str] = typer.Option(None, "--github"),
    twitter: Optional[str] = typer.Option(None, "--twitter"),
    bluesky: Optional[str] = typer.Option(None, "--bluesky"),
):
    """
    Update the home page. Only the given fields change.
    """
    update_data = {
        key: value
        for key, value in {
            "name": name, "tagline": tagline, "bio": bio,
            "header_text": header, "years_experience": years,
        }.items()
        if value is not None
    }
    if expertise:
        update_data["core_expertise"] = list(expertise)
    links = {
        key: value
        for key, value in {"linkedin": linkedin, "github": github, "twitter": twitter, "bluesky": bluesky}.items()
        if value is not None
    }
    if links:
        update_data["social_links"] = links
    if not update_data:
        typer.echo("Nothing to update.")
        raise typer.Exit(code=1)

    with api_errors():
        api_update_home_content(get_client(), update_data)
    typer.echo("Home content updated.")
