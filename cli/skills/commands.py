from typing import Optional
import typer

from cli.core.api import get_client, api_create_skill, api_delete_skill, api_list_skills
from cli.core.utils import api_errors


app = typer.Typer(help="Skill commands (list, add, delete)")

LEVELS = ("beginner", "intermediate", "advanced", "expert")


@app.command("list")
def list_skills(category: Optional[str] = typer.Option(None, "--category", "-c")):
    """
    List your skills grouped by category.
    """
    with api_errors():
        skills = api_list_skills(get_client(), category)

    if not skills:
        typer.echo("No skills found.")
        return

    by_category = {}
    for skill in skills:
        by_category.setdefault(skill["category"], []).append(skill)
    for name, items in by_category.items():
        typer.echo(name)
        for skill in items:
            typer.echo(f"  [{skill['id']}] {skill['name']} - {skill['experience_level']} ({skill['years_of_experience']}y)")


@app.command("add")
def add_skill(
    name: str = typer.Argument(..., help="Skill name"),
    category: str = typer.Option(..., "--category", "-c", prompt=True),
    level: str = typer.Option("intermediate", "--level", "-l"),
    years: int = typer.Option(0, "--years", "-y", min=0),
):
    """
    Add a skill.
    """
    if level not in LEVELS:
        typer.echo(f"Invalid level. Use one of: {', '.join(LEVELS)}.")
        raise typer.Exit(code=1)

    with api_errors():
        skill = api_create_skill(get_client(), {
            "name": name,
            "category": category,
            "experience_level": level,
            "years_of_experience": years,
        })
    typer.echo(f"Skill '{skill['name']}' added with ID {skill['id']}.")


@app.command("delete")
def delete_skill(skill_id: int = typer.Argument(..., help="Skill ID")):
    with api_errors():
        api_delete_skill(get_client(), skill_id)
    typer.echo("Skill deleted.")
