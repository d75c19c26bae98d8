from datetime import datetime
from typing import List, Optional
import typer

from cli.core.api import (
    get_client,
    api_add_education,
    api_add_experience,
    api_delete_education,
    api_delete_experience,
    api_get_profile,
    api_update_profile,
)
from cli.core.utils import api_errors


app = typer.Typer(help="Profile commands (show, update, experience and education history)")

SOCIAL_FIELDS = ("linkedin", "github", "twitter", "website")
DATE_FORMATS = ["%Y-%m-%d"]


def _period(entry: dict, ongoing: bool = False) -> str:
    start = entry["start_date"][:7]
    if ongoing:
        return f"{start} - present"
    return f"{start} - {entry['end_date'][:7]}" if entry.get("end_date") else start


@app.command("show")
def show_profile():
    """
    Show your profile.
    """
    with api_errors():
        profile = api_get_profile(get_client())

    typer.echo(f"Name: {profile['name']}")
    typer.echo(f"Email: {profile['email']}")
    for key in ("bio", "location", "phone") + SOCIAL_FIELDS:
        if profile.get(key):
            typer.echo(f"{key.capitalize()}: {profile[key]}")

    if profile.get("experiences"):
        typer.echo("Experience:")
        for entry in profile["experiences"]:
            typer.echo(f"  [{entry['id']}] {entry['title']} at {entry['company']} ({_period(entry, entry.get('current'))})")
    if profile.get("education"):
        typer.echo("Education:")
        for entry in profile["education"]:
            typer.echo(f"  [{entry['id']}] {entry['degree']}, {entry['institution']} ({_period(entry)})")


@app.command("update")
def update_profile(
    name: Optional[str] = typer.Option(None, "--name"),
    bio: Optional[str] = typer.Option(None, "--bio"),
    location: Optional[str] = typer.Option(None, "--location"),
    phone: Optional[str] = typer.Option(None, "--phone"),
    linkedin: Optional[str] = typer.Option(None, "--linkedin"),
    github: Optional[str] = typer.Option(None, "--github"),
    twitter: Optional[str] = typer.Option(None, "--twitter"),
    website: Optional[str] = typer.Option(None, "--website"),
):
    """
    Updates existing profile information.
    """
    update_data = {
        key: value
        for key, value in {
            "name": name, "bio": bio, "location": location, "phone": phone,
            "linkedin": linkedin, "github": github, "twitter": twitter, "website": website,
        }.items()
        if value is not None
    }
    if not update_data:
        typer.echo("Nothing to update.")
        raise typer.Exit(code=1)

    with api_errors():
        api_update_profile(get_client(), update_data)
    typer.echo("Profile updated.")


@app.command("add-experience")
def add_experience(
    title: str = typer.Argument(..., help="Job title"),
    company: str = typer.Option(..., "--company", "-c", prompt=True),
    start: datetime = typer.Option(..., "--start", formats=DATE_FORMATS, prompt="Start date (YYYY-MM-DD)"),
    end: Optional[datetime] = typer.Option(None, "--end", formats=DATE_FORMATS),
    current: bool = typer.Option(False, "--current", help="Still in this position"),
    location: Optional[str] = typer.Option(None, "--location"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    achievements: List[str] = typer.Option([], "--achievement", "-a", help="Repeat for each achievement"),
):
    """
    Add a position to your work history.
    """
    experience_data = {
        "title": title,
        "company": company,
        "start_date": start.isoformat(),
        "end_date": end.isoformat() if end and not current else None,
        "current": current,
        "location": location,
        "description": description,
        "achievements": list(achievements),
    }
    with api_errors():
        entry = api_add_experience(get_client(), experience_data)
    typer.echo(f"Experience '{entry['title']}' added with ID {entry['id']}.")


@app.command("remove-experience")
def remove_experience(experience_id: int = typer.Argument(..., help="Experience ID")):
    with api_errors():
        api_delete_experience(get_client(), experience_id)
    typer.echo("Experience deleted.")


@app.command("add-education")
def add_education(
    degree: str = typer.Argument(..., help="Degree"),
    institution: str = typer.Option(..., "--institution", "-i", prompt=True),
    start: datetime = typer.Option(..., "--start", formats=DATE_FORMATS, prompt="Start date (YYYY-MM-DD)"),
    end: Optional[datetime] = typer.Option(None, "--end", formats=DATE_FORMATS),
    location: Optional[str] = typer.Option(None, "--location"),
    gpa: Optional[str] = typer.Option(None, "--gpa"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
):
    """
    Add a degree to your education history.
    """
    with api_errors():
        entry = api_add_education(get_client(), {
            "degree": degree,
            "institution": institution,
            "start_date": start.isoformat(),
            "end_date": end.isoformat() if end else None,
            "location": location,
            "gpa": gpa,
            "description": description,
        })
    typer.echo(f"Education '{entry['degree']}' added with ID {entry['id']}.")


@app.command("remove-education")
def remove_education(education_id: int = typer.Argument(..., help="Education ID")):
    with api_errors():
        api_delete_education(get_client(), education_id)
    typer.echo("Education deleted.")
