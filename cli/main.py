# cli/main.py
import logging

import typer
from cli.auth.commands import app as auth_app
from cli.projects.commands import app as projects_app
from cli.skills.commands import app as skills_app
from cli.blog.commands import app as blog_app
from cli.profile.commands import app as profile_app
from cli.collaborators.commands import app as collaborators_app
from cli.home.commands import app as home_app

app = typer.Typer(help="PortFolium command line client")
app.add_typer(auth_app, name="auth")
app.add_typer(projects_app, name="projects")
app.add_typer(skills_app, name="skills")
app.add_typer(blog_app, name="blog")
app.add_typer(profile_app, name="profile")
app.add_typer(collaborators_app, name="collaborators")
app.add_typer(home_app, name="home")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show request and session debug logs")):
    # User-facing output goes through typer.echo; logs are for debugging only
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s [%(name)s] %(message)s",
    )


if __name__ == "__main__":
    app()
