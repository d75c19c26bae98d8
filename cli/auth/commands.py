import getpass
import typer

from cli.core.api import get_client
from cli.core.auth import SessionManager
from cli.core.errors import InvalidCredentialsError
from cli.core.utils import api_errors, validate_email, validate_password


app = typer.Typer(help="Authentication commands (login, register, logout)")


@app.command("login")
def login(
    email: str = typer.Option(None, "--email", "-e", help="Email"),
):
    """
    Login to the API. Only allowed if no session is active.
    """
    manager = SessionManager(get_client())
    if manager.state.is_authenticated:
        typer.echo("Session already active. Logout first to remove current session token.")
        raise typer.Exit(code=1)

    if email is None:
        email = typer.prompt("Email")
    if not validate_email(email):
        raise typer.Exit(code=1)

    password = getpass.getpass("Password: ")
    if not password:
        typer.echo("Password is required.")
        raise typer.Exit(code=1)

    with api_errors():
        try:
            user = manager.login(email, password)
        except InvalidCredentialsError:
            typer.echo("Login failed (invalid email or password).")
            raise typer.Exit(code=1)

    typer.echo(f"Login successful as '{user.email}'.")


@app.command("register")
def register(
    email: str = typer.Option(None, "--email", "-e", help="Email"),
    name: str = typer.Option(None, "--name", "-n", help="Display name"),
):
    """
    Create an account and start a session with it.
    """
    manager = SessionManager(get_client())
    if manager.state.is_authenticated:
        typer.echo("Session already active. Logout first.")
        raise typer.Exit(code=1)

    if email is None:
        email = typer.prompt("Email")
    if not validate_email(email):
        raise typer.Exit(code=1)

    if name is None:
        name = typer.prompt("Name")
    if not name.strip():
        typer.echo("Name cannot be empty.")
        raise typer.Exit(code=1)

    password = getpass.getpass("Password: ")
    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        typer.echo("Passwords do not match.")
        raise typer.Exit(code=1)
    if not validate_password(password):
        raise typer.Exit(code=1)

    with api_errors():
        user = manager.register(email, password, name)
    typer.echo(f"Account created. Logged in as '{user.email}'.")


@app.command("logout")
def logout():
    """
    End session and delete local tokens.
    """
    manager = SessionManager(get_client())
    if not manager.store.access_token:
        manager.logout()
        typer.echo("No active session.")
        return
    if manager.logout():
        typer.echo("Logged out from backend.")
    else:
        typer.echo("Warning: Failed to logout from backend.")
    typer.echo("Session ended.")


@app.command("whoami")
def whoami():
    """
    Show the user of the current session.
    """
    manager = SessionManager(get_client())
    user = manager.get_current_user()
    if user is None:
        typer.echo("No active session.")
        raise typer.Exit(code=1)
    typer.echo(f"{user.name} <{user.email}> (id {user.id})")
