import re
from contextlib import contextmanager
import typer

from .errors import PortfoliumError, SessionExpiredError

EMAIL_REGEX = re.compile(r"^[\w\.+-]+@[\w\.-]+\.\w+$")

def validate_password(password: str) -> bool:
    """
    Validates password strength:
    - At least 8 characters
    - At least one lowercase letter
    - At least one uppercase letter
    - At least one number
    """
    if len(password) < 8:
        typer.echo("Password must be at least 8 characters long.")
        return False

    if not re.search(r"[a-z]", password):
        typer.echo("Password must contain at least one lowercase letter.")
        return False

    if not re.search(r"[A-Z]", password):
        typer.echo("Password must contain at least one uppercase letter.")
        return False

    if not re.search(r"\d", password):
        typer.echo("Password must contain at least one number.")
        return False

    return True

def validate_email(email: str) -> bool:
    if not EMAIL_REGEX.match(email.strip()):
        typer.echo("Invalid email.")
        return False
    return True

@contextmanager
def api_errors():
    """
    Turn client errors into a message and exit code 1.
    """
    try:
        yield
    except SessionExpiredError:
        typer.echo("Session expired. Please login again.")
        raise typer.Exit(code=1)
    except PortfoliumError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1)
