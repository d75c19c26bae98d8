import typer

from cli.core.api import get_client, api_list_posts, api_update_post
from cli.core.utils import api_errors


app = typer.Typer(help="Blog commands (list, publish)")


@app.command("list")
def list_posts(
    drafts: bool = typer.Option(False, "--drafts", help="Only unpublished posts"),
):
    """
    List your blog posts, newest first.
    """
    with api_errors():
        posts = api_list_posts(get_client(), published=False if drafts else None)

    if not posts:
        typer.echo("No posts found.")
        return
    for post in posts:
        state = "published" if post["published"] else "draft"
        typer.echo(f"[{post['id']}] {post['title']} ({state})")


@app.command("publish")
def publish_post(
    post_id: int = typer.Argument(..., help="Post ID"),
    unpublish: bool = typer.Option(False, "--unpublish", help="Turn the post back into a draft"),
):
    """
    Publish (or unpublish) a post.
    """
    with api_errors():
        post = api_update_post(get_client(), post_id, {"published": not unpublish})
    typer.echo(f"Post '{post['title']}' is now {'published' if post['published'] else 'a draft'}.")
