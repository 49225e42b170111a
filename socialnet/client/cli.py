import typer
from ..core.service import SocialService
from ..core.errors import SocialError

app = typer.Typer(help="Simple social network client (JSONL storage)")

def _service(ctx: typer.Context) -> SocialService:
    return ctx.obj

def _call(fn, *args):
    """Run a facade operation, turning domain errors into exit code 1."""
    try:
        return fn(*args)
    except SocialError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

def _print_all(items):
    for item in items:
        typer.echo(item)

def _print_optional(value):
    # ranking queries return None on empty data
    typer.echo(value if value is not None else "-")

@app.callback()
def main(
    ctx: typer.Context,
    data_dir: str = typer.Option("socialnet_data", envvar="SOCIALNET_DATA_DIR",
                                 help="Directory holding the JSONL data files"),
):
    """
    Open the data directory shared by every command.
    """
    ctx.obj = SocialService.from_directory(data_dir)

@app.command("add-person")
def add_person_cmd(ctx: typer.Context, code: str, name: str, surname: str):
    """Create a new account."""
    _call(_service(ctx).add_person, code, name, surname)
    typer.echo(f"[person] Added {code}")

@app.command("person")
def person_cmd(ctx: typer.Context, code: str):
    """Show code, name and surname of an account."""
    typer.echo(_call(_service(ctx).get_person, code))

@app.command("befriend")
def befriend_cmd(ctx: typer.Context, code_a: str, code_b: str):
    """Make two persons friends."""
    _call(_service(ctx).add_friendship, code_a, code_b)
    typer.echo(f"[friends] {code_a} <-> {code_b}")

@app.command("friends")
def friends_cmd(ctx: typer.Context, code: str):
    """List the friends of a person."""
    _print_all(_call(_service(ctx).list_of_friends, code))

@app.command("add-group")
def add_group_cmd(ctx: typer.Context, name: str):
    """Create a new group."""
    _call(_service(ctx).add_group, name)
    typer.echo(f"[group] Created group {name}")

@app.command("delete-group")
def delete_group_cmd(ctx: typer.Context, name: str):
    """Delete a group."""
    _call(_service(ctx).delete_group, name)
    typer.echo(f"[group] Deleted group {name}")

@app.command("rename-group")
def rename_group_cmd(ctx: typer.Context, name: str, new_name: str):
    """Rename a group, keeping its members."""
    _call(_service(ctx).update_group_name, name, new_name)
    typer.echo(f"[group] Renamed {name} to {new_name}")

@app.command("join")
def join_cmd(ctx: typer.Context, code: str, group: str):
    """Add a person to a group."""
    _call(_service(ctx).add_person_to_group, code, group)
    typer.echo(f"[group] {code} joined {group}")

@app.command("groups")
def groups_cmd(ctx: typer.Context):
    """List all group names."""
    _print_all(sorted(_service(ctx).list_of_groups()))

@app.command("members")
def members_cmd(ctx: typer.Context, group: str):
    """List the members of a group (nothing for an unknown group)."""
    _print_all(_service(ctx).list_of_people_in_group(group))

@app.command("most-friends")
def most_friends_cmd(ctx: typer.Context):
    """Show the person with the most friends."""
    _print_optional(_service(ctx).person_with_largest_number_of_friends())

@app.command("largest-group")
def largest_group_cmd(ctx: typer.Context):
    """Show the group with the most members."""
    _print_optional(_service(ctx).largest_group())

@app.command("most-groups")
def most_groups_cmd(ctx: typer.Context):
    """Show the person who belongs to the most groups."""
    _print_optional(_service(ctx).person_in_largest_number_of_groups())

@app.command("post")
def post_cmd(ctx: typer.Context, author: str, text: str):
    """Publish a post and print its id."""
    typer.echo(_call(_service(ctx).post, author, text))

@app.command("post-content")
def post_content_cmd(ctx: typer.Context, post_id: str):
    """Print the text of a post."""
    typer.echo(_call(_service(ctx).get_post_content, post_id))

@app.command("post-time")
def post_time_cmd(ctx: typer.Context, post_id: str):
    """Print the timestamp (ms) of a post."""
    typer.echo(_call(_service(ctx).get_timestamp, post_id))

@app.command("user-posts")
def user_posts_cmd(ctx: typer.Context, author: str, page: int = 1, page_length: int = 10):
    """Print one page of a person's own posts, newest first."""
    _print_all(_call(_service(ctx).get_paginated_user_posts, author, page, page_length))

@app.command("friend-posts")
def friend_posts_cmd(ctx: typer.Context, author: str, page: int = 1, page_length: int = 10):
    """Print one page of the posts of a person's friends as author:post_id."""
    _print_all(_call(_service(ctx).get_paginated_friend_posts, author, page, page_length))

if __name__ == "__main__":
    app()
