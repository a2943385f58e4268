from contextlib import closing
import typer
from rich.table import Table

from craftlaunch.commands.utils import console, get_config, print_error, print_header, print_info
from craftlaunch.services.launch_service import LaunchService

app = typer.Typer(help="Browse the remote version manifest")

@app.command("list")
def list_versions(
    all_types: bool = typer.Option(False, "--all", help="Include snapshots and old betas"),
    limit: int = typer.Option(30, help="Show at most this many versions (0 for no limit)"),
):
    """List versions available for download"""
    with closing(LaunchService(get_config())) as service:
        manifest = service.get_manifest()
    if manifest is None:
        print_error("Version manifest unavailable and no cached copy found.")
        raise typer.Exit(code=1)

    print_header(f"Available Versions (latest release: {manifest.latest_release})")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Version", style="cyan")
    table.add_column("Type")
    table.add_column("Released", style="dim")

    shown = 0
    for entry in manifest.versions:
        if not all_types and entry.type != "release":
            continue
        released = entry.releaseTime.strftime("%Y-%m-%d") if entry.releaseTime else ""
        table.add_row(entry.id, entry.type, released)
        shown += 1
        if limit and shown >= limit:
            break
    console.print(table)

@app.command("latest")
def latest():
    """Print the latest release id"""
    with closing(LaunchService(get_config())) as service:
        release = service.latest_release()
    if release is None:
        print_error("Version manifest unavailable.")
        raise typer.Exit(code=1)
    print_info(f"Latest release: {release}")
