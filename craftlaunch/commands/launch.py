from contextlib import closing
from typing import Optional
import typer
from rich.progress import Progress

from craftlaunch.commands.utils import (
    ProgressReporter,
    console,
    get_config,
    print_error,
    print_header,
    print_info,
    print_success,
)
from craftlaunch.core.process import GameProcess, LaunchCommand
from craftlaunch.services.launch_service import LaunchService

app = typer.Typer(help="Install and start game versions")

@app.command("install")
def install(version: str = typer.Argument(..., help="Version id, e.g. 1.19.4")):
    """Download everything a version needs without starting it"""
    config = get_config()
    print_header(f"Installing {version}")
    with Progress(console=console, transient=True) as progress:
        with closing(LaunchService(config, progress_callback=ProgressReporter(progress))) as service:
            installed = service.install(version)
    if installed is None:
        print_error(f"Version {version} could not be resolved.")
        raise typer.Exit(code=1)
    print_success(f"{version} is ready in {service.paths.version_dir(version)}")

@app.command("run")
def run(
    version: str = typer.Argument(..., help="Version id, e.g. 1.19.4"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Offline player name"),
    java: Optional[str] = typer.Option(None, "--java", help="Path to the java executable (detected when omitted)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command instead of starting the game"),
):
    """Install missing files, then start the game and wait for it to exit"""
    config = get_config()
    username = username or config.default_username
    print_header(f"Launching {version} as {username}")

    with Progress(console=console, transient=True) as progress:
        with closing(LaunchService(config, progress_callback=ProgressReporter(progress))) as service:
            command = service.prepare_launch(version, username, java_path=java)
    if command is None:
        print_error(f"Could not prepare {version} for launch.")
        raise typer.Exit(code=1)

    if dry_run:
        console.print(command.command_line, soft_wrap=True, markup=False, highlight=False)
        return

    run_command(service, command)

def run_command(service: LaunchService, command: LaunchCommand):
    print_info(f"Working directory: {command.working_dir}")
    game = GameProcess(command, service.config.platform, output=console.file)
    game.run()
    if game.return_code:
        print_error(f"Game exited with code {game.return_code}")
    else:
        print_success("Game closed.")
