import importlib
import pkgutil
from contextlib import closing
import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

import craftlaunch.commands
from craftlaunch.commands.utils import get_config, print_error, print_info, print_warning, setup_logging

# Initialize Typer and Console
app = typer.Typer(help="Minecraft Launcher CLI Tool")
console = Console()

# --- Command Loader ---
def load_commands():
    """
    Register every module in craftlaunch.commands that exposes a Typer `app`
    as a sub-command group named after the module.
    """
    for module_info in pkgutil.iter_modules(craftlaunch.commands.__path__):
        if module_info.name == "utils":
            continue
        try:
            module = importlib.import_module(f"craftlaunch.commands.{module_info.name}")
        except ImportError as e:
            console.print(f"[red]Failed to load module {module_info.name}: {e}[/red]")
            continue
        if hasattr(module, "app"):
            app.add_typer(module.app, name=module_info.name)

# Load commands immediately
load_commands()

# --- Interactive Menu ---

@app.callback(invoke_without_command=True)
def main_interactive(ctx: typer.Context):
    """
    Main entry point. Launches interactive menu if no command is provided.
    """
    config = get_config()
    setup_logging(config.log_level)
    if ctx.invoked_subcommand is None:
        show_menu()

def prompt_launch():
    from craftlaunch.services.launch_service import LaunchService

    config = get_config()
    with closing(LaunchService(config)) as service:
        _prompt_and_run(service, config)

def _prompt_and_run(service, config):
    from craftlaunch.commands.launch import run_command
    from craftlaunch.core.java import find_java, java_version

    latest = service.latest_release() or ""
    version = Prompt.ask(f"Enter game version (latest is {latest or 'unknown'})", default=latest or None)
    if not version:
        print_error("No version given.")
        return
    username = Prompt.ask("Enter your username", default=config.default_username)

    java = find_java(config.platform, config.java_path)
    if java:
        print_info(f"Java found: {java_version(java) or 'unknown version'} at {java}")
    if not java or not Confirm.ask("Use this Java?", default=True):
        java = Prompt.ask("Enter path to java")

    command = service.prepare_launch(version, username, java_path=java)
    if command is None:
        print_error(f"Could not prepare {version} for launch.")
        return
    run_command(service, command)

def show_menu():
    from craftlaunch.commands.launch import install
    from craftlaunch.commands.versions import list_versions

    while True:
        console.clear()

        # Header
        console.print(Panel.fit(
            "[bold white]Minecraft Launcher CLI[/bold white]\n[cyan]Download, install and play game versions.[/cyan]",
            title="Welcome",
            border_style="blue"
        ))

        # Options Table
        table = Table(show_header=True, header_style="bold magenta", expand=True)
        table.add_column("No.", style="dim", width=4, justify="center")
        table.add_column("Category", style="cyan", width=12)
        table.add_column("Action", style="white")
        table.add_column("Description", style="dim")

        table.add_row("1", "Game", "Launch", "Install if needed, then play")
        table.add_row("2", "Game", "Install", "Download a version without playing")
        table.add_row("3", "Versions", "List", "Show available releases")
        table.add_row("0", "Exit", "Quit", "Close the CLI")

        console.print(table)
        console.print("\n")

        choice = Prompt.ask("Select an option", choices=["1", "2", "3", "0"], default="1")

        try:
            if choice == "1":
                prompt_launch()
            elif choice == "2":
                install(Prompt.ask("Version"))
            elif choice == "3":
                list_versions(all_types=False, limit=30)
            elif choice == "0":
                console.print("[bold]Goodbye![/bold]")
                raise typer.Exit()
        except typer.Exit as e:
            if choice == "0":
                raise
            if e.exit_code:
                print_warning("Action did not complete.")

        input("\nPress Enter to continue...")

if __name__ == "__main__":
    app()
