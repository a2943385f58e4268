import logging
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress
from rich.theme import Theme

from craftlaunch.core.config import LauncherConfig, load_config
from craftlaunch.core.errors import ProgramRootError

# Custom theme for the CLI
custom_theme = Theme({
    "info": "dim cyan",
    "warning": "magenta",
    "error": "bold red",
    "success": "bold green",
    "header": "bold white on blue",
})

console = Console(theme=custom_theme)

def print_header(text: str):
    """Prints a styled header panel."""
    console.print(Panel(f"[bold white]{text}[/bold white]", style="blue", expand=False))

def print_success(text: str):
    console.print(f"[success]✔ {text}[/success]")

def print_error(text: str):
    console.print(f"[error]✖ {text}[/error]")

def print_info(text: str):
    console.print(f"[info]ℹ {text}[/info]")

def print_warning(text: str):
    console.print(f"[warning]⚠ {text}[/warning]")

def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )

def get_config() -> LauncherConfig:
    """
    Loads the configuration or exits. An unresolvable program root is the
    one fatal error, so it is reported before anything touches the disk.
    """
    try:
        return load_config()
    except ProgramRootError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

class ProgressReporter:
    """Feeds download progress callbacks into a rich progress bar, one task per stage."""

    def __init__(self, progress: Progress):
        self.progress = progress
        self.tasks = {}

    def __call__(self, stage: str, current: int, total: int):
        if stage not in self.tasks:
            self.tasks[stage] = self.progress.add_task(f"Downloading {stage}", total=total)
        self.progress.update(self.tasks[stage], completed=current, total=total)
