class LauncherError(Exception):
    """Base class for launcher failures that abort the pipeline."""


class ProgramRootError(LauncherError):
    """The program root directory could not be resolved."""
