import sys
import shlex
import logging
import subprocess
from typing import List, Optional, TextIO
from pydantic import BaseModel

from craftlaunch.core.arguments import substitute
from craftlaunch.core.config import LauncherConfig, Platform
from craftlaunch.core.layout import LauncherPaths
from craftlaunch.endpoints.vanilla import VersionDescriptor

logger = logging.getLogger(__name__)

G1_TUNING = [
    "-XX:+UnlockExperimentalVMOptions",
    "-XX:+UseG1GC",
    "-XX:G1NewSizePercent=20",
    "-XX:G1ReservePercent=20",
    "-XX:MaxGCPauseMillis=50",
    "-XX:G1HeapRegionSize=32M",
]


class LaunchCommand(BaseModel):
    argv: List[str]
    working_dir: str

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)


def jvm_arguments(descriptor: VersionDescriptor, paths: LauncherPaths, config: LauncherConfig) -> List[str]:
    args = [
        "-Xss1M",
        f"-Djava.library.path={paths.natives_dir(descriptor.id)}",
        f"-Dminecraft.launcher.brand={config.launcher_brand}",
        f"-Dminecraft.launcher.version={config.launcher_version}",
    ]
    logging_client = descriptor.logging_client
    if logging_client is not None:
        config_path = paths.logging_config(descriptor.id, logging_client.file.id)
        args.append(substitute(logging_client.argument, "path", config_path))
    args.append(f"-Xmx{config.max_heap}")
    args.extend(G1_TUNING)
    return args


def build_launch_command(
    java_path: str,
    descriptor: VersionDescriptor,
    paths: LauncherPaths,
    classpath: str,
    game_args: List[str],
    config: LauncherConfig,
) -> LaunchCommand:
    """java <jvm flags> -cp <classpath> <mainClass> <game args>, in that order."""
    argv = [java_path]
    argv.extend(jvm_arguments(descriptor, paths, config))
    argv.extend(["-cp", classpath])
    argv.append(descriptor.mainClass)
    argv.extend(game_args)
    return LaunchCommand(argv=argv, working_dir=paths.profile_dir(descriptor.id))


class GameProcess:
    """
    Runs the game and blocks until it exits.

    On Windows the child is created and waited on without touching its
    output. Elsewhere stdout and stderr are merged, echoed line by line and
    captured.
    """

    def __init__(self, command: LaunchCommand, platform: Platform, output: Optional[TextIO] = None):
        self.command = command
        self.platform = platform
        self.output = output or sys.stdout
        self.return_code: Optional[int] = None

    def run(self) -> str:
        logger.info(f"Command: {self.command.command_line}")
        try:
            if self.platform is Platform.WINDOWS:
                return self._run_blocking()
            return self._run_streaming()
        except OSError as e:
            logger.error(f"Failed to execute the command: {e}")
            return ""
        finally:
            logger.info("shutting game down...")

    def _run_blocking(self) -> str:
        completed = subprocess.run(self.command.argv, cwd=self.command.working_dir)
        self.return_code = completed.returncode
        logger.info(f"Game exited with code {self.return_code}")
        return ""

    def _run_streaming(self) -> str:
        captured = []
        with subprocess.Popen(
            self.command.argv,
            cwd=self.command.working_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        ) as process:
            for line in process.stdout:
                captured.append(line)
                self.output.write(line)
                self.output.flush()
            self.return_code = process.wait()
        logger.info(f"Game exited with code {self.return_code}")
        return "".join(captured)
