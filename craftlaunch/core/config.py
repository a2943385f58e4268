import os
import sys
import logging
import platform as host_platform
from enum import Enum
from typing import Optional
from pydantic import BaseModel
from dotenv import load_dotenv

from craftlaunch.core.errors import ProgramRootError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"
DEFAULT_RESOURCES_URL = "https://resources.download.minecraft.net"


class Platform(str, Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    OSX = "osx"

    @property
    def classpath_separator(self) -> str:
        return ";" if self is Platform.WINDOWS else ":"

    @classmethod
    def detect(cls) -> "Platform":
        """Platform of the running interpreter, named the way library rules name it."""
        system = host_platform.system().lower()
        if "windows" in system or sys.platform == "win32":
            return cls.WINDOWS
        if "darwin" in system or "mac" in system:
            return cls.OSX
        return cls.LINUX

    @classmethod
    def parse(cls, value: str) -> "Platform":
        value = value.strip().lower()
        aliases = {"win": "windows", "win32": "windows", "macos": "osx", "darwin": "osx", "mac": "osx"}
        return cls(aliases.get(value, value))


class LauncherConfig(BaseModel):
    root: str
    platform: Platform
    manifest_url: str = DEFAULT_MANIFEST_URL
    resources_url: str = DEFAULT_RESOURCES_URL
    java_path: Optional[str] = None
    max_heap: str = "2G"
    launcher_brand: str = "minecraft-launcher"
    launcher_version: str = "2.1.1349"
    default_username: str = "Player"
    log_level: str = "INFO"


def resolve_program_root(override: Optional[str] = None) -> str:
    """
    Finds the directory every launcher file lives under.

    LAUNCHER_ROOT wins, otherwise ~/.craftlaunch. Nothing is created here;
    a failure is fatal and must happen before any directory setup.
    """
    root = override or os.getenv("LAUNCHER_ROOT")
    if not root:
        try:
            home = os.path.expanduser("~")
        except (KeyError, RuntimeError) as e:
            raise ProgramRootError(f"Could not resolve the home directory: {e}")
        if not home or home == "~":
            raise ProgramRootError("Could not resolve the home directory")
        root = os.path.join(home, ".craftlaunch")
    return os.path.abspath(root)


def load_config(root: Optional[str] = None, platform: Optional[Platform] = None) -> LauncherConfig:
    """Build the launcher configuration from the environment (and .env, if present)."""
    load_dotenv()

    platform_name = os.getenv("LAUNCHER_PLATFORM")
    if platform is None:
        if platform_name:
            try:
                platform = Platform.parse(platform_name)
            except ValueError:
                logger.warning(f"Unknown LAUNCHER_PLATFORM '{platform_name}', detecting instead")
                platform = Platform.detect()
        else:
            platform = Platform.detect()

    return LauncherConfig(
        root=resolve_program_root(root),
        platform=platform,
        manifest_url=os.getenv("MANIFEST_URL", DEFAULT_MANIFEST_URL),
        resources_url=os.getenv("RESOURCES_URL", DEFAULT_RESOURCES_URL).rstrip("/"),
        java_path=os.getenv("JAVA_PATH") or None,
        max_heap=os.getenv("JVM_MAX_HEAP", "2G"),
        launcher_brand=os.getenv("LAUNCHER_BRAND", "minecraft-launcher"),
        launcher_version=os.getenv("LAUNCHER_VERSION", "2.1.1349"),
        default_username=os.getenv("DEFAULT_USERNAME", "Player"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
