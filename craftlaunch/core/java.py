import os
import sys
import shutil
import logging
import subprocess
from typing import Optional

from craftlaunch.core.config import Platform

logger = logging.getLogger(__name__)

WINDOWS_JRE_KEY = r"SOFTWARE\JavaSoft\Java Runtime Environment"


def _java_binary_name(platform: Platform) -> str:
    return "java.exe" if platform is Platform.WINDOWS else "java"


def _from_java_home(platform: Platform) -> Optional[str]:
    java_home = os.getenv("JAVA_HOME")
    if not java_home:
        return None
    candidate = os.path.join(java_home, "bin", _java_binary_name(platform))
    return candidate if os.path.isfile(candidate) else None


def _from_windows_registry() -> Optional[str]:
    if sys.platform != "win32":
        return None
    import winreg

    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, WINDOWS_JRE_KEY, 0,
                            winreg.KEY_READ | winreg.KEY_WOW64_32KEY) as key:
            java_home, _ = winreg.QueryValueEx(key, "JavaHome")
    except OSError:
        return None
    candidate = os.path.join(java_home, "bin", "java.exe")
    return candidate if os.path.isfile(candidate) else None


def find_java(platform: Platform, configured: Optional[str] = None) -> Optional[str]:
    """
    Automatic runtime selection: JAVA_PATH setting, then JAVA_HOME, then the
    Windows registry, then whatever `java` is on PATH.
    """
    if configured:
        return configured
    found = _from_java_home(platform)
    if found:
        return found
    if platform is Platform.WINDOWS:
        found = _from_windows_registry()
        if found:
            return found
    found = shutil.which("java")
    if not found:
        logger.warning("No Java runtime found on PATH")
    return found


def java_version(java_path: str) -> str:
    """First line of `java -version` (printed on stderr), or '' when it cannot run."""
    try:
        result = subprocess.run([java_path, "-version"], capture_output=True, text=True)
    except OSError as e:
        logger.error(f"Could not run {java_path}: {e}")
        return ""
    output = (result.stderr or result.stdout).strip()
    return output.splitlines()[0] if output else ""
