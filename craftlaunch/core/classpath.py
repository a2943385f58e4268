import os
from typing import Iterable, List

from craftlaunch.core.config import Platform
from craftlaunch.core.layout import LauncherPaths
from craftlaunch.endpoints.vanilla import VersionDescriptor


def normalize_path(path: str) -> str:
    return path.replace("\\", "/")


def build_classpath(library_paths: Iterable[str], version_jar: str, platform: Platform) -> str:
    """
    Joins the libraries that exist on disk, then the version jar, with the
    platform separator. Libraries never downloaded (e.g. ruled out for this
    platform) are left out.
    """
    classpath = ""
    for path in library_paths:
        if os.path.isfile(path):
            classpath += normalize_path(path) + platform.classpath_separator
    return classpath + normalize_path(version_jar)


def library_paths(descriptor: VersionDescriptor, paths: LauncherPaths) -> List[str]:
    return [paths.library_path(descriptor.id, lib.artifact_path) for lib in descriptor.libraries]
