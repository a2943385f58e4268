import os
import logging
import zipfile
from typing import Callable, Iterable, List, Optional

from craftlaunch.core import files
from craftlaunch.core.config import Platform
from craftlaunch.core.layout import LauncherPaths
from craftlaunch.endpoints.vanilla import AssetIndex, Library, VersionDescriptor

logger = logging.getLogger(__name__)

NULL_ARTIFACT = "null"

# progress_callback(stage, current, total)
ProgressCallback = Callable[[str, int, int], None]


def library_is_allowed(library: Library, platform: Platform) -> bool:
    """
    A library without rules is always allowed. Otherwise only the first rule
    is consulted: allowed when its os name is the running platform.
    """
    if not library.rules:
        return True
    first = library.rules[0]
    return first.os is not None and first.os.name == platform.value


def asset_shard(hash_: str) -> str:
    return hash_[0:2]


def asset_object_path(assets_root: str, hash_: str) -> str:
    """assets/objects/<hash[0:2]>/<hash>"""
    return os.path.join(assets_root, "objects", asset_shard(hash_), hash_)


def asset_object_url(resources_url: str, hash_: str) -> str:
    return f"{resources_url.rstrip('/')}/{asset_shard(hash_)}/{hash_}"


def extract_natives(jar_path: str, target_dir: str, exclude: Iterable[str] = ()) -> int:
    """
    Unpacks a natives jar into target_dir, skipping entries under any of the
    excluded prefixes (usually META-INF/). Returns the number of files written;
    an unreadable jar is logged and yields 0.
    """
    exclude = tuple(exclude)
    written = 0
    try:
        with zipfile.ZipFile(jar_path) as jar:
            for member in jar.infolist():
                if member.is_dir() or (exclude and member.filename.startswith(exclude)):
                    continue
                jar.extract(member, target_dir)
                written += 1
    except (zipfile.BadZipFile, OSError) as e:
        logger.error(f"Failed to extract natives from {jar_path}: {e}")
    return written


class AcquisitionEngine:
    """
    Puts every file a version needs on disk, downloading only what is missing.

    A file that already exists is never fetched again. A failed fetch is
    logged and leaves an empty file behind; the pass carries on.
    """

    def __init__(
        self,
        transport,
        paths: LauncherPaths,
        platform: Platform,
        resources_url: str,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.transport = transport
        self.paths = paths
        self.platform = platform
        self.resources_url = resources_url
        self.progress_callback = progress_callback

    def acquire_version(self, descriptor: VersionDescriptor, asset_index: Optional[AssetIndex]) -> None:
        self.acquire_client_jar(descriptor)
        self.acquire_logging_config(descriptor)
        self.acquire_libraries(descriptor)
        self.acquire_natives(descriptor)
        if asset_index is not None:
            self.acquire_assets(asset_index)

    def acquire_client_jar(self, descriptor: VersionDescriptor) -> Optional[str]:
        client = descriptor.downloads.client
        if client is None:
            logger.warning(f"Version {descriptor.id} has no client download")
            return None
        path = self.paths.version_jar(descriptor.id)
        self._materialize(client.url, path)
        return path

    def acquire_logging_config(self, descriptor: VersionDescriptor) -> Optional[str]:
        client = descriptor.logging_client
        if client is None:
            return None
        path = self.paths.logging_config(descriptor.id, client.file.id)
        self._materialize(client.file.url, path)
        return path

    def acquire_libraries(self, descriptor: VersionDescriptor) -> List[str]:
        """Returns the local paths of the libraries that were downloaded in this pass."""
        downloaded = []
        total = len(descriptor.libraries)
        for index, library in enumerate(descriptor.libraries):
            if library.artifact_path == NULL_ARTIFACT:
                continue
            path = self.paths.library_path(descriptor.id, library.artifact_path)
            if files.file_exists(path):
                continue
            if not library_is_allowed(library, self.platform):
                logger.debug(f"Skipping {library.name or library.artifact_path}: not for {self.platform.value}")
                continue

            self._materialize(library.artifact_url, path)
            downloaded.append(path)
            logger.info(f"Downloading libraries: {index + 1} out of {total}")
            self._report("libraries", index + 1, total)
        return downloaded

    def acquire_natives(self, descriptor: VersionDescriptor) -> int:
        """
        Fetches the natives jar each library declares for this platform into the
        libraries folder and unpacks it into <id>-natives. The `natives` map is
        the platform filter here; rules are not consulted. Returns the number of
        files extracted.
        """
        natives_dir = self.paths.natives_dir(descriptor.id)
        files.ensure_directory(natives_dir)
        extracted = 0
        total = len(descriptor.libraries)
        for index, library in enumerate(descriptor.libraries):
            classifier = library.native_classifier(self.platform.value)
            if classifier is None or not classifier.path:
                continue
            path = self.paths.library_path(descriptor.id, classifier.path)
            if not files.file_exists(path):
                logger.info(f"Downloading natives: {index + 1} out of {total}")
                self._materialize(classifier.url, path)
                self._report("natives", index + 1, total)
            extracted += extract_natives(path, natives_dir, library.extract_exclude)
        return extracted

    def acquire_assets(self, asset_index: AssetIndex) -> int:
        """Downloads each missing asset object; returns how many were fetched."""
        fetched = 0
        total = len(asset_index.objects)
        for counter, obj in enumerate(asset_index.objects.values(), start=1):
            path = asset_object_path(self.paths.assets_root, obj.hash)
            if files.file_exists(path):
                continue
            logger.info(f"Downloading assets: {counter} out of {total}")
            self._materialize(asset_object_url(self.resources_url, obj.hash), path)
            fetched += 1
            self._report("assets", counter, total)
        return fetched

    def _materialize(self, url: str, path: str) -> bool:
        if files.file_exists(path):
            return False
        files.ensure_directory(os.path.dirname(path))
        files.ensure_file(path)
        data = self.transport.fetch(url)
        if not data:
            logger.error(f"Download failed, leaving empty file at {path}")
        files.write_bytes(path, data)
        return True

    def _report(self, stage: str, current: int, total: int):
        if self.progress_callback:
            self.progress_callback(stage, current, total)
