import logging
from typing import List, Optional, TextIO
from pydantic import BaseModel

from craftlaunch.core import files
from craftlaunch.core.arguments import LaunchContext, expand_game_arguments, game_argument_template
from craftlaunch.core.classpath import build_classpath, library_paths, normalize_path
from craftlaunch.core.config import LauncherConfig
from craftlaunch.core.downloader import AcquisitionEngine, ProgressCallback
from craftlaunch.core.java import find_java
from craftlaunch.core.layout import LauncherPaths
from craftlaunch.core.process import GameProcess, LaunchCommand, build_launch_command
from craftlaunch.core.transport import HttpTransport
from craftlaunch.endpoints.vanilla import VanillaClient, VersionDescriptor, VersionManifest

logger = logging.getLogger(__name__)


class InstalledVersion(BaseModel):
    descriptor: VersionDescriptor
    version_jar: str
    classpath: str


class LaunchService:
    """
    Runs the whole pipeline for one version: manifest, descriptor, downloads,
    classpath, arguments and finally the game process.
    """

    def __init__(self, config: LauncherConfig, transport=None, progress_callback: Optional[ProgressCallback] = None):
        self.config = config
        self.paths = LauncherPaths(config.root)
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport()
        self.vanilla_client = VanillaClient(self.transport, self.paths, config.manifest_url)
        self.engine = AcquisitionEngine(
            self.transport,
            self.paths,
            config.platform,
            config.resources_url,
            progress_callback=progress_callback,
        )
        self._manifest: Optional[VersionManifest] = None

    def close(self):
        """Releases the HTTP session, unless the transport was handed in by the caller."""
        if self._owns_transport:
            self.transport.close()

    def prepare_directories(self, version_id: Optional[str] = None):
        for directory in self.paths.base_directories():
            files.ensure_directory(directory)
        if version_id:
            for directory in self.paths.version_directories(version_id):
                files.ensure_directory(directory)

    def get_manifest(self) -> Optional[VersionManifest]:
        if self._manifest is None:
            self._manifest = self.vanilla_client.resolve_manifest()
        return self._manifest

    def list_versions(self, releases_only: bool = True) -> List[str]:
        manifest = self.get_manifest()
        if manifest is None:
            return []
        return [v.id for v in manifest.versions if not releases_only or v.type == "release"]

    def latest_release(self) -> Optional[str]:
        manifest = self.get_manifest()
        return manifest.latest_release if manifest else None

    def resolve_descriptor(self, version_id: str) -> Optional[VersionDescriptor]:
        """Cached versions/<id>/<id>.json first, the manifest otherwise. None when unresolved."""
        descriptor = self.vanilla_client.load_cached_version(version_id)
        if descriptor is not None:
            return descriptor
        manifest = self.get_manifest()
        if manifest is None:
            logger.error(f"Cannot resolve {version_id}: no version manifest available")
            return None
        logger.info("Downloading jsons and xml configs")
        return self.vanilla_client.resolve_version(manifest, version_id)

    def install(self, version_id: str) -> Optional[InstalledVersion]:
        self.prepare_directories(version_id)
        descriptor = self.resolve_descriptor(version_id)
        if descriptor is None:
            return None

        asset_index = self.vanilla_client.resolve_asset_index(descriptor)
        self.engine.acquire_version(descriptor, asset_index)

        version_jar = self.paths.version_jar(version_id)
        classpath = build_classpath(library_paths(descriptor, self.paths), version_jar, self.config.platform)
        return InstalledVersion(descriptor=descriptor, version_jar=version_jar, classpath=classpath)

    def build_command(self, installed: InstalledVersion, username: str, java_path: str) -> LaunchCommand:
        descriptor = installed.descriptor
        context = LaunchContext(
            username=username,
            version_id=descriptor.id,
            game_directory=normalize_path(self.paths.profile_dir(descriptor.id)),
            assets_root=normalize_path(self.paths.assets_root),
            assets_index_name=descriptor.assetIndex.id if descriptor.assetIndex else descriptor.assets_id,
            version_type=descriptor.type,
        )
        game_args = expand_game_arguments(game_argument_template(descriptor), context)
        return build_launch_command(java_path, descriptor, self.paths, installed.classpath, game_args, self.config)

    def prepare_launch(self, version_id: str, username: str, java_path: Optional[str] = None) -> Optional[LaunchCommand]:
        installed = self.install(version_id)
        if installed is None:
            return None
        java = java_path or find_java(self.config.platform, self.config.java_path)
        if not java:
            logger.error("No Java runtime available; set JAVA_PATH or pass --java")
            return None
        return self.build_command(installed, username, java)

    def launch(self, version_id: str, username: str, java_path: Optional[str] = None,
               output: Optional[TextIO] = None) -> Optional[str]:
        """Installs what is missing, starts the game and waits for it. Returns the captured output."""
        command = self.prepare_launch(version_id, username, java_path)
        if command is None:
            return None
        return GameProcess(command, self.config.platform, output=output).run()
