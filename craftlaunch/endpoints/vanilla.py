import logging
from typing import List, Dict, Optional, Union, Any
from datetime import datetime
from pydantic import BaseModel, ValidationError

from craftlaunch.core import files
from craftlaunch.core.layout import LauncherPaths

logger = logging.getLogger(__name__)

# ==========================================
# 1. DATA MODELS (MOJANG)
# ==========================================

class VersionEntry(BaseModel):
    id: str
    type: str = "release"  # 'release' or 'snapshot'
    url: str               # descriptor URL for this version
    time: Optional[datetime] = None
    releaseTime: Optional[datetime] = None

class LatestVersions(BaseModel):
    release: str
    snapshot: Optional[str] = None

class VersionManifest(BaseModel):
    latest: LatestVersions
    versions: List[VersionEntry]

    @property
    def latest_release(self) -> str:
        return self.latest.release

    def find(self, version_id: str) -> Optional[VersionEntry]:
        # First match wins; the manifest is ordered newest first
        for entry in self.versions:
            if entry.id == version_id:
                return entry
        return None

# Version descriptor (step 2)
class DownloadInfo(BaseModel):
    url: str
    sha1: Optional[str] = None
    size: Optional[int] = None

class VersionDownloads(BaseModel):
    client: Optional[DownloadInfo] = None
    server: Optional[DownloadInfo] = None

class Artifact(BaseModel):
    path: Optional[str] = None
    url: str = ""
    sha1: Optional[str] = None
    size: Optional[int] = None

class LibraryDownloads(BaseModel):
    artifact: Optional[Artifact] = None
    classifiers: Dict[str, Artifact] = {}  # e.g. natives-linux -> jar

class LibraryExtract(BaseModel):
    exclude: List[str] = []

class RuleOS(BaseModel):
    name: Optional[str] = None

class Rule(BaseModel):
    action: str = "allow"
    os: Optional[RuleOS] = None

class Library(BaseModel):
    name: Optional[str] = None
    downloads: Optional[LibraryDownloads] = None
    rules: Optional[List[Rule]] = None
    natives: Optional[Dict[str, str]] = None  # os name -> classifier key
    extract: Optional[LibraryExtract] = None

    def native_classifier(self, os_name: str) -> Optional[Artifact]:
        """The natives jar declared for os_name, if any. Only 64-bit classifiers are picked."""
        if not self.natives or not self.downloads:
            return None
        key = self.natives.get(os_name)
        if key is None:
            return None
        return self.downloads.classifiers.get(key.replace("${arch}", "64"))

    @property
    def extract_exclude(self) -> List[str]:
        return self.extract.exclude if self.extract else []

    @property
    def artifact_path(self) -> str:
        """Declared artifact path, or the "null" sentinel for libraries without one (natives-only)."""
        if self.downloads and self.downloads.artifact and self.downloads.artifact.path:
            return self.downloads.artifact.path
        return "null"

    @property
    def artifact_url(self) -> str:
        if self.downloads and self.downloads.artifact:
            return self.downloads.artifact.url
        return ""

class AssetIndexRef(BaseModel):
    id: str
    url: str
    sha1: Optional[str] = None
    size: Optional[int] = None
    totalSize: Optional[int] = None

class LoggingFile(BaseModel):
    id: str
    url: str
    sha1: Optional[str] = None
    size: Optional[int] = None

class LoggingClient(BaseModel):
    argument: str
    file: LoggingFile
    type: Optional[str] = None

class LoggingConfig(BaseModel):
    client: Optional[LoggingClient] = None

class Arguments(BaseModel):
    game: List[Union[str, Dict[str, Any]]] = []
    jvm: List[Union[str, Dict[str, Any]]] = []

class VersionDescriptor(BaseModel):
    id: str
    type: str = "release"
    mainClass: str
    assets: Optional[str] = None
    assetIndex: Optional[AssetIndexRef] = None
    libraries: List[Library] = []
    downloads: VersionDownloads = VersionDownloads()
    logging: Optional[LoggingConfig] = None
    arguments: Optional[Arguments] = None
    minecraftArguments: Optional[str] = None

    @property
    def assets_id(self) -> str:
        if self.assets:
            return self.assets
        return self.assetIndex.id if self.assetIndex else ""

    @property
    def logging_client(self) -> Optional[LoggingClient]:
        return self.logging.client if self.logging else None

# Asset index
class AssetObject(BaseModel):
    hash: str
    size: int = 0

class AssetIndex(BaseModel):
    objects: Dict[str, AssetObject] = {}

# ==========================================
# 2. API CLIENT (MANIFEST RESOLVER)
# ==========================================

class VanillaClient:
    def __init__(self, transport, paths: LauncherPaths, manifest_url: str):
        self.transport = transport
        self.paths = paths
        self.manifest_url = manifest_url

    def resolve_manifest(self) -> Optional[VersionManifest]:
        """
        Fetches the master version list.

        A fetched manifest is written to manifest_cache.json only once it
        validates. When the fetch fails or returns something that is not a
        manifest, the cached copy is used instead; None means neither was
        available.
        """
        data = self.transport.fetch(self.manifest_url)
        manifest = self._parse_manifest(data, self.manifest_url) if data else None
        if manifest is not None:
            files.ensure_directory(self.paths.root)
            files.write_bytes(self.paths.manifest_cache, data)
            return manifest

        logger.warning("Version manifest unavailable, falling back to manifest_cache.json")
        cache = self.paths.manifest_cache
        manifest = self._parse_manifest(files.read_bytes(cache), cache) if files.file_exists(cache) else None
        if manifest is None:
            logger.error("No version manifest could be loaded")
        return manifest

    def _parse_manifest(self, data: bytes, source: str) -> Optional[VersionManifest]:
        document = files.parse_json(data, source)
        if document is None:
            return None
        try:
            return VersionManifest.model_validate(document)
        except ValidationError as e:
            logger.error(f"Malformed version manifest from {source}: {e}")
            return None

    def resolve_version(self, manifest: VersionManifest, version_id: str) -> Optional[VersionDescriptor]:
        """Downloads the descriptor of version_id and caches it under versions/<id>/."""
        entry = manifest.find(version_id)
        if entry is None:
            logger.error(f"Version '{version_id}' does not exist in the version manifest")
            return None

        data = self.transport.fetch(entry.url)
        descriptor = self._parse_descriptor(data, entry.url)
        if descriptor is None:
            return None

        files.ensure_directory(self.paths.version_dir(version_id))
        files.ensure_file(self.paths.version_json(version_id))
        files.write_bytes(self.paths.version_json(version_id), data)
        return descriptor

    def load_cached_version(self, version_id: str) -> Optional[VersionDescriptor]:
        path = self.paths.version_json(version_id)
        if not files.file_exists(path):
            return None
        logger.info(f"Using cached descriptor {path}")
        return self._parse_descriptor(files.read_bytes(path), path)

    def resolve_asset_index(self, descriptor: VersionDescriptor) -> Optional[AssetIndex]:
        """Cached assets/indexes/<assets>.json, or the index fetched from the descriptor's URL."""
        if descriptor.assetIndex is None:
            logger.warning(f"Version {descriptor.id} declares no asset index")
            return None

        path = self.paths.asset_index(descriptor.assets_id)
        if files.file_exists(path):
            document = files.load_json(path)
        else:
            data = self.transport.fetch(descriptor.assetIndex.url)
            document = files.parse_json(data, descriptor.assetIndex.url)
            if document is not None:
                files.ensure_directory(self.paths.asset_indexes_dir)
                files.save_json(document, path)

        if document is None:
            logger.error(f"Asset index {descriptor.assets_id} could not be loaded")
            return None
        try:
            return AssetIndex.model_validate(document)
        except ValidationError as e:
            logger.error(f"Malformed asset index {descriptor.assets_id}: {e}")
            return None

    def _parse_descriptor(self, data: bytes, source: str) -> Optional[VersionDescriptor]:
        document = files.parse_json(data, source)
        if document is None:
            logger.error(f"Version descriptor from {source} is empty or unreadable")
            return None
        try:
            return VersionDescriptor.model_validate(document)
        except ValidationError as e:
            logger.error(f"Malformed version descriptor from {source}: {e}")
            return None
