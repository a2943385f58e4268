import os


class LauncherPaths:
    """Every location the launcher reads or writes, relative to the program root."""

    def __init__(self, root: str):
        self.root = root

    @property
    def manifest_cache(self) -> str:
        return os.path.join(self.root, "manifest_cache.json")

    @property
    def versions_dir(self) -> str:
        return os.path.join(self.root, "versions")

    @property
    def profiles_dir(self) -> str:
        return os.path.join(self.root, "profiles")

    @property
    def assets_root(self) -> str:
        return os.path.join(self.root, "assets")

    @property
    def asset_indexes_dir(self) -> str:
        return os.path.join(self.assets_root, "indexes")

    @property
    def asset_objects_dir(self) -> str:
        return os.path.join(self.assets_root, "objects")

    def version_dir(self, version_id: str) -> str:
        return os.path.join(self.versions_dir, version_id)

    def version_json(self, version_id: str) -> str:
        return os.path.join(self.version_dir(version_id), f"{version_id}.json")

    def version_jar(self, version_id: str) -> str:
        return os.path.join(self.version_dir(version_id), f"{version_id}.jar")

    def libraries_dir(self, version_id: str) -> str:
        return os.path.join(self.version_dir(version_id), "libraries")

    def library_path(self, version_id: str, artifact_path: str) -> str:
        return os.path.join(self.libraries_dir(version_id), *artifact_path.split("/"))

    def logging_config(self, version_id: str, file_id: str) -> str:
        return os.path.join(self.version_dir(version_id), f"logging-{file_id}")

    def natives_dir(self, version_id: str) -> str:
        return os.path.join(self.version_dir(version_id), f"{version_id}-natives")

    def asset_index(self, assets_id: str) -> str:
        return os.path.join(self.asset_indexes_dir, f"{assets_id}.json")

    def profile_dir(self, version_id: str) -> str:
        return os.path.join(self.profiles_dir, version_id)

    def base_directories(self):
        return [self.profiles_dir, self.asset_indexes_dir, self.asset_objects_dir, self.versions_dir]

    def version_directories(self, version_id: str):
        return [self.version_dir(version_id), self.libraries_dir(version_id), self.profile_dir(version_id)]
