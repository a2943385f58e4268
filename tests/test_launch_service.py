"""
End-to-end pipeline tests with an in-memory transport.
"""

import os

from craftlaunch.core.config import Platform
from craftlaunch.core.classpath import normalize_path
from craftlaunch.services.launch_service import LaunchService
from tests.conftest import (
    ASSET_HASH,
    DESCRIPTOR_URL,
    LIB_PATH,
    MANIFEST_URL,
    NATIVE_URL,
    FakeTransport,
    as_bytes,
    natives_jar,
)


class TestInstall:
    def test_full_install(self, config, transport):
        service = LaunchService(config, transport=transport)

        installed = service.install("1.19.4")

        paths = service.paths
        assert os.path.isfile(paths.library_path("1.19.4", LIB_PATH))
        assert os.path.isfile(paths.asset_index("3"))
        assert os.path.isfile(os.path.join(paths.assets_root, "objects", "aa", ASSET_HASH))
        assert os.path.isfile(paths.version_jar("1.19.4"))
        assert os.path.isdir(paths.profile_dir("1.19.4"))

        lib = normalize_path(paths.library_path("1.19.4", LIB_PATH))
        jar = normalize_path(paths.version_jar("1.19.4"))
        assert installed.classpath == f"{lib}:{jar}"

    def test_reinstall_is_offline(self, config, transport):
        LaunchService(config, transport=transport).install("1.19.4")

        rerun = FakeTransport()
        installed = LaunchService(config, transport=rerun).install("1.19.4")

        assert installed is not None
        assert rerun.calls == []

    def test_unknown_version(self, config, transport):
        service = LaunchService(config, transport=transport)
        assert service.install("0.0.1") is None
        assert transport.calls == [MANIFEST_URL]

    def test_no_manifest(self, config):
        assert LaunchService(config, transport=FakeTransport()).install("1.19.4") is None

    def test_windows_classpath(self, config, transport):
        config.platform = Platform.WINDOWS
        installed = LaunchService(config, transport=transport).install("1.19.4")
        assert installed.classpath.count(";") == 2


class TestLaunch:
    def test_command_contains_classpath_and_arguments(self, config, transport):
        service = LaunchService(config, transport=transport)

        command = service.prepare_launch("1.19.4", "alice", java_path="/opt/java/bin/java")

        argv = command.argv
        classpath = argv[argv.index("-cp") + 1]
        lib = normalize_path(service.paths.library_path("1.19.4", LIB_PATH))
        jar = normalize_path(service.paths.version_jar("1.19.4"))
        assert classpath == lib + ":" + jar
        assert argv[0] == "/opt/java/bin/java"
        assert argv[argv.index("--username") + 1] == "alice"
        assert argv[argv.index("--gameDir") + 1] == normalize_path(service.paths.profile_dir("1.19.4"))
        assert argv[argv.index("--assetIndex") + 1] == "3"
        assert "--demo" not in argv

    def test_launch_runs_the_command(self, config, transport, monkeypatch):
        started = []

        class RecordingProcess:
            def __init__(self, command, platform, output=None):
                self.command = command
                self.platform = platform

            def run(self):
                started.append((self.command, self.platform))
                return "game output"

        monkeypatch.setattr("craftlaunch.services.launch_service.GameProcess", RecordingProcess)
        service = LaunchService(config, transport=transport)

        captured = service.launch("1.19.4", "alice", java_path="/opt/java/bin/java")

        assert captured == "game output"
        command, platform = started[0]
        assert platform is Platform.LINUX
        assert command.argv[0] == "/opt/java/bin/java"

    def test_launch_unknown_version_starts_nothing(self, config, transport, monkeypatch):
        monkeypatch.setattr("craftlaunch.services.launch_service.GameProcess", None)
        assert LaunchService(config, transport=transport).launch("0.0.1", "alice", java_path="java") is None

    def test_latest_release_and_list(self, config, transport):
        service = LaunchService(config, transport=transport)
        assert service.latest_release() == "1.19.4"
        assert service.list_versions() == ["1.19.4"]
        assert service.list_versions(releases_only=False) == ["23w13a", "1.19.4"]
        assert transport.calls.count(MANIFEST_URL) == 1

    def test_natives_are_unpacked_into_library_path(self, config, transport, descriptor_doc, natives_library_doc):
        descriptor_doc["libraries"].append(natives_library_doc)
        transport.responses[DESCRIPTOR_URL] = as_bytes(descriptor_doc)
        transport.responses[NATIVE_URL] = natives_jar()
        service = LaunchService(config, transport=transport)

        command = service.prepare_launch("1.19.4", "alice", java_path="java")

        natives_dir = service.paths.natives_dir("1.19.4")
        assert f"-Djava.library.path={natives_dir}" in command.argv
        assert os.path.isfile(os.path.join(natives_dir, "libjinput-linux64.so"))
        assert "jinput" not in command.argv[command.argv.index("-cp") + 1]

    def test_close_leaves_borrowed_transport_open(self, config, transport):
        LaunchService(config, transport=transport).close()
        assert not transport.closed

    def test_close_releases_own_transport(self, config, transport, monkeypatch):
        monkeypatch.setattr("craftlaunch.services.launch_service.HttpTransport", lambda: transport)
        LaunchService(config).close()
        assert transport.closed
