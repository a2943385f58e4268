"""
Shared fixtures: an in-memory transport and a small but complete version.
"""

import io
import json
import zipfile
import pytest

from craftlaunch.core.config import LauncherConfig, Platform
from craftlaunch.core.layout import LauncherPaths

MANIFEST_URL = "https://meta.example.test/mc/game/version_manifest.json"
RESOURCES_URL = "https://resources.example.test"
DESCRIPTOR_URL = "https://meta.example.test/v1/packages/1.19.4.json"
ASSET_INDEX_URL = "https://meta.example.test/v1/packages/3.json"
CLIENT_URL = "https://libraries.example.test/client.jar"
LOGGING_URL = "https://libraries.example.test/client-1.12.xml"
LIB_URL = "https://libraries.example.test/com/example/lib/1.0/lib-1.0.jar"
WIN_LIB_URL = "https://libraries.example.test/org/lwjgl/lwjgl/3.3.1/lwjgl-3.3.1-natives-windows.jar"

LIB_PATH = "com/example/lib/1.0/lib-1.0.jar"
WIN_LIB_PATH = "org/lwjgl/lwjgl/3.3.1/lwjgl-3.3.1-natives-windows.jar"
ASSET_HASH = "aa11" + "0" * 36

NATIVE_URL = "https://libraries.example.test/net/java/jinput/jinput-platform/2.0.5/jinput-platform-2.0.5-natives-linux.jar"
NATIVE_PATH = "net/java/jinput/jinput-platform/2.0.5/jinput-platform-2.0.5-natives-linux.jar"


def as_bytes(document) -> bytes:
    return json.dumps(document).encode("utf-8")


class FakeTransport:
    """Serves canned bodies by URL and records every request. Unknown URLs fail (empty body)."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self.closed = False

    def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        return self.responses.get(url, b"")

    def close(self):
        self.closed = True


@pytest.fixture
def config(tmp_path):
    return LauncherConfig(
        root=str(tmp_path / "root"),
        platform=Platform.LINUX,
        manifest_url=MANIFEST_URL,
        resources_url=RESOURCES_URL,
    )


@pytest.fixture
def paths(config):
    return LauncherPaths(config.root)


@pytest.fixture
def manifest_doc():
    return {
        "latest": {"release": "1.19.4", "snapshot": "23w13a"},
        "versions": [
            {"id": "23w13a", "type": "snapshot", "url": "https://meta.example.test/v1/packages/23w13a.json",
             "time": "2023-03-29T12:00:00+00:00", "releaseTime": "2023-03-29T12:00:00+00:00"},
            {"id": "1.19.4", "type": "release", "url": DESCRIPTOR_URL,
             "time": "2023-03-14T12:56:18+00:00", "releaseTime": "2023-03-14T12:56:18+00:00"},
        ],
    }


@pytest.fixture
def descriptor_doc():
    return {
        "id": "1.19.4",
        "type": "release",
        "mainClass": "net.minecraft.client.main.Main",
        "assets": "3",
        "assetIndex": {"id": "3", "url": ASSET_INDEX_URL},
        "downloads": {"client": {"url": CLIENT_URL}},
        "logging": {
            "client": {
                "argument": "-Dlog4j.configurationFile=${path}",
                "file": {"id": "client-1.12.xml", "url": LOGGING_URL},
                "type": "log4j2-xml",
            }
        },
        "arguments": {
            "game": [
                "--username", "${auth_player_name}",
                "--version", "${version_name}",
                "--gameDir", "${game_directory}",
                "--assetsDir", "${assets_root}",
                "--assetIndex", "${assets_index_name}",
                "--accessToken", "${auth_access_token}",
                "--versionType", "${version_type}",
                {"rules": [{"action": "allow", "features": {"is_demo_user": True}}], "value": "--demo"},
            ],
            "jvm": [],
        },
        "libraries": [
            {"name": "com.example:lib:1.0", "downloads": {"artifact": {"path": LIB_PATH, "url": LIB_URL}}},
            {
                "name": "org.lwjgl:lwjgl:3.3.1:natives-windows",
                "downloads": {"artifact": {"path": WIN_LIB_PATH, "url": WIN_LIB_URL}},
                "rules": [{"action": "allow", "os": {"name": "windows"}}],
            },
        ],
    }


@pytest.fixture
def asset_index_doc():
    return {"objects": {"minecraft/sounds/ambient/cave/cave1.ogg": {"hash": ASSET_HASH, "size": 5}}}


@pytest.fixture
def transport(manifest_doc, descriptor_doc, asset_index_doc):
    return FakeTransport({
        MANIFEST_URL: as_bytes(manifest_doc),
        DESCRIPTOR_URL: as_bytes(descriptor_doc),
        ASSET_INDEX_URL: as_bytes(asset_index_doc),
        CLIENT_URL: b"client-jar",
        LOGGING_URL: b"<Configuration/>",
        LIB_URL: b"lib-jar",
        WIN_LIB_URL: b"windows-natives",
        f"{RESOURCES_URL}/aa/{ASSET_HASH}": b"sound",
    })


def natives_jar() -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as jar:
        jar.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
        jar.writestr("libjinput-linux64.so", b"\x7fELF")
    return buffer.getvalue()


@pytest.fixture
def natives_library_doc():
    return {
        "name": "net.java.jinput:jinput-platform:2.0.5",
        "downloads": {
            "classifiers": {
                "natives-linux": {"path": NATIVE_PATH, "url": NATIVE_URL},
                "natives-windows-64": {"path": "net/java/jinput/natives-windows-64.jar",
                                       "url": "https://libraries.example.test/natives-windows-64.jar"},
            }
        },
        "natives": {"linux": "natives-linux", "windows": "natives-windows-${arch}"},
        "extract": {"exclude": ["META-INF/"]},
    }
