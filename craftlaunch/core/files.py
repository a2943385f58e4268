import os
import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Existence checks are immediately followed by the create call. Not atomic:
# two launchers writing the same root at once is not supported.


def directory_exists(path: str) -> bool:
    return os.path.isdir(path)


def file_exists(path: str) -> bool:
    return os.path.isfile(path)


def ensure_directory(path: str) -> bool:
    """Creates the directory (and parents) when missing. Failures are logged, not raised."""
    if directory_exists(path):
        return True
    try:
        os.makedirs(path, exist_ok=True)
        return True
    except OSError as e:
        logger.error(f"Failed to create directory {path}: {e}")
        return False


def ensure_file(path: str) -> bool:
    """Creates an empty file when missing."""
    if file_exists(path):
        return True
    try:
        with open(path, "wb"):
            pass
        return True
    except OSError as e:
        logger.error(f"Failed to create file {path}: {e}")
        return False


def write_bytes(path: str, data: bytes) -> bool:
    try:
        with open(path, "wb") as f:
            f.write(data)
        return True
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        return False


def read_bytes(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        logger.error(f"Failed to open {path}: {e}")
        return b""


def parse_json(data: bytes, source: str = "<memory>") -> Optional[Any]:
    if not data:
        return None
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        logger.error(f"Failed to parse JSON from {source}: {e}")
        return None


def load_json(path: str) -> Optional[Any]:
    if not file_exists(path):
        return None
    return parse_json(read_bytes(path), path)


def save_json(document: Any, path: str) -> bool:
    """Serializes the document compactly; the parent directory must already exist."""
    ensure_file(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, separators=(",", ":"))
        return True
    except (OSError, TypeError) as e:
        logger.error(f"Failed to save JSON to {path}: {e}")
        return False
