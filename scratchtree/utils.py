import os
import shutil
from typing import Optional


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def remove_dir(path: str) -> None:
    if os.path.isdir(path):
        shutil.rmtree(path)


def replace_extension(filename: str, extension: str) -> str:
    base, _ = os.path.splitext(filename)
    return base + extension


def parse_owner_id(dirname: str) -> Optional[int]:
    """Return the owner id encoded in a directory name, or None if it is not an integer."""
    try:
        return int(dirname)
    except ValueError:
        return None


def staging_path(path: str, suffix: str) -> str:
    return os.path.normpath(path) + suffix
