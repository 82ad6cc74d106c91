"""Shadow-file layout on disk.

The marked copy of ``<dir>/<name>`` lives at ``<dir>/.freebidi/<name>`` as
UTF-8 with a byte-order mark. Saving writes raw legacy bytes back over the
original path, without a BOM.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Iterable, Union

from ..utils.errors import ShadowPathError

logger = logging.getLogger(__name__)

SHADOW_DIR_NAME = ".freebidi"
UTF8_BOM = codecs.BOM_UTF8
SUPPORTED_EXTENSIONS = (".cob", ".inc", ".cpy", ".pco")

PathLike = Union[str, Path]


def shadow_path_for(original: PathLike, dir_name: str = SHADOW_DIR_NAME) -> Path:
    original = Path(original)
    return original.parent / dir_name / original.name


def is_shadow_path(path: PathLike, dir_name: str = SHADOW_DIR_NAME) -> bool:
    return Path(path).parent.name == dir_name


def original_path_for(shadow: PathLike, dir_name: str = SHADOW_DIR_NAME) -> Path:
    shadow = Path(shadow)
    if not is_shadow_path(shadow, dir_name):
        raise ShadowPathError(f"{shadow} is not inside a '{dir_name}' directory")
    return shadow.parent.parent / shadow.name


def is_supported_file(path: PathLike, extensions: Iterable[str] = SUPPORTED_EXTENSIONS) -> bool:
    """Check the file extension, case-insensitively."""
    suffix = Path(path).suffix.lower()
    return suffix in {ext.lower() for ext in extensions}


def write_shadow(original: PathLike, marked_text: str, dir_name: str = SHADOW_DIR_NAME) -> Path:
    """Write `marked_text` as BOM-prefixed UTF-8 next to `original`."""
    out_path = shadow_path_for(original, dir_name)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(UTF8_BOM + marked_text.encode("utf-8"))
    logger.info(f"Saved UTF-8 file with BOM: {out_path}")
    return out_path


def read_shadow(shadow: PathLike) -> str:
    return Path(shadow).read_bytes().decode("utf-8-sig")


def write_original(shadow: PathLike, data: bytes, dir_name: str = SHADOW_DIR_NAME) -> Path:
    """Write encoded bytes over the original file belonging to `shadow`."""
    original = original_path_for(shadow, dir_name)
    original.write_bytes(data)
    logger.info(f"Saved original file: {original}")
    return original


def remove_shadow(shadow: PathLike, dir_name: str = SHADOW_DIR_NAME) -> bool:
    """Delete a shadow file; returns False if it was already gone.

    The shadow directory is removed too once it is empty.
    """
    shadow = Path(shadow)
    if not is_shadow_path(shadow, dir_name):
        raise ShadowPathError(f"Refusing to delete {shadow}: not inside a '{dir_name}' directory")
    if not shadow.exists():
        logger.info(f"File already deleted: {shadow}")
        return False
    shadow.unlink()
    logger.info(f"Deleted temporary file: {shadow}")
    if not any(shadow.parent.iterdir()):
        shadow.parent.rmdir()
    return True
