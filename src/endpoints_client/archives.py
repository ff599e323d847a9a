"""Zip archive extraction shared by the extraction and source tasks."""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path

from endpoints_client.exceptions import EndpointsClientError, ExtractionError

logger = logging.getLogger(__name__)


def extract_zip(
    archive: Path,
    dest: Path,
    error: type[EndpointsClientError] = ExtractionError,
) -> list[Path]:
    """Unpack *archive* into *dest* and return the extracted file paths.

    Members that would land outside *dest* (absolute names or ``..``
    segments) are rejected before anything is written.

    Args:
        archive: The zip file to unpack.
        dest: Target directory, created if missing.
        error: Exception type raised on failure.

    Raises:
        EndpointsClientError: Of type *error*, if the archive is missing,
            corrupt, or contains an unsafe member name.
    """
    if not archive.is_file():
        raise error(f"Archive not found: {archive}")

    dest.mkdir(parents=True, exist_ok=True)
    root = dest.resolve()
    try:
        with zipfile.ZipFile(archive) as zf:
            for member in zf.namelist():
                target = (root / member).resolve()
                if target != root and root not in target.parents:
                    raise error(f"Unsafe path {member!r} in archive {archive}")
            zf.extractall(root)
            extracted = [root / info.filename for info in zf.infolist() if not info.is_dir()]
    # Corrupt deflate streams surface as zlib.error or EOFError, encrypted
    # members as RuntimeError and unknown compression as NotImplementedError.
    except (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError, NotImplementedError) as exc:
        raise error(f"Cannot unpack {archive}: {exc}") from exc

    logger.debug("Extracted %d file(s) from %s into %s", len(extracted), archive, dest)
    return extracted
