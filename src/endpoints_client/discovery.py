"""Discovery document resolution.

A *discovery document* is a JSON description of one API surface, stored in a
file with the :data:`DISCOVERY_DOC_EXTENSION` suffix. Users declare
discovery docs as a mix of files and directories; this module turns such a
declaration into the concrete, flat list of files to hand to the generator.

The two public functions are:

* :func:`expand_discovery_docs` -- Expand a user declaration (files and
  directories) into files. Fails fast on paths that do not exist.
* :func:`find_discovery_docs_in_directory` -- List the discovery docs
  directly inside one directory. Also used to scan the directory that
  archives from the ``endpointsServer`` configuration are extracted into.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Union

from endpoints_client.exceptions import ConfigError

logger = logging.getLogger(__name__)

DISCOVERY_DOC_EXTENSION = ".discovery"

PathLike = Union[str, Path]


def find_discovery_docs_in_directory(
    directory: PathLike, missing_ok: bool = False
) -> list[Path]:
    """Return the discovery docs directly inside *directory*, sorted by name.

    Only immediate children are considered. Nested directories are not
    descended into, and children whose name does not end with ``.discovery``
    are ignored.

    Args:
        directory: Directory to list.
        missing_ok: When ``True`` a directory that does not exist yields an
            empty list instead of an error.

    Returns:
        Paths of the matching files.

    Raises:
        ConfigError: If *directory* does not exist (and *missing_ok* is
            false) or exists but is not a directory.
    """
    directory = Path(directory)
    if not directory.exists():
        if missing_ok:
            logger.debug("Discovery doc directory %s does not exist, nothing to scan", directory)
            return []
        raise ConfigError(f"Discovery doc directory does not exist: {directory}")
    if not directory.is_dir():
        raise ConfigError(f"Not a directory: {directory}")

    return sorted(
        (
            child
            for child in directory.iterdir()
            if child.name.endswith(DISCOVERY_DOC_EXTENSION) and child.is_file()
        ),
        key=lambda p: p.name,
    )


def expand_discovery_docs(entries: Iterable[PathLike]) -> list[Path]:
    """Expand a list of discovery doc files and directories into files.

    Directory entries are replaced by the discovery docs they directly
    contain (see :func:`find_discovery_docs_in_directory`). File entries are
    kept verbatim: a file the user named explicitly is trusted even without
    the ``.discovery`` suffix. The same path listed more than once, directly
    or through a directory, is kept only at its first position.

    Args:
        entries: Paths as declared by the user.

    Returns:
        Flat list of discovery doc files in declaration order.

    Raises:
        ConfigError: If an entry does not exist, or is neither a regular file
            nor a directory.
    """
    expanded: list[Path] = []
    seen: set[Path] = set()

    def _add(path: Path) -> None:
        key = path.resolve()
        if key in seen:
            logger.debug("Skipping duplicate discovery doc %s", path)
            return
        seen.add(key)
        expanded.append(path)

    for entry in entries:
        path = Path(entry)
        if path.is_dir():
            for doc in find_discovery_docs_in_directory(path):
                _add(doc)
        elif path.is_file():
            _add(path)
        elif path.exists():
            raise ConfigError(f"Discovery doc is neither a file nor a directory: {path}")
        else:
            raise ConfigError(f"Discovery doc path does not exist: {path}")

    return expanded
