"""The ``endpointsClient`` extension -- user-facing settings of the client plugin.

Settings are recorded during the project's declaration phase and read only
once, by :meth:`ClientExtension.resolve`, when the project is evaluated. Users
can therefore set properties before or after the plugin is applied, and in
any order, with the same result::

    ext = project.extensions["endpointsClient"]
    ext.discovery_docs = ["src/endpoints/echo.discovery", "shared/docs"]
    ext.client_lib_dir = "build/libs"

Once resolved the settings are frozen into a
:class:`~endpoints_client.models.ClientSettings`; further assignments raise
:class:`~endpoints_client.exceptions.ConfigError`.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from endpoints_client.discovery import expand_discovery_docs
from endpoints_client.exceptions import ConfigError
from endpoints_client.models import ClientSettings

if TYPE_CHECKING:
    from endpoints_client.project import Project

PathLike = Union[str, Path]


class ClientExtension:
    """Mutable, declaration-phase view of the client plugin's settings.

    Relative paths are resolved against the project directory at assignment
    time. Directory defaults live under the project's build directory.

    Args:
        project: The project the extension belongs to.
    """

    def __init__(self, project: Project) -> None:
        self._project = project
        self._discovery_docs: list[Path] = []
        self._client_lib_dir = project.build_dir / "endpointsClientLibs"
        self._gen_src_dir = project.build_dir / "endpointsGenSrc"
        self._gen_discovery_docs_dir = project.build_dir / "endpointsGenDiscoveryDocs"
        self._settings: Optional[ClientSettings] = None

    def _check_mutable(self, prop: str) -> None:
        if self._settings is not None:
            raise ConfigError(
                f"Cannot set endpointsClient.{prop}: settings were already resolved"
            )

    @property
    def discovery_docs(self) -> list[Path]:
        """Discovery doc files and directories, as declared."""
        return list(self._discovery_docs)

    @discovery_docs.setter
    def discovery_docs(self, value: Iterable[PathLike]) -> None:
        self._check_mutable("discovery_docs")
        self._discovery_docs = [self._project.file(p) for p in value]

    def discovery_doc(self, *paths: PathLike) -> None:
        """Append discovery doc files or directories to the declaration."""
        self._check_mutable("discovery_docs")
        self._discovery_docs.extend(self._project.file(p) for p in paths)

    @property
    def client_lib_dir(self) -> Path:
        return self._client_lib_dir

    @client_lib_dir.setter
    def client_lib_dir(self, value: PathLike) -> None:
        self._check_mutable("client_lib_dir")
        self._client_lib_dir = self._project.file(value)

    @property
    def gen_src_dir(self) -> Path:
        return self._gen_src_dir

    @gen_src_dir.setter
    def gen_src_dir(self, value: PathLike) -> None:
        self._check_mutable("gen_src_dir")
        self._gen_src_dir = self._project.file(value)

    @property
    def gen_discovery_docs_dir(self) -> Path:
        return self._gen_discovery_docs_dir

    @gen_discovery_docs_dir.setter
    def gen_discovery_docs_dir(self, value: PathLike) -> None:
        self._check_mutable("gen_discovery_docs_dir")
        self._gen_discovery_docs_dir = self._project.file(value)

    @property
    def resolved(self) -> bool:
        return self._settings is not None

    def resolve(self) -> ClientSettings:
        """Freeze the declared settings, expanding discovery doc directories.

        Only the first call does any work; later calls return the same
        settings object.

        Raises:
            ConfigError: If a declared discovery doc path does not exist or
                is neither a file nor a directory.
        """
        if self._settings is None:
            self._settings = ClientSettings(
                discovery_docs=tuple(expand_discovery_docs(self._discovery_docs)),
                client_lib_dir=self._client_lib_dir,
                gen_src_dir=self._gen_src_dir,
                gen_discovery_docs_dir=self._gen_discovery_docs_dir,
            )
        return self._settings

    @property
    def settings(self) -> ClientSettings:
        """The resolved settings.

        Raises:
            ConfigError: If :meth:`resolve` has not run yet.
        """
        if self._settings is None:
            raise ConfigError("endpointsClient settings are not resolved yet")
        return self._settings
