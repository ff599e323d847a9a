"""Shared test fixtures for endpoints_client.

Provides discovery doc and archive builders, a deterministic fake code
generator standing in for the Endpoints tool, project factories, and output
state management. These fixtures are discovered by pytest automatically.
"""

from __future__ import annotations

import json
import zipfile
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from endpoints_client.exceptions import GenerationError
from endpoints_client.generator import ClientLibGenerator
from endpoints_client.models import ProjectConfig
from endpoints_client.output import OutputFormat, OutputManager, reset_output, set_output

_FIXED_DATE = (2020, 1, 1, 0, 0, 0)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager keeps references to the sys.stdout/sys.stderr objects
    it was created with. CliRunner swaps those streams per invocation, so a
    manager left over from one test would write to closed files in the next.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for tests that ignore output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def write_discovery_doc(
    directory: Path, api: str, version: str = "v1", filename: Optional[str] = None
) -> Path:
    """Write a minimal discovery document and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / (filename or f"{api}-{version}-rest.discovery")
    doc = {
        "kind": "discovery#restDescription",
        "discoveryVersion": "v1",
        "name": api,
        "version": version,
        "rootUrl": "https://example.appspot.com/_ah/api/",
        "resources": {},
    }
    path.write_text(json.dumps(doc, indent=2))
    return path


def make_zip(path: Path, files: dict[str, Any]) -> Path:
    """Write a zip archive with fixed timestamps so its bytes are reproducible."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in sorted(files.items()):
            info = zipfile.ZipInfo(name, date_time=_FIXED_DATE)
            data = content if isinstance(content, bytes) else str(content).encode()
            zf.writestr(info, data)
    return path


def make_corrupt_zip(path: Path, name: str, content: str = "{}") -> Path:
    """Write a deflated one-member archive whose compressed stream is garbage.

    The directory structure is intact, so the damage only shows once the
    member is decompressed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(zipfile.ZipInfo(name, date_time=_FIXED_DATE), content * 50)
    with zipfile.ZipFile(path) as zf:
        info = zf.getinfo(name)
    data = bytearray(path.read_bytes())
    # Local file header: 30 fixed bytes, then the name and extra field.
    start = info.header_offset + 30 + len(info.filename.encode()) + len(info.extra)
    # 0xFF opens a deflate block of the reserved type 3.
    data[start:start + 4] = b"\xff\xff\xff\xff"
    path.write_bytes(bytes(data))
    return path


def make_encrypted_zip(path: Path, name: str, content: str = "{}") -> Path:
    """Write a stored one-member archive that claims its member is encrypted."""
    make_zip(path, {name: content})
    data = bytearray(path.read_bytes())
    # General purpose flag bit 0 in the local and central directory headers.
    data[6] |= 0x01
    central = data.index(b"PK\x01\x02")
    data[central + 8] |= 0x01
    path.write_bytes(bytes(data))
    return path


class FakeGenerator(ClientLibGenerator):
    """Deterministic stand-in for the Endpoints tool.

    Reads ``name`` and ``version`` from the discovery doc and writes
    ``<name>-<version>-java.zip`` holding a Gradle-style client library with
    one Java class, like the real tool does with ``-bs gradle``.

    Args:
        fail_on: File names of discovery docs whose generation fails.
    """

    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.fail_on = set(fail_on)
        self.calls: list[tuple[str, str, Path, Path]] = []

    def generate(
        self, language: str, build_system: str, output_dir: Path, discovery_doc: Path
    ) -> None:
        self.calls.append((language, build_system, output_dir, discovery_doc))
        if discovery_doc.name in self.fail_on:
            raise GenerationError(f"Endpoints tool exited with code 1 for {discovery_doc}")

        doc = json.loads(discovery_doc.read_text())
        api, version = doc["name"], doc["version"]
        root = f"{api}"
        java_path = f"{root}/src/main/java/com/example/{api}/{api.capitalize()}.java"
        make_zip(
            output_dir / f"{api}-{version}-java.zip",
            {
                f"{root}/build.gradle": "apply plugin: 'java'\n",
                java_path: (
                    f"package com.example.{api};\n\n"
                    f"public class {api.capitalize()} {{}}\n"
                ),
            },
        )

    @property
    def generated_docs(self) -> list[str]:
        return [call[3].name for call in self.calls]


@pytest.fixture
def write_doc() -> Callable[..., Path]:
    """The :func:`write_discovery_doc` builder, as a fixture."""
    return write_discovery_doc


@pytest.fixture
def write_zip() -> Callable[..., Path]:
    """The :func:`make_zip` builder, as a fixture."""
    return make_zip


@pytest.fixture
def write_corrupt_zip() -> Callable[..., Path]:
    """The :func:`make_corrupt_zip` builder, as a fixture."""
    return make_corrupt_zip


@pytest.fixture
def write_encrypted_zip() -> Callable[..., Path]:
    """The :func:`make_encrypted_zip` builder, as a fixture."""
    return make_encrypted_zip


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def failing_generator() -> Callable[..., FakeGenerator]:
    """Factory for a fake generator that fails on the given doc file names."""
    return lambda *names: FakeGenerator(fail_on=names)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty project directory."""
    path = tmp_path / "app"
    path.mkdir()
    return path


@pytest.fixture
def make_project(
    project_dir: Path, fake_generator: FakeGenerator
) -> Callable[..., Any]:
    """Factory building a project with the client plugin and the fake generator.

    Usage::

        project, plugin = make_project(discovery_docs=["api/echo.discovery"])
    """
    from endpoints_client.plugin import create_project

    def _make(generator: Optional[ClientLibGenerator] = None, **config: Any):
        return create_project(
            project_dir, ProjectConfig(**config), generator=generator or fake_generator
        )

    return _make
