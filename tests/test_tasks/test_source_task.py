"""Tests for the task copying Java sources out of client library packages."""

from __future__ import annotations

from pathlib import Path

import pytest

from endpoints_client.exceptions import ConfigError, RegistrationError
from endpoints_client.project import Project
from endpoints_client.tasks import GenerateClientLibrarySourceTask


@pytest.fixture
def project(project_dir: Path) -> Project:
    return Project(project_dir)


@pytest.fixture
def task(project: Project) -> GenerateClientLibrarySourceTask:
    task = project.tasks.create("_endpointsClientGenSrc", GenerateClientLibrarySourceTask)
    task.client_lib_dir = project.build_dir / "endpointsClientLibs"
    task.generated_src_dir = project.build_dir / "endpointsGenSrc"
    task.client_lib_dir.mkdir(parents=True)
    return task


def _package(api: str) -> dict[str, str]:
    return {
        f"{api}/build.gradle": "apply plugin: 'java'\n",
        f"{api}/README.md": "generated",
        f"{api}/src/main/java/com/example/{api}/Client.java": f"package com.example.{api};\n",
        f"{api}/src/main/java/com/example/{api}/model/Item.java": "class Item {}\n",
    }


class TestGenerateClientLibrarySourceTask:

    def test_java_sources_copied(
        self, task: GenerateClientLibrarySourceTask, write_zip
    ) -> None:
        write_zip(task.client_lib_dir / "echo-v1-java.zip", _package("echo"))
        write_zip(task.client_lib_dir / "greetings-v1-java.zip", _package("greetings"))

        task.run()

        out = task.generated_src_dir
        assert (out / "com" / "example" / "echo" / "Client.java").is_file()
        assert (out / "com" / "example" / "echo" / "model" / "Item.java").is_file()
        assert (out / "com" / "example" / "greetings" / "Client.java").is_file()
        assert not (out / "build.gradle").exists()
        assert not (out / "README.md").exists()
        assert task.packages == ["echo-v1-java.zip", "greetings-v1-java.zip"]

    def test_src_main_java_at_archive_root(
        self, task: GenerateClientLibrarySourceTask, write_zip
    ) -> None:
        write_zip(
            task.client_lib_dir / "flat-v1-java.zip",
            {"src/main/java/com/example/Flat.java": "class Flat {}"},
        )

        task.run()

        assert (task.generated_src_dir / "com" / "example" / "Flat.java").is_file()

    def test_unpacked_directory_package(self, task: GenerateClientLibrarySourceTask) -> None:
        java = task.client_lib_dir / "echo" / "src" / "main" / "java" / "com" / "example"
        java.mkdir(parents=True)
        (java / "Echo.java").write_text("class Echo {}")

        task.run()

        assert (task.generated_src_dir / "com" / "example" / "Echo.java").is_file()
        assert task.packages == ["echo"]

    def test_other_files_ignored(self, task: GenerateClientLibrarySourceTask) -> None:
        (task.client_lib_dir / "notes.txt").write_text("not a package")
        task.run()
        assert task.packages == []
        assert list(task.generated_src_dir.iterdir()) == []

    def test_empty_client_lib_dir_yields_empty_sources(
        self, task: GenerateClientLibrarySourceTask
    ) -> None:
        task.run()
        assert task.generated_src_dir.is_dir()
        assert list(task.generated_src_dir.iterdir()) == []

    def test_stale_sources_removed(
        self, task: GenerateClientLibrarySourceTask, write_zip
    ) -> None:
        stale = task.generated_src_dir / "com" / "example" / "removed" / "Old.java"
        stale.parent.mkdir(parents=True)
        stale.write_text("class Old {}")
        write_zip(task.client_lib_dir / "echo-v1-java.zip", _package("echo"))

        task.run()

        assert not stale.exists()

    def test_scratch_directory_under_build_tmp(
        self, task: GenerateClientLibrarySourceTask, project: Project, write_zip
    ) -> None:
        write_zip(task.client_lib_dir / "echo-v1-java.zip", _package("echo"))

        task.run()

        scratch = project.build_dir / "tmp" / task.name / "endpoints-tmp"
        assert (scratch / "echo-v1-java" / "echo" / "build.gradle").is_file()

    def test_missing_client_lib_dir(
        self, task: GenerateClientLibrarySourceTask
    ) -> None:
        task.client_lib_dir.rmdir()
        with pytest.raises(RegistrationError, match="does not exist"):
            task.run()

    def test_package_without_java_tree(
        self, task: GenerateClientLibrarySourceTask, write_zip
    ) -> None:
        write_zip(task.client_lib_dir / "odd-v1-java.zip", {"odd/build.gradle": ""})
        with pytest.raises(RegistrationError, match="No src/main/java tree"):
            task.run()

    def test_ambiguous_package(
        self, task: GenerateClientLibrarySourceTask, write_zip
    ) -> None:
        files = {**_package("one"), **_package("two")}
        write_zip(task.client_lib_dir / "mixed-v1-java.zip", files)
        with pytest.raises(RegistrationError, match="Ambiguous"):
            task.run()

    def test_corrupt_package(self, task: GenerateClientLibrarySourceTask) -> None:
        (task.client_lib_dir / "broken-v1-java.zip").write_bytes(b"garbage")
        with pytest.raises(RegistrationError, match="Cannot unpack"):
            task.run()

    def test_corrupt_compressed_package(
        self, task: GenerateClientLibrarySourceTask, write_corrupt_zip
    ) -> None:
        write_corrupt_zip(task.client_lib_dir / "echo-v1-java.zip", "echo/src/main/java/Echo.java")
        with pytest.raises(RegistrationError, match="Cannot unpack"):
            task.run()

    def test_unconfigured(self, project: Project) -> None:
        task = project.tasks.create("src", GenerateClientLibrarySourceTask)
        with pytest.raises(ConfigError, match="not configured"):
            task.run()
