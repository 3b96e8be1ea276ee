"""Unit tests for mapping validation and directory discovery."""

from pathlib import Path

import pytest

from bundler.model.types import Mapping, MappingError
from bundler.packaging.mappings import (
    directory_mappings,
    normalise_destination,
    relocate,
    validate_mappings,
)


class TestNormaliseDestination:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("bin/app", "bin/app"),
            ("./bin/app", "bin/app"),
            ("lib//x.jar", "lib/x.jar"),
            ("conf\\app.conf", "conf/app.conf"),
        ],
    )
    def test_normalises(self, raw, expected):
        assert normalise_destination(raw) == expected

    @pytest.mark.parametrize("raw", ["/etc/passwd", "C:/x", "../x", "a/../../x", "", "."])
    def test_rejects_unsafe(self, raw):
        with pytest.raises(MappingError):
            normalise_destination(raw)


class TestValidateMappings:
    def test_keeps_order(self):
        mappings = [Mapping(Path("b"), "b"), Mapping(Path("a"), "./a")]
        assert validate_mappings(mappings) == [
            Mapping(Path("b"), "b"),
            Mapping(Path("a"), "a"),
        ]

    def test_rejects_duplicate_destinations(self):
        mappings = [Mapping(Path("x"), "bin/app"), Mapping(Path("y"), "./bin/app")]
        with pytest.raises(MappingError, match="Duplicate"):
            validate_mappings(mappings)

    @pytest.mark.parametrize(
        "first,second",
        [("bin", "bin/x"), ("bin/x", "bin"), ("lib", "./lib/deep/a.jar")],
    )
    def test_rejects_file_that_is_parent_of_another(self, first, second):
        mappings = [Mapping(Path("f"), first), Mapping(Path("g"), second)]
        with pytest.raises(MappingError, match="parent directory"):
            validate_mappings(mappings)

    def test_sibling_prefixes_are_fine(self):
        mappings = [Mapping(Path("f"), "bin"), Mapping(Path("g"), "bin2/x")]
        assert [m.destination for m in validate_mappings(mappings)] == ["bin", "bin2/x"]


class TestRelocate:
    def test_prefixes_destinations(self):
        relocated = relocate([Mapping(Path("s"), "bin/app")], "my-app")
        assert relocated == [Mapping(Path("s"), "my-app/bin/app")]


class TestDirectoryMappings:
    def test_maps_files_sorted(self, tmp_path):
        (tmp_path / "lib").mkdir()
        (tmp_path / "bin").mkdir()
        (tmp_path / "lib" / "a.jar").write_text("a")
        (tmp_path / "bin" / "app").write_text("#!/bin/sh")
        (tmp_path / "README").write_text("r")

        mappings = directory_mappings(tmp_path)

        assert [m.destination for m in mappings] == ["README", "bin/app", "lib/a.jar"]
        assert mappings[1].source == tmp_path / "bin" / "app"

    def test_empty_dirs_are_skipped(self, tmp_path):
        (tmp_path / "empty").mkdir()
        assert directory_mappings(tmp_path) == []

    def test_not_a_directory(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            directory_mappings(tmp_path / "missing")
