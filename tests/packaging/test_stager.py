"""Tests for directory staging."""

import pytest

from bundler.descriptor.renderer import render_bundle_conf
from bundler.model.bytesize import mebibytes
from bundler.model.defaults import resolve_spec
from bundler.model.types import Mapping, MappingError
from bundler.packaging.stager import stage


@pytest.fixture
def spec():
    return resolve_spec(
        name="app",
        nr_of_cpus=0.5,
        memory=mebibytes(32),
        disk_space=mebibytes(50),
    )


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "src" / "app"
    path.parent.mkdir()
    path.write_text("X")
    return path


class TestStage:
    def test_lays_out_conf_and_component(self, spec, source_file, tmp_path):
        staging = tmp_path / "stage"
        component_dir = stage(spec, [Mapping(source_file, "bin/app")], staging)

        assert component_dir == staging / "app"
        assert (staging / "bundle.conf").read_text(encoding="utf-8") == render_bundle_conf(spec)
        assert (staging / "app" / "bin" / "app").read_text() == "X"

    def test_overwrites_existing_files(self, spec, source_file, tmp_path):
        staging = tmp_path / "stage"
        stale = staging / "app" / "bin" / "app"
        stale.parent.mkdir(parents=True)
        stale.write_text("old contents")
        (staging / "bundle.conf").write_text("stale conf")

        stage(spec, [Mapping(source_file, "bin/app")], staging)

        assert stale.read_text() == "X"
        assert (staging / "bundle.conf").read_text(encoding="utf-8") == render_bundle_conf(spec)

    def test_no_archive_or_digest_written(self, spec, source_file, tmp_path):
        staging = tmp_path / "stage"
        stage(spec, [Mapping(source_file, "bin/app")], staging)

        assert sorted(p.name for p in staging.iterdir()) == ["app", "bundle.conf"]

    def test_missing_source_aborts(self, spec, source_file, tmp_path):
        staging = tmp_path / "stage"
        mappings = [
            Mapping(source_file, "bin/app"),
            Mapping(tmp_path / "missing", "lib/missing.jar"),
        ]

        with pytest.raises(FileNotFoundError):
            stage(spec, mappings, staging)

        # Not rolled back
        assert (staging / "app" / "bin" / "app").exists()

    def test_unsafe_destination(self, spec, source_file, tmp_path):
        with pytest.raises(MappingError):
            stage(spec, [Mapping(source_file, "../outside")], tmp_path / "stage")

    def test_file_and_folder_clash_rejected_before_writing(self, spec, source_file, tmp_path):
        staging = tmp_path / "stage"
        mappings = [Mapping(source_file, "bin"), Mapping(source_file, "bin/app")]
        with pytest.raises(MappingError, match="parent directory"):
            stage(spec, mappings, staging)

        assert not staging.exists()

    def test_rerun_repairs_tree(self, spec, source_file, tmp_path):
        staging = tmp_path / "stage"
        stage(spec, [Mapping(source_file, "bin/app")], staging)
        (staging / "app" / "bin" / "app").unlink()

        stage(spec, [Mapping(source_file, "bin/app")], staging)

        assert (staging / "app" / "bin" / "app").read_text() == "X"
