"""이미지 크기 조회·디렉토리 조회 테스트."""

import subprocess

import pytest

from catpack import probe
from catpack.errors import ProbeError
from catpack.probe import (
    FileCommandProbe, PathDirectoryLister, PillowImageProbe, create_image_probe,
)
from conftest import write_png


def test_pillow_probe_reads_size(tmp_path):
    path = write_png(tmp_path / "cat.png", size=(321, 123))
    assert PillowImageProbe().dimensions(path) == (321, 123)


def test_pillow_probe_rejects_non_images(tmp_path):
    bad = tmp_path / "notes.txt"
    bad.write_text("meow")
    with pytest.raises(ProbeError):
        PillowImageProbe().dimensions(bad)
    with pytest.raises(ProbeError):
        PillowImageProbe().dimensions(tmp_path / "missing.png")


def _fake_run(stdout, returncode=0):
    def run(cmd, **kwargs):
        if returncode:
            raise subprocess.CalledProcessError(returncode, cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")
    return run


def test_file_command_probe_parses_output(monkeypatch, tmp_path):
    monkeypatch.setattr(probe.subprocess, "run", _fake_run(
        "cat.png: PNG image data, 640 x 480, 8-bit/color RGBA, non-interlaced\n"))
    assert FileCommandProbe().dimensions(tmp_path / "cat.png") == (640, 480)


def test_file_command_probe_compact_format(monkeypatch, tmp_path):
    monkeypatch.setattr(probe.subprocess, "run", _fake_run(
        "cat.gif: GIF image data, version 89a, 32x16,\n"))
    assert FileCommandProbe().dimensions(tmp_path / "cat.gif") == (32, 16)


def test_file_command_probe_unparseable(monkeypatch, tmp_path):
    monkeypatch.setattr(probe.subprocess, "run", _fake_run("cat.txt: ASCII text\n"))
    with pytest.raises(ProbeError):
        FileCommandProbe().dimensions(tmp_path / "cat.txt")


def test_file_command_probe_command_failure(monkeypatch, tmp_path):
    monkeypatch.setattr(probe.subprocess, "run", _fake_run("", returncode=1))
    with pytest.raises(ProbeError):
        FileCommandProbe().dimensions(tmp_path / "cat.png")


def test_file_command_probe_missing_binary(tmp_path):
    with pytest.raises(ProbeError):
        FileCommandProbe(command="definitely-not-a-command-xyz").dimensions(tmp_path / "a.png")


def test_directory_lister(tmp_path):
    (tmp_path / "d" / "sub").mkdir(parents=True)
    (tmp_path / "d" / "a.png").write_bytes(b"")
    (tmp_path / "d" / "sub" / "b.png").write_bytes(b"")

    lister = PathDirectoryLister()
    assert lister.is_directory(tmp_path / "d")
    assert not lister.is_directory(tmp_path / "d" / "a.png")
    found = sorted(p.relative_to(tmp_path / "d").as_posix() for p in lister.entries(tmp_path / "d"))
    assert found == ["a.png", "sub/b.png"]


def test_create_image_probe():
    assert isinstance(create_image_probe(), PillowImageProbe)
    assert isinstance(create_image_probe("file"), FileCommandProbe)
    with pytest.raises(ValueError):
        create_image_probe("exiftool")
