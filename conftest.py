"""테스트 공용 픽스처 — 임시 캣팩 디렉토리와 가짜 조회기."""

import json
from pathlib import Path

import pytest
from PIL import Image


class FakeProbe:
    """항상 같은 크기를 돌려주는 ImageProbe."""

    def __init__(self, width: int = 400, height: int = 200):
        self.size = (width, height)
        self.calls: list[Path] = []

    def dimensions(self, path: Path) -> tuple[int, int]:
        self.calls.append(path)
        return self.size


def write_png(path: Path, size=(400, 200), color=(255, 0, 0, 255)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, color).save(path)
    return path


@pytest.fixture
def fake_probe():
    return FakeProbe()


@pytest.fixture
def make_pack(tmp_path):
    """make_pack(meta, files=[...]) → 팩 디렉토리. files는 빈 파일로 만든다."""

    def _make(meta, files=(), name="pack", raw: str | None = None) -> Path:
        pack_dir = tmp_path / name
        pack_dir.mkdir(parents=True, exist_ok=True)
        text = raw if raw is not None else json.dumps(meta)
        (pack_dir / "catpack.json").write_text(text, encoding="utf-8")
        for rel in files:
            f = pack_dir / rel
            f.parent.mkdir(parents=True, exist_ok=True)
            f.write_bytes(b"")
        return pack_dir

    return _make


WINTER_PACK = {
    "name": "Winter",
    "default": "default.png",
    "variants": [
        {"startTime": {"month": 12, "day": 1},
         "endTime": {"month": 1, "day": 31},
         "path": "winter.png"},
    ],
}


@pytest.fixture
def winter_pack(make_pack):
    return make_pack(WINTER_PACK, files=["winter.png", "default.png"])
