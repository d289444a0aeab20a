"""외부 조회 모듈 — 이미지 크기와 디렉토리 목록을 읽는다.

테스트에서 가짜 구현으로 바꿀 수 있도록 Protocol 뒤에 둔다.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from .errors import ProbeError

logger = logging.getLogger(__name__)

# `file` 출력 예: "cat.png: PNG image data, 400 x 200, 8-bit/color RGBA, non-interlaced"
_FILE_DIMENSIONS = re.compile(r"(\d+) ?x ?(\d+),")


class ImageProbe(Protocol):
    def dimensions(self, path: Path) -> tuple[int, int]:
        """이미지의 원본 (너비, 높이)를 픽셀 단위로 반환한다."""
        ...


class DirectoryLister(Protocol):
    def is_directory(self, path: Path) -> bool:
        ...

    def entries(self, directory: Path) -> list[Path]:
        """directory 아래의 파일 목록을 반환한다 (directory 자신 제외)."""
        ...


def _checked(path: Path, width: int, height: int) -> tuple[int, int]:
    if width <= 0 or height <= 0:
        raise ProbeError(f"잘못된 이미지 크기 {width}x{height}: {path}")
    return width, height


class PillowImageProbe:
    """Pillow로 이미지 헤더를 읽어 크기를 구한다."""

    def dimensions(self, path: Path) -> tuple[int, int]:
        try:
            with Image.open(path) as img:
                width, height = img.size
        except (OSError, UnidentifiedImageError) as e:
            raise ProbeError(f"이미지 크기 조회 실패: {path} ({e})") from e
        logger.debug("이미지 크기: %s → %dx%d", path, width, height)
        return _checked(path, width, height)


class FileCommandProbe:
    """`file` 명령 출력에서 "W x H," 부분을 읽는다 (UNIX 전용)."""

    def __init__(self, command: str = "file"):
        self._command = command

    def dimensions(self, path: Path) -> tuple[int, int]:
        try:
            result = subprocess.run(
                [self._command, str(path)],
                capture_output=True, text=True, check=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise ProbeError(f"{self._command} 실행 실패: {path} ({e})") from e

        m = _FILE_DIMENSIONS.search(result.stdout)
        if not m:
            raise ProbeError(f"크기를 읽을 수 없음: {result.stdout.strip()!r}")
        return _checked(path, int(m.group(1)), int(m.group(2)))


class PathDirectoryLister:
    """pathlib으로 하위 디렉토리까지 파일을 모은다."""

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def entries(self, directory: Path) -> list[Path]:
        try:
            return [p for p in Path(directory).rglob("*") if p.is_file()]
        except OSError as e:
            raise ProbeError(f"디렉토리 조회 실패: {directory} ({e})") from e


def create_image_probe(kind: str = "pillow") -> ImageProbe:
    """설정값("pillow" / "file")에 맞는 ImageProbe를 만든다."""
    if kind == "pillow":
        return PillowImageProbe()
    if kind == "file":
        return FileCommandProbe()
    raise ValueError(f"알 수 없는 probe 종류: {kind!r}")
