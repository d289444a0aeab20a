"""호스트 터미널 창 인터페이스."""

import copy
from typing import Protocol


class HostWindow(Protocol):
    """레이어를 설치할 터미널 창."""

    def get_dimensions(self) -> dict:
        """{"pixel_width": int, "pixel_height": int, ...}"""
        ...

    def get_config_overrides(self) -> dict | None:
        ...

    def set_config_overrides(self, overrides: dict) -> None:
        ...


class MemoryWindow:
    """메모리 안에서만 동작하는 창 (CLI 미리보기, 테스트용)."""

    def __init__(self, pixel_width: int = 1280, pixel_height: int = 800,
                 overrides: dict | None = None):
        self.pixel_width = pixel_width
        self.pixel_height = pixel_height
        self._overrides = overrides
        self.install_count = 0

    def get_dimensions(self) -> dict:
        return {"pixel_width": self.pixel_width, "pixel_height": self.pixel_height}

    def get_config_overrides(self) -> dict | None:
        return copy.deepcopy(self._overrides)

    def set_config_overrides(self, overrides: dict) -> None:
        self._overrides = copy.deepcopy(overrides)
        self.install_count += 1

    def resize(self, pixel_width: int, pixel_height: int) -> None:
        self.pixel_width = pixel_width
        self.pixel_height = pixel_height
