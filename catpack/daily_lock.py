"""하루 고정 모듈 — 무작위로 고른 이미지를 그날 하루 동안 유지한다."""

from pathlib import Path


class DailyLock:
    """(연중 일자, 선택된 경로) 쌍을 보관한다."""

    def __init__(self):
        self._yday: int | None = None
        self._path: Path | None = None

    def get(self, yday: int) -> Path | None:
        """yday에 고정된 경로가 있으면 반환한다. 날짜가 바뀌었으면 None."""
        if self._yday == yday:
            return self._path
        return None

    def set(self, yday: int, path: Path) -> None:
        """yday에 path를 고정한다."""
        self._yday = yday
        self._path = path

    def reset(self):
        """고정을 해제한다 (다음 선택 시 새로 뽑음)."""
        self._yday = None
        self._path = None

    @property
    def locked(self) -> bool:
        return self._yday is not None
