"""캣팩 해석 모듈 — (팩 디렉토리, 오늘 날짜) → 이미지 경로."""

import logging
import random
from datetime import date
from pathlib import Path, PurePosixPath

from .daily_lock import DailyLock
from .descriptor import PackDescriptor, load_descriptor
from .probe import DirectoryLister, PathDirectoryLister

logger = logging.getLogger(__name__)

# default가 이 이름의 디렉토리면 하루 한 번 무작위로 고른다
RANDOM_DIRECTORY = "random"


def day_of_year(today: date) -> int:
    """1월 1일 = 1."""
    return today.timetuple().tm_yday


class PackResolver:
    """날짜에 맞는 캣팩 이미지를 고른다.

    variant 기간에 해당하면 그 이미지를, 아니면 default 선택자를 따른다.
    default가 디렉토리이면 정렬된 목록에서 날짜 순환 선택을 하고,
    디렉토리 이름이 "random"이면 무작위로 고른 뒤 DailyLock으로 하루 동안 고정한다.
    DailyLock은 연중 일자만 기억하므로 random default를 쓰는 팩이 여럿이면
    팩마다 PackResolver(세션)를 따로 둔다.
    """

    def __init__(self, lister: DirectoryLister | None = None,
                 lock: DailyLock | None = None,
                 rng: random.Random | None = None):
        self._lister = lister or PathDirectoryLister()
        self._lock = lock if lock is not None else DailyLock()
        self._rng = rng or random.Random()

    @property
    def lock(self) -> DailyLock:
        return self._lock

    def resolve(self, pack_dir: Path, today: date | None = None) -> Path:
        """pack_dir의 catpack.json을 읽고 today에 표시할 이미지 경로를 반환한다."""
        today = today or date.today()
        pack_dir = Path(pack_dir)
        descriptor = load_descriptor(pack_dir)
        return self.resolve_descriptor(pack_dir, descriptor, today)

    def resolve_descriptor(self, pack_dir: Path, descriptor: PackDescriptor,
                           today: date) -> Path:
        variant = descriptor.match(today)
        if variant is not None:
            logger.info("variant 선택: %s (%s)", variant.path, today.isoformat())
            return pack_dir / variant.path
        return self._resolve_default(pack_dir, descriptor.default, today)

    def _resolve_default(self, pack_dir: Path, default: str, today: date) -> Path:
        default_path = pack_dir / default
        if not self._lister.is_directory(default_path):
            logger.info("default 이미지: %s", default)
            return default_path

        names = sorted(self._lister.entries(default_path), key=lambda p: p.as_posix())
        if not names:
            raise IndexError(f"default 디렉토리가 비어 있음: {default_path}")

        yday = day_of_year(today)
        if PurePosixPath(default).name.lower() == RANDOM_DIRECTORY:
            return self._pick_random(names, yday)

        chosen = names[yday % len(names)]
        logger.info("default 순환 선택: %s (%d일째, %d개 중)", chosen.name, yday, len(names))
        return chosen

    def _pick_random(self, names: list[Path], yday: int) -> Path:
        locked = self._lock.get(yday)
        if locked is not None:
            logger.debug("오늘 고정된 이미지 사용: %s", locked)
            return locked

        chosen = self._rng.choice(names)
        self._lock.set(yday, chosen)
        logger.info("무작위 선택: %s (%d일째)", chosen.name, yday)
        return chosen
