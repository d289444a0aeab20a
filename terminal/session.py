"""캣팩 세션 — 표시 여부, 하루 고정, 설정을 한 객체에 묶는다.

호스트 이벤트(창 크기 변경, 설정 리로드, 토글 키)는 한 번에 하나씩
전달된다고 가정한다. 세션은 스레드 안전하지 않다.

사용 예::

    session = CatpackSession(CatpackSettings(config_dir=Path("~/.config/wezterm")))
    on_resize = make_resize_handler(session, config, "maxwell_calendar")
    # window-resized 이벤트에 on_resize(window, pane) 연결
    # 토글 키에 session.toggle 연결
"""

import logging
import random
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable

from catpack.daily_lock import DailyLock
from catpack.probe import DirectoryLister, ImageProbe, create_image_probe
from catpack.resolver import PackResolver
from renderer.layers import LayerCompositor
from .window import HostWindow

logger = logging.getLogger(__name__)


def _fraction(name: str, value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name}: 숫자가 아님: {value!r}") from e
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name}: 0~1 범위를 벗어남: {value}")
    return value


@dataclass
class CatpackSettings:
    """캣 레이어 설정."""
    config_dir: Path = Path("~/.config/wezterm")
    maximum_window_percentage: float = 0.8  # 창 높이 대비 최대 비율 (탭바 가림 방지)
    kitty_opacity: float = 0.6              # 캣 레이어 불투명도 (텍스트 가독성)
    draw_cat: bool = True
    probe: str = "pillow"

    def __post_init__(self):
        self.config_dir = Path(self.config_dir).expanduser()
        self.maximum_window_percentage = _fraction(
            "maximum_window_percentage", self.maximum_window_percentage)
        self.kitty_opacity = _fraction("kitty_opacity", self.kitty_opacity)

    @classmethod
    def from_config(cls, config: dict) -> "CatpackSettings":
        """load_config() 결과의 "catpack" 섹션에서 설정을 만든다."""
        section = config.get("catpack", {})
        return cls(
            config_dir=section.get("config_dir", cls.config_dir),
            maximum_window_percentage=section.get("maximum_window_percentage", 0.8),
            kitty_opacity=section.get("kitty_opacity", 0.6),
            draw_cat=bool(section.get("draw_cat", True)),
            probe=section.get("probe", "pillow"),
        )


class CatpackSession:
    """캣 레이어를 창에 설치하고 토글한다."""

    def __init__(self, settings: CatpackSettings | None = None,
                 probe: ImageProbe | None = None,
                 lister: DirectoryLister | None = None,
                 rng: random.Random | None = None,
                 clock: Callable[[], date] | None = None):
        self.settings = settings or CatpackSettings()
        self._visible = self.settings.draw_cat
        self._lock = DailyLock()
        self._clock = clock or date.today
        self.resolver = PackResolver(lister=lister, lock=self._lock, rng=rng)
        self.compositor = LayerCompositor(
            probe or create_image_probe(self.settings.probe),
            maximum_window_percentage=self.settings.maximum_window_percentage,
            kitty_opacity=self.settings.kitty_opacity,
        )

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def lock(self) -> DailyLock:
        return self._lock

    def _full_path(self, relative) -> Path:
        return self.settings.config_dir / relative

    def image_for_pack(self, pack_name: str, today: date | None = None) -> Path:
        """config_dir/pack_name 팩에서 오늘의 이미지 경로를 구한다."""
        return self.resolver.resolve(self._full_path(pack_name), today or self._clock())

    def add_image(self, window: HostWindow, config: dict, file_path,
                  index: int | None = None) -> list:
        """file_path 이미지를 config의 background 위에 얹어 창 설정으로 설치한다.

        새 레이어 목록이 완성된 뒤에만 set_config_overrides를 호출한다.
        """
        return self._install(window, config, self._full_path(file_path), index)

    def _install(self, window: HostWindow, config: dict, image: Path,
                 index: int | None) -> list:
        """image(이미 config_dir 기준으로 풀린 경로)로 레이어를 만들어 설치한다."""
        layers = self.compositor.add_image(
            config.get("background"),
            window.get_dimensions(),
            image,
            index=index,
            visible=self._visible,
        )
        overrides = dict(window.get_config_overrides() or {})
        overrides["background"] = layers
        window.set_config_overrides(overrides)
        return layers

    def add_from_pack(self, window: HostWindow, config: dict, pack_name: str,
                      index: int | None = None) -> list:
        """오늘 날짜에 맞는 팩 이미지를 설치한다."""
        image = self.image_for_pack(pack_name)
        return self._install(window, config, image, index)

    def toggle(self, window: HostWindow, pane=None) -> bool:
        """캣 표시를 켜고 끈다. 무작위 선택도 다시 뽑게 된다. 새 표시 상태를 반환."""
        self._visible = not self._visible
        self._lock.reset()
        logger.info("캣팩 토글: %s", "표시" if self._visible else "숨김")

        overrides = window.get_config_overrides()
        if overrides and "background" in overrides:
            overrides = dict(overrides)
            overrides["background"] = self.compositor.set_visibility(
                overrides["background"], self._visible)
            window.set_config_overrides(overrides)
        return self._visible


def make_resize_handler(session: CatpackSession, config: dict, pack_name: str,
                        index: int | None = None) -> Callable:
    """window-resized / window-config-reloaded 이벤트용 콜백을 만든다."""

    def handler(window: HostWindow, pane=None) -> None:
        session.add_from_pack(window, config, pack_name, index)

    return handler


_default_session: CatpackSession | None = None


def default_session() -> CatpackSession:
    """프로세스 기본 세션 (처음 호출 시 기본 설정으로 생성)."""
    global _default_session
    if _default_session is None:
        _default_session = CatpackSession()
    return _default_session


def add_image(window: HostWindow, config: dict, file_path, index: int | None = None) -> list:
    return default_session().add_image(window, config, file_path, index)


def add_from_pack(window: HostWindow, config: dict, pack_name: str,
                  index: int | None = None) -> list:
    return default_session().add_from_pack(window, config, pack_name, index)


def toggle(window: HostWindow, pane=None) -> bool:
    return default_session().toggle(window, pane)
