"""레이어 합성 모듈 — 캣 이미지 레이어를 배경 레이어 목록에 넣는다.

레이어는 호스트 설정의 background 항목과 같은 dict 형태다::

    {"source": {"File": "/path/cat.png"}, "vertical_align": "Bottom",
     "horizontal_align": "Right", "repeat_x": "NoRepeat", "repeat_y": "NoRepeat",
     "opacity": 0.6, "height": 200.0, "width": 400.0, "__IS_CATPACK": True}
"""

import copy
import logging
from pathlib import Path

from PIL import Image, ImageColor

from catpack.probe import ImageProbe, PillowImageProbe
from .canvas import Canvas
from .layout import anchor_position, fit_to_window

logger = logging.getLogger(__name__)

# 이 키가 있는 레이어만 토글 대상이 된다
CATPACK_TAG = "__IS_CATPACK"


def is_catpack_layer(layer) -> bool:
    return isinstance(layer, dict) and bool(layer.get(CATPACK_TAG))


def _number(value) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


class LayerCompositor:
    """캣 레이어를 만들고 배경 레이어 목록에 합친다.

    입력 목록은 절대 수정하지 않고 항상 새 목록을 반환한다.
    """

    def __init__(self, probe: ImageProbe | None = None,
                 maximum_window_percentage: float = 0.8,
                 kitty_opacity: float = 0.6):
        self._probe = probe or PillowImageProbe()
        self.maximum_window_percentage = maximum_window_percentage
        self.kitty_opacity = kitty_opacity

    def opacity_for(self, visible: bool) -> float:
        return self.kitty_opacity if visible else 0

    def build_layer(self, image_path: Path, dimensions: dict,
                    visible: bool = True) -> dict:
        """창 크기에 맞춘 캣 레이어를 만든다. 크기 조회 실패 시 ProbeError."""
        native_w, native_h = self._probe.dimensions(Path(image_path))
        width, height = fit_to_window(
            dimensions["pixel_height"], self.maximum_window_percentage,
            native_w, native_h,
        )
        return {
            "source": {"File": str(image_path)},
            "vertical_align": "Bottom",
            "horizontal_align": "Right",
            "repeat_x": "NoRepeat",
            "repeat_y": "NoRepeat",
            "opacity": self.opacity_for(visible),
            "height": height,
            "width": width,
            CATPACK_TAG: True,
        }

    def add_image(self, layers: list | None, dimensions: dict, image_path: Path,
                  index: int | None = None, visible: bool = True) -> list:
        """layers 복사본의 index 위치(None이면 맨 위)에 캣 레이어를 넣어 반환한다."""
        result = copy.deepcopy(layers) if layers else []
        layer = self.build_layer(image_path, dimensions, visible)
        if index is None:
            result.append(layer)
        else:
            result.insert(index, layer)
        logger.debug("캣 레이어 추가: %s (%.0fx%.0f, 위치 %s)",
                     image_path, layer["width"], layer["height"],
                     "top" if index is None else index)
        return result

    def set_visibility(self, layers: list | None, visible: bool) -> list:
        """캣 레이어의 불투명도만 바꾼 복사본을 반환한다."""
        result = copy.deepcopy(layers) if layers else []
        opacity = self.opacity_for(visible)
        for layer in result:
            if is_catpack_layer(layer):
                layer["opacity"] = opacity
        return result

    def render(self, layers: list, size: tuple[int, int]) -> Image.Image:
        """레이어 목록을 size 크기 캔버스에 순서대로 합성한 RGB 이미지를 반환한다."""
        canvas = Canvas(*size)
        for layer in layers or []:
            img = self._layer_image(layer, size)
            if img is None:
                continue
            opacity = _number(layer.get("opacity"))
            if opacity is not None and opacity < 1.0:
                alpha = img.getchannel("A").point(lambda a: int(a * opacity))
                img.putalpha(alpha)
            position = anchor_position(
                size, img.size,
                horizontal=layer.get("horizontal_align", "Left"),
                vertical=layer.get("vertical_align", "Top"),
                offset=(int(_number(layer.get("horizontal_offset")) or 0),
                        int(_number(layer.get("vertical_offset")) or 0)),
            )
            canvas.paste(img, position)
        return canvas.to_rgb()

    def _layer_image(self, layer: dict, size: tuple[int, int]) -> Image.Image | None:
        source = layer.get("source") or {}
        width = _number(layer.get("width"))
        height = _number(layer.get("height"))

        if "Color" in source:
            w = round(width) if width else size[0]
            h = round(height) if height else size[1]
            return Image.new("RGBA", (w, h), ImageColor.getcolor(source["Color"], "RGBA"))

        if "File" in source:
            with Image.open(source["File"]) as src:
                img = src.convert("RGBA")
            if width and height:
                img = img.resize((max(1, round(width)), max(1, round(height))),
                                 Image.Resampling.LANCZOS)
            return img

        logger.warning("지원하지 않는 레이어 source: %r", source)
        return None
