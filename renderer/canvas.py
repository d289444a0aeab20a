"""미리보기용 Pillow 캔버스 관리 모듈."""

from PIL import Image


class Canvas:
    """창 크기의 RGBA 캔버스."""

    def __init__(self, width: int, height: int, color: tuple = (0, 0, 0, 255)):
        self._size = (width, height)
        self._image = Image.new("RGBA", self._size, color)

    def paste(self, layer: Image.Image, position: tuple = (0, 0)) -> None:
        """레이어를 캔버스 위에 합성한다 (알파 블렌딩)."""
        if layer.mode != "RGBA":
            layer = layer.convert("RGBA")
        self._image = Image.alpha_composite(self._image, self._place(layer, position))

    def to_rgb(self) -> Image.Image:
        """RGB 모드로 변환하여 반환한다 (PNG 저장용)."""
        return self._image.convert("RGB")

    def _place(self, layer: Image.Image, position: tuple) -> Image.Image:
        """레이어를 캔버스 크기에 맞춰 지정 위치에 배치한다."""
        if layer.size == self._size and position == (0, 0):
            return layer
        result = Image.new("RGBA", self._size, (0, 0, 0, 0))
        result.paste(layer, position)
        return result
