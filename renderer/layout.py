"""레이어 배치 모듈 — 캣 이미지 크기와 위치를 계산한다."""


def fit_to_window(window_height: float, max_percentage: float,
                  native_w: int, native_h: int) -> tuple[float, float]:
    """창 높이에 맞춘 표시 크기 (너비, 높이)를 반환한다.

    높이는 창 높이 × max_percentage와 원본 높이 중 작은 값이고,
    너비는 원본 비율로 높이에서 유도한다. 원본보다 커지지 않는다.
    """
    height = min(window_height * max_percentage, native_h)
    width = native_w * (height / native_h)
    return width, height


def anchor_position(canvas_size: tuple[int, int], layer_size: tuple[int, int],
                    horizontal: str = "Left", vertical: str = "Top",
                    offset: tuple[int, int] = (0, 0)) -> tuple[int, int]:
    """정렬 방식에 따라 레이어 좌상단 좌표를 계산한다."""
    cw, ch = canvas_size
    lw, lh = layer_size

    if horizontal == "Right":
        x = cw - lw
    elif horizontal == "Center":
        x = (cw - lw) // 2
    else:
        x = 0

    if vertical == "Bottom":
        y = ch - lh
    elif vertical in ("Center", "Middle"):
        y = (ch - lh) // 2
    else:
        y = 0

    return x + offset[0], y + offset[1]
