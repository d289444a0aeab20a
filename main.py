"""캣팩 CLI — 오늘의 캣 레이어를 계산해 JSON으로 출력하고 미리보기를 저장한다.

Usage:
    python main.py maxwell_calendar
    python main.py maxwell_calendar --date 2026-12-24 --preview preview.png
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from config import load_config
from catpack.errors import CatpackError
from terminal.session import CatpackSession, CatpackSettings
from terminal.window import MemoryWindow

logger = logging.getLogger("catpacks")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="날짜에 맞는 캣팩 배경 레이어를 계산한다.")
    parser.add_argument("pack", nargs="?", help="config_dir 기준 팩 디렉토리 (기본: 설정의 catpack.pack)")
    parser.add_argument("--config", type=Path, help="config.json 경로")
    parser.add_argument("--date", type=date.fromisoformat, help="기준 날짜 YYYY-MM-DD (기본: 오늘)")
    parser.add_argument("--width", type=int, help="창 너비(px)")
    parser.add_argument("--height", type=int, help="창 높이(px)")
    parser.add_argument("--index", type=int, help="캣 레이어를 넣을 위치 (기본: 맨 위)")
    parser.add_argument("--preview", type=Path, help="합성 결과를 저장할 PNG 경로")
    parser.add_argument("-v", "--verbose", action="store_true", help="DEBUG 로그 출력")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)

    level = logging.DEBUG if args.verbose else config["logging"].get("level", "INFO")
    logging.basicConfig(level=level, format="%(asctime)s [%(name)s] %(message)s")

    pack = args.pack or config["catpack"].get("pack")
    if not pack:
        logger.error("팩 이름이 없습니다 (인자 또는 catpack.pack 설정 필요)")
        return 2

    try:
        settings = CatpackSettings.from_config(config)
    except ValueError as e:
        logger.error("설정 오류: %s", e)
        return 2

    clock = (lambda: args.date) if args.date else None
    session = CatpackSession(settings, clock=clock)
    window = MemoryWindow(
        pixel_width=args.width or config["window"].get("pixel_width", 1280),
        pixel_height=args.height or config["window"].get("pixel_height", 800),
    )

    try:
        layers = session.add_from_pack(window, config.get("host", {}), pack, args.index)
        if args.preview:
            frame = session.compositor.render(layers, (window.pixel_width, window.pixel_height))
            frame.save(args.preview)
            logger.info("미리보기 저장: %s", args.preview)
    except (CatpackError, IndexError) as e:
        logger.error("캣팩 처리 실패: %s", e)
        return 1

    print(json.dumps(layers, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
