"""catpack.json 메타데이터 파서.

Prism Launcher 9.0 캣팩 형식을 따른다::

    {
        "name": "Maxwell Calendar",
        "default": "random",
        "variants": [
            {"startTime": {"month": 12, "day": 1},
             "endTime": {"month": 1, "day": 31},
             "path": "winter.png"}
        ]
    }
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path

from .errors import NotFoundError, ParseError

logger = logging.getLogger(__name__)

METADATA_FILE = "catpack.json"


def _strip_dot_slash(path: str) -> str:
    """경로 앞의 "./" 를 제거한다."""
    while path.startswith("./"):
        path = path[2:]
    return path


def _normalized_date(year: int, month: int, day: int) -> date:
    """월의 일수를 넘는 day는 다음 달로 넘긴다 (평년 2/29 → 3/1)."""
    return date(year, month, 1) + timedelta(days=day - 1)


@dataclass(frozen=True)
class MonthDay:
    """연도 없는 월/일."""
    month: int
    day: int

    def in_year(self, year: int) -> date:
        return _normalized_date(year, self.month, self.day)


@dataclass(frozen=True)
class Variant:
    """기간 한정 이미지."""
    start: MonthDay
    end: MonthDay
    path: str

    @property
    def wraps_year(self) -> bool:
        """종료 월이 시작 월보다 앞서면 연말을 넘기는 기간이다 (예: 12월~2월)."""
        return self.end.month < self.start.month

    def date_range(self, year: int) -> tuple[date, date]:
        """year에 시작하는 [시작일, 종료일] 구간을 반환한다."""
        end_year = year + 1 if self.wraps_year else year
        return self.start.in_year(year), self.end.in_year(end_year)

    def contains(self, today: date) -> bool:
        """today가 기간 안에 있는지 확인한다 (양 끝 포함).

        연말을 넘기는 기간은 작년에 시작한 구간도 함께 확인한다.
        여러 해에 걸친 기간은 지원하지 않는다.
        """
        start, end = self.date_range(today.year)
        if start <= today <= end:
            return True
        if self.wraps_year:
            start, end = self.date_range(today.year - 1)
            return start <= today <= end
        return False


@dataclass(frozen=True)
class PackDescriptor:
    """catpack.json 내용."""
    default: str
    variants: list[Variant] = field(default_factory=list)
    name: str = ""

    def match(self, today: date) -> Variant | None:
        """선언 순서대로 처음 일치하는 variant를 반환한다."""
        for variant in self.variants:
            if variant.contains(today):
                return variant
        return None


def _parse_month_day(raw, what: str) -> MonthDay:
    if not isinstance(raw, dict):
        raise ParseError(f"{what}: month/day 객체가 아님: {raw!r}")
    try:
        month = int(raw["month"])
        day = int(raw["day"])
    except KeyError as e:
        raise ParseError(f"{what}: {e.args[0]} 누락") from e
    except (TypeError, ValueError) as e:
        raise ParseError(f"{what}: 숫자가 아님: {raw!r}") from e
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise ParseError(f"{what}: 범위 밖의 날짜 {month}/{day}")
    return MonthDay(month, day)


def _parse_variant(raw, idx: int) -> Variant:
    if not isinstance(raw, dict):
        raise ParseError(f"variants[{idx}]: 객체가 아님")
    path = raw.get("path")
    if not isinstance(path, str) or not path:
        raise ParseError(f"variants[{idx}]: path 누락")
    return Variant(
        start=_parse_month_day(raw.get("startTime"), f"variants[{idx}].startTime"),
        end=_parse_month_day(raw.get("endTime"), f"variants[{idx}].endTime"),
        path=_strip_dot_slash(path),
    )


def parse_descriptor(data) -> PackDescriptor:
    """디코딩된 JSON 값을 PackDescriptor로 변환한다."""
    if not isinstance(data, dict):
        raise ParseError("catpack.json 최상위 값이 객체가 아님")

    default = data.get("default")
    if not isinstance(default, str) or not default:
        raise ParseError("default 누락 또는 문자열이 아님")

    variants = data.get("variants") or []
    if not isinstance(variants, list):
        raise ParseError("variants가 배열이 아님")

    return PackDescriptor(
        default=_strip_dot_slash(default),
        variants=[_parse_variant(v, i) for i, v in enumerate(variants)],
        name=str(data.get("name", "")),
    )


def load_descriptor(pack_dir: Path) -> PackDescriptor:
    """팩 디렉토리의 catpack.json을 읽어 파싱한다."""
    meta_path = Path(pack_dir) / METADATA_FILE
    try:
        with open(meta_path, "rb") as f:
            raw = f.read()
    except FileNotFoundError as e:
        raise NotFoundError(f"메타데이터 없음: {meta_path}") from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ParseError(f"{meta_path}: UTF-8이 아님 ({e})") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"{meta_path}: JSON 오류 ({e})") from e

    descriptor = parse_descriptor(data)
    logger.debug("캣팩 로드: %s (variant %d개)", meta_path, len(descriptor.variants))
    return descriptor
