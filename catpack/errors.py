"""캣팩 처리 중 발생하는 예외."""


class CatpackError(Exception):
    """캣팩 관련 예외의 기반 클래스."""


class NotFoundError(CatpackError, FileNotFoundError):
    """catpack.json 메타데이터 파일이 없다."""


class ParseError(CatpackError, ValueError):
    """catpack.json 내용이 잘못되었다."""


class ProbeError(CatpackError, OSError):
    """이미지 크기 조회 또는 디렉토리 조회에 실패했다."""
