import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """루트 로거에 표준 출력 핸들러를 하나 등록합니다. 여러 번 호출해도 핸들러는 중복되지 않습니다."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if not any(getattr(h, "_bench_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._bench_handler = True
        root.addHandler(handler)
