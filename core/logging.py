"""
로깅 설정

`python -m web` 진입점에서 한 번 호출.
콘솔(StreamHandler) + 일별 롤링 파일(TimedRotatingFileHandler, logs/<process>/).

Core 모듈은 logging.getLogger(__name__)만 사용하며 핸들러를 직접 붙이지 않음.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# 요청마다 한 줄씩 남기는 uvicorn access 로그는 WARNING 이상만
QUIET_LOGGERS = ("uvicorn.access",)


def get_log_file_path(process_name: str, log_dir: Path | None = None) -> Path:
    """프로세스별 로그 파일 경로 (logs/<process>/<process>.log)"""
    base = log_dir if log_dir is not None else Paths.LOGS_DIR / process_name
    return base / f"{process_name}.log"


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = TimedRotatingFileHandler(
        filename=path,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"  # web.log.2024-01-01
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거 초기화

    기존 루트 핸들러는 닫고 교체하므로 여러 번 호출해도 중복 출력되지 않음.

    Args:
        process_name: 프로세스 이름 (로그 파일 이름)
        console_level: 콘솔 로그 레벨
        file_level: 파일 로그 레벨
        log_dir: 로그 디렉토리 (None이면 logs/<process_name>/)

    Returns:
        루트 Logger
    """
    log_file = get_log_file_path(process_name, log_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(console_level, file_level))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root_logger.addHandler(_console_handler(console_level, formatter))
    root_logger.addHandler(_file_handler(log_file, file_level, formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info(
        f"로깅 초기화: {process_name} "
        f"(console={logging.getLevelName(console_level)}, "
        f"file={log_file} {logging.getLevelName(file_level)})"
    )
    return root_logger
