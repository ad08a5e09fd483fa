"""
통합 로깅 모듈

사용법:
    from src.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.info("발주 권고 생성 시작")
    logger.warning("재고 시트 없음")
    logger.error("ERP DB 연결 실패", exc_info=True)
"""

import io
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


def _ensure_utf8_stdout():
    """Windows CP949 콘솔에서 UTF-8 출력을 보장한다.

    sys.stdout/stderr 가 비-UTF-8 인코딩일 때 io.TextIOWrapper 로
    UTF-8 래핑하여 한글 깨짐을 방지한다. 이미 UTF-8 이면 아무 작업도 하지 않는다.
    """
    if sys.platform != "win32":
        return
    for stream_name in ("stdout", "stderr"):
        stream = getattr(sys, stream_name, None)
        if stream is None or not hasattr(stream, "buffer"):
            continue  # buffer 없는 환경(IDLE 등)
        if (getattr(stream, "encoding", "") or "").lower().replace("-", "") != "utf8":
            setattr(sys, stream_name, io.TextIOWrapper(
                stream.buffer,
                encoding="utf-8",
                errors="replace",
                line_buffering=True,
            ))


# 모듈 임포트 시 1회 실행
_ensure_utf8_stdout()


# 로그 디렉토리
LOG_DIR = Path(__file__).parent.parent.parent / "logs"
LOG_DIR.mkdir(exist_ok=True)


class SafeRotatingFileHandler(RotatingFileHandler):
    """파일 잠금에 안전한 RotatingFileHandler

    로그 파일이 다른 프로세스에 잠겨 로테이션이 실패하면
    기존 파일에 계속 쓴다.
    """

    def doRollover(self):
        try:
            super().doRollover()
        except PermissionError:
            # 로테이션 실패 → stream이 닫혀있으면 다시 열기
            if self.stream is None and not self.delay:
                self.stream = self._open()


# 로그 포맷
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_FORMAT_SIMPLE = "%(asctime)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# 로그 파일 분류
LOG_FILES = {
    "main": LOG_DIR / "main.log",           # 전체 로그
    "ordering": LOG_DIR / "ordering.log",   # 발주 계산 관련
    "source": LOG_DIR / "source.log",       # 시트/ERP 데이터 조회 관련
    "error": LOG_DIR / "error.log",         # 에러만
}

# 이미 설정된 로거 추적
_configured_loggers = set()


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: str = "main",
    console: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> logging.Logger:
    """
    로거 설정

    Args:
        name: 로거 이름 (보통 __name__)
        level: 로그 레벨
        log_file: 로그 파일 키 ("main", "ordering", "source")
        console: 콘솔 출력 여부
        max_bytes: 파일당 최대 크기
        backup_count: 백업 파일 수

    Returns:
        설정된 Logger
    """
    logger = logging.getLogger(name)

    if name in _configured_loggers:
        return logger

    logger.setLevel(level)

    # 이미 핸들러가 있으면 스킵
    if logger.handlers:
        _configured_loggers.add(name)
        return logger

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    simple_formatter = logging.Formatter(LOG_FORMAT_SIMPLE, DATE_FORMAT)

    file_path = LOG_FILES.get(log_file, LOG_FILES["main"])
    try:
        file_handler = SafeRotatingFileHandler(
            file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"[WARN] 로그 파일 핸들러 설정 실패: {e}")

    # 에러 전용 파일 핸들러
    try:
        error_handler = SafeRotatingFileHandler(
            LOG_FILES["error"],
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        error_handler.setFormatter(formatter)
        error_handler.setLevel(logging.ERROR)
        logger.addHandler(error_handler)
    except OSError as e:
        print(f"[WARN] 에러 로그 파일 핸들러 설정 실패: {e}")

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(simple_formatter)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    # 상위 로거로 전파 방지
    logger.propagate = False

    _configured_loggers.add(name)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    로거 가져오기 (편의 함수)

    모듈별 자동 분류:
        - src.domain.ordering.* / src.application.* → ordering.log
        - src.infrastructure.* → source.log
        - 그 외 → main.log

    Args:
        name: 모듈 이름 (보통 __name__)

    Returns:
        모듈에 맞게 설정된 Logger 인스턴스
    """
    if "ordering" in name or "application" in name:
        return setup_logger(name, log_file="ordering")
    elif "infrastructure" in name:
        return setup_logger(name, log_file="source")
    return setup_logger(name, log_file="main")


def log_with_context(
    _logger: logging.Logger,
    level: str,
    msg: str,
    exc_info: bool = False,
    **ctx: Any,
) -> None:
    """컨텍스트 키워드를 자동 포맷하는 로깅 헬퍼

    Args:
        _logger: 로거 인스턴스
        level: 로그 레벨 ("debug", "info", "warning", "error")
        msg: 로그 메시지
        exc_info: True면 예외 스택 트레이스 포함
        **ctx: 컨텍스트 키=값 쌍 (source, sheet, ingredient 등)

    Usage:
        log_with_context(logger, "warning", "데이터 조회 실패",
                        source="bom", sheet="레시피")
        # Output: "데이터 조회 실패 | source=bom | sheet=레시피"
    """
    if ctx:
        ctx_str = " | ".join(f"{k}={v}" for k, v in ctx.items() if v is not None)
        if ctx_str:
            msg = f"{msg} | {ctx_str}"

    log_fn = getattr(_logger, level, None) or _logger.info
    log_fn(msg, exc_info=exc_info)
