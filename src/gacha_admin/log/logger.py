import logging
import sys
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _resolve_level(level: Union[int, str]) -> int:
    """'DEBUG' 같은 이름이나 logging 상수를 레벨 값으로 변환"""
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        return value if isinstance(value, int) else logging.INFO
    return level


def setup_logger(name: str, log_file: Optional[str] = "gacha_admin.log", level: Union[int, str] = logging.INFO):
    """
    콘솔 + 파일 로거 설정

    Args:
        name: 로거 이름
        log_file: 로그 파일 경로 (None이면 콘솔만)
        level: 로그 레벨 (logging 상수 또는 LOG_LEVEL 문자열)

    Returns:
        설정된 logging.Logger
    """
    logger = logging.getLogger(name)
    resolved = _resolve_level(level)
    logger.setLevel(resolved)

    # 재설정 시 핸들러 누적 방지
    cleanup_logger(logger)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(resolved)
        logger.addHandler(file_handler)

    return logger


def cleanup_logger(logger):
    """Close all handlers and remove them"""
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


def get_logger(name: str):
    """모듈용 콘솔 로거 (이미 핸들러가 있으면 그대로 반환)"""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)
    return logger
