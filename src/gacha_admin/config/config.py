import os
from dataclasses import dataclass
from dotenv import load_dotenv


@dataclass
class Config:
    supabase_url: str
    supabase_anon_key: str

    # Edge Function settings
    edge_function_path: str = "/functions/v1"
    api_timeout_seconds: float = 30.0

    # Menu permission cache (staleness tolerance)
    menu_cache_ttl_seconds: int = 300

    # Route guard redirect target
    not_found_path: str = "/404"

    # Logging
    log_file: str = "gacha_admin.log"
    log_level: str = "INFO"

    @property
    def edge_function_url(self) -> str:
        """Supabase URL과 Edge Function 경로를 합친 기본 URL 반환"""
        return f"{self.supabase_url.rstrip('/')}/{self.edge_function_path.strip('/')}"


def load_config(load_dotenv_file: bool = True) -> Config:
    if load_dotenv_file:
        load_dotenv()

    # 필수 변수 (Supabase 프로젝트 정보)
    required_vars = ["SUPABASE_URL", "SUPABASE_ANON_KEY"]

    missing = [var for var in required_vars if not os.getenv(var)]
    if missing:
        raise ValueError(f"Missing required configuration: {missing[0]}")

    # Validate and convert API timeout
    try:
        api_timeout_seconds = float(os.getenv("API_TIMEOUT_SECONDS", "30"))
    except ValueError as e:
        raise ValueError(
            f"API_TIMEOUT_SECONDS must be a valid number: {os.getenv('API_TIMEOUT_SECONDS')}"
        ) from e

    if api_timeout_seconds <= 0:
        raise ValueError(f"API_TIMEOUT_SECONDS must be positive, got: {api_timeout_seconds}")

    # Validate and convert cache TTL
    try:
        menu_cache_ttl_seconds = int(os.getenv("MENU_CACHE_TTL_SECONDS", "300"))
    except ValueError as e:
        raise ValueError(
            f"MENU_CACHE_TTL_SECONDS must be a valid integer: {os.getenv('MENU_CACHE_TTL_SECONDS')}"
        ) from e

    if menu_cache_ttl_seconds < 0:
        raise ValueError(f"MENU_CACHE_TTL_SECONDS must not be negative, got: {menu_cache_ttl_seconds}")

    not_found_path = os.getenv("NOT_FOUND_PATH", "/404")
    if not not_found_path.startswith("/"):
        raise ValueError(f"NOT_FOUND_PATH must start with '/': {not_found_path}")

    return Config(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY"),

        edge_function_path=os.getenv("EDGE_FUNCTION_PATH", "/functions/v1"),
        api_timeout_seconds=api_timeout_seconds,

        menu_cache_ttl_seconds=menu_cache_ttl_seconds,
        not_found_path=not_found_path,

        log_file=os.getenv("LOG_FILE", "gacha_admin.log"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )
