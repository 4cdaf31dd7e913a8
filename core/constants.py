"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → creditra/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # 관리자 인증 헤더
    ADMIN_KEY_HEADER: str = "X-Admin-Api-Key"
    ACTOR_HEADER: str = "X-User"
    ANONYMOUS_ACTOR: str = "anonymous"

    # 환경변수 오버라이드
    ADMIN_KEYS_ENV: str = "CREDITRA_ADMIN_API_KEYS"


class Pagination:
    """페이지네이션 상수

    Ledger 조회(엄격 검증)와 목록 조회(클램프)는 기본 page size가 다름.
    """

    MIN_PAGE: int = 1
    MIN_LIMIT: int = 1
    MAX_LIMIT: int = 100

    # Ledger 조회 (범위 밖이면 ValidationError)
    LEDGER_DEFAULT_LIMIT: int = 20

    # 목록 조회 (범위 밖이면 클램프)
    LIST_DEFAULT_PAGE_SIZE: int = 10
    LIST_DEFAULT_SORT_BY: str = "createdAt"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"
