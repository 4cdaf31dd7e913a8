"""
설정 로더

settings.yaml 로드 및 Web/관리자 설정 생성
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppSettings:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT
    log_level: str = Defaults.LOG_LEVEL
    admin_api_keys: tuple[str, ...] = field(default_factory=tuple)

    def is_admin_key(self, key: str | None) -> bool:
        """관리자 API 키 여부 (키가 설정되지 않았으면 항상 False)"""
        return bool(key) and key in self.admin_api_keys


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def load_settings(path: Path | None = None) -> AppSettings:
    """settings.yaml 파일 로드

    파일이 없으면 기본값 사용 (관리자 키 없음 → 관리자 API 전부 거부).
    환경변수 CREDITRA_ADMIN_API_KEYS(콤마 구분)가 있으면 admin.api_keys를 대체.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppSettings 인스턴스

    Raises:
        SettingsLoadError: 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    data: dict[str, Any] = {}
    if path.exists():
        try:
            content = path.read_text(encoding="utf-8")
            loaded = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

        if loaded is not None:
            if not isinstance(loaded, dict):
                raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")
            data = loaded

    web_config = _section(data, "web")
    admin_config = _section(data, "admin")

    host = web_config.get("host", Defaults.WEB_HOST)
    port = web_config.get("port", Defaults.WEB_PORT)
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise SettingsLoadError(f"web.port가 유효하지 않습니다: {port!r}")

    log_level = str(data.get("log_level", Defaults.LOG_LEVEL)).upper()
    if log_level not in LOG_LEVELS:
        raise SettingsLoadError(f"log_level이 유효하지 않습니다: {log_level!r}. 유효한 값: {list(LOG_LEVELS)}")

    api_keys = admin_config.get("api_keys") or []
    if isinstance(api_keys, str):
        api_keys = [api_keys]
    if not isinstance(api_keys, list):
        raise SettingsLoadError("admin.api_keys는 문자열 목록이어야 합니다")

    env_keys = os.environ.get(Defaults.ADMIN_KEYS_ENV)
    if env_keys:
        api_keys = env_keys.split(",")

    return AppSettings(
        web_host=str(host),
        web_port=port,
        log_level=log_level,
        admin_api_keys=tuple(str(k).strip() for k in api_keys if str(k).strip()),
    )


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml의 '{name}' 섹션은 매핑이어야 합니다")
    return section


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: AppSettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            type(self)._settings = load_settings(settings_path)

    @property
    def app(self) -> AppSettings:
        """로드된 설정"""
        assert self._settings is not None
        return self._settings

    @property
    def web_host(self) -> str:
        return self.app.web_host

    @property
    def web_port(self) -> int:
        return self.app.web_port

    @property
    def log_level(self) -> str:
        return self.app.log_level

    def is_admin_key(self, key: str | None) -> bool:
        """관리자 API 키 여부"""
        return self.app.is_admin_key(key)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._settings = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
