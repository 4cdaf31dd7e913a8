"""
pytest 공통 fixture 정의

Engine, 결정적 시계, 임시 설정 파일 fixture
"""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from core.config.loader import Settings
from core.credit.engine import CreditLineEngine
from core.utils.clock import FixedClock

START_TS = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock() -> FixedClock:
    """2024-01-01T00:00:00Z에서 시작하는 고정 시계"""
    return FixedClock(START_TS)


@pytest.fixture
def engine(clock: FixedClock) -> CreditLineEngine:
    """고정 시계를 사용하는 빈 엔진"""
    engine = CreditLineEngine(clock=clock)
    yield engine
    engine.reset()


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings 싱글턴 및 관리자 키 환경변수 초기화"""
    monkeypatch.delenv("CREDITRA_ADMIN_API_KEYS", raising=False)
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    content = """# 테스트용 settings.yaml
log_level: debug

web:
  host: 0.0.0.0
  port: 9000

admin:
  api_keys:
    - "test-secret"
    - "second-secret"
"""
    path = temp_dir / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_settings_file_invalid_port(temp_dir: Path) -> Path:
    """잘못된 포트의 settings.yaml 파일 생성"""
    content = """web:
  port: "not-a-port"
"""
    path = temp_dir / "settings_invalid.yaml"
    path.write_text(content, encoding="utf-8")
    return path
