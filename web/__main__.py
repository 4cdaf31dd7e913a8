"""
Web 진입점

실행 방법:
    python -m web
"""

import logging

import uvicorn

from core.config.loader import get_settings
from core.logging import setup_logging

if __name__ == "__main__":
    settings = get_settings()

    # 로깅 설정 (콘솔 + 파일)
    level = logging.getLevelName(settings.log_level)
    setup_logging("web", console_level=level, file_level=level)

    uvicorn.run(
        "web.app:app",
        host=settings.web_host,
        port=settings.web_port,
        reload=False,
        log_config=None,
    )
