"""
Storage 패키지

Credit line 레코드 메모리 저장소
"""

from core.storage.credit_line_store import CreditLineStore

__all__ = [
    "CreditLineStore",
]
