"""
Credit line 엔진 패키지
"""

from core.credit.engine import CreditLineEngine

__all__ = [
    "CreditLineEngine",
]
