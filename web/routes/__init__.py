"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- credit: Credit line 및 거래 내역
- audit: 감사 로그
"""
