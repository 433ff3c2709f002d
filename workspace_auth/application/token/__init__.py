"""Token Bounded Context.

액세스 토큰 검증과 로그아웃 Use Case입니다.
"""
