"""JWT Token Service.

TokenIssuer 포트의 구현체입니다.
"""

from __future__ import annotations

import time
import uuid
from datetime import timedelta
from typing import Any, Callable

from jose import JWTError, jwt

from workspace_auth.application.token.dto import IssuedToken, TokenClaims
from workspace_auth.application.token.exceptions import InvalidTokenError

REQUIRED_CLAIMS = ("sub", "jti", "exp", "iat", "email", "role")


class JwtTokenService:
    """JWT 토큰 서비스.

    TokenIssuer 구현체.
    """

    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60 * 24,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_token_expire = timedelta(minutes=access_token_expire_minutes)
        self._clock = clock

    def _now_timestamp(self) -> int:
        """현재 UTC Unix timestamp 반환."""
        return int(self._clock())

    def issue(self, *, user_id: int, company_id: int | None, email: str, role: str) -> IssuedToken:
        """액세스 토큰 발급."""
        jti = str(uuid.uuid4())
        now = self._now_timestamp()
        expires_at = now + int(self._access_token_expire.total_seconds())

        payload: dict[str, Any] = {
            "sub": str(user_id),
            "jti": jti,
            "iat": now,
            "exp": expires_at,
            "company_id": company_id,
            "email": email,
            "role": role,
        }

        token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return IssuedToken(access_token=token, jti=jti, expires_at=expires_at)

    def decode(self, token: str) -> TokenClaims:
        """토큰 디코딩."""
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        missing = [claim for claim in REQUIRED_CLAIMS if claim not in payload]
        if missing:
            raise InvalidTokenError(f"Missing claims: {', '.join(missing)}")

        try:
            claims = TokenClaims(
                user_id=int(payload["sub"]),
                company_id=payload.get("company_id"),
                email=payload["email"],
                role=payload["role"],
                jti=payload["jti"],
                iat=int(payload["iat"]),
                exp=int(payload["exp"]),
            )
        except (TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed claims: {e}") from e

        # 만료는 주입된 clock 기준으로 직접 검증
        if claims.exp <= self._now_timestamp():
            raise InvalidTokenError("Token has expired")

        return claims
