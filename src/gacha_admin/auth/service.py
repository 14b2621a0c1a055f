"""
인증 서비스

관리자 로그인/로그아웃을 담당합니다. 세션은 SessionStore에 보관됩니다.
"""

from typing import Optional, Tuple

from gacha_admin.api.client import EdgeFunctionClient, parsing_response
from gacha_admin.auth.models import AccountStatus, AdminIdentity, AuthSession
from gacha_admin.auth.session import SessionStore
from gacha_admin.exceptions import ApiError
from gacha_admin.log.logger import get_logger


class AuthService:
    """
    인증 서비스

    로그인은 anon key로 Edge Function을 호출하고, 반환된 세션을 저장합니다.
    """

    def __init__(self, client: EdgeFunctionClient, session_store: SessionStore):
        """
        Args:
            client: Edge Function 클라이언트
            session_store: 세션 저장소
        """
        self.logger = get_logger('AuthService')
        self.client = client
        self.session_store = session_store

    async def sign_in(self, email: str, password: str) -> Tuple[bool, str, Optional[AdminIdentity]]:
        """
        관리자 로그인

        Args:
            email: 로그인 이메일
            password: 평문 비밀번호

        Returns:
            (로그인 성공 여부, 메시지, AdminIdentity 또는 None)
        """
        if not email or not password:
            return False, "이메일과 비밀번호를 입력하세요.", None

        try:
            data = await self.client.request(
                "/admin-auth-signin",
                method="POST",
                json={'email': email, 'password': password},
                authenticated=False
            )
        except ApiError as e:
            self.logger.warning(f"Failed login attempt: {email} ({e.message})")
            return False, e.message or "로그인에 실패했습니다.", None

        try:
            with parsing_response("/admin-auth-signin"):
                user_data = (data or {}).get('user')
                session_data = (data or {}).get('session') or {}
                access_token = session_data.get('access_token')
                identity = AdminIdentity.from_dict(user_data) if user_data else None
        except ApiError:
            return False, "세션 설정에 실패했습니다.", None

        if identity is None or not access_token:
            self.logger.error(f"Sign-in response for {email} has no session")
            return False, "세션 설정에 실패했습니다.", None

        if identity.status != AccountStatus.ACTIVE:
            self.logger.warning(f"Login attempt with inactive account: {email}")
            return False, "비활성화된 계정입니다. 관리자에게 문의하세요.", None

        self.session_store.sign_in(AuthSession(
            access_token=access_token,
            refresh_token=session_data.get('refresh_token'),
            identity=identity
        ))
        self.logger.info(f"Admin signed in: {email} ({identity.role.value})")
        return True, "로그인 성공", identity

    def sign_out(self) -> Tuple[bool, str]:
        """
        로그아웃

        Returns:
            (성공 여부, 메시지)
        """
        identity = self.session_store.identity
        self.session_store.sign_out()
        if identity:
            self.logger.info(f"Admin signed out: {identity.email}")
        return True, "로그아웃되었습니다."
