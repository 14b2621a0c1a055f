"""
세션 저장소

현재 로그인 세션을 보관하고 로그인/로그아웃 이벤트를 구독자에게 알립니다.
"""

from typing import Callable, List, Optional

from gacha_admin.auth.models import AdminIdentity, AuthSession
from gacha_admin.log.logger import get_logger

SessionListener = Callable[[Optional[AuthSession]], None]


class SessionStore:
    """
    로그인 세션 보관소

    Edge Function 클라이언트는 여기서 Bearer 토큰을 얻고,
    메뉴 캐시는 로그인/로그아웃 시 비워집니다.
    """

    def __init__(self):
        self.logger = get_logger('SessionStore')
        self._session: Optional[AuthSession] = None
        self._sign_in_listeners: List[SessionListener] = []
        self._sign_out_listeners: List[SessionListener] = []

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def access_token(self) -> Optional[str]:
        return self._session.access_token if self._session else None

    @property
    def identity(self) -> Optional[AdminIdentity]:
        return self._session.identity if self._session else None

    def is_authenticated(self) -> bool:
        return self._session is not None

    def on_sign_in(self, callback: SessionListener) -> None:
        """로그인 이벤트 구독"""
        self._sign_in_listeners.append(callback)

    def on_sign_out(self, callback: SessionListener) -> None:
        """로그아웃 이벤트 구독"""
        self._sign_out_listeners.append(callback)

    def sign_in(self, session: AuthSession) -> None:
        """
        세션 설정

        이미 다른 세션이 있으면 먼저 로그아웃 처리합니다.

        Args:
            session: 새 로그인 세션
        """
        if self._session is not None:
            self.sign_out()

        self._session = session
        self.logger.info(f"Session started for {session.identity.email}")
        for callback in self._sign_in_listeners:
            callback(session)

    def sign_out(self) -> None:
        """세션 종료"""
        previous = self._session
        self._session = None
        if previous is None:
            return

        self.logger.info(f"Session ended for {previous.identity.email}")
        for callback in self._sign_out_listeners:
            callback(previous)
