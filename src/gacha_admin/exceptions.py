"""
Gacha Admin 예외 정의

Edge Function 호출과 권한 편집 과정에서 발생하는 예외입니다.
권한 부족은 예외가 아니라 False로 표현합니다.
"""

from typing import Optional


class GachaAdminError(Exception):
    """패키지 공통 예외"""


class ApiError(GachaAdminError):
    """
    Edge Function 호출 실패

    Attributes:
        message: 사용자에게 표시할 메시지
        status_code: HTTP 상태 코드 (전송 오류면 None)
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationRequiredError(ApiError):
    """세션 없이 인증이 필요한 엔드포인트를 호출한 경우"""

    def __init__(self, message: str = "로그인이 필요합니다"):
        super().__init__(message, status_code=401)


class SaveInProgressError(GachaAdminError):
    """같은 편집 세션에서 저장 요청이 이미 진행 중인 경우"""
