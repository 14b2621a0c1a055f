"""
인증 관련 데이터 모델

관리자 계정과 세션을 위한 모델입니다.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class AdminRole(Enum):
    """관리자 역할"""
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    OWNER = "owner"


class AccountStatus(Enum):
    """계정 상태"""
    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


class ApprovalStatus(Enum):
    """가입 승인 상태"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def _parse_datetime(value) -> Optional[datetime]:
    if value and isinstance(value, str):
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    return value


@dataclass
class AdminIdentity:
    """
    관리자 계정 데이터 클래스

    Attributes:
        id: 관리자 고유 ID (UUID)
        email: 로그인 이메일
        role: 관리자 역할
        full_name: 표시 이름
        status: 계정 상태
        approval_status: 가입 승인 상태
        last_login_at: 마지막 로그인 시각
    """
    id: str
    email: str
    role: AdminRole = AdminRole.ADMIN
    full_name: Optional[str] = None
    status: AccountStatus = AccountStatus.ACTIVE
    approval_status: ApprovalStatus = ApprovalStatus.APPROVED
    last_login_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    def to_dict(self) -> dict:
        """딕셔너리로 변환"""
        return {
            'id': self.id,
            'email': self.email,
            'full_name': self.full_name,
            'role': self.role.value,
            'status': self.status.value,
            'approval_status': self.approval_status.value,
            'last_login_at': self.last_login_at.isoformat() if self.last_login_at else None
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'AdminIdentity':
        """딕셔너리로부터 생성"""
        role = data.get('role', AdminRole.ADMIN.value)
        status = data.get('status', AccountStatus.ACTIVE.value)
        approval_status = data.get('approval_status', ApprovalStatus.APPROVED.value)
        return cls(
            id=data['id'],
            email=data.get('email', ''),
            full_name=data.get('full_name'),
            role=AdminRole(role) if isinstance(role, str) else role,
            status=AccountStatus(status) if isinstance(status, str) else status,
            approval_status=(
                ApprovalStatus(approval_status) if isinstance(approval_status, str) else approval_status
            ),
            last_login_at=_parse_datetime(data.get('last_login_at'))
        )


def is_unrestricted(identity: Optional[AdminIdentity]) -> bool:
    """
    권한 테이블의 제약을 받지 않는 계정인지 확인

    super_admin 우회 규칙은 이 함수 한 곳에서만 정의합니다.

    Args:
        identity: 현재 관리자 (없으면 None)

    Returns:
        super_admin이면 True
    """
    return identity is not None and identity.role == AdminRole.SUPER_ADMIN


@dataclass
class AuthSession:
    """
    로그인 세션

    Attributes:
        access_token: Edge Function 호출에 사용하는 Bearer 토큰
        identity: 로그인한 관리자
        refresh_token: 세션 갱신 토큰
    """
    access_token: str
    identity: AdminIdentity
    refresh_token: Optional[str] = None
