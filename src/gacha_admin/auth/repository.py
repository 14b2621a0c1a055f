"""
관리자 계정 저장소

Edge Function을 통해 관리자 계정 목록을 조회합니다.
"""

from dataclasses import dataclass
from typing import List, Optional

from gacha_admin.api.client import EdgeFunctionClient, parsing_response
from gacha_admin.auth.models import AdminIdentity
from gacha_admin.log.logger import get_logger


@dataclass
class AdminUserFilters:
    """
    관리자 목록 필터

    "all" 또는 None이면 해당 조건을 적용하지 않습니다.
    """
    approval_status: Optional[str] = None
    status: Optional[str] = None
    role: Optional[str] = None
    search: Optional[str] = None

    def to_payload(self) -> dict:
        return {key: value for key, value in self.__dict__.items() if value is not None}


class AdminUserRepository:
    """관리자 계정 저장소"""

    def __init__(self, client: EdgeFunctionClient):
        """
        Args:
            client: Edge Function 클라이언트
        """
        self.logger = get_logger('AdminUserRepository')
        self.client = client

    async def list_admin_users(self, filters: Optional[AdminUserFilters] = None) -> List[AdminIdentity]:
        """
        관리자 계정 목록 조회 (super_admin 전용)

        Args:
            filters: 조회 조건

        Returns:
            AdminIdentity 리스트
        """
        data = await self.client.request(
            "/admin-users-get-all",
            method="POST",
            json={'filters': (filters or AdminUserFilters()).to_payload()}
        )
        with parsing_response("/admin-users-get-all"):
            users = [AdminIdentity.from_dict(item) for item in data or []]
        self.logger.debug(f"Loaded {len(users)} admin users")
        return users
