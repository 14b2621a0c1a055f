"""
메뉴 관리 데이터 모델

메뉴 권한 시스템을 위한 모델입니다.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class MenuEntry:
    """
    메뉴 데이터 클래스

    Attributes:
        id: 메뉴 고유 ID (UUID)
        code: 메뉴 코드 (이름이 바뀌어도 유지되는 고유 키)
        name: 메뉴 표시 이름
        description: 메뉴 설명
        parent_id: 상위 메뉴 ID (None이면 최상위)
        path: 라우트 경로 (없으면 그룹 메뉴)
        icon: 메뉴 아이콘
        display_order: 정렬 순서
        is_active: 활성화 여부
        metadata: 추가 정보
    """
    id: str
    code: str
    name: str
    description: Optional[str] = None
    parent_id: Optional[str] = None
    path: Optional[str] = None
    icon: Optional[str] = None
    display_order: int = 0
    is_active: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    def to_dict(self) -> dict:
        """딕셔너리로 변환"""
        return {
            'id': self.id,
            'code': self.code,
            'name': self.name,
            'description': self.description,
            'parent_id': self.parent_id,
            'path': self.path,
            'icon': self.icon,
            'display_order': self.display_order,
            'is_active': self.is_active,
            'metadata': dict(self.metadata),
            'created_at': self.created_at,
            'updated_at': self.updated_at,
            'created_by': self.created_by,
            'updated_by': self.updated_by
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MenuEntry':
        """딕셔너리로부터 생성 (children 키는 무시)"""
        return cls(
            id=data['id'],
            code=data.get('code', ''),
            name=data.get('name', ''),
            description=data.get('description'),
            parent_id=data.get('parent_id'),
            path=data.get('path'),
            icon=data.get('icon'),
            display_order=data.get('display_order') or 0,
            is_active=data.get('is_active', True),
            metadata=data.get('metadata') or {},
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
            created_by=data.get('created_by'),
            updated_by=data.get('updated_by')
        )

    def has_parent(self) -> bool:
        """상위 메뉴 존재 여부"""
        return self.parent_id is not None

    def is_routable(self) -> bool:
        """라우트 경로가 있는 메뉴인지 여부 (없으면 권한 부여 전용 그룹)"""
        return bool(self.path)


@dataclass
class AdminMenuPermission:
    """
    관리자-메뉴 권한 레코드

    Attributes:
        id: 권한 레코드 ID
        admin_id: 관리자 ID
        menu_id: 메뉴 ID
        granted_by: 권한을 부여한 관리자 ID
        granted_at: 부여 시각
    """
    id: str
    admin_id: str
    menu_id: str
    granted_by: Optional[str] = None
    granted_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'AdminMenuPermission':
        """딕셔너리로부터 생성"""
        return cls(
            id=data['id'],
            admin_id=data['admin_id'],
            menu_id=data['menu_id'],
            granted_by=data.get('granted_by'),
            granted_at=data.get('granted_at')
        )


@dataclass
class MenuInput:
    """
    메뉴 생성/수정 요청

    None인 필드는 요청 본문에서 제외됩니다.
    """
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[str] = None
    path: Optional[str] = None
    icon: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_payload(self) -> dict:
        return {key: value for key, value in self.__dict__.items() if value is not None}
