"""
메뉴 트리

계층 구조 메뉴를 ID로 색인된 노드 집합과 ID 기반 부모/자식 간선으로 보관합니다.
순회는 명시적 스택으로 수행하므로 깊은 트리에서도 재귀 한도에 걸리지 않습니다.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Set

from gacha_admin.log.logger import get_logger
from gacha_admin.menu.models import MenuEntry

logger = get_logger(__name__)


def _sort_key(entry: MenuEntry, arrival: int) -> tuple:
    # display_order, 생성 순서, 수신 순서
    return (entry.display_order, entry.created_at is None, entry.created_at or "", arrival)


class MenuTree:
    """
    메뉴 트리 스냅샷

    한 번 만들어지면 변경되지 않습니다. 같은 ID가 두 번 나오거나
    부모를 찾을 수 없는 노드는 하위 트리째로 제외됩니다.
    """

    def __init__(self):
        self._entries: Dict[str, MenuEntry] = {}
        self._children: Dict[str, List[str]] = {}
        self._depth: Dict[str, int] = {}
        self._roots: List[str] = []

    @classmethod
    def empty(cls) -> 'MenuTree':
        return cls()

    @classmethod
    def from_nested(cls, menus: Optional[Iterable[dict]]) -> 'MenuTree':
        """
        서비스가 반환한 중첩 메뉴 목록으로 트리 생성

        Args:
            menus: ``[{..., "children": [...]}]`` 형태의 목록.
                children 키가 없는 노드와 빈 children은 동일하게 취급합니다.

        Returns:
            MenuTree
        """
        tree = cls()
        arrival = 0
        order: Dict[str, int] = {}

        # (노드, 상위 ID, 깊이)
        stack = [(node, None, 0) for node in reversed(list(menus or []))]
        while stack:
            node, parent_id, depth = stack.pop()
            entry = MenuEntry.from_dict(node)

            if entry.id in tree._entries:
                logger.warning(f"Menu {entry.id} appears more than once; dropping duplicate subtree")
                continue

            tree._entries[entry.id] = entry
            tree._children[entry.id] = []
            tree._depth[entry.id] = depth
            order[entry.id] = arrival
            arrival += 1

            if parent_id is None:
                tree._roots.append(entry.id)
            else:
                tree._children[parent_id].append(entry.id)

            for child in reversed(node.get('children') or []):
                stack.append((child, entry.id, depth + 1))

        tree._sort(order)
        return tree

    @classmethod
    def from_entries(cls, entries: Iterable[MenuEntry]) -> 'MenuTree':
        """
        parent_id로 연결된 평면 목록으로 트리 생성

        부모가 목록에 없거나 순환에 포함된 노드는 루트에서 도달할 수 없으므로 제외됩니다.

        Args:
            entries: MenuEntry 목록

        Returns:
            MenuTree
        """
        tree = cls()
        by_id: Dict[str, MenuEntry] = {}
        order: Dict[str, int] = {}
        children_by_parent: Dict[Optional[str], List[str]] = {}

        for arrival, entry in enumerate(entries):
            if entry.id in by_id:
                logger.warning(f"Menu {entry.id} appears more than once; keeping the first")
                continue
            by_id[entry.id] = entry
            order[entry.id] = arrival
            children_by_parent.setdefault(entry.parent_id, []).append(entry.id)

        stack = [(menu_id, None, 0) for menu_id in reversed(children_by_parent.get(None, []))]
        while stack:
            menu_id, parent_id, depth = stack.pop()
            if menu_id in tree._entries:
                continue

            tree._entries[menu_id] = by_id[menu_id]
            tree._children[menu_id] = []
            tree._depth[menu_id] = depth
            if parent_id is None:
                tree._roots.append(menu_id)
            else:
                tree._children[parent_id].append(menu_id)

            for child_id in reversed(children_by_parent.get(menu_id, [])):
                stack.append((child_id, menu_id, depth + 1))

        dropped = len(by_id) - len(tree._entries)
        if dropped:
            logger.warning(f"Dropped {dropped} menu(s) with a missing or cyclic parent chain")

        tree._sort(order)
        return tree

    def _sort(self, order: Dict[str, int]) -> None:
        def key(menu_id: str) -> tuple:
            return _sort_key(self._entries[menu_id], order[menu_id])

        self._roots.sort(key=key)
        for child_ids in self._children.values():
            child_ids.sort(key=key)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, menu_id: object) -> bool:
        return menu_id in self._entries

    def __iter__(self) -> Iterator[MenuEntry]:
        return iter(self.flatten())

    @property
    def roots(self) -> List[MenuEntry]:
        return [self._entries[menu_id] for menu_id in self._roots]

    def get(self, menu_id: str) -> Optional[MenuEntry]:
        return self._entries.get(menu_id)

    def children_of(self, menu_id: str) -> List[MenuEntry]:
        return [self._entries[child_id] for child_id in self._children.get(menu_id, [])]

    def has_children(self, menu_id: str) -> bool:
        return bool(self._children.get(menu_id))

    def depth_of(self, menu_id: str) -> int:
        return self._depth.get(menu_id, 0)

    def _walk(self, start_ids: List[str]) -> List[str]:
        """start_ids부터 전위 순회 (부모 먼저, 자식은 정렬 순서대로)"""
        result: List[str] = []
        visited: Set[str] = set()
        stack = list(reversed(start_ids))
        while stack:
            menu_id = stack.pop()
            if menu_id in visited:
                continue
            visited.add(menu_id)
            result.append(menu_id)
            stack.extend(reversed(self._children.get(menu_id, [])))
        return result

    def flatten(self) -> List[MenuEntry]:
        """모든 노드를 전위 순회 순서의 1차원 목록으로 반환"""
        return [self._entries[menu_id] for menu_id in self._walk(self._roots)]

    def descendants(self, menu_id: str) -> List[str]:
        """
        노드 자신과 모든 하위 노드의 ID (전위 순회 순서)

        Args:
            menu_id: 시작 메뉴 ID

        Returns:
            ID 목록 (알 수 없는 ID면 빈 목록)
        """
        if menu_id not in self._entries:
            return []
        return self._walk([menu_id])


def flatten(tree: MenuTree) -> List[MenuEntry]:
    """메뉴 트리를 평탄화"""
    return tree.flatten()


def extract_ids(tree: MenuTree) -> Set[str]:
    """트리에 포함된 모든 메뉴 ID"""
    return {entry.id for entry in tree.flatten()}


def find_paths(tree: MenuTree) -> Set[str]:
    """트리에 포함된 모든 라우트 경로 (경로 없는 메뉴는 제외)"""
    return {entry.path for entry in tree.flatten() if entry.path}


def find_codes(tree: MenuTree) -> Set[str]:
    """트리에 포함된 모든 메뉴 코드"""
    return {entry.code for entry in tree.flatten() if entry.code}
