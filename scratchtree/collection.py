"""Grouping of project trees by owner id."""

from typing import Dict, Iterator, List, Tuple

from .tree import Tree


class ProjectCollection:
    """Owner id -> trees in discovery order. Owners iterate in ascending order."""

    def __init__(self) -> None:
        self._projects: Dict[int, List[Tree]] = {}

    def add(self, owner_id: int, tree: Tree) -> None:
        self._projects.setdefault(owner_id, []).append(tree)

    def owners(self) -> List[int]:
        return sorted(self._projects)

    def projects_for(self, owner_id: int) -> List[Tree]:
        return list(self._projects.get(owner_id, []))

    def items(self) -> Iterator[Tuple[int, List[Tree]]]:
        for owner_id in self.owners():
            yield owner_id, list(self._projects[owner_id])

    @property
    def project_count(self) -> int:
        return sum(len(trees) for trees in self._projects.values())

    def __contains__(self, owner_id: object) -> bool:
        return owner_id in self._projects

    def __len__(self) -> int:
        return len(self._projects)
