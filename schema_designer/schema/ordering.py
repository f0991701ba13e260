"""Dependency ordering of tables by their foreign keys."""

from typing import Dict, List, Sequence

from ..errors import CycleError
from .models import Table


class DependencyOrderer:
    """Orders tables so every table follows the tables it references.

    The graph has an edge A -> B when table A has a foreign key into table
    B. Tables are visited depth-first in authoring order and emitted in
    postorder, so tables without a constraint between them keep their
    authoring order. Self references do not constrain the order.
    """

    def __init__(self, tables: Sequence[Table], case_sensitive: bool = True):
        self.tables = list(tables)
        self.case_sensitive = case_sensitive
        self.index: Dict[str, int] = {}
        for position, table in enumerate(self.tables):
            self.index.setdefault(self._key(table.name), position)
        self.edges = self._build_edges()

    def _key(self, name: str) -> str:
        return name if self.case_sensitive else name.lower()

    def _build_edges(self) -> List[List[int]]:
        edges: List[List[int]] = []
        for position, table in enumerate(self.tables):
            targets: List[int] = []
            for name in table.referenced_tables():
                target = self.index.get(self._key(name))
                # Unknown targets are the validator's concern
                if target is None or target == position or target in targets:
                    continue
                targets.append(target)
            edges.append(targets)
        return edges

    def order(self) -> List[Table]:
        """Compute the emission order.

        Returns:
            New list of tables in dependency order

        Raises:
            CycleError: If foreign keys form a cycle across two or more tables
        """
        unvisited, in_progress, done = 0, 1, 2
        state = [unvisited] * len(self.tables)
        result: List[Table] = []

        for root in range(len(self.tables)):
            if state[root] != unvisited:
                continue
            state[root] = in_progress
            path = [root]
            stack = [iter(self.edges[root])]

            while stack:
                node = path[-1]
                advanced = False
                for target in stack[-1]:
                    if state[target] == in_progress:
                        cycle = path[path.index(target):]
                        raise CycleError([self.tables[i].name for i in cycle])
                    if state[target] == unvisited:
                        state[target] = in_progress
                        path.append(target)
                        stack.append(iter(self.edges[target]))
                        advanced = True
                        break
                if not advanced:
                    stack.pop()
                    path.pop()
                    state[node] = done
                    result.append(self.tables[node])

        return result


def order_tables(tables: Sequence[Table], case_sensitive: bool = True) -> List[Table]:
    """Order tables so referenced tables come before referencing ones."""
    return DependencyOrderer(tables, case_sensitive=case_sensitive).order()
