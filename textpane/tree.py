"""Arena of views and groups.

Nodes live in a single list and refer to each other by index: every node
knows its parent index and the ordered indices of its children.  Child
order is draw order, so the last child is on top.  Reordering a group,
for example to cycle focus, rotates its child index list.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from .errors import NotFound, TextPaneError
from .view import View

logger = logging.getLogger(__name__)

ROOT = 0


class NodeKind(Enum):
    LEAF = "leaf"
    GROUP = "group"


@dataclass
class Node:
    name: str
    kind: NodeKind
    x0: int = 0
    y0: int = 0
    x1: int = 0
    y1: int = 0
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)
    view: Optional[View] = None


def _check_geometry(name: str, x0: int, y0: int, x1: int, y1: int):
    if not name:
        raise TextPaneError("invalid name")
    if x0 >= x1 or y0 >= y1:
        raise TextPaneError(f"invalid dimensions for {name!r}: ({x0}, {y0}, {x1}, {y1})")


class ViewTree:
    """Named views arranged in nested groups."""

    def __init__(self):
        self._nodes: list[Optional[Node]] = [Node("", NodeKind.GROUP)]
        self._index: dict[str, int] = {"": ROOT}
        # Slots of deleted views, reused before the arena grows
        self._free: list[int] = []
        self.current: Optional[View] = None

    def _lookup(self, name: str, kind: NodeKind) -> int:
        index = self._index.get(name)
        if index is None or self._nodes[index].kind is not kind:
            raise NotFound(name, "view" if kind is NodeKind.LEAF else "group")
        return index

    def _attach(self, node: Node, parent: str) -> int:
        parent_index = self._lookup(parent, NodeKind.GROUP)
        node.parent = parent_index
        if self._free:
            index = self._free.pop()
            self._nodes[index] = node
        else:
            self._nodes.append(node)
            index = len(self._nodes) - 1
        self._nodes[parent_index].children.append(index)
        self._index[node.name] = index
        return index

    def add_group(self, name: str, parent: str, x0: int, y0: int, x1: int, y1: int) -> bool:
        """Create a group, or update its geometry if it exists.

        Returns:
            True if the group was created
        """
        _check_geometry(name, x0, y0, x1, y1)
        if name in self._index:
            node = self._nodes[self._lookup(name, NodeKind.GROUP)]
            node.x0, node.y0, node.x1, node.y1 = x0, y0, x1, y1
            return False
        self._attach(Node(name, NodeKind.GROUP, x0, y0, x1, y1), parent)
        logger.debug("added group %r under %r", name, parent)
        return True

    def set_view(self, name: str, parent: str, x0: int, y0: int, x1: int, y1: int,
                 **options) -> View:
        """Create a view under parent, or move/resize the existing one."""
        _check_geometry(name, x0, y0, x1, y1)
        if name in self._index:
            node = self._nodes[self._lookup(name, NodeKind.LEAF)]
            node.x0, node.y0, node.x1, node.y1 = x0, y0, x1, y1
            node.view.resize(x0, y0, x1, y1)
            return node.view
        view = View(name, x0, y0, x1, y1, **options)
        self._attach(Node(name, NodeKind.LEAF, x0, y0, x1, y1, view=view), parent)
        logger.debug("added view %r under %r", name, parent)
        return view

    def view(self, name: str) -> View:
        return self._nodes[self._lookup(name, NodeKind.LEAF)].view

    def group(self, name: str) -> Node:
        return self._nodes[self._lookup(name, NodeKind.GROUP)]

    def has_view(self, name: str) -> bool:
        index = self._index.get(name)
        return index is not None and self._nodes[index].kind is NodeKind.LEAF

    def delete_view(self, name: str):
        index = self._lookup(name, NodeKind.LEAF)
        node = self._nodes[index]
        self._nodes[node.parent].children.remove(index)
        self._nodes[index] = None
        self._free.append(index)
        del self._index[name]
        if self.current is node.view:
            self.current = None
        logger.debug("deleted view %r", name)

    def set_current_view(self, name: str) -> View:
        self.current = self.view(name)
        return self.current

    def set_view_on_top(self, name: str) -> View:
        """Move the view, and each group containing it, last in draw order."""
        index = self._lookup(name, NodeKind.LEAF)
        child = index
        parent = self._nodes[index].parent
        while parent is not None:
            siblings = self._nodes[parent].children
            siblings.remove(child)
            siblings.append(child)
            child, parent = parent, self._nodes[parent].parent
        return self._nodes[index].view

    def _last_view(self, group: Node) -> Optional[View]:
        for index in reversed(group.children):
            node = self._nodes[index]
            if node.kind is NodeKind.LEAF:
                return node.view
        return None

    def round_robin_forward(self, group: str = "") -> Optional[View]:
        """Rotate the group's children left; returns the view now on top."""
        node = self.group(group)
        if len(node.children) <= 1:
            return None
        node.children.append(node.children.pop(0))
        return self._last_view(node)

    def round_robin_backward(self, group: str = "") -> Optional[View]:
        """Rotate the group's children right; returns the view now on top."""
        node = self.group(group)
        if len(node.children) <= 1:
            return None
        node.children.insert(0, node.children.pop())
        return self._last_view(node)

    def _walk(self, index: int) -> Iterator[View]:
        node = self._nodes[index]
        if node.kind is NodeKind.LEAF:
            yield node.view
            return
        for child in node.children:
            yield from self._walk(child)

    def views(self, group: str = "") -> Iterator[View]:
        """Views under group in draw order, bottom first."""
        return self._walk(self._lookup(group, NodeKind.GROUP))

    def view_by_position(self, x: int, y: int) -> View:
        """Topmost visible view whose interior contains screen point (x, y)."""
        for view in reversed(list(self.views())):
            if view.hidden:
                continue
            if view.x0 < x < view.x1 and view.y0 < y < view.y1:
                return view
        raise NotFound(f"({x}, {y})")
