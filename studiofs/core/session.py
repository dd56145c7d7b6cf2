"""
Editor Session Module

Tracks the views the calling layer has open: tabs, the active tab and
which tabs hold unsaved edits. The session is owned by the caller and
handed to the workspace by reference.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Optional, List, Iterable


@dataclass
class Tab:
    """An open view onto a file node."""
    id: str
    title: str
    is_dirty: bool = False


class Session:
    """
    Open tabs and dirty flags.

    Example:
        >>> session = Session()
        >>> session.open_tab('root_README.md', 'README.md')
        >>> session.active_tab_id
        'root_README.md'
    """

    def __init__(self):
        self._tabs: List[Tab] = []
        self._active_tab_id: Optional[str] = None

    @property
    def tabs(self) -> List[Tab]:
        return list(self._tabs)

    @property
    def active_tab_id(self) -> Optional[str]:
        return self._active_tab_id

    @property
    def active_tab(self) -> Optional[Tab]:
        if self._active_tab_id is None:
            return None
        return self.get_tab(self._active_tab_id)

    def get_tab(self, node_id: str) -> Optional[Tab]:
        for tab in self._tabs:
            if tab.id == node_id:
                return tab
        return None

    def is_open(self, node_id: str) -> bool:
        return self.get_tab(node_id) is not None

    def open_tab(self, node_id: str, title: str) -> Tab:
        """Open a tab for ``node_id`` (or reuse it) and make it active."""
        tab = self.get_tab(node_id)
        if tab is None:
            tab = Tab(id=node_id, title=title)
            self._tabs.append(tab)
        self._active_tab_id = node_id
        return tab

    def activate(self, node_id: str) -> bool:
        if self.get_tab(node_id) is None:
            return False
        self._active_tab_id = node_id
        return True

    def close_tab(self, node_id: str) -> bool:
        """
        Close a tab.

        If it was active, the last remaining tab becomes active.

        Returns:
            True if a tab was closed
        """
        tab = self.get_tab(node_id)
        if tab is None:
            return False

        self._tabs.remove(tab)
        if self._active_tab_id == node_id:
            self._active_tab_id = self._tabs[-1].id if self._tabs else None
        return True

    def mark_dirty(self, node_id: str, dirty: bool = True) -> bool:
        tab = self.get_tab(node_id)
        if tab is None:
            return False
        tab.is_dirty = dirty
        return True

    def is_dirty(self, node_id: str) -> bool:
        tab = self.get_tab(node_id)
        return tab is not None and tab.is_dirty

    def evict(self, node_ids: Iterable[str]) -> List[str]:
        """
        Close every tab whose node was removed.

        Returns:
            The ids of the closed tabs
        """
        removed = set(node_ids)
        closed = [tab.id for tab in self._tabs if tab.id in removed]
        for node_id in closed:
            self.close_tab(node_id)
        return closed

    def clear(self) -> None:
        self._tabs.clear()
        self._active_tab_id = None
