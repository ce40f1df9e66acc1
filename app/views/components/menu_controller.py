"""MenuController: Manages menu creation, shortcuts and action connections."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMenuBar

# Keyboard bindings for the review actions (first entry shown in the menu)
SHORTCUTS: dict[str, list[str]] = {
    "open_folder": ["Ctrl+O"],
    "keep": ["K", "Right", "Space"],
    "reject": ["D", "Delete"],
    "undo": ["U", "Ctrl+Z"],
}


class MenuController:
    """Manages main window menu creation and action connections.

    This class encapsulates all menu-related functionality including:
    - Menu structure creation
    - Keyboard shortcuts for the review actions
    - Action-to-handler connection management
    """

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to create menus for
        """
        self.window = main_window
        self.actions: dict[str, QAction] = {}

    def setup_menus(self) -> dict[str, QAction]:
        """Create all menus and return action references.

        Returns:
            Dictionary mapping action names to QAction instances
        """
        menubar = QMenuBar(self.window)

        file_menu = menubar.addMenu("File")
        self.actions["open_folder"] = file_menu.addAction("Open Folder…")
        self.actions["open_reject_dir"] = file_menu.addAction("Open Rejected Folder")
        file_menu.addSeparator()
        self.actions["exit"] = file_menu.addAction("Exit")

        review_menu = menubar.addMenu("Review")
        self.actions["keep"] = review_menu.addAction("Keep")
        self.actions["reject"] = review_menu.addAction("Reject")
        review_menu.addSeparator()
        self.actions["undo"] = review_menu.addAction("Undo Reject")

        log_menu = menubar.addMenu("Log")
        self.actions["open_latest_log"] = log_menu.addAction("Open Latest Log")
        self.actions["open_log_directory"] = log_menu.addAction("Open Log Directory")

        for name, keys in SHORTCUTS.items():
            self.actions[name].setShortcuts([QKeySequence(k) for k in keys])

        self.window.setMenuBar(menubar)
        return self.actions

    def connect_actions(self, handlers: dict[str, Callable]) -> None:
        """Connect menu actions to their handler methods.

        Args:
            handlers: Dictionary mapping action names to handler callables
        """
        for name, action in self.actions.items():
            handler = handlers.get(name)
            if handler is not None:
                action.triggered.connect(handler)
        if "exit" not in handlers:
            self.actions["exit"].triggered.connect(self.window.close)

    def enable_action(self, name: str, enabled: bool = True) -> None:
        """Enable or disable a specific action.

        Args:
            name: Action name
            enabled: Whether to enable the action
        """
        action = self.actions.get(name)
        if action:
            action.setEnabled(enabled)
