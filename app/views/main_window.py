"""ReviewWindow: the single window of the photo culler.

The window only renders what the view-model reports. Every handler forwards
the user intent to `ReviewVM`, shows an error dialog for failed outcomes and
re-renders from the fresh view state.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.review_vm import ReviewVM
from app.views.components.menu_controller import MenuController
from app.views.preview_pane import PreviewPane
from core.services.interfaces import ReviewOutcome
from infrastructure.logging import open_directory_in_explorer, open_latest_log, open_log_directory


class ReviewWindow(QMainWindow):
    """Main window: folder picker, preview and keep/reject/undo controls."""

    def __init__(
        self,
        vm: ReviewVM,
        image_service: Any | None = None,
        settings: Any | None = None,
        log_dir: str | None = None,
    ) -> None:
        """Initialize the window.

        Args:
            vm: ViewModel driving the review session
            image_service: Service used to load previews
            settings: Settings instance for window size
            log_dir: Directory the Log menu opens
        """
        super().__init__()
        self._vm = vm
        self._img = image_service
        self._settings = settings
        self._log_dir = log_dir

        self.menu_controller = MenuController(self)
        self._setup_ui()
        self._connect_signals()
        self._setup_window_properties()
        self.refresh_view()

    def _setup_ui(self) -> None:
        """Setup the main UI components and layout."""
        self.setWindowTitle("Photo Culler")

        central = QWidget(self)
        root = QVBoxLayout(central)

        header = QHBoxLayout()
        self.select_button = QPushButton("Select Folder…")
        self.folder_label = QLabel()
        self.folder_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        header.addWidget(self.select_button)
        header.addWidget(self.folder_label, 1)
        root.addLayout(header)

        self.reject_dir_label = QLabel()
        root.addWidget(self.reject_dir_label)

        self.preview = PreviewPane(central, self._img)
        root.addWidget(self.preview, 1)

        footer = QHBoxLayout()
        self.file_name_label = QLabel()
        self.status_label = QLabel()
        self.keep_button = QPushButton("Keep (K)")
        self.reject_button = QPushButton("Reject (D)")
        self.undo_button = QPushButton("Undo (U)")
        footer.addWidget(self.file_name_label, 1)
        footer.addWidget(self.status_label)
        for button in (self.keep_button, self.reject_button, self.undo_button):
            # Keys go to the menu shortcuts, not to a focused button
            button.setFocusPolicy(Qt.NoFocus)
            footer.addWidget(button)
        root.addLayout(footer)

        self.setCentralWidget(central)
        self.menu_controller.setup_menus()

    def _connect_signals(self) -> None:
        """Connect all signal/slot relationships."""
        self.menu_controller.connect_actions(
            {
                "open_folder": self.on_select_folder,
                "open_reject_dir": self.on_open_reject_dir,
                "keep": self.on_keep,
                "reject": self.on_reject,
                "undo": self.on_undo,
                "open_latest_log": lambda: open_latest_log(self._log_dir),
                "open_log_directory": lambda: open_log_directory(self._log_dir),
                "exit": self.close,
            }
        )
        self.select_button.clicked.connect(self.on_select_folder)
        self.keep_button.clicked.connect(self.on_keep)
        self.reject_button.clicked.connect(self.on_reject)
        self.undo_button.clicked.connect(self.on_undo)

    def _setup_window_properties(self) -> None:
        """Setup window size and status bar."""
        width, height = 1200, 800
        if self._settings is not None:
            try:
                width = int(self._settings.get("window.width", width) or width)
                height = int(self._settings.get("window.height", height) or height)
            except (ValueError, TypeError):
                logger.warning("Invalid window size in settings, using defaults")
        self.resize(width, height)
        self.statusBar().showMessage("Ready", 3000)

    # Action handlers

    def on_select_folder(self) -> None:
        """Ask for a folder and start reviewing it."""
        folder = QFileDialog.getExistingDirectory(
            self, "Select a photo folder", self._vm.last_folder or ""
        )
        if not folder:
            return
        self.open_folder(folder)

    def open_folder(self, folder: str) -> None:
        outcome = self._vm.open_folder(folder)
        self._handle(outcome)
        if outcome.ok:
            self.statusBar().showMessage(f"Loaded {outcome.view.total_count} images", 3000)

    def on_keep(self) -> None:
        self._handle(self._vm.keep())

    def on_reject(self) -> None:
        self._handle(self._vm.reject())

    def on_undo(self) -> None:
        self._handle(self._vm.undo())

    def on_open_reject_dir(self) -> None:
        reject_dir = self._vm.session.reject_dir
        if not reject_dir or not open_directory_in_explorer(reject_dir):
            self.statusBar().showMessage("No rejected files yet", 3000)

    # Rendering

    def _handle(self, outcome: ReviewOutcome) -> None:
        message = self._vm.error_message(outcome)
        if message:
            QMessageBox.critical(self, "Error", message)
        self.refresh_view()

    def refresh_view(self) -> None:
        """Re-render every widget from the current view state."""
        view = self._vm.view
        self.folder_label.setText(self._vm.folder_text)
        self.reject_dir_label.setText(self._vm.reject_dir_text)
        self.file_name_label.setText(view.current_name)
        self.status_label.setText(view.status_text)

        if view.current_path:
            self.preview.show_image(view.current_path)
        else:
            self.preview.clear()
            self.preview.show_message(self._vm.empty_message)

        has_files = not view.is_empty
        self.keep_button.setEnabled(has_files)
        self.reject_button.setEnabled(has_files)
        self.undo_button.setEnabled(view.can_undo)
        self.menu_controller.enable_action("keep", has_files)
        self.menu_controller.enable_action("reject", has_files)
        self.menu_controller.enable_action("undo", view.can_undo)
