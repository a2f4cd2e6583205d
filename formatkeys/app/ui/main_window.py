from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox

from formatkeys.app import config
from formatkeys.core.commands import FormatHotkeys

from .markdown_editor import MarkdownEditor


logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, hotkeys: Optional[dict[str, str]] = None) -> None:
        super().__init__()
        self.setWindowTitle("formatkeys")
        self.editor = MarkdownEditor(self)
        self.editor.set_font_point_size(config.load_font_point_size())
        self.setCentralWidget(self.editor)
        self._current_path: Optional[Path] = None
        self.format_actions: dict[str, QAction] = {}

        self.plugin = FormatHotkeys(self._active_editor, hotkeys)
        self.plugin.start()
        self._build_menus()
        self.statusBar().showMessage("Ready")

    def _active_editor(self) -> Optional[MarkdownEditor]:
        if self.editor.isReadOnly():
            return None
        return self.editor

    def _build_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        open_action = QAction("&Open…", self)
        open_action.setShortcut(QKeySequence.Open)
        open_action.triggered.connect(lambda checked=False: self._prompt_open())
        save_action = QAction("&Save", self)
        save_action.setShortcut(QKeySequence.Save)
        save_action.triggered.connect(lambda checked=False: self.save_file())
        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(open_action)
        file_menu.addAction(save_action)
        file_menu.addSeparator()
        file_menu.addAction(quit_action)

        view_menu = self.menuBar().addMenu("&View")
        zoom_in_action = QAction("Zoom &In", self)
        zoom_in_action.setShortcut(QKeySequence.ZoomIn)
        zoom_in_action.triggered.connect(lambda checked=False: self.change_font_size(1))
        zoom_out_action = QAction("Zoom &Out", self)
        zoom_out_action.setShortcut(QKeySequence.ZoomOut)
        zoom_out_action.triggered.connect(lambda checked=False: self.change_font_size(-1))
        view_menu.addAction(zoom_in_action)
        view_menu.addAction(zoom_out_action)

        format_menu = self.menuBar().addMenu("F&ormat")
        for spec in self.plugin.commands():
            action = QAction(spec.name, self)
            if spec.hotkey:
                action.setShortcut(QKeySequence(spec.hotkey))
            action.triggered.connect(lambda checked=False, cid=spec.id: self.run_command(cid))
            format_menu.addAction(action)
            self.format_actions[spec.id] = action
            if spec.id in ("remove-formatting", "apply-heading-6"):
                format_menu.addSeparator()

    def run_command(self, command_id: str) -> None:
        if self.plugin.run(command_id):
            self.statusBar().showMessage(self.plugin.command(command_id).name, 1500)

    def change_font_size(self, delta: int) -> int:
        """Grow or shrink the editor font and remember the size."""
        size = max(6, self.editor.font().pointSize() + delta)
        self.editor.set_font_point_size(size)
        config.save_font_point_size(size)
        return size

    def open_file(self, path: str | Path) -> bool:
        target = Path(path)
        try:
            content = target.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to open %s: %s", target, exc)
            QMessageBox.warning(self, "Open failed", f"Could not open {target}:\n{exc}")
            return False
        self.editor.set_markdown(content)
        self._current_path = target
        self.setWindowTitle(f"{target.name} - formatkeys")
        config.save_last_file(str(target))
        logger.info("Opened %s", target)
        return True

    def save_file(self) -> bool:
        if self._current_path is None:
            path, _ = QFileDialog.getSaveFileName(self, "Save Markdown", "", "Markdown (*.md);;All files (*)")
            if not path:
                return False
            self._current_path = Path(path)
        try:
            self._current_path.write_text(self.editor.to_markdown(), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to save %s: %s", self._current_path, exc)
            QMessageBox.warning(self, "Save failed", f"Could not save {self._current_path}:\n{exc}")
            return False
        self.statusBar().showMessage(f"Saved {self._current_path}", 2000)
        return True

    def _prompt_open(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open Markdown", "", "Markdown (*.md *.txt);;All files (*)")
        if path:
            self.open_file(path)

    def closeEvent(self, event):  # type: ignore[override]
        self.plugin.stop()
        super().closeEvent(event)
