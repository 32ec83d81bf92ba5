"""
Main Application Window
=======================
The top-level window: the animated canvas fills it, and the prompt bar
floats over the strip of canvas reserved for UI chrome.

Why is this file needed?
------------------------
1. Layout: It places the prompt input over the canvas.
2. Routing: It connects Enter / the Generate button to the controller.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import QHBoxLayout, QLineEdit, QMainWindow, QPushButton, QVBoxLayout, QWidget

from driftcanvas.controller.canvas import CanvasController
from driftcanvas.view.canvas_widget import CanvasWidget

VISIBLE_APP_NAME = "Drift Canvas"

PROMPT_BAR_STYLE = """
    QLineEdit {
        background: #ffffff; border: 2px solid #000; border-radius: 8px;
        padding: 6px 10px; font-size: 14px;
    }
    QPushButton {
        background: #d5c4ff; border: 2px solid #000; border-radius: 8px;
        padding: 6px 16px; font-weight: bold;
    }
    QPushButton:hover { background: #ffd6f5; }
"""


class PromptBar(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.input = QLineEdit()
        self.input.setPlaceholderText("Type a prompt, press Enter (text → image)")
        self.input.setClearButtonEnabled(True)
        layout.addWidget(self.input, 1)

        self.btn_generate = QPushButton("Generate")
        self.btn_generate.setCursor(Qt.CursorShape.PointingHandCursor)
        layout.addWidget(self.btn_generate)

        self.setStyleSheet(PROMPT_BAR_STYLE)
        self.setMaximumWidth(720)

    def text(self) -> str:
        return self.input.text()


class MainWindow(QMainWindow):
    def __init__(self, controller: CanvasController) -> None:
        super().__init__()
        self.controller = controller
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1280, 800)

        # --- CANVAS ---
        self.canvas = CanvasWidget(controller)
        self.setCentralWidget(self.canvas)

        # --- PROMPT BAR (inside the reserved top padding) ---
        overlay = QVBoxLayout(self.canvas)
        overlay.setContentsMargins(16, 16, 16, 0)
        self.prompt_bar = PromptBar()
        overlay.addWidget(self.prompt_bar, 0, Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignHCenter)
        overlay.addStretch()

        # --- SIGNAL CONNECTIONS ---
        self.prompt_bar.input.returnPressed.connect(self.on_submit)
        self.prompt_bar.btn_generate.clicked.connect(self.on_submit)
        controller.state.status_changed.connect(lambda _text: self.canvas.update())

        self.sc_close = QShortcut(QKeySequence(Qt.Key.Key_Escape), self)
        self.sc_close.activated.connect(self.close)

        self.canvas.start()

    def on_submit(self) -> None:
        self.controller.submit_prompt(self.prompt_bar.text())

    def closeEvent(self, event: QCloseEvent) -> None:
        self.canvas.stop()
        super().closeEvent(event)
