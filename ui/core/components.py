from __future__ import annotations

from PyQt6.QtCore import QEvent, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QMouseEvent
from PyQt6.QtWidgets import (
    QCheckBox,
    QFrame,
    QGraphicsDropShadowEffect,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .tokens import DesignTokens


class _StyledMixin:
    """Utility mixin to refresh style after changing Qt properties."""

    def _refresh_style(self) -> None:
        self.style().unpolish(self)
        self.style().polish(self)
        self.update()


class _FlatButton(QPushButton, _StyledMixin):
    variant = ""

    def __init__(self, text: str, tokens: DesignTokens, parent: QWidget | None = None) -> None:
        super().__init__(text, parent)
        self._tokens = tokens
        self._opacity = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self._opacity)
        self.setProperty("variant", self.variant)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self._sync_enabled_chrome()
        self._refresh_style()

    @property
    def opacity(self) -> float:
        return self._opacity.opacity()

    def changeEvent(self, event: QEvent) -> None:  # type: ignore[override]
        if event.type() == QEvent.Type.EnabledChange:
            self._sync_enabled_chrome()
        super().changeEvent(event)

    def _sync_enabled_chrome(self) -> None:
        self._opacity.setOpacity(1.0 if self.isEnabled() else self._tokens.disabled_opacity)


class PrimaryButton(_FlatButton):
    variant = "primary"


class SecondaryButton(_FlatButton):
    variant = "secondary"


class FlatCard(QFrame, _StyledMixin):
    def __init__(self, tokens: DesignTokens, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setProperty("component", "card")
        self.setFrameShape(QFrame.Shape.NoFrame)
        shadow = QGraphicsDropShadowEffect(self)
        shadow_color = QColor(0, 0, 0)
        shadow_color.setAlphaF(tokens.shadow_opacity)
        shadow.setColor(shadow_color)
        shadow.setBlurRadius(tokens.shadow_radius)
        shadow.setOffset(tokens.shadow_offset_x, tokens.shadow_offset_y)
        self.setGraphicsEffect(shadow)
        self._refresh_style()


class FlatListRow(QFrame, _StyledMixin):
    clicked = pyqtSignal()

    def __init__(self, text: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setProperty("component", "list-row")
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._label = QLabel(text, self)
        self._label.setObjectName("list-row-title")
        layout.addWidget(self._label)
        layout.addStretch(1)
        chevron = QLabel("›", self)
        chevron.setObjectName("list-row-chevron")
        layout.addWidget(chevron)
        self._refresh_style()

    def text(self) -> str:
        return self._label.text()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
            event.accept()
            return
        super().mouseReleaseEvent(event)


class FlatSectionHeader(QWidget):
    def __init__(self, title: str, subtitle: str | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 8, 16, 8)
        layout.setSpacing(4)
        self._title = QLabel(title, self)
        self._title.setObjectName("section-header-title")
        layout.addWidget(self._title)
        self._subtitle = QLabel(subtitle or "", self)
        self._subtitle.setObjectName("section-header-subtitle")
        self._subtitle.setWordWrap(True)
        self._subtitle.setVisible(bool(subtitle))
        layout.addWidget(self._subtitle)

    def title(self) -> str:
        return self._title.text()

    def subtitle(self) -> str | None:
        return self._subtitle.text() or None

    def set_subtitle(self, subtitle: str | None) -> None:
        self._subtitle.setText(subtitle or "")
        self._subtitle.setVisible(bool(subtitle))


class FlatToggle(QFrame, _StyledMixin):
    """Title/subtitle row with a trailing switch."""

    toggled = pyqtSignal(bool)

    def __init__(
        self,
        title: str,
        subtitle: str | None = None,
        *,
        checked: bool = False,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setProperty("component", "toggle-row")
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        text_column = QVBoxLayout()
        text_column.setSpacing(2)
        title_label = QLabel(title, self)
        title_label.setObjectName("toggle-title")
        text_column.addWidget(title_label)
        if subtitle:
            subtitle_label = QLabel(subtitle, self)
            subtitle_label.setObjectName("toggle-subtitle")
            text_column.addWidget(subtitle_label)
        layout.addLayout(text_column)
        layout.addStretch(1)

        self._switch = QCheckBox(self)
        self._switch.setObjectName("toggle-switch")
        self._switch.setChecked(checked)
        self._switch.toggled.connect(self.toggled.emit)
        layout.addWidget(self._switch)
        self._refresh_style()

    def is_checked(self) -> bool:
        return self._switch.isChecked()

    def set_checked(self, checked: bool) -> None:
        """Update the switch without re-emitting :attr:`toggled`."""
        blocked = self._switch.blockSignals(True)
        self._switch.setChecked(checked)
        self._switch.blockSignals(blocked)

    def click(self) -> None:
        self._switch.click()


class FlatTextField(QLineEdit, _StyledMixin):
    def __init__(self, placeholder: str = "", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setProperty("component", "text-field")
        if placeholder:
            self.setPlaceholderText(placeholder)
        self._refresh_style()
