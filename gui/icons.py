"""
Renders Lucide SVG icons as high-DPI QIcons for the menu bar.

https://lucide.dev/icons/

The menu bar icon is drawn in black and flagged as a mask so macOS treats it
as a template image and tints it for light/dark menu bars itself.

Usage
-----
    from gui.icons import IconManager

    tray.setIcon(IconManager.get_icon("video", template=True, size=18))
"""

from __future__ import annotations

from PyQt6.QtCore import QByteArray, QRectF, Qt
from PyQt6.QtGui import QIcon, QPainter, QPixmap
from PyQt6.QtSvg import QSvgRenderer
from PyQt6.QtWidgets import QApplication


_TEMPLATE_COLOUR = "#000000"
_DEFAULT_COLOUR = "#333333"


# ---------------------------------------------------------------------------
# Raw Lucide SVG sources – stroke="currentColor" is replaced at render time
# ---------------------------------------------------------------------------
_SVG_SOURCES: dict[str, str] = {
    "video": (
        '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" '
        'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
        'stroke-linecap="round" stroke-linejoin="round">'
        '<path d="m16 13 5.223 3.482a.5.5 0 0 0 .777-.416V7.87a.5.5 0 0 0-.752-.432L16 10.5"/>'
        '<rect x="2" y="6" width="14" height="12" rx="2"/></svg>'
    ),
}


class IconManager:
    """Render SVG icons as Retina-ready QIcons.

    Rendered icons are cached by ``(name, template, size)``.
    """

    _cache: dict[tuple[str, bool, int], QIcon] = {}

    @classmethod
    def get_icon(cls, name: str, *, template: bool = False, size: int = 24) -> QIcon:
        """Return a QIcon for the named icon.

        Parameters
        ----------
        name:
            Key into the SVG dictionary (e.g. ``"video"``).
        template:
            Render black and mark the icon as a mask (macOS template image).
        size:
            Logical pixel size.  The physical pixmap is scaled by the
            screen's ``devicePixelRatio()``.
        """
        key = (name, template, size)
        if key not in cls._cache:
            cls._cache[key] = cls._render(name, template, size)
        return cls._cache[key]

    @classmethod
    def _render(cls, name: str, template: bool, size: int) -> QIcon:
        colour = _TEMPLATE_COLOUR if template else _DEFAULT_COLOUR
        svg_str = _SVG_SOURCES[name].replace('stroke="currentColor"', f'stroke="{colour}"')

        dpr = 1.0
        app = QApplication.instance()
        if app is not None:
            screen = app.primaryScreen()
            if screen is not None:
                dpr = screen.devicePixelRatio()

        physical = int(size * dpr)

        renderer = QSvgRenderer(QByteArray(svg_str.encode("utf-8")))
        renderer.setAspectRatioMode(Qt.AspectRatioMode.KeepAspectRatio)

        pixmap = QPixmap(physical, physical)
        pixmap.fill(Qt.GlobalColor.transparent)
        pixmap.setDevicePixelRatio(dpr)

        painter = QPainter(pixmap)
        renderer.render(painter, QRectF(0, 0, size, size))
        painter.end()

        icon = QIcon(pixmap)
        if template:
            icon.setIsMask(True)
        return icon
