"""
Zoom Join GUI package.

Provides the PyQt6 menu bar interface for Zoom Join, split into focused
modules by responsibility.
"""


def main():
    """Convenience entry point; delegates to gui.menubar.main()."""
    from gui.menubar import main as _main
    _main()


__all__ = ["main"]
