"""
Zoom Join - macOS menu bar application

Keeps a list of Zoom meetings in the menu bar and joins them with one click.
"""
from gui import main


if __name__ == "__main__":
    main()
