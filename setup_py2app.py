"""
py2app setup script for Zoom Join

To build the application:
    python setup_py2app.py py2app

To clean build artifacts:
    python setup_py2app.py clean

The built application will be in the 'dist' folder.
"""
import sys
import shutil
from pathlib import Path

# Handle clean command before importing setuptools
if len(sys.argv) > 1 and sys.argv[1] == 'clean':
    root = Path(__file__).parent

    for pattern in ['build', 'dist', '.eggs', '*.egg-info']:
        for path in root.glob(pattern):
            if path.is_dir():
                print(f"Removing directory: {path}")
                shutil.rmtree(path, ignore_errors=True)

    for path in root.glob("**/__pycache__"):
        if path.is_dir():
            print(f"Removing directory: {path}")
            shutil.rmtree(path, ignore_errors=True)

    print("Clean complete.")
    sys.exit(0)

from setuptools import setup
from version import __version__

APP_NAME = 'Zoom Join'
APP_BUNDLE_ID = 'com.github.deryni.zoomjoin'
APP_VERSION = __version__

# Main script
APP_SCRIPT = 'gui_app.py'

# Bundled default configuration, copied to App Support on first run
DATA_FILES = [
    'config.json',
]

OPTIONS = {
    'py2app': {
        'argv_emulation': False,
        'includes': [
            'zoom_meetings',
            'meeting_registry',
            'meeting_store',
            'meeting_launcher',
            'version',
            'gui',
            'gui.constants',
            'gui.settings',
            'gui.dialogs',
            'gui.icons',
            'gui.picker',
            'gui.projector',
            'gui.prompt_flow',
            'gui.menubar',
        ],
        'packages': [
            'PyQt6',
            'psutil',
            'gui',
        ],
        'excludes': [
            'tkinter',
            'matplotlib',
            'numpy',
            'scipy',
            'PIL',
            'pip',
            'setuptools',
            'pkg_resources',
            'wheel',
            '_distutils_hack',
        ],
        'resources': DATA_FILES,
        'plist': {
            'CFBundleName': APP_NAME,
            'CFBundleDisplayName': APP_NAME,
            'CFBundleGetInfoString': f'{APP_NAME} {APP_VERSION}',
            'CFBundleIdentifier': APP_BUNDLE_ID,
            'CFBundleVersion': APP_VERSION,
            'CFBundleShortVersionString': APP_VERSION,
            'NSPrincipalClass': 'NSApplication',
            'NSRequiresAquaSystemAppearance': False,
            'LSMinimumSystemVersion': '12.0',
            'NSHighResolutionCapable': True,
            # Menu bar only: no Dock icon, no main menu
            'LSUIElement': True,
            'LSApplicationCategoryType': 'public.app-category.productivity',
            'LSEnvironment': {
                'PATH': '/usr/bin:/bin:/usr/sbin:/sbin:/usr/local/bin'
            }
        },
    }
}

setup(
    name=APP_NAME,
    version=APP_VERSION,
    description='Join Zoom meetings from the menu bar',
    app=[APP_SCRIPT],
    data_files=DATA_FILES,
    options=OPTIONS,
)
