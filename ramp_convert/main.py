# Application entry point
import sys
import os
from PyQt6.QtWidgets import QApplication

# Ensure the package structure is recognized when running main.py directly
script_dir = os.path.dirname(os.path.abspath(__file__))
package_dir = os.path.dirname(script_dir) # Go up one level from ramp_convert/
if package_dir not in sys.path:
    sys.path.insert(0, package_dir)

from ramp_convert.config import settings
from ramp_convert.ui.main_window import MainWindow


def main():
    """Main function to run the application."""
    app = QApplication(sys.argv)
    app.setApplicationName(settings.UI_DEFAULTS.get("window_title", "Ramp Convert"))

    main_window = MainWindow()
    # An optional folder argument opens it straight away
    if len(sys.argv) > 1 and os.path.isdir(sys.argv[1]):
        main_window.load_folder(sys.argv[1])
    main_window.show()

    sys.exit(app.exec())

if __name__ == "__main__":
    main()
