# Main application window
import os
from PyQt6.QtWidgets import (QMainWindow, QDockWidget, QListWidget, QFileDialog, QMessageBox,
                             QProgressBar)
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtCore import Qt, QThread, pyqtSignal, pyqtSlot

from .asset_browser import AssetBrowserWidget
from .workers import ConversionWorker
from ..config import settings
from ..io import texture_loader
from ..processing.converter import RampToCurveConverter
from ..services.asset_registry import AssetRegistry
from ..services.commands import ContextMenuRegistry, RampConvertExtension
from ..services.conversion_service import ConversionService
from ..utils.errors import format_user_error
from ..utils import logger as app_logger

logger = app_logger.get_logger(__name__)


class MainWindow(QMainWindow):
    """Asset browser window: pick a folder, right-click ramp textures, save the generated curves."""
    conversion_requested = pyqtSignal(list)
    asset_created = pyqtSignal(str) # Re-emitted from the registry so the list updates on the UI thread

    def __init__(self, service=None, parent=None):
        super().__init__(parent)
        self.setWindowTitle(settings.UI_DEFAULTS.get("window_title", "Ramp Convert"))
        self.resize(900, 600)

        self.service = service or ConversionService(RampToCurveConverter(), AssetRegistry())
        self.output_dir = None
        self._conversion_pending = False

        # --- Command registration ---
        self.menu_registry = ContextMenuRegistry()
        self.extension = RampConvertExtension(self.service, runner=self.request_conversion)
        self.extension.startup(self.menu_registry)

        # --- Widgets ---
        self.browser = AssetBrowserWidget(self.menu_registry, self)
        self.setCentralWidget(self.browser)
        self.browser.selection_changed_paths.connect(self._on_selection_changed)

        self.created_list = QListWidget(self)
        dock = QDockWidget("Generated Curves", self)
        dock.setObjectName("GeneratedCurvesDock")
        dock.setWidget(self.created_list)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, dock)

        self.progress_bar = QProgressBar(self)
        self.progress_bar.setMaximumWidth(200)
        self.progress_bar.setVisible(False)
        self.statusBar().addPermanentWidget(self.progress_bar)

        # --- Worker thread ---
        self.conversion_thread = QThread(self)
        self.conversion_worker = ConversionWorker(self.service)
        self.conversion_worker.moveToThread(self.conversion_thread)
        self.conversion_requested.connect(self.conversion_worker.run)
        self.conversion_worker.progress.connect(self._on_conversion_progress)
        self.conversion_worker.finished.connect(self._on_conversion_finished)
        self.conversion_worker.error.connect(self._on_conversion_error)
        self.conversion_thread.start()

        self.asset_created.connect(self._add_created_item)
        self.service.registry.add_listener(self._on_registry_asset_created)

        self._create_actions()
        self._create_menus()
        self.update_ui_state()
        self.statusBar().showMessage("Open a folder of ramp textures to begin.")

    def _create_actions(self):
        self.open_folder_action = QAction("&Open Folder...", self)
        self.open_folder_action.setShortcut(QKeySequence.StandardKey.Open)
        self.open_folder_action.triggered.connect(self.open_folder)

        self.convert_files_action = QAction("&Convert Textures...", self)
        self.convert_files_action.triggered.connect(self.convert_files)

        self.output_dir_action = QAction("Set &Output Folder...", self)
        self.output_dir_action.triggered.connect(self.select_output_dir)

        self.save_action = QAction("&Save Curves", self)
        self.save_action.setShortcut(QKeySequence.StandardKey.Save)
        self.save_action.triggered.connect(self.save_curves)

        self.exit_action = QAction("E&xit", self)
        self.exit_action.triggered.connect(self.close)

        self.verbose_action = QAction("&Verbose Logging", self, checkable=True)
        self.verbose_action.setChecked(settings.LOGGING_LEVEL.upper() == "DEBUG")
        self.verbose_action.toggled.connect(
            lambda checked: app_logger.set_level("DEBUG" if checked else settings.LOGGING_LEVEL))

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.open_folder_action)
        file_menu.addAction(self.convert_files_action)
        file_menu.addAction(self.output_dir_action)
        file_menu.addAction(self.save_action)
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

        view_menu = self.menuBar().addMenu("&View")
        view_menu.addAction(self.verbose_action)

    @property
    def is_busy(self):
        return self._conversion_pending or self.conversion_worker.is_running

    def update_ui_state(self):
        busy = self.is_busy
        self.save_action.setEnabled(not busy and bool(self.service.registry.dirty_packages()))
        self.open_folder_action.setEnabled(not busy)
        self.convert_files_action.setEnabled(not busy)

    # --- Folder handling ---

    def open_folder(self):
        folder = QFileDialog.getExistingDirectory(self, "Open Texture Folder")
        if folder:
            self.load_folder(folder)

    def load_folder(self, folder):
        self.service.root = folder
        count = self.browser.set_folder(folder)
        self.statusBar().showMessage(f"{count} textures in {folder}", 5000)
        return count

    def convert_files(self):
        """Picks texture files directly and converts them without going through the browser."""
        file_paths, _ = QFileDialog.getOpenFileNames(self, "Convert Ramp Textures", "", texture_loader.SUPPORTED_FORMATS_FILTER)
        if file_paths:
            self.load_folder(os.path.dirname(file_paths[0]))
            self.request_conversion(file_paths)

    def _on_selection_changed(self, paths):
        if paths:
            self.statusBar().showMessage(f"{len(paths)} selected. Right-click to generate curves.", 3000)

    def select_output_dir(self):
        dir_path = QFileDialog.getExistingDirectory(self, "Select Output Folder for Curves")
        if dir_path:
            self.output_dir = dir_path
            self.statusBar().showMessage(f"Curve output folder set to: {dir_path}", 3000)

    def default_output_dir(self):
        if self.output_dir:
            return self.output_dir
        base = self.browser.folder or os.getcwd()
        return os.path.join(base, settings.EXPORT_DEFAULTS.get("output_subdir", "Curves"))

    # --- Conversion ---

    def request_conversion(self, file_paths):
        """Runner handed to the extension: queues the conversion on the worker thread."""
        if self.is_busy:
            self.statusBar().showMessage("A conversion is already running.", 3000)
            return
        self._conversion_pending = True
        self.update_ui_state()
        self.progress_bar.setRange(0, len(file_paths))
        self.progress_bar.setValue(0)
        self.progress_bar.setVisible(True)
        self.statusBar().showMessage(f"Generating curves from {len(file_paths)} textures...")
        self.conversion_requested.emit(list(file_paths))

    def _add_created_item(self, package_name):
        self.created_list.addItem(package_name)

    def _on_registry_asset_created(self, asset):
        # Called from the worker thread
        self.asset_created.emit(asset.package_name)

    @pyqtSlot(int, int)
    def _on_conversion_progress(self, current, total):
        self.progress_bar.setValue(current)
        self.statusBar().showMessage(f"Generating curves: {current}/{total} textures...")

    @pyqtSlot(object)
    def _on_conversion_finished(self, results):
        self._conversion_pending = False
        self.progress_bar.setVisible(False)
        created = sum(len(assets) for assets in results.values())
        skipped = [os.path.basename(path) for path, assets in results.items() if not assets]
        message = f"Generated {created} curves from {len(results) - len(skipped)} textures."
        if skipped:
            message += f" Skipped: {', '.join(skipped)}"
        self.statusBar().showMessage(message, 8000)
        self.update_ui_state()

    @pyqtSlot(str)
    def _on_conversion_error(self, error_message):
        self._conversion_pending = False
        self.progress_bar.setVisible(False)
        QMessageBox.warning(self, "Conversion Error", error_message)
        self.statusBar().showMessage(error_message, 5000)
        self.update_ui_state()

    # --- Saving ---

    def save_curves(self):
        if self.is_busy:
            self.statusBar().showMessage("Wait for the running conversion to finish before saving.", 3000)
            return
        output_dir = self.default_output_dir()
        try:
            saved = self.service.save(output_dir)
        except Exception as e:
            logger.exception("Failed to save curves")
            QMessageBox.critical(self, "Error", format_user_error(e, "saving curves"))
            return
        remaining = len(self.service.registry.dirty_packages())
        if remaining:
            QMessageBox.warning(self, "Save Curves", f"{remaining} curves could not be saved to:\n{output_dir}")
        self.statusBar().showMessage(f"Saved {len(saved)} curves to {output_dir}", 5000)
        self.update_ui_state()

    def shutdown(self):
        """Unregisters the menu extension and stops the worker thread. Safe to call twice."""
        self.extension.shutdown(self.menu_registry)
        self.service.registry.remove_listener(self._on_registry_asset_created)
        if self.conversion_thread.isRunning():
            self.conversion_thread.quit()
            self.conversion_thread.wait()

    def closeEvent(self, event):
        self.shutdown()
        super().closeEvent(event)
