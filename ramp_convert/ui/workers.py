from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ConversionWorker(QObject):
    """Worker object that runs a menu command's conversion off the UI thread."""
    finished = pyqtSignal(object)   # Emits {file_path: [CurveAsset, ...]}
    progress = pyqtSignal(int, int) # Emits (current_file, total_files)
    error = pyqtSignal(str)         # Emits error message

    def __init__(self, service, parent=None):
        super().__init__(parent)
        self.service = service # ConversionService
        self._is_running = False

    @property
    def is_running(self):
        return self._is_running

    @pyqtSlot(list)
    def run(self, file_paths):
        """Generates curves for every texture in ``file_paths``."""
        if self._is_running:
            self.error.emit("A conversion is already running.")
            return
        self._is_running = True
        try:
            def progress_callback(current, total):
                self.progress.emit(current, total)

            results = self.service.generate_ramps(file_paths, progress_callback=progress_callback)
            self.finished.emit(results)
        except Exception as e:
            logger.exception("Error during ramp conversion")
            self.error.emit(f"Conversion failed: {e}")
        finally:
            self._is_running = False
