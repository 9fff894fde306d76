# Asset browser listing the textures of one folder
import os
import cv2
from PyQt6.QtWidgets import QListWidget, QListWidgetItem, QListView, QAbstractItemView, QMenu
from PyQt6.QtGui import QAction, QIcon, QPixmap, QImage
from PyQt6.QtCore import QSize, Qt, pyqtSignal

from ..config import settings as app_settings
from ..io.texture_loader import is_texture_file
from ..utils.logger import get_logger

logger = get_logger(__name__)

PATH_ROLE = Qt.ItemDataRole.UserRole


def make_thumbnail(file_path, size):
    """Loads a texture with OpenCV and scales it to fit ``size`` pixels. Returns a QPixmap or None."""
    img = cv2.imread(file_path, cv2.IMREAD_COLOR)
    if img is None:
        return None
    h, w = img.shape[:2]
    scale = min(size / w, size / h)
    # Ramps are often a few pixels tall; never collapse a side to zero
    new_w, new_h = max(1, int(w * scale)), max(1, int(h * scale))
    resized = cv2.resize(img, (new_w, new_h), interpolation=cv2.INTER_NEAREST)
    resized = cv2.cvtColor(resized, cv2.COLOR_BGR2RGB)
    q_img = QImage(resized.tobytes(), new_w, new_h, 3 * new_w, QImage.Format.Format_RGB888).copy()
    return QPixmap.fromImage(q_img)


class AssetBrowserWidget(QListWidget):
    """Icon view of the texture files in a folder with a registry-driven context menu."""
    selection_changed_paths = pyqtSignal(list)

    def __init__(self, menu_registry, parent=None):
        super().__init__(parent)
        self.menu_registry = menu_registry # ContextMenuRegistry
        self.folder = None
        icon_size = app_settings.UI_DEFAULTS.get("browser_icon_size", 64)

        self.setViewMode(QListView.ViewMode.IconMode)
        self.setIconSize(QSize(icon_size, icon_size))
        self.setResizeMode(QListView.ResizeMode.Adjust)
        self.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)
        self.itemSelectionChanged.connect(lambda: self.selection_changed_paths.emit(self.selected_paths()))

    def set_folder(self, folder):
        """Lists every supported texture directly inside ``folder``."""
        self.clear()
        self.folder = folder
        if not folder or not os.path.isdir(folder):
            return 0

        icon_size = self.iconSize().width()
        count = 0
        for name in sorted(os.listdir(folder)):
            path = os.path.join(folder, name)
            if not os.path.isfile(path) or not is_texture_file(path):
                continue
            item = QListWidgetItem(name)
            item.setData(PATH_ROLE, path)
            item.setToolTip(path)
            pixmap = make_thumbnail(path, icon_size)
            if pixmap is not None:
                item.setIcon(QIcon(pixmap))
            self.addItem(item)
            count += 1
        logger.info("Listed %d textures in '%s'", count, folder)
        return count

    def selected_paths(self):
        return [item.data(PATH_ROLE) for item in self.selectedItems()]

    def build_menu(self, paths=None):
        """Builds the context menu for ``paths`` (default: current selection). Returns None if no command applies."""
        paths = self.selected_paths() if paths is None else paths
        commands = self.menu_registry.build_menu(paths)
        if not commands:
            return None
        menu = QMenu(self)
        for command in commands:
            action = QAction(command.label, menu)
            action.setToolTip(command.tooltip)
            action.setData(command.command_id)
            action.triggered.connect(lambda _checked=False, c=command: c.execute())
            menu.addAction(action)
        return menu

    def _show_context_menu(self, pos):
        menu = self.build_menu()
        if menu is not None:
            menu.exec(self.viewport().mapToGlobal(pos))
