import threading
from typing import Callable, Dict, List, Optional

from ..io import curve_writer
from ..processing.assets import CurveAsset
from ..utils.logger import get_logger

logger = get_logger(__name__)

AssetListener = Callable[[CurveAsset], None]


class AssetRegistry:
    """Keeps track of generated curve assets and which of them still need saving.

    Owned by whoever creates it (the UI window, a batch run, a test); there is
    no module-level instance.
    """

    def __init__(self) -> None:
        self._assets: Dict[str, CurveAsset] = {}
        self._dirty: Dict[str, None] = {}  # ordered set of package names
        self._listeners: List[AssetListener] = []
        self._lock = threading.RLock()

    def asset_created(self, asset: CurveAsset) -> None:
        """Records a newly created asset and notifies listeners. Re-creating a package replaces it."""
        with self._lock:
            if asset.package_name in self._assets:
                logger.info("Replacing existing curve asset '%s'", asset.package_name)
            self._assets[asset.package_name] = asset
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(asset)
            except Exception:
                logger.exception("Asset listener failed for '%s'", asset.package_name)

    def mark_dirty(self, package_name: str) -> None:
        with self._lock:
            if package_name not in self._assets:
                raise KeyError(f"Unknown package '{package_name}'")
            self._dirty[package_name] = None

    def is_dirty(self, package_name: str) -> bool:
        with self._lock:
            return package_name in self._dirty

    def dirty_packages(self) -> List[str]:
        with self._lock:
            return list(self._dirty)

    def find(self, name: str) -> Optional[CurveAsset]:
        """Looks an asset up by package name, falling back to asset name."""
        with self._lock:
            if name in self._assets:
                return self._assets[name]
            for asset in self._assets.values():
                if asset.asset_name == name:
                    return asset
        return None

    def assets(self) -> List[CurveAsset]:
        with self._lock:
            return list(self._assets.values())

    def add_listener(self, listener: AssetListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: AssetListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def save_dirty(self, output_dir: str) -> List[str]:
        """Writes every dirty asset to ``output_dir``. Saved assets are marked clean; failures stay dirty."""
        with self._lock:
            pending = [self._assets[name] for name in self._dirty]

        saved = []
        for asset in pending:
            path = curve_writer.save_curve_asset(asset, output_dir)
            if path is None:
                continue
            saved.append(path)
            with self._lock:
                self._dirty.pop(asset.package_name, None)

        logger.info("Saved %d of %d dirty curve assets to '%s'", len(saved), len(pending), output_dir)
        return saved

    def __len__(self) -> int:
        with self._lock:
            return len(self._assets)

    def __contains__(self, package_name: str) -> bool:
        with self._lock:
            return package_name in self._assets
