from __future__ import annotations

from typing import Callable, Dict, List, Optional, Protocol, Sequence

from ..io import texture_loader
from ..processing.assets import CurveAsset, base_names_for, name_curve_assets
from ..processing.converter import RampToCurveConverter
from ..processing.curves import CurveSet, SourceImage
from ..utils.errors import ErrorCategory, handle_errors
from ..utils.logger import get_logger
from .asset_registry import AssetRegistry

logger = get_logger(__name__)

TextureLoader = Callable[..., Optional[SourceImage]]
ProgressCallback = Callable[[int, int], None]


class ConverterProtocol(Protocol):
    def convert(self, source: SourceImage) -> List[CurveSet]: ...


class ConversionService:
    """Thin facade over texture IO, ramp conversion and the asset registry."""

    def __init__(
        self,
        converter: Optional[ConverterProtocol] = None,
        registry: Optional[AssetRegistry] = None,
        loader: TextureLoader = texture_loader.load_texture,
        root: Optional[str] = None,
    ) -> None:
        self._converter = converter if converter is not None else RampToCurveConverter()
        self.registry = registry if registry is not None else AssetRegistry()
        self._loader = loader
        self.root = root  # package names are made relative to this folder

    def load_texture(self, file_path: str, srgb: Optional[bool] = None) -> Optional[SourceImage]:
        return self._loader(file_path, srgb=srgb)

    def convert_texture(self, source: SourceImage, file_path: str) -> List[CurveAsset]:
        """Converts an already loaded texture and registers one asset per row."""
        curve_sets = self._converter.convert(source)
        if not curve_sets:
            return []

        base_package, base_name = base_names_for(file_path, self.root)
        assets = name_curve_assets(curve_sets, base_package, base_name, source=file_path)
        for asset in assets:
            self.registry.asset_created(asset)
            self.registry.mark_dirty(asset.package_name)
        logger.info("Generated %d curves from '%s'", len(assets), file_path)
        return assets

    @handle_errors(fallback_value=list, category=ErrorCategory.CONVERSION, log_level="exception")
    def generate_ramp(self, file_path: str, srgb: Optional[bool] = None) -> List[CurveAsset]:
        """Generates curve assets from one ramp texture. Unreadable or unsupported textures yield []."""
        source = self.load_texture(file_path, srgb=srgb)
        if source is None:
            return []
        return self.convert_texture(source, file_path)

    def generate_ramps(
        self,
        file_paths: Sequence[str],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Dict[str, List[CurveAsset]]:
        results: Dict[str, List[CurveAsset]] = {}
        total = len(file_paths)
        for index, file_path in enumerate(file_paths, start=1):
            results[file_path] = self.generate_ramp(file_path)
            if progress_callback:
                progress_callback(index, total)
        return results

    def save(self, output_dir: str) -> List[str]:
        return self.registry.save_dirty(output_dir)
