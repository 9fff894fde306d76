# IO package initialization
from .texture_loader import (
    load_texture,
    image_to_source,
    is_texture_file,
    SUPPORTED_FORMATS_FILTER,
)
from .curve_writer import (
    save_curve_asset,
    load_curve_asset,
    curve_asset_to_dict,
    curve_asset_from_dict,
)

__all__ = [
    'load_texture',
    'image_to_source',
    'is_texture_file',
    'SUPPORTED_FORMATS_FILTER',
    'save_curve_asset',
    'load_curve_asset',
    'curve_asset_to_dict',
    'curve_asset_from_dict',
]
