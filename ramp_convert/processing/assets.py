# Naming of generated curve assets
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..config import settings
from .curves import CurveSet


@dataclass
class CurveAsset:
    """A named curve set produced from one texture row, ready to be registered or saved."""
    package_name: str
    asset_name: str
    row: int
    curves: CurveSet
    source: Optional[str] = None

    @property
    def object_path(self) -> str:
        return f"{self.package_name}.{self.asset_name}"


def curve_suffix(row: int, template: Optional[str] = None) -> str:
    if template is None:
        template = settings.CONVERSION_DEFAULTS.get("curve_suffix_template", "_Curve_{row}")
    return template.format(row=row)


def base_names_for(file_path: str, root: Optional[str] = None) -> Tuple[str, str]:
    """
    Derives (package name, asset name) from a texture path.

    The package name is the path without extension, relative to ``root``
    when given, using forward slashes; the asset name is the file stem.
    """
    stem, _ = os.path.splitext(file_path)
    if root:
        stem = os.path.relpath(stem, root)
    package_name = stem.replace(os.sep, "/")
    asset_name = os.path.basename(stem)
    return package_name, asset_name


def name_curve_assets(
    curve_sets: Sequence[CurveSet],
    base_package: str,
    base_name: str,
    source: Optional[str] = None,
    template: Optional[str] = None,
) -> List[CurveAsset]:
    """Pairs each row's curve set with ``<base>_Curve_<row>`` package and asset names."""
    assets = []
    for row, curve_set in enumerate(curve_sets):
        suffix = curve_suffix(row, template)
        assets.append(CurveAsset(
            package_name=base_package + suffix,
            asset_name=base_name + suffix,
            row=row,
            curves=curve_set,
            source=source,
        ))
    return assets
