# Curve asset persistence (JSON)
"""
Saves generated curve assets as small JSON documents and reads them back.

File layout::

    {
        "type": "LinearColorCurve",
        "package": "Textures/Ramp_Curve_0",
        "name": "Ramp_Curve_0",
        "source": "Textures/Ramp.png",
        "row": 0,
        "curves": {"R": [[0.0, 0.1], ...], "G": [...], "B": [...], "A": [...]}
    }
"""

import json
import os
from typing import Optional

from ..config import settings
from ..processing.assets import CurveAsset
from ..processing.curves import CHANNEL_NAMES, CurveSet
from ..utils.errors import FileIOError
from ..utils.logger import get_logger

logger = get_logger(__name__)

ASSET_TYPE = "LinearColorCurve"


def asset_file_name(asset: CurveAsset) -> str:
    return asset.asset_name + settings.EXPORT_DEFAULTS.get("asset_extension", ".curve.json")


def asset_file_path(asset: CurveAsset, output_dir: str) -> str:
    """Maps the asset's package path onto ``output_dir``.

    Package folders become subdirectories, so same-named textures from
    different folders never share a file. Components that would leave
    ``output_dir`` (drive, root, "..") are dropped or neutralised.
    """
    _, package = os.path.splitdrive(asset.package_name.replace("\\", "/"))
    folders = []
    for part in package.split("/")[:-1]:
        if part in ("", "."):
            continue
        folders.append("__" if part == ".." else part)
    return os.path.join(output_dir, *folders, asset_file_name(asset))


def curve_asset_to_dict(asset: CurveAsset) -> dict:
    return {
        "type": ASSET_TYPE,
        "package": asset.package_name,
        "name": asset.asset_name,
        "source": asset.source,
        "row": asset.row,
        "curves": asset.curves.to_dict(),
    }


def curve_asset_from_dict(data: dict) -> CurveAsset:
    if not isinstance(data, dict) or data.get("type") != ASSET_TYPE:
        raise ValueError("Not a curve asset document.")
    curves = data.get("curves")
    if not isinstance(curves, dict) or set(curves) != set(CHANNEL_NAMES):
        raise ValueError(f"Curve asset must define exactly the channels {CHANNEL_NAMES}.")
    return CurveAsset(
        package_name=data["package"],
        asset_name=data["name"],
        row=int(data["row"]),
        curves=CurveSet.from_dict(curves),
        source=data.get("source"),
    )


def save_curve_asset(asset: CurveAsset, output_dir: str, indent: Optional[int] = None) -> Optional[str]:
    """Writes one curve asset below ``output_dir``, mirroring its package path.

    Args:
        asset (CurveAsset): The asset to save.
        output_dir (str): Target directory, created if missing.
        indent (int): JSON indentation, defaults to EXPORT_DEFAULTS['json_indent'].

    Returns:
        str: Path of the written file, or None if writing failed.
    """
    if asset is None or asset.curves is None:
        logger.error("Cannot save an empty curve asset.")
        return None

    if not isinstance(output_dir, str) or not output_dir:
        logger.error("Invalid output directory provided for saving.")
        return None

    if indent is None:
        indent = settings.EXPORT_DEFAULTS.get("json_indent", 2)

    file_path = asset_file_path(asset, output_dir)
    try:
        os.makedirs(os.path.dirname(file_path), exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(curve_asset_to_dict(asset), f, indent=indent)
    except (OSError, TypeError, ValueError) as e:
        logger.error("Failed to save curve asset '%s' to '%s': %s", asset.asset_name, file_path, e)
        return None

    logger.debug("Saved curve asset '%s' to '%s'", asset.asset_name, file_path)
    return file_path


def load_curve_asset(file_path: str) -> CurveAsset:
    """Reads a curve asset written by save_curve_asset.

    Raises:
        FileIOError: If the file is missing, unreadable or not a curve asset.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return curve_asset_from_dict(data)
    except FileNotFoundError as e:
        raise FileIOError(f"Curve asset not found: {file_path}", file_path=file_path, original_error=e) from e
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise FileIOError(
            f"Invalid curve asset file: {file_path}",
            file_path=file_path,
            original_error=e,
            user_message=f"'{os.path.basename(file_path)}' is not a valid curve asset.",
        ) from e
