# Batch ramp conversion
import os
import threading
import concurrent.futures

from ..config import settings
from ..io import curve_writer, texture_loader
from ..utils.errors import ErrorCategory, log_and_continue
from ..utils.logger import get_logger
from .assets import base_names_for, name_curve_assets
from .converter import RampToCurveConverter
from .curves import format_name

logger = get_logger(__name__)


def process_batch(file_paths, output_dir, converter=None, max_workers=None, root=None, progress_callback=None):
    """Convert many ramp textures in parallel and save their curve assets.

    Each texture is independent, so files are handed to a thread pool with
    no shared state beyond the (stateless) converter.

    Args:
        file_paths (list): Paths of the ramp textures.
        output_dir (str): Directory receiving the curve asset files.
        converter (RampToCurveConverter): Converter instance, a default one is created if None.
        max_workers (int): Thread count, defaults to EXPORT_DEFAULTS['max_workers'].
        root (str): Folder package names are made relative to, defaults to the
                    deepest folder shared by all inputs.
        progress_callback (callable): Called as (done, total) whenever a file finishes.

    Returns:
        list: (file_path, success (bool), message (str)) tuples, in input order.
              message is the number of curves written on success, the error otherwise.
    """
    file_paths = list(file_paths)
    if not file_paths:
        return []

    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        logger.error("Error creating output directory %s: %s", output_dir, e)
        return [(fp, False, f"Output directory creation failed: {e}") for fp in file_paths]

    if converter is None:
        converter = RampToCurveConverter()
    if root is None:
        try:
            root = os.path.commonpath([os.path.dirname(os.path.abspath(fp)) for fp in file_paths])
        except ValueError:
            # Paths on different drives
            root = None
    if max_workers is None:
        max_workers = settings.EXPORT_DEFAULTS.get("max_workers", 4)
    max_workers = max(1, min(max_workers, len(file_paths)))

    claimed_paths = set()
    claim_lock = threading.Lock()

    def process_single_file(file_path):
        """Worker function to process a single texture."""
        source = texture_loader.load_texture(file_path)
        if source is None:
            return (file_path, False, "Failed to load texture")

        curve_sets = converter.convert(source)
        if not curve_sets:
            return (file_path, False, f"Unsupported or empty texture ({format_name(source.pixel_format)})")

        base_package, base_name = base_names_for(file_path, root)
        assets = name_curve_assets(curve_sets, base_package, base_name, source=file_path)
        target_paths = [curve_writer.asset_file_path(asset, output_dir) for asset in assets]
        with claim_lock:
            taken = claimed_paths.intersection(target_paths)
            if taken:
                return (file_path, False, f"Curve asset name already used in this batch: {os.path.basename(sorted(taken)[0])}")
            claimed_paths.update(target_paths)

        for asset in assets:
            if curve_writer.save_curve_asset(asset, output_dir) is None:
                return (file_path, False, f"Failed to save curve asset '{asset.asset_name}'")

        return (file_path, True, f"{len(assets)} curves")

    results = [None] * len(file_paths)
    total_files = len(file_paths)
    logger.info("Converting %d textures with %d worker threads", total_files, max_workers)

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(process_single_file, file_path): index
            for index, file_path in enumerate(file_paths)
        }

        processed_count = 0
        for future in concurrent.futures.as_completed(future_to_index):
            index = future_to_index[future]
            file_path = file_paths[index]
            processed_count += 1
            try:
                results[index] = future.result()
            except Exception as exc:
                logger.exception("Exception while converting %s", file_path)
                results[index] = (file_path, False, f"Error processing file: {exc}")

            _, success, message = results[index]
            if success:
                logger.info("(%d/%d) Processed: %s - %s", processed_count, total_files, file_path, message)
            else:
                log_and_continue(f"({processed_count}/{total_files}) Skipped {file_path}: {message}",
                                 category=ErrorCategory.CONVERSION)
            if progress_callback:
                progress_callback(processed_count, total_files)

    return results
