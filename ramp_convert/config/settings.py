# Application settings

# --- Conversion Parameters ---
CONVERSION_DEFAULTS = {
    # The only pixel layout the ramp converter understands (8-bit, 4 channels, B-G-R-A byte order)
    "supported_format": "BGRA8",

    # sRGB flag given to 8-bit textures loaded from disk when the caller doesn't say otherwise
    "assume_srgb": True,

    # Appended to the source package/asset name for every generated row curve
    "curve_suffix_template": "_Curve_{row}",
}

# --- Export Parameters ---
EXPORT_DEFAULTS = {
    "asset_extension": ".curve.json",
    "json_indent": 2,
    "output_subdir": "Curves", # Created next to the source textures when no output folder is chosen
    "max_workers": 4, # Batch conversion threads
}

# --- Texture Files ---
SUPPORTED_TEXTURE_EXTENSIONS = (".png", ".tga", ".bmp", ".tif", ".tiff", ".webp", ".jpg", ".jpeg")

SUPPORTED_FORMATS_FILTER = "Textures (*.png *.tga *.bmp *.tif *.tiff *.webp *.jpg *.jpeg);;PNG (*.png);;TGA (*.tga);;All Files (*)"

# --- UI Defaults ---
UI_DEFAULTS = {
    "window_title": "Ramp Convert",
    "browser_icon_size": 64,
    "menu_section": "GetAssetActions", # Section the context menu command is inserted after
}

# --- Logging ---
LOGGING_LEVEL = "INFO" # Options: DEBUG, INFO, WARNING, ERROR
