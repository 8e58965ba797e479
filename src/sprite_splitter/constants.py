"""
Constants used internally by the sprite splitter.

These are implementation-level values that are not exposed through
config files or CLI arguments.
"""

# Accepted upload types; anything else is rejected before decoding
SUPPORTED_MIME_TYPES = frozenset({
    "image/png",
    "image/jpeg",
    "image/bmp",
    "image/webp",
})

# Pillow decoders allowed to open a sheet, matching the MIME types above
SUPPORTED_PIL_FORMATS = ("PNG", "JPEG", "BMP", "WEBP")

# Decoded bitmaps are held as RGBA so transparent sheets survive cropping
COLOR_MODE_RGBA = "RGBA"

# Frame and archive encoding
FRAME_FORMAT = "PNG"
FRAME_SUFFIX = ".png"
ARCHIVE_SUFFIX = ".zip"
PART_SUFFIX = ".part"
PREFIX_SEPARATOR = "_"

# Fallback when the output directory cannot be created
FALLBACK_OUTPUT_DIR = "sprite_splitter_output"

# Colour strings accepted by the preview config (#rrggbb or #rrggbbaa)
HEX_RGB_LENGTH = 6
HEX_RGBA_LENGTH = 8
