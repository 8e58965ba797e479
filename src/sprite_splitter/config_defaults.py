"""Shared default values for user-facing configuration settings."""
from sprite_splitter.type_defs import (
    CompressionName,
    EncodeFailurePolicy,
    SplitMode,
)

# Split
DEFAULT_SPLIT_MODE: SplitMode = "size"

# Export
DEFAULT_ON_ENCODE_FAILURE: EncodeFailurePolicy = "skip"
DEFAULT_COMPRESSION: CompressionName = "deflated"
DEFAULT_OUTPUT_DIR = "."
DEFAULT_PROGRESS = True

# Preview: red, roughly half transparent, one pixel wide
DEFAULT_LINE_COLOR = "#ff000080"
DEFAULT_LINE_WIDTH = 1
