"""Constants and configuration for textattrs."""


class TextAttributeConstants:
    """Central configuration constants for the attribute engine."""

    # Paragraph style defaults
    DEFAULT_TAB_STOP_INTERVAL = 28.0  # Points between the default left tab stops
    DEFAULT_TAB_STOP_COUNT = 12

    # Serialization
    COLOR_CHANNEL_LEVELS = 256  # 8-bit channels in the hex color form
    MAX_SERIALIZED_SIZE = 10 * 1024 * 1024  # Refuse to decode documents above 10MB

    # Font metrics used by the monospace layout
    LINE_HEIGHT_FACTOR = 1.2  # Line height as a multiple of point size
    MONOSPACE_ADVANCE_FACTOR = 0.6  # Glyph advance as a multiple of point size
    SYSTEM_FONT_NAME = "Helvetica"
    SYSTEM_BOLD_FONT_NAME = "Helvetica-Bold"
    DEFAULT_FONT_SIZE = 17.0

    # Link enrichment
    DEFAULT_LINK_SCHEME = "https://"  # Prefixed to detected links without a scheme

    # Preset storage
    PRESETS_APP_NAME = "textattrs"
    PRESETS_FILE_NAME = "presets.json"
