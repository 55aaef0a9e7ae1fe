"""Numeric constants shared by the CPU and GPU pipelines."""

# Field order used when a ParameterSet is packed into a float64 vector
PARAMETER_ORDER = (
    "temperature",
    "tint",
    "exposure",
    "highlights",
    "shadows",
    "whites",
    "blacks",
    "contrast",
    "vibrance",
    "saturation",
)

# Indices into the packed vector (kept in sync with PARAMETER_ORDER)
P_TEMPERATURE = 0
P_TINT = 1
P_EXPOSURE = 2
P_HIGHLIGHTS = 3
P_SHADOWS = 4
P_WHITES = 5
P_BLACKS = 6
P_CONTRAST = 7
P_VIBRANCE = 8
P_SATURATION = 9

# White balance (Kelvin fit)
REFERENCE_KELVIN = 5500.0
MIN_FIT_KELVIN = 1000.0

# BT.601 luma, used for tone masks inside the pipeline
LUMA_601_R = 0.299
LUMA_601_G = 0.587
LUMA_601_B = 0.114

# BT.709 luma, used for histogram luminance
LUMA_709_R = 0.2126
LUMA_709_G = 0.7152
LUMA_709_B = 0.0722

# 8-bit buffers
N_LEVELS = 256
MAX_LEVEL = 255

# Tone curve
CURVE_SIZE = 256

# Auto-adjust
CLIP_FRACTION = 0.005
MID_GRAY_LEVEL = 127.5
AUTO_EXPOSURE_LIMIT = 2.0
AUTO_CONTRAST_MIN = 40.0
AUTO_CONTRAST_MAX = 100.0
AUTO_TEMPERATURE_GAIN = 25.0
AUTO_BLACKS_LIMIT = -50.0
AUTO_WHITES_LIMIT = 50.0
