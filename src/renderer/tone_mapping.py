# renderer/tone_mapping.py
import numpy as np

# Upper bound keeps 1.0 from rounding up to 256 once scaled.
MAX_INTENSITY = 0.999


def gamma_tone_mapping(linear: np.ndarray) -> np.ndarray:
    """
    Convert averaged linear radiance (any shape, last axis RGB) into 8-bit display values:
    square-root gamma, clamp into [0, 0.999], scale by 256 and truncate.
    NaN channels map to 0 and +inf saturates to 255.
    """
    linear = np.nan_to_num(np.asarray(linear, dtype=np.float64), nan=0.0)
    mapped = np.sqrt(np.clip(linear, 0.0, None))
    mapped = np.clip(mapped, 0.0, MAX_INTENSITY)
    return (mapped * 256).astype(np.uint8)
