import numpy as np


def build_palette(target: np.ndarray, deduplicate: bool = False) -> np.ndarray:
    """
    Collect the drawable colours of a target image.

    Args:
        target (np.ndarray): (H, W, 4) uint16 RGBA image.
        deduplicate (bool): If True, keep each colour once, in first-seen
            row-major order. Otherwise every pixel is kept, so frequent
            colours are drawn more often.

    Returns:
        np.ndarray: (N, 4) array of colours.
    """
    if target.size == 0:
        raise ValueError("Cannot build a palette from an empty image")

    flat = target.reshape(-1, target.shape[-1])
    if not deduplicate:
        return flat.copy()

    # np.unique sorts; restore discovery order from the first-seen indices
    _, first = np.unique(flat, axis=0, return_index=True)
    return flat[np.sort(first)]
