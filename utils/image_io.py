# utils/image_io.py
import os
import cv2
import numpy as np

class FatalIOError(OSError):
    """An expected input could not be decoded or an output could not be written."""

def to_rgba16(img: np.ndarray) -> np.ndarray:
    '''
    Convert a cv2.imread(IMREAD_UNCHANGED) result (GRAY / BGR / BGRA, 8 or 16 bit)
    into (H, W, 4) uint16 RGBA, alpha-premultiplied and quantized to 8-bit steps
    expanded by 0x101.
    '''
    if img.ndim == 2:
        img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGRA)
    elif img.shape[2] == 3:
        img = cv2.cvtColor(img, cv2.COLOR_BGR2BGRA)
    rgba = cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)

    if rgba.dtype == np.uint8:
        rgba = rgba.astype(np.uint16) * np.uint16(0x101)
    elif rgba.dtype != np.uint16:
        raise FatalIOError(f"Unsupported pixel type: {rgba.dtype}")

    v = rgba.astype(np.uint32)
    a = v[..., 3:4]
    v[..., :3] = v[..., :3] * a // 0xFFFF
    return ((v >> 8) * 0x101).astype(np.uint16)

def from_rgba16(img: np.ndarray) -> np.ndarray:
    '''Back to 8-bit straight-alpha BGR (opaque) or BGRA for cv2.imwrite.'''
    rgba = (img >> 8).astype(np.uint8)
    a = rgba[..., 3:4].astype(np.uint16)
    if np.all(a == 255):
        return cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGR)
    rgb = rgba[..., :3].astype(np.uint16)
    straight = np.where(a > 0, np.minimum(rgb * 255 // np.maximum(a, 1), 255), 0)
    out = np.concatenate([straight.astype(np.uint8), rgba[..., 3:4]], axis=-1)
    return cv2.cvtColor(out, cv2.COLOR_RGBA2BGRA)

def load_rgba16(path: str):
    '''
    Returns the decoded image, or None if the file does not exist
    (the normal end of a numbered sequence). Raises FatalIOError if it
    exists but cannot be decoded.
    '''
    if not os.path.exists(path):
        return None
    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise FatalIOError(f"Could not decode image: {path}")
    return to_rgba16(img)

def save_png(img: np.ndarray, name: str, out_dir: str = ".") -> str:
    path = os.path.join(out_dir, f"{name}.png")
    try:
        ok = cv2.imwrite(path, from_rgba16(img))
    except cv2.error as e:
        raise FatalIOError(f"Could not write {path}: {e}") from e
    if not ok:
        raise FatalIOError(f"Could not write {path}")
    print(f"💾 wrote {path}")
    return path
