"""
Hough Accumulator Module

The accumulator is produced elsewhere and handed over as a 3-byte-per-pixel
frame: the first two bytes of every pixel hold a little-endian 16-bit vote
count, the third byte is unused. These helpers convert between that packed
layout and a plain (H, W) uint16 count array.
"""

import cv2
import numpy as np


BYTES_PER_PIXEL = 3


def unpack_counts(frame: np.ndarray) -> np.ndarray:
    """
    Return the vote counts of an accumulator frame.

    Args:
        frame: (H, W, 3) uint8 packed frame, or (H, W) array that already
            holds counts

    Raises:
        ValueError: On any other shape, or (H, W) counts outside 0..65535

    Returns:
        (H, W) uint16 array of counts
    """
    frame = np.asarray(frame)
    if frame.ndim == 2:
        if frame.size and (frame.min() < 0 or frame.max() > 0xFFFF):
            raise ValueError(
                f"Counts must fit in 16 bits, got range [{frame.min()}, {frame.max()}]"
            )
        return frame.astype(np.uint16)
    if frame.ndim != 3 or frame.shape[2] != BYTES_PER_PIXEL:
        raise ValueError(f"Expected an (H, W) or (H, W, 3) accumulator, got shape {frame.shape}")

    low = frame[:, :, 0].astype(np.uint16)
    high = frame[:, :, 1].astype(np.uint16)
    return low | (high << 8)


def counts_from_buffer(data: bytes, width: int, height: int) -> np.ndarray:
    """Unpack a raw 3-byte-per-pixel buffer into an (H, W) count array."""
    expected = width * height * BYTES_PER_PIXEL
    if len(data) != expected:
        raise ValueError(f"Buffer holds {len(data)} bytes, expected {expected} for {width}x{height}")
    frame = np.frombuffer(data, dtype=np.uint8).reshape(height, width, BYTES_PER_PIXEL)
    return unpack_counts(frame)


def pack_counts(counts: np.ndarray) -> np.ndarray:
    """Pack an (H, W) count array into a (H, W, 3) uint8 frame."""
    counts = np.clip(np.asarray(counts), 0, 0xFFFF).astype(np.uint16)
    frame = np.zeros(counts.shape + (BYTES_PER_PIXEL,), dtype=np.uint8)
    frame[:, :, 0] = counts & 0xFF
    frame[:, :, 1] = counts >> 8
    return frame


def load_accumulator(path):
    """
    Load a packed accumulator stored as a lossless 3-channel image.

    Returns:
        (H, W) uint16 counts, or None if the file could not be read
    """
    # IMREAD_UNCHANGED keeps the raw channel bytes (no colour conversion)
    frame = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if frame is None:
        return None
    return unpack_counts(frame)


def save_accumulator(path, counts: np.ndarray) -> bool:
    """Write counts as a packed 3-channel image; use a lossless format such as PNG."""
    return bool(cv2.imwrite(str(path), pack_counts(counts)))
