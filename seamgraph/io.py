"""
Image file helpers.

The carving core only deals in (H, W, 3) uint8 arrays. These helpers decode
and encode files with Pillow and convert to and from the (C, H, W) float
tensors used by the torch energy functions.
"""

from pathlib import Path
from typing import Sequence, Union

import numpy as np
import torch
from PIL import Image

PathLike = Union[str, Path]


def load_image(path: PathLike) -> np.ndarray:
    """Load any Pillow-readable image as (H, W, 3) uint8 RGB."""
    with Image.open(path) as img:
        return np.array(img.convert('RGB'), dtype=np.uint8)


def save_image(pixels: np.ndarray, path: PathLike):
    """Save an (H, W, 3) uint8 array; the format follows the file extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path)


def image_to_tensor(pixels: np.ndarray) -> torch.Tensor:
    """(H, W, 3) uint8 -> (C, H, W) float32 in [0, 1]."""
    img_array = np.asarray(pixels, dtype=np.float32) / 255.0
    return torch.from_numpy(img_array).permute(2, 0, 1).contiguous()


def tensor_to_image(tensor: torch.Tensor) -> np.ndarray:
    """(C, H, W) float in [0, 1] -> (H, W, 3) uint8."""
    if tensor.dim() == 2:
        tensor = tensor.unsqueeze(0)
    if tensor.shape[0] == 1:
        tensor = tensor.expand(3, -1, -1)
    img_array = tensor.permute(1, 2, 0).detach().cpu().numpy()
    return np.round(img_array * 255).clip(0, 255).astype(np.uint8)


def save_animation(frames: Sequence[np.ndarray], path: PathLike, fps: int = 10):
    """
    Save frames of possibly different sizes as a looping GIF.

    Frames are pasted top-left onto a black canvas the size of the first
    frame, so a shrinking image stays anchored in place.
    """
    if not frames:
        raise ValueError("No frames to save")

    first = np.asarray(frames[0], dtype=np.uint8)
    H, W = first.shape[:2]
    images = []
    for frame in frames:
        canvas = Image.new('RGB', (W, H))
        canvas.paste(Image.fromarray(np.asarray(frame, dtype=np.uint8)), (0, 0))
        images.append(canvas)

    duration = int(1000 / fps)
    images[0].save(
        path,
        save_all=True,
        append_images=images[1:],
        duration=duration,
        loop=0,
        optimize=False
    )
