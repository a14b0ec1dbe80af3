"""Image preprocessing for the cancer classifier."""
from __future__ import annotations

import io

import torch
from PIL import Image, UnidentifiedImageError
from torchvision import transforms
from torchvision.transforms import InterpolationMode

from .errors import ImageDecodeError

IMAGE_SIZE = (224, 224)
CHANNEL_MEAN = (0.485, 0.456, 0.406)
CHANNEL_STD = (0.229, 0.224, 0.225)

# Yields a uint8 CHW tensor; scaling and normalization happen in ``normalize``.
IMAGE_TRANSFORM = transforms.Compose(
    [
        transforms.Resize(IMAGE_SIZE, interpolation=InterpolationMode.BILINEAR),
        transforms.PILToTensor(),
    ]
)


def decode_image(image_bytes: bytes) -> Image.Image:
    """Decode raw bytes into a 3-channel RGB image."""
    try:
        image = Image.open(io.BytesIO(image_bytes))
        return image.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageDecodeError(f"Unable to decode image: {exc}") from exc


def normalize(pixels: torch.Tensor) -> torch.Tensor:
    """Scale integer pixels in a channels-last tensor to ``((x / 255) - mean) / std``."""
    mean = torch.tensor(CHANNEL_MEAN, dtype=torch.float32)
    std = torch.tensor(CHANNEL_STD, dtype=torch.float32)
    return (pixels.to(torch.float32) / 255.0 - mean) / std


def transform_image_bytes(image_bytes: bytes) -> torch.Tensor:
    """Convert raw bytes into a normalized ``[1, 224, 224, 3]`` float tensor."""
    image = decode_image(image_bytes)
    chw = IMAGE_TRANSFORM(image)
    batch = chw.permute(1, 2, 0).unsqueeze(0)
    return normalize(batch)
