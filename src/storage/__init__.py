"""Image storage for item uploads"""

from .image_store import ImageStore, InvalidImageError

__all__ = ['ImageStore', 'InvalidImageError']
