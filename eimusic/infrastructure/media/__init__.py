"""Hosted media service adapters."""

from .cloudinary import CloudinaryClient, UploadedImage, extract_public_id

__all__ = ["CloudinaryClient", "UploadedImage", "extract_public_id"]
