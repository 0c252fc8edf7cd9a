"""Image intake for socialgallery application.

Turns a file picked in the upload form into a PendingImage whose preview
is an inline data URL. Images are checked, never transcoded.
"""

import base64
import io
import os

from PIL import Image, UnidentifiedImageError

from ..logging_config import get_logger
from ..ui.handlers.error import ImageProcessingError, ValidationError
from .upload import PendingImage

logger = get_logger(__name__)


class ImageProcessor:
    """Validates uploaded image files and encodes them for display."""

    def __init__(self) -> None:
        self.MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", 10 * 1024 * 1024))  # Default: 10MB
        self.MIN_FILE_SIZE = int(os.getenv("MIN_FILE_SIZE", 100))  # Default: 100 bytes

    def is_image_type(self, mime_type: str | None) -> bool:
        """Return True for any ``image/*`` MIME type."""
        return bool(mime_type) and str(mime_type).lower().startswith("image/")

    def validate_file_size(self, image_data: bytes, filename: str) -> None:
        """
        Validate that the file size is within acceptable limits.

        Raises:
            ValidationError: If file size is outside acceptable limits
        """
        file_size = len(image_data)

        if file_size < self.MIN_FILE_SIZE:
            raise ValidationError(
                f"File '{filename}' is too small ({file_size} bytes). Minimum size: {self.MIN_FILE_SIZE} bytes",
                code="file_too_small",
                user_message=f"El archivo '{filename}' es demasiado pequeño.",
                details={"filename": filename, "file_size": file_size, "min_size": self.MIN_FILE_SIZE},
            )

        if file_size > self.MAX_FILE_SIZE:
            max_size_mb = self.MAX_FILE_SIZE / (1024 * 1024)
            raise ValidationError(
                f"File '{filename}' is too large ({file_size} bytes). Maximum size: {max_size_mb:.0f}MB",
                code="file_too_large",
                user_message=f"El archivo '{filename}' supera el tamaño máximo de {max_size_mb:.0f}MB.",
                details={"filename": filename, "file_size": file_size, "max_size": self.MAX_FILE_SIZE},
            )

    def verify_image(self, image_data: bytes, filename: str) -> str:
        """
        Check that Pillow can decode the data.

        Returns:
            str: Detected format (e.g. "PNG")

        Raises:
            ImageProcessingError: If the data is not a readable image
        """
        try:
            with Image.open(io.BytesIO(image_data)) as image:
                image.verify()
                return image.format or ""
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ImageProcessingError(
                f"Invalid or corrupted image file '{filename}': {e}",
                code="image_validation_failed",
                user_message=f"El archivo '{filename}' no es una imagen válida.",
                details={"filename": filename, "file_size": len(image_data)},
                original_exception=e,
            ) from e

    def to_data_url(self, image_data: bytes, mime_type: str) -> str:
        """Encode raw bytes as a base64 ``data:`` URL."""
        encoded = base64.b64encode(image_data).decode("ascii")
        return f"data:{mime_type};base64,{encoded}"

    def create_pending_image(self, image_data: bytes, filename: str, mime_type: str | None) -> PendingImage:
        """
        Accept an uploaded file for publishing.

        Args:
            image_data: Raw file contents
            filename: Original file name
            mime_type: MIME type reported by the browser

        Returns:
            PendingImage ready to be published

        Raises:
            ValidationError: If the file is not an image or has an invalid size
            ImageProcessingError: If the image cannot be decoded
        """
        if not self.is_image_type(mime_type):
            raise ValidationError(
                f"File '{filename}' is not an image (type: {mime_type})",
                code="unsupported_type",
                user_message=f"El archivo '{filename}' no es una imagen.",
                details={"filename": filename, "mime_type": mime_type},
            )

        self.validate_file_size(image_data, filename)
        detected_format = self.verify_image(image_data, filename)

        logger.info(
            "pending_image_created",
            filename=filename,
            mime_type=mime_type,
            detected_format=detected_format,
            file_size=len(image_data),
        )

        return PendingImage(
            preview_url=self.to_data_url(image_data, str(mime_type)),
            filename=filename,
            mime_type=str(mime_type),
            size=len(image_data),
        )


_image_processor: ImageProcessor | None = None


def get_image_processor() -> ImageProcessor:
    """
    Get the global image processor instance.

    Returns:
        ImageProcessor: Global image processor instance
    """
    global _image_processor
    if _image_processor is None:
        _image_processor = ImageProcessor()
    return _image_processor
