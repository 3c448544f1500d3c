import io
import os
from typing import Optional, Tuple
from PIL import Image, ImageOps, UnidentifiedImageError
from PyQt6.QtGui import QImage
from PyQt6.QtCore import Qt, QMimeDatabase


ACCEPTED_MIME_TYPES = {'image/png', 'image/jpeg', 'image/jpg', 'image/webp'}
DIALOG_NAME_FILTER = "*.png *.jpg *.jpeg *.webp"
MAX_DISPLAY_CHARS = 35
# Common file name limit (ext4, APFS, NTFS)
MAX_FILENAME_BYTES = 255


class ImageDecodeError(Exception):
    """Raised when source bytes cannot be decoded into a raster image"""


def is_valid_image_type(mime_type: str) -> bool:
    """Check a MIME type against the accepted input formats"""
    return mime_type in ACCEPTED_MIME_TYPES


def detect_mime_type(path: str) -> str:
    """Sniff the MIME type of a file, by name first and by content when ambiguous"""
    return QMimeDatabase().mimeTypeForFile(path).name()


def truncate_display_name(name: str, max_chars: int = MAX_DISPLAY_CHARS) -> str:
    """Shorten long file names by keeping both ends around an ellipsis"""
    if len(name) <= max_chars:
        return name
    keep = (max_chars - 3) // 2
    return name[:keep] + '...' + name[-keep:]


def read_image_bytes(path: str) -> Optional[Tuple[str, bytes]]:
    """Read a candidate file, returning (mime_type, data) or None if rejected"""
    mime_type = detect_mime_type(path)
    if not is_valid_image_type(mime_type):
        return None
    with open(path, 'rb') as f:
        data = f.read()
    return mime_type, data


def decode_image(data: bytes) -> Image.Image:
    """Decode image bytes into an RGBA Pillow image at its natural size"""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
        # Orientation is applied the same way a browser draws the image
        image = ImageOps.exif_transpose(image)
        return image.convert('RGBA')
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(str(e)) from e


def draw_on_surface(image: Image.Image) -> Image.Image:
    """Draw an image onto a transparent surface sized to its natural dimensions"""
    surface = Image.new('RGBA', image.size, (0, 0, 0, 0))
    surface.alpha_composite(image.convert('RGBA'))
    return surface


def encode_surface(surface: Image.Image, pillow_format: str) -> Optional[bytes]:
    """Encode a drawn surface at maximum quality, None when encoding fails"""
    buffer = io.BytesIO()
    try:
        if pillow_format == 'JPEG':
            # JPEG has no alpha: transparent pixels flatten to black
            flat = Image.new('RGB', surface.size, (0, 0, 0))
            flat.paste(surface, mask=surface.getchannel('A'))
            flat.save(buffer, format='JPEG', quality=100, subsampling=0)
        elif pillow_format == 'WEBP':
            surface.save(buffer, format='WEBP', quality=100, method=6)
        else:
            surface.save(buffer, format=pillow_format)
    except (OSError, ValueError, KeyError):
        return None
    data = buffer.getvalue()
    return data or None


def load_qimage(data: bytes, target_size: Optional[Tuple[int, int]] = None) -> Optional[QImage]:
    """Decode image bytes into a QImage, optionally scaled to fit target_size.

    Runs on worker threads, so it returns a QImage rather than a QPixmap.
    """
    try:
        pil_image = Image.open(io.BytesIO(data))

        # Handle EXIF orientation for JPEG images
        try:
            pil_image = ImageOps.exif_transpose(pil_image)
        except (OSError, ValueError, KeyError):
            pass

        # Handle different image modes
        if pil_image.mode in ('RGBA', 'LA', 'PA') or (
                pil_image.mode == 'P' and 'transparency' in pil_image.info):
            pil_image = pil_image.convert('RGBA')
            bytes_per_line = 4 * pil_image.width
            qimage_format = QImage.Format.Format_RGBA8888
        else:
            # Convert everything else to RGB (including L, 1, CMYK, etc.)
            pil_image = pil_image.convert('RGB')
            bytes_per_line = 3 * pil_image.width
            qimage_format = QImage.Format.Format_RGB888

        img_data = pil_image.tobytes()
        qimage = QImage(img_data, pil_image.width, pil_image.height,
                        bytes_per_line, qimage_format)

        # Make a copy so the QImage owns its buffer
        qimage = qimage.copy()

        if target_size:
            qimage = qimage.scaled(
                target_size[0], target_size[1],
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation
            )
        return qimage

    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError):
        return None


def fit_filename(stem: str, suffix: str, max_bytes: int = MAX_FILENAME_BYTES) -> str:
    """Join stem and suffix, cutting the stem on a UTF-8 character boundary
    so the whole name stays within max_bytes"""
    budget = max_bytes - len(suffix.encode('utf-8'))
    stem = stem.encode('utf-8')[:max(budget, 0)].decode('utf-8', 'ignore')
    return stem + suffix


def unique_path(directory: str, filename: str) -> str:
    """Pick a free path in directory, adding ' (n)' before the extension on clashes"""
    path = os.path.join(directory, filename)
    if not os.path.exists(path):
        return path
    stem, ext = os.path.splitext(filename)
    i = 1
    while True:
        candidate = os.path.join(directory, fit_filename(stem, f" ({i}){ext}"))
        if not os.path.exists(candidate):
            return candidate
        i += 1
