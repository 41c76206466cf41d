"""Qt/Pillow conversions used by the window and canvas."""
from typing import Optional

from PIL import Image
from PySide6.QtCore import QBuffer, QByteArray
from PySide6.QtGui import QImage, QPixmap

from utils.image_operations import ExportError, encode_png


def qimage_to_png_bytes(img: QImage) -> Optional[bytes]:
    if img is None or img.isNull():
        return None
    buffer = QBuffer()
    buffer.open(QBuffer.ReadWrite)
    img.save(buffer, 'PNG')
    return bytes(buffer.data())


def png_bytes_to_qimage(data: bytes) -> QImage:
    qimg = QImage.fromData(QByteArray(data), 'PNG')
    if qimg.isNull():
        raise ExportError("Composite could not be converted for the clipboard")
    return qimg


def pil_to_qpixmap(pil_img: Image.Image) -> QPixmap:
    return QPixmap.fromImage(png_bytes_to_qimage(encode_png(pil_img)))
