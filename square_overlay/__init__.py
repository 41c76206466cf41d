"""Square Overlay: place, drag and resize squares over an image and copy the result."""

__version__ = "1.0.0"
