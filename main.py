"""PySide6 entrypoint: launches the Square Overlay window from square_overlay.main."""

import sys

try:
    from square_overlay.main import run
except Exception as exc:
    # Provide a clear error if imports fail due to PYTHONPATH issues
    raise RuntimeError(
        "Failed to import square_overlay. Ensure project root is on PYTHONPATH."
    ) from exc


if __name__ == "__main__":
    sys.exit(run())
