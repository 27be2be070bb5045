"""Debug image storage for the stem measurement pipeline.

When ``keep_debug_image`` is enabled, the erased image each measurement is
based on is written to disk for inspection. Only one image per page is kept:
measuring a page again overwrites its previous image.
"""

import logging
import os
import re
import tempfile
from pathlib import Path

import cv2
import numpy as np

logger = logging.getLogger(__name__)

# Characters allowed in a file name stem, anything else is replaced
_UNSAFE_CHARS = re.compile(r"[^\w.-]")


class DebugImageWriter:
    """Writes diagnostic images into a dedicated directory.

    A directory created by the writer itself is removed by ``cleanup_all``,
    which the owner of the writer must call once the images are no longer
    needed.

    Attributes:
        output_dir: Directory receiving the images.
        owns_dir: Whether the writer created ``output_dir`` itself.
        current_files: Paths of the written images, keyed by page id.
    """

    def __init__(self, output_dir: str | None = None):
        """Initialize the writer.

        Args:
            output_dir: Target directory. If None, a new directory is created
                in the system temp directory, removed by ``cleanup_all``.
        """
        self.owns_dir = not output_dir
        if output_dir:
            self.output_dir = Path(output_dir)
        else:
            self.output_dir = Path(tempfile.mkdtemp(prefix="stem-scale-"))

        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.current_files: dict[str, Path] = {}

    def get_path(self, page_id: str, suffix: str = "stem") -> Path:
        """Return the image path for a page, always the same for a page.

        The page id is reduced to a plain file name, so that the path always
        lies directly in ``output_dir``.
        """
        name = _UNSAFE_CHARS.sub("_", page_id).strip(".") or "page"
        return self.output_dir / f"{name}.{suffix}.png"

    def write_image(self, page_id: str, image: np.ndarray, suffix: str = "stem") -> Path:
        """Write an image for a page, overwriting any previous one.

        Args:
            page_id: Identifier of the page.
            image: Image to write, uint8.
            suffix: Kind of image, part of the file name.

        Returns:
            Path of the written file.

        Raises:
            OSError: If the image could not be written.
        """
        file_path = self.get_path(page_id, suffix)

        # Encode in memory then write atomically to prevent partial reads
        ok, encoded = cv2.imencode(".png", image)
        if not ok:
            raise OSError(f"Could not encode image for {page_id}")

        temp_path = file_path.with_name(file_path.name + ".tmp")
        temp_path.write_bytes(encoded.tobytes())
        os.replace(temp_path, file_path)

        self.current_files[page_id] = file_path
        logger.info(f"Stored {file_path}")
        return file_path

    def cleanup_all(self) -> None:
        """Remove all written images, and the directory if the writer created it.

        Safe to call multiple times.
        """
        for file_path in list(self.current_files.values()):
            if file_path.exists():
                try:
                    file_path.unlink()
                except OSError as e:
                    logger.warning(f"Could not remove {file_path}: {e}")
        self.current_files.clear()

        if self.owns_dir and self.output_dir.exists():
            try:
                self.output_dir.rmdir()
            except OSError as e:
                logger.warning(f"Could not remove {self.output_dir}: {e}")
