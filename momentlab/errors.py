"""
Momentlab exceptions.
"""


class MomentlabError(Exception):
    """Base class for all Momentlab errors."""


class ImageLoadError(MomentlabError):
    """Raised when an input image is missing or cannot be decoded."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Could not read image: {self.path}")


class ImageWriteError(MomentlabError):
    """Raised when an annotated image cannot be written."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Could not write image: {self.path}")
