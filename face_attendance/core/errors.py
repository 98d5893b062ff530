"""
Startup errors that leave the system unable to run
"""


class InitError(RuntimeError):
    """Fatal configuration error raised while building the system."""


class DetectorUnavailableError(InitError):
    """The face detector could not be initialised."""


class GalleryNotFoundError(InitError):
    """The gallery directory does not exist."""


class GalleryEmptyError(InitError):
    """No usable face was enrolled."""
