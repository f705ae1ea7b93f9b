"""Exceptions raised by sphereforge."""


class SphereForgeError(Exception):
    """Base class for all sphereforge errors."""


class ConfigurationError(SphereForgeError, ValueError):
    """Render or camera configuration that cannot produce an image.

    Raised while settings and cameras are constructed, before any render
    work is scheduled.
    """


class PixelWriteError(SphereForgeError):
    """A pixel of the output buffer was written more than once."""
