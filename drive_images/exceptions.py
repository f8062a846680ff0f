"""
Error classes for the image registry.

Absent keys are not errors: lookups return None and deletes return False.
"""


class DriveImagesError(Exception):
    """
    Base error class.

    Attributes:
        message: User-facing error message
    """
    message: str = "Image registry error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class EmptyInputError(DriveImagesError, ValueError):
    """Raised when a required image URL, file ID or bulk text is missing."""
    message = "Image URL or File ID required"
