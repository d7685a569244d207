# =============================================================================
# PlantScan Backend
# exceptions.py - Domain Exceptions
#
# Errors raised by the analysis pipeline and its collaborators. Routes map
# them onto JSON error responses; nothing here is retried.
# =============================================================================


class PlantScanError(Exception):
    """Base class for all PlantScan domain errors."""


class ClassificationError(PlantScanError):
    """The selected label could not be turned into a health report."""


class UnknownConditionError(PlantScanError, KeyError):
    """A disease or pest id is not present in the knowledge base."""

    def __init__(self, kind, condition_id):
        self.kind = kind
        self.condition_id = condition_id
        super().__init__(f"Unknown {kind}: '{condition_id}'")

    def __str__(self):
        return self.args[0]


class InvalidImageError(PlantScanError):
    """Uploaded bytes are not a decodable image."""


class ImageUploadError(PlantScanError):
    """The image hosting service rejected or failed the upload."""


class AlreadySubscribedError(PlantScanError):
    """The user is already on the requested subscription tier."""
