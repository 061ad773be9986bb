"""Error kinds raised by the EcoEats core."""


class EcoEatsError(Exception):
    """Base class for all EcoEats errors."""


class ValidationError(EcoEatsError, ValueError):
    """Input rejected before any state was mutated."""


class NotFoundError(EcoEatsError, LookupError):
    pass


class NotAuthenticatedError(EcoEatsError):
    pass


class InsufficientPoints(EcoEatsError):
    """Point balance too low for the requested deduction or reward."""


class CollaboratorUnavailable(EcoEatsError):
    """An external collaborator (AI, image, geolocation) failed or returned nothing."""


class PersistenceWriteFailure(EcoEatsError):
    """A snapshot could not be written to durable storage."""


__all__ = [
    'EcoEatsError', 'ValidationError', 'NotFoundError', 'NotAuthenticatedError',
    'InsufficientPoints', 'CollaboratorUnavailable', 'PersistenceWriteFailure',
]
