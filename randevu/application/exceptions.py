
class BookingError(RuntimeError):
    """Base class for errors local to one booking or status-change attempt."""
    pass


class RoleViolationError(BookingError):
    """Raised when a barber or employee account tries to book an appointment."""
    pass


class CustomerNotFoundError(BookingError):
    """Raised when the booking identity has no user record."""
    pass


class ProviderNotFoundError(BookingError):
    """Raised when the employee is unknown or does not work for the barbershop."""
    pass


class ServiceNotFoundError(BookingError):
    """Raised when the employee does not offer the requested service."""
    pass


class SlotUnavailableError(BookingError):
    """Raised when the chosen time is not (or no longer) bookable."""
    pass


class AppointmentNotFoundError(BookingError):
    """Raised when no appointment exists for the given id."""
    pass


class NotAssignedError(BookingError):
    """Raised when someone other than the assigned staff changes an appointment."""
    pass


class InvalidTransitionError(BookingError):
    """Raised when a status change is not allowed from the current status."""
    pass


class StorageError(RuntimeError):
    """Raised when the appointment store fails (timeouts, I/O, network). Transient."""
    pass


class AvailabilityUnavailableError(StorageError):
    """Raised when availability could not be computed; no slots may be offered."""
    pass
