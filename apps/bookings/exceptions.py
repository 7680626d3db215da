"""
Custom exceptions for the booking engine.
Raised in engine.py, ledger.py, payments/tracker.py and reviews/services.py;
caught in views and turned into JSON errors using each class's status_code.
"""


class BookingEngineError(Exception):
    """Base exception for all booking engine errors."""
    status_code = 400
    default_message = 'Booking request failed.'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    @property
    def code(self):
        return type(self).__name__

    def as_dict(self):
        return {'error': str(self), 'code': self.code}


class InvalidSlotRequest(BookingEngineError):
    """Requested slot set is empty, malformed, or outside the court's grid."""
    default_message = 'The requested slots are not valid for this court and date.'


class InvalidBookingRequest(BookingEngineError):
    """Booking details (game, team size) are not acceptable for this turf."""
    default_message = 'The booking details are not valid for this turf.'


class SlotUnavailable(BookingEngineError):
    """One or more requested slots are already held by another booking."""
    status_code = 409
    default_message = 'Some of the requested slots are already booked.'

    def __init__(self, slots, message=None):
        self.slots = sorted(slots)
        if message is None:
            taken = ', '.join(s.strftime('%H:%M') for s in self.slots)
            message = f"Slots already booked: {taken}"
        super().__init__(message)

    def as_dict(self):
        data = super().as_dict()
        data['slots'] = [s.strftime('%H:%M') for s in self.slots]
        return data


class InvalidReview(BookingEngineError):
    """Review name, message or rating is missing or out of range."""
    default_message = 'The review is not valid.'


class TurfInactive(BookingEngineError):
    """The turf is inactive or its operating window yields no slots."""
    status_code = 409
    default_message = 'This turf is not accepting bookings.'


class NotFound(BookingEngineError):
    """Unknown turf, court, customer or booking id."""
    status_code = 404
    default_message = 'Not found.'


class InvalidStatusTransition(BookingEngineError):
    """Payment status change not allowed from the booking's current status."""
    status_code = 409

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move payment status from {current or 'UNSET'} to {target}."
        )


class StorageUnavailable(BookingEngineError):
    """The database could not run the ledger transaction."""
    status_code = 503
    default_message = 'Booking storage is temporarily unavailable. Please try again.'
