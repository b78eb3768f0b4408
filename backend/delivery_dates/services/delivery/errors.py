# backend/delivery_dates/services/delivery/errors.py


class InvalidDeliveryDate(ValueError):
    """Candidate date is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid calendar date: {value!r}")
