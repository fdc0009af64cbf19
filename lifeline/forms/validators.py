from decimal import Decimal, InvalidOperation

from wtforms.validators import StopValidation, ValidationError


class Omittable:
    """
    Lets a field be left out of a partial update body. A key that is present
    still runs the rest of the chain, so an explicit null/blank fails InputRequired.
    """
    field_flags = {'optional': True}

    def __call__(self, form, field):
        if not field.raw_data:
            field.errors[:] = []
            raise StopValidation()


class Rating:
    def __init__(self, minimum=0, maximum=5):
        self.minimum = Decimal(minimum)
        self.maximum = Decimal(maximum)

    def __call__(self, form, field):
        try:
            value = Decimal(field.data)
        except (InvalidOperation, TypeError):
            raise ValidationError('Rating must be a decimal number.')
        if not value.is_finite() or not self.minimum <= value <= self.maximum:
            raise ValidationError(f'Rating must be between {self.minimum} and {self.maximum}.')


def blank_to_none(value):
    return value or None
