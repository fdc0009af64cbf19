import math
import re
import uuid

from lifeline import db
from lifeline.models.enums import BloodType, Gender, values


# Leading decimal number of a rating string, e.g. "4.5" in "4.5 stars"
RATING_PREFIX = re.compile(r'\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def new_id():
    return str(uuid.uuid4())


def enum_column(enum_class, **kwargs):
    # Stored as the member value ('O+'), not the member name ('O_POS')
    return db.Column(
        db.Enum(enum_class, native_enum=False, length=16, values_callable=values),
        **kwargs
    )


class Donor(db.Model):
    __tablename__ = 'donors'

    pk = db.Column(db.Integer, primary_key=True)  # insertion order
    id = db.Column(db.String(64), unique=True, nullable=False, default=new_id)
    full_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    blood_type = enum_column(BloodType, nullable=False)
    date_of_birth = db.Column(db.String(10), nullable=False)
    gender = enum_column(Gender, nullable=False)
    weight = db.Column(db.Integer, nullable=False)
    address = db.Column(db.String(200), nullable=False)
    latitude = db.Column(db.String(20), nullable=True)
    longitude = db.Column(db.String(20), nullable=True)
    is_available = db.Column(db.Boolean, nullable=False, default=True)
    is_verified = db.Column(db.Boolean, nullable=False, default=False)
    total_donations = db.Column(db.Integer, nullable=False, default=0)
    rating = db.Column(db.String(8), nullable=False, default='0')  # decimal string, 0-5
    last_donation = db.Column(db.String(32), nullable=True)

    def __repr__(self):
        return f"Donor('{self.id}', '{self.full_name}', '{self.blood_type.value}')"

    @property
    def rating_value(self):
        """
        Numeric rating read from the leading number of the stored string.
        Anything without one, or that is not finite, counts as 0.
        """
        match = RATING_PREFIX.match(self.rating) if isinstance(self.rating, str) else None
        if match is None:
            return 0.0
        value = float(match.group())
        return value if math.isfinite(value) else 0.0

    @property
    def is_eligible(self):
        return bool(self.is_available and self.is_verified)

    def to_dict(self):
        return {
            'id': self.id,
            'fullName': self.full_name,
            'email': self.email,
            'phone': self.phone,
            'bloodType': self.blood_type.value,
            'dateOfBirth': self.date_of_birth,
            'gender': self.gender.value,
            'weight': self.weight,
            'address': self.address,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'isAvailable': self.is_available,
            'isVerified': self.is_verified,
            'totalDonations': self.total_donations,
            'rating': self.rating,
            'lastDonation': self.last_donation,
        }
