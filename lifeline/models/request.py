from sqlalchemy import inspect

from lifeline import db
from lifeline.models.donor import enum_column, new_id
from lifeline.models.enums import (
    BloodType, UrgencyLevel, BloodRequestStatus, DonorResponseStatus, LifeSaverStatus
)
from lifeline.utils.timezone import utc_now, to_iso


class BloodRequest(db.Model):
    """Broadcast emergency request, visible to every eligible donor."""
    __tablename__ = 'blood_requests'

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(64), unique=True, nullable=False, default=new_id)
    patient_name = db.Column(db.String(100), nullable=False)
    blood_type = enum_column(BloodType, nullable=False)
    units_required = db.Column(db.Integer, nullable=False)
    urgency_level = enum_column(UrgencyLevel, nullable=False)
    hospital = db.Column(db.String(200), nullable=False)
    contact_person = db.Column(db.String(100), nullable=False)
    contact_phone = db.Column(db.String(20), nullable=False)
    notes = db.Column(db.Text, nullable=True)
    latitude = db.Column(db.String(20), nullable=True)
    longitude = db.Column(db.String(20), nullable=True)
    status = enum_column(BloodRequestStatus, nullable=False, default=BloodRequestStatus.ACTIVE)
    created_at = db.Column(db.DateTime, nullable=False, default=utc_now)

    def __repr__(self):
        return f"BloodRequest('{self.id}', '{self.blood_type.value}', '{self.status.value}')"

    def to_dict(self):
        return {
            'id': self.id,
            'patientName': self.patient_name,
            'bloodType': self.blood_type.value,
            'unitsRequired': self.units_required,
            'urgencyLevel': self.urgency_level.value,
            'hospital': self.hospital,
            'contactPerson': self.contact_person,
            'contactPhone': self.contact_phone,
            'notes': self.notes,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'status': self.status.value,
            'createdAt': to_iso(self.created_at),
        }


class DonorResponse(db.Model):
    __tablename__ = 'donor_responses'

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(64), unique=True, nullable=False, default=new_id)
    request_id = db.Column(db.String(64), db.ForeignKey('blood_requests.id'), nullable=False)
    donor_id = db.Column(db.String(64), db.ForeignKey('donors.id'), nullable=False)
    status = enum_column(DonorResponseStatus, nullable=False)
    response_time = db.Column(db.DateTime, nullable=False, default=utc_now)

    def __repr__(self):
        return f"DonorResponse('{self.request_id}', '{self.donor_id}', '{self.status.value}')"

    def to_dict(self):
        return {
            'id': self.id,
            'requestId': self.request_id,
            'donorId': self.donor_id,
            'status': self.status.value,
            'responseTime': to_iso(self.response_time),
        }


class LifeSaverRequest(db.Model):
    """Request targeted at one selected donor."""
    __tablename__ = 'life_saver_requests'

    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(64), unique=True, nullable=False, default=new_id)
    requester_name = db.Column(db.String(100), nullable=False)
    requester_email = db.Column(db.String(120), nullable=False)
    requester_phone = db.Column(db.String(20), nullable=False)
    # Reference only; the donor is never owned by the request
    selected_donor_id = db.Column(db.String(64), db.ForeignKey('donors.id'), nullable=False)
    blood_type = enum_column(BloodType, nullable=False)
    units_required = db.Column(db.Integer, nullable=False)
    urgency_level = enum_column(UrgencyLevel, nullable=False)
    hospital = db.Column(db.String(200), nullable=False)
    request_reason = db.Column(db.Text, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    status = enum_column(LifeSaverStatus, nullable=False, default=LifeSaverStatus.PENDING)
    created_at = db.Column(db.DateTime, nullable=False, default=utc_now)
    updated_at = db.Column(db.DateTime, nullable=False, default=utc_now)
    # Set on auto-assigned follow-ups; links back to the declined request
    previous_request_id = db.Column(db.String(64), nullable=True)

    def __repr__(self):
        return f"LifeSaverRequest('{self.id}', '{self.selected_donor_id}', '{self.status.value}')"

    def clone(self, **overrides):
        """
        Copy every column except the surrogate key into a new, unsaved request.
        Keyword arguments replace the copied values.
        """
        values = {
            attr.key: getattr(self, attr.key)
            for attr in inspect(LifeSaverRequest).column_attrs
            if attr.key != 'pk'
        }
        values.update(overrides)
        return LifeSaverRequest(**values)

    def to_dict(self):
        return {
            'id': self.id,
            'requesterName': self.requester_name,
            'requesterEmail': self.requester_email,
            'requesterPhone': self.requester_phone,
            'selectedDonorId': self.selected_donor_id,
            'bloodType': self.blood_type.value,
            'unitsRequired': self.units_required,
            'urgencyLevel': self.urgency_level.value,
            'hospital': self.hospital,
            'requestReason': self.request_reason,
            'notes': self.notes,
            'status': self.status.value,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
            'previousRequestId': self.previous_request_id,
        }
