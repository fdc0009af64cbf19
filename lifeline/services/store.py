"""
Registry store: donors, broadcast blood requests, donor responses and life
saver requests.

The store is plain CRUD over the SQLAlchemy session with a few referential
defaults. The only business rule it runs is handing declined life saver
requests to the reassignment engine.
"""
import logging
import threading
from collections import namedtuple

from sqlalchemy.exc import SQLAlchemyError

from lifeline.errors import InternalError, NotFoundError, ValidationError
from lifeline.models.donor import Donor
from lifeline.models.enums import (
    BloodType, Gender, UrgencyLevel, BloodRequestStatus, DonorResponseStatus, LifeSaverStatus
)
from lifeline.models.request import BloodRequest, DonorResponse, LifeSaverRequest
from lifeline.services.reassignment import ReassignmentEngine
from lifeline.utils.payload import snake_to_camel
from lifeline.utils.timezone import utc_now

logger = logging.getLogger(__name__)

# Outcome of a life saver update; `reassignment` is the follow-up request, if one was made
UpdateResult = namedtuple('UpdateResult', ['request', 'reassignment'])

DONOR_FIELDS = {
    'full_name', 'email', 'phone', 'blood_type', 'date_of_birth', 'gender', 'weight',
    'address', 'latitude', 'longitude',
}
DONOR_UPDATE_FIELDS = DONOR_FIELDS | {
    'is_available', 'is_verified', 'total_donations', 'rating', 'last_donation',
}
BLOOD_REQUEST_FIELDS = {
    'patient_name', 'blood_type', 'units_required', 'urgency_level', 'hospital',
    'contact_person', 'contact_phone', 'notes', 'latitude', 'longitude',
}
BLOOD_REQUEST_UPDATE_FIELDS = (BLOOD_REQUEST_FIELDS | {'status'}) - {'patient_name', 'blood_type'}
DONOR_RESPONSE_FIELDS = {'request_id', 'donor_id', 'status'}
LIFE_SAVER_FIELDS = {
    'requester_name', 'requester_email', 'requester_phone', 'selected_donor_id',
    'blood_type', 'units_required', 'urgency_level', 'hospital', 'request_reason', 'notes',
}
# Donor and blood type are fixed once a request exists
LIFE_SAVER_UPDATE_FIELDS = (LIFE_SAVER_FIELDS | {'status'}) - {'selected_donor_id', 'blood_type'}

ENUM_FIELDS = {
    Donor: {'blood_type': BloodType, 'gender': Gender},
    BloodRequest: {
        'blood_type': BloodType, 'urgency_level': UrgencyLevel, 'status': BloodRequestStatus,
    },
    DonorResponse: {'status': DonorResponseStatus},
    LifeSaverRequest: {
        'blood_type': BloodType, 'urgency_level': UrgencyLevel, 'status': LifeSaverStatus,
    },
}


def _clean(model, data, allowed):
    """Keep the allowed keys and turn enum fields into enum members."""
    cleaned = {}
    errors = {}
    enums = ENUM_FIELDS[model]
    for key, value in data.items():
        if key not in allowed:
            continue
        if key in enums:
            if value is None:
                errors[snake_to_camel(key)] = ['This field is required.']
                continue
            try:
                value = enums[key](value)
            except ValueError:
                errors[snake_to_camel(key)] = [f"'{value}' is not a valid {enums[key].__name__}"]
                continue
        cleaned[key] = value
    if errors:
        raise ValidationError(errors=errors)
    return cleaned


class RegistryStore:
    def __init__(self, db):
        self.db = db
        self._life_saver_lock = threading.Lock()
        self.reassignment = ReassignmentEngine(self)

    @property
    def session(self):
        return self.db.session

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError as error:
            self.session.rollback()
            raise InternalError(f"Could not save registry changes: {error}") from error

    # Donors

    def get_donor(self, donor_id):
        return Donor.query.filter_by(id=donor_id).first()

    def get_donor_by_email(self, email):
        return Donor.query.filter_by(email=email).first()

    def get_all_donors(self):
        return Donor.query.order_by(Donor.pk).all()

    def create_donor(self, data):
        fields = _clean(Donor, data, DONOR_FIELDS)
        if self.get_donor_by_email(fields.get('email')):
            raise ValidationError(errors={'email': ['That email is already registered.']})

        donor = Donor(**fields)
        donor.is_available = True
        donor.is_verified = False
        donor.total_donations = 0
        donor.rating = '0'
        donor.last_donation = None
        self.session.add(donor)
        self._commit()
        logger.info(f"Registered donor {donor.id} ({donor.blood_type.value})")
        return donor

    def update_donor(self, donor_id, changes):
        donor = self.get_donor(donor_id)
        if donor is None:
            raise NotFoundError('Donor')

        fields = _clean(Donor, changes, DONOR_UPDATE_FIELDS)
        if 'email' in fields and fields['email'] != donor.email:
            if self.get_donor_by_email(fields['email']):
                raise ValidationError(errors={'email': ['That email is already registered.']})
        for key, value in fields.items():
            setattr(donor, key, value)
        self._commit()
        return donor

    def search_donors(self, blood_type, latitude=None, longitude=None, max_distance=50):
        """
        Available, verified donors of the given blood type.

        Location arguments are accepted for API compatibility but not applied:
        there is no distance filtering.
        """
        try:
            blood_type = BloodType(blood_type)
        except ValueError:
            raise ValidationError(errors={'bloodType': [f"'{blood_type}' is not a valid BloodType"]})
        if latitude or longitude:
            logger.debug(f"Ignoring location filter ({latitude}, {longitude}, {max_distance} km)")
        return (
            Donor.query
            .filter_by(blood_type=blood_type, is_available=True, is_verified=True)
            .order_by(Donor.pk)
            .all()
        )

    # Broadcast blood requests

    def get_blood_request(self, request_id):
        return BloodRequest.query.filter_by(id=request_id).first()

    def get_all_blood_requests(self):
        return BloodRequest.query.order_by(BloodRequest.pk).all()

    def get_active_blood_requests(self):
        return (
            BloodRequest.query
            .filter_by(status=BloodRequestStatus.ACTIVE)
            .order_by(BloodRequest.pk)
            .all()
        )

    def create_blood_request(self, data):
        blood_request = BloodRequest(**_clean(BloodRequest, data, BLOOD_REQUEST_FIELDS))
        blood_request.status = BloodRequestStatus.ACTIVE
        blood_request.created_at = utc_now()
        self.session.add(blood_request)
        self._commit()
        logger.info(
            f"Blood request {blood_request.id} opened for {blood_request.units_required} "
            f"unit(s) of {blood_request.blood_type.value} ({blood_request.urgency_level.value})"
        )
        return blood_request

    def update_blood_request(self, request_id, changes):
        blood_request = self.get_blood_request(request_id)
        if blood_request is None:
            raise NotFoundError('Blood request')

        for key, value in _clean(BloodRequest, changes, BLOOD_REQUEST_UPDATE_FIELDS).items():
            setattr(blood_request, key, value)
        self._commit()
        return blood_request

    # Donor responses

    def create_donor_response(self, data):
        fields = _clean(DonorResponse, data, DONOR_RESPONSE_FIELDS)
        if self.get_blood_request(fields.get('request_id')) is None:
            raise NotFoundError('Blood request')
        if self.get_donor(fields.get('donor_id')) is None:
            raise NotFoundError('Donor')

        response = DonorResponse(**fields)
        response.response_time = utc_now()
        self.session.add(response)
        self._commit()
        return response

    def get_donor_responses_by_request(self, request_id):
        return DonorResponse.query.filter_by(request_id=request_id).order_by(DonorResponse.pk).all()

    def get_donor_responses_by_donor(self, donor_id):
        return DonorResponse.query.filter_by(donor_id=donor_id).order_by(DonorResponse.pk).all()

    # Life saver requests

    def get_life_saver_request(self, request_id):
        return LifeSaverRequest.query.filter_by(id=request_id).first()

    def get_all_life_saver_requests(self):
        return LifeSaverRequest.query.order_by(LifeSaverRequest.pk).all()

    def set_life_saver_request(self, request):
        """
        Insert or replace a life saver request. The write is flushed but left for
        the calling operation to commit.
        """
        self.session.add(request)
        self.session.flush()
        return request

    def create_life_saver_request(self, data):
        fields = _clean(LifeSaverRequest, data, LIFE_SAVER_FIELDS)
        donor = self.get_donor(fields.get('selected_donor_id'))
        if donor is None:
            raise NotFoundError('Donor')
        if donor.blood_type != fields.get('blood_type'):
            raise ValidationError(errors={
                'bloodType': [f"Selected donor has blood type {donor.blood_type.value}"]
            })

        now = utc_now()
        request = LifeSaverRequest(**fields)
        request.status = LifeSaverStatus.PENDING
        request.created_at = now
        request.updated_at = now
        request.previous_request_id = None
        self.set_life_saver_request(request)
        self._commit()
        logger.info(f"Life saver request {request.id} sent to donor {donor.id}")
        return request

    def update_life_saver_request(self, request_id, changes):
        """
        Merge `changes` into a life saver request and refresh `updated_at`.

        A move into `declined` hands the request to the reassignment engine in the
        same transaction. Re-declining an already declined request changes nothing
        else and does not reassign again.
        """
        with self._life_saver_lock:
            request = self.get_life_saver_request(request_id)
            if request is None:
                raise NotFoundError('Life saver request')

            fields = _clean(LifeSaverRequest, changes, LIFE_SAVER_UPDATE_FIELDS)
            previous_status = request.status
            status = fields.get('status', previous_status)
            if not previous_status.can_transition_to(status):
                raise ValidationError(errors={
                    'status': [f"Cannot change status from {previous_status.value} to {status.value}"]
                })

            for key, value in fields.items():
                setattr(request, key, value)
            request.updated_at = utc_now()

            try:
                self.set_life_saver_request(request)
                reassignment = None
                if status is LifeSaverStatus.DECLINED and previous_status is not LifeSaverStatus.DECLINED:
                    reassignment = self.reassignment.reassign(request)
            except SQLAlchemyError as error:
                self.session.rollback()
                raise InternalError(f"Could not update life saver request {request_id}: {error}") from error
            self._commit()
            return UpdateResult(request, reassignment)

    # Statistics

    def get_stats(self):
        donors = self.get_all_donors()
        requests = self.get_all_blood_requests()
        life_saver_requests = self.get_all_life_saver_requests()
        return {
            'totalDonors': len(donors),
            'verifiedDonors': sum(1 for d in donors if d.is_verified),
            'availableDonors': sum(1 for d in donors if d.is_eligible),
            'totalRequests': len(requests),
            'activeRequests': sum(1 for r in requests if r.status is BloodRequestStatus.ACTIVE),
            'completedRequests': sum(1 for r in requests if r.status is BloodRequestStatus.COMPLETED),
            'totalDonations': sum(d.total_donations or 0 for d in donors),
            'lifeSaverRequests': len(life_saver_requests),
            'pendingLifeSaverRequests': sum(
                1 for r in life_saver_requests if r.status is LifeSaverStatus.PENDING
            ),
        }
