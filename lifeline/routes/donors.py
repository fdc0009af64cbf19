from flask import Blueprint, request, jsonify
from lifeline.errors import NotFoundError
from lifeline.forms.donor_forms import DonorRegistrationForm, DonorUpdateForm
from lifeline.services import get_store
from lifeline.utils.payload import validate_payload

donors = Blueprint('donors', __name__)


@donors.route('', methods=['POST'])
def register_donor():
    data = validate_payload(DonorRegistrationForm)
    donor = get_store().create_donor(data)
    return jsonify(donor.to_dict())


@donors.route('', methods=['GET'])
def list_donors():
    return jsonify([donor.to_dict() for donor in get_store().get_all_donors()])


@donors.route('/<donor_id>', methods=['GET'])
def get_donor(donor_id):
    donor = get_store().get_donor(donor_id)
    if donor is None:
        raise NotFoundError('Donor')
    return jsonify(donor.to_dict())


@donors.route('/<donor_id>', methods=['PATCH'])
def update_donor(donor_id):
    changes = validate_payload(DonorUpdateForm)
    donor = get_store().update_donor(donor_id, changes)
    return jsonify(donor.to_dict())


@donors.route('/search/<path:blood_type>', methods=['GET'])
def search_donors(blood_type):
    # Location parameters are passed through but not applied by the store
    results = get_store().search_donors(
        blood_type,
        latitude=request.args.get('lat'),
        longitude=request.args.get('lng'),
        max_distance=request.args.get('distance', 50, type=int),
    )
    return jsonify([donor.to_dict() for donor in results])
