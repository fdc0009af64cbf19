from flask import Blueprint, jsonify
from lifeline.forms.request_forms import DonorResponseForm
from lifeline.services import get_store
from lifeline.utils.payload import validate_payload

donor_responses = Blueprint('donor_responses', __name__)


@donor_responses.route('', methods=['POST'])
def create_donor_response():
    data = validate_payload(DonorResponseForm)
    response = get_store().create_donor_response(data)
    return jsonify(response.to_dict())


@donor_responses.route('/request/<request_id>', methods=['GET'])
def responses_for_request(request_id):
    responses = get_store().get_donor_responses_by_request(request_id)
    return jsonify([r.to_dict() for r in responses])


@donor_responses.route('/donor/<donor_id>', methods=['GET'])
def responses_by_donor(donor_id):
    responses = get_store().get_donor_responses_by_donor(donor_id)
    return jsonify([r.to_dict() for r in responses])
