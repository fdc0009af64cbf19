import pytest

from lifeline.errors import InternalError, NotFoundError, ValidationError
from lifeline.models.enums import BloodRequestStatus, DonorResponseStatus, LifeSaverStatus
from conftest import donor_data, failing_commit, life_saver_data


def blood_request_data(**overrides):
    data = {
        'patient_name': 'Kiran Shah',
        'blood_type': 'B+',
        'units_required': 2,
        'urgency_level': 'urgent',
        'hospital': 'Sassoon Hospital',
        'contact_person': 'Meena Shah',
        'contact_phone': '+91 93333 44444',
    }
    data.update(overrides)
    return data


def test_new_donor_starts_unverified_and_available(store):
    donor = store.create_donor(donor_data(blood_type='AB+'))

    assert donor.id
    assert donor.is_available is True
    assert donor.is_verified is False
    assert donor.total_donations == 0
    assert donor.rating == '0'
    assert donor.last_donation is None
    assert store.get_donor(donor.id) is donor


def test_duplicate_email_is_rejected(store):
    store.create_donor(donor_data(email='same@email.com'))

    with pytest.raises(ValidationError) as excinfo:
        store.create_donor(donor_data(email='same@email.com'))

    assert 'email' in excinfo.value.errors


def test_donor_ids_cannot_be_chosen_by_the_caller(store):
    donor = store.create_donor(donor_data(id='donor-x', is_verified=True, rating='5'))

    assert donor.id != 'donor-x'
    assert donor.is_verified is False
    assert donor.rating == '0'


def test_update_donor_merges_fields(store):
    donor = store.create_donor(donor_data(full_name='Before'))

    updated = store.update_donor(donor.id, {'is_verified': True, 'rating': '4.5', 'full_name': 'After'})

    assert updated.is_verified is True
    assert updated.rating == '4.5'
    assert updated.full_name == 'After'
    assert updated.blood_type.value == 'O+'


def test_update_unknown_donor_is_not_found(store):
    with pytest.raises(NotFoundError) as excinfo:
        store.update_donor('nobody', {'is_verified': True})
    assert str(excinfo.value) == 'Donor not found'


def test_invalid_enum_value_is_a_validation_error(store):
    with pytest.raises(ValidationError) as excinfo:
        store.create_donor(donor_data(blood_type='C+'))
    assert 'bloodType' in excinfo.value.errors


def test_failed_commit_is_an_internal_error(store, monkeypatch):
    monkeypatch.setattr(store.session, 'commit', failing_commit)

    with pytest.raises(InternalError):
        store.create_donor(donor_data(email='lost@email.com'))

    monkeypatch.undo()
    assert store.get_donor_by_email('lost@email.com') is None


def test_search_returns_available_verified_donors_of_the_type(store, add_donor):
    match = add_donor('B-')
    add_donor('B-', is_available=False)
    add_donor('B-', is_verified=False)
    add_donor('B+')

    found = store.search_donors('B-', latitude='18.52', longitude='73.85', max_distance=5)

    assert [d.id for d in found] == [match.id]


def test_search_with_unknown_blood_type_is_rejected(store):
    with pytest.raises(ValidationError):
        store.search_donors('Z+')


def test_blood_request_lifecycle(store):
    blood_request = store.create_blood_request(blood_request_data())
    assert blood_request.status is BloodRequestStatus.ACTIVE
    assert blood_request.created_at is not None
    assert store.get_active_blood_requests() == [blood_request]

    store.update_blood_request(blood_request.id, {'status': 'fulfilled'})

    assert store.get_active_blood_requests() == []
    assert store.get_all_blood_requests() == [blood_request]


def test_update_unknown_blood_request_is_not_found(store):
    with pytest.raises(NotFoundError):
        store.update_blood_request('req-x', {'status': 'cancelled'})


def test_donor_responses_are_listed_by_request_and_donor(store, add_donor):
    donor = add_donor('B+')
    other = add_donor('B+')
    blood_request = store.create_blood_request(blood_request_data())

    first = store.create_donor_response(
        {'request_id': blood_request.id, 'donor_id': donor.id, 'status': 'accepted'}
    )
    second = store.create_donor_response(
        {'request_id': blood_request.id, 'donor_id': other.id, 'status': 'declined'}
    )

    assert first.status is DonorResponseStatus.ACCEPTED
    assert first.response_time is not None
    assert store.get_donor_responses_by_request(blood_request.id) == [first, second]
    assert store.get_donor_responses_by_donor(other.id) == [second]


def test_donor_response_needs_existing_request_and_donor(store, add_donor):
    donor = add_donor('B+')
    with pytest.raises(NotFoundError):
        store.create_donor_response({'request_id': 'nope', 'donor_id': donor.id, 'status': 'accepted'})

    blood_request = store.create_blood_request(blood_request_data())
    with pytest.raises(NotFoundError):
        store.create_donor_response({'request_id': blood_request.id, 'donor_id': 'nope', 'status': 'accepted'})


def test_new_life_saver_request_is_pending(store, add_donor):
    donor = add_donor('O-')

    request = store.create_life_saver_request(life_saver_data(donor))

    assert request.status is LifeSaverStatus.PENDING
    assert request.created_at == request.updated_at
    assert request.previous_request_id is None
    assert store.get_all_life_saver_requests() == [request]


def test_life_saver_request_must_match_donor_blood_type(store, add_donor):
    donor = add_donor('O-')

    with pytest.raises(ValidationError) as excinfo:
        store.create_life_saver_request(life_saver_data(donor, blood_type='O+'))

    assert 'bloodType' in excinfo.value.errors
    assert store.get_all_life_saver_requests() == []


def test_life_saver_request_for_unknown_donor_is_not_found(store, add_donor):
    donor = add_donor('O-')

    with pytest.raises(NotFoundError):
        store.create_life_saver_request(life_saver_data(donor, selected_donor_id='ghost'))


def test_life_saver_donor_cannot_be_swapped_by_update(store, add_donor, add_request):
    donor = add_donor('O-')
    other = add_donor('O-')
    request = add_request(donor)

    result = store.update_life_saver_request(request.id, {'selected_donor_id': other.id})

    assert result.request.selected_donor_id == donor.id


def test_stats_count_entities(store, add_donor, add_request):
    donor = add_donor('A+', total_donations=4)
    add_donor('A+', total_donations=2, is_verified=False)
    add_donor('A+', is_available=False)
    store.create_blood_request(blood_request_data())
    completed = store.create_blood_request(blood_request_data())
    store.update_blood_request(completed.id, {'status': 'completed'})
    add_request(donor)

    assert store.get_stats() == {
        'totalDonors': 3,
        'verifiedDonors': 2,
        'availableDonors': 1,
        'totalRequests': 2,
        'activeRequests': 1,
        'completedRequests': 1,
        'totalDonations': 6,
        'lifeSaverRequests': 1,
        'pendingLifeSaverRequests': 1,
    }
