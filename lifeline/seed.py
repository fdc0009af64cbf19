import logging
from datetime import datetime

from lifeline.models.donor import Donor
from lifeline.models.enums import (
    BloodType, Gender, UrgencyLevel, BloodRequestStatus, DonorResponseStatus
)
from lifeline.models.request import BloodRequest, DonorResponse

logger = logging.getLogger(__name__)

SAMPLE_DONORS = [
    ('donor-1', 'Raj Sharma', 'raj.sharma@email.com', '+91 98765 43210', BloodType.O_POS,
     '1990-05-15', Gender.MALE, 75, '123 Main Street, Mumbai, Maharashtra',
     '19.0760', '72.8777', True, 23, '4.9'),
    ('donor-2', 'Priya Patel', 'priya.patel@email.com', '+91 87654 32109', BloodType.A_POS,
     '1988-08-22', Gender.FEMALE, 62, '456 Park Avenue, Delhi',
     '28.6139', '77.2090', True, 15, '4.7'),
    ('donor-3', 'Amit Kumar', 'amit.kumar@email.com', '+91 76543 21098', BloodType.B_NEG,
     '1985-12-10', Gender.MALE, 80, '789 Lake Road, Bangalore, Karnataka',
     '12.9716', '77.5946', False, 31, '4.8'),
    ('donor-4', 'Sneha Reddy', 'sneha.reddy@email.com', '+91 98456 78901', BloodType.AB_POS,
     '1992-03-18', Gender.FEMALE, 58, '321 Garden Street, Hyderabad, Telangana',
     '17.3850', '78.4867', True, 12, '4.6'),
    ('donor-5', 'Rohit Singh', 'rohit.singh@email.com', '+91 87965 23401', BloodType.O_NEG,
     '1987-09-25', Gender.MALE, 72, '654 River View, Pune, Maharashtra',
     '18.5204', '73.8567', True, 45, '5.0'),
    ('donor-6', 'Kavya Nair', 'kavya.nair@email.com', '+91 76823 45678', BloodType.A_NEG,
     '1995-07-12', Gender.FEMALE, 55, '987 Coastal Road, Kochi, Kerala',
     '9.9312', '76.2673', True, 8, '4.5'),
    ('donor-7', 'Arjun Gupta', 'arjun.gupta@email.com', '+91 98234 56789', BloodType.B_POS,
     '1991-11-08', Gender.MALE, 78, '159 Hill Station Road, Shimla, Himachal Pradesh',
     '31.1048', '77.1734', True, 19, '4.7'),
    ('donor-8', 'Meera Joshi', 'meera.joshi@email.com', '+91 87654 90123', BloodType.AB_NEG,
     '1989-01-30', Gender.FEMALE, 60, '753 Temple Street, Jaipur, Rajasthan',
     '26.9124', '75.7873', True, 27, '4.8'),
]


def sample_donors():
    donors = []
    for (donor_id, name, email, phone, blood_type, dob, gender, weight, address,
         latitude, longitude, available, total, rating) in SAMPLE_DONORS:
        donors.append(Donor(
            id=donor_id,
            full_name=name,
            email=email,
            phone=phone,
            blood_type=blood_type,
            date_of_birth=dob,
            gender=gender,
            weight=weight,
            address=address,
            latitude=latitude,
            longitude=longitude,
            is_available=available,
            is_verified=True,
            total_donations=total,
            rating=rating,
        ))
    return donors


def sample_blood_requests():
    return [
        BloodRequest(
            id='req-1',
            patient_name='Anil Mehta',
            blood_type=BloodType.O_POS,
            units_required=2,
            urgency_level=UrgencyLevel.CRITICAL,
            hospital='Mumbai General Hospital',
            contact_person='Sunita Mehta',
            contact_phone='+91 99887 76655',
            notes='Emergency surgery',
            latitude='19.0706',
            longitude='72.8698',
            status=BloodRequestStatus.ACTIVE,
            created_at=datetime(2024, 8, 10, 10, 0),
        ),
        BloodRequest(
            id='req-2',
            patient_name='Lata Desai',
            blood_type=BloodType.A_NEG,
            units_required=1,
            urgency_level=UrgencyLevel.ROUTINE,
            hospital='Pune City Hospital',
            contact_person='Vikram Desai',
            contact_phone='+91 98700 11223',
            notes='Chronic illness',
            latitude='18.5204',
            longitude='73.8567',
            status=BloodRequestStatus.FULFILLED,
            created_at=datetime(2024, 8, 9, 14, 30),
        ),
    ]


def sample_donor_responses():
    return [
        DonorResponse(id='resp-1', request_id='req-1', donor_id='donor-1',
                      status=DonorResponseStatus.ACCEPTED,
                      response_time=datetime(2024, 8, 10, 10, 15)),
        DonorResponse(id='resp-2', request_id='req-2', donor_id='donor-6',
                      status=DonorResponseStatus.ACCEPTED,
                      response_time=datetime(2024, 8, 9, 14, 45)),
    ]


def seed_data(session):
    """
    Load the demonstration donors, blood requests and responses.
    Does nothing when donors already exist.
    """
    if session.query(Donor).first() is not None:
        logger.info("Registry already populated, skipping seed data")
        return False

    session.add_all(sample_donors())
    session.add_all(sample_blood_requests())
    session.flush()
    session.add_all(sample_donor_responses())
    session.commit()
    logger.info(f"Seeded {len(SAMPLE_DONORS)} donors")
    return True
