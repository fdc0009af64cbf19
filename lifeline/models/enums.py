import enum


class BloodType(str, enum.Enum):
    A_POS = 'A+'
    A_NEG = 'A-'
    B_POS = 'B+'
    B_NEG = 'B-'
    AB_POS = 'AB+'
    AB_NEG = 'AB-'
    O_POS = 'O+'
    O_NEG = 'O-'


class UrgencyLevel(str, enum.Enum):
    CRITICAL = 'critical'
    URGENT = 'urgent'
    ROUTINE = 'routine'


class Gender(str, enum.Enum):
    MALE = 'male'
    FEMALE = 'female'
    OTHER = 'other'


class BloodRequestStatus(str, enum.Enum):
    ACTIVE = 'active'
    FULFILLED = 'fulfilled'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class DonorResponseStatus(str, enum.Enum):
    PENDING = 'pending'
    RESPONDED = 'responded'
    ACCEPTED = 'accepted'
    DECLINED = 'declined'


class LifeSaverStatus(str, enum.Enum):
    PENDING = 'pending'
    CONTACTED = 'contacted'
    ACCEPTED = 'accepted'
    DECLINED = 'declined'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'

    def can_transition_to(self, target):
        """
        Check whether a life saver request may move from this status to `target`.
        Re-applying the current status is always allowed and changes nothing.
        """
        if target is self:
            return True
        return target in _LIFE_SAVER_TRANSITIONS[self]


_LIFE_SAVER_TRANSITIONS = {
    LifeSaverStatus.PENDING: frozenset({
        LifeSaverStatus.CONTACTED,
        LifeSaverStatus.ACCEPTED,
        LifeSaverStatus.DECLINED,
        LifeSaverStatus.CANCELLED,
    }),
    LifeSaverStatus.CONTACTED: frozenset({
        LifeSaverStatus.ACCEPTED,
        LifeSaverStatus.DECLINED,
        LifeSaverStatus.CANCELLED,
        LifeSaverStatus.COMPLETED,
    }),
    LifeSaverStatus.ACCEPTED: frozenset({
        LifeSaverStatus.COMPLETED,
        LifeSaverStatus.DECLINED,
        LifeSaverStatus.CANCELLED,
    }),
    LifeSaverStatus.DECLINED: frozenset(),
    LifeSaverStatus.CANCELLED: frozenset(),
    LifeSaverStatus.COMPLETED: frozenset(),
}


def values(enum_class):
    return [member.value for member in enum_class]
