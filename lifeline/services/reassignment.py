"""
Automatic donor reassignment for declined life saver requests.

When the donor picked for a life saver request declines, the next best donor of
the same blood type is offered a fresh copy of the request. The declined request
itself is left as it is; the follow-up is a separate request that points back to
it through `previous_request_id`, so repeated declines form a chain.
"""
import logging

from lifeline.models.donor import new_id
from lifeline.models.enums import LifeSaverStatus
from lifeline.utils.timezone import utc_now

logger = logging.getLogger(__name__)

AUTO_ASSIGN_NOTE = ' [Auto-assigned after previous donor declined]'


def donor_score(donor):
    """
    Rank a replacement donor: rating * 10 + total donations.
    An unparseable rating contributes nothing.
    """
    return donor.rating_value * 10 + (donor.total_donations or 0)


def select_donor(candidates):
    """
    Pick the highest scoring donor. Ties keep the earliest donor in the
    given order, so callers should pass donors in insertion order.
    """
    best, best_score = None, None
    for donor in candidates:
        score = donor_score(donor)
        if best is None or score > best_score:
            best, best_score = donor, score
    return best


class ReassignmentEngine:
    """
    Works against a persistence object providing `get_all_donors()`,
    `get_life_saver_request(id)` and `set_life_saver_request(request)`.
    """

    def __init__(self, persistence):
        self.persistence = persistence

    def tried_donor_ids(self, request):
        """
        Donors already offered this incident: the request's own donor plus every
        donor further back along the `previous_request_id` chain.
        """
        tried = set()
        seen = set()
        current = request
        while current is not None and current.id not in seen:
            seen.add(current.id)
            tried.add(current.selected_donor_id)
            if not current.previous_request_id:
                break
            current = self.persistence.get_life_saver_request(current.previous_request_id)
        return tried

    def eligible_candidates(self, request):
        excluded = self.tried_donor_ids(request)
        return [
            donor for donor in self.persistence.get_all_donors()
            if donor.blood_type == request.blood_type
            and donor.is_eligible
            and donor.id not in excluded
        ]

    def build_follow_up(self, declined, donor):
        now = utc_now()
        return declined.clone(
            id=new_id(),
            selected_donor_id=donor.id,
            status=LifeSaverStatus.PENDING,
            created_at=now,
            updated_at=now,
            notes=(declined.notes or '') + AUTO_ASSIGN_NOTE,
            previous_request_id=declined.id,
        )

    def reassign(self, declined):
        """
        Offer a declined request to the next best donor.

        Returns the new pending request, or None when nobody else is eligible.
        The declined request is never modified here.
        """
        donor = select_donor(self.eligible_candidates(declined))
        if donor is None:
            logger.warning(
                f"No replacement donor for declined request {declined.id} "
                f"({declined.blood_type.value})"
            )
            return None

        follow_up = self.build_follow_up(declined, donor)
        self.persistence.set_life_saver_request(follow_up)
        logger.info(
            f"Request {declined.id} declined by donor {declined.selected_donor_id}; "
            f"reassigned to donor {donor.id} as request {follow_up.id}"
        )
        return follow_up
