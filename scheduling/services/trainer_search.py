"""
trainer_search.py
-----------------
"Who can do this service at this time?"

Candidates are trainers with an active qualification for the service. Each
candidate goes through AvailabilityChecker.is_trainer_available; a business
rejection (not working that slot, already booked) just drops that trainer.
Survivors keep the store's enumeration order.

Only a store failure aborts the search (StoreUnavailable propagates).
"""

import logging

from .availability_checker import AvailabilityChecker
from .results import Ok, store_access, validate_interval
from .stores import QualificationStore

logger = logging.getLogger(__name__)


class TrainerEligibilitySearch:
    def __init__(self, qualifications=None, availability=None):
        self.qualifications = qualifications if qualifications is not None else QualificationStore()
        self.availability = availability if availability is not None else AvailabilityChecker()

    def find_available_trainers(self, service_id, start_time, duration_minutes):
        invalid = validate_interval(start_time, duration_minutes)
        if invalid:
            return invalid

        with store_access("find_available_trainers", service_id=service_id):
            candidate_ids = list(self.qualifications.load_qualified_trainer_ids(service_id))

        if not candidate_ids:
            return Ok([])

        available = []
        for trainer_id in candidate_ids:
            outcome = self.availability.is_trainer_available(trainer_id, start_time, duration_minutes)
            if outcome.ok and outcome.value is True:
                available.append(trainer_id)
            else:
                logger.debug(
                    "Trainer %s excluded for service %s at %s: %s",
                    trainer_id, service_id, start_time, getattr(outcome, "code", "unavailable"),
                )
        return Ok(available)
