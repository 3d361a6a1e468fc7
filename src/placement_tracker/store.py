"""In-memory collection of applications mirrored to a key/value storage slot."""
import json
import logging
import time
from datetime import date, timedelta
from typing import Callable, Iterator, List, Optional, Tuple

from .models import (
    INTERVIEW_STAGES,
    ApplicationRecord,
    Result,
    Stage,
    Summary,
    ValidationError,
    parse_date,
)

logger = logging.getLogger(__name__)

STORAGE_KEY = "placementApplications"

# (company, role, stage, result, days before today)
SEED_APPLICATIONS = [
    ("TechCorp Inc.", "Software Engineer Intern", Stage.APPLIED, Result.PENDING, 0),
    ("DataSystems Ltd.", "Data Analyst", Stage.OA, Result.CLEARED, 5),
    ("InnovateSoft", "Frontend Developer", Stage.INTERVIEW, Result.PENDING, 3),
    ("GlobalBank", "Cybersecurity Analyst", Stage.OFFER, Result.CLEARED, 10),
    ("RetailGiant", "Product Manager Intern", Stage.REJECTED, Result.REJECTED, 14),
]

REQUIRED_FIELDS = ("company_name", "role", "stage", "result", "applied_date")


def _now_ms() -> int:
    return int(time.time() * 1000)


def seed_records(today: date) -> List[ApplicationRecord]:
    return [
        ApplicationRecord(
            id=i,
            company_name=company,
            role=role,
            stage=stage,
            result=result,
            applied_date=today - timedelta(days=days_ago),
        )
        for i, (company, role, stage, result, days_ago) in enumerate(SEED_APPLICATIONS, start=1)
    ]


class ApplicationStore:
    """Owns the application list and keeps the storage slot in sync with it.

    Args:
        storage: object with ``get_item``/``set_item`` (see ``storage.MemoryStorage``)
        key: name of the storage slot
        clock: returns the current time in epoch milliseconds, used for new ids
        today: returns the current date, used to date the example records
        seed: fill an empty slot with example records on ``load``
    """

    def __init__(
        self,
        storage,
        key: str = STORAGE_KEY,
        clock: Optional[Callable[[], int]] = None,
        today: Optional[Callable[[], date]] = None,
        seed: bool = True,
    ):
        self.storage = storage
        self.key = key
        self.clock = clock or _now_ms
        self.today = today or date.today
        self.seed = seed
        self._records: List[ApplicationRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ApplicationRecord]:
        return iter(list(self._records))

    @property
    def records(self) -> Tuple[ApplicationRecord, ...]:
        return tuple(self._records)

    @property
    def is_empty(self) -> bool:
        return not self._records

    def get(self, app_id: int) -> Optional[ApplicationRecord]:
        for record in self._records:
            if record.id == app_id:
                return record
        return None

    def load(self) -> List[ApplicationRecord]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            if self.seed:
                self._records = seed_records(self.today())
                self.persist()
                logger.info("Seeded %d example applications", len(self._records))
            else:
                self._records = []
            return list(self._records)

        self._records = self._decode(raw)
        logger.debug("Loaded %d applications from %r", len(self._records), self.key)
        return list(self._records)

    def _decode(self, raw: str) -> List[ApplicationRecord]:
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError(f"expected a list, got {type(items).__name__}")
            return [ApplicationRecord.from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError) as e:
            # the slot is left as is until the next write replaces it
            logger.warning("Ignoring unreadable data in %r: %s", self.key, e)
            return []

    def persist(self) -> None:
        payload = json.dumps([record.to_dict() for record in self._records])
        self.storage.set_item(self.key, payload)

    def add(self, company_name, role, stage, result, applied_date) -> ApplicationRecord:
        if isinstance(company_name, str):
            company_name = company_name.strip()
        if isinstance(role, str):
            role = role.strip()
        values = {
            "company_name": company_name,
            "role": role,
            "stage": stage,
            "result": result,
            "applied_date": applied_date,
        }
        missing = [name for name in REQUIRED_FIELDS if values[name] in (None, "")]
        if missing:
            raise ValidationError(missing=missing)

        invalid = {}
        for name in ("company_name", "role"):
            if not isinstance(values[name], str):
                invalid[name] = values[name]
        try:
            stage = Stage(stage)
        except ValueError:
            invalid["stage"] = stage
        try:
            result = Result(result)
        except ValueError:
            invalid["result"] = result
        try:
            applied_date = parse_date(applied_date)
        except (TypeError, ValueError):
            invalid["applied_date"] = applied_date
        if invalid:
            raise ValidationError(invalid=invalid)

        record = ApplicationRecord(
            id=self._next_id(),
            company_name=company_name,
            role=role,
            stage=stage,
            result=result,
            applied_date=applied_date,
        )
        self._records.append(record)
        self.persist()
        logger.info("Added application %s: %s | %s", record.id, record.company_name, record.role)
        return record

    def _next_id(self) -> int:
        new_id = self.clock()
        taken = {record.id for record in self._records}
        if new_id in taken:
            new_id = max(taken) + 1
        return new_id

    def delete(self, app_id: int, confirm: Optional[Callable[[Optional[ApplicationRecord]], bool]] = None) -> bool:
        """Remove the application with ``app_id``.

        ``confirm`` is asked first (with the matching record, or ``None``) and a
        falsy answer cancels the delete. Returns False only when cancelled; an
        unknown id is not an error.
        """
        if confirm is not None and not confirm(self.get(app_id)):
            logger.debug("Delete of %s cancelled", app_id)
            return False

        before = len(self._records)
        self._records = [record for record in self._records if record.id != app_id]
        self.persist()
        if len(self._records) < before:
            logger.info("Deleted application %s", app_id)
        else:
            logger.debug("No application with id %s", app_id)
        return True

    def summary(self) -> Summary:
        return Summary(
            total_applications=len(self._records),
            total_interviews=sum(1 for r in self._records if r.stage in INTERVIEW_STAGES),
            total_offers=sum(1 for r in self._records if r.stage == Stage.OFFER),
            total_rejections=sum(1 for r in self._records if r.result == Result.REJECTED),
        )
