from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Union


class Stage(str, Enum):
    APPLIED = "Applied"
    OA = "Online Assessment (OA)"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"


class Result(str, Enum):
    PENDING = "Pending"
    CLEARED = "Cleared"
    REJECTED = "Rejected"


# stages that count as having reached an interview
INTERVIEW_STAGES = (Stage.INTERVIEW, Stage.OFFER)


class ValidationError(ValueError):
    """Raised when an application cannot be created from the given fields."""

    def __init__(self, missing: List[str] | None = None, invalid: Dict[str, Any] | None = None):
        self.missing = list(missing or [])
        self.invalid = dict(invalid or {})
        parts = []
        if self.missing:
            parts.append("missing: " + ", ".join(self.missing))
        if self.invalid:
            parts.append("invalid: " + ", ".join(f"{k}={v!r}" for k, v in self.invalid.items()))
        super().__init__("; ".join(parts) or "invalid application")


def parse_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


@dataclass(frozen=True)
class ApplicationRecord:
    id: int
    company_name: str
    role: str
    stage: Stage                # Applied | Online Assessment (OA) | Interview | Offer | Rejected
    result: Result              # Pending | Cleared | Rejected
    applied_date: date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "companyName": self.company_name,
            "role": self.role,
            "stage": self.stage.value,
            "result": self.result.value,
            "appliedDate": self.applied_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApplicationRecord":
        app_id = data["id"]
        if isinstance(app_id, bool) or not isinstance(app_id, int):
            raise ValueError(f"id must be an integer, got {app_id!r}")
        for key in ("companyName", "role"):
            if not isinstance(data[key], str) or not data[key].strip():
                raise ValueError(f"{key} must be a non-empty string, got {data[key]!r}")
        return cls(
            id=app_id,
            company_name=data["companyName"],
            role=data["role"],
            stage=Stage(data["stage"]),
            result=Result(data["result"]),
            applied_date=parse_date(data["appliedDate"]),
        )


@dataclass
class Summary:
    total_applications: int = 0
    total_interviews: int = 0
    total_offers: int = 0
    total_rejections: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalApplications": self.total_applications,
            "totalInterviews": self.total_interviews,
            "totalOffers": self.total_offers,
            "totalRejections": self.total_rejections,
        }
