#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Deal Model - A sales opportunity tracked in an ActiveCampaign pipeline.
"""

import json
from dataclasses import dataclass
from typing import Dict, Any, Optional

from ..exceptions import ValidationError

REQUIRED_FIELDS = ("title", "value", "currency", "owner")


def _to_minor_units(value: Any) -> int:
    """
    Convert a deal value to an integer amount of minor currency units.

    Accepts integers, integral floats and digit strings (as the API returns
    them). Fractional amounts are rejected rather than truncated.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Deal value must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"Deal value must be whole minor currency units, got {value!r}")
        return int(value)
    if isinstance(value, str):
        digits = value.strip()
        if digits.lstrip("-").isdigit():
            return int(digits)
    raise ValidationError(f"Deal value must be an integer, got {value!r}")


@dataclass
class Deal:
    """
    Deal sent to or received from the ActiveCampaign API.

    A deal must belong to a pipeline stage or a pipeline group; building one
    with neither raises ValidationError. ``value`` is in minor currency units
    (cents). Related contacts and accounts are referenced by id.
    """

    # Required
    title: str
    value: int
    currency: str
    owner: str

    # Pipeline placement (at least one)
    stage: Optional[str] = None
    group: Optional[str] = None

    # Optional
    contact: Optional[str] = None
    account: Optional[str] = None
    fields: Optional[Dict[str, Any]] = None
    description: Optional[str] = None
    percentage: Optional[int] = None
    status: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.stage and not self.group:
            raise ValidationError("Either the stage or group must be set")

        self.value = _to_minor_units(self.value)

        # Unset optional values are sent as null
        for name in ("stage", "group", "contact", "account", "fields",
                     "description", "percentage", "status"):
            if not getattr(self, name):
                setattr(self, name, None)

    def set_stage(self, stage: str) -> "Deal":
        self.stage = stage
        return self

    def set_group(self, group: str) -> "Deal":
        self.group = group
        return self

    def set_contact(self, contact: str) -> "Deal":
        self.contact = contact
        return self

    def set_account(self, account: str) -> "Deal":
        self.account = account
        return self

    def set_fields(self, fields: Dict[str, Any]) -> "Deal":
        self.fields = fields
        return self

    def set_description(self, description: str) -> "Deal":
        self.description = description
        return self

    def set_percentage(self, percentage: int) -> "Deal":
        self.percentage = percentage
        return self

    def set_status(self, status: str) -> "Deal":
        self.status = status
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert deal to a flat dictionary."""
        return {
            "title": self.title,
            "value": self.value,
            "currency": self.currency,
            "owner": self.owner,
            "stage": self.stage,
            "group": self.group,
            "contact": self.contact,
            "account": self.account,
            "fields": self.fields,
            "description": self.description,
            "percentage": self.percentage,
            "status": self.status,
        }

    def to_payload(self) -> Dict[str, Any]:
        """Convert deal to the ``{"deal": {...}}`` request body."""
        return {"deal": self.to_dict()}

    def to_json(self) -> str:
        """Convert deal to a JSON request body."""
        return json.dumps(self.to_payload())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Deal":
        """
        Create a deal from dictionary data.

        Raises:
            ValidationError: If a required field is missing, or the data
                holds neither a stage nor a group
        """
        missing = [name for name in REQUIRED_FIELDS if data.get(name) is None]
        if missing:
            raise ValidationError(f"Deal data is missing required fields: {', '.join(missing)}")

        deal = cls(
            title=data["title"],
            value=data["value"],
            currency=data["currency"],
            owner=data["owner"],
            stage=data.get("stage"),
            group=data.get("group"),
        )

        if data.get("contact") is not None:
            deal.set_contact(data["contact"])

        if data.get("account") is not None:
            deal.set_account(data["account"])

        if data.get("fields") is not None:
            deal.set_fields(data["fields"])

        if data.get("description") is not None:
            deal.set_description(data["description"])

        if data.get("percentage") is not None:
            deal.set_percentage(data["percentage"])

        if data.get("status") is not None:
            deal.set_status(data["status"])

        return deal

    @classmethod
    def from_json(cls, json_str: str) -> "Deal":
        """Create a deal from a JSON string, enveloped or flat."""
        data = json.loads(json_str)
        if isinstance(data.get("deal"), dict):
            data = data["deal"]
        return cls.from_dict(data)
