#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Contact Model - A person stored in ActiveCampaign, identified by email.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, Any

from ..exceptions import ValidationError


@dataclass
class Contact:
    """
    Contact sent to or received from the ActiveCampaign API.

    The email is the contact's identity and cannot be changed once set. Every
    other field can be updated with the ``set_*`` methods, which modify the
    contact in place and return it so calls can be chained.
    """

    email: str
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    field_values: Dict[str, Any] = field(default_factory=dict)
    orgid: str = ""

    def __post_init__(self) -> None:
        if not self.email:
            raise ValidationError("Contact email is required")

        # Falsy optional values collapse to their empty defaults
        self.first_name = self.first_name or ""
        self.last_name = self.last_name or ""
        self.phone = self.phone or ""
        self.field_values = self.field_values or {}
        self.orgid = self.orgid or ""

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "email" and "email" in self.__dict__:
            raise AttributeError("Contact email cannot be changed")
        super().__setattr__(name, value)

    def set_first_name(self, first_name: str) -> "Contact":
        self.first_name = first_name
        return self

    def set_last_name(self, last_name: str) -> "Contact":
        self.last_name = last_name
        return self

    def set_phone(self, phone: str) -> "Contact":
        self.phone = phone
        return self

    def set_field_values(self, field_values: Dict[str, Any]) -> "Contact":
        self.field_values = field_values
        return self

    def set_orgid(self, orgid: str) -> "Contact":
        self.orgid = orgid
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert contact to a flat dictionary keyed by API field names."""
        return {
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "fieldValues": self.field_values,
            "orgid": self.orgid,
        }

    def to_payload(self) -> Dict[str, Any]:
        """Convert contact to the ``{"contact": {...}}`` request body."""
        return {"contact": self.to_dict()}

    def to_json(self) -> str:
        """Convert contact to a JSON request body."""
        return json.dumps(self.to_payload())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contact":
        """
        Create a contact from dictionary data.

        Accepts the keys produced by ``to_dict`` as well as the camelCase name
        keys returned by the API. Keys that are missing or null keep their
        defaults.

        Raises:
            ValidationError: If the data has no email
        """
        if not data.get("email"):
            raise ValidationError("Contact data must include an email")

        contact = cls(data["email"])

        first_name = data.get("first_name", data.get("firstName"))
        if first_name is not None:
            contact.set_first_name(first_name)

        last_name = data.get("last_name", data.get("lastName"))
        if last_name is not None:
            contact.set_last_name(last_name)

        if data.get("phone") is not None:
            contact.set_phone(data["phone"])

        if data.get("fieldValues") is not None:
            contact.set_field_values(data["fieldValues"])

        if data.get("orgid") is not None:
            contact.set_orgid(data["orgid"])

        return contact

    @classmethod
    def from_json(cls, json_str: str) -> "Contact":
        """Create a contact from a JSON string, enveloped or flat."""
        data = json.loads(json_str)
        if isinstance(data.get("contact"), dict):
            data = data["contact"]
        return cls.from_dict(data)
