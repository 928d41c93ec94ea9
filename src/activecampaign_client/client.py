#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ActiveCampaign API Integration

Provides a client for the ActiveCampaign v3 REST API. Every endpoint method
builds a request through a single request helper that injects the API key,
encodes JSON bodies, decodes JSON responses and turns failures into
ActiveCampaignError subclasses.
"""

import json
import logging
from typing import Dict, List, Any, Optional, Union
from urllib.parse import urlencode

import requests

from .config import ClientConfig, DEFAULT_TIMEOUT
from .exceptions import ApiError, TransportError, UNKNOWN_ERROR_MESSAGE
from .models import Contact, Deal
from .utils.logger import get_logger, log_integration_event, log_sensitive

# Configure logger
logger = get_logger(__name__)

# Constants
API_PREFIX = "/api/3"
ALLOWED_METHODS = ("GET", "POST", "PUT")
USER_AGENT = "activecampaign-client"

Payload = Union[Dict[str, Any], Contact, Deal]


class ActiveCampaignClient:
    """
    Client for interacting with the ActiveCampaign API.

    Holds the account's API URL, API key and an optional default e-commerce
    connection id. All three are fixed once the client is built.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        connection_id: Optional[Union[int, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the ActiveCampaign client.

        Args:
            api_url: Account API URL, e.g. https://youraccount.api-us1.com
            api_key: ActiveCampaign API key
            connection_id: Default connection id for connection customer lookups
            timeout: Request timeout in seconds, passed to the transport
            session: Requests session to use (a new one is created if None)
        """
        if not api_url:
            raise ValueError("ActiveCampaign API URL is required")
        if not api_key:
            raise ValueError("ActiveCampaign API key is required")

        self._api_url = api_url.rstrip("/")
        self._api_key = api_key
        self._connection_id = connection_id
        self.timeout = timeout

        self.session = session or requests.Session()
        self._configure_session()

        log_integration_event("activecampaign", "initialize", f"Initialized client for {self._api_url}")

    @classmethod
    def from_config(cls, config: Optional[ClientConfig] = None, **kwargs: Any) -> "ActiveCampaignClient":
        """
        Build a client from a ClientConfig.

        Args:
            config: Client configuration (or None to read the environment)
            **kwargs: Extra arguments passed to the constructor

        Returns:
            ActiveCampaignClient: Configured client
        """
        config = config or ClientConfig()
        return cls(
            api_url=config.api_url,
            api_key=config.api_key,
            connection_id=config.connection_id,
            timeout=config.timeout,
            **kwargs,
        )

    def _configure_session(self) -> None:
        """Set the default headers on the requests session."""
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        })

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def connection_id(self) -> Optional[Union[int, str]]:
        return self._connection_id

    def with_connection_id(self, connection_id: Union[int, str]) -> "ActiveCampaignClient":
        """
        Return a client that uses a different default connection id.

        The new client shares this client's URL, key, timeout and session.
        """
        return ActiveCampaignClient(
            api_url=self._api_url,
            api_key=self._api_key,
            connection_id=connection_id,
            timeout=self.timeout,
            session=self.session,
        )

    def close(self) -> None:
        """Close the underlying requests session."""
        self.session.close()

    def __enter__(self) -> "ActiveCampaignClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ActiveCampaignClient(api_url={self._api_url!r}, connection_id={self._connection_id!r})"

    def _build_url(self, endpoint: str, params: Dict[str, Any]) -> str:
        """
        Build the full request URL, API key included.

        Query parameters must be scalars (or lists of scalars). Nested filters
        are passed with flat bracketed keys, e.g. ``{"filters[stage]": 2}``.

        Raises:
            ValueError: If a parameter value is a mapping or nested list
        """
        query = dict(params)
        for key, value in query.items():
            values = value if isinstance(value, (list, tuple)) else [value]
            if any(isinstance(item, (dict, list, tuple)) for item in values):
                raise ValueError(
                    f"Query parameter '{key}' must be a scalar; use flat keys such as '{key}[name]'"
                )
        query["api_key"] = self._api_key
        return f"{self._api_url}{API_PREFIX}{endpoint}?{urlencode(query, doseq=True)}"

    def _make_request(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        method: str = "GET",
        data: Optional[Payload] = None,
    ) -> Dict[str, Any]:
        """
        Make a request to the API.

        Args:
            endpoint: Endpoint path relative to the API prefix, e.g. ``/contacts``
            params: Query parameters (scalar values, flat bracketed keys)
            method: HTTP method (GET, POST or PUT)
            data: Request body for POST and PUT requests

        Returns:
            Dict: Decoded JSON response

        Raises:
            TransportError: If the request could not be completed
            ApiError: If the API answered with a non-2xx status or an error body
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = self._build_url(endpoint, params or {})

        body = None
        if method in ("POST", "PUT"):
            if isinstance(data, (Contact, Deal)):
                data = data.to_payload()
            body = json.dumps(data if data is not None else {})

        log_sensitive(logger, logging.DEBUG, f"{method} {url}", api_key=self._api_key)

        try:
            response = self.session.request(method, url, data=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request error on {method} {endpoint}: {e}")
            raise TransportError(str(e))

        status_code = response.status_code
        try:
            result = response.json() if response.content else {}
        except ValueError:
            result = None

        is_success = 200 <= status_code < 300
        if is_success and result is None:
            logger.error(f"Invalid JSON response from {method} {endpoint}")
            raise ApiError(status_code, "Invalid JSON response")

        if not isinstance(result, dict):
            result = {}

        if not is_success or result.get("status") == "error":
            message = result.get("error") or UNKNOWN_ERROR_MESSAGE
            logger.error(f"ActiveCampaign API error on {method} {endpoint} ({status_code}): {message}")
            raise ApiError(status_code, message, result)

        logger.debug(f"{method} {endpoint} completed with status {status_code}")
        return result

    def _unwrap(self, response: Dict[str, Any], key: str) -> Any:
        """Extract the named field from a decoded response."""
        if key not in response:
            raise ApiError(200, f"Response missing '{key}'", response)
        return response[key]

    # Contacts

    def get_contacts(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Get a list of contacts.

        Args:
            params: Optional filter and sort parameters, with flat keys
                such as ``"filters[stage]"``

        Returns:
            List[Dict]: Contacts
        """
        response = self._make_request("/contacts", params)
        return self._unwrap(response, "contacts")

    def get_contact(self, contact_id: Union[int, str]) -> Dict[str, Any]:
        """Get a contact by ID."""
        response = self._make_request(f"/contacts/{contact_id}")
        return self._unwrap(response, "contact")

    def create_contact(self, contact: Contact) -> Contact:
        """
        Create a contact.

        Args:
            contact: Contact to create

        Returns:
            Contact: The contact as stored by ActiveCampaign
        """
        log_sensitive(logger, logging.INFO, f"Creating contact {contact.email}", email=contact.email)
        response = self._make_request("/contacts", method="POST", data=contact)
        return Contact.from_dict(self._unwrap(response, "contact"))

    def update_contact(self, contact_id: Union[int, str], data: Payload) -> Dict[str, Any]:
        """
        Update a contact.

        Args:
            contact_id: ID of the contact to update
            data: Request body, usually ``{"contact": {...}}``

        Returns:
            Dict: The updated contact
        """
        response = self._make_request(f"/contacts/{contact_id}", method="PUT", data=data)
        return self._unwrap(response, "contact")

    # Accounts

    def get_accounts(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Get a list of accounts."""
        response = self._make_request("/accounts", params)
        return self._unwrap(response, "accounts")

    def get_account(self, account_id: Union[int, str]) -> Dict[str, Any]:
        """Get an account by ID."""
        response = self._make_request(f"/accounts/{account_id}")
        return self._unwrap(response, "account")

    def create_account(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = self._make_request("/accounts", method="POST", data=data)
        return self._unwrap(response, "account")

    def update_account(self, account_id: Union[int, str], data: Dict[str, Any]) -> Dict[str, Any]:
        response = self._make_request(f"/accounts/{account_id}", method="PUT", data=data)
        return self._unwrap(response, "account")

    def create_contact_account_association(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Associate a contact with an account.

        Args:
            data: Request body, ``{"accountContact": {"contact": ..., "account": ...}}``

        Returns:
            Dict: The created association
        """
        response = self._make_request("/accountContacts", method="POST", data=data)
        return self._unwrap(response, "accountContact")

    def get_account_custom_fields(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Get the account custom field definitions."""
        response = self._make_request("/accountCustomFieldMeta", params)
        return self._unwrap(response, "accountCustomFieldMeta")

    # Custom fields

    def get_custom_fields(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Get the contact custom field definitions."""
        response = self._make_request("/fields", params)
        return self._unwrap(response, "fields")

    # Tags

    def get_tags(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        response = self._make_request("/tags", params)
        return self._unwrap(response, "tags")

    def add_tag_to_contact(self, contact_id: Union[int, str], tag_id: Union[int, str]) -> Dict[str, Any]:
        """
        Add a tag to a contact.

        Args:
            contact_id: ID of the contact
            tag_id: ID of the tag

        Returns:
            Dict: The created contact tag
        """
        data = {
            "contactTag": {
                "contact": contact_id,
                "tag": tag_id,
            }
        }
        response = self._make_request("/contactTags/", method="POST", data=data)
        return self._unwrap(response, "contactTag")

    # Deals

    def get_deals(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Get a list of deals."""
        response = self._make_request("/deals", params)
        return self._unwrap(response, "deals")

    def get_deal(self, deal_id: Union[int, str]) -> Dict[str, Any]:
        """Get a deal by ID."""
        response = self._make_request(f"/deals/{deal_id}")
        return self._unwrap(response, "deal")

    def get_deal_custom_field_data(self, deal_id: Union[int, str]) -> List[Dict[str, Any]]:
        """Get the custom field values of a deal."""
        response = self._make_request(f"/deals/{deal_id}/dealCustomFieldData")
        return self._unwrap(response, "dealCustomFieldData")

    def get_deal_custom_fields(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Get the deal custom field definitions."""
        response = self._make_request("/dealCustomFieldMeta", params)
        return self._unwrap(response, "dealCustomFieldMeta")

    def create_deal(self, data: Payload) -> Dict[str, Any]:
        """
        Create a deal.

        Args:
            data: A Deal, or a request body of the form ``{"deal": {...}}``

        Returns:
            Dict: The created deal
        """
        response = self._make_request("/deals", method="POST", data=data)
        return self._unwrap(response, "deal")

    # E-commerce connections

    def get_connections(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        response = self._make_request("/connections", params)
        return self._unwrap(response, "connections")

    def get_connection(self, connection_id: Union[int, str]) -> Dict[str, Any]:
        response = self._make_request(f"/connections/{connection_id}")
        return self._unwrap(response, "connection")

    def create_connection(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = self._make_request("/connections", method="POST", data=data)
        return self._unwrap(response, "connection")

    def update_connection(self, connection_id: Union[int, str], data: Dict[str, Any]) -> Dict[str, Any]:
        response = self._make_request(f"/connections/{connection_id}", method="PUT", data=data)
        return self._unwrap(response, "connection")

    def get_connection_customers(
        self,
        connection_id: Optional[Union[int, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Get the customers of a connection.

        Args:
            connection_id: Connection ID (defaults to the client's connection id)
            params: Optional filter and sort parameters, with flat keys
                such as ``"filters[stage]"``

        Returns:
            Dict: The whole decoded response
        """
        if connection_id is None:
            connection_id = self._connection_id
        if connection_id is None:
            raise ValueError("A connection id is required when the client has no default")

        return self._make_request(f"/connections/{connection_id}/customers", params)

    # E-commerce customers

    def get_customers(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        response = self._make_request("/ecomCustomers", params)
        return self._unwrap(response, "ecomCustomers")

    def create_customer(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = self._make_request("/ecomCustomers", method="POST", data=data)
        return self._unwrap(response, "ecomCustomer")

    # E-commerce orders

    def get_orders(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        response = self._make_request("/ecomOrders", params)
        return self._unwrap(response, "ecomOrders")

    def create_order(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create an e-commerce order.

        Returns:
            Dict: The whole decoded response
        """
        return self._make_request("/ecomOrders", method="POST", data=data)
