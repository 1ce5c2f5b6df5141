"""Account-related types for the Coinbase Advanced Trade API."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ...shared import parse_decimal, parse_time
from ..error import DecodeError
from ..params import query_field


@dataclass
class Balance:
    """An amount in a given currency."""

    value: Decimal
    currency: str

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Balance":
        data = data or {}
        return cls(
            value=parse_decimal(data.get("value")),
            currency=data.get("currency", ""),
        )


@dataclass
class Account:
    """A brokerage account holding one currency."""

    uuid: str
    name: str
    currency: str
    available_balance: Balance
    hold: Balance
    default: bool = False
    active: bool = False
    ready: bool = False
    type: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        try:
            return cls(
                uuid=data["uuid"],
                name=data.get("name", ""),
                currency=data.get("currency", ""),
                available_balance=Balance.from_dict(data.get("available_balance")),
                hold=Balance.from_dict(data.get("hold")),
                default=data.get("default", False),
                active=data.get("active", False),
                ready=data.get("ready", False),
                type=data.get("type", ""),
                created_at=parse_time(data.get("created_at")),
                updated_at=parse_time(data.get("updated_at")),
                deleted_at=parse_time(data.get("deleted_at")),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in Account: {e}")
        except ValueError as e:
            raise DecodeError(f"Invalid field in Account: {e}")


@dataclass
class ListAccountsParams:
    """Query parameters for GET /accounts."""

    limit: int = query_field("limit", 0)


def parse_accounts(data: dict) -> list[Account]:
    return [Account.from_dict(a) for a in data.get("accounts") or []]
