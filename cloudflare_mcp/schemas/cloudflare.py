"""Request bodies sent to the Cloudflare API.

Responses are passed through as plain dicts; only what we *send* is modelled.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

ZoneType = Literal["full", "partial", "secondary"]

DNS_RECORD_TYPES = (
    "A",
    "AAAA",
    "CNAME",
    "TXT",
    "MX",
    "NS",
    "SRV",
    "CAA",
    "PTR",
    "HTTPS",
    "SVCB",
)

FIREWALL_ACTIONS = (
    "block",
    "challenge",
    "js_challenge",
    "managed_challenge",
    "allow",
    "log",
    "bypass",
)

WAF_RULE_MODES = ("default", "disable", "simulate", "block", "challenge")


class AccountRef(BaseModel):
    id: str


class PlanRef(BaseModel):
    id: str


class ZoneCreateInput(BaseModel):
    name: str
    account: AccountRef
    type: ZoneType = "full"
    jump_start: bool = True


class ZoneUpdateInput(BaseModel):
    paused: bool | None = None
    plan: PlanRef | None = None
    type: ZoneType | None = None


class DnsRecordCreateInput(BaseModel):
    type: str
    name: str
    content: str
    ttl: int = 1
    proxied: bool = False
    priority: int | None = None
    comment: str | None = None


class DnsRecordUpdateInput(BaseModel):
    type: str | None = None
    name: str | None = None
    content: str | None = None
    ttl: int | None = None
    proxied: bool | None = None
    comment: str | None = None


class FirewallFilterInput(BaseModel):
    expression: str
    paused: bool = False


class FirewallRuleCreateInput(BaseModel):
    action: str
    filter: FirewallFilterInput
    description: str | None = None
    paused: bool = False


class FirewallRuleUpdateInput(BaseModel):
    action: str | None = None
    description: str | None = None
    paused: bool | None = None


class CachePurgeRequest(BaseModel):
    """Exactly one of the fields is expected to be set."""

    purge_everything: bool | None = None
    files: list[str] | None = None
    tags: list[str] | None = None
    hosts: list[str] | None = None


class D1QueryRequest(BaseModel):
    sql: str
    params: list[Any] | None = None


def to_body(model: BaseModel) -> dict[str, Any]:
    """Serialise a request model, leaving unset optionals out of the body."""
    return model.model_dump(exclude_none=True)
