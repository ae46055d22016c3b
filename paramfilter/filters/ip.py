"""IP Address and CIDR Filters"""
from __future__ import annotations

from dataclasses import dataclass
import ipaddress
from typing import Any, TypeVar

from paramfilter.coercion import CoercionError
from paramfilter.errors import Err, FilterError, Ok, Reason, Result, invalid_param

from .base import CompiledFilter, FilterBuilder

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network

V = TypeVar("V", bound="VersionChecks")


def is_ipv4(address: IPAddress) -> bool:
    """IPv4, including IPv4-mapped IPv6 (::ffff:a.b.c.d)."""
    return address.version == 4 or getattr(address, "ipv4_mapped", None) is not None


@dataclass(frozen=True, slots=True)
class CIDRAddr:
    """A parsed CIDR block: the host address, its network, and the source text."""
    ip: IPAddress
    network: IPNetwork
    raw: str

    def __str__(self) -> str:
        return self.raw


def coerce_ip(value: Any) -> Result[IPAddress, CoercionError]:
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return Ok(value)
    if not isinstance(value, str):
        return Err(CoercionError(f"{type(value).__name__} is not an IP address"))
    try:
        return Ok(ipaddress.ip_address(value))
    except ValueError as e:
        return Err(CoercionError(str(e)))


def coerce_cidr(value: Any) -> Result[CIDRAddr, CoercionError]:
    if isinstance(value, CIDRAddr):
        return Ok(value)
    if not isinstance(value, str) or "/" not in value:
        return Err(CoercionError(f"{value!r} is not a CIDR block"))
    try:
        interface = ipaddress.ip_interface(value)
    except ValueError as e:
        return Err(CoercionError(str(e)))
    return Ok(CIDRAddr(interface.ip, interface.network, value))


class VersionChecks(FilterBuilder[Any]):
    """is_ipv4/is_ipv6/to_string shared by address filters."""

    def __init__(self) -> None:
        super().__init__()
        self._to_string = False

    @staticmethod
    def _address(value: Any) -> IPAddress:
        return value

    def _version(self: V, want_v4: bool) -> V:
        reason = Reason.NOT_IPV4 if want_v4 else Reason.NOT_IPV6
        address_of = self._address

        def check(name: str, value: Any) -> FilterError | None:
            if is_ipv4(address_of(value)) != want_v4:
                return invalid_param(name, reason)
            return None

        return self.add_validator(check)

    def is_ipv4(self: V) -> V:
        return self._version(True)

    def is_ipv6(self: V) -> V:
        return self._version(False)

    def to_string(self: V) -> V:
        """Return the value as text instead of a parsed object."""
        self._to_string = True
        return self


class IPFilterBuilder(VersionChecks):
    kind = "ip"

    def _compile(self, context: Any, checks: tuple) -> CompiledFilter[IPAddress]:
        return CompiledFilter(
            kind=self.kind,
            coerce=coerce_ip,
            not_type=Reason.NOT_IP,
            checks=checks,
            allow_values=tuple(self._allow),
            finish=(lambda _source, address: str(address)) if self._to_string else None,
        )


class CIDRFilterBuilder(VersionChecks):
    kind = "cidr"

    @staticmethod
    def _address(value: CIDRAddr) -> IPAddress:
        return value.ip

    def _compile(self, context: Any, checks: tuple) -> CompiledFilter[CIDRAddr]:
        return CompiledFilter(
            kind=self.kind,
            coerce=coerce_cidr,
            not_type=Reason.NOT_CIDR,
            checks=checks,
            allow_values=tuple(self._allow),
            finish=(lambda _source, block: block.raw) if self._to_string else None,
        )


def ip() -> IPFilterBuilder:
    return IPFilterBuilder()


def cidr() -> CIDRFilterBuilder:
    return CIDRFilterBuilder()
