"""Resolver adapters turning a hostname into its current addresses."""

from __future__ import annotations

import ipaddress
import logging
from typing import Mapping, Protocol, Sequence

import dns.exception
import dns.name
import dns.resolver

from ..core.errors import ResolutionError

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    def resolve(self, hostname: str) -> tuple[str, ...]:
        """Return the addresses of ``hostname`` or raise ResolutionError."""
        ...


def _sort_key(address: str) -> tuple[int, int]:
    ip = ipaddress.ip_address(address)
    return ip.version, int(ip)


class DnsResolver:
    """Looks up A records with dnspython.

    Addresses are returned in numeric order so that a server rotating its
    answers does not look like a change.
    """

    def __init__(
        self,
        timeout: float = 1.0,
        *,
        resolver: dns.resolver.Resolver | None = None,
    ) -> None:
        self._resolver = resolver or dns.resolver.Resolver()
        self._resolver.timeout = timeout
        self._resolver.lifetime = timeout

    def resolve(self, hostname: str) -> tuple[str, ...]:
        try:
            answer = self._resolver.resolve(hostname, "A", search=True)
        except dns.resolver.NXDOMAIN as exc:
            raise ResolutionError(hostname, "no such domain") from exc
        except dns.resolver.NoAnswer as exc:
            raise ResolutionError(hostname, "no A records") from exc
        except dns.resolver.NoNameservers as exc:
            raise ResolutionError(hostname, "no nameserver answered") from exc
        except dns.exception.Timeout as exc:
            raise ResolutionError(hostname, "lookup timed out") from exc
        except (dns.name.EmptyLabel, dns.name.LabelTooLong, dns.name.NameTooLong) as exc:
            raise ResolutionError(hostname, f"invalid hostname ({exc})") from exc
        except dns.exception.DNSException as exc:
            raise ResolutionError(hostname, str(exc) or type(exc).__name__) from exc

        addresses = sorted({rdata.address for rdata in answer}, key=_sort_key)
        if not addresses:
            raise ResolutionError(hostname, "no A records")
        return tuple(addresses)


class StaticResolver:
    """Answers from a fixed table; unknown hostnames fail to resolve."""

    def __init__(self, table: Mapping[str, Sequence[str]]) -> None:
        self._table = {host: tuple(addrs) for host, addrs in table.items()}

    def resolve(self, hostname: str) -> tuple[str, ...]:
        try:
            addresses = self._table[hostname]
        except KeyError:
            raise ResolutionError(hostname, "no such domain") from None
        if not addresses:
            raise ResolutionError(hostname, "no A records")
        return addresses
