"""Hostname resolution and variable binding."""

from .binder import bind
from .resolver import DnsResolver, Resolver, StaticResolver

__all__ = ["bind", "DnsResolver", "Resolver", "StaticResolver"]
