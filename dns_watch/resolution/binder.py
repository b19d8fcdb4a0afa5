"""Bind template variable names to resolved addresses."""

from __future__ import annotations

import logging
from typing import Iterable

from ..core.models import VariableBinding
from .resolver import Resolver

logger = logging.getLogger(__name__)


def bind(bindings: Iterable[VariableBinding], resolver: Resolver) -> dict[str, list[str]]:
    """Resolve every binding and return the variable map.

    Lookups run in binding order and stop at the first failure; the
    ResolutionError from the resolver propagates unchanged, so no partially
    filled map ever leaves this function. Resolver order is kept as is.

    Args:
        bindings: Variable bindings to resolve
        resolver: Resolver adapter used for each hostname

    Returns:
        Mapping of variable name to its ordered address list
    """
    variables: dict[str, list[str]] = {}
    for binding in bindings:
        addresses = list(resolver.resolve(binding.hostname))
        logger.debug(f"{binding.name} = {binding.hostname} => {addresses}")
        variables[binding.name] = addresses
    return variables
