import pytest

from dns_watch.core.errors import ResolutionError
from dns_watch.core.models import VariableBinding
from dns_watch.resolution.binder import bind
from dns_watch.resolution.resolver import StaticResolver

from .helpers import DNS_TABLE


class CountingResolver(StaticResolver):
    def __init__(self, table):
        super().__init__(table)
        self.lookups = []

    def resolve(self, hostname):
        self.lookups.append(hostname)
        return super().resolve(hostname)


def test_bind_builds_one_entry_per_binding_in_resolver_order():
    bindings = [
        VariableBinding(name="frontend", hostname="frontend-service"),
        VariableBinding(name="backend", hostname="backend-service"),
    ]
    resolver = StaticResolver({**DNS_TABLE, "backend-service": ("10.0.0.8", "10.0.0.4")})

    variables = bind(bindings, resolver)

    assert variables == {
        "frontend": ["10.0.0.5", "10.0.0.6"],
        "backend": ["10.0.0.8", "10.0.0.4"],
    }


def test_bind_stops_at_first_failure():
    bindings = [
        VariableBinding(name="frontend", hostname="frontend-service"),
        VariableBinding(name="missing", hostname="nowhere"),
        VariableBinding(name="backend", hostname="backend-service"),
    ]
    resolver = CountingResolver(DNS_TABLE)

    with pytest.raises(ResolutionError) as excinfo:
        bind(bindings, resolver)

    assert excinfo.value.hostname == "nowhere"
    assert resolver.lookups == ["frontend-service", "nowhere"]


def test_bind_without_bindings_is_empty():
    assert bind([], StaticResolver({})) == {}
