from __future__ import annotations

from typing import Mapping, Sequence

from dns_watch.core.errors import ResolutionError

HAPROXY_TEMPLATE = """\
backend api
{% for ip in backend %}
    server api{{ loop.index }} {{ ip }}:8080 check
{% endfor %}

backend ui
{% for ip in frontend %}
    server ui{{ loop.index }} {{ ip }}:80 check
{% endfor %}
"""

HAPROXY_EXPECTED = """\
backend api
    server api1 10.0.0.4:8080 check
    server api2 10.0.0.7:8080 check
    server api3 10.0.0.8:8080 check

backend ui
    server ui1 10.0.0.5:80 check
    server ui2 10.0.0.6:80 check
"""

DNS_TABLE = {
    "frontend-service": ("10.0.0.5", "10.0.0.6"),
    "backend-service": ("10.0.0.4", "10.0.0.7", "10.0.0.8"),
}


class ScriptedResolver:
    """Answers tick N from ``tables[N]``; a ``None`` table fails every lookup.

    A new tick starts whenever ``first_host`` is looked up; the last table
    repeats once the script runs out.
    """

    def __init__(
        self,
        tables: Sequence[Mapping[str, Sequence[str]] | None],
        first_host: str = "frontend-service",
    ) -> None:
        self._tables = list(tables)
        self.first_host = first_host
        self.tick = -1
        self.lookups: list[str] = []

    def resolve(self, hostname: str) -> tuple[str, ...]:
        if hostname == self.first_host:
            self.tick += 1
        self.lookups.append(hostname)
        table = self._tables[min(self.tick, len(self._tables) - 1)]
        if table is None or hostname not in table:
            raise ResolutionError(hostname, "no such domain")
        return tuple(table[hostname])
