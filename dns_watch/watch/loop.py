"""Periodic resolve, render, write and notify cycle."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.errors import DnsWatchError, LaunchError
from ..core.models import TickOutcome, WatchConfig, WatchState, WriteResult
from ..notify.command import Notifier
from ..rendering.engine import Renderer
from ..rendering.io import write_output, write_stdout
from ..resolution.binder import bind
from ..resolution.resolver import Resolver

logger = logging.getLogger(__name__)


def _should_notify(config: WatchConfig, state: WatchState, result: WriteResult) -> bool:
    if not result.changed:
        return False
    if state.first_write_pending and not config.notify_on_first:
        return False
    return True


def run_tick(
    config: WatchConfig,
    state: WatchState,
    resolver: Resolver,
    renderer: Renderer,
    notifier: Notifier,
) -> TickOutcome:
    """Run one cycle against ``state`` and return the outcome with the next state.

    A resolution, template or write failure leaves ``previous_output`` as it
    was, so the next tick compares against the last successful write. The
    notify command runs at most once, only after a write that changed the
    output, and its failure never fails the tick.
    """
    try:
        variables = bind(config.bindings, resolver)
        rendered = renderer.render(variables)
        if config.writes_to_stdout:
            result = write_stdout(rendered)
        else:
            result = write_output(
                config.output_path, rendered, state.previous_output, config.file_mode
            )
    except DnsWatchError as exc:
        failed = state.model_copy(update={"last_tick_ok": False, "ticks": state.ticks + 1})
        return TickOutcome(state=failed, ok=False, error=exc)

    next_state = WatchState(previous_output=rendered, last_tick_ok=True, ticks=state.ticks + 1)

    command = config.notify_command
    if command is None or not _should_notify(config, state, result):
        return TickOutcome(state=next_state, ok=True, changed=result.changed)

    try:
        exit_status = notifier.notify(command)
    except LaunchError as exc:
        logger.warning(str(exc))
        exit_status = exc.exit_status
    return TickOutcome(
        state=next_state,
        ok=True,
        changed=True,
        notified=True,
        exit_status=exit_status,
    )


class WatchLoop:
    """Owns the watch state and drives ticks sequentially.

    ``run_once`` performs a single tick and raises on failure. ``run_forever``
    keeps ticking every ``config.interval`` seconds, logging failed ticks,
    until ``request_stop`` is called.
    """

    def __init__(
        self,
        config: WatchConfig,
        resolver: Resolver,
        renderer: Renderer,
        notifier: Notifier,
        *,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.config = config
        self.resolver = resolver
        self.renderer = renderer
        self.notifier = notifier
        self.state = WatchState()
        self._stop = stop_event or threading.Event()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def request_stop(self) -> None:
        """Stop after the current tick; an in-progress sleep ends immediately."""
        self._stop.set()

    def tick(self) -> TickOutcome:
        outcome = run_tick(self.config, self.state, self.resolver, self.renderer, self.notifier)
        self.state = outcome.state
        return outcome

    def run_once(self) -> TickOutcome:
        outcome = self.tick()
        if outcome.error is not None:
            raise outcome.error
        return outcome

    def run_forever(self, max_ticks: Optional[int] = None) -> WatchState:
        """Tick until stopped (or ``max_ticks`` ticks have run)."""
        interval = self.config.interval
        logger.info(
            f"Watching {len(self.config.bindings)} host(s) every {interval:g}s "
            f"→ {self.config.output}"
        )
        while not self._stop.is_set():
            outcome = self.tick()
            if not outcome.ok:
                logger.error(f"{outcome.error}; retrying in {interval:g}s")
            if max_ticks is not None and self.state.ticks >= max_ticks:
                break
            logger.debug(f"Sleep {interval:g}s")
            if self._stop.wait(interval):
                break
        logger.info("Watch stopped")
        return self.state
