# -*- coding: utf-8 -*-
"""
Processor Control - Cooperative stop/pause/resume and status events.

Long-running processors (the undecimated wavelet transform, the
particle detectors) run to completion unless a caller intervenes. This
module provides the shared machinery:

- ``StatusEvent`` -- ``(current, total, message)`` progress notification.
- ``StatusReporter`` -- mixin managing status listeners.
- ``ControllableProcessor`` -- mixin holding a commanded
  ``ControlStatus`` and a reported ``ExecutionStatus``, both guarded by
  one ``threading.Condition``. Processors call ``_checkpoint()`` at
  safe points; callers call ``stop()``, ``pause()`` and ``resume()``
  from any thread.

Cancellation is cooperative only. A paused processor blocks at its
checkpoint until it is resumed or stopped.

Author
------
wavedet developers

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
import threading
from typing import Callable, Iterable, List, Optional

# wavedet internal
from wavedet.vocabulary import ControlStatus, ExecutionStatus

logger = logging.getLogger(__name__)

_INIT_LOCK = threading.Lock()


class StatusEvent:
    """Progress notification sent to status listeners.

    Parameters
    ----------
    message : str
        Human-readable status text.
    current : int, optional
        Index of the current step.
    total : int, optional
        Index of the final step (or number of steps).
    """

    __slots__ = ('message', 'current', 'total')

    def __init__(self, message: str, current: Optional[int] = None,
                 total: Optional[int] = None) -> None:
        self.message = message
        self.current = current
        self.total = total

    def __repr__(self) -> str:
        if self.current is None:
            return f"StatusEvent({self.message!r})"
        return (f"StatusEvent({self.message!r}, current={self.current}, "
                f"total={self.total})")


StatusListener = Callable[[StatusEvent], None]


class StatusReporter:
    """Mixin that keeps a list of status listeners."""

    @property
    def status_listeners(self) -> List[StatusListener]:
        """Registered listeners (the live list)."""
        listeners = self.__dict__.get('_status_listeners')
        if listeners is None:
            listeners = self.__dict__.setdefault('_status_listeners', [])
        return listeners

    def add_status_listener(self, listener: StatusListener) -> None:
        self.status_listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        if listener in self.status_listeners:
            self.status_listeners.remove(listener)

    def notify_listeners(self, event: StatusEvent) -> None:
        """Send *event* to every registered listener."""
        for listener in list(self.status_listeners):
            listener(event)


class ControllableProcessor(StatusReporter):
    """Mixin implementing the cooperative control protocol.

    State machine of ``execution_status``::

        INIT -> RUNNING -> {PAUSED <-> RUNNING} -> TERMINATED

    ``control_status`` is written by callers through ``stop()``,
    ``pause()`` and ``resume()``. Every write notifies threads waiting
    on the shared condition, so no fixed polling interval is needed.
    """

    # -----------------------------------------------------------------
    # Shared state (lazily created, subclasses may use generated __init__)
    # -----------------------------------------------------------------
    @property
    def _control_condition(self) -> threading.Condition:
        cond = self.__dict__.get('_cond')
        if cond is None:
            with _INIT_LOCK:
                cond = self.__dict__.get('_cond')
                if cond is None:
                    cond = threading.Condition()
                    self.__dict__['_cond'] = cond
                    self.__dict__['_control_status'] = ControlStatus.NONE
                    self.__dict__['_execution_status'] = ExecutionStatus.INIT
        return cond

    @property
    def control_status(self) -> ControlStatus:
        """Most recent command issued by a caller."""
        with self._control_condition:
            return self.__dict__['_control_status']

    @property
    def execution_status(self) -> ExecutionStatus:
        """Current execution state reported by the processor."""
        with self._control_condition:
            return self.__dict__['_execution_status']

    # -----------------------------------------------------------------
    # Caller-side commands
    # -----------------------------------------------------------------
    def handle_control(self, command: ControlStatus) -> None:
        """Record *command* and wake every waiting thread."""
        if not isinstance(command, ControlStatus):
            raise TypeError(f"Expected ControlStatus, got {command!r}")
        cond = self._control_condition
        with cond:
            self.__dict__['_control_status'] = command
            cond.notify_all()
        logger.debug("%s received control command %s",
                     type(self).__name__, command.name)

    def stop(self) -> None:
        self.handle_control(ControlStatus.STOP)

    def pause(self) -> None:
        self.handle_control(ControlStatus.PAUSE)

    def resume(self) -> None:
        self.handle_control(ControlStatus.RESUME)

    def reset_control(self) -> None:
        """Clear any pending command and return to ``INIT``."""
        cond = self._control_condition
        with cond:
            self.__dict__['_control_status'] = ControlStatus.NONE
            self.__dict__['_execution_status'] = ExecutionStatus.INIT
            cond.notify_all()

    # -----------------------------------------------------------------
    # Processor-side helpers
    # -----------------------------------------------------------------
    def _set_execution_status(self, status: ExecutionStatus) -> None:
        cond = self._control_condition
        with cond:
            self.__dict__['_execution_status'] = status
            cond.notify_all()

    def _finish_run(self) -> None:
        """Report ``TERMINATED`` and consume the pending command."""
        cond = self._control_condition
        with cond:
            self.__dict__['_control_status'] = ControlStatus.NONE
            self.__dict__['_execution_status'] = ExecutionStatus.TERMINATED
            cond.notify_all()

    def _wake(self) -> None:
        """Wake threads waiting on this processor without changing state."""
        cond = self._control_condition
        with cond:
            cond.notify_all()

    def wait_for_execution_status(
        self,
        statuses: Iterable[ExecutionStatus],
        timeout: Optional[float] = None,
    ) -> bool:
        """Block until ``execution_status`` is one of *statuses*.

        Returns
        -------
        bool
            False if *timeout* expired first.
        """
        wanted = frozenset(statuses)
        cond = self._control_condition
        with cond:
            return cond.wait_for(
                lambda: self.__dict__['_execution_status'] in wanted,
                timeout=timeout,
            )

    def wait_until_terminated(self, timeout: Optional[float] = None) -> bool:
        """Block until the processor reports ``TERMINATED``."""
        return self.wait_for_execution_status((ExecutionStatus.TERMINATED,),
                                              timeout=timeout)

    def wait_for_control_status(
        self,
        statuses: Iterable[ControlStatus],
        timeout: Optional[float] = None,
    ) -> bool:
        """Block until ``control_status`` is one of *statuses*."""
        wanted = frozenset(statuses)
        cond = self._control_condition
        with cond:
            return cond.wait_for(
                lambda: self.__dict__['_control_status'] in wanted,
                timeout=timeout,
            )

    def _wait_while_paused(self) -> bool:
        """Block while the commanded status is ``PAUSE``.

        Returns
        -------
        bool
            False if the processor was stopped while paused.
        """
        name = type(self).__name__
        logger.info("%s paused, waiting to continue...", name)
        self._set_execution_status(ExecutionStatus.PAUSED)
        self.notify_listeners(StatusEvent(f"[{name}] processing paused..."))
        self.wait_for_control_status((ControlStatus.RESUME, ControlStatus.STOP))
        if self.control_status is ControlStatus.STOP:
            return False
        self._set_execution_status(ExecutionStatus.RUNNING)
        logger.info("%s running again...", name)
        return True

    def _checkpoint(self) -> bool:
        """Honour pending STOP/PAUSE commands.

        Returns
        -------
        bool
            True to continue processing. False when the processor has
            been stopped; ``execution_status`` is then ``TERMINATED``.
        """
        status = self.control_status
        if status is ControlStatus.PAUSE and not self._wait_while_paused():
            status = ControlStatus.STOP
        if status is ControlStatus.STOP:
            self._set_execution_status(ExecutionStatus.TERMINATED)
            logger.info("%s stopped", type(self).__name__)
            return False
        return True
