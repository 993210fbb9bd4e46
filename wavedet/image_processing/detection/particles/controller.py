# -*- coding: utf-8 -*-
"""
Transform Controller - Run a controllable decomposition on a worker thread.

``TransformController`` starts the wavelet decomposition of its
``transform`` on a separate thread and blocks the calling (orchestrating)
thread until the transform reports ``TERMINATED``. While it waits, the
commands issued to the ``owner`` are relayed to the transform:

- ``STOP``: the transform is stopped; the controller returns None.
- ``PAUSE``: the transform is paused and the owner reports ``PAUSED``
  until it receives ``RESUME`` (transform resumed) or ``STOP``.

The owner's status listeners are registered on the transform for the
duration of the run, so its progress events reach the caller unchanged.

Failures on the worker thread are logged there and re-raised on the
orchestrating thread: ``MemoryError`` as ``ResourceError``, anything
else as ``ProcessorError``. Partial planes are never returned.

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
from typing import Any, Optional

# Third-party
import numpy as np

# wavedet internal
from wavedet.exceptions import ProcessorError, ResourceError
from wavedet.image_processing.control import ControllableProcessor, StatusEvent
from wavedet.vocabulary import ControlStatus, ExecutionStatus

logger = logging.getLogger(__name__)


class TransformController:
    """Drive ``transform.decompose`` on a worker thread under *owner*'s control.

    Parameters
    ----------
    owner : ControllableProcessor
        Processor whose control commands are relayed (the detector).
    transform : ControllableProcessor
        Object with a ``decompose(source, exclude_mask=None)`` method,
        e.g. ``UndecimatedWaveletTransform``.
    poll_interval : float
        Upper bound in seconds between two checks of the shared state.
        Waits are woken early by every state change.
    """

    def __init__(self, owner: ControllableProcessor,
                 transform: ControllableProcessor,
                 poll_interval: float = 0.5) -> None:
        self.owner = owner
        self.transform = transform
        self.poll_interval = poll_interval
        self._result: Optional[np.ndarray] = None
        self._error: Optional[BaseException] = None

    # -----------------------------------------------------------------
    # Worker side
    # -----------------------------------------------------------------
    def _work(self, source: np.ndarray, exclude_mask: Optional[np.ndarray],
              kwargs: dict) -> None:
        try:
            self._result = self.transform.decompose(
                source, exclude_mask=exclude_mask, **kwargs)
        except Exception as exc:
            logger.exception("%s failed on worker thread",
                             type(self.transform).__name__)
            self._error = exc
        finally:
            self.transform._set_execution_status(ExecutionStatus.TERMINATED)
            self.owner._wake()

    # -----------------------------------------------------------------
    # Orchestrator side
    # -----------------------------------------------------------------
    def _transform_done(self) -> bool:
        return self.transform.execution_status is ExecutionStatus.TERMINATED

    def _wait(self, seen: ControlStatus) -> None:
        """Sleep until the transform ends or the owner gets a new command."""
        cond = self.owner._control_condition
        with cond:
            cond.wait_for(
                lambda: (self._transform_done()
                         or self.owner.control_status is not seen),
                timeout=self.poll_interval,
            )

    def _pause(self) -> None:
        owner, transform = self.owner, self.transform
        name = type(owner).__name__
        logger.info("%s paused, waiting to continue...", name)
        transform.pause()
        owner._set_execution_status(ExecutionStatus.PAUSED)
        owner.notify_listeners(StatusEvent(f"[{name}] processing paused..."))

        owner.wait_for_control_status((ControlStatus.RESUME, ControlStatus.STOP))
        if owner.control_status is ControlStatus.STOP:
            return
        owner._set_execution_status(ExecutionStatus.RUNNING)
        transform.resume()
        logger.info("%s running again...", name)

    def run(self, source: np.ndarray,
            exclude_mask: Optional[np.ndarray] = None,
            **kwargs: Any) -> Optional[np.ndarray]:
        """Decompose *source*, honouring the owner's commands.

        Returns
        -------
        np.ndarray or None
            The transform's planes, or None if the owner was stopped.

        Raises
        ------
        ResourceError
            If the worker ran out of memory.
        ProcessorError
            If the worker failed, or terminated without data although
            no stop was requested.
        """
        owner, transform = self.owner, self.transform
        transform.reset_control()
        listeners = list(owner.status_listeners)
        for listener in listeners:
            transform.add_status_listener(listener)

        worker = threading.Thread(
            target=self._work,
            args=(source, exclude_mask, kwargs),
            name=f"{type(transform).__name__}-worker",
            daemon=True,
        )
        try:
            worker.start()
            stop_sent = False
            while not self._transform_done():
                status = owner.control_status
                if status is ControlStatus.PAUSE:
                    self._pause()
                    continue
                if status is ControlStatus.STOP and not stop_sent:
                    logger.info("%s stopping %s", type(owner).__name__,
                                type(transform).__name__)
                    transform.stop()
                    stop_sent = True
                self._wait(status)
            worker.join()
        finally:
            for listener in listeners:
                transform.remove_status_listener(listener)

        if self._error is not None:
            if isinstance(self._error, MemoryError):
                raise ResourceError(
                    f"{type(transform).__name__} ran out of memory"
                ) from self._error
            raise ProcessorError(
                f"{type(transform).__name__} failed: {self._error}"
            ) from self._error
        if owner.control_status is ControlStatus.STOP:
            logger.info("%s stopped!", type(owner).__name__)
            return None
        if self._result is None:
            raise ProcessorError(
                f"{type(transform).__name__} terminated without data"
            )
        return self._result
