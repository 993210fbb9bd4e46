# -*- coding: utf-8 -*-
"""
Processor Control Tests.

Tests for status events and listeners, the stop/pause/resume protocol of
``ControllableProcessor``, and ``TransformController`` relaying commands
from a detector to its wavelet transform on a worker thread.

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

import threading

import numpy as np
import pytest

from wavedet.exceptions import ProcessorError, ResourceError
from wavedet.image_processing.control import (
    ControllableProcessor,
    StatusEvent,
    StatusReporter,
)
from wavedet.image_processing.detection.particles.controller import (
    TransformController,
)
from wavedet.vocabulary import ControlStatus, ExecutionStatus


class _Worker(ControllableProcessor):
    """Counts steps, honouring commands between them."""

    def __init__(self, steps=5):
        self.steps = steps
        self.done = 0
        self.gate = threading.Event()

    def run(self):
        self._set_execution_status(ExecutionStatus.RUNNING)
        for _ in range(self.steps):
            if not self._checkpoint():
                return False
            self.done += 1
            if self.done == 1:
                self.gate.set()
        self._set_execution_status(ExecutionStatus.TERMINATED)
        return True


class _GatedTransform(ControllableProcessor):
    """Fake transform whose decompose blocks on an event between steps."""

    def __init__(self, result=None, error=None, steps=3):
        self.result = np.zeros((3, 4, 4)) if result is None else result
        self.error = error
        self.steps = steps
        self.started = threading.Event()
        self.release = threading.Event()
        self.calls = 0

    def decompose(self, source, exclude_mask=None, **kwargs):
        self.calls += 1
        self._set_execution_status(ExecutionStatus.RUNNING)
        self.started.set()
        if self.error is not None:
            raise self.error
        for j in range(self.steps):
            self.notify_listeners(StatusEvent(f"step {j}", j, self.steps))
            self.release.wait(timeout=5.0)
            if not self._checkpoint():
                return None
        return self.result


class _Owner(ControllableProcessor):
    pass


# ---------------------------------------------------------------------------
# Status events
# ---------------------------------------------------------------------------

class TestStatusEvents:
    """StatusEvent and StatusReporter."""

    def test_event_fields(self):
        event = StatusEvent("scale 1", 1, 4)
        assert (event.message, event.current, event.total) == ("scale 1", 1, 4)
        assert 'current=1' in repr(event)

    def test_message_only_repr(self):
        assert repr(StatusEvent("paused")) == "StatusEvent('paused')"

    def test_listeners_notified_in_order(self):
        reporter = StatusReporter()
        seen = []
        reporter.add_status_listener(lambda e: seen.append(('a', e.message)))
        reporter.add_status_listener(lambda e: seen.append(('b', e.message)))
        reporter.notify_listeners(StatusEvent("x"))
        assert seen == [('a', 'x'), ('b', 'x')]

    def test_remove_listener(self):
        reporter = StatusReporter()
        seen = []
        reporter.add_status_listener(seen.append)
        reporter.remove_status_listener(seen.append)
        reporter.remove_status_listener(seen.append)
        reporter.notify_listeners(StatusEvent("x"))
        assert seen == []


# ---------------------------------------------------------------------------
# ControllableProcessor
# ---------------------------------------------------------------------------

class TestControllableProcessor:
    """Stop/pause/resume protocol."""

    def test_initial_state(self):
        worker = _Worker()
        assert worker.control_status is ControlStatus.NONE
        assert worker.execution_status is ExecutionStatus.INIT

    def test_runs_to_completion(self):
        worker = _Worker()
        assert worker.run() is True
        assert worker.done == 5
        assert worker.execution_status is ExecutionStatus.TERMINATED

    def test_stop_before_run(self):
        worker = _Worker()
        worker.stop()
        assert worker.run() is False
        assert worker.done == 0
        assert worker.execution_status is ExecutionStatus.TERMINATED

    def test_handle_control_rejects_strings(self):
        with pytest.raises(TypeError):
            _Worker().handle_control('stop')

    def test_reset_control(self):
        worker = _Worker()
        worker.stop()
        worker.run()
        worker.reset_control()
        assert worker.control_status is ControlStatus.NONE
        assert worker.execution_status is ExecutionStatus.INIT

    def test_finish_run_consumes_command(self):
        worker = _Worker()
        worker.stop()
        worker._finish_run()
        assert worker.control_status is ControlStatus.NONE
        assert worker.execution_status is ExecutionStatus.TERMINATED

    def test_pause_then_resume(self):
        worker = _Worker(steps=3)
        worker.pause()
        events = []
        worker.add_status_listener(events.append)
        thread = threading.Thread(target=worker.run)
        thread.start()
        assert worker.wait_for_execution_status((ExecutionStatus.PAUSED,), 5.0)
        assert worker.done == 0
        worker.resume()
        assert worker.wait_until_terminated(5.0)
        thread.join(5.0)
        assert worker.done == 3
        assert 'paused' in events[0].message

    def test_stop_while_paused(self):
        worker = _Worker(steps=3)
        worker.pause()
        result = []
        thread = threading.Thread(target=lambda: result.append(worker.run()))
        thread.start()
        assert worker.wait_for_execution_status((ExecutionStatus.PAUSED,), 5.0)
        worker.stop()
        thread.join(5.0)
        assert result == [False]
        assert worker.execution_status is ExecutionStatus.TERMINATED

    def test_wait_times_out(self):
        assert _Worker().wait_until_terminated(timeout=0.01) is False


# ---------------------------------------------------------------------------
# TransformController
# ---------------------------------------------------------------------------

class TestTransformController:
    """Relaying commands from an owner to a worker-thread transform."""

    def test_returns_planes(self):
        transform = _GatedTransform()
        transform.release.set()
        planes = TransformController(_Owner(), transform).run(np.zeros((4, 4)))
        assert planes is transform.result
        assert transform.execution_status is ExecutionStatus.TERMINATED

    def test_forwards_owner_listeners(self):
        owner, transform = _Owner(), _GatedTransform()
        transform.release.set()
        events = []
        owner.add_status_listener(events.append)
        TransformController(owner, transform).run(np.zeros((4, 4)))
        assert [e.message for e in events] == ['step 0', 'step 1', 'step 2']
        assert transform.status_listeners == []

    def test_stop_before_run(self):
        owner, transform = _Owner(), _GatedTransform()
        transform.release.set()
        owner.stop()
        assert TransformController(owner, transform).run(np.zeros((4, 4))) is None

    def test_stop_during_run(self):
        owner, transform = _Owner(), _GatedTransform()
        result = []
        controller = TransformController(owner, transform, poll_interval=0.05)
        thread = threading.Thread(
            target=lambda: result.append(controller.run(np.zeros((4, 4)))))
        thread.start()
        assert transform.started.wait(5.0)
        owner.stop()
        transform.release.set()
        thread.join(5.0)
        assert result == [None]

    def test_pause_and_resume(self):
        owner, transform = _Owner(), _GatedTransform()
        result = []
        controller = TransformController(owner, transform, poll_interval=0.05)
        thread = threading.Thread(
            target=lambda: result.append(controller.run(np.zeros((4, 4)))))
        thread.start()
        assert transform.started.wait(5.0)
        owner.pause()
        assert owner.wait_for_execution_status((ExecutionStatus.PAUSED,), 5.0)
        assert transform.control_status is ControlStatus.PAUSE
        owner.resume()
        transform.release.set()
        thread.join(5.0)
        assert result[0] is transform.result
        assert owner.execution_status is ExecutionStatus.RUNNING

    def test_worker_error_wrapped(self):
        transform = _GatedTransform(error=ValueError("boom"))
        with pytest.raises(ProcessorError, match="boom"):
            TransformController(_Owner(), transform).run(np.zeros((4, 4)))

    def test_memory_error_wrapped(self):
        transform = _GatedTransform(error=MemoryError())
        with pytest.raises(ResourceError):
            TransformController(_Owner(), transform).run(np.zeros((4, 4)))

    def test_no_data_without_stop(self):
        class _Empty(_GatedTransform):
            def decompose(self, source, exclude_mask=None, **kwargs):
                return None

        with pytest.raises(ProcessorError, match="without data"):
            TransformController(_Owner(), _Empty()).run(np.zeros((4, 4)))
