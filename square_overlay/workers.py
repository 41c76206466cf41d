# workers.py
"""
Background execution for export jobs.

Compositing a full-resolution image can take long enough to stall the UI,
so the presenter hands the work to a :class:`Worker` on the global
``QThreadPool``.  Results and errors come back through Qt signals, which
deliver them on the GUI thread.
"""
import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

logger = logging.getLogger("square_overlay.workers")


class WorkerSignals(QObject):
    started = Signal()
    finished = Signal()
    error = Signal(str)
    result = Signal(object)


class Worker(QRunnable):
    """Wraps any function to run in a QThreadPool."""
    def __init__(self, fn: Callable, *args, **kwargs):
        super().__init__()
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.signals = WorkerSignals()

    def run(self) -> None:
        try:
            self.signals.started.emit()
            result = self.fn(*self.args, **self.kwargs)
            self.signals.result.emit(result)
        except Exception as e:
            logger.error("Worker error: %s", e)
            self.signals.error.emit(str(e))
        finally:
            self.signals.finished.emit()


def start_worker(
    fn: Callable[[], Any],
    *,
    on_result: Callable[[Any], None],
    on_error: Callable[[str], None],
    on_finished: Optional[Callable[[], None]] = None,
    pool: Optional[QThreadPool] = None,
) -> Worker:
    """Wire callbacks onto a new :class:`Worker` and start it."""
    worker = Worker(fn)
    worker.signals.result.connect(on_result)
    worker.signals.error.connect(on_error)
    if on_finished is not None:
        worker.signals.finished.connect(on_finished)
    (pool or QThreadPool.globalInstance()).start(worker)
    return worker
