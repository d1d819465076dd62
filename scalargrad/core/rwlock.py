# scalargrad/core/rwlock.py
from __future__ import annotations
import logging
import threading
from contextlib import contextmanager

from .errors import GraphPoisonedError

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Many readers or one writer, with poisoning.

    - `read()` is shared, `write()` is exclusive.
    - A waiting writer blocks newly arriving readers so writers are not starved.
    - Not re-entrant: a thread must not acquire the lock while it already holds it.
    - If an exception escapes a `write()` block the lock is poisoned and every
      later acquisition raises GraphPoisonedError.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    def _check_poison(self):
        if self._poisoned:
            raise GraphPoisonedError()

    @contextmanager
    def read(self):
        with self._cond:
            self._check_poison()
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._check_poison()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._check_poison()
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            if self._poisoned:
                self._cond.notify_all()
                raise GraphPoisonedError()
            self._writer = True
        try:
            yield
        except BaseException:
            with self._cond:
                self._poisoned = True
            logger.error("Writer failed while holding the graph lock; lock poisoned")
            raise
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()
