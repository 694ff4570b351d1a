from __future__ import annotations

import random
import string
import threading
import time

_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


class ClientIdGenerator:
    """
    Issues join keys of the form CLI-<epoch ms>-<6 chars>.
    The millisecond part never goes backwards within a process, even if the wall clock does.
    """

    prefix = "CLI"
    suffix_length = 6

    def __init__(self, clock=None, rng: random.Random | None = None):
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._last_ms = 0

    def new_id(self) -> str:
        with self._lock:
            now_ms = max(self._clock(), self._last_ms)
            self._last_ms = now_ms
            suffix = "".join(self._rng.choices(_SUFFIX_ALPHABET, k=self.suffix_length))
        return f"{self.prefix}-{now_ms}-{suffix}"
