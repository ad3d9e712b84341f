"""Memoizing cache of compiled patterns keyed by template text."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from sockit.models import SockitConfig
from sockit.parser import compile_pattern
from sockit.pattern import Pattern

logger = logging.getLogger(__name__)


class PatternCache:
    """LRU cache of compiled patterns.

    Create one explicitly wherever repeated compilation should be avoided and
    clear it (or leave its ``with`` block) to release the patterns. A
    ``max_size`` of 0 disables eviction. Templates that fail to compile are
    not cached.
    """

    def __init__(
        self, max_size: int | None = None, config: SockitConfig | None = None
    ) -> None:
        self.config = config or SockitConfig()
        self.max_size = self.config.cache_size if max_size is None else max_size
        self._patterns: OrderedDict[str, Pattern] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, template: str) -> Pattern:
        """Return the compiled pattern for template, compiling it on a miss."""
        with self._lock:
            pattern = self._patterns.get(template)
            if pattern is not None:
                self._patterns.move_to_end(template)
                self.hits += 1
                return pattern
            self.misses += 1

        logger.debug("Pattern cache miss for %r", template)
        pattern = compile_pattern(template, self.config)

        with self._lock:
            self._patterns[template] = pattern
            self._patterns.move_to_end(template)
            if self.max_size and len(self._patterns) > self.max_size:
                evicted, _ = self._patterns.popitem(last=False)
                logger.debug("Evicted %r from pattern cache", evicted)
        return pattern

    def clear(self) -> None:
        with self._lock:
            self._patterns.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, template: object) -> bool:
        with self._lock:
            return template in self._patterns

    def __len__(self) -> int:
        with self._lock:
            return len(self._patterns)

    def __enter__(self) -> PatternCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clear()
