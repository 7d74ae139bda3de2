"""Branch conditions: comparisons and regex matches.

Comparison rules, as a function of the value kind:

    value kind   operand numeric          operand not numeric
    ----------   ----------------------   ---------------------------
    ABSENT       False                    False
    NUMBER       numeric comparison       string comparison
    STRING       numeric if value parses, string comparison
                 otherwise False
    BOOLEAN      False                    string comparison ('true'/'false')

String comparison is exact equality for '=' and lexicographic for the
ordering operators. Regex conditions use re.search, case-sensitive.
"""

import logging
import operator
import re
import threading
from collections import OrderedDict
from collections.abc import Callable
from re import Pattern

from streamfmt.config import Config
from streamfmt.templates.context import ResolvedValue, ValueKind, parse_number
from streamfmt.templates.nodes import Compare, CompareOp, Regex

logger = logging.getLogger(__name__)

OPERATORS: dict[CompareOp, Callable[[object, object], bool]] = {
    CompareOp.EQ: operator.eq,
    CompareOp.GT: operator.gt,
    CompareOp.GE: operator.ge,
    CompareOp.LT: operator.lt,
    CompareOp.LE: operator.le,
}


def compare(value: ResolvedValue, condition: Compare) -> bool:
    """Evaluate a comparison modifier against a resolved value."""
    if value.kind is ValueKind.ABSENT:
        return False

    op = OPERATORS[condition.op]
    operand_number = parse_number(condition.operand)

    if operand_number is not None:
        value_number = value.as_number()
        if value_number is None:
            return False
        return op(value_number, operand_number)

    return op(value.as_text(), condition.operand)


class RegexCache:
    """Bounded cache of compiled patterns.

    Invalid patterns are remembered too (as the re.error message) so a bad
    template does not recompile on every render.
    """

    def __init__(self, max_size: int | None = None):
        self._max_size = Config.REGEX_CACHE_SIZE if max_size is None else max_size
        self._patterns: OrderedDict[str, Pattern | str] = OrderedDict()
        self._lock = threading.Lock()

    def compile(self, pattern: str) -> Pattern:
        """Return the compiled pattern.

        Raises:
            re.error: if the pattern is invalid
        """
        with self._lock:
            cached = self._patterns.get(pattern)
            if cached is not None:
                self._patterns.move_to_end(pattern)
        if cached is None:
            try:
                cached = re.compile(pattern)
            except re.error as e:
                cached = str(e)
            self._store(pattern, cached)
        if isinstance(cached, str):
            raise re.error(cached, pattern)
        return cached

    def _store(self, pattern: str, compiled: Pattern | str) -> None:
        with self._lock:
            self._patterns[pattern] = compiled
            if self._max_size > 0:
                while len(self._patterns) > self._max_size:
                    self._patterns.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._patterns.clear()

    @property
    def size(self) -> int:
        return len(self._patterns)


_regex_cache: RegexCache | None = None


def get_regex_cache() -> RegexCache:
    """Get the default regex cache."""
    global _regex_cache
    if _regex_cache is None:
        _regex_cache = RegexCache()
    return _regex_cache


def regex_matches(value: ResolvedValue, condition: Regex, cache: RegexCache | None = None) -> bool:
    """Search the value's text for the pattern (absent searches '').

    Raises:
        re.error: if the pattern is invalid; the evaluator turns this into a
            diagnostic and the false branch.
    """
    compiled = (cache or get_regex_cache()).compile(condition.pattern)
    return compiled.search(value.as_text()) is not None
