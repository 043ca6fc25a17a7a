"""Forward scan that turns classified code points into extended grapheme cluster spans."""
from collections import deque
from typing import Callable, Iterator, NamedTuple, Sequence

from clustersplit.codepoints import iter_code_points
from clustersplit.properties import DEFAULT_CLASSIFIER, BreakClass, Property
from clustersplit.rules import BreakDecision, Window, decide as default_decide


class ClusterSpan(NamedTuple):
    """[start, end) over the code units of the segmented input."""

    start: int
    end: int

    @property
    def width(self) -> int:
        return self.end - self.start

    def slice(self, units: Sequence):
        return units[self.start:self.end]


class _Item(NamedTuple):
    index: int
    width: int
    prop: Property


class ClusterIterator:
    """Single left-to-right pass over units yielding ClusterSpan.

    Forward-only and not restartable; build a new iterator to scan again.
    """

    def __init__(
        self,
        units: Sequence,
        classifier=None,
        decide: Callable[[Window, Property], BreakDecision] | None = None,
    ):
        self._classifier = classifier or DEFAULT_CLASSIFIER
        self._decide = decide or default_decide
        self._code_points = iter_code_points(units)
        self._replay: deque[_Item] = deque()
        self._items: list[_Item] = []
        self._window: Window | None = None
        self._done = False

    def __iter__(self) -> "ClusterIterator":
        return self

    def _next_item(self) -> _Item | None:
        if self._replay:
            return self._replay.popleft()
        cp = next(self._code_points, None)
        if cp is None:
            return None
        return _Item(cp.index, cp.width, self._classifier.classify(cp.value))

    def _restart(self, item: _Item) -> None:
        self._items = [item]
        self._window = Window(item.prop)

    def __next__(self) -> ClusterSpan:
        if self._done:
            raise StopIteration
        while True:
            item = self._next_item()
            if item is None:
                self._done = True
                if not self._items:
                    raise StopIteration
                first, last = self._items[0], self._items[-1]
                self._items = []
                self._window = None
                return ClusterSpan(first.index, last.index + last.width)
            if self._window is None:
                self._restart(item)
                continue

            decision = self._decide(self._window, item.prop)
            if decision is BreakDecision.NO_BREAK:
                self._window.append(item.prop)
                self._items.append(item)
                continue

            cut = len(self._items)
            if decision is not BreakDecision.BREAK:
                cut = self._regional_cut(item, decision)
            seen = self._items + [item]
            span = ClusterSpan(seen[0].index, seen[cut].index)
            self._restart(seen[cut])
            self._replay.extendleft(reversed(seen[cut + 1:]))
            return span

    def _regional_cut(self, item: _Item, decision: BreakDecision) -> int:
        """Position in the window (end included) of the indicator the boundary precedes."""
        seen = self._items + [item]
        positions = [i for i, it in enumerate(seen) if it.prop.break_class == BreakClass.REGIONAL_INDICATOR]
        back = 1 if decision is BreakDecision.BREAK_BEFORE_LAST_REGIONAL else 2
        if len(positions) < back or positions[-back] == 0:
            # boundary would precede the cluster's own first code point
            return len(self._items)
        return positions[-back]


def segment(units: Sequence, classifier=None) -> ClusterIterator:
    """Lazily segment units (a str or a sequence of UTF-16 code units) into cluster spans."""
    return ClusterIterator(units, classifier)
