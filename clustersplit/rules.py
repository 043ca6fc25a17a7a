"""Grapheme cluster boundary rules (UAX #29 GB3-GB999) as an ordered cascade over a window."""
from enum import Enum
from typing import Callable, Iterable, Sequence

from clustersplit.properties import BreakClass, Property

RI = BreakClass.REGIONAL_INDICATOR
CONTROLS = (BreakClass.CONTROL, BreakClass.CR, BreakClass.LF)


class BreakDecision(Enum):
    NO_BREAK = 0
    BREAK = 1
    BREAK_BEFORE_LAST_REGIONAL = 2
    BREAK_BEFORE_PENULTIMATE_REGIONAL = 3

    @property
    def is_break(self) -> bool:
        return self is not BreakDecision.NO_BREAK


class Window:
    """Properties of the open cluster: start, then mid in arrival order.

    Run summaries are kept up to date on append so the rules never rescan mid.
    """

    __slots__ = (
        "start", "mid", "regional_count", "leading_regional", "last_regional",
        "_pictographic_open", "_pictographic_open_before_last",
    )

    def __init__(self, start: Property, mid: Iterable[Property] = ()):
        self.start = start
        self.mid = []
        self.regional_count = 1 if start.break_class == RI else 0
        # consecutive RI count from position 1 onward
        self.leading_regional = 0
        self.last_regional = 0 if start.break_class == RI else -1
        # "a pictographic is followed only by Extend" for the whole prefix, and for prefix[:-1]
        self._pictographic_open = start.pictographic
        self._pictographic_open_before_last = False
        for prop in mid:
            self.append(prop)

    def __len__(self) -> int:
        return 1 + len(self.mid)

    @property
    def previous(self) -> Property:
        return self.mid[-1] if self.mid else self.start

    @property
    def mid_has_regional(self) -> bool:
        return self.regional_count > (1 if self.start.break_class == RI else 0)

    def append(self, prop: Property) -> None:
        if prop.break_class == RI:
            if self.leading_regional == len(self.mid):
                self.leading_regional += 1
            self.regional_count += 1
            self.last_regional = len(self)
        self._pictographic_open_before_last = self._pictographic_open
        if prop.pictographic:
            self._pictographic_open = True
        elif prop.break_class != BreakClass.EXTEND:
            self._pictographic_open = False
        self.mid.append(prop)

    def extends_pictographic(self) -> bool:
        """True if the prefix is \\p{Extended_Pictographic} Extend* followed by its last element."""
        return self.previous.pictographic or self._pictographic_open_before_last

    def classes(self) -> list[BreakClass]:
        return [self.start.break_class] + [p.break_class for p in self.mid]


Rule = Callable[[Window, Property], BreakDecision | None]


def _regional_lookahead(window: Window, end: Property) -> BreakDecision | None:
    # GB12 ^ (RI RI)* RI × RI, GB13 [^RI] (RI RI)* RI × RI: terminator once the run is visible
    if end.break_class == RI:
        last = len(window)
        run_ok = window.leading_regional == len(window.mid)
        count = window.regional_count + 1
    else:
        last = window.last_regional
        run_ok = window.leading_regional >= last - 1
        count = window.regional_count
    if last <= 0 or not run_ok:
        return None
    if window.start.break_class in (BreakClass.PREPEND, RI):
        return None
    if count % 2 == 1:
        return BreakDecision.BREAK_BEFORE_LAST_REGIONAL
    return BreakDecision.BREAK_BEFORE_PENULTIMATE_REGIONAL


def _gb3(window: Window, end: Property) -> BreakDecision | None:
    if window.previous.break_class == BreakClass.CR and end.break_class == BreakClass.LF:
        return BreakDecision.NO_BREAK
    return None


def _gb4(window: Window, end: Property) -> BreakDecision | None:
    if window.previous.break_class in CONTROLS:
        return BreakDecision.BREAK
    return None


def _gb5(window: Window, end: Property) -> BreakDecision | None:
    if end.break_class in CONTROLS:
        return BreakDecision.BREAK
    return None


def _gb6(window: Window, end: Property) -> BreakDecision | None:
    if window.previous.break_class == BreakClass.L and end.break_class in (
        BreakClass.L, BreakClass.V, BreakClass.LV, BreakClass.LVT,
    ):
        return BreakDecision.NO_BREAK
    return None


def _gb7(window: Window, end: Property) -> BreakDecision | None:
    if window.previous.break_class in (BreakClass.LV, BreakClass.V) and end.break_class in (
        BreakClass.V, BreakClass.T,
    ):
        return BreakDecision.NO_BREAK
    return None


def _gb8(window: Window, end: Property) -> BreakDecision | None:
    if window.previous.break_class in (BreakClass.LVT, BreakClass.T) and end.break_class == BreakClass.T:
        return BreakDecision.NO_BREAK
    return None


def _gb9(window: Window, end: Property) -> BreakDecision | None:
    if end.break_class in (BreakClass.EXTEND, BreakClass.ZWJ):
        return BreakDecision.NO_BREAK
    return None


def _gb9a(window: Window, end: Property) -> BreakDecision | None:
    if end.break_class == BreakClass.SPACING_MARK:
        return BreakDecision.NO_BREAK
    return None


def _gb9b(window: Window, end: Property) -> BreakDecision | None:
    if window.previous.break_class == BreakClass.PREPEND:
        return BreakDecision.NO_BREAK
    return None


def _gb11(window: Window, end: Property) -> BreakDecision | None:
    # \p{Extended_Pictographic} Extend* ZWJ × \p{Extended_Pictographic}
    if (
        end.pictographic
        and window.previous.break_class == BreakClass.ZWJ
        and window.extends_pictographic()
    ):
        return BreakDecision.NO_BREAK
    return None


def _gb12_13(window: Window, end: Property) -> BreakDecision | None:
    if window.mid_has_regional:
        return BreakDecision.BREAK
    if window.previous.break_class == RI and end.break_class == RI:
        return BreakDecision.NO_BREAK
    return None


def _gb999(window: Window, end: Property) -> BreakDecision | None:
    return BreakDecision.BREAK


RULES: tuple[tuple[str, Rule], ...] = (
    ("GB12/GB13 lookahead", _regional_lookahead),
    ("GB3", _gb3),
    ("GB4", _gb4),
    ("GB5", _gb5),
    ("GB6", _gb6),
    ("GB7", _gb7),
    ("GB8", _gb8),
    ("GB9", _gb9),
    ("GB9a", _gb9a),
    ("GB9b", _gb9b),
    ("GB11", _gb11),
    ("GB12/GB13", _gb12_13),
    ("GB999", _gb999),
)


def matching_rule(window: Window, end: Property) -> tuple[str, BreakDecision]:
    """Name and decision of the first rule that applies."""
    for name, rule in RULES:
        decision = rule(window, end)
        if decision is not None:
            return name, decision
    raise AssertionError("GB999 always applies")


def decide(window: Window, end: Property) -> BreakDecision:
    """Whether, and where, a boundary falls before end given the open cluster window."""
    return matching_rule(window, end)[1]


def should_break(
    start: BreakClass,
    mid: Sequence[BreakClass],
    end: BreakClass,
    start_pictographic: bool = False,
    mid_pictographic: Sequence[bool] | None = None,
    end_pictographic: bool = False,
) -> BreakDecision:
    """Positional form of decide() over bare break classes and flags."""
    if mid_pictographic is None:
        mid_pictographic = [False] * len(mid)
    if len(mid_pictographic) != len(mid):
        raise ValueError("mid and mid_pictographic must have the same length")
    window = Window(
        Property(start, start_pictographic),
        (Property(c, e) for c, e in zip(mid, mid_pictographic)),
    )
    return decide(window, Property(end, end_pictographic))
