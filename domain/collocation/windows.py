from bisect import bisect_left, bisect_right
from typing import Dict, Iterable, Iterator, List, NamedTuple, Sequence, Tuple

from common.constants import UNIT_AYAH, WINDOW_AYAH, WINDOW_SURAH
from domain.collocation.schema import CollocationOptions
from domain.corpus.schema import Token


def canonical_key(token: Token) -> Tuple[int, int, int]:
    return token.sura, token.ayah, token.position


class Window(NamedTuple):
    """
    One window instance around an anchor.

    `units` are (key, token indices) slots. Every window is a single unit
    keyed by its label, so the number of distinct unit keys a collocate
    shows up in is the number of windows holding it, the PMI joint
    frequency. Token-distance windows leave the anchor token out of its
    own members.

    `weight` is how many target occurrences share the window, so that
    weight * candidate occurrences is the number of (target, candidate)
    token pairs it contributes to the raw count.
    """

    label: str
    units: List[Tuple[str, Sequence[int]]]
    weight: int = 1  # target occurrences the window is anchored on

    def indices(self) -> Iterator[int]:
        for _, members in self.units:
            yield from members


class WindowIndex:
    """
    Canonically ordered view of a token snapshot with ayah and surah
    spans, so window expansion never has to scan outside a surah.
    """

    def __init__(self, tokens: Iterable[Token]):
        self.tokens: List[Token] = sorted(tokens, key=canonical_key)
        self.ayah_spans: Dict[Tuple[int, int], Tuple[int, int]] = {}
        self.surah_spans: Dict[int, Tuple[int, int]] = {}
        self.surah_ayahs: Dict[int, List[int]] = {}

        for i, token in enumerate(self.tokens):
            ayah_key = (token.sura, token.ayah)
            start, _ = self.ayah_spans.get(ayah_key, (i, i))
            self.ayah_spans[ayah_key] = (start, i + 1)

            start, _ = self.surah_spans.get(token.sura, (i, i))
            self.surah_spans[token.sura] = (start, i + 1)

            ayahs = self.surah_ayahs.setdefault(token.sura, [])
            if not ayahs or ayahs[-1] != token.ayah:
                ayahs.append(token.ayah)

    def __len__(self) -> int:
        return len(self.tokens)

    def find(self, predicate) -> List[int]:
        return [i for i, token in enumerate(self.tokens) if predicate(token)]

    # ---------- window builders ----------

    def _ayah_range(self, sura: int, ayah: int) -> range:
        return range(*self.ayah_spans[(sura, ayah)])

    def _neighbour_ayahs(self, sura: int, ayah: int, distance: int) -> List[int]:
        ayahs = self.surah_ayahs[sura]
        lo = bisect_left(ayahs, ayah - distance)
        hi = bisect_right(ayahs, ayah + distance)
        return ayahs[lo:hi]

    def _token_window(self, i: int, distance: int) -> Window:
        token = self.tokens[i]
        surah_start, surah_end = self.surah_spans[token.sura]
        start = max(surah_start, i - distance)
        end = min(surah_end, i + distance + 1)
        members = [j for j in range(start, end) if j != i]
        return Window(token.address, [(token.address, members)])

    def _ayah_distance_window(self, sura: int, ayah: int, distance: int) -> Window:
        label = f"{sura}:{ayah}"
        members = [
            j
            for other in self._neighbour_ayahs(sura, ayah, distance)
            for j in self._ayah_range(sura, other)
        ]
        return Window(label, [(label, members)])

    def _window_key(self, i: int, options: CollocationOptions):
        token = self.tokens[i]
        if options.window_type == WINDOW_SURAH:
            return token.sura
        if options.window_type == WINDOW_AYAH or options.distance_unit == UNIT_AYAH:
            return token.sura, token.ayah
        return i

    def windows_for(self, anchors: Sequence[int], options: CollocationOptions) -> List[Window]:
        """
        Windows around the given anchor token indices, one per distinct
        window key (ayah, surah or token), in corpus order.
        """
        weights: Dict[object, int] = {}
        for i in anchors:
            key = self._window_key(i, options)
            weights[key] = weights.get(key, 0) + 1

        windows: List[Window] = []
        for key, weight in weights.items():
            if options.window_type == WINDOW_AYAH:
                label = f"{key[0]}:{key[1]}"
                window = Window(label, [(label, self._ayah_range(*key))])
            elif options.window_type == WINDOW_SURAH:
                label = str(key)
                window = Window(label, [(label, range(*self.surah_spans[key]))])
            elif options.distance_unit == UNIT_AYAH:
                window = self._ayah_distance_window(key[0], key[1], options.distance)
            else:
                window = self._token_window(key, options.distance)
            windows.append(window._replace(weight=weight))
        return windows
