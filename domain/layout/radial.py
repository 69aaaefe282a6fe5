import math
from collections import Counter
from typing import Dict, List, Optional, Sequence

from domain.corpus.arabic import arabic_sort_key
from domain.corpus.schema import Token
from domain.layout.random import derive_rng
from domain.layout.scales import sqrt_scale
from domain.layout.schema import AyahBar, RadialAyahLayout, RadialNode, RootConnection


def _dominant_pos(tokens: Sequence[Token]) -> str:
    counts: Dict[str, int] = {}
    for token in tokens:
        counts[token.pos] = counts.get(token.pos, 0) + 1
    if not counts:
        return "N"
    # max() keeps the first key among equals, i.e. first seen
    return max(counts, key=counts.get)


def _root_connections(ayahs_by_root: Dict[str, List[int]], limit: int) -> List[RootConnection]:
    connections: List[RootConnection] = []
    for root, ayahs in ayahs_by_root.items():
        for source, target in zip(ayahs, ayahs[1:]):
            connections.append(RootConnection(source_ayah=source, target_ayah=target, root=root))
            if len(connections) >= limit:
                return connections
    return connections


def build_radial_ayah_layout(
    tokens: Sequence[Token],
    sura: int,
    width: float = 800.0,
    height: float = 700.0,
    radius_range=(3.0, 12.0),
    seed: Optional[str] = None,
    jitter: float = 0.0,
    max_connections: int = 50,
) -> RadialAyahLayout:
    """
    Places every ayah of `sura` on a circle and the ayah's roots along its
    radial bar.

    - angle(ayah) = index / ayah_count * 2pi, index being the ayah's
      0-based position among the surah's ayahs
    - roots ranked by local count desc, then Arabic collation; rank r of n
      sits at inner + (r + 1) / n * (outer - inner)
    - node radius on a square-root scale of the local count
    - node angles equal their bar angle unless `jitter` is set, which adds
      a small angular offset from a stream seeded by `seed:node_id`

    Returns an empty layout (ayah_count == 0) when the surah has no tokens.
    """
    cx, cy = width / 2, height / 2
    inner = min(width, height) * 0.25
    outer = min(width, height) * 0.42
    seed_key = str(sura) if seed is None else seed

    by_ayah: Dict[int, List[Token]] = {}
    for token in tokens:
        if token.sura == sura:
            by_ayah.setdefault(token.ayah, []).append(token)

    ayah_numbers = sorted(by_ayah)
    ayah_count = len(ayah_numbers)
    layout = RadialAyahLayout(
        sura=sura,
        ayah_count=ayah_count,
        center=(cx, cy),
        inner_radius=inner,
        outer_radius=outer,
    )
    if not ayah_count:
        return layout

    root_counts = {
        ayah: Counter(t.root for t in ayah_tokens if t.root) for ayah, ayah_tokens in by_ayah.items()
    }
    max_local = max((max(c.values(), default=0) for c in root_counts.values()), default=0)
    radius_of = sqrt_scale((0, max(max_local, 1)), radius_range)
    max_tokens = max(len(ayah_tokens) for ayah_tokens in by_ayah.values())

    ayahs_by_root: Dict[str, List[int]] = {}

    for index, ayah in enumerate(ayah_numbers):
        ayah_tokens = sorted(by_ayah[ayah], key=lambda t: t.position)
        base_angle = index / ayah_count * 2 * math.pi

        layout.bars.append(
            AyahBar(
                ayah=ayah,
                token_count=len(ayah_tokens),
                angle=base_angle,
                bar_height=30 + len(ayah_tokens) / max_tokens * 120,
                dominant_pos=_dominant_pos(ayah_tokens),
            )
        )

        for token in ayah_tokens:
            if token.root:
                seen = ayahs_by_root.setdefault(token.root, [])
                if not seen or seen[-1] != ayah:
                    seen.append(ayah)

        ranked = sorted(
            root_counts[ayah].items(), key=lambda item: (-item[1], arabic_sort_key(item[0]))
        )
        n = len(ranked)
        for rank, (root, count) in enumerate(ranked):
            node_id = f"{sura}:{ayah}:{root}"
            angle = base_angle
            if jitter:
                rng = derive_rng(seed_key, node_id)
                angle += (rng() - 0.5) * jitter
            distance = inner + (rank + 1) / n * (outer - inner)
            layout.nodes.append(
                RadialNode(
                    id=node_id,
                    ayah=ayah,
                    root=root,
                    count=count,
                    rank=rank,
                    angle=angle,
                    distance=distance,
                    radius=radius_of(count),
                    x=cx + math.cos(angle) * distance,
                    y=cy + math.sin(angle) * distance,
                )
            )

    layout.connections = _root_connections(ayahs_by_root, max_connections)
    return layout
