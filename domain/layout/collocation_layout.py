import math
from typing import List, Optional, Sequence, Tuple

from domain.collocation.schema import CollocationResult, CollocationTerm
from domain.layout.random import derive_rng, hash_string
from domain.layout.scales import js_round, linear_scale, sqrt_scale
from domain.layout.schema import CollocationLayout, CollocationLink, CollocationNode

DISTANCE_RANGE = (140.0, 370.0)
DISTANCE_OFFSET = 40.0
RADIUS_RANGE = (6.0, 16.0)
TARGET_RADIUS = 13.0
TENDRIL_COUNT_RANGE = (2.0, 10.0)
SECTOR_SPREAD = 0.95 * math.pi
SECTOR_JITTER = 0.52


def node_id(kind: str, value: str) -> str:
    return f"{kind}-{value}"


def sector_count(candidate_count: int) -> int:
    return min(7, max(4, math.ceil(math.sqrt(candidate_count))))


def sector_angles(count: int) -> List[float]:
    step = 2 * SECTOR_SPREAD / max(1, count - 1)
    return [-SECTOR_SPREAD + idx * step for idx in range(count)]


def pmi_domain(results: Sequence[CollocationResult]) -> Tuple[float, float]:
    values = [r.pmi for r in results if math.isfinite(r.pmi)]
    low = min(values) if values else 0.0
    high = max(values) if values else 1.0
    if low == high:
        return low - 1, high + 1
    return low, high


def build_collocation_layout(
    target: CollocationTerm,
    results: Sequence[CollocationResult],
    max_nodes: Optional[int] = None,
    target_count: int = 0,
    with_tendrils: bool = True,
) -> CollocationLayout:
    """
    Radial placement of collocates around the target.

    Collocates fall into min(7, max(4, ceil(sqrt(n)))) sectors picked by a
    hash of their label. Distance is a linear scale from the pmi domain
    reversed onto [140, 370] plus a seeded offset, so stronger collocates
    sit closer. Radius is a sqrt scale of pmi onto [6, 16]. Each collocate
    may carry tendril nodes, one per sample window (or lemma), pointing
    back to it through parent_id.

    All randomness comes from streams keyed on the target value and the
    collocate label, so equal inputs give equal layouts.
    """
    shown = list(results if max_nodes is None else results[:max_nodes])
    target_id = node_id(target.kind, target.value)
    domain = pmi_domain(shown)
    sectors = sector_count(len(shown))
    angles = sector_angles(sectors)
    max_count = max([r.count for r in shown] + [1])

    intensity_of = linear_scale(domain, (0.0, 1.0))
    radius_of = sqrt_scale(domain, RADIUS_RANGE)
    distance_of = linear_scale((domain[1], domain[0]), DISTANCE_RANGE)
    tendrils_of = linear_scale((1, max_count), TENDRIL_COUNT_RANGE)

    layout = CollocationLayout(
        target_id=target_id,
        seed_key=target.value,
        pmi_domain=domain,
        sector_count=sectors,
    )
    layout.nodes.append(
        CollocationNode(
            id=target_id,
            label=target.value,
            type="target",
            count=target_count,
            pmi=domain[1],
            radius=TARGET_RADIUS,
            cluster=-1,
            anchor_angle=0.0,
            anchor_distance=0.0,
            intensity=1.0,
        )
    )

    for index, result in enumerate(shown):
        rng = derive_rng(target.value, result.label, index)
        cluster = hash_string(result.label) % sectors
        angle = angles[cluster] + (rng() - 0.5) * SECTOR_JITTER
        anchor_distance = distance_of(result.pmi) + rng() * DISTANCE_OFFSET
        intensity = intensity_of(result.pmi)
        collocate_id = node_id(result.group_by, result.label)

        layout.nodes.append(
            CollocationNode(
                id=collocate_id,
                label=result.label,
                type="collocate",
                count=result.count,
                pmi=result.pmi,
                radius=radius_of(result.pmi),
                cluster=cluster,
                anchor_angle=angle,
                anchor_distance=anchor_distance,
                intensity=intensity,
                sample_lemmas=list(result.sample_lemmas),
            )
        )
        layout.links.append(
            CollocationLink(
                source=target_id,
                target=collocate_id,
                kind="trunk",
                weight=result.count,
                pmi=result.pmi,
                intensity=intensity,
            )
        )

        if not with_tendrils:
            continue

        branch_labels = list(dict.fromkeys(result.sample_windows or result.sample_lemmas))
        wanted = max(2, js_round(tendrils_of(result.count) + intensity * 2))
        tendril_count = max(1, min(wanted, len(branch_labels) or 1))

        for i in range(tendril_count):
            tendril_id = f"tendril-{result.label}-{i}"
            tendril_angle = angle + (rng() - 0.5) * 1.1
            tendril_distance = anchor_distance + 28 + rng() * 110
            tendril_radius = 1.2 + rng() * 1.9 + intensity * 0.8
            layout.nodes.append(
                CollocationNode(
                    id=tendril_id,
                    label=branch_labels[i] if i < len(branch_labels) else f"{result.label}:{i + 1}",
                    type="tendril",
                    count=1,
                    pmi=result.pmi,
                    radius=tendril_radius,
                    cluster=cluster,
                    anchor_angle=tendril_angle,
                    anchor_distance=tendril_distance,
                    intensity=intensity,
                    parent_id=collocate_id,
                )
            )
            layout.links.append(
                CollocationLink(
                    source=collocate_id,
                    target=tendril_id,
                    kind="branch",
                    weight=1 + rng(),
                    pmi=result.pmi,
                    intensity=intensity,
                )
            )

    return layout
