from typing import Dict, List, Optional, Sequence

from common.constants import FLOW_BASE_WIDTH, FLOW_WIDTH_SPAN
from domain.corpus.schema import RootFlow
from domain.layout.schema import SankeyFlow, SankeyLayout, SankeyNode


def flow_width(count: int, max_count: int) -> float:
    return FLOW_BASE_WIDTH + FLOW_WIDTH_SPAN * (count / max(max_count, 1))


def _stack(flows, node_ids, node_y: Dict[str, float], key: str, widths, flow_gap: float):
    """Band centres of each flow inside its node, in flow order."""
    offsets: Dict[str, float] = {node: 0.0 for node in node_ids}
    centres = []
    for flow, width in zip(flows, widths):
        node = flow[key]
        centres.append(node_y[node] + offsets[node] + width / 2)
        offsets[node] += width + flow_gap
    return centres


def build_sankey_layout(
    flows: Sequence[RootFlow],
    max_flows: Optional[int] = None,
    root: Optional[str] = None,
    flow_gap: float = 2.0,
    node_gap: float = 12.0,
    padding: float = 20.0,
) -> SankeyLayout:
    """
    Root -> lemma band layout.

    Widths are 4 + 14 * count / max_count. Root nodes keep the order in
    which they first appear in `flows` (already count-sorted); lemma nodes
    follow the first root feeding them. Flows are ordered by source node,
    then target node, then count desc. A node is as tall as the bands
    touching it plus `flow_gap` between neighbouring bands.
    """
    visible = [f for f in flows if root is None or f.root == root]
    if max_flows is not None:
        visible = visible[:max_flows]
    if not visible:
        return SankeyLayout()

    root_order: Dict[str, int] = {}
    for flow in visible:
        root_order.setdefault(flow.root, len(root_order))

    lemma_rank: Dict[str, tuple] = {}
    for position, flow in enumerate(visible):
        candidate = (root_order[flow.root], position)
        if flow.lemma not in lemma_rank or candidate < lemma_rank[flow.lemma]:
            lemma_rank[flow.lemma] = candidate
    lemma_order = {
        lemma: i for i, lemma in enumerate(sorted(lemma_rank, key=lambda lemma: lemma_rank[lemma]))
    }

    ordered = sorted(
        visible,
        key=lambda f: (root_order[f.root], lemma_order[f.lemma], -f.count),
    )
    max_count = max(f.count for f in ordered)
    widths = [flow_width(f.count, max_count) for f in ordered]

    rows = [
        {"source": f"root:{f.root}", "target": f"lemma:{f.lemma}", "flow": f} for f in ordered
    ]

    nodes: List[SankeyNode] = []
    node_y: Dict[str, float] = {}
    height = padding

    for side, order_map in (("root", root_order), ("lemma", lemma_order)):
        key = "source" if side == "root" else "target"
        y = padding
        for label in sorted(order_map, key=order_map.get):
            node_id = f"{side}:{label}"
            touching = [w for row, w in zip(rows, widths) if row[key] == node_id]
            node_height = sum(touching) + flow_gap * (len(touching) - 1)
            value = sum(row["flow"].count for row in rows if row[key] == node_id)
            nodes.append(
                SankeyNode(
                    id=node_id,
                    label=label,
                    side=side,
                    order=order_map[label],
                    y=y,
                    height=node_height,
                    value=value,
                )
            )
            node_y[node_id] = y
            y += node_height + node_gap
        height = max(height, y - node_gap + padding)

    source_centres = _stack(rows, [n.id for n in nodes], node_y, "source", widths, flow_gap)
    target_centres = _stack(rows, [n.id for n in nodes], node_y, "target", widths, flow_gap)

    layout_flows = [
        SankeyFlow(
            root=row["flow"].root,
            lemma=row["flow"].lemma,
            count=row["flow"].count,
            width=width,
            source_id=row["source"],
            target_id=row["target"],
            source_y=source_y,
            target_y=target_y,
            token_ids=list(row["flow"].token_ids),
        )
        for row, width, source_y, target_y in zip(rows, widths, source_centres, target_centres)
    ]

    return SankeyLayout(nodes=nodes, flows=layout_flows, height=height)
