import math
from typing import Dict, Optional

import networkx as nx
import numpy as np

from domain.layout.random import derive_rng, hash_string
from domain.layout.schema import CollocationLayout, ForceGraph, ForceLink, ForceNode

SEED_JITTER = 18.0
LINK_STRENGTH = {"trunk": 0.12, "branch": 0.52}
ANCHOR_PULL = {"target": 1.0, "collocate": 0.06, "tendril": 0.01}


def seed_force_graph(
    layout: CollocationLayout,
    width: float = 900.0,
    height: float = 700.0,
    jitter: float = SEED_JITTER,
) -> ForceGraph:
    """
    Arena of simulation nodes started at their anchors (plus a small
    seeded jitter) instead of a global random scatter. The target is
    pinned at the canvas centre.
    """
    cx, cy = width / 2, height / 2
    graph = ForceGraph(width=width, height=height)

    for node in layout.nodes:
        anchor_x = cx + math.cos(node.anchor_angle) * node.anchor_distance
        anchor_y = cy + math.sin(node.anchor_angle) * node.anchor_distance
        pinned = node.type == "target"

        if pinned:
            x, y = cx, cy
        else:
            rng = derive_rng(layout.seed_key, node.id)
            x = anchor_x + (rng() - 0.5) * jitter
            y = anchor_y + (rng() - 0.5) * jitter

        graph.index[node.id] = len(graph.nodes)
        graph.nodes.append(
            ForceNode(
                id=node.id,
                type=node.type,
                x=x,
                y=y,
                anchor_x=cx if pinned else anchor_x,
                anchor_y=cy if pinned else anchor_y,
                radius=node.radius,
                fixed=pinned,
            )
        )

    # parents are resolved once every node has an index
    for node in layout.nodes:
        if node.parent_id is not None and node.parent_id in graph.index:
            graph.nodes[graph.index[node.id]].parent = graph.index[node.parent_id]

    for link in layout.links:
        if link.source not in graph.index or link.target not in graph.index:
            continue
        graph.links.append(
            ForceLink(
                source=graph.index[link.source],
                target=graph.index[link.target],
                kind=link.kind,
                strength=LINK_STRENGTH[link.kind],
            )
        )

    return graph


def _positions(graph: ForceGraph, scale: float) -> Dict[int, np.ndarray]:
    cx, cy = graph.width / 2, graph.height / 2
    return {
        i: np.array([(node.x - cx) / scale, (node.y - cy) / scale])
        for i, node in enumerate(graph.nodes)
    }


def step_force_graph(
    graph: ForceGraph,
    iterations: int = 1,
    k: Optional[float] = None,
) -> ForceGraph:
    """
    Advances the simulation by `iterations` Fruchterman-Reingold passes and
    returns a new arena; `graph` is left untouched.

    Physics is networkx.spring_layout over canvas-normalized coordinates,
    pinned nodes passed as `fixed`, link strengths as edge weights. Free
    nodes are then pulled toward their anchors by the per-type strength,
    compounded over the passes.
    """
    if iterations < 1:
        raise ValueError("iterations must be >= 1")

    free = [i for i, node in enumerate(graph.nodes) if not node.fixed]
    if len(graph.nodes) < 2 or not free:
        return graph.model_copy(update={"ticks": graph.ticks + iterations}, deep=True)

    scale = max(graph.width, graph.height) or 1.0
    g = nx.Graph()
    g.add_nodes_from(range(len(graph.nodes)))
    for link in graph.links:
        g.add_edge(link.source, link.target, weight=link.strength)

    fixed = [i for i, node in enumerate(graph.nodes) if node.fixed]
    pos = nx.spring_layout(
        g,
        k=k,
        pos=_positions(graph, scale),
        fixed=fixed or None,
        iterations=iterations,
        weight="weight",
        scale=None,
        seed=hash_string(f"{graph.ticks}:{len(graph.nodes)}"),
    )

    cx, cy = graph.width / 2, graph.height / 2
    nodes = []
    for i, node in enumerate(graph.nodes):
        if node.fixed:
            nodes.append(node.model_copy())
            continue
        x = cx + float(pos[i][0]) * scale
        y = cy + float(pos[i][1]) * scale
        pull = 1 - (1 - ANCHOR_PULL[node.type]) ** iterations
        nodes.append(
            node.model_copy(
                update={
                    "x": x + (node.anchor_x - x) * pull,
                    "y": y + (node.anchor_y - y) * pull,
                }
            )
        )

    return graph.model_copy(
        update={
            "nodes": nodes,
            "links": [link.model_copy() for link in graph.links],
            "index": dict(graph.index),
            "ticks": graph.ticks + iterations,
        }
    )
