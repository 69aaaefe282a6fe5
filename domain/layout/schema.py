from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from core.versions import LAYOUT_VERSION

# ---------- Radial ayah map ----------


class RadialNode(BaseModel):
    id: str  # "{sura}:{ayah}:{root}"
    ayah: int
    root: str
    count: int  # occurrences of the root inside the ayah
    rank: int  # 0 = most frequent root of the ayah
    angle: float  # radians
    distance: float  # from the centre
    radius: float
    x: float
    y: float


class AyahBar(BaseModel):
    ayah: int
    token_count: int
    angle: float
    bar_height: float
    dominant_pos: str


class RootConnection(BaseModel):
    source_ayah: int
    target_ayah: int
    root: str


class RadialAyahLayout(BaseModel):
    sura: int
    ayah_count: int
    center: Tuple[float, float]
    inner_radius: float
    outer_radius: float
    nodes: List[RadialNode] = Field(default_factory=list)
    bars: List[AyahBar] = Field(default_factory=list)
    connections: List[RootConnection] = Field(default_factory=list)


# ---------- Collocation network ----------

NodeType = Literal["target", "collocate", "tendril"]
LinkKind = Literal["trunk", "branch"]


class CollocationNode(BaseModel):
    id: str
    label: str
    type: NodeType
    count: int
    pmi: float
    radius: float
    cluster: int  # sector index, -1 for the target
    anchor_angle: float
    anchor_distance: float
    intensity: float = 0.0  # normalized pmi in [0, 1]
    sample_lemmas: List[str] = Field(default_factory=list)
    parent_id: Optional[str] = None  # tendrils only, id reference to a collocate


class CollocationLink(BaseModel):
    source: str
    target: str
    kind: LinkKind
    weight: float
    pmi: float
    intensity: float = 0.0


class CollocationLayout(BaseModel):
    target_id: str
    seed_key: str
    pmi_domain: Tuple[float, float]
    sector_count: int
    nodes: List[CollocationNode] = Field(default_factory=list)
    links: List[CollocationLink] = Field(default_factory=list)
    layout_version: str = LAYOUT_VERSION


# ---------- Force simulation arena ----------


class ForceNode(BaseModel):
    id: str
    type: NodeType
    x: float
    y: float
    anchor_x: float
    anchor_y: float
    radius: float
    fixed: bool = False
    parent: Optional[int] = None  # arena index of the parent node


class ForceLink(BaseModel):
    source: int  # arena indices
    target: int
    kind: LinkKind
    strength: float


class ForceGraph(BaseModel):
    width: float
    height: float
    nodes: List[ForceNode] = Field(default_factory=list)
    links: List[ForceLink] = Field(default_factory=list)
    index: Dict[str, int] = Field(default_factory=dict)  # node id -> arena index
    ticks: int = 0

    def node(self, node_id: str) -> ForceNode:
        return self.nodes[self.index[node_id]]

    def parent_of(self, node_id: str) -> Optional[ForceNode]:
        parent = self.node(node_id).parent
        return None if parent is None else self.nodes[parent]


# ---------- Sankey ----------


class SankeyNode(BaseModel):
    id: str
    label: str
    side: Literal["root", "lemma"]
    order: int
    y: float
    height: float
    value: int  # summed flow counts


class SankeyFlow(BaseModel):
    root: str
    lemma: str
    count: int
    width: float
    source_id: str
    target_id: str
    source_y: float  # band centre on the root node
    target_y: float  # band centre on the lemma node
    token_ids: List[str] = Field(default_factory=list)


class SankeyLayout(BaseModel):
    nodes: List[SankeyNode] = Field(default_factory=list)
    flows: List[SankeyFlow] = Field(default_factory=list)
    height: float = 0.0
