import logging
import time
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from common.config import MAX_COLLOCATES
from domain.analysis.frequency import FrequencyTables, build_frequency_tables
from domain.analysis.root_flows import build_root_word_flows, scope_flows, unique_roots
from domain.collocation.cache import CollocationCache
from domain.collocation.engine import count_target_windows, get_collocations
from domain.collocation.options import validate_options, validate_term
from domain.collocation.schema import CollocationOptions, CollocationResult, CollocationTerm
from domain.collocation.windows import WindowIndex
from domain.corpus.schema import CorpusStats, RootFlow, Token
from domain.layout.collocation_layout import build_collocation_layout
from domain.layout.force import seed_force_graph, step_force_graph
from domain.layout.sankey import build_sankey_layout
from domain.layout.schema import CollocationLayout, ForceGraph, SankeyLayout
from domain.search.indexes import TokenIndexes, build_token_indexes

logger = logging.getLogger(__name__)


def _t():
    return time.perf_counter()


class CorpusSnapshot:
    """
    Immutable token snapshot plus everything derived from it once.
    Build a new snapshot when the token set changes.
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        window_index: WindowIndex,
        freq: FrequencyTables,
        flows: List[RootFlow],
        search_index: TokenIndexes,
    ):
        self.tokens = tuple(window_index.tokens)
        self.window_index = window_index
        self.freq = freq
        self.flows = flows
        self.search_index = search_index
        self.tokens_by_id: Dict[str, Token] = {t.id: t for t in tokens}
        self.roots = unique_roots(self.tokens)
        self.surahs = sorted(window_index.surah_spans)

    def stats(self) -> CorpusStats:
        return CorpusStats(
            total_tokens=self.freq.total_tokens,
            total_ayahs=self.freq.total_ayahs,
            total_surahs=self.freq.total_surahs,
            unique_roots=len(self.freq.root_counts),
            unique_lemmas=len(self.freq.lemma_counts),
        )


def build_snapshot(tokens: Sequence[Token]) -> CorpusSnapshot:
    t0 = _t()

    # 1) windows
    window_index = WindowIndex(tokens)
    logger.info("Indexed %d tokens into windows (%.3fs)", len(window_index), _t() - t0)

    # 2) frequencies
    t1 = _t()
    freq = build_frequency_tables(window_index.tokens)
    logger.info(
        "Built frequency tables: %d roots, %d lemmas (%.3fs)",
        len(freq.root_counts),
        len(freq.lemma_counts),
        _t() - t1,
    )

    # 3) flows
    t2 = _t()
    flows = build_root_word_flows(window_index.tokens)
    logger.info("Aggregated %d root flows (%.3fs)", len(flows), _t() - t2)

    # 4) search
    t3 = _t()
    search_index = build_token_indexes(window_index.tokens)
    logger.info("Built search indexes (%.3fs). Total: %.3fs", _t() - t3, _t() - t0)

    return CorpusSnapshot(tokens, window_index, freq, flows, search_index)


class CollocationPipelineResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: CollocationTerm
    options: CollocationOptions
    total_results: int
    results: List[CollocationResult]
    layout: Optional[CollocationLayout] = None
    graph: Optional[ForceGraph] = None


def run_collocation_pipeline(
    snapshot: CorpusSnapshot,
    target: CollocationTerm,
    options: Optional[CollocationOptions] = None,
    max_collocates: Optional[int] = MAX_COLLOCATES,
    cache: Optional[CollocationCache] = None,
    with_layout: bool = True,
    width: float = 900.0,
    height: float = 700.0,
    iterations: int = 0,
) -> CollocationPipelineResult:
    """
    target -> collocations -> truncation -> radial layout -> seeded force
    graph (optionally stepped). Configuration errors propagate before any
    work is done.
    """
    options = validate_options(options)
    validate_term(target)
    t0 = _t()

    # 1) collocations
    if cache is not None:
        results = cache.get_or_compute(target, snapshot.window_index, snapshot.freq, options)
    else:
        results = get_collocations(target, snapshot.window_index, snapshot.freq, options)
    logger.info(
        "Found %d collocates for %s:%s (%.3fs)", len(results), target.kind, target.value, _t() - t0
    )

    shown = results if max_collocates is None else results[:max_collocates]
    if not with_layout:
        return CollocationPipelineResult(
            target=target, options=options, total_results=len(results), results=shown
        )

    # 2) layout
    t1 = _t()
    target_count = count_target_windows(target, snapshot.window_index, options)
    layout = build_collocation_layout(target, shown, target_count=target_count)
    logger.info("Laid out %d nodes (%.3fs)", len(layout.nodes), _t() - t1)

    # 3) force graph
    t2 = _t()
    graph = seed_force_graph(layout, width=width, height=height)
    if iterations > 0:
        graph = step_force_graph(graph, iterations=iterations)
    logger.info(
        "Seeded force graph, %d ticks (%.3fs). Total: %.3fs", graph.ticks, _t() - t2, _t() - t0
    )

    return CollocationPipelineResult(
        target=target,
        options=options,
        total_results=len(results),
        results=shown,
        layout=layout,
        graph=graph,
    )


def run_flow_pipeline(
    snapshot: CorpusSnapshot,
    sura: Optional[int] = None,
    root: Optional[str] = None,
    max_flows: Optional[int] = None,
) -> SankeyLayout:
    t0 = _t()
    flows = scope_flows(snapshot.flows, snapshot.tokens_by_id, sura)
    sankey = build_sankey_layout(flows, max_flows=max_flows, root=root)
    logger.info("Built sankey with %d flows (%.3fs)", len(sankey.flows), _t() - t0)
    return sankey
