import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from api.corpus_store import CorpusStore
from common.config import MAX_COLLOCATES
from common.schemas import CollocationRequest, PairCooccurrenceRequest, SearchResponse
from core.errors import ConfigurationError
from domain.analysis.root_flows import scope_flows
from domain.collocation.engine import get_pair_cooccurrence
from domain.collocation.schema import CollocationResult, PairCooccurrence
from domain.corpus.schema import CorpusStats, RootFlow
from domain.layout.radial import build_radial_ayah_layout
from domain.layout.schema import RadialAyahLayout, SankeyLayout
from domain.search.indexes import query_tokens
from domain.search.query_parser import parse_search_query
from pipelines.analysis_pipeline import (
    CollocationPipelineResult,
    run_collocation_pipeline,
    run_flow_pipeline,
)

router = APIRouter()
corpus_store = CorpusStore()


def _check_sura(sura: Optional[int]) -> None:
    if sura is not None and sura not in corpus_store.snapshot.surahs:
        raise HTTPException(status_code=404, detail=f"Unknown surah: {sura}")


def _collocate(request: CollocationRequest) -> CollocationPipelineResult:
    try:
        return run_collocation_pipeline(
            corpus_store.snapshot,
            request.target,
            request.options,
            max_collocates=request.max_collocates or MAX_COLLOCATES,
            cache=corpus_store.cache,
            with_layout=request.with_layout,
            width=request.width,
            height=request.height,
            iterations=request.iterations,
        )
    except ConfigurationError as e:
        logging.info(f"Rejected collocation query: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/corpus/stats")
def get_corpus_stats() -> CorpusStats:
    return corpus_store.snapshot.stats()


@router.get("/roots")
def get_roots() -> List[str]:
    return corpus_store.snapshot.roots


@router.get("/flows")
def get_flows(
    sura: Optional[int] = None,
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
) -> List[RootFlow]:
    _check_sura(sura)
    snapshot = corpus_store.snapshot
    flows = scope_flows(snapshot.flows, snapshot.tokens_by_id, sura)
    end = None if limit is None else offset + limit
    return flows[offset:end]


@router.get("/flows/sankey")
def get_flow_sankey(
    sura: Optional[int] = None,
    root: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1),
) -> SankeyLayout:
    _check_sura(sura)
    return run_flow_pipeline(corpus_store.snapshot, sura=sura, root=root, max_flows=limit)


@router.get("/surahs/{sura}/radial")
def get_radial_layout(
    sura: int,
    width: float = Query(800.0, gt=0),
    height: float = Query(700.0, gt=0),
    seed: Optional[str] = None,
    jitter: float = Query(0.0, ge=0),
) -> RadialAyahLayout:
    _check_sura(sura)
    return build_radial_ayah_layout(
        corpus_store.snapshot.tokens, sura, width=width, height=height, seed=seed, jitter=jitter
    )


@router.post("/collocations")
def post_collocations(request: CollocationRequest) -> List[CollocationResult]:
    return _collocate(request.model_copy(update={"with_layout": False})).results


@router.post("/collocations/graph")
def post_collocation_graph(request: CollocationRequest) -> CollocationPipelineResult:
    return _collocate(request)


@router.post("/collocations/pair")
def post_pair_cooccurrence(request: PairCooccurrenceRequest) -> PairCooccurrence:
    try:
        return get_pair_cooccurrence(
            request.term_a, request.term_b, corpus_store.snapshot.window_index, request.options
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/search")
def search(q: str = Query(..., min_length=1), limit: int = Query(200, ge=1)) -> SearchResponse:
    parsed = parse_search_query(q)
    root = parsed.root
    # bare words search like a root query, which also matches lemmas and surface forms
    if not any((parsed.root, parsed.lemma, parsed.pos, parsed.ayah)) and parsed.free_text:
        root = parsed.free_text

    token_ids = query_tokens(
        corpus_store.snapshot.search_index,
        root=root,
        lemma=parsed.lemma,
        pos=parsed.pos,
        ayah=parsed.ayah,
    )
    return SearchResponse(
        query=parsed.raw,
        free_text=parsed.free_text,
        token_ids=token_ids[:limit],
        total=len(token_ids),
    )
