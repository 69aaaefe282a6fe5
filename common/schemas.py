from typing import List, Optional

from pydantic import BaseModel, Field

from core.versions import PARAMS_SCHEMA_VERSION
from domain.collocation.schema import CollocationOptions, CollocationTerm

# ---------- Collocations ----------


class CollocationRequest(BaseModel):
    # ---- Query (what defines the result) ----
    target: CollocationTerm
    options: CollocationOptions = Field(default_factory=CollocationOptions)
    # ---- Presentation knobs ----
    max_collocates: Optional[int] = Field(default=None, ge=1)  # None -> MAX_COLLOCATES
    with_layout: bool = True
    iterations: int = Field(default=0, ge=0, le=300)  # force passes to run server side
    width: float = Field(default=900.0, gt=0)
    height: float = Field(default=700.0, gt=0)
    params_schema_version: str = PARAMS_SCHEMA_VERSION


class PairCooccurrenceRequest(BaseModel):
    term_a: CollocationTerm
    term_b: CollocationTerm
    options: CollocationOptions = Field(default_factory=CollocationOptions)


# ---------- Search ----------


class SearchResponse(BaseModel):
    query: str
    free_text: str = ""
    token_ids: List[str] = Field(default_factory=list)
    total: int = 0
