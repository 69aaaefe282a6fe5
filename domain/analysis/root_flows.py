from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from domain.corpus.arabic import arabic_sort_key
from domain.corpus.schema import RootFlow, Token


def _flow_sort_key(flow: RootFlow):
    return (-flow.count, arabic_sort_key(flow.root))


def build_root_word_flows(tokens: Sequence[Token]) -> List[RootFlow]:
    """
    One flow per distinct (root, lemma) pair, tokens without a root skipped.
    Ordered by count desc, then root by Arabic collation. Consumers page
    through a prefix of this list, so the order matters.
    """
    flows: Dict[Tuple[str, str], RootFlow] = {}
    for token in tokens:
        if not token.root:
            continue
        key = (token.root, token.lemma)
        flow = flows.get(key)
        if flow is None:
            flow = RootFlow(root=token.root, lemma=token.lemma, count=0, token_ids=[])
            flows[key] = flow
        flow.count += 1
        flow.token_ids.append(token.id)

    # sorted() is stable, so equal keys keep encounter order
    return sorted(flows.values(), key=_flow_sort_key)


def unique_roots(tokens: Sequence[Token]) -> List[str]:
    return sorted({token.root for token in tokens if token.root}, key=arabic_sort_key)


def scope_flows(
    flows: Sequence[RootFlow],
    tokens_by_id: Mapping[str, Token],
    sura: Optional[int],
) -> List[RootFlow]:
    """
    Surah-scoped view of globally built flows: the tokens of `sura` they
    reference, re-aggregated in corpus order. Equal to building flows from
    the surah's tokens directly.
    """
    if sura is None:
        return list(flows)

    scoped = [
        tokens_by_id[tid]
        for flow in flows
        for tid in flow.token_ids
        if tid in tokens_by_id and tokens_by_id[tid].sura == sura
    ]
    scoped.sort(key=lambda t: (t.sura, t.ayah, t.position))
    return build_root_word_flows(scoped)
