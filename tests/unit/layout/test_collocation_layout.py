import math

import pytest

from core.versions import LAYOUT_VERSION
from domain.collocation.schema import CollocationResult, CollocationTerm
from domain.layout.collocation_layout import (
    build_collocation_layout,
    node_id,
    pmi_domain,
    sector_angles,
    sector_count,
)

TARGET = CollocationTerm(kind="root", value="كتب")


@pytest.fixture
def results():
    return [
        CollocationResult(
            label="علم", group_by="root", count=3, window_count=3, pmi=1.0,
            sample_lemmas=["عِلْم", "عَلِمَ"], sample_windows=["1:1", "1:2", "2:1"],
        ),
        CollocationResult(
            label="قرا", group_by="root", count=2, window_count=2, pmi=0.5,
            sample_lemmas=["قُرْآن"], sample_windows=["1:1", "2:1"],
        ),
    ]


def test_sector_helpers():
    assert sector_count(0) == 4
    assert sector_count(20) == 5
    assert sector_count(100) == 7
    angles = sector_angles(4)
    assert angles[0] == pytest.approx(-0.95 * math.pi)
    assert angles[-1] == pytest.approx(0.95 * math.pi)


def test_pmi_domain():
    assert pmi_domain([]) == (0.0, 1.0)
    single = CollocationResult(label="x", group_by="root", count=1, pmi=2.0)
    assert pmi_domain([single]) == (1.0, 3.0)


def test_layout_nodes_and_links(results):
    # Execute
    layout = build_collocation_layout(TARGET, results, target_count=3)

    # Assertions
    assert layout.target_id == node_id("root", "كتب") == "root-كتب"
    assert layout.seed_key == "كتب"
    assert layout.pmi_domain == (0.5, 1.0)
    assert layout.sector_count == 4
    assert layout.layout_version == LAYOUT_VERSION

    target = layout.nodes[0]
    assert target.type == "target"
    assert target.count == 3
    assert target.cluster == -1

    collocates = [n for n in layout.nodes if n.type == "collocate"]
    tendrils = [n for n in layout.nodes if n.type == "tendril"]
    assert [n.id for n in collocates] == ["root-علم", "root-قرا"]
    assert len(tendrils) == 5
    assert len(layout.links) == 7
    assert [link.kind for link in layout.links].count("trunk") == 2


def test_stronger_collocates_sit_closer_and_larger(results):
    layout = build_collocation_layout(TARGET, results)
    strong, weak = [n for n in layout.nodes if n.type == "collocate"]

    assert 140 <= strong.anchor_distance < 180
    assert 370 <= weak.anchor_distance < 410
    assert strong.radius == pytest.approx(16)
    assert weak.radius == pytest.approx(6)
    assert strong.intensity == pytest.approx(1)
    assert weak.intensity == pytest.approx(0)
    assert 0 <= strong.cluster < layout.sector_count


def test_tendrils_point_to_parent(results):
    layout = build_collocation_layout(TARGET, results)
    ids = {n.id for n in layout.nodes}

    tendrils = [n for n in layout.nodes if n.type == "tendril"]
    assert all(n.parent_id in ids for n in tendrils)
    assert [n.label for n in tendrils if n.parent_id == "root-علم"] == ["1:1", "1:2", "2:1"]
    assert [n.id for n in tendrils if n.parent_id == "root-قرا"] == ["tendril-قرا-0", "tendril-قرا-1"]


def test_layout_is_deterministic(results):
    assert build_collocation_layout(TARGET, results) == build_collocation_layout(TARGET, results)


def test_layout_without_tendrils_and_truncated(results):
    plain = build_collocation_layout(TARGET, results, with_tendrils=False)
    truncated = build_collocation_layout(TARGET, results, max_nodes=1)

    assert len(plain.nodes) == 3
    assert all(link.kind == "trunk" for link in plain.links)
    assert [n.label for n in truncated.nodes if n.type == "collocate"] == ["علم"]


def test_layout_with_no_results():
    layout = build_collocation_layout(TARGET, [])

    assert len(layout.nodes) == 1
    assert layout.links == []
