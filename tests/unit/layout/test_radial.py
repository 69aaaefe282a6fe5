import math

import pytest

from domain.layout.radial import build_radial_ayah_layout


def test_radial_geometry(corpus_tokens):
    # Execute
    layout = build_radial_ayah_layout(corpus_tokens, 1, jitter=0)

    # Assertions
    assert layout.ayah_count == 3
    assert layout.center == (400, 350)
    assert layout.inner_radius == pytest.approx(175)
    assert layout.outer_radius == pytest.approx(294)

    first_ayah = [n for n in layout.nodes if n.ayah == 1]
    assert [n.root for n in first_ayah] == ["علم", "قرا", "كتب"]
    assert [n.rank for n in first_ayah] == [0, 1, 2]
    assert first_ayah[-1].distance == pytest.approx(layout.outer_radius)
    assert all(n.radius == pytest.approx(12) for n in first_ayah)
    # first ayah sits at angle 0, to the right of the centre
    assert first_ayah[0].x == pytest.approx(400 + first_ayah[0].distance)
    assert first_ayah[0].y == pytest.approx(350)


def test_radial_angles_follow_ayah_order(corpus_tokens):
    # no jitter by default: nodes sit exactly on index / count * 2pi
    layout = build_radial_ayah_layout(corpus_tokens, 1)

    assert [b.angle for b in layout.bars] == pytest.approx([0, 2 * math.pi / 3, 4 * math.pi / 3])
    for node in layout.nodes:
        assert node.angle == pytest.approx(layout.bars[node.ayah - 1].angle)


def test_radial_bars(corpus_tokens):
    layout = build_radial_ayah_layout(corpus_tokens, 1)

    assert [b.token_count for b in layout.bars] == [3, 2, 2]
    assert [b.bar_height for b in layout.bars] == pytest.approx([150, 110, 110])
    # ties go to the part of speech seen first
    assert [b.dominant_pos for b in layout.bars] == ["N", "V", "N"]


def test_radial_connections(corpus_tokens):
    layout = build_radial_ayah_layout(corpus_tokens, 1)

    assert [(c.source_ayah, c.target_ayah, c.root) for c in layout.connections] == [
        (1, 2, "كتب"),
        (1, 2, "علم"),
        (1, 3, "قرا"),
    ]
    limited = build_radial_ayah_layout(corpus_tokens, 1, max_connections=1)
    assert len(limited.connections) == 1


def test_radial_jitter_is_seeded(corpus_tokens):
    a = build_radial_ayah_layout(corpus_tokens, 1, seed="view", jitter=0.05)
    b = build_radial_ayah_layout(corpus_tokens, 1, seed="view", jitter=0.05)
    flat = build_radial_ayah_layout(corpus_tokens, 1)

    assert a == b
    assert a.bars == flat.bars
    assert any(j.angle != p.angle for j, p in zip(a.nodes, flat.nodes))
    for jittered, plain in zip(a.nodes, flat.nodes):
        assert abs(jittered.angle - plain.angle) <= 0.025


def test_radial_unknown_surah(corpus_tokens):
    layout = build_radial_ayah_layout(corpus_tokens, 114)

    assert layout.ayah_count == 0
    assert layout.nodes == []
    assert layout.bars == []
