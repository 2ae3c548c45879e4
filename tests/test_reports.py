from __future__ import annotations

import math

import pytest

from ringledger.services import aggregates, reports


def test_slice_color_cycles_hue():
    assert reports.slice_color(0) == "hsl(0 70% 55%)"
    assert reports.slice_color(1) == "hsl(57 70% 55%)"
    assert reports.slice_color(7) == "hsl(39 70% 55%)"


def test_pie_slices_cover_full_circle_from_top():
    data = aggregates.pie_dataset(
        [
            {"amount": 300, "category": "rent", "type": "expense"},
            {"amount": 100, "category": "food", "type": "expense"},
        ]
    )

    slices = reports.pie_slices(data)

    assert slices[0].start_angle == pytest.approx(-math.pi / 2)
    assert slices[0].end_angle == slices[1].start_angle
    assert slices[-1].end_angle - slices[0].start_angle == pytest.approx(2 * math.pi)
    assert [s.fraction for s in slices] == [0.75, 0.25]


def test_pie_slices_zero_total_collapse():
    data = aggregates.pie_dataset([{"amount": 0, "category": "a", "type": "expense"}])

    (only,) = reports.pie_slices(data)

    assert only.start_angle == only.end_angle


@pytest.mark.parametrize(
    ("progress", "degrees"),
    [(0, 0), (0.254, 90.0), (1, 360.0), (1.7, 360.0), (-2, 0)],
)
def test_ring_geometry(progress, degrees):
    ring = reports.ring_geometry(progress)

    assert ring.radius == 73
    assert ring.circumference == pytest.approx(2 * math.pi * 73)
    assert ring.degrees == pytest.approx(degrees)
    clamped = max(0.0, min(1.0, progress))
    assert ring.dash_offset == pytest.approx(ring.circumference * (1 - clamped))


def test_build_pie_chart_renders_png():
    data = aggregates.pie_dataset([{"amount": 500, "category": "food", "type": "expense"}])

    png = reports.render_png(reports.build_pie_chart(data, title="Expense"))

    assert png.startswith(b"\x89PNG")


def test_build_pie_chart_without_data():
    png = reports.render_png(reports.build_pie_chart([]))

    assert png.startswith(b"\x89PNG")
