import itertools
from typing import List, Tuple

import numpy as np
import pytest

from pixel_arts.commands import CreateElement
from pixel_arts.compose import pixel_colors
from pixel_arts.errors import CoordinateError, ShapeMismatchError
from tests.test_utils import commands_of_type, count_occurrences, make_session


def test_add_pixels_scenario() -> None:
    arts, sink = make_session()
    arts.create_canvas(2, 2, canvas_id="cv")
    placement = arts.add_pixels("cv", [[1, 1], [2, 2]], "red")
    assert placement.committed
    assert len(sink) == 2
    markup = sink.last
    assert count_occurrences(markup, '.append("rect")') == 2
    assert markup.index("translate(0,0)") < markup.index("translate(1,1)")
    assert count_occurrences(markup, '.style("fill", "red")') == 2
    assert count_occurrences(markup, "<script>") == 1


@pytest.mark.parametrize(
    "order", list(itertools.permutations([(1, 1), (1, 3), (2, 2), (3, 1)]))[:6]
)
def test_batched_pixels_one_payload_in_order(order: Tuple[Tuple[int, int], ...]) -> None:
    arts, sink = make_session()
    canvas = arts.create_canvas(3, 3)
    sink.clear()
    placement = arts.add_pixels(canvas, list(order), "black")
    assert len(sink) == 1
    created = commands_of_type(placement.commands, CreateElement)
    assert len(created) == len(order)
    assert [c.transform.cell() for c in created] == list(order)  # type: ignore[union-attr]


def test_add_pixels_one_colour_per_position() -> None:
    arts, _ = make_session()
    arts.create_canvas(2, 2, canvas_id="cv")
    placement = arts.add_pixels("cv", [(1, 1), (1, 2)], ["red", "blue"])
    assert pixel_colors(placement.commands) == {(1, 1): "red", (1, 2): "blue"}


def test_add_pixels_colour_count_mismatch_produces_no_payload() -> None:
    arts, sink = make_session()
    arts.create_canvas(2, 2, canvas_id="cv")
    sink.clear()
    with pytest.raises(ShapeMismatchError):
        arts.add_pixels("cv", [(1, 1), (1, 2), (2, 2)], ["red", "blue"])
    assert len(sink) == 0


def test_add_pixels_rejects_malformed_positions() -> None:
    arts, _ = make_session()
    with pytest.raises(ShapeMismatchError):
        arts.add_pixels("cv", [(1, 1, 1)])


def test_add_pixels_attrs_and_styles() -> None:
    arts, sink = make_session()
    arts.add_pixels("cv", [(1, 1)], attrs={"class": "wall"}, styles={"opacity": 0.5})
    assert '.attr("class", "wall")' in sink.last
    assert '.style("opacity", "0.5")' in sink.last


def test_add_pixel_single() -> None:
    arts, sink = make_session()
    canvas = arts.create_canvas(3, 3)
    placement = arts.add_pixel(canvas, 2, 3, "yellow")
    assert placement.element_id is None
    assert pixel_colors(placement.commands) == {(2, 3): "yellow"}
    assert 'd3.select(".usersvg #' + canvas.canvas_id + '")' in sink.last


def test_add_pixel_default_colour_and_id() -> None:
    arts, sink = make_session()
    placement = arts.add_pixel("cv", 1, 1, element_id="p1")
    assert placement.element_id == "p1"
    assert '.attr("id", "p1")' in sink.last
    assert '.style("fill", "black")' in sink.last


def test_pixel_outside_known_canvas_is_rejected() -> None:
    arts, sink = make_session()
    canvas = arts.create_canvas(2, 2)
    sink.clear()
    with pytest.raises(CoordinateError):
        arts.add_pixel(canvas, 3, 1)
    with pytest.raises(CoordinateError):
        arts.add_pixels(canvas.canvas_id, [(1, 1), (1, 0)])
    assert len(sink) == 0


def test_pixel_on_unknown_canvas_is_passed_through() -> None:
    arts, sink = make_session()
    placement = arts.add_pixel("elsewhere", 40, 40, "red")
    assert placement.committed
    assert "#elsewhere" in sink.last


def test_add_pixel_grid_full_canvas_single_flush() -> None:
    arts, sink = make_session()
    canvas = arts.create_canvas(3, 4)
    sink.clear()
    colours: List[List[str]] = [
        [f"#{i}{j}{i}{j}{i}{j}" for j in range(4)] for i in range(3)
    ]
    placement = arts.add_pixel_grid(canvas, colours)
    assert len(sink) == 1
    assert len(placement.commands) == 12
    read_back = pixel_colors(placement.commands)
    assert read_back[(3, 4)] == colours[2][3]
    assert [c.transform.cell() for c in placement.commands][:5] == [  # type: ignore[union-attr]
        (1, 1),
        (1, 2),
        (1, 3),
        (1, 4),
        (2, 1),
    ]


def test_add_pixel_grid_with_mapping_from_numpy() -> None:
    arts, _ = make_session()
    canvas = arts.create_canvas(2, 2)
    placement = arts.add_pixel_grid(
        canvas, np.array([[0, 1], [1, 0]]), {0: "white", 1: "black"}
    )
    assert pixel_colors(placement.commands) == {
        (1, 1): "white",
        (1, 2): "black",
        (2, 1): "black",
        (2, 2): "white",
    }


def test_add_pixel_grid_shape_mismatch_produces_no_payload() -> None:
    arts, sink = make_session()
    canvas = arts.create_canvas(2, 3)
    sink.clear()
    with pytest.raises(ShapeMismatchError):
        arts.add_pixel_grid(canvas, [["red", "blue"], ["green", "white"]])
    assert len(sink) == 0


def test_deferred_pixels_flush_once() -> None:
    arts, sink = make_session()
    canvas = arts.create_canvas(3, 3)
    sink.clear()
    placements = [
        arts.add_pixel(canvas, i, j, "red", disp=False)
        for i, j in [(1, 1), (2, 2), (3, 3)]
    ]
    assert len(sink) == 0
    assert not any(p.committed for p in placements)
    assert all(p.payload is None for p in placements)
    assert 'append("rect")' in placements[0].script
    payload = arts.flush(*placements)
    assert len(sink) == 1
    assert len(payload.commands) == 3
    assert pixel_colors(payload.commands) == {
        (1, 1): "red",
        (2, 2): "red",
        (3, 3): "red",
    }
