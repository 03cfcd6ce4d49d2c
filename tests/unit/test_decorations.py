import base64

from PIL import Image

from pixel_arts.coords import CellTransform
from pixel_arts.decorations import (
    ARROW_PATH,
    CROSS_PATH,
    arrow_element,
    cross_element,
    image_element,
    image_href,
    pixel_element,
)


def test_pixel_element_defaults() -> None:
    command = pixel_element("cv", 2, 3, "red")
    assert command.element_type == "rect"
    assert command.transform == CellTransform(dx=2, dy=1)
    assert command.attrs == (("width", "1"), ("height", "1"))
    assert command.styles == (("fill", "red"),)


def test_pixel_element_caller_maps_override_defaults() -> None:
    command = pixel_element(
        "cv", 1, 1, "red", attrs={"height": "0.5"}, styles={"fill": "blue", "opacity": 0.3}
    )
    assert command.attrs == (("width", "1"), ("height", "0.5"))
    assert command.styles == (("fill", "blue"), ("opacity", "0.3"))


def test_cross_element() -> None:
    command = cross_element("cv", "x1", 3, 4, "white")
    assert command.element_type == "path"
    assert command.element_id == "x1"
    assert command.transform is not None
    assert command.transform.svg() == "translate(3,2)"
    assert command.attrs == (("d", CROSS_PATH),)
    assert command.styles == (("stroke", "white"), ("stroke-width", "0.2"))


def test_arrow_element_is_centered_and_rotated() -> None:
    command = arrow_element("cv", "a1", 2, 3, rotate=90, colour="red")
    assert command.transform is not None
    assert command.transform.svg() == "translate(2.5,1.5) rotate(-180)"
    assert command.attrs == (("d", ARROW_PATH),)
    assert command.styles == (("stroke", "red"), ("stroke-width", "0.1"))


def test_arrow_element_default_points_right() -> None:
    command = arrow_element("cv", "a1", 1, 1)
    assert command.transform is not None
    assert command.transform.rotate == -90


def test_image_element_defaults_merged_under_caller_attrs() -> None:
    command = image_element("cv", "img", 1, 2, "cat.png", attrs={"width": "2px"})
    assert command.element_type == "image"
    assert dict(command.attrs) == {
        "xlink:href": "cat.png",
        "x": "0",
        "y": "0",
        "width": "2px",
        "height": "1px",
    }


def test_image_href_passthrough_for_strings() -> None:
    assert image_href("https://example.org/a.png") == "https://example.org/a.png"


def test_image_href_embeds_pillow_images() -> None:
    href = image_href(Image.new("P", (2, 2)))
    prefix = "data:image/png;base64,"
    assert href.startswith(prefix)
    decoded = base64.b64decode(href[len(prefix) :])
    assert decoded.startswith(b"\x89PNG")
