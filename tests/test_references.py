import pytest

from svgready.errors import ErrorKind, StageFailure
from svgready.parser import parse_markup
from svgready.references import MAX_USE_DEPTH, check_use_depth


def use_chain(hops: int) -> str:
    groups = "".join(f'<g id="a{i}"><use href="#a{i + 1}"/></g>' for i in range(hops))
    return f'<svg xmlns="http://www.w3.org/2000/svg">{groups}<g id="a{hops}"><rect/></g></svg>'


@pytest.mark.parametrize("hops", [0, 1, 14, MAX_USE_DEPTH])
def test_chains_within_limit_pass(hops: int) -> None:
    assert check_use_depth(parse_markup(use_chain(hops))) == hops


def test_chain_beyond_limit_fails() -> None:
    with pytest.raises(StageFailure) as exc:
        check_use_depth(parse_markup(use_chain(MAX_USE_DEPTH + 1)))
    assert exc.value.error.kind is ErrorKind.NESTING_TOO_DEEP


def test_xlink_href_is_followed() -> None:
    markup = (
        '<svg xmlns:xlink="http://www.w3.org/1999/xlink">'
        '<g id="a"><use xlink:href="#b"/></g><g id="b"><rect/></g></svg>'
    )
    assert check_use_depth(parse_markup(markup)) == 1


@pytest.mark.parametrize(
    "markup",
    [
        '<svg><g id="a"><use href="#b"/></g><g id="b"><use href="#a"/></g></svg>',
        '<svg><use id="u" href="#u"/></svg>',
    ],
)
def test_cycles_fail(markup: str) -> None:
    with pytest.raises(StageFailure) as exc:
        check_use_depth(parse_markup(markup))
    assert exc.value.error.kind is ErrorKind.NESTING_TOO_DEEP


def test_unresolved_reference_is_ignored() -> None:
    assert check_use_depth(parse_markup('<svg><use href="#missing"/></svg>')) == 0


def test_wide_fan_out_is_walked_once_per_element() -> None:
    layers = 12
    uses = 20
    groups = "".join(
        f'<g id="l{i}">' + f'<use href="#l{i + 1}"/>' * uses + "</g>" for i in range(layers)
    )
    markup = f'<svg>{groups}<g id="l{layers}"><rect/></g></svg>'
    assert check_use_depth(parse_markup(markup)) == layers
