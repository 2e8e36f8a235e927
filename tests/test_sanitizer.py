from svgready.parser import parse_markup, serialize
from svgready.sanitizer import MAX_TREE_DEPTH, is_href_safe, sanitize_tree


def clean(markup: str) -> tuple[str, list[str]]:
    root = parse_markup(markup)
    report = sanitize_tree(root)
    return serialize(root), report.warnings


def test_script_is_removed() -> None:
    output, warnings = clean("<svg><script>alert(1)</script><rect/></svg>")
    assert output == "<svg><rect/></svg>"
    assert warnings == ["removed element <script>"]


def test_repeated_removals_are_reported_once() -> None:
    _, warnings = clean("<svg><script/><script/><foreignObject/></svg>")
    assert warnings == ["removed element <script>", "removed element <foreignObject>"]


def test_text_after_removed_element_is_kept() -> None:
    output, _ = clean("<svg><text>a<script>x</script>b</text></svg>")
    assert output == "<svg><text>ab</text></svg>"


def test_event_handlers_are_removed_in_any_case() -> None:
    output, warnings = clean('<svg onload="x()"><rect ONCLICK="x()" width="5"/></svg>')
    assert output == '<svg><rect width="5"/></svg>'
    assert "removed attribute ONCLICK from <rect>" in warnings


def test_unknown_attributes_are_removed_but_prefixes_allowed() -> None:
    output, _ = clean('<svg><rect foo="1" data-x="2" aria-label="3"/></svg>')
    assert output == '<svg><rect data-x="2" aria-label="3"/></svg>'


def test_javascript_href_is_removed() -> None:
    output, warnings = clean(
        '<svg xmlns:xlink="http://www.w3.org/1999/xlink">'
        '<a xlink:href="javascript:alert(1)"><rect/></a></svg>'
    )
    assert "javascript" not in output
    assert "<a><rect/></a>" in output
    assert "removed attribute xlink:href from <a>" in warnings


def test_dangerous_values_in_any_attribute_are_removed() -> None:
    output, _ = clean(
        '<svg><rect fill="url(javascript:alert(1))" style="x:url(VBScript:y)" width="1"/></svg>'
    )
    assert output == '<svg><rect width="1"/></svg>'


def test_foreign_namespace_elements_are_removed() -> None:
    output, _ = clean('<svg xmlns:foo="urn:foo"><foo:rect/><rect/></svg>')
    assert "foo:rect" not in output
    assert "<rect/>" in output


def test_elements_beyond_depth_limit_are_removed() -> None:
    levels = MAX_TREE_DEPTH + 5
    markup = "<svg>" + "<g>" * levels + "</g>" * levels + "</svg>"
    root = parse_markup(markup)
    report = sanitize_tree(root)
    assert len(list(root.iter("g"))) == MAX_TREE_DEPTH
    assert report.warnings == [f"removed element <g> nested deeper than {MAX_TREE_DEPTH}"]


def test_href_predicate() -> None:
    assert is_href_safe("")
    assert is_href_safe("#icon")
    assert is_href_safe("/img/a.png")
    assert is_href_safe("https://example.com/a.png")
    assert is_href_safe("data:image/png;base64,AAAA")
    assert not is_href_safe("javascript:alert(1)")
    assert not is_href_safe("data:text/html,<b>")
    assert not is_href_safe("file:///etc/passwd")
    assert not is_href_safe("HTTPS://example.com")
