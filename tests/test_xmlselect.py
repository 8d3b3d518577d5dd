import io

import pytest

from progkit.xmlselect import contains_all, main, select

DOC = (
    b"<html><body><div><h2>Title</h2><p>text</p></div>"
    b"<h2>outside</h2></body></html>"
)


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (["a", "b", "c"], ["a", "c"], True),
        (["a", "b"], ["b", "a"], False),
        ([], [], True),
        (["a"], ["a", "a"], False),
        (["a", "b"], [], True),
        ([], ["a"], False),
    ],
)
def test_contains_all(x, y, expected):
    assert contains_all(x, y) is expected


def test_select_nested_elements():
    result = list(select(io.BytesIO(DOC), ["div", "h2"]))
    assert result == [(("html", "body", "div", "h2"), "Title")]


def test_select_every_text_run():
    result = list(select(io.BytesIO(DOC), []))
    assert [text for _, text in result] == ["Title", "text", "outside"]


def test_select_from_text_stream_matches_bytes():
    from_bytes = list(select(io.BytesIO(DOC), ["h2"]))
    from_text = list(select(io.StringIO(DOC.decode()), ["h2"]))
    assert from_bytes == from_text


def test_entities_are_joined_into_one_run():
    result = list(select(io.BytesIO(b"<a><b>x &amp; y</b></a>"), ["b"]))
    assert result == [(("a", "b"), "x & y")]


def test_prefixed_names_use_local_part():
    doc = b"<x:a xmlns:x='urn:test'><x:b>t</x:b></x:a>"
    assert list(select(io.BytesIO(doc), ["b"])) == [(("a", "b"), "t")]


def test_empty_input_yields_nothing():
    assert list(select(io.BytesIO(b""), [])) == []


def test_malformed_input_raises():
    with pytest.raises(ValueError):
        list(select(io.BytesIO(b"<a><b></a>"), []))


def test_main_prints_path_and_text(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(DOC)))
    assert main(["div", "h2"]) == 0
    assert capsys.readouterr().out == "html body div h2: Title\n"


def test_main_reports_errors(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"<a>")))
    assert main([]) == 1
    assert capsys.readouterr().err.startswith("xmlselect: ")