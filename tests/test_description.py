from deckshare.utils.description import format_description, has_block_markup


def test_paragraphs_and_line_breaks() -> None:
    text = "First line\n  second line  \n\n\nNew paragraph"
    assert format_description(text) == (
        "<p>First line<br />second line</p>\n\n<p>New paragraph</p>"
    )


def test_single_line() -> None:
    assert format_description("Just ice") == "<p>Just ice</p>"


def test_existing_markup_is_untouched() -> None:
    html = "<p>Already</p>"
    assert has_block_markup(html)
    assert format_description(html) == html
    assert format_description("<div>x</div>\n\ny") == "<div>x</div>\n\ny"


def test_formatting_twice_is_a_no_op() -> None:
    once = format_description("a\n\nb")
    assert once is not None
    assert format_description(once) == once


def test_empty() -> None:
    assert format_description(None) is None
    assert format_description("") == ""
