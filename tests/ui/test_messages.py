from movie_bot.models import MovieRecord
from movie_bot.ui.messages import LinkButton, format_caption, format_for_display
from movie_bot.ui.views import build_link_keyboard


def test_format_for_display_scenario(make_movie):
    record = MovieRecord.from_document(make_movie())

    formatted = format_for_display(record)

    assert "X" in formatted.caption
    assert "2010" in formatted.caption
    assert "8" in formatted.caption
    assert "Action, Drama" in formatted.caption
    assert formatted.image_ref == "http://img/x.jpg"
    assert formatted.buttons == [LinkButton(label="HD", url="http://a")]


def test_caption_layout(make_movie):
    record = MovieRecord.from_document(make_movie())

    assert format_caption(record) == (
        "<b>X</b>\n\n"
        "<i><b>Summary:</b></i> A movie.\n\n"
        "<i>Year:</i> <b>2010</b>\n"
        "<i>Rating:</i> <b>8</b>\n"
        "<i>Genres:</i> <b>Action, Drama</b>\n"
    )


def test_caption_escapes_html(make_movie):
    record = MovieRecord.from_document(
        make_movie(title="Tom & Jerry <3", summary="a > b")
    )

    caption = format_caption(record)

    assert "Tom &amp; Jerry &lt;3" in caption
    assert "a &gt; b" in caption


def test_buttons_keep_order_and_duplicates(make_movie):
    record = MovieRecord.from_document(
        make_movie(
            download=[
                {"quality": "1080p", "link": "http://c"},
                {"quality": "720p", "link": "http://a"},
                {"quality": "720p", "link": "not a url"},
            ]
        )
    )

    formatted = format_for_display(record)

    assert formatted.buttons == [
        LinkButton("1080p", "http://c"),
        LinkButton("720p", "http://a"),
        LinkButton("720p", "not a url"),
    ]


def test_format_for_display_is_deterministic(make_movie):
    record = MovieRecord.from_document(make_movie())

    assert format_for_display(record) == format_for_display(record)


def test_build_link_keyboard_single_row():
    markup = build_link_keyboard([LinkButton("HD", "http://a"), LinkButton("SD", "http://b")])

    assert len(markup.inline_keyboard) == 1
    assert [(b.text, b.url) for b in markup.inline_keyboard[0]] == [
        ("HD", "http://a"),
        ("SD", "http://b"),
    ]


def test_build_link_keyboard_empty():
    assert build_link_keyboard([]) is None
