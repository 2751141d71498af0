from markem.layouts import (
    IDENTITY_LAYOUT,
    LAYOUT_FILENAME,
    LAYOUT_REPLACEMENT_FILENAME,
    LayoutComposer,
    splice_layout,
)


def write_layouts(directory, fragment=None, replacement=None):
    directory.mkdir(parents=True, exist_ok=True)
    if fragment is not None:
        (directory / LAYOUT_FILENAME).write_text(fragment, encoding="utf-8")
    if replacement is not None:
        (directory / LAYOUT_REPLACEMENT_FILENAME).write_text(replacement, encoding="utf-8")


def test_splice_replaces_every_marker_with_full_fragment():
    layout = "<header>{{ child }}</header><main>{{child}}</main>"
    assert splice_layout(layout, "<i>{{ child }}</i>") == (
        "<header><i>{{ child }}</i></header><main><i>{{ child }}</i></main>"
    )


def test_splice_accepts_whitespace_control_and_safe_filter():
    assert splice_layout("[{{- child -}}]", "x") == "[x]"
    assert splice_layout("[{{ child | safe }}]", "x") == "[x]"
    assert splice_layout("[{{ children }}]", "x") == "[{{ children }}]"


def test_splice_does_not_interpret_backslashes_in_fragment():
    assert splice_layout("{{ child }}", r"\1 \g<0>") == r"\1 \g<0>"


def test_no_layouts_anywhere_gives_identity(tmp_path):
    assert LayoutComposer().compose(None, tmp_path) == IDENTITY_LAYOUT


def test_fragment_without_inherited_layout_is_used_as_is(tmp_path):
    write_layouts(tmp_path, fragment="<div>{{ child }}</div>")
    assert LayoutComposer().compose(None, tmp_path) == "<div>{{ child }}</div>"


def test_fragment_nests_inside_identity_layout(tmp_path):
    write_layouts(tmp_path, fragment="<div>{{ child }}</div>")
    assert LayoutComposer().compose("{{ child }}", tmp_path) == "<div>{{ child }}</div>"


def test_fragment_nests_inside_inherited_layout(tmp_path):
    write_layouts(tmp_path, fragment="<div>{{ child }}</div>")
    composed = LayoutComposer().compose("<html>{{ child }}</html>", tmp_path)
    assert composed == "<html><div>{{ child }}</div></html>"


def test_directory_without_layout_files_keeps_inherited(tmp_path):
    inherited = "<html>{{ child }}</html>"
    assert LayoutComposer().compose(inherited, tmp_path) == inherited


def test_replacement_overrides_inherited_layout(tmp_path):
    write_layouts(tmp_path, replacement="<body>{{ child }}</body>")
    composed = LayoutComposer().compose("<html>{{ child }}</html>", tmp_path)
    assert composed == "<body>{{ child }}</body>"


def test_replacement_and_fragment_compose(tmp_path):
    write_layouts(
        tmp_path,
        fragment="<i>{{ child }}</i>",
        replacement="<body>{{ child }}|{{ child }}</body>",
    )
    composed = LayoutComposer().compose("<html>{{ child }}</html>", tmp_path)
    assert composed == "<body><i>{{ child }}</i>|<i>{{ child }}</i></body>"
