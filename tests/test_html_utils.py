from markem.html_utils import postprocess_html, rewrite_rooted_links


def test_rooted_md_links_become_html():
    html = '<p><a href="/docs/intro.md">Intro</a></p>'
    assert rewrite_rooted_links(html) == '<p><a href="/docs/intro.html">Intro</a></p>'


def test_other_attributes_and_order_are_preserved():
    html = '<a class="nav" href="/a/b.md" title="B" data-x="1">B</a>'
    assert rewrite_rooted_links(html) == (
        '<a class="nav" href="/a/b.html" title="B" data-x="1">B</a>'
    )


def test_relative_external_and_protocol_relative_links_untouched():
    html = (
        '<a href="./a.html">a</a>'
        '<a href="../b.md">b</a>'
        '<a href="https://example.com/c.md">c</a>'
        '<a href="//cdn.example.com/d.md">d</a>'
        '<a href="/e.md#top">e</a>'
    )
    assert rewrite_rooted_links(html) == html


def test_only_anchor_href_attributes_are_rewritten():
    html = '<img src="/x.md"><link href="/y.md"><a data-href="/z.md" href="/w.md">w</a>'
    assert postprocess_html(html) == (
        '<img src="/x.md"><link href="/y.md"><a data-href="/z.md" href="/w.html">w</a>'
    )


def test_multiple_links_in_one_page():
    html = '<a href="/one.md">1</a> and <a href="/two/three.md">3</a>'
    assert postprocess_html(html) == (
        '<a href="/one.html">1</a> and <a href="/two/three.html">3</a>'
    )
