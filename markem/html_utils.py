"""HTML post-processing for Markem.

Rendered pages may link to other documents by site-rooted path, e.g.
``<a href="/guide/intro.md">``. These links are rewritten to the .html
pages produced by the build. Relative links were already rewritten in the
Markdown source before conversion and are left untouched here.

Functions:
    rewrite_rooted_links: Swap .md for .html in site-rooted anchor hrefs.
    postprocess_html: Apply every post-processing step to a page.
"""

from __future__ import annotations

import re

# <a ... href="/path/page.md" ...>, excluding protocol-relative //host links
_ROOTED_MD_HREF_RE = re.compile(
    r'(?P<prefix><a\s[^>]*?(?<=\s)href=")(?P<path>/(?!/)[^"]*?)\.md(?P<suffix>")',
    re.IGNORECASE,
)


def rewrite_rooted_links(html: str) -> str:
    """Point site-rooted anchor links at rendered pages.

    Args:
        html: Rendered HTML.

    Returns:
        HTML where anchors with ``href="/....md"`` point at ``/....html``.
        Other attributes and their order are preserved.

    Examples:
        >>> rewrite_rooted_links('<a class="x" href="/docs/a.md" id="y">A</a>')
        '<a class="x" href="/docs/a.html" id="y">A</a>'

        >>> rewrite_rooted_links('<a href="./a.html">A</a>')
        '<a href="./a.html">A</a>'
    """
    return _ROOTED_MD_HREF_RE.sub(r"\g<prefix>\g<path>.html\g<suffix>", html)


def postprocess_html(html: str) -> str:
    """Apply all post-processing steps to a rendered page."""
    return rewrite_rooted_links(html)
