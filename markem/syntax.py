"""Markdown preprocessing for Markem.

Raw Markdown is rewritten before conversion in two steps:

1. Relative links to other Markdown documents get their extension swapped
   to .html so they point at the rendered pages.
2. Custom block syntax rules expand shorthand markup into HTML.

Key classes:
- SyntaxRule: A pattern plus either a handler or a substitution.
- SyntaxRegistry: Ordered collection of rules applied to a document.

Custom rules can be added without touching existing ones by registering
them on a registry (or on default_syntax_registry).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from .errors import SyntaxExpansionError

LOCAL_LINK_RE = re.compile(r"\[(.+?)\]\((\..+?)\.md\)")

SyntaxHandler = Callable[[str, re.Match], str]


def rewrite_local_links(text: str) -> str:
    """Point relative Markdown links at their rendered .html pages.

    Only targets starting with a relative path marker (``./`` or ``../``)
    are rewritten; absolute links are handled after rendering.

    Args:
        text: Raw Markdown.

    Returns:
        Markdown with ``[label](./page.md)`` turned into ``[label](./page.html)``.

    Examples:
        >>> rewrite_local_links("[Next](./next.md)")
        '[Next](./next.html)'
    """
    return LOCAL_LINK_RE.sub(r"[\1](\2.html)", text)


@dataclass(frozen=True)
class SyntaxRule:
    """A custom syntax rule.

    Attributes:
        name: Identifier used in error messages.
        pattern: Compiled pattern that finds the syntax.
        handler: Called with the full text and a match; returns the full text
            with the matched region replaced. Re-run until nothing matches.
        substitution: Replacement for re.sub, used when there is no handler.
    """

    name: str
    pattern: re.Pattern[str]
    handler: SyntaxHandler | None = None
    substitution: str | None = None


class SyntaxRegistry:
    """Ordered registry of custom syntax rules.

    Attributes:
        max_passes: Upper bound on handler invocations per rule and document.
    """

    def __init__(self, rules: list[SyntaxRule] | None = None, max_passes: int = 1000):
        self._rules: list[SyntaxRule] = list(rules or [])
        self.max_passes = max_passes

    @property
    def rules(self) -> tuple[SyntaxRule, ...]:
        return tuple(self._rules)

    def register(self, rule: SyntaxRule) -> None:
        """Append a rule; rules run in registration order."""
        self._rules.append(rule)

    def expand(self, text: str) -> str:
        """Apply every rule to text.

        Args:
            text: Markdown source.

        Returns:
            Text with all custom syntax expanded.

        Raises:
            SyntaxExpansionError: If a handler rule still matches after
                max_passes rewrites.
        """
        out = text
        for rule in self._rules:
            if rule.handler is None:
                if rule.substitution is not None:
                    out = rule.pattern.sub(rule.substitution, out)
                continue
            passes = 0
            while match := rule.pattern.search(out):
                if passes >= self.max_passes:
                    raise SyntaxExpansionError(
                        f"Rule '{rule.name}' still matching after {self.max_passes} passes"
                    )
                out = rule.handler(out, match)
                passes += 1
        return out


# A term runs until the next ^TD line; a definition until a blank line, the
# next marker line or the end of the text. Neither may span a blank line.
_QA_PAIR = (
    r"\^TH[ \t]*({body})[ \t]*\n"
    r"\^TD[ \t]*({body})[ \t]*"
    r"(?=\n\n|\n\^T[HD]|\n?\Z)"
).format(body=r"(?:(?!\n\n).)+?")
QA_PAIR_RE = re.compile(_QA_PAIR, re.DOTALL)
QA_BLOCK_RE = re.compile(rf"^{_QA_PAIR}(?:\n{_QA_PAIR})*", re.MULTILINE | re.DOTALL)


def qa_table(text: str, match: re.Match[str]) -> str:
    """Expand a run of ``^TH``/``^TD`` pairs into a two-column table."""
    rows = ["<table>\n"]
    for term, definition in QA_PAIR_RE.findall(match.group(0)):
        rows.append(f"<tr>\n<th>\n{term.strip()}\n</th>\n")
        rows.append(f"<td>\n{definition.strip()}\n</td>\n</tr>\n")
    rows.append("</table>\n")
    return text[: match.start()] + "".join(rows) + text[match.end() :]


def create_default_registry() -> SyntaxRegistry:
    """Create a registry holding the built-in rules."""
    return SyntaxRegistry([SyntaxRule("qa-table", QA_BLOCK_RE, handler=qa_table)])


default_syntax_registry = create_default_registry()


def preprocess_markdown(text: str, registry: SyntaxRegistry | None = None) -> str:
    """Prepare raw Markdown for conversion.

    Args:
        text: Raw Markdown source.
        registry: Custom syntax rules; defaults to the built-in rules.

    Returns:
        Markdown with local links rewritten and custom syntax expanded.
    """
    text = rewrite_local_links(text)
    return (registry or default_syntax_registry).expand(text)
