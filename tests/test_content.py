import dataclasses
from pathlib import Path

import pytest

from markem.content import AssetRef, DirectoryContext, DirectoryNode, RenderedFile


def test_counts_include_descendants():
    tree = DirectoryNode(
        name="dist",
        files=[RenderedFile("a.html", "")],
        assets=[AssetRef("x.png", Path("/src/x.png"))],
        dirs=[
            DirectoryNode(
                name="sub",
                files=[RenderedFile("b.html", ""), RenderedFile("c.html", "")],
                dirs=[DirectoryNode(name="empty")],
            )
        ],
    )
    assert tree.page_count() == 3
    assert tree.asset_count() == 1


def test_rendered_files_and_contexts_are_immutable():
    page = RenderedFile("a.html", "<p>a</p>")
    with pytest.raises(dataclasses.FrozenInstanceError):
        page.text = "changed"
    context = DirectoryContext()
    with pytest.raises(dataclasses.FrozenInstanceError):
        context.layout = "x"
    assert context.config == {}
    assert context.layout is None


def test_new_nodes_do_not_share_lists():
    first, second = DirectoryNode(name="a"), DirectoryNode(name="b")
    first.files.append(RenderedFile("a.html", ""))
    assert second.files == []


def test_default_context_config_is_read_only():
    first, second = DirectoryContext(), DirectoryContext()
    with pytest.raises(TypeError):
        first.config["title"] = "x"
    assert second.config == {}
