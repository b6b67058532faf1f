from scratchtree.block import Block
from scratchtree.serializer import render, render_text
from scratchtree.tree import Tree


def build_tree() -> Tree:
    tree = Tree.create(Block.for_object("Stage"), "game.sb2")
    sprite = tree.add_leaf(tree.root, Block.for_object("Sprite1"))
    forever = tree.add_leaf(sprite, Block.for_call("doForever"))
    tree.add_leaf(forever, Block.for_call("turnRight:"))
    tree.add_leaf(tree.root, Block.for_call("whenGreenFlagClicked"))
    return tree


def test_render_indents_by_depth():
    lines = list(render(build_tree().root, 1))

    assert lines == [
        "    Stage\n",
        "        Sprite1\n",
        "            doForever\n",
        "                turnRight:\n",
        "        whenGreenFlagClicked\n",
    ]


def test_render_is_lazy_and_restartable():
    tree = build_tree()
    lines = tree.render(0)

    assert next(lines) == "Stage\n"
    assert list(tree.render(0)) == list(tree.render(0))


def test_render_text_is_idempotent():
    tree = build_tree()

    assert render_text(tree) == render_text(tree)
    assert render_text(tree, 0).splitlines()[0] == "Stage"


def test_render_custom_indent_unit():
    tree = build_tree()

    assert list(render(tree.root, 1, indent="\t"))[1] == "\t\tSprite1\n"


def test_render_handles_deep_nesting():
    tree = Tree.create(Block.for_object("Stage"))
    node = tree.root
    for _ in range(2000):
        node = tree.add_leaf(node, Block.for_call("doIf"))
    tree.add_leaf(node, Block.for_call("hide"))

    lines = list(tree.render(1))

    assert len(lines) == 2002
    assert lines[-1] == "    " * 2002 + "hide\n"


def test_render_visits_children_before_siblings():
    tree = Tree.create(Block.for_object("Stage"))
    first = tree.add_leaf(tree.root, Block.for_call("doRepeat"))
    tree.add_leaf(first, Block.for_call("move:"))
    tree.add_leaf(first, Block.for_call("turnRight:"))
    tree.add_leaf(tree.root, Block.for_call("hide"))

    assert [line.strip() for line in render(tree.root, 0)] == ["Stage", "doRepeat", "move:", "turnRight:", "hide"]
