from scratchtree.block import Block
from scratchtree.collection import ProjectCollection
from scratchtree.tree import Tree


def make_tree(name: str) -> Tree:
    return Tree.create(Block.for_object("Stage"), name)


def test_groups_trees_by_owner_in_discovery_order():
    collection = ProjectCollection()
    first, second, other = make_tree("b.sb2"), make_tree("a.sb2"), make_tree("c.sb2")
    collection.add(7, first)
    collection.add(3, other)
    collection.add(7, second)

    assert collection.owners() == [3, 7]
    assert collection.projects_for(7) == [first, second]
    assert collection.projects_for(12) == []
    assert [owner for owner, _ in collection.items()] == [3, 7]
    assert 3 in collection and 12 not in collection
    assert len(collection) == 2
    assert collection.project_count == 3
