import pytest

from phonology.core.interfaces import Direction, ISegment, RuleContext
from phonology.segments import BoundarySegment, Segment, ValueCell
from phonology.utils.errors import TypeMismatchError, UndefinedFeatureError


def test_segment_is_an_isegment(graph):
    assert isinstance(Segment(graph), ISegment)


def test_segment_requires_feature_graph():
    with pytest.raises(TypeError):
        Segment({"voice": "privative"})


def test_set_and_read_values(graph):
    seg = Segment(graph, {"voice": 1, "anterior": "-"})
    assert seg.value("voice") == 1
    assert seg.value("anterior") == 0
    assert seg.value("distributed") is None


def test_node_value_is_derived_from_children(graph):
    seg = Segment(graph, {"anterior": "+", "labial": 1})
    assert seg.value("Coronal") == {"anterior": 1}
    assert seg.value("Place") == {"labial": 1, "Coronal": {"anterior": 1}}
    assert seg.value("Laryngeal") is None


def test_assigning_mapping_to_node_sets_named_children_only(graph):
    seg = Segment(graph, {"sonorant": 1})
    seg.set("ROOT", {"Laryngeal": {"voice": 1}})
    assert seg.value("ROOT") == {"sonorant": 1, "Laryngeal": {"voice": 1}}

    seg.set("ROOT", {})
    assert seg.value("ROOT") == {"sonorant": 1, "Laryngeal": {"voice": 1}}


def test_assigning_scalar_to_node_raises(graph):
    with pytest.raises(TypeMismatchError):
        Segment(graph).set("Coronal", 1)


def test_unknown_feature_is_rejected(graph):
    seg = Segment(graph)
    with pytest.raises(UndefinedFeatureError):
        seg.set("lateral", 1)
    with pytest.raises(UndefinedFeatureError):
        seg.value("lateral")
    assert seg.all_values() == {}


def test_value_text(graph):
    seg = Segment(graph, {"anterior": 0, "voice": 1})
    assert seg.value_text("anterior") == "-"
    assert seg.value_text("voice") == ""
    assert seg.value_text("distributed") == "*"
    assert seg.value_text("Coronal") == {"anterior": "-"}


def test_delink_node_removes_descendants(graph):
    seg = Segment(graph, {"labial": 1, "anterior": 1, "distributed": 0, "voice": 1})
    removed = seg.delink("Place")
    assert sorted(removed) == [0, 1, 1]
    assert seg.value("Place") is None
    assert seg.value("voice") == 1


def test_delink_differs_from_setting_none(graph):
    seg = Segment(graph, {"voice": 1, "sonorant": 1})
    seg.set("voice", None)
    seg.delink("sonorant")
    assert seg.all_values() == {"voice": None}


def test_linked_cells_are_shared(graph):
    a = Segment(graph, {"voice": 1})
    b = Segment(graph)
    b.link("voice", a.value_ref("voice"))
    a.set("voice", None)
    assert b.value("voice") is None
    b.set("voice", 1)
    assert a.value("voice") == 1

    b.delink("voice")
    assert b.value("voice") is None
    assert a.value("voice") == 1


def test_link_node_shares_every_bound_descendant(graph):
    a = Segment(graph, {"anterior": 1, "distributed": 0})
    b = Segment(graph)
    b.link("Coronal", a.value_ref("Coronal"))
    a.set("distributed", 1)
    assert b.value("Coronal") == {"anterior": 1, "distributed": 1}


def test_link_requires_value_cell(graph):
    with pytest.raises(TypeMismatchError):
        Segment(graph).link("voice", 1)


def test_value_cell_alias_and_copy():
    cell = ValueCell(1)
    assert cell.alias() is cell
    copied = cell.copy()
    copied.value = 0
    assert cell.value == 1


def test_duplicate_is_independent(graph):
    a = Segment(graph, {"voice": 1, "anterior": 0})
    b = a.duplicate()
    assert b.all_values() == a.all_values()
    b.set("voice", None)
    assert a.value("voice") == 1


def test_features_mapping_view(graph):
    seg = Segment(graph)
    seg.features["voice"] = 1
    seg.features["anterior"] = "+"
    assert seg.features["Coronal"] == {"anterior": 1}
    assert "voice" in seg.features
    assert "labial" not in seg.features
    assert sorted(seg.features) == ["anterior", "voice"]
    assert len(seg.features) == 2

    del seg.features["voice"]
    assert "voice" not in seg.features
    with pytest.raises(KeyError):
        seg.features["lateral"]
    with pytest.raises(UndefinedFeatureError):
        seg.features["lateral"] = 1


def test_clear(graph):
    seg = Segment(graph, {"voice": 1})
    seg.clear()
    assert seg.all_values() == {}


def test_insertion_hooks(graph):
    seg = Segment(graph, rule_context=RuleContext(Direction.LEFTWARD))
    left, right = Segment(graph), Segment(graph)
    seg.insert_left(left)
    seg.insert_right(right)
    assert seg.pending_insertions() == ([left], [right])
    assert seg.take_insertions() == ([left], [right])
    assert seg.pending_insertions() == ([], [])


def test_boundary_segment(graph):
    boundary = BoundarySegment(graph)
    assert boundary.value("BOUNDARY") == 1
    assert boundary.value("voice") is None
    boundary.set("voice", 1)
    boundary.clear()
    assert boundary.all_values() == {"BOUNDARY": 1}


def test_cyclic_hierarchy_does_not_hang(graph):
    graph.add_child("Coronal", "Place")
    seg = Segment(graph, {"anterior": 1, "labial": 1})
    assert seg.value("Place") == {"labial": 1, "Coronal": {"anterior": 1}}
    seg.delink("Place")
    assert seg.all_values() == {}


def test_dangling_children_are_skipped(graph):
    seg = Segment(graph, {"anterior": 1, "distributed": 1})
    graph.drop_feature("distributed")
    assert seg.value("Coronal") == {"anterior": 1}
