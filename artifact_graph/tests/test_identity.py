"""Tests for artifact identity and reference pointer parsing."""

from pathlib import Path

import pytest

from artifact_graph.core.identity import make_unique_id, parse_pointer, split_unique_id
from artifact_graph.graph.factory import ArtifactFactory
from artifact_graph.core.provider import SnapshotConfigProvider


@pytest.mark.parametrize("location,name", [
    ("app.xml", "orderView"),
    ("component://order/webapp/WEB-INF/controller.xml", "main"),
    ("file:///opt/app/screens.xml", "Order.Screen"),
])
def test_unique_id_round_trip(location, name):
    unique_id = make_unique_id(location, name)
    assert unique_id == f"{location}#{name}"
    assert make_unique_id(location, name) == unique_id
    assert split_unique_id(unique_id) == (location, name)


def test_unique_id_accepts_path_locations():
    assert make_unique_id(Path("config") / "app.xml", "v") == make_unique_id(str(Path("config") / "app.xml"), "v")


def test_names_with_separator_are_ambiguous():
    unique_id = make_unique_id("a.xml", "b#c")
    assert unique_id == "a.xml#b#c"
    assert split_unique_id(unique_id) == ("a.xml#b", "c")


@pytest.mark.parametrize("bad_id", ["noSeparator", "#name", "location#"])
def test_split_rejects_invalid_ids(bad_id):
    with pytest.raises(ValueError):
        split_unique_id(bad_id)


def test_parse_pointer():
    assert parse_pointer("screens.xml#OrderScreen") == ("screens.xml", "OrderScreen")
    assert parse_pointer(" screens.xml#OrderScreen ") == ("screens.xml", "OrderScreen")
    assert parse_pointer("BaseForm", default_location="forms.xml") == ("forms.xml", "BaseForm")

    with pytest.raises(ValueError):
        parse_pointer("BaseForm")
    with pytest.raises(ValueError):
        parse_pointer("", default_location="forms.xml")


def test_node_equality_uses_identity_only():
    first = SnapshotConfigProvider({"view": {"app.xml": {"v": {"type": "ftl", "page": "a.ftl"}}}})
    second = SnapshotConfigProvider({"view": {"app.xml": {"v": {"type": "ftl", "page": "b.ftl"}}}})

    a = ArtifactFactory(first).get_or_build("view", "app.xml", "v")
    b = ArtifactFactory(second).get_or_build("view", "app.xml", "v")

    assert a is not b
    assert a == b
    assert hash(a) == hash(b)
    assert a.page != b.page
    assert len({a, b}) == 1


def test_same_id_different_kinds_are_not_equal():
    provider = SnapshotConfigProvider({
        "view": {"app.xml": {"order": {"type": "ftl"}}},
        "screen": {"app.xml": {"order": {}}},
    })
    factory = ArtifactFactory(provider)
    view = factory.get_or_build("view", "app.xml", "order")
    screen = factory.get_or_build("screen", "app.xml", "order")

    assert view.unique_id == screen.unique_id
    assert view != screen
    assert view.graph_key != screen.graph_key
