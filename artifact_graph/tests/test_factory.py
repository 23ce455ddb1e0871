"""Tests for the artifact factory: caching, failure caching, cycles and reverse indices."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from artifact_graph.core.errors import (ArtifactNotFoundError, ArtifactPendingError,
                                        DanglingReferenceError)
from artifact_graph.core.provider import SnapshotConfigProvider
from artifact_graph.core.relations import ReverseRelation, relations_into
from artifact_graph.graph.factory import ArtifactFactory, SlotState

from .conftest import CountingProvider


def test_get_or_build_is_idempotent(factory, provider):
    first = factory.get_or_build("view", "controller.xml", "orderView")
    entries_before = factory.statistics()["reverse_entries"]

    second = factory.get_or_build("view", "controller.xml", "orderView")

    assert first is second
    assert provider.calls[("view", "controller.xml", "orderView")] == 1
    assert factory.statistics()["reverse_entries"] == entries_before
    screen = first.screen_called_by_this_view()
    assert len(factory.reverse_edges(ReverseRelation.VIEWS_FOR_SCREEN, screen.unique_id)) == 1


def test_get_by_unique_id(factory):
    node = factory.get_by_unique_id("screen", "screens.xml#OrderScreen")

    assert node is factory.get_or_build("screen", "screens.xml", "OrderScreen")
    with pytest.raises(ValueError):
        factory.get_by_unique_id("screen", "OrderScreen")


def test_unknown_kind_is_rejected(factory):
    with pytest.raises(ValueError):
        factory.get_or_build("widget", "screens.xml", "OrderScreen")


def test_failures_are_not_cached_when_disabled(snapshot):
    provider = CountingProvider(snapshot)
    factory = ArtifactFactory(provider, cache_failures=False)

    for _ in range(2):
        with pytest.raises(ArtifactNotFoundError):
            factory.get_or_build("view", "controller.xml", "noSuchView")

    assert provider.calls[("view", "controller.xml", "noSuchView")] == 2
    assert factory.slot_state("view", "controller.xml#noSuchView") is None


def test_request_with_undefined_view_fails(factory, provider):
    with pytest.raises(ArtifactNotFoundError) as excinfo:
        factory.get_or_build("request", "controller.xml", "badRequest")

    assert excinfo.value.kind == "view"
    assert excinfo.value.location == "controller.xml"
    assert excinfo.value.name == "undefinedView"
    assert factory.slot_state("request", "controller.xml#badRequest") is SlotState.FAILED

    with pytest.raises(ArtifactNotFoundError):
        factory.get_or_build("request", "controller.xml", "badRequest")
    assert provider.calls[("request", "controller.xml", "badRequest")] == 1


def test_request_with_malformed_view_pointer_fails():
    provider = SnapshotConfigProvider({"request": {"c.xml": {"r": {"view-responses": ["c.xml#"]}}}})
    factory = ArtifactFactory(provider)

    with pytest.raises(DanglingReferenceError) as excinfo:
        factory.get_or_build("request", "c.xml", "r")

    assert excinfo.value.relation == "requestsForView"
    assert excinfo.value.pointer == "c.xml#"


def test_entity_cycle_terminates(factory):
    header = factory.get_or_build("entity", "entitymodel.xml", "OrderHeader")
    item = factory.get_or_build("entity", "entitymodel.xml", "OrderItem")

    assert header.entities_related_to_this_entity() == [item]
    assert item.entities_related_to_this_entity() == [header]
    assert header.entities_referring_to_this_entity() == {item}
    assert item.entities_referring_to_this_entity() == {header}


def test_controller_cycle_terminates(factory):
    # view -> screen -> request -> view
    view = factory.get_or_build("view", "controller.xml", "orderView")
    screen = view.screen_called_by_this_view()
    request = screen.requests_linked_from_this_screen()[0]

    assert request.name == "createOrder"
    assert view in request.views_this_request_responds_with()
    assert request in view.requests_that_respond_with_this_view()


def test_pending_lookup_raises(snapshot):
    class ReentrantProvider(SnapshotConfigProvider):
        factory = None

        def get_artifact_info(self, kind, location, name):
            return self.factory.get_or_build(kind, location, name)

    provider = ReentrantProvider(snapshot)
    factory = ArtifactFactory(provider)
    provider.factory = factory

    with pytest.raises(ArtifactPendingError):
        factory.get_or_build("entity", "entitymodel.xml", "OrderHeader")


def test_edges_to_targets_that_fail_are_dropped(caplog):
    # b is built while a is pending (a -> v -> S -> b -> a), then a fails
    provider = SnapshotConfigProvider({
        "request": {"c.xml": {
            "a": {"view-responses": ["v", "missing"]},
            "b": {"request-responses": ["a"]},
        }},
        "view": {"c.xml": {"v": {"type": "screen", "page": "s.xml#S"}}},
        "screen": {"s.xml": {"S": {"requests": ["c.xml#b"]}}},
    })
    factory = ArtifactFactory(provider)
    caplog.set_level(logging.WARNING)

    with pytest.raises(ArtifactNotFoundError):
        factory.get_or_build("request", "c.xml", "a")

    b = factory.get_or_build("request", "c.xml", "b")
    assert factory.slot_state("request", "c.xml#a") is SlotState.FAILED
    assert b.requests_this_request_responds_with() == []
    assert factory.reverse_edges("requestsForRequest", "c.xml#a") == set()
    assert factory.reverse_edges("screensForRequest", "c.xml#b") == {
        factory.get_or_build("screen", "s.xml", "S")
    }
    assert "target did not build" in caplog.text


def test_concurrent_builds_share_one_node(factory, provider):
    def build(_):
        return factory.get_or_build("view", "controller.xml", "orderView")

    with ThreadPoolExecutor(max_workers=8) as pool:
        nodes = list(pool.map(build, range(16)))

    assert all(node is nodes[0] for node in nodes)
    assert provider.calls[("view", "controller.xml", "orderView")] == 1
    screen = nodes[0].screen_called_by_this_view()
    assert len(screen.views_referring_to_this_screen()) == 1


def test_build_all_skips_failures(factory, caplog):
    caplog.set_level(logging.WARNING)

    count = factory.build_all()

    assert count == 18
    assert "badRequest" in caplog.text
    assert factory.statistics()["total"] == 18


def test_build_all_selected_kinds(factory):
    factory.build_all(["entity"])

    assert {n.name for n in factory.resolved_nodes()} == {"OrderHeader", "OrderItem"}


def test_reverse_index_is_consistent_with_forward_edges(factory):
    factory.build_all()
    nodes = factory.resolved_nodes()

    for source in nodes:
        for relation, refs in source.all_forward_refs().items():
            for ref in refs:
                if factory.deref(ref) is not None:
                    assert source in factory.reverse_edges(relation, ref.unique_id)

    for target in nodes:
        for spec in relations_into(target.kind):
            for source in factory.reverse_edges(spec.relation, target.unique_id):
                assert target.ref in source.forward_refs(spec.relation)


def test_reverse_edges_of_unknown_target_is_empty(factory):
    assert factory.reverse_edges("viewsForScreen", "nowhere.xml#Nothing") == set()


def test_find_by_name_partial(factory):
    factory.build_all()

    names = [n.name for n in factory.find_by_name_partial("ORDER")]

    assert "OrderScreen" in names
    assert "orderView" in names
    assert "CommonDecorator" not in names
    assert factory.find_by_name_partial("zzz") == []


def test_statistics(factory):
    factory.build_all()
    stats = factory.statistics()

    assert stats["nodes"]["view"] == 5
    assert stats["nodes"]["request"] == 3
    assert stats["failed"] >= 2
    assert stats["reverse_entries"]["viewsForScreen"] == 1
    assert stats["reverse_entries"]["requestsForView"] == 2


def test_reads_are_safe_while_another_thread_builds():
    names = [f"v{i}" for i in range(4000)]
    provider = SnapshotConfigProvider({
        "view": {"c.xml": {name: {"type": "ftl", "page": "x.ftl"} for name in names}},
    })
    factory = ArtifactFactory(provider)
    for name in names[:2000]:
        factory.get_or_build("view", "c.xml", name)

    done = threading.Event()
    errors = []

    def build_rest():
        try:
            for name in names[2000:]:
                factory.get_or_build("view", "c.xml", name)
            for i in range(200):
                with pytest.raises(ArtifactNotFoundError):
                    factory.get_or_build("view", "c.xml", f"missing{i}")
        finally:
            done.set()

    def read_until_done():
        while not done.is_set():
            try:
                factory.resolved_nodes()
                factory.find_by_name_partial("v1")
                factory.statistics()
            except RuntimeError as e:
                errors.append(e)
                return

    builder = threading.Thread(target=build_rest)
    reader = threading.Thread(target=read_until_done)
    reader.start()
    builder.start()
    builder.join()
    reader.join()

    assert errors == []
    assert len(factory.resolved_nodes()) == 4000
    assert factory.statistics()["failed"] == 200
