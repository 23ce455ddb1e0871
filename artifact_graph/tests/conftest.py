"""Shared fixtures: a small order-management configuration snapshot."""

import copy
from collections import Counter

import pytest

from artifact_graph.core.provider import SnapshotConfigProvider
from artifact_graph.graph.factory import ArtifactFactory

ORDER_SNAPSHOT = {
    "view": {
        "controller.xml": {
            "orderView": {"type": "screen", "page": "screens.xml#OrderScreen"},
            "emptyView": {"type": "screen", "page": ""},
            "ftlView": {"type": "ftl", "page": "component://order/order.ftl"},
            "brokenView": {"type": "screen", "page": "screens.xml#MissingScreen"},
            "malformedView": {"type": "screen", "page": "NoSeparator"},
        },
    },
    "request": {
        "controller.xml": {
            "createOrder": {
                "event-type": "service",
                "event-invoke": "createOrder",
                "view-responses": ["orderView"],
                "request-responses": ["main"],
            },
            "main": {"view-responses": ["orderView"]},
            "javaRequest": {"event-type": "java", "event-invoke": "org.example.OrderEvents"},
            "badRequest": {"view-responses": ["undefinedView"]},
        },
    },
    "screen": {
        "screens.xml": {
            "OrderScreen": {
                "screens": ["CommonDecorator"],
                "forms": ["forms.xml#OrderForm"],
                "services": ["getOrder"],
                "entities": ["OrderHeader"],
                "requests": ["controller.xml#createOrder"],
            },
            "CommonDecorator": {},
        },
    },
    "form": {
        "forms.xml": {
            "OrderForm": {
                "extends": "BaseForm",
                "entities": ["OrderHeader"],
                "services": ["createOrder"],
                "target-request": "controller.xml#createOrder",
            },
            "BaseForm": {},
        },
    },
    "service": {
        "services.xml": {
            "createOrder": {
                "entities": ["OrderHeader", "OrderItem"],
                "services": ["getOrder"],
                "implements": ["orderInterface"],
            },
            "getOrder": {"entities": ["OrderHeader"]},
            "orderInterface": {},
            "legacyService": {"services": ["removedService"]},
        },
    },
    "entity": {
        "entitymodel.xml": {
            "OrderHeader": {"relations": ["OrderItem"]},
            "OrderItem": {"relations": ["OrderHeader"]},
        },
    },
}


class CountingProvider(SnapshotConfigProvider):
    """Snapshot provider that records how often each artifact is looked up."""

    def __init__(self, data):
        super().__init__(data)
        self.calls = Counter()

    def get_artifact_info(self, kind, location, name):
        self.calls[(kind.value, str(location), name)] += 1
        return super().get_artifact_info(kind, location, name)


@pytest.fixture
def snapshot():
    return copy.deepcopy(ORDER_SNAPSHOT)


@pytest.fixture
def provider(snapshot):
    return CountingProvider(snapshot)


@pytest.fixture
def factory(provider):
    return ArtifactFactory(provider)
