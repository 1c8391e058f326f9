import logging

import pytest

from oas_provider_gen.parser.base import PathItem
from oas_provider_gen.probe.actions import is_singleton_path, probe_action
from oas_provider_gen.probe.base import Pseudonym, Resource
from oas_provider_gen.probe.diagnostics import DiagnosticKind, Diagnostics


def _item(*methods: str) -> PathItem:
    return PathItem.model_validate({m.lower(): {"responses": {}} for m in methods})


class TestIsSingletonPath:
    @pytest.mark.parametrize("path", [
        "/boards/{id}",
        "/boards/{board_id}",
        "/quota/{specName}",
        "/v1/orgs/{org}/members/{username}",
        "/boards/{slug}/",
    ])
    def test_singleton(self, path):
        assert is_singleton_path(path) is True

    @pytest.mark.parametrize("path", [
        "/boards",
        "/orgs/{org}/members",
        "/",
        "",
    ])
    def test_collection(self, path):
        assert is_singleton_path(path) is False


class TestProbeAction:
    def test_show_on_singleton_get(self):
        resource = Resource(name="Boards")
        matched, action = probe_action(resource, Pseudonym.SHOW, "/boards/{id}", _item("GET"))
        assert matched is True
        assert action.method == "GET"
        assert action.path == "/boards/{id}"
        assert action.pseudonym == Pseudonym.SHOW

    def test_show_never_on_collection(self):
        matched, action = probe_action(Resource(name="Boards"), Pseudonym.SHOW, "/boards", _item("GET"))
        assert (matched, action) == (False, None)

    @pytest.mark.parametrize("pseudonym", [Pseudonym.INDEX, Pseudonym.CREATE])
    def test_collection_pseudonyms_never_on_singleton(self, pseudonym):
        matched, _ = probe_action(Resource(name="Boards"), pseudonym, "/boards/{id}", _item("GET", "POST"))
        assert matched is False

    def test_update_prefers_put_over_patch_and_post(self):
        _, action = probe_action(Resource(name="B"), Pseudonym.UPDATE, "/b/{id}", _item("POST", "PATCH", "PUT"))
        assert action.method == "PUT"

    def test_update_falls_back_to_post(self):
        _, action = probe_action(Resource(name="B"), Pseudonym.UPDATE, "/b/{id}", _item("GET", "POST"))
        assert action.method == "POST"

    def test_delete_falls_back_through_priority_list(self):
        _, action = probe_action(Resource(name="B"), Pseudonym.DELETE, "/b/{id}", _item("PATCH", "PUT"))
        assert action.method == "PUT"

    def test_no_acceptable_method(self):
        matched, action = probe_action(Resource(name="B"), Pseudonym.CREATE, "/b", _item("GET"))
        assert (matched, action) == (False, None)

    def test_conflict_keeps_existing_action(self, caplog):
        resource = Resource(name="Boards")
        _, first = probe_action(resource, Pseudonym.SHOW, "/boards/{id}", _item("GET"))
        resource.set_action(first)

        diagnostics = Diagnostics()
        with caplog.at_level(logging.WARNING):
            matched, action = probe_action(resource, Pseudonym.SHOW, "/boards/{slug}", _item("GET"), diagnostics)

        assert (matched, action) == (False, None)
        assert resource.get_action(Pseudonym.SHOW).path == "/boards/{id}"
        [warning] = diagnostics.of_kind(DiagnosticKind.PROBE_CONFLICT)
        assert "/boards/{id}" in warning.message
        assert "/boards/{slug}" in warning.message
        assert warning.resource == "Boards"
        assert "already has a show operation" in caplog.text
