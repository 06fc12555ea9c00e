"""Unit tests for Directus ↔ config transformations."""
import pickle

import pytest

from directus_iac.core.fields import (
    UNSET,
    is_set,
    join_csv,
    set_bool_field,
    set_nullable_string_field,
    set_string_field,
    split_csv,
    string_list_or_none,
    string_or_none,
)
from directus_iac.core.models import Collection, Policy, Role
from directus_iac.core.transformer import CollectionTransformer, PolicyTransformer, RoleTransformer


# ============================================================================
# Field helpers
# ============================================================================

class TestFieldHelpers:
    def test_unset_is_singleton_and_falsy(self):
        assert not UNSET
        assert repr(UNSET) == "UNSET"
        assert pickle.loads(pickle.dumps(UNSET)) is UNSET

    @pytest.mark.parametrize("value,expected", [(None, False), (UNSET, False), ("", True), ("x", True), (False, True)])
    def test_is_set(self, value, expected):
        assert is_set(value) is expected

    def test_set_string_field_skips_null_and_unknown(self):
        payload = {}
        set_string_field(payload, "a", None)
        set_string_field(payload, "b", UNSET)
        set_string_field(payload, "c", "value")
        assert payload == {"c": "value"}

    def test_set_nullable_string_field(self):
        payload = {}
        set_nullable_string_field(payload, "unknown", UNSET)
        set_nullable_string_field(payload, "cleared", None)
        set_nullable_string_field(payload, "set", "r1")
        assert payload == {"cleared": None, "set": "r1"}

    def test_set_bool_field_keeps_false(self):
        payload = {}
        set_bool_field(payload, "off", False)
        set_bool_field(payload, "skip", None)
        set_bool_field(payload, "skip2", UNSET)
        assert payload == {"off": False}

    def test_string_or_none(self):
        assert string_or_none("") is None
        assert string_or_none(None) is None
        assert string_or_none("icon") == "icon"

    def test_string_list_or_none(self):
        assert string_list_or_none(None) is None
        assert string_list_or_none([]) is None
        assert string_list_or_none(["a", "b"]) == ["a", "b"]

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("10.0.0.0/8, 192.168.1.0/24", ["10.0.0.0/8", "192.168.1.0/24"]),
            ("10.0.0.1,,10.0.0.2", ["10.0.0.1", "10.0.0.2"]),
            (" , ,", []),
            ("", []),
            (None, []),
            (UNSET, []),
        ],
    )
    def test_split_csv(self, value, expected):
        assert split_csv(value) == expected

    def test_join_csv(self):
        assert join_csv(["10.0.0.0/8", "192.168.1.0/24"]) == "10.0.0.0/8,192.168.1.0/24"
        assert join_csv([]) is None
        assert join_csv(None) is None


# ============================================================================
# Policy
# ============================================================================

class TestPolicyTransformer:
    def test_full_payload(self):
        policy = Policy(
            id="ignored",
            name="Editors",
            icon="edit",
            description="Content editors",
            ip_access="10.0.0.0/8, 192.168.1.0/24",
            enforce_tfa=True,
            admin_access=False,
            app_access=True,
        )

        assert PolicyTransformer.to_payload(policy) == {
            "name": "Editors",
            "icon": "edit",
            "description": "Content editors",
            "ip_access": ["10.0.0.0/8", "192.168.1.0/24"],
            "enforce_tfa": True,
            "admin_access": False,
            "app_access": True,
        }

    def test_partial_payload_omits_unset_fields(self):
        policy = Policy(name="Minimal", icon=UNSET, enforce_tfa=UNSET, admin_access=UNSET, app_access=UNSET)
        assert PolicyTransformer.to_payload(policy) == {"name": "Minimal"}

    def test_omitted_flags_are_sent_as_false(self):
        payload = PolicyTransformer.to_payload(Policy(id="p1", name="Editors"))
        assert payload == {
            "name": "Editors",
            "enforce_tfa": False,
            "admin_access": False,
            "app_access": False,
        }

    def test_dropping_admin_access_revokes_it(self):
        payload = PolicyTransformer.to_payload(Policy(id="p1", name="Editors", app_access=True))
        assert payload["admin_access"] is False
        assert payload["app_access"] is True

    def test_blank_ip_access_is_omitted(self):
        assert "ip_access" not in PolicyTransformer.to_payload(Policy(name="x", ip_access=" , "))

    def test_from_full_response(self):
        policy = PolicyTransformer.from_response({
            "id": "p1",
            "name": "Editors",
            "icon": "edit",
            "description": "Content editors",
            "ip_access": ["10.0.0.0/8", "192.168.1.0/24"],
            "enforce_tfa": True,
            "admin_access": True,
            "app_access": True,
        })

        assert policy == Policy(
            id="p1",
            name="Editors",
            icon="edit",
            description="Content editors",
            ip_access="10.0.0.0/8,192.168.1.0/24",
            enforce_tfa=True,
            admin_access=True,
            app_access=True,
        )

    def test_from_minimal_response(self):
        """Absent strings become None, absent booleans become False."""
        policy = PolicyTransformer.from_response({"id": "p1", "name": "Bare", "ip_access": [], "icon": ""})

        assert policy.icon is None
        assert policy.description is None
        assert policy.ip_access is None
        assert policy.enforce_tfa is False
        assert policy.admin_access is False
        assert policy.app_access is False

    def test_ip_access_round_trip(self):
        payload = PolicyTransformer.to_payload(Policy(name="x", ip_access="10.0.0.0/8, 192.168.1.0/24"))
        assert payload["ip_access"] == ["10.0.0.0/8", "192.168.1.0/24"]

        restored = PolicyTransformer.from_response({"id": "p", **payload})
        assert restored.ip_access == "10.0.0.0/8,192.168.1.0/24"

    @pytest.mark.parametrize(
        "policy",
        [
            Policy(name="A", icon="key", enforce_tfa=False, admin_access=False, app_access=True),
            Policy(name="B", description="desc", ip_access="10.0.0.1", enforce_tfa=True, admin_access=True, app_access=False),
            Policy(name="C", icon="key"),
            Policy(name="D", ip_access="10.0.0.0/8", app_access=True),
        ],
    )
    def test_round_trip(self, policy):
        restored = PolicyTransformer.from_response(PolicyTransformer.to_payload(policy))
        assert restored == policy


# ============================================================================
# Role
# ============================================================================

class TestRoleTransformer:
    def test_create_payload(self):
        role = Role(name="Editors", icon="group", description="desc", parent="r0")
        assert RoleTransformer.to_payload(role, is_create=True) == {
            "name": "Editors",
            "icon": "group",
            "description": "desc",
            "parent": "r0",
        }

    def test_create_payload_omits_null_parent(self):
        assert RoleTransformer.to_payload(Role(name="Top"), is_create=True) == {"name": "Top"}

    def test_update_payload_sends_explicit_null_parent(self):
        payload = RoleTransformer.to_payload(Role(id="r1", name="Orphan", parent=None), is_create=False)
        assert "parent" in payload
        assert payload["parent"] is None

    def test_update_payload_leaves_unknown_parent_untouched(self):
        payload = RoleTransformer.to_payload(Role(id="r1", name="Keep", parent=UNSET), is_create=False)
        assert "parent" not in payload

    def test_computed_fields_never_sent(self):
        role = Role(id="r1", name="x", children=["c1"], users=["u1"])
        for is_create in (True, False):
            payload = RoleTransformer.to_payload(role, is_create=is_create)
            assert "children" not in payload
            assert "users" not in payload
            assert "id" not in payload

    def test_from_response(self):
        role = RoleTransformer.from_response({
            "id": "r1",
            "name": "Editors",
            "icon": "group",
            "description": "",
            "parent": "r0",
            "children": ["c1", "c2"],
            "users": [],
        })

        assert role == Role(
            id="r1", name="Editors", icon="group", description=None,
            parent="r0", children=["c1", "c2"], users=None,
        )

    def test_from_response_without_parent(self):
        role = RoleTransformer.from_response({"id": "r1", "name": "Root", "parent": None})
        assert role.parent is None
        assert role.children is None

    def test_round_trip(self):
        role = Role(name="Editors", icon="group", description=None, parent="r0")
        restored = RoleTransformer.from_response(RoleTransformer.to_payload(role, is_create=True))
        assert restored == role


# ============================================================================
# Collection
# ============================================================================

class TestCollectionTransformer:
    def test_create_payload_without_meta(self):
        payload = CollectionTransformer.to_payload(Collection(collection="articles"), is_create=True)
        assert payload == {"collection": "articles", "schema": {}}

    def test_create_payload_with_single_meta_field(self):
        payload = CollectionTransformer.to_payload(Collection(collection="articles", icon="article"), is_create=True)
        assert payload == {"collection": "articles", "schema": {}, "meta": {"icon": "article"}}

    def test_update_payload_never_sends_name_or_schema(self):
        collection = Collection(
            collection="articles",
            icon="article",
            note="Blog posts",
            hidden=False,
            singleton=True,
            sort_field="sort",
            archive_field="status",
            color="#6644FF",
        )

        assert CollectionTransformer.to_payload(collection, is_create=False) == {
            "meta": {
                "icon": "article",
                "note": "Blog posts",
                "hidden": False,
                "singleton": True,
                "sort_field": "sort",
                "archive_field": "status",
                "color": "#6644FF",
            }
        }

    def test_update_payload_empty_when_nothing_set(self):
        assert CollectionTransformer.to_payload(Collection(collection="articles"), is_create=False) == {}

    def test_from_response_without_meta(self):
        collection = CollectionTransformer.from_response({"collection": "articles", "meta": None})
        assert collection == Collection(collection="articles", hidden=False, singleton=False)

    def test_from_response_with_meta(self):
        collection = CollectionTransformer.from_response({
            "collection": "articles",
            "meta": {"collection": "articles", "icon": "article", "note": "", "hidden": True, "color": "#FFF"},
            "schema": {"name": "articles", "comment": None},
        })

        assert collection.icon == "article"
        assert collection.note is None
        assert collection.hidden is True
        assert collection.singleton is False
        assert collection.color == "#FFF"
        assert collection.sort_field is None

    def test_round_trip(self):
        collection = Collection(collection="articles", icon="article", hidden=True, singleton=False, archive_field="status")
        payload = CollectionTransformer.to_payload(collection, is_create=True)
        assert CollectionTransformer.from_response(payload) == collection
