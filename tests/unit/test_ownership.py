"""Tests for Instance parsing and build_ownership_map."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from crdorder.graph.ownership import build_ownership_map, iter_edges
from crdorder.models.resources import Instance, OwnerReference

_KNOWN = frozenset({"eks.example.com", "iam.example.com"})


def _instance(kind: str, *owners: tuple[str, str], name: str = "obj") -> Instance:
    return Instance(
        kind=kind,
        name=name,
        owner_references=tuple(OwnerReference(api_version=av, kind=k) for av, k in owners),
    )


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestInstanceFromRaw:
    def test_parses_owner_references(self) -> None:
        raw = {
            "apiVersion": "iam.example.com/v1",
            "kind": "IAMRole",
            "metadata": {
                "name": "role-a",
                "namespace": "team-a",
                "ownerReferences": [{"apiVersion": "eks.example.com/v1", "kind": "Nodegroup", "name": "ng"}],
            },
        }
        instance = Instance.from_raw(raw)
        assert instance.kind == "IAMRole"
        assert instance.name == "role-a"
        assert instance.namespace == "team-a"
        assert instance.owner_references == (OwnerReference("eks.example.com/v1", "Nodegroup", "ng"),)

    def test_no_owner_references(self) -> None:
        instance = Instance.from_raw({"kind": "Nodegroup", "metadata": {"name": "ng"}})
        assert instance.owner_references == ()

    def test_missing_kind(self) -> None:
        with pytest.raises(ValueError, match="no kind"):
            Instance.from_raw({"metadata": {"name": "x"}})

    def test_owner_reference_without_api_version(self) -> None:
        raw = {"kind": "IAMRole", "metadata": {"name": "r", "ownerReferences": [{"kind": "Nodegroup"}]}}
        with pytest.raises(ValueError, match=r"ownerReferences\[0\]"):
            Instance.from_raw(raw)

    @pytest.mark.parametrize(
        "ref",
        [
            {"apiVersion": "eks.example.com/v1", "kind": ""},
            {"apiVersion": "", "kind": "Nodegroup"},
        ],
        ids=["empty-kind", "empty-api-version"],
    )
    def test_owner_reference_with_empty_field(self, ref: dict) -> None:
        raw = {"kind": "IAMRole", "metadata": {"name": "r", "ownerReferences": [ref]}}
        with pytest.raises(ValueError, match=r"ownerReferences\[0\] needs non-empty"):
            Instance.from_raw(raw)


class TestOwnerReferenceGroup:
    @pytest.mark.parametrize(
        ("api_version", "group"),
        [
            ("eks.example.com/v1", "eks.example.com"),
            ("apps/v1", "apps"),
            ("v1", ""),
            ("a/b/c", "a"),
        ],
    )
    def test_group(self, api_version: str, group: str) -> None:
        assert OwnerReference(api_version=api_version, kind="X").group == group


# ---------------------------------------------------------------------------
# Ownership map
# ---------------------------------------------------------------------------


class TestBuildOwnershipMap:
    def test_known_group_owner_recorded(self) -> None:
        ownership = build_ownership_map([_instance("IAMRole", ("eks.example.com/v1", "Nodegroup"))], _KNOWN)
        assert ownership == {"IAMRole": frozenset({"Nodegroup"})}

    def test_unknown_group_owner_ignored(self) -> None:
        ownership = build_ownership_map([_instance("IAMRole", ("apps/v1", "Deployment"))], _KNOWN)
        assert ownership == {}

    def test_no_owners_contributes_nothing(self) -> None:
        assert build_ownership_map([_instance("Nodegroup")], _KNOWN) == {}

    def test_duplicate_edges_collapse(self) -> None:
        instances = [
            _instance("Nodegroup", ("eks.example.com/v1", "NodegroupDeployment"), name="a"),
            _instance("Nodegroup", ("eks.example.com/v1alpha1", "NodegroupDeployment"), name="b"),
            _instance("Nodegroup", ("iam.example.com/v1", "IAMPolicy"), name="c"),
        ]
        ownership = build_ownership_map(instances, _KNOWN)
        assert ownership == {"Nodegroup": frozenset({"NodegroupDeployment", "IAMPolicy"})}

    def test_mixed_owners_only_keeps_known(self) -> None:
        instance = _instance(
            "IAMRole",
            ("v1", "ServiceAccount"),
            ("apps/v1", "Deployment"),
            ("eks.example.com/v1", "Nodegroup"),
        )
        assert build_ownership_map([instance], _KNOWN) == {"IAMRole": frozenset({"Nodegroup"})}

    def test_core_group_ignored_even_if_empty_group_known(self) -> None:
        known = _KNOWN | {""}
        instance = _instance("ConfigBundle", ("v1", "ConfigMap"))
        assert build_ownership_map([instance], known) == {}

    @given(
        known=st.frozensets(st.text(max_size=12), max_size=6),
        version=st.text(alphabet=st.characters(exclude_characters="/"), max_size=10),
    )
    def test_owner_without_slash_never_counted(self, known: frozenset[str], version: str) -> None:
        known = known | {"", version}
        instance = _instance("Anything", (version, "CoreKind"))
        assert list(iter_edges([instance], known)) == []
