"""Tests for CRD-name projection and output formatting."""

from __future__ import annotations

import pytest

from crdorder.output import DEFAULT_FLAG_NAME, format_order, project_crd_names

_KIND_TO_CRD = {
    "IAMRole": "iamroles.iam.example.com",
    "Nodegroup": "nodegroups.eks.example.com",
    "NodegroupDeployment": "nodegroupdeployments.eks.example.com",
}


class TestProjectCRDNames:
    def test_maps_kinds_in_order(self) -> None:
        assert project_crd_names(["IAMRole", "Nodegroup"], _KIND_TO_CRD) == [
            "iamroles.iam.example.com",
            "nodegroups.eks.example.com",
        ]

    def test_empty_order_emits_default_order_only(self) -> None:
        default = ("namespaces", "serviceaccounts", "customresourcedefinitions")
        assert project_crd_names([], _KIND_TO_CRD, default_order=default) == list(default)

    def test_unmapped_kinds_dropped(self) -> None:
        ordered = ["IAMRole", "Deployment", "Nodegroup", "ConfigMap"]
        projected = project_crd_names(ordered, _KIND_TO_CRD)
        assert projected == ["iamroles.iam.example.com", "nodegroups.eks.example.com"]
        assert len(projected) == len(ordered) - 2

    def test_default_order_prefix(self) -> None:
        projected = project_crd_names(["Nodegroup"], _KIND_TO_CRD, default_order=["namespaces"])
        assert projected == ["namespaces", "nodegroups.eks.example.com"]

    def test_include_unowned_appends_remaining_crds_sorted(self) -> None:
        projected = project_crd_names(["Nodegroup"], _KIND_TO_CRD, include_unowned=True)
        assert projected == [
            "nodegroups.eks.example.com",
            "iamroles.iam.example.com",
            "nodegroupdeployments.eks.example.com",
        ]


class TestFormatOrder:
    def test_plain(self) -> None:
        assert format_order(["a", "b", "c"]) == "a,b,c"

    def test_separator(self) -> None:
        assert format_order(["a", "b"], separator=", ") == "a, b"

    @pytest.mark.parametrize("flag", [DEFAULT_FLAG_NAME, f"--{DEFAULT_FLAG_NAME}"])
    def test_flag(self, flag: str) -> None:
        assert format_order(["a", "b"], flag_name=flag) == "--restore-resource-priorities=a,b"

    def test_empty_with_flag(self) -> None:
        assert format_order([], flag_name="x") == "--x="
