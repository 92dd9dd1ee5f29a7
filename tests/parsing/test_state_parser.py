from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from tfstate_visualizer.models import Module, Resource
from tfstate_visualizer.parsing import StateFormatError, StateParser, flatten_module

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def _load(name: str) -> Any:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


def _resource(address: str, type_: str = "null_resource", mode: str = "managed") -> dict[str, Any]:
    return {"address": address, "mode": mode, "type": type_, "name": address.rsplit(".", 1)[-1]}


def _all_modules(module: Module) -> list[Module]:
    modules = [module]
    for child in module.child_modules:
        modules.extend(_all_modules(child))
    return modules


def test_parses_nested_state_fixture() -> None:
    state = StateParser().parse(_load("state-nested.json"))

    assert state.format_version == "1.0"
    assert state.terraform_version == "1.6.2"
    assert [resource.address for resource in state.resources] == [
        "aws_s3_bucket.logs",
        "data.aws_caller_identity.current",
        "module.network.aws_vpc.main",
        "module.network.module.subnets.aws_subnet.private",
        "module.database.aws_db_instance.main",
    ]
    assert state.resource_counts == {
        "aws_s3_bucket": 1,
        "data.aws_caller_identity": 1,
        "aws_vpc": 1,
        "aws_subnet": 1,
        "aws_db_instance": 1,
    }
    assert [output.name for output in state.outputs] == ["bucket_name", "db_password"]
    assert state.outputs[1].sensitive is True
    assert state.outputs[1].type == "string"

    root = state.root_module
    assert root.address == ""
    assert root.is_root
    assert [module.address for module in root.child_modules] == [
        "module.network",
        "module.database",
    ]

    network = root.child_modules[0]
    assert network.outputs["vpc_id"].value == "vpc-0abc"
    assert network.total_resource_count == 2
    assert network.child_modules[0].address == "module.network.module.subnets"
    assert root.total_resource_count == 5


def test_resource_fields_are_extracted() -> None:
    state = StateParser().parse(_load("state-nested.json"))
    database = state.resources[-1]

    assert database.mode == "managed"
    assert database.type == "aws_db_instance"
    assert database.name == "main"
    assert database.provider_name == "registry.terraform.io/hashicorp/aws"
    assert database.schema_version == 2
    assert database.values["allocated_storage"] == 20
    assert "password" in database.sensitive_values

    vpc = state.resources[2]
    assert vpc.depends_on == ["aws_s3_bucket.logs"]


def test_flattened_resources_match_module_counts() -> None:
    state = StateParser().parse(_load("state-nested.json"))

    per_module_total = sum(len(module.resources) for module in _all_modules(state.root_module))

    assert len(state.resources) == per_module_total
    assert len(state.resources) == sum(state.resource_counts.values())
    assert len(state.resources) == state.root_module.total_resource_count


def test_non_object_document_raises_format_error() -> None:
    with pytest.raises(StateFormatError, match="invalid state data format"):
        StateParser().parse(_load("state-array.json"))


@pytest.mark.parametrize("raw", [None, "state", 42, True, []])
def test_scalar_documents_are_rejected(raw: Any) -> None:
    with pytest.raises(StateFormatError):
        StateParser().parse(raw)


def test_missing_values_yields_empty_state() -> None:
    state = StateParser().parse(_load("state-no-values.json"))

    assert state.terraform_version == "1.6.2"
    assert state.resources == []
    assert state.outputs == []
    assert state.resource_counts == {}
    assert state.root_module.child_modules == []


def test_empty_object_parses() -> None:
    state = StateParser().parse({})

    assert state.format_version == ""
    assert state.terraform_version == ""
    assert state.resources == []


def test_depth_three_tree_flattens_in_document_order() -> None:
    raw = {
        "values": {
            "root_module": {
                "resources": [_resource("null_resource.root")],
                "child_modules": [
                    {
                        "address": "module.child",
                        "resources": [_resource("module.child.null_resource.child")],
                        "child_modules": [
                            {
                                "address": "module.child.module.grandchild",
                                "resources": [
                                    _resource("module.child.module.grandchild.null_resource.leaf")
                                ],
                            }
                        ],
                    }
                ],
            }
        }
    }

    state = StateParser().parse(raw)

    assert [resource.address for resource in state.resources] == [
        "null_resource.root",
        "module.child.null_resource.child",
        "module.child.module.grandchild.null_resource.leaf",
    ]
    assert state.resource_counts == {"null_resource": 3}


def test_siblings_are_visited_depth_first() -> None:
    raw = {
        "values": {
            "root_module": {
                "child_modules": [
                    {
                        "address": "module.a",
                        "resources": [_resource("module.a.null_resource.one")],
                        "child_modules": [
                            {
                                "address": "module.a.module.inner",
                                "resources": [_resource("module.a.module.inner.null_resource.two")],
                            }
                        ],
                    },
                    {
                        "address": "module.b",
                        "resources": [_resource("module.b.null_resource.three")],
                    },
                ]
            }
        }
    }

    state = StateParser().parse(raw)

    assert [resource.address for resource in state.resources] == [
        "module.a.null_resource.one",
        "module.a.module.inner.null_resource.two",
        "module.b.null_resource.three",
    ]


def test_data_sources_are_counted_separately() -> None:
    raw = {
        "values": {
            "root_module": {
                "resources": [
                    _resource("aws_ami.web", type_="aws_ami"),
                    _resource("data.aws_ami.ubuntu", type_="aws_ami", mode="data"),
                    _resource("data.aws_ami.debian", type_="aws_ami", mode="data"),
                ]
            }
        }
    }

    state = StateParser().parse(raw)

    assert state.resource_counts == {"aws_ami": 1, "data.aws_ami": 2}


def test_wrongly_typed_fields_fall_back_to_defaults() -> None:
    raw = {
        "format_version": 1,
        "terraform_version": ["1.6"],
        "values": {
            "outputs": {
                "ok": {"sensitive": "yes", "value": 3},
                "broken": "not-an-object",
            },
            "root_module": {
                "resources": [
                    "not-a-resource",
                    {
                        "address": 7,
                        "mode": None,
                        "type": "aws_instance",
                        "name": {"nested": True},
                        "provider_name": 3.5,
                        "schema_version": "2",
                        "values": ["a", "b"],
                        "sensitive_values": "password",
                        "depends_on": ["aws_vpc.main", 4, None, "aws_vpc.main"],
                    },
                ],
                "child_modules": {"address": "module.wrong_shape"},
            },
        },
    }

    state = StateParser().parse(raw)

    assert state.format_version == ""
    assert state.terraform_version == ""
    assert len(state.outputs) == 1
    assert state.outputs[0].name == "ok"
    assert state.outputs[0].sensitive is False
    assert state.outputs[0].value == 3

    assert len(state.resources) == 1
    resource = state.resources[0]
    assert resource == Resource(
        type="aws_instance",
        depends_on=["aws_vpc.main", "aws_vpc.main"],
    )
    assert state.root_module.child_modules == []


@pytest.mark.parametrize(
    ("schema_version", "expected"),
    [(3, 3), (2.9, 2), (-1, 0), (True, 0), (None, 0)],
)
def test_schema_version_coercion(schema_version: Any, expected: int) -> None:
    resource = StateParser().parse_resource({"schema_version": schema_version})

    assert resource.schema_version == expected


def test_parse_modules_skips_non_object_entries() -> None:
    modules = StateParser().parse_modules(
        ["module.text", None, {"address": "module.real", "child_modules": [1, 2]}]
    )

    assert [module.address for module in modules] == ["module.real"]
    assert modules[0].child_modules == []


def test_root_module_outputs_are_kept() -> None:
    state = StateParser().parse(
        {"values": {"root_module": {"outputs": {"name": {"value": "x", "type": "string"}}}}}
    )

    assert state.root_module.outputs["name"].value == "x"
    assert state.outputs == []


def test_flatten_module_on_handbuilt_tree() -> None:
    leaf = Module(address="module.a.module.b", resources=[Resource(address="x", type="t")])
    middle = Module(address="module.a", child_modules=[leaf])
    root = Module(resources=[Resource(address="y", type="t", mode="data")], child_modules=[middle])

    resources, counts = flatten_module(root)

    assert [resource.address for resource in resources] == ["y", "x"]
    assert counts == {"data.t": 1, "t": 1}


def test_deep_module_chain_does_not_lose_resources() -> None:
    depth = 200
    node: dict[str, Any] = {"address": f"module.m{depth}", "resources": [_resource("leaf")]}
    for level in range(depth - 1, 0, -1):
        node = {
            "address": f"module.m{level}",
            "resources": [_resource(f"r{level}")],
            "child_modules": [node],
        }

    state = StateParser().parse({"values": {"root_module": {"child_modules": [node]}}})

    assert len(state.resources) == depth
    assert state.resources[0].address == "r1"
    assert state.resources[-1].address == "leaf"
