"""Conversion helpers that turn ``terraform show -json`` state into service models."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from ..models import Module, Output, OutputValue, Resource, State
from .fields import (
    any_field,
    bool_field,
    list_field,
    mapping_field,
    non_negative_int_field,
    string_field,
    string_items,
)

logger = logging.getLogger(__name__)


class StateFormatError(RuntimeError):
    """Raised when the state document is not a JSON object."""


class StateParser:
    """Parse Terraform state JSON into a :class:`State` model.

    Only a top-level value that is not an object is rejected. Any nested field
    that is missing or of an unexpected type keeps its empty default so newer
    or older state formats still produce a report.
    """

    def parse(self, raw: Any) -> State:
        """Return the parsed state for the supplied decoded JSON document."""

        if not isinstance(raw, Mapping):
            raise StateFormatError("invalid state data format")

        values = mapping_field(raw, "values")
        outputs = self._parse_outputs(mapping_field(values, "outputs"))
        root_module = self.parse_root_module(mapping_field(values, "root_module"))
        resources, resource_counts = flatten_module(root_module)

        logger.debug(
            "Parsed state with %d resources, %d outputs and %d child modules",
            len(resources),
            len(outputs),
            len(root_module.child_modules),
        )

        return State(
            format_version=string_field(raw, "format_version"),
            terraform_version=string_field(raw, "terraform_version"),
            resources=resources,
            outputs=outputs,
            resource_counts=resource_counts,
            root_module=root_module,
        )

    # ------------------------------------------------------------------
    def parse_root_module(self, data: Mapping[str, Any]) -> Module:
        return Module(
            address="",
            resources=self.parse_resources(list_field(data, "resources")),
            outputs=self._parse_output_values(mapping_field(data, "outputs")),
            child_modules=self.parse_modules(list_field(data, "child_modules")),
        )

    def parse_modules(self, modules: Iterable[Any]) -> List[Module]:
        """Recursively parse a ``child_modules`` array, skipping non-object entries."""

        parsed: List[Module] = []
        for entry in modules:
            if not isinstance(entry, Mapping):
                logger.debug("Skipping module entry of type %s", type(entry).__name__)
                continue

            parsed.append(
                Module(
                    address=string_field(entry, "address"),
                    resources=self.parse_resources(list_field(entry, "resources")),
                    outputs=self._parse_output_values(mapping_field(entry, "outputs")),
                    child_modules=self.parse_modules(list_field(entry, "child_modules")),
                )
            )
        return parsed

    def parse_resources(self, resources: Iterable[Any]) -> List[Resource]:
        parsed: List[Resource] = []
        for entry in resources:
            if not isinstance(entry, Mapping):
                logger.debug("Skipping resource entry of type %s", type(entry).__name__)
                continue
            parsed.append(self.parse_resource(entry))
        return parsed

    def parse_resource(self, data: Mapping[str, Any]) -> Resource:
        return Resource(
            address=string_field(data, "address"),
            mode=string_field(data, "mode"),
            type=string_field(data, "type"),
            name=string_field(data, "name"),
            provider_name=string_field(data, "provider_name"),
            schema_version=non_negative_int_field(data, "schema_version"),
            values=mapping_field(data, "values"),
            sensitive_values=mapping_field(data, "sensitive_values"),
            depends_on=string_items(list_field(data, "depends_on")),
        )

    # ------------------------------------------------------------------
    def _parse_outputs(self, outputs: Mapping[str, Any]) -> List[Output]:
        return [
            Output(
                name=name,
                sensitive=value.sensitive,
                type=value.type,
                value=value.value,
            )
            for name, value in self._parse_output_values(outputs).items()
        ]

    def _parse_output_values(self, outputs: Mapping[str, Any]) -> Dict[str, OutputValue]:
        parsed: Dict[str, OutputValue] = {}
        for name, entry in outputs.items():
            if not isinstance(entry, Mapping):
                logger.debug("Skipping output %r of type %s", name, type(entry).__name__)
                continue
            parsed[str(name)] = OutputValue(
                sensitive=bool_field(entry, "sensitive"),
                type=any_field(entry, "type"),
                value=any_field(entry, "value"),
            )
        return parsed


def flatten_module(module: Module) -> Tuple[List[Resource], Dict[str, int]]:
    """Fold a module tree into its resources and per-type counts.

    Resources are visited depth-first: a module's own resources first, then
    each child module in declaration order.
    """

    resources: List[Resource] = []
    counts: Dict[str, int] = {}

    pending: List[Module] = [module]
    while pending:
        current = pending.pop()
        for resource in current.resources:
            resources.append(resource)
            key = resource.resource_type_key
            counts[key] = counts.get(key, 0) + 1
        pending.extend(reversed(current.child_modules))

    return resources, counts


__all__ = ["StateFormatError", "StateParser", "flatten_module"]
