"""State models produced by the parser and consumed by the report renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ResourceMode(str, Enum):
    """Enumeration of the resource modes found in Terraform state."""

    MANAGED = "managed"
    DATA = "data"


@dataclass(frozen=True, slots=True)
class Resource:
    """A managed resource or data source recorded in Terraform state."""

    address: str = ""
    mode: str = ""
    type: str = ""
    name: str = ""
    provider_name: str = ""
    schema_version: int = 0
    values: Dict[str, Any] = field(default_factory=dict)
    sensitive_values: Dict[str, Any] = field(default_factory=dict)
    depends_on: List[str] = field(default_factory=list)

    @property
    def is_data_source(self) -> bool:
        """Return ``True`` when the resource is a data source lookup."""

        return self.mode == ResourceMode.DATA.value

    @property
    def resource_type_key(self) -> str:
        """Key used to count resources by type, prefixed with ``data.`` for data sources."""

        if self.is_data_source:
            return f"data.{self.type}"
        return self.type


@dataclass(frozen=True, slots=True)
class OutputValue:
    """Output value as recorded inside a module."""

    sensitive: bool = False
    type: Any = None
    value: Any = None


@dataclass(frozen=True, slots=True)
class Output:
    """Root level output, carrying its own name."""

    name: str
    sensitive: bool = False
    type: Any = None
    value: Any = None


@dataclass(frozen=True, slots=True)
class Module:
    """A node of the module tree. The root module has an empty address."""

    address: str = ""
    resources: List[Resource] = field(default_factory=list)
    outputs: Dict[str, OutputValue] = field(default_factory=dict)
    child_modules: List["Module"] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return not self.address

    @property
    def total_resource_count(self) -> int:
        """Resources declared in this module plus those of every descendant."""

        total = 0
        pending = [self]
        while pending:
            module = pending.pop()
            total += len(module.resources)
            pending.extend(module.child_modules)
        return total


@dataclass(frozen=True, slots=True)
class State:
    """Parsed Terraform state with the module tree and its flattened resources."""

    format_version: str = ""
    terraform_version: str = ""
    resources: List[Resource] = field(default_factory=list)
    outputs: List[Output] = field(default_factory=list)
    resource_counts: Dict[str, int] = field(default_factory=dict)
    root_module: Module = field(default_factory=Module)
