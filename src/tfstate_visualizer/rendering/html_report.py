"""HTML report rendering for parsed Terraform state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Tuple

from jinja2 import Environment, PackageLoader, select_autoescape

from ..models import Module, Output, Resource, ResourceMode, State
from ..sensitivity import SensitivityClassifier, format_value, mask_value
from ..settings import ReportSettings

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "report.html.j2"

_MODE_LABELS = {
    ResourceMode.MANAGED.value: "Managed",
    ResourceMode.DATA.value: "Data Source",
}


def mode_label(mode: str) -> str:
    """Human readable label for a resource mode."""

    if mode in _MODE_LABELS:
        return _MODE_LABELS[mode]
    return " ".join(word[:1].upper() + word[1:] for word in mode.split(" "))


def sorted_resource_counts(state: State) -> List[Tuple[str, int]]:
    return sorted(state.resource_counts.items())


@dataclass(slots=True)
class AttributeView:
    key: str
    text: str
    sensitive: bool = False


@dataclass(slots=True)
class ResourceView:
    address: str
    mode_label: str
    css_class: str
    type: str
    provider_name: str
    schema_version: int
    attributes: List[AttributeView] = field(default_factory=list)
    depends_on: List[str] = field(default_factory=list)


@dataclass(slots=True)
class OutputView:
    name: str
    type_text: str
    value_text: str
    sensitive: bool


@dataclass(slots=True)
class ModuleView:
    address: str
    depth: int
    total_resources: int
    resources: List[ResourceView] = field(default_factory=list)
    outputs: List[AttributeView] = field(default_factory=list)


class HtmlReportRenderer:
    """Render a :class:`State` into a self-contained HTML document."""

    def __init__(
        self,
        *,
        settings: ReportSettings | None = None,
        classifier: SensitivityClassifier | None = None,
        environment: Environment | None = None,
    ) -> None:
        self.settings = settings or ReportSettings()
        self.classifier = classifier or SensitivityClassifier(
            self.settings.extra_sensitive_keywords
        )
        self._environment = environment or Environment(
            loader=PackageLoader("tfstate_visualizer", "rendering/templates"),
            autoescape=select_autoescape(["html", "xml", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    # ------------------------------------------------------------------
    def render(self, state: State) -> str:
        """Return the full HTML document for ``state``."""

        template = self._environment.get_template(TEMPLATE_NAME)
        html = template.render(
            title=self.settings.title,
            state=state,
            resource_counts=sorted_resource_counts(state),
            resources=[self._resource_view(resource) for resource in state.resources],
            outputs=[self._output_view(output) for output in state.outputs],
            module_count=len(state.root_module.child_modules),
            modules=self._module_rows(state.root_module),
        )
        logger.debug("Rendered HTML report with %d characters", len(html))
        return html

    # ------------------------------------------------------------------
    def _resource_view(self, resource: Resource) -> ResourceView:
        attributes: List[AttributeView] = []
        for key, value in resource.values.items():
            text, sensitive = self.classifier.display_value(key, value, resource.sensitive_values)
            attributes.append(AttributeView(key=key, text=text, sensitive=sensitive))

        return ResourceView(
            address=resource.address,
            mode_label=mode_label(resource.mode),
            css_class="data" if resource.is_data_source else "managed",
            type=resource.type,
            provider_name=resource.provider_name,
            schema_version=resource.schema_version,
            attributes=attributes,
            depends_on=list(resource.depends_on),
        )

    def _output_view(self, output: Output) -> OutputView:
        return OutputView(
            name=output.name,
            type_text=format_value(output.type),
            value_text=_output_text(output.value, output.sensitive),
            sensitive=output.sensitive,
        )

    def _module_rows(self, root: Module) -> List[ModuleView]:
        """Return the child modules of ``root`` depth-first, each tagged with its depth."""

        rows: List[ModuleView] = []
        pending: List[Tuple[Module, int]] = [(child, 0) for child in reversed(root.child_modules)]
        while pending:
            module, depth = pending.pop()
            rows.append(self._module_view(module, depth))
            pending.extend((child, depth + 1) for child in reversed(module.child_modules))
        return rows

    def _module_view(self, module: Module, depth: int) -> ModuleView:
        return ModuleView(
            address=module.address,
            depth=depth,
            total_resources=module.total_resource_count,
            resources=[self._resource_view(resource) for resource in module.resources],
            outputs=_module_output_views(module.outputs),
        )


def _output_text(value: Any, sensitive: bool) -> str:
    if sensitive:
        return mask_value(value)
    return format_value(value)


def _module_output_views(outputs: Mapping[str, Any]) -> List[AttributeView]:
    return [
        AttributeView(
            key=name,
            text=_output_text(output.value, output.sensitive),
            sensitive=output.sensitive,
        )
        for name, output in outputs.items()
    ]


__all__ = [
    "AttributeView",
    "HtmlReportRenderer",
    "ModuleView",
    "OutputView",
    "ResourceView",
    "mode_label",
    "sorted_resource_counts",
]
