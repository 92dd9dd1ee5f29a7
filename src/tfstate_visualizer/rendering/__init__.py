"""HTML rendering of parsed Terraform state."""

from .html_report import HtmlReportRenderer, mode_label, sorted_resource_counts

__all__ = ["HtmlReportRenderer", "mode_label", "sorted_resource_counts"]
