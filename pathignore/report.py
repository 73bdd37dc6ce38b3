#!/usr/bin/env python3
"""Rendering of path verdicts and parsed rules.

This module renders CLI output in two formats:
- text: a Jinja2 template, one line per path and per rule
- yaml: a YAML document of the same data

Example:
    >>> report = build_report(processor, ["build.sh"], list_rules=True)
    >>> print(render(report, "text"))
"""

from typing import Any, Dict, Iterable, List

import jinja2
import yaml

from pathignore.rules.engine import IgnoreProcessor
from pathignore.rules.rules import InvalidRule, Rule

TEXT_TEMPLATE = """\
{% for result in results %}
{{ "allowed" if result.allowed else "ignored" }}\t{{ result.path }}
{% endfor %}
{% if rules is not none %}
Pattern file: {{ ignore_file or "(none)" }}
{% for title, key in [("Exclusion rules", "exclusion"), ("Inclusion rules", "inclusion")] %}
{{ title }} ({{ rules[key]|length }}):
{% for rule in rules[key] %}
  {{ "%-15s"|format(rule.kind) }} {{ rule.definition }}{{ "  [" ~ rule.get("reason") ~ "]" if rule.get("reason") else "" }}
{% endfor %}
{% endfor %}
{% endif %}
"""

_environment = jinja2.Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
)


def rule_to_dict(rule: Rule) -> Dict[str, Any]:
    """Describe a rule as plain data."""
    data: Dict[str, Any] = {
        "kind": type(rule).__name__,
        "definition": rule.definition,
        "pattern": rule.pattern,
        "negated": rule.negated,
    }
    if isinstance(rule, InvalidRule):
        data["reason"] = rule.reason
    return data


def build_report(
    processor: IgnoreProcessor, paths: Iterable[str], list_rules: bool = False
) -> Dict[str, Any]:
    """Evaluate paths and collect the data to render.

    Args:
        processor: Loaded processor
        paths: Paths to evaluate, as given by the user
        list_rules: Whether to include the parsed rules

    Returns:
        Report dictionary
    """
    results: List[Dict[str, Any]] = [
        {"path": str(path), "allowed": processor.allowed(path)} for path in paths
    ]
    report: Dict[str, Any] = {
        "ignore_file": str(processor.ignore_file) if processor.ignore_file else None,
        "loaded": processor.loaded,
        "results": results,
        "rules": None,
    }
    if list_rules:
        report["rules"] = {
            "exclusion": [rule_to_dict(rule) for rule in processor.exclusion_rules],
            "inclusion": [rule_to_dict(rule) for rule in processor.inclusion_rules],
        }
    return report


def render(report: Dict[str, Any], output_format: str = "text") -> str:
    """Render a report.

    Args:
        report: Report from ``build_report``
        output_format: "text" or "yaml"

    Returns:
        Rendered output
    """
    if output_format == "yaml":
        data = dict(report)
        if data["rules"] is None:
            del data["rules"]
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)

    template = _environment.from_string(TEXT_TEMPLATE)
    return template.render(**report)
