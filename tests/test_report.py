"""Tests for rendering path verdicts and rules."""

import yaml

from pathignore.report import build_report, render, rule_to_dict
from pathignore.rules.engine import IgnoreProcessor
from pathignore.rules.rules import create_rule


class TestRuleToDict:
    """Tests for rule_to_dict()."""

    def test_valid_rule(self):
        assert rule_to_dict(create_rule("!/docs/")) == {
            "kind": "DirectoryRule",
            "definition": "!/docs/",
            "pattern": "docs/",
            "negated": True,
        }

    def test_invalid_rule_has_reason(self):
        data = rule_to_dict(create_rule("docs/***"))

        assert data["kind"] == "InvalidRule"
        assert data["reason"] == "The pattern *** is invalid."


class TestBuildReport:
    """Tests for build_report()."""

    def test_results_in_order(self, project_dir):
        processor = IgnoreProcessor(project_dir)

        report = build_report(processor, ["src/build.sh", "build.sh"])

        assert report["results"] == [
            {"path": "src/build.sh", "allowed": True},
            {"path": "build.sh", "allowed": False},
        ]
        assert report["rules"] is None
        assert report["loaded"] is True

    def test_unloaded_processor(self, temp_dir):
        report = build_report(IgnoreProcessor(temp_dir), ["a"], list_rules=True)

        assert report["ignore_file"] is None
        assert report["loaded"] is False
        assert report["rules"] == {"exclusion": [], "inclusion": []}


class TestRender:
    """Tests for render()."""

    def test_text_results(self, project_dir):
        report = build_report(IgnoreProcessor(project_dir), ["build.sh", "docs/UserApi.md"])

        assert render(report) == "ignored\tbuild.sh\nallowed\tdocs/UserApi.md\n"

    def test_text_rules(self, temp_dir):
        processor = IgnoreProcessor.from_text("*.sh\ndocs/***\n!keep.sh\n", temp_dir)

        output = render(build_report(processor, [], list_rules=True), "text")

        lines = output.splitlines()
        assert lines[0] == "Pattern file: (none)"
        assert lines[1] == "Exclusion rules (2):"
        assert lines[2].split() == ["RootedFileRule", "*.sh"]
        assert lines[3].split()[:2] == ["InvalidRule", "docs/***"]
        assert lines[3].endswith("[The pattern *** is invalid.]")
        assert lines[4] == "Inclusion rules (1):"
        assert lines[5].split() == ["RootedFileRule", "!keep.sh"]

    def test_yaml(self, project_dir):
        report = build_report(IgnoreProcessor(project_dir), ["build.sh"], list_rules=True)

        data = yaml.safe_load(render(report, "yaml"))

        assert data["results"] == [{"path": "build.sh", "allowed": False}]
        assert len(data["rules"]["exclusion"]) == 2

    def test_yaml_omits_rules_when_not_listed(self, project_dir):
        report = build_report(IgnoreProcessor(project_dir), ["build.sh"])

        assert "rules" not in yaml.safe_load(render(report, "yaml"))
        assert report["rules"] is None
