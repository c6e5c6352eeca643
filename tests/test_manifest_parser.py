"""Tests for dependency manifest parsers."""

import pytest

from code_context.exceptions import ManifestParseError
from code_context.parser.manifest_parser import parse_go_mod, parse_package_json, parse_requirements


class TestParseRequirements:
    def test_pins_comments_and_unconstrained(self):
        content = "flask==2.0\n# comment\nrequests\n"
        assert parse_requirements(content) == {"flask": "2.0", "requests": "latest"}

    def test_operators(self):
        content = "django>=4.2\nnumpy~=1.26\npydantic<3\n\n   \n"
        assert parse_requirements(content) == {
            "django": "4.2",
            "numpy": "1.26",
            "pydantic": "3",
        }

    def test_splits_only_once(self):
        assert parse_requirements("flask>=2.0,<3\n") == {"flask": "2.0,<3"}

    def test_empty(self):
        assert parse_requirements("") == {}


class TestParsePackageJson:
    def test_surfaces_both_sections(self):
        content = '{"name": "app", "dependencies": {"react": "18.0.0"}, "devDependencies": {"jest": "^29"}}'
        assert parse_package_json(content) == {
            "dependencies": {"react": "18.0.0"},
            "devDependencies": {"jest": "^29"},
        }

    def test_missing_sections(self):
        assert parse_package_json('{"name": "app"}') == {"dependencies": {}, "devDependencies": {}}

    def test_malformed(self):
        with pytest.raises(ManifestParseError):
            parse_package_json("{not json")

    def test_non_object(self):
        with pytest.raises(ManifestParseError):
            parse_package_json("[1, 2]")


class TestParseGoMod:
    def test_require_block(self):
        content = (
            "module example.com/app\n"
            "\n"
            "go 1.21\n"
            "\n"
            "require (\n"
            "\tgithub.com/gin-gonic/gin v1.9.1\n"
            "\t// indirect deps below\n"
            "\tgolang.org/x/text v0.14.0 // indirect\n"
        )
        assert parse_go_mod(content) == {
            "github.com/gin-gonic/gin": "v1.9.1",
            "golang.org/x/text": "v0.14.0",
        }

    def test_module_and_go_lines_outside_block_ignored(self):
        assert parse_go_mod("module example.com/app\ngo 1.21\n") == {}

    def test_single_line_require_is_not_parsed(self):
        assert parse_go_mod("module m\nrequire github.com/pkg/errors v0.9.1\n") == {}

    def test_brace_closes_block(self):
        content = "require (\n\ta v1\n}\nb v2\n"
        assert parse_go_mod(content) == {"a": "v1"}
