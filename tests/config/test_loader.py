"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from calendardate.config.defaults import DEFAULTS, get_default_config
from calendardate.config.loader import ConfigLoader, build_schema_from_definition
from calendardate.errors import ConfigurationError, ErrorKind


@pytest.fixture
def loader(tmp_path, schemas_yaml) -> ConfigLoader:
    """Loader reading the sample schemas.yaml from a temporary directory."""
    (tmp_path / "schemas.yaml").write_text(schemas_yaml)
    return ConfigLoader.create(tmp_path)


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()

        assert config.format.template == "YYYY-MM-DD"
        assert config.format.two_digit_year_pivot == 68
        assert config.validation.trim is False
        assert config.validation.convert is True
        assert config.validation.abort_early is True
        assert config.logging.level == "WARNING"

    def test_defaults_are_frozen(self) -> None:
        """Test that the shared defaults cannot be modified."""
        with pytest.raises(AttributeError):
            DEFAULTS.format.template = "DD/MM/YYYY"


class TestConfigLoader:
    """Test suite for the schema loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader can be created with the default directory."""
        loader = ConfigLoader.create()

        assert isinstance(loader.config_dir, Path)
        assert loader.config_dir.name == "config"

    def test_missing_file(self, tmp_path) -> None:
        """Test that a missing schemas.yaml yields no definitions."""
        loader = ConfigLoader.create(tmp_path)

        assert loader.load_schema_definitions() == {}
        assert loader.load_schema_definition("birthday") == {}

    def test_load_definitions(self, loader) -> None:
        """Test that named definitions are read from YAML."""
        definitions = loader.load_schema_definitions()

        assert set(definitions) == {"birthday", "contract_end", "broken"}
        assert definitions["birthday"]["format"] == "DD/MM/YYYY"

    def test_merge_defaults_only(self, loader) -> None:
        """Test merging for a schema that is not defined."""
        definition = loader.merge_definition("unknown")

        assert definition == {"format": "YYYY-MM-DD", "trim": False, "rules": [], "cast": None}

    def test_merge_file_over_defaults(self, loader) -> None:
        """Test that file values replace defaults and keep the rest."""
        definition = loader.merge_definition("contract_end")

        assert definition["format"] == "YYYY-MM-DD"
        assert definition["cast"] == "number"
        assert definition["rules"] == [{"gt": {"ref": "contract.start"}, "min": "1 year"}]

    def test_merge_overrides_win(self, loader) -> None:
        """Test that per-call overrides replace file values, lists included."""
        definition = loader.merge_definition("birthday", {"trim": False, "rules": [{"past": True}]})

        assert definition["format"] == "DD/MM/YYYY"
        assert definition["trim"] is False
        assert definition["rules"] == [{"past": True}]

    def test_build_schema(self, loader, fixed_clock) -> None:
        """Test building and using a named schema."""
        schema = loader.build_schema("birthday")

        assert schema.config.trim is True
        assert len(schema.config.rules) == 2
        assert schema.validate(" 01/02/1990 ", clock=fixed_clock).value == "1990-02-01"
        assert schema.validate("01/02/1890", clock=fixed_clock).error.code == "calendardate.gt"
        assert schema.validate("29/06/2021", clock=fixed_clock).error.code == "calendardate.lt"

    def test_build_schema_with_reference(self, loader) -> None:
        """Test that {ref: key} entries become external references."""
        schema = loader.build_schema("contract_end")

        ok = schema.validate("2022-07-01", context={"contract": {"start": "2021-06-28"}})
        missing = schema.validate("2022-07-01")

        assert ok.ok
        assert isinstance(ok.value, int)
        assert missing.error.kind == ErrorKind.INVALID_REFERENCE

    def test_build_invalid_schema(self, loader) -> None:
        """Test that invalid definitions raise with every issue attached."""
        with pytest.raises(ConfigurationError, match="Invalid schema definition 'broken'") as exc_info:
            loader.build_schema("broken")

        issues = exc_info.value.context["issues"]
        assert [issue.field for issue in issues] == ["format", "rules[0].gt"]

    def test_build_rejects_disabled_relative_rule(self, loader) -> None:
        """Test that future: false is rejected instead of adding the rule."""
        with pytest.raises(ConfigurationError, match=r"rules\[0\]\.future: Must be true"):
            loader.build_schema("birthday", {"rules": [{"future": False}]})


class TestBuildSchemaFromDefinition:
    """Test suite for building schemas from plain definitions."""

    def test_relative_rules_with_options(self, fixed_clock) -> None:
        """Test future/past rules with duration options."""
        schema = build_schema_from_definition({
            "format": "DD.MM.YYYY",
            "rules": [{"past": True, "min": "18 years"}],
        })

        assert schema.validate("28.06.2003", clock=fixed_clock).ok
        assert schema.validate("29.06.2003", clock=fixed_clock).error.code == "calendardate.min"

    def test_empty_definition(self) -> None:
        """Test that an empty definition gives the default schema."""
        schema = build_schema_from_definition({})

        assert schema.config.format.description == "YYYY-MM-DD"
        assert schema.config.rules == ()
