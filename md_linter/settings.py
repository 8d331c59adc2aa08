import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable

from jsonschema import Draft202012Validator

from md_linter.constants import ENABLED_OPTION_KEY, SETTINGS_DIRNAME, SETTINGS_FILENAME
from md_linter.errors import (
    InvalidSettingsFormatError,
    InvalidSettingsSchemaError,
    MissingSettingsFileError,
)
from md_linter.models import ArrayFormat, RuleDescriptor

logger = logging.getLogger(__name__)


SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "rule_configs": {
            "type": "object",
            "additionalProperties": {"type": "object"},
        },
        "disabled_rules": {
            "type": "array",
            "items": {"type": "string"},
        },
        "common_styles": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "alias_array_style": {
                    "type": "string",
                    "enum": [item.value for item in ArrayFormat],
                },
                "minimum_number_of_dollar_signs_to_be_a_math_block": {
                    "type": "integer",
                    "minimum": 2,
                },
                "escape_character": {"type": "string", "enum": ['"', "'"]},
            },
        },
    },
}


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


def default_settings_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    root = Path(config_home) if config_home else Path.home() / ".config"
    return root / SETTINGS_DIRNAME / SETTINGS_FILENAME


@dataclass(frozen=True)
class CommonStyles:
    """Styles shared by several rules."""

    alias_array_style: ArrayFormat = ArrayFormat.MULTI_LINE
    minimum_number_of_dollar_signs_to_be_a_math_block: int = 2
    escape_character: str = '"'

    def as_rule_options(self) -> dict[str, Any]:
        return {
            "alias_array_style": self.alias_array_style,
            "minimum_number_of_dollar_signs_to_be_a_math_block": (
                self.minimum_number_of_dollar_signs_to_be_a_math_block
            ),
            "default_escape_character": self.escape_character,
        }


@dataclass(frozen=True)
class LinterSettings:
    rule_configs: dict[str, dict[str, Any]] = field(default_factory=dict)
    disabled_rules: list[str] = field(default_factory=list)
    common_styles: CommonStyles = field(default_factory=CommonStyles)

    def rule_config(self, rule: RuleDescriptor) -> dict[str, Any] | None:
        by_name = self.rule_configs.get(rule.name)
        by_alias = self.rule_configs.get(rule.alias)
        if by_name is None and by_alias is None:
            return None
        return {**(by_name or {}), **(by_alias or {})}

    def with_enabled(self, names: Iterable[str]) -> "LinterSettings":
        configs = {key: dict(value) for key, value in self.rule_configs.items()}
        for name in names:
            configs.setdefault(name, {})[ENABLED_OPTION_KEY] = True
        return replace(self, rule_configs=configs)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "LinterSettings":
        styles = dict(payload.get("common_styles", {}))
        if "alias_array_style" in styles:
            styles["alias_array_style"] = ArrayFormat(styles["alias_array_style"])
        return cls(
            rule_configs={
                key: dict(value)
                for key, value in payload.get("rule_configs", {}).items()
            },
            disabled_rules=list(payload.get("disabled_rules", [])),
            common_styles=CommonStyles(**styles),
        )


class SettingsRepository:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_settings_path()
        self._validator = Draft202012Validator(SETTINGS_SCHEMA)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> LinterSettings:
        if not self.path.exists():
            raise MissingSettingsFileError(self.path)
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise InvalidSettingsFormatError(self.path, exc.msg) from exc

        error = next(iter(self._validator.iter_errors(payload)), None)
        if error is not None:
            raise InvalidSettingsSchemaError(self.path, format_schema_error(error))

        logger.debug("Loaded settings from %s", self.path)
        return LinterSettings.from_dict(payload)

    def load_or_default(self) -> LinterSettings:
        if not self.path.exists():
            logger.debug("No settings file at %s, using defaults", self.path)
            return LinterSettings()
        return self.load()
