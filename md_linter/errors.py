from pathlib import Path


class LintError(Exception):
    """Base user-facing linter error."""


class StructuredValueError(LintError):
    """A frontmatter value could not be read in the expected encoding."""

    def __init__(self, message: str, value: str | None = None) -> None:
        self.message = message
        self.value = value
        super().__init__(message)


class RuleFailedError(LintError):
    def __init__(self, rule_name: str, message: str, cause: BaseException) -> None:
        self.rule_name = rule_name
        self.message = message
        self.cause = cause
        super().__init__(message)


class DuplicateRuleAliasError(LintError):
    def __init__(self, alias: str, existing: str, duplicate: str) -> None:
        self.alias = alias
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f'Rule "{duplicate}" has the same alias as "{existing}": {alias}'
        )


class OptionValueError(LintError):
    def __init__(self, option_key: str, value: object, detail: str) -> None:
        self.option_key = option_key
        self.value = value
        self.detail = detail
        super().__init__(f"Invalid value for option {option_key!r} ({detail}): {value!r}")


class SettingsFileError(LintError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingSettingsFileError(SettingsFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing settings file")


class InvalidSettingsFormatError(SettingsFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidSettingsSchemaError(SettingsFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid settings schema ({detail})")
