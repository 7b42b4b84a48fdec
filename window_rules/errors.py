from pathlib import Path


class WindowRulesError(Exception):
    """Base user-facing application error."""


class RuleFileError(WindowRulesError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingRuleFileError(RuleFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing rules file")


class InvalidJsonFormatError(RuleFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidRuleFileSchemaError(RuleFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid rules file schema ({detail})")


class RuleFileWriteError(RuleFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot write rules file ({detail})")
