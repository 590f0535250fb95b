from __future__ import annotations


class DdbCodegenError(Exception):
    pass


class ValidationError(DdbCodegenError):
    pass


class ConfigurationError(DdbCodegenError):
    pass


class AwsError(DdbCodegenError):
    def __init__(self, *, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
