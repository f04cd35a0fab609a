#!/usr/bin/env python3
# src/qiuye_ui/errors.py
"""
Structured error types for the QiuYe UI registry client.

Every error carries enough context (input, URL, status) to be shown to a
human or returned to an MCP client as-is.
"""


class RegistryError(Exception):
    """Base registry error with an optional fix suggestion."""

    def __init__(self, message: str, suggestion: str | None = None):
        self.suggestion = suggestion
        super().__init__(message)

    def to_message(self) -> str:
        """Format the error with suggestion."""
        parts = [str(self)]
        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")
        return " | ".join(parts)


class InvalidNameError(RegistryError, ValueError):
    """Input cannot be normalized to a canonical component name."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Invalid component name: {value!r}",
            suggestion="Use a lowercase kebab-case name such as 'typing-text' or '@qiuye-ui/typing-text'",
        )


class NetworkError(RegistryError):
    """Transport failure or timeout while talking to the registry."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}", suggestion="Check the registry base URL and retry")


class HttpStatusError(RegistryError):
    """The registry answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int, reason: str = "", body: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.body = body
        message = f"HTTP {status_code} {reason}".rstrip() + f" for {url}"
        if body:
            message += f": {body}"
        super().__init__(message)


class MalformedJsonError(RegistryError):
    """The registry response body is not valid JSON."""

    def __init__(self, url: str, detail: str = ""):
        self.url = url
        message = f"Response from {url} is not valid JSON"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class MalformedDocumentError(RegistryError):
    """A local registry document is not valid JSON."""

    def __init__(self, path: str, detail: str = ""):
        self.path = path
        message = f"{path} is not valid JSON"
        if detail:
            message += f" ({detail})"
        super().__init__(message, suggestion="Fix or remove the file and run sync again")


class InvalidIndexError(RegistryError):
    """index.json parsed but is not a JSON array."""

    def __init__(self, url: str, found: str):
        self.url = url
        super().__init__(f"{url} is not a JSON array (got {found})")


class UnsupportedPackageManagerError(RegistryError, ValueError):
    """Package manager is neither npx nor pnpm."""

    def __init__(self, package_manager: str, supported: list[str]):
        self.package_manager = package_manager
        super().__init__(
            f"Unsupported package manager: {package_manager!r}",
            suggestion=f"Use one of: {', '.join(supported)}",
        )


__all__ = [
    "RegistryError",
    "InvalidNameError",
    "NetworkError",
    "HttpStatusError",
    "MalformedJsonError",
    "MalformedDocumentError",
    "InvalidIndexError",
    "UnsupportedPackageManagerError",
]
