"""codesync - keeps a shared VS Code workspace file in sync with a source tree."""

__version__ = "0.1.0"
