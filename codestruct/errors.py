from __future__ import annotations

from typing import Optional


class AnalysisError(Exception):
	"""Raised when analysis of a single file fails.

	``stage`` names where it failed: ``read``, ``classify``, ``parse`` or
	``extract``. The original diagnostic is kept in ``message``.
	"""

	def __init__(
		self,
		message: str,
		stage: str = "extract",
		language: Optional[str] = None,
		path: Optional[str] = None,
	) -> None:
		self.message = message
		self.stage = stage
		self.language = language
		self.path = path
		super().__init__(self.__str__())

	def __str__(self) -> str:
		context = [self.stage]
		if self.language:
			context.append(self.language)
		if self.path:
			context.append(self.path)
		return f"[{', '.join(context)}] {self.message}"


class ParseError(AnalysisError):
	"""The grammar tree could not be built without errors."""

	def __init__(
		self,
		message: str,
		line: Optional[int] = None,
		column: Optional[int] = None,
		language: Optional[str] = None,
		path: Optional[str] = None,
	) -> None:
		self.line = line
		self.column = column
		super().__init__(message, stage="parse", language=language, path=path)


class UnsupportedLanguageError(AnalysisError):
	def __init__(self, path: str) -> None:
		super().__init__(
			f"Unsupported file type: {path}",
			stage="classify",
			language="unknown",
			path=path,
		)
