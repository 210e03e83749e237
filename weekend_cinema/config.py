"""
Configuration for the catalogue engine.
Settings come from environment variables; the API key is read through a
credential source so the engine never touches ambient storage directly.
"""

import os  # environment-based settings
import sys  # stderr sink for logging
from abc import ABC, abstractmethod  # credential source interface
from typing import Mapping, Optional

from loguru import logger  # console logger
from pydantic import BaseModel, Field  # validated settings model

from .query_compiler import DEFAULT_API_BASE, DEFAULT_LANGUAGE, DEFAULT_MIN_VOTE_COUNT
from .transport import DEFAULT_TIMEOUT_S

# Environment variable names
ENV_API_KEY = "TMDB_API_KEY"
ENV_API_BASE = "TMDB_API_BASE"
ENV_LANGUAGE = "TMDB_LANGUAGE"
ENV_TIMEOUT = "TMDB_TIMEOUT"
ENV_MIN_VOTE_COUNT = "TMDB_MIN_VOTE_COUNT"
ENV_FRESHNESS_YEARS = "TMDB_FRESHNESS_YEARS"
ENV_LOG_LEVEL = "WEEKEND_CINEMA_LOG_LEVEL"


class Settings(BaseModel):
	"""Runtime settings; every field has a working default except the API key."""
	api_key: str = ""
	api_base: str = DEFAULT_API_BASE
	language: str = DEFAULT_LANGUAGE
	timeout: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)
	min_vote_count: int = Field(default=DEFAULT_MIN_VOTE_COUNT, ge=0)
	freshness_years: Optional[int] = Field(default=None, ge=1)
	log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
	"""Read settings from the environment. Raises pydantic.ValidationError on bad numbers."""
	env = os.environ if environ is None else environ
	values = {
		"api_key": env.get(ENV_API_KEY),
		"api_base": env.get(ENV_API_BASE),
		"language": env.get(ENV_LANGUAGE),
		"timeout": env.get(ENV_TIMEOUT),
		"min_vote_count": env.get(ENV_MIN_VOTE_COUNT),
		"freshness_years": env.get(ENV_FRESHNESS_YEARS),
		"log_level": env.get(ENV_LOG_LEVEL),
	}
	# Unset or blank variables fall back to the model defaults
	return Settings(**{k: v.strip() for k, v in values.items() if v is not None and v.strip()})


def configure_logging(level: str = "INFO") -> None:
	"""Replace loguru's default sink with a stderr sink at the given level."""
	logger.remove()
	logger.add(sys.stderr, level=level.upper(), format="{time:HH:mm:ss} | {level: <8} | {message}")


class CredentialSource(ABC):
	"""Supplies the catalogue API key; an empty string means "not configured"."""

	@abstractmethod
	def get_credential(self) -> str:
		pass


class StaticCredentialSource(CredentialSource):
	"""Fixed key, e.g. typed into the settings form or injected by tests."""

	def __init__(self, credential: Optional[str] = ""):
		self.credential = credential or ""

	def get_credential(self) -> str:
		return self.credential

	def set_credential(self, credential: Optional[str]) -> None:
		self.credential = credential or ""


class EnvCredentialSource(CredentialSource):
	"""Reads the key from the environment on every call, so a late export is picked up."""

	def __init__(self, variable: str = ENV_API_KEY, environ: Optional[Mapping[str, str]] = None):
		self.variable = variable
		self._environ = environ

	def get_credential(self) -> str:
		env = os.environ if self._environ is None else self._environ
		return (env.get(self.variable) or "").strip()
