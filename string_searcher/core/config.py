"""
Configuration management for the string searcher
"""
import os
import json
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from .exceptions import InvalidConfiguration


WILDCARD = "*"


class FileMask(BaseModel):
    """
    Two-segment file name filter (``name.extension``).

    Either segment may be the wildcard ``*``. A non-wildcard segment must
    equal the corresponding part of the file name exactly.
    """
    model_config = ConfigDict(frozen=True)

    name: str = WILDCARD
    extension: str = WILDCARD

    @classmethod
    def parse(cls, mask: Optional[str]) -> "FileMask":
        """
        Parse mask text such as ``*.txt`` or ``report.*``

        Args:
            mask: Mask text; None, empty or a lone ``*`` match everything

        Returns:
            Parsed FileMask

        Raises:
            InvalidConfiguration: If the mask is malformed
        """
        if mask is None or mask.strip() in ("", WILDCARD):
            return cls()

        mask = mask.strip()
        if "/" in mask or "\\" in mask:
            raise InvalidConfiguration(f"Mask must not contain a path separator: '{mask}'")
        if "." not in mask:
            raise InvalidConfiguration(f"Mask must have the form name.extension: '{mask}'")

        name, extension = mask.split(".", 1)
        for segment in (name, extension):
            if not segment:
                raise InvalidConfiguration(f"Mask has an empty segment: '{mask}'")
            if WILDCARD in segment and segment != WILDCARD:
                raise InvalidConfiguration(
                    f"Wildcard must stand alone in a mask segment: '{mask}'"
                )

        return cls(name=name, extension=extension)

    @property
    def matches_everything(self) -> bool:
        return self.name == WILDCARD and self.extension == WILDCARD

    def matches(self, filename: str) -> bool:
        """
        Check a bare file name (no directory part) against the mask

        Args:
            filename: File name to test

        Returns:
            True if the file name passes the mask
        """
        if self.matches_everything:
            return True

        if self.extension == WILDCARD:
            return filename == self.name or filename.startswith(self.name + ".")

        suffix = "." + self.extension
        if not filename.endswith(suffix):
            return False
        if self.name == WILDCARD:
            return True
        return filename[:-len(suffix)] == self.name

    def __str__(self) -> str:
        return f"{self.name}.{self.extension}"


class SearchConfig(BaseModel):
    """Configuration for one search invocation"""
    model_config = ConfigDict(frozen=True)

    pattern: str
    root: str = "."
    file_path: Optional[str] = None
    mask: FileMask = Field(default_factory=FileMask)
    case_insensitive: bool = False
    recursive: bool = False
    max_depth: int = Field(default=0, ge=0)

    @field_validator("pattern")
    @classmethod
    def _pattern_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Search pattern cannot be empty")
        return value

    @field_validator("mask", mode="before")
    @classmethod
    def _parse_mask(cls, value):
        if value is None or isinstance(value, str):
            return FileMask.parse(value)
        return value

    @model_validator(mode="after")
    def _check_mode(self) -> "SearchConfig":
        if not self.recursive:
            if not self.file_path:
                raise ValueError("A file path is required when not searching recursively")
            if WILDCARD in self.file_path:
                raise ValueError(f"File path must not contain a wildcard: '{self.file_path}'")
        return self

    @classmethod
    def create(cls, **kwargs) -> "SearchConfig":
        """
        Build a SearchConfig, reporting any problem as InvalidConfiguration

        Raises:
            InvalidConfiguration: If the arguments do not form a valid search
        """
        try:
            return cls(**kwargs)
        except ValidationError as e:
            messages = "; ".join(error["msg"] for error in e.errors())
            raise InvalidConfiguration(messages) from e


class EngineSettings(BaseModel):
    """Settings for the search engine process"""
    worker_count: Optional[int] = Field(default=None, ge=1)
    log_level: str = "WARNING"
    log_file: Optional[str] = None


class Config(BaseModel):
    """Main configuration class"""
    engine: EngineSettings = Field(default_factory=EngineSettings)

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables"""
        workers = os.getenv("STRING_SEARCH_WORKERS")
        return cls(
            engine=EngineSettings(
                worker_count=int(workers) if workers else None,
                log_level=os.getenv("STRING_SEARCH_LOG_LEVEL", "WARNING"),
                log_file=os.getenv("STRING_SEARCH_LOG_FILE") or None,
            )
        )

    @classmethod
    def load_from_file(cls, file_path: str) -> "Config":
        """Load configuration from JSON file"""
        with open(file_path, 'r') as f:
            data = json.load(f)
        return cls(**data)

    def save_to_file(self, file_path: str) -> None:
        """Save configuration to JSON file"""
        with open(file_path, 'w') as f:
            json.dump(self.model_dump(), f, indent=2)
