"""YAML schema validation and config loading.

Provides centralized validation for configuration files using pydantic:
    - Oracle suite schema (oval_oracle_suite.v1): list of oval bounding boxes,
      optional clip rectangles and golden expectations
    - Logging section shared by the CLI and the CI golden script

All loaders fail fast with actionable messages (path, offending field,
expected range).

Units:
    - All geometry in integer pixels, image frame (top-left origin, +Y down)

Usage:
    from src.utils import validators

    suite = validators.load_oracle_suite("configs/oracle_suite.v1.yaml")
    for case in suite.cases:
        print(case.name, case.x_span, case.y_span)
"""

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# GEOMETRY
# ============================================================================

class RectV1(BaseModel):
    """Integer rectangle (x, y, x_span, y_span); spans may be zero (empty)."""
    x: int = Field(..., description="Left column (px)")
    y: int = Field(..., description="Top row (px)")
    x_span: int = Field(..., ge=0, description="Width (px)")
    y_span: int = Field(..., ge=0, description="Height (px)")


# ============================================================================
# ORACLE SUITE SCHEMA V1
# ============================================================================

class ExpectedV1(BaseModel):
    """Golden expectations for one oracle case; every field is optional."""
    pixel_count: Optional[int] = Field(None, ge=0, description="Exact size of the pixel set")
    extent: Optional[RectV1] = Field(None, description="Bounding box of the pixel set")
    connected: Optional[bool] = Field(None, description="Pixel set forms one 8-connected component")
    sha256: Optional[str] = Field(None, description="hashing.hash_pixel_set() digest")

    @field_validator('sha256')
    @classmethod
    def validate_sha256(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.lower()
        if len(v) != 64 or any(c not in "0123456789abcdef" for c in v):
            raise ValueError(f"sha256 must be 64 hex characters, got: {v!r}")
        return v


class OvalCaseV1(BaseModel):
    """Single oracle invocation: oval bounding box plus optional clip.

    Negative spans are accepted on purpose: the oracle treats them as empty.
    """
    name: str = Field(..., min_length=1, description="Unique case name")
    x: int
    y: int
    x_span: int
    y_span: int
    clip: Optional[RectV1] = Field(None, description="Clip rectangle; omitted means unbounded")
    expected: Optional[ExpectedV1] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if any(c.isspace() for c in v):
            raise ValueError(f"Case name must not contain whitespace, got: {v!r}")
        return v


class RotateV1(BaseModel):
    """Log file rotation, by size or by time."""
    mode: Literal["size", "time"] = Field("size", description="Rotation trigger")
    max_bytes: int = Field(10_000_000, gt=0, description="Size mode: bytes per file")
    when: str = Field("D", description="Time mode: TimedRotatingFileHandler unit")
    interval: int = Field(1, gt=0, description="Time mode: units per file")
    backup_count: int = Field(3, ge=0, description="Rotated files kept")


class LoggingV1(BaseModel):
    """Logging options passed to logging_config.setup_logging()."""
    log_level: str = Field("INFO", description="Root logger level")
    log_file: Optional[str] = Field(None, description="Optional log file path")
    json_format: bool = Field(False, alias="json", description="JSON lines in the log file")
    rotate: Optional[RotateV1] = Field(None, description="Rotation of log_file; omitted means none")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v

    def setup_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for logging_config.setup_logging()."""
        return {
            'log_level': self.log_level,
            'log_file': self.log_file,
            'json': self.json_format,
            'rotate': None if self.rotate is None else self.rotate.model_dump(),
        }


class OracleSuiteV1(BaseModel):
    """Batch of oracle cases (oval_oracle_suite.v1 schema)."""
    schema_version: str = Field("oval_oracle_suite.v1", alias="schema", description="Schema version")
    logging: LoggingV1 = Field(default_factory=LoggingV1)
    cases: List[OvalCaseV1] = Field(..., min_length=1, description="Oracle cases")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "oval_oracle_suite.v1":
            raise ValueError(f"Expected schema 'oval_oracle_suite.v1', got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_unique_names(self) -> 'OracleSuiteV1':
        seen = set()
        for case in self.cases:
            if case.name in seen:
                raise ValueError(f"Duplicate case name: {case.name}")
            seen.add(case.name)
        return self

    def get_case(self, name: str) -> OvalCaseV1:
        for case in self.cases:
            if case.name == name:
                return case
        raise KeyError(f"No case named {name!r}")


# ============================================================================
# LOADERS
# ============================================================================

def load_oracle_suite(path: Union[str, Path]) -> OracleSuiteV1:
    """Load and validate an oracle suite from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to an oval_oracle_suite.v1 YAML file

    Returns
    -------
    OracleSuiteV1
        Validated suite

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Oracle suite not found: {path}")

    data = fs.load_yaml(path)
    return parse_oracle_suite(data, source=str(path))


def parse_oracle_suite(data: Any, source: str = "<dict>") -> OracleSuiteV1:
    """Validate an already-loaded suite mapping."""
    if not isinstance(data, dict):
        raise ValueError(f"Oracle suite at {source} must be a mapping, got {type(data).__name__}")
    try:
        return OracleSuiteV1(**data)
    except Exception as e:
        raise ValueError(f"Oracle suite validation failed at {source}: {e}") from e


def suite_to_dict(suite: OracleSuiteV1) -> Dict[str, Any]:
    """Serialize a suite back to a YAML-ready dict (schema alias kept)."""
    return suite.model_dump(by_alias=True, exclude_none=True)
