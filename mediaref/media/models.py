from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Literal, TypedDict

# Provenance tags a resolved URL can carry
SOURCES = ("supabase", "external", "local", "fallback")


class Kind(str, Enum):
    """
    Shape of a cleaned reference, decided by the classifier.
    """
    COMPLETE_URL = "complete_url"
    PROTOCOL_RELATIVE = "protocol_relative"
    STORAGE_PATH = "storage_path"
    LOCAL_PATH = "local_path"
    UNKNOWN = "unknown"


class ResolutionResultDict(TypedDict):
    """
    The JSON shape handed to image components and debug overlays.
    """
    url: str
    isValid: bool
    source: Literal["supabase", "external", "local", "fallback"]
    originalInput: str


@dataclass(frozen=True)
class ResolutionResult:
    """
    Outcome of resolving one raw media reference.

    Fields:
        url: Final URL to use as the image source (or the fallback).
        is_valid: False only when url is the fallback.
        source: "supabase", "external", "local" or "fallback".
        original_input: Stringified raw input, for diagnostics.
    """

    url: str
    is_valid: bool
    source: str
    original_input: str

    def __post_init__(self) -> None:
        if self.source not in SOURCES:
            raise ValueError(f"Invalid source: {self.source!r}")

    def to_dict(self) -> ResolutionResultDict:
        d = asdict(self)
        return {
            "url": d["url"],
            "isValid": bool(d["is_valid"]),
            "source": d["source"],
            "originalInput": d["original_input"],
        }

    @classmethod
    def fallback(cls, fallback_url: str, original_input: str) -> "ResolutionResult":
        """
        Convenience constructor for unresolvable input.
        """
        return cls(
            url=fallback_url,
            is_valid=False,
            source="fallback",
            original_input=original_input,
        )
