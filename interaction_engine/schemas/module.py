from __future__ import annotations

from dataclasses import asdict, dataclass

from interaction_engine import __version__


@dataclass(frozen=True)
class ModuleMetadata:
    title: str                                  # "Basic Interaction Engine"
    author: str
    version: str                                # package version
    description: str                            # one-liner shown by the host

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


ENGINE_METADATA = ModuleMetadata(
    title="Basic Interaction Engine",
    author="Interaction Engine Contributors",
    version=__version__,
    description="Keyword-based intent matching and parameter extraction for registered skills.",
)
