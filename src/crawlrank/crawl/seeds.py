"""Seed manifests: JSON files naming the start URLs of a crawl."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from crawlrank.errors import SeedNotConfiguredError


class SeedManifest(BaseModel):
    """Contents of a seed manifest file.

    Besides the seed URLs a manifest may describe the expected size of the
    network and a reference query with its expected result URLs.
    """

    model_config = ConfigDict(populate_by_name=True)

    seed_urls: list[str] = Field(alias="Seed-URLs", min_length=1)
    """URLs the crawl starts from."""

    num_websites: int | None = Field(default=None, alias="Num-Websites")
    """Number of pages reachable from the seeds, if known."""

    num_links: int | None = Field(default=None, alias="Num-Links")
    """Number of links on those pages, if known."""

    query_tokens: list[str] = Field(default_factory=list, alias="Query-Token")
    """Tokens of a reference query."""

    query_urls: list[str] = Field(default_factory=list, alias="Query-URLs")
    """URLs the reference query is expected to find."""


def load_seed_manifest(path: str | Path) -> SeedManifest:
    """Load and validate a seed manifest.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed manifest.

    Raises:
        SeedNotConfiguredError: If the file cannot be read or has no seeds.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return SeedManifest.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise SeedNotConfiguredError(
            f"invalid seed manifest {path}: {e}", component="SeedManifest"
        ) from e
