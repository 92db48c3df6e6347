"""Country metadata lookup used to resolve series codes to names and populations."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Mapping, Protocol


@dataclass(frozen=True)
class CountryMeta:
    """Read-only country identity as resolved by a metadata client."""
    code: str
    name: str
    population: float | None = None


class MetadataClient(Protocol):
    def resolve(self, code: str) -> CountryMeta | None: ...


def _load_countries_data():
    """Load bundled country data from JSON file."""
    countries_path = os.path.join(os.path.dirname(__file__), 'countries.json')
    with open(countries_path, 'r') as f:
        return json.load(f)


class JsonMetadataClient:
    """
    Metadata client backed by a mapping of ISO alpha-2 code -> country fields.

    Defaults to the bundled countries.json. Lookups are case-insensitive on the
    code; unknown codes resolve to None.
    """

    def __init__(self, countries: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        countries = _load_countries_data() if countries is None else countries
        self._countries = {code.upper(): fields for code, fields in countries.items()}

    def __contains__(self, code: str) -> bool:
        return code.upper() in self._countries

    def __len__(self) -> int:
        return len(self._countries)

    def resolve(self, code: str) -> CountryMeta | None:
        fields = self._countries.get(code.upper())
        if fields is None:
            return None
        population = fields.get('population')
        return CountryMeta(
            code=code,
            name=fields.get('name', code),
            population=float(population) if population is not None else None,
        )
