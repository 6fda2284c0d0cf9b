import json
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ResolvedRecord:
    """Domain model for a TMDB movie resolved to its Letterboxd film."""

    letterboxd_id: str
    title: str
    description: str
    url: str
    tmdb_id: str

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation, keys in response order."""
        return {
            "letterboxdId": self.letterboxd_id,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "tmdbId": self.tmdb_id,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResolvedRecord":
        """
        Build a record from its wire representation.

        Raises:
            ValueError: If a required key is missing or not a string
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")

        values = {}
        for attr, key in (
            ("letterboxd_id", "letterboxdId"),
            ("title", "title"),
            ("description", "description"),
            ("url", "url"),
            ("tmdb_id", "tmdbId"),
        ):
            value = data.get(key)
            if not isinstance(value, str):
                raise ValueError(f"Invalid or missing field '{key}'")
            values[attr] = value

        if not values["letterboxd_id"] or not values["title"]:
            raise ValueError("Record requires both letterboxdId and title")

        return cls(**values)

    @classmethod
    def from_json(cls, raw: str) -> "ResolvedRecord":
        try:
            data = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid record JSON: {e}") from e
        return cls.from_dict(data)
