"""Export JSON schemas for the engine's public models."""

import json
from pathlib import Path

from packpal.engine.models import PackingCategory, PackingListRequest, Trip, WeatherSummary


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    for model in (Trip, PackingCategory, WeatherSummary, PackingListRequest):
        path = schemas_dir / f"{model.__name__}.schema.json"
        with open(path, "w") as f:
            json.dump(model.model_json_schema(), f, indent=2)
        print(f"Exported {model.__name__} schema to {path}")


if __name__ == "__main__":
    main()
