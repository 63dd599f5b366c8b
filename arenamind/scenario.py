"""
Scenario loading for JSON-defined arena snapshots.

This module provides ScenarioLoader for converting JSON scenario files into a
WorldSnapshot ready for a day pass, plus ``load_item_catalog`` for the item
definitions file.

Scenario file structure:
```json
{
  "name": "Cornucopia opening",
  "description": "...",
  "seed": 42,
  "day": 1,
  "staging_area_id": 1,
  "areas": [
    {"id": 1, "biome": "plains", "threat_class": "neutral",
     "ground_items": [{"def_id": "knife"}], "noise_level": "noisy"}
  ],
  "adjacency": {"1": [2, 3], "2": [1], "3": [1]},
  "player": {"id": "player", "area_id": 1, "district": 12},
  "npcs": [
    {"id": "npc_1", "area_id": 1, "district": 1, "attributes": {"F": 3}}
  ]
}
```

NPCs are listed in registry order; the list order becomes the processing
order of the day pass.

Usage:
    loader = ScenarioLoader()
    world = loader.load("cornucopia")
    catalog = load_item_catalog(Config.ITEMS_PATH)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config
from .items import ItemCatalog
from .schemas import Actor, Area, Entities, GameMap, WorldMeta, WorldSnapshot


class ScenarioLoader:
    """Load and validate arena scenarios from JSON files.

    Directory structure:
    - Default: {PROJECT_ROOT}/examples/scenarios/
    - Override via constructor: ScenarioLoader(Path("/custom/scenarios"))
    - Scenario files: {scenario_name}.json

    Validation:
    - Required fields: name, seed, areas, npcs
    - Area ids and NPC ids must be unique
    - Every actor must stand in a declared area
    - Raises ValueError if validation fails
    """

    def __init__(self, scenarios_dir: Optional[Path] = None):
        """Initialize scenario loader.

        Args:
            scenarios_dir: Directory containing scenario files.
                          Defaults to {PROJECT_ROOT}/examples/scenarios
        """
        self.scenarios_dir = scenarios_dir or (Config.EXAMPLES_DIR / "scenarios")

    def load(self, scenario_name: str) -> WorldSnapshot:
        """Load a scenario by name from JSON file.

        Args:
            scenario_name: Name of scenario (without .json extension)

        Returns:
            Day-start WorldSnapshot

        Raises:
            FileNotFoundError: If scenario file doesn't exist in scenarios_dir
            ValueError: If scenario JSON is missing required fields or inconsistent
            json.JSONDecodeError: If file contains invalid JSON
        """
        scenario_path = self.scenarios_dir / f"{scenario_name}.json"

        if not scenario_path.exists():
            raise FileNotFoundError(
                f"Scenario '{scenario_name}' not found at {scenario_path}"
            )

        data = json.loads(scenario_path.read_text())
        return self.build(data)

    def build(self, data: Dict[str, Any]) -> WorldSnapshot:
        """Validate raw scenario data and build the snapshot."""
        self._validate_scenario(data)

        game_map = self._parse_map(data)

        npcs: Dict[str, Actor] = {}
        for npc_data in data["npcs"]:
            npc = Actor.model_validate(npc_data)
            npcs[npc.id] = npc

        player = None
        if data.get("player"):
            player = Actor.model_validate(data["player"])

        for actor in ([player] if player else []) + list(npcs.values()):
            if actor.area_id not in game_map.areas_by_id:
                raise ValueError(
                    f"Actor '{actor.id}' stands in undeclared area {actor.area_id}"
                )

        return WorldSnapshot(
            meta=WorldMeta(seed=data["seed"], day=data.get("day", 1)),
            map=game_map,
            entities=Entities(player=player, npcs=npcs),
        )

    def _validate_scenario(self, data: Dict) -> None:
        """Validate scenario data has required fields.

        Raises:
            ValueError: If required fields are missing or ids collide
        """
        required = ["name", "seed", "areas", "npcs"]
        missing = [field for field in required if field not in data]

        if missing:
            raise ValueError(f"Scenario missing required fields: {missing}")

        area_ids = [area.get("id") for area in data["areas"]]
        if len(set(area_ids)) != len(area_ids):
            raise ValueError("Scenario area ids must be unique")

        npc_ids = [npc.get("id") for npc in data["npcs"]]
        if len(set(npc_ids)) != len(npc_ids):
            raise ValueError("Scenario NPC ids must be unique")

    def _parse_map(self, data: Dict[str, Any]) -> GameMap:
        areas: Dict[int, Area] = {}
        for area_data in data["areas"]:
            area = Area.model_validate(area_data)
            areas[area.id] = area

        # JSON object keys are strings; neighbors may be ints or numeric strings
        adjacency: Dict[int, List[int]] = {}
        for key, neighbors in data.get("adjacency", {}).items():
            if isinstance(neighbors, (list, tuple)):
                adjacency[int(key)] = [int(n) for n in neighbors]
            else:
                adjacency[int(key)] = []

        return GameMap(
            areas_by_id=areas,
            adj_by_id=adjacency,
            staging_area_id=data.get("staging_area_id", Config.STAGING_AREA_ID),
        )

    def list_scenarios(self) -> List[str]:
        """List all available scenario files.

        Returns:
            List of scenario names (without .json extension)
        """
        if not self.scenarios_dir.exists():
            return []

        return [
            f.stem for f in self.scenarios_dir.glob("*.json")
            if not f.name.startswith("_")
        ]


def load_item_catalog(path: Optional[Path] = None) -> ItemCatalog:
    """Load item definitions (``{key: definition}`` JSON) into an ItemCatalog.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If an entry is not an object or fails validation
    """
    items_path = Path(path or Config.ITEMS_PATH)
    if not items_path.exists():
        raise FileNotFoundError(f"Item catalog not found at {items_path}")
    return ItemCatalog.from_json(items_path)


def load_scenario(scenario_name: str) -> WorldSnapshot:
    """Convenience function to load a scenario from the default directory."""
    loader = ScenarioLoader()
    return loader.load(scenario_name)
