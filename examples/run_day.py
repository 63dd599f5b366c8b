"""
Run NPC decision passes over the example cornucopia scenario.

The scenario's seed is replaced by ARENAMIND_DEFAULT_SEED so other openings
can be explored without editing the JSON. The world is not advanced between
days (that is the turn executor's job), so later days show how memory alone
changes the decisions.

RUN:
    ARENAMIND_VERBOSE=true python -m examples.run_day [days]
"""

import sys

from arenamind import DecisionEngine, ScenarioLoader, load_item_catalog
from arenamind.config import Config


def main(days: int = 1) -> None:
    Config.validate()
    print(Config.display())
    print()

    world = ScenarioLoader().load("cornucopia")
    world.meta.seed = Config.DEFAULT_SEED
    catalog = load_item_catalog()

    engine = DecisionEngine(catalog)
    start_day = world.day
    for day in range(start_day, start_day + days):
        world.meta.day = day
        intents = engine.run_day(world)
        for intent in intents:
            print(intent.model_dump_json(exclude_none=True))
        print()


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 1)
