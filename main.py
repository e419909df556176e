"""Simple entrypoint to run the Costume Concierge locally."""

import json

from costume_app.app import CostumeConciergeApp

SAMPLE_QUIZ = {
    "goals": ["funny", "clever"],
    "niche_target": 5,
    "effort": "few_fast",
    "budget": "lt_30",
    "universes": ["movie", "internet"],
    "practical": {"must_survive_crowded_bar": True},
}


def main() -> None:
    app = CostumeConciergeApp()
    print(json.dumps(app.recommend(SAMPLE_QUIZ), indent=2))


if __name__ == "__main__":
    main()
