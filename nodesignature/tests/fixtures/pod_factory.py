"""
Work unit fixtures for signature tests.

- load_pods(): a fixed node snapshot stored in pods.json
- random_work_units(): synthetic units with random letter names, sized
  like real cluster objects
"""

import json
import random
import string
from pathlib import Path

from nodesignature.app.schemas.identity import WorkUnit


PODS_JSON = Path(__file__).resolve().parent / "pods.json"

STRESS_NAMESPACE_LEN = 52
STRESS_NAME_LEN = 72


def load_pods() -> list[WorkUnit]:
    with PODS_JSON.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    return [
        WorkUnit(namespace=entry["Namespace"], name=entry["Name"])
        for entry in raw
    ]


def random_letters(rng: random.Random, n: int) -> str:
    return "".join(rng.choice(string.ascii_letters) for _ in range(n))


def random_work_units(count: int, *, seed: int = 0) -> list[WorkUnit]:
    rng = random.Random(seed)
    return [
        WorkUnit(
            namespace=random_letters(rng, STRESS_NAMESPACE_LEN),
            name=random_letters(rng, STRESS_NAME_LEN),
        )
        for _ in range(count)
    ]


def shuffled(units: list[WorkUnit], *, seed: int = 1) -> list[WorkUnit]:
    local = list(units)
    random.Random(seed).shuffle(local)
    return local
