import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

DATA_FILE = Path(__file__).parent / "test_data.json"


@lru_cache(maxsize=1)
def _load() -> Dict[str, Any]:
    with open(DATA_FILE, encoding="utf-8") as f:
        return json.load(f)


class ChurchFixtureData:
    """Sample accounts, churches and records shared by the integration tests.

    Every accessor hands out a deep copy so a test can mutate its payload freely.
    """

    def get_copy(self, key: str) -> Any:
        if key not in _load():
            raise KeyError(f"No fixture named {key!r} in {DATA_FILE.name}")
        return copy.deepcopy(_load()[key])

    def account(self, name: str) -> Dict[str, Any]:
        return self.get_copy("accounts")[name]

    def payload(self, key: str, **overrides) -> Dict[str, Any]:
        return {**self.get_copy(key), **overrides}
