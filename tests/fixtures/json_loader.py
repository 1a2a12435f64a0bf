import copy
import json
from pathlib import Path
from typing import Any, Dict


class TestDataLoader:
    """Request payloads and onboarding form states shared by the tests"""

    _data: Dict[str, Any] = None

    @classmethod
    def load(cls) -> Dict[str, Any]:
        if cls._data is None:
            with open(Path(__file__).parent / "test_data.json") as f:
                cls._data = json.load(f)
        return cls._data

    @classmethod
    def get(cls, key: str) -> Any:
        return cls.load().get(key)

    @classmethod
    def get_copy(cls, key: str) -> Any:
        return copy.deepcopy(cls.get(key))

    @classmethod
    def form_state(cls, **overrides: Any) -> Dict[str, Any]:
        """A complete, valid onboarding form with selected keys replaced"""
        state = cls.get_copy("valid_form_state")
        state.update(copy.deepcopy(overrides))
        return state
