"""
Draft Reducer

Pure merge of a stored onboarding draft with a partial patch.
"""

import copy
from typing import Any, Dict, Mapping, Optional


def merge_draft(
    stored: Optional[Mapping[str, Any]], patch: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """
    Return a new form state with ``patch`` applied on top of ``stored``.

    - keys omitted from the patch keep their stored value
    - None in the patch means "not provided" and never clobbers a stored value
    - nested mappings are merged key by key
    - lists (collections) are replaced as a whole

    Neither argument is modified.
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(stored or {}))
    for key, value in (patch or {}).items():
        if value is None:
            continue
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_draft(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
