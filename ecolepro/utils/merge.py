# ecolepro/utils/merge.py
"""Record merging used when a partial form is saved over a stored record."""
import copy
from typing import Any, Dict, Iterable, Mapping, Optional


def merge_records(
    base: Optional[Mapping[str, Any]],
    overlay: Optional[Mapping[str, Any]],
    preserve: Iterable[str] = (),
) -> Dict[str, Any]:
    """Overlay fields onto a copy of base.

    Keys listed in ``preserve`` always keep the base value, even when the
    overlay carries them. Neither input is mutated.
    """
    merged = copy.deepcopy(dict(base or {}))
    preserved = set(preserve)
    for key, value in (overlay or {}).items():
        if key in preserved:
            continue
        merged[key] = copy.deepcopy(value)
    for key in preserved:
        if base is not None and key in base:
            merged[key] = copy.deepcopy(base[key])
    return merged
