from __future__ import annotations

from typing import Dict, Iterable, Tuple

from .model import FaceVerification


def _precedence(v: FaceVerification) -> Tuple[bool, object, str]:
    # A non-match outranks everything; then newest; id only breaks exact ties.
    return (v.is_match is False, v.created_at, v.verification_id)


def reduce_verifications(rows: Iterable[FaceVerification]) -> Dict[str, FaceVerification]:
    """Pick the single authoritative verification per time entry.

    Any row with `is_match = False` wins over rows that matched or have no
    result yet; among rows of the same kind the most recently created wins.
    The outcome does not depend on the order of `rows`.
    """

    chosen: Dict[str, FaceVerification] = {}
    for v in rows:
        current = chosen.get(v.time_entry_id)
        if current is None or _precedence(v) > _precedence(current):
            chosen[v.time_entry_id] = v
    return chosen
