from __future__ import annotations
import json
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

from .models import BootEntry, CleanupResult, CustomizationConfig

logger = logging.getLogger(__name__)

EMPTY_NAMES = '{}'


def parse_custom_names(raw: Optional[str]) -> Dict[str, str]:
    """Decode the stored rename map. Anything unreadable decodes to ``{}``."""
    if not raw:
        return {}
    try:
        decoded = json.loads(raw)
    except (ValueError, RecursionError):
        logger.debug('Ignoring malformed custom names: %r', raw)
        return {}
    if not isinstance(decoded, dict):
        logger.debug('Ignoring custom names that are not an object: %r', raw)
        return {}
    return {str(k): v for k, v in decoded.items() if isinstance(v, str)}


def encode_custom_names(names: Mapping[str, str]) -> str:
    return json.dumps(dict(names), separators=(',', ':'), ensure_ascii=False)


def _keep_valid(csv: Optional[str], valid: Set[str]) -> str:
    if not csv:
        return ''
    kept = []
    for num in csv.split(','):
        num = num.strip()
        if num and num in valid:
            kept.append(num)
    return ','.join(kept)


def cleanup_config(valid_boot_nums: Iterable[str],
                   custom_order: Optional[str],
                   hidden_entries: Optional[str],
                   custom_names: Optional[str]) -> CleanupResult:
    """Drop boot numbers the firmware no longer reports from the stored config.

    Boot numbers can be removed or reassigned outside this program, so every
    load has to re-validate. ``changed`` tells the caller whether the cleaned
    values need to be written back.
    """
    valid = set(valid_boot_nums)

    clean_order = _keep_valid(custom_order, valid)
    clean_hidden = _keep_valid(hidden_entries, valid)
    names = parse_custom_names(custom_names)
    clean_names = encode_custom_names({k: v for k, v in names.items() if k in valid})

    changed = (clean_order != (custom_order or '')
               or clean_hidden != (hidden_entries or '')
               or clean_names != (custom_names or EMPTY_NAMES))
    if changed:
        logger.debug('Pruned stale boot numbers: order=%r hidden=%r names=%r',
                     clean_order, clean_hidden, clean_names)
    return CleanupResult(
        custom_order=clean_order,
        hidden_entries=clean_hidden,
        custom_names=clean_names,
        changed=changed,
    )


def apply_custom_order(entries: Sequence[BootEntry], order_str: Optional[str]) -> Sequence[BootEntry]:
    """Reorder ``entries`` by a comma-separated boot number priority list.

    Unknown numbers are ignored and entries the list never mentions follow in
    their firmware order, so the result is always a permutation of the input.
    """
    if not order_str:
        return entries

    lookup = {e.boot_num: e for e in entries}
    ordered: List[BootEntry] = []
    for num in order_str.split(','):
        entry = lookup.pop(num.strip(), None)
        if entry is not None:
            ordered.append(entry)
    ordered.extend(e for e in entries if e.boot_num in lookup)
    return ordered


def custom_names_of(config: CustomizationConfig) -> Dict[str, str]:
    return parse_custom_names(config.custom_names)


def with_custom_name(config: CustomizationConfig, boot_num: str, label: str) -> CustomizationConfig:
    """Rename ``boot_num``; an empty label restores the firmware name."""
    names = custom_names_of(config)
    label = label.strip()
    if label:
        names[boot_num] = label
    else:
        names.pop(boot_num, None)
    return replace(config, custom_names=encode_custom_names(names))


def move_in_order(order: Sequence[str], visible: Sequence[str], boot_num: str, step: int) -> Optional[List[str]]:
    """Swap ``boot_num`` with its ``step``-th visible neighbour inside the full order.

    Entries missing from ``visible`` (hidden or suppressed) keep their slots.
    Returns None when the move would leave the visible range.
    """
    idx = list(visible).index(boot_num)
    target = idx + step
    if not 0 <= target < len(visible):
        return None
    moved = list(order)
    a, b = moved.index(visible[idx]), moved.index(visible[target])
    moved[a], moved[b] = moved[b], moved[a]
    return moved
