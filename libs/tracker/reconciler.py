"""
Claim reconciler: pure rules for gather and claim mutations.

Out-of-range quantities are clamped rather than rejected. Only an empty
claimer or an unknown item name is an error.

Claims are always anchored at the item's current ``gathered`` value: a claim
means "the next N units from wherever gathering currently stands". A repeat
claim by the same claimer moves their window forward if gathering has
advanced since. Gather updates never touch claims.
"""

from typing import List

from libs.core.exceptions import InvalidClaimer, ItemNotFound
from libs.tracker.models import Claim, Item


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def apply_gather(item: Item, requested_gathered: int) -> Item:
    """Set gathered progress, clamped to [0, target]."""
    gathered = _clamp(requested_gathered, 0, item.target)
    return item.model_copy(update={"gathered": gathered})


def normalize_claimer(claimer: str) -> str:
    """Trim a claimer label, rejecting empty ones."""
    trimmed = (claimer or "").strip()
    if not trimmed:
        raise InvalidClaimer()
    return trimmed


def apply_claim(item: Item, claimer: str, requested_quantity: int) -> Item:
    """
    Reserve the next ``requested_quantity`` units for ``claimer``.

    The quantity is clamped to what is still ungathered. Zero releases the
    claimer's claim (a no-op if they hold none).
    """
    claimer = normalize_claimer(claimer)
    quantity = _clamp(requested_quantity, 0, item.remaining)

    if quantity == 0:
        claims = [c for c in item.claims if c.claimer != claimer]
        return item.model_copy(update={"claims": claims})

    window = Claim(claimer=claimer, claim_start=item.gathered, claim_end=item.gathered + quantity)
    existing = item.claim_for(claimer)
    if existing is None:
        claims = item.claims + [window]
    else:
        # Overwrite in place so the claim keeps its position
        claims = [window if c is existing else c for c in item.claims]
    return item.model_copy(update={"claims": claims})


def find_item(items: List[Item], name: str) -> int:
    """Index of the item named exactly ``name`` (case-sensitive)."""
    for index, item in enumerate(items):
        if item.name == name:
            return index
    raise ItemNotFound(name)


def gather_in_collection(items: List[Item], name: str, gathered: int) -> List[Item]:
    """Apply a gather update to the named item, returning the new collection."""
    index = find_item(items, name)
    updated = list(items)
    updated[index] = apply_gather(items[index], gathered)
    return updated


def claim_in_collection(items: List[Item], name: str, claimer: str, quantity: int) -> List[Item]:
    """Apply a claim update to the named item, returning the new collection."""
    claimer = normalize_claimer(claimer)
    index = find_item(items, name)
    updated = list(items)
    updated[index] = apply_claim(items[index], claimer, quantity)
    return updated
