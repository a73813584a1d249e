"""id -> row maps used to attach display names to transactional rows."""
import logging
from typing import Any, Dict, Iterable, Sequence

from garment_erp.core.exceptions import DataStoreError
from garment_erp.data.store import DataStore, in_

logger = logging.getLogger(__name__)


def lookup(store: DataStore, table: str, ids: Iterable[Any], columns: Sequence[str] = ("id", "name")) -> Dict[str, Dict]:
    """
    Fetch ``columns`` for the distinct non-empty ``ids``. A failed lookup
    degrades to an empty map so callers fall back to raw ids.
    """
    wanted = sorted({i for i in ids if i})
    if not wanted:
        return {}
    try:
        rows = store.select(table, columns=list(columns), filters=[in_("id", wanted)])
    except DataStoreError as e:
        logger.warning(f"Lookup on {table} failed, names will be missing: {e.message}")
        return {}
    return {r["id"]: r for r in rows if r.get("id")}
