from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

from event_bus import EventBus, Subscription, topics
from event_bus.messages import ItemAdded, ItemRemoved, ItemUpdated

logger = logging.getLogger(__name__)

COLLECTION_PATH = Path("data/roaming/collection.json")
STORE_SOURCE = "collection-store"


class CollectionStore(Protocol):
    def get_category_count(self, category: str) -> int: ...

    def on_item_added(self, callback: Callable[[ItemAdded], None]) -> Subscription: ...

    def on_item_removed(self, callback: Callable[[ItemRemoved], None]) -> Subscription: ...


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonCollectionStore:
    """Tea collection kept in one JSON file; changes are announced on the bus."""

    def __init__(self, bus: EventBus, path: Optional[Path] = None) -> None:
        self._bus = bus
        self._path = Path(path) if path is not None else COLLECTION_PATH
        self._teas: List[Dict[str, object]] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def on_item_added(self, callback: Callable[[ItemAdded], None]) -> Subscription:
        return self._bus.on(topics.ITEM_ADDED, callback)

    def on_item_removed(self, callback: Callable[[ItemRemoved], None]) -> Subscription:
        return self._bus.on(topics.ITEM_REMOVED, callback)

    def get_category_count(self, category: str) -> int:
        return sum(1 for tea in self._teas if tea.get("category") == category)

    def get_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for tea in self._teas:
            category = str(tea.get("category") or "")
            if category:
                counts[category] = counts.get(category, 0) + 1
        return counts

    def get_total_count(self) -> int:
        return len(self._teas)

    def list_teas(self, category: Optional[str] = None) -> List[Dict[str, object]]:
        if category is None:
            return [dict(tea) for tea in self._teas]
        return [dict(tea) for tea in self._teas if tea.get("category") == category]

    def get_tea(self, tea_id: str) -> Optional[Dict[str, object]]:
        for tea in self._teas:
            if tea.get("id") == tea_id:
                return dict(tea)
        return None

    def add_tea(self, name: str, category: str, *, notes: str = "", source: Optional[str] = None) -> Dict[str, object]:
        name = (name or "").strip()
        if not name:
            return {"ok": False, "error": "name_required"}
        if not category:
            return {"ok": False, "error": "category_required"}
        tea = {
            "id": str(uuid.uuid4()),
            "name": name,
            "category": category,
            "notes": notes,
            "added_at": _iso_timestamp(),
        }
        self._teas.append(tea)
        if not self._save():
            self._teas.pop()
            return {"ok": False, "error": "write_failed"}
        logger.info("collection add tea=%s category=%s", name, category)
        self._bus.emit(
            topics.ITEM_ADDED,
            ItemAdded(tea_id=tea["id"], name=name, category=category, source=source or STORE_SOURCE),
        )
        return {"ok": True, "tea": dict(tea)}

    def update_tea(self, tea_id: str, *, name: Optional[str] = None, notes: Optional[str] = None, source: Optional[str] = None) -> Dict[str, object]:
        for tea in self._teas:
            if tea.get("id") != tea_id:
                continue
            previous = dict(tea)
            if name is not None and name.strip():
                tea["name"] = name.strip()
            if notes is not None:
                tea["notes"] = notes
            if not self._save():
                tea.clear()
                tea.update(previous)
                return {"ok": False, "error": "write_failed"}
            self._bus.emit(
                topics.ITEM_UPDATED,
                ItemUpdated(
                    tea_id=tea_id,
                    name=str(tea["name"]),
                    category=str(tea["category"]),
                    source=source or STORE_SOURCE,
                ),
            )
            return {"ok": True, "tea": dict(tea)}
        return {"ok": False, "error": "not_found"}

    def remove_tea(self, tea_id: str, *, source: Optional[str] = None) -> Dict[str, object]:
        for index, tea in enumerate(self._teas):
            if tea.get("id") != tea_id:
                continue
            removed = self._teas.pop(index)
            if not self._save():
                self._teas.insert(index, removed)
                return {"ok": False, "error": "write_failed"}
            logger.info("collection remove tea=%s category=%s", removed.get("name"), removed.get("category"))
            self._bus.emit(
                topics.ITEM_REMOVED,
                ItemRemoved(
                    tea_id=tea_id,
                    name=str(removed.get("name") or ""),
                    category=str(removed.get("category") or ""),
                    source=source or STORE_SOURCE,
                ),
            )
            return {"ok": True, "tea": dict(removed)}
        return {"ok": False, "error": "not_found"}

    def _load(self) -> List[Dict[str, object]]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("collection load failed path=%s error=%s", self._path, exc)
            return []
        teas = data.get("teas") if isinstance(data, dict) else None
        if not isinstance(teas, list):
            return []
        return [tea for tea in teas if isinstance(tea, dict) and tea.get("id") and tea.get("category")]

    def _save(self) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps({"teas": self._teas}, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("collection save failed path=%s error=%s", self._path, exc)
            return False
        return True
