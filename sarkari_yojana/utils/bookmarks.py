"""
Bookmarked scheme names, kept in a plain JSON file outside the store
"""
import json
import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class BookmarkList:
    """Ordered list of bookmarked scheme names"""
    
    def __init__(self, path):
        self.path = Path(path)
    
    def names(self) -> List[str]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable bookmarks file {self.path}: {e}")
            return []
        return [name for name in data if isinstance(name, str)] if isinstance(data, list) else []
    
    def contains(self, name: str) -> bool:
        return name in self.names()
    
    def toggle(self, name: str) -> bool:
        """Add or remove a name; returns True when it is now bookmarked"""
        names = self.names()
        if name in names:
            names.remove(name)
            bookmarked = False
        else:
            names.append(name)
            bookmarked = True
        
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(names, f, ensure_ascii=False, indent=2)
        return bookmarked
