"""Template domain entity: reusable meal descriptions by name plus how often each name was saved."""
from typing import Dict, Optional


class TemplateRecord:
    def __init__(self, templates: Optional[Dict[str, str]] = None, usage: Optional[Dict[str, int]] = None):
        self.templates = dict(templates or {})
        self.usage = dict(usage or {})

    def upsert(self, name: str, description: str) -> None:
        # Overwriting an existing name still counts as a use.
        self.templates[name] = description
        self.usage[name] = self.usage.get(name, 0) + 1

    @staticmethod
    def from_dict(data):
        '''Raises ValueError when either section is not an object of the expected values.'''
        d = data if isinstance(data, dict) else {}
        templates = d.get("templates", {})
        usage = d.get("usage", {})
        if not isinstance(templates, dict) or not all(isinstance(v, str) for v in templates.values()):
            raise ValueError("templates must map names to descriptions")
        if not isinstance(usage, dict):
            raise ValueError("usage must map names to counts")
        for name, count in usage.items():
            if not isinstance(count, int) or isinstance(count, bool) or count < 0:
                raise ValueError(f"usage count for {name!r} must be a non-negative integer")
        return TemplateRecord(templates, usage)

    def to_dict(self):
        return {"templates": dict(self.templates), "usage": dict(self.usage)}
