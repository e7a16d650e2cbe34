import json
from typing import Any

import yaml

from framewire.core.ports.render import Renderer


class JsonRenderer(Renderer):
    """
    Renders one value per line (JSON Lines). Binary data is shown as hex,
    and map keys JSON cannot hold (bytes, tuples) are turned into strings.
    """
    def render(self, data: Any) -> str:
        return json.dumps(self._normalize(data), sort_keys=False)

    def _normalize(self, obj: Any) -> Any:
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return bytes(obj).hex()

        if isinstance(obj, dict):
            return {self._key(k): self._normalize(v) for k, v in obj.items()}

        if isinstance(obj, (list, tuple)):
            return [self._normalize(x) for x in obj]

        return obj

    def _key(self, key: Any) -> Any:
        if key is None or isinstance(key, (str, int, float, bool)):
            return key
        normalized = self._normalize(key)
        return normalized if isinstance(normalized, str) else json.dumps(normalized)


class YamlRenderer(Renderer):
    """Renders each value as its own YAML document."""
    def render(self, data: Any) -> str:
        return yaml.safe_dump(data, sort_keys=False, explicit_start=True).rstrip("\n")
