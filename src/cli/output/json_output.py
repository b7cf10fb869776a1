"""JSON output mode utilities."""

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any

from rich.console import Console


class CLIJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles CLI types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Enum):
            return obj.value
        if is_dataclass(obj) and not isinstance(obj, type):
            return asdict(obj)
        return super().default(obj)


def json_output(console: Console, data: Any) -> None:
    """Output data as formatted JSON."""
    console.print_json(json.dumps(data, cls=CLIJSONEncoder))
