"""JSON output rendering for table metadata."""
import json  # pylint: disable=import-self
from typing import List

from orameta.models.schema import Table


def render_json(tables: List[Table], include_comments: bool = True, pretty: bool = True) -> str:
    """Render tables as a JSON array."""
    data = []
    for table in tables:
        item = table.model_dump(mode="json")
        if not include_comments:
            item.pop("comment", None)
            for column in item["columns"]:
                column.pop("comment", None)
        data.append(item)
    return json.dumps(data, indent=2 if pretty else None)
