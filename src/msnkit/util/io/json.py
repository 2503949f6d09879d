__all__ = ["load_json", "dumps_json_line", "write_json_line"]


import json
from typing import IO, Any


def load_json(file, **kwargs):
    with open(file, "r") as f:
        return json.load(f, **kwargs)


def dumps_json_line(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def write_json_line(data: Any, file: IO[str]):
    file.write(dumps_json_line(data))
    file.write("\n")
