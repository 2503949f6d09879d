__all__ = ["Configurable", "load_configs"]

import os
from typing import Any, Mapping, Optional, Type, TypeVar, Union, cast, overload

from .io.json import load_json
from .io.yaml import load_yaml


T = TypeVar("T")

_MISSING = object()


def load_configs(file: str) -> dict:
    ext = os.path.splitext(file)[1].lower()
    if ext == ".json":
        configs = load_json(file)
    else:
        configs = load_yaml(file)
    if configs is None:
        return {}
    if not isinstance(configs, Mapping):
        raise ValueError(f"invalid config file {file}: mapping expected")
    return dict(configs)


def _lookup(configs: Mapping, keys) -> Any:
    result = configs
    for k in keys:
        if not isinstance(result, Mapping) or k not in result:
            return _MISSING
        result = result[k]
    return result


class Configurable:
    def __init__(self, configs: Union[str, Mapping[str, Any], None]):
        self.configs = {}

        if isinstance(configs, str):
            configs = load_configs(configs)

        self.set_configs(cast(Mapping[str, Any], configs or {}))

    def get_configs(self):
        return dict(self.configs)

    @overload
    def get_config(self, *name, required: bool = True) -> Any:
        ...

    @overload
    def get_config(
        self, *name, required: bool = True, typed: Type[T], allow_convert: bool = False
    ) -> Optional[T]:
        ...

    def get_config(
        self,
        *name,
        required: bool = True,
        typed: Optional[Type[T]] = None,
        allow_convert: bool = False,
    ) -> Union[T, Any, None]:
        r = _lookup(self.configs, name)
        if r is _MISSING:
            if required:
                raise KeyError(name)
            return None

        if typed is not None and not isinstance(r, typed):
            if not allow_convert:
                raise TypeError(name, f"{typed} expected but {type(r)} found")
            r = typed(r)
        return r

    def set_configs(self, configs: Mapping[str, Any]):
        for key, value in configs.items():
            if isinstance(value, Mapping) and isinstance(
                self.configs.get(key, None), dict
            ):
                self.configs[key].update(value)
            elif isinstance(value, Mapping):
                self.configs[key] = dict(value)
            else:
                self.configs[key] = value
        return self
