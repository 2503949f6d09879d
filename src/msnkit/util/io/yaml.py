__all__ = ["load_yaml"]


import yaml


def load_yaml(file, **kwargs):
    with open(file, "r") as f:
        return yaml.safe_load(f, **kwargs)
