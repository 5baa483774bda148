import yaml


def file_load_yaml(filepath: str):
    with open(filepath, "r") as f:
        return yaml.safe_load(f)
