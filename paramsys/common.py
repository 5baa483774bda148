import yaml


class ParamSystemException(Exception):
    pass


def file_read(filepath: str) -> str:
    try:
        with open(filepath, "r") as f:
            return f.read()
    except IOError as exc:
        raise ParamSystemException(f'Failed to read from "{filepath}": {exc}') from exc


def file_dump_yaml(filepath: str, data) -> None:
    try:
        with open(filepath, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)
    except (IOError, yaml.YAMLError) as exc:
        raise ParamSystemException(f'Failed to dump YAML to "{filepath}": {exc}.') from exc


def format_list_to_string(arr: list, item_style=None, empty=None):
    if empty is None:
        empty = "nothing"

    pre, post = "", ""
    if item_style is not None:
        pre  = f"[{item_style}]"
        post = f"[/{item_style}]"

    if len(arr) == 0:
        return f"{pre}{empty}{post}"

    if len(arr) == 1:
        return f"{pre}{arr[0]}{post}"

    if len(arr) == 2:
        return f"{pre}{arr[0]}{post} and {pre}{arr[1]}{post}"

    lhs = ', '.join([ f"{pre}{e}{post}" for e in arr[:-1]])
    rhs = f", and {pre}{arr[-1]}{post}"

    return lhs + rhs

