"""
Hierarchical String Store.

ParamTree holds the run-time overrides of the parameter system. Paths are
dot-separated ("Newton.MaxIterations"); every node holds leaf values and
named sub-trees, and a name is never both within one node. Values are kept
as raw text and are only interpreted by the typed accessors of ParamContext.
"""

from typing import Dict, List, Optional, TextIO, Tuple

from .errors import ParamTreeError


class ParamTree:
    """
    Ordered tree of string values.

    Leaf keys and sub-tree names of a node keep their first-insertion order,
    so flatten() is deterministic for a given sequence of writes.

    Attributes:
        _values: Leaf name to raw text.
        _subs: Sub-tree name to ParamTree.
    """

    def __init__(self):
        self._values: Dict[str, str] = {}
        self._subs: Dict[str, 'ParamTree'] = {}

    @staticmethod
    def _split(path: str) -> Tuple[Optional[str], str]:
        head, sep, rest = path.partition('.')
        if not sep:
            return None, path
        return head, rest

    def _node(self, path: str, create: bool) -> Tuple[Optional['ParamTree'], str]:
        """Walk to the node owning the last segment of path."""
        node = self
        prefix, leaf = self._split(path)
        while prefix is not None:
            if prefix in node._values:
                if create:
                    raise ParamTreeError(f"Cannot create sub-tree '{prefix}' of '{path}': it already holds a value")
                return None, leaf
            if prefix not in node._subs:
                if not create:
                    return None, leaf
                node._subs[prefix] = ParamTree()
            node = node._subs[prefix]
            prefix, leaf = self._split(leaf)
        return node, leaf

    def set(self, path: str, value: str) -> None:
        node, leaf = self._node(path, create=True)
        if leaf in node._subs:
            raise ParamTreeError(f"Cannot assign a value to '{path}': it is a sub-tree")
        node._values[leaf] = str(value)

    def get(self, path: str, default: Optional[str] = None) -> Optional[str]:
        node, leaf = self._node(path, create=False)
        if node is None:
            return default
        return node._values.get(leaf, default)

    def has_key(self, path: str) -> bool:
        node, leaf = self._node(path, create=False)
        return node is not None and leaf in node._values

    def has_sub(self, path: str) -> bool:
        node, leaf = self._node(path, create=False)
        return node is not None and leaf in node._subs

    def sub(self, path: str) -> 'ParamTree':
        """Return the sub-tree at path; an empty tree if there is none."""
        node, leaf = self._node(path, create=False)
        if node is None or leaf not in node._subs:
            return ParamTree()
        return node._subs[leaf]

    def value_keys(self) -> List[str]:
        return list(self._values)

    def sub_keys(self) -> List[str]:
        return list(self._subs)

    def flatten(self, prefix: str = "") -> List[str]:
        """
        Return the fully-qualified key of every leaf: the leaves of a node
        first, then each sub-tree depth-first, joined with '.'.
        """
        keys = [ prefix + key for key in self._values ]
        for name, subtree in self._subs.items():
            keys.extend(subtree.flatten(f"{prefix}{name}."))
        return keys

    def to_dict(self) -> dict:
        result = dict(self._values)
        for name, subtree in self._subs.items():
            result[name] = subtree.to_dict()
        return result

    def report(self, out: TextIO, prefix: str = "") -> None:
        """Write the tree as INI text with a [section] header per sub-tree."""
        for key, value in self._values.items():
            out.write(f"{key} = \"{value}\"\n")
        for name, subtree in self._subs.items():
            out.write(f"[ {prefix}{name} ]\n")
            subtree.report(out, f"{prefix}{name}.")

    def __getitem__(self, path: str) -> str:
        value = self.get(path)
        if value is None:
            raise KeyError(path)
        return value

    def __setitem__(self, path: str, value: str):
        self.set(path, value)

    def __contains__(self, path: str) -> bool:
        return self.has_key(path)

    def __len__(self) -> int:
        return len(self.flatten())

    def __bool__(self) -> bool:
        return bool(self._values) or bool(self._subs)
