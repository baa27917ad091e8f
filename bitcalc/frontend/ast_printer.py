from __future__ import annotations
from dataclasses import is_dataclass, fields
from typing import Any, List, Tuple, Union

def _pp(root: Any, indent: int) -> str:
    lines: List[str] = []
    # Items are either finished lines or (node, indent) pairs still to expand.
    work: List[Union[str, Tuple[Any, int]]] = [(root, indent)]
    while work:
        item = work.pop()
        if isinstance(item, str):
            lines.append(item)
            continue
        node, depth = item
        ind = "  " * depth
        if not is_dataclass(node):
            lines.append(ind + repr(node))
            continue
        name = node.__class__.__name__
        symbol = getattr(node, "symbol", None)
        lines.append(f"{ind}{name} ({symbol})" if symbol else f"{ind}{name}")
        pending: List[Union[str, Tuple[Any, int]]] = []
        for f in fields(node):
            if f.name == "loc":
                continue
            val = getattr(node, f.name)
            if is_dataclass(val):
                pending.append(f"{ind}  {f.name}:")
                pending.append((val, depth + 2))
            else:
                pending.append(f"{ind}  {f.name}: {val!r}")
        work.extend(reversed(pending))
    return "\n".join(lines)

def dump_ast(node: Any) -> str:
    return _pp(node, 0)
