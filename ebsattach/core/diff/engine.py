"""
Diff estructural entre dos documentos JSON.

No es un diff de líneas: compara claves de objetos y elementos de arrays y
devuelve un árbol de Delta. Los arrays se alinean con difflib.SequenceMatcher,
así una inserción en medio no marca como cambiados los elementos siguientes.
"""

import difflib
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ebsattach.core.errors import StateParseError


class DeltaKind(str, Enum):
    """Tipo de diferencia"""
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    OBJECT = "object"
    ARRAY = "array"


Position = Union[str, int, None]


@dataclass
class Delta:
    """
    Nodo del árbol de diferencias.

    position es la clave (objetos) o el índice (arrays). En arrays, un ADDED
    lleva el índice del documento nuevo y el resto el del original; anchor es
    siempre el índice del array original delante del que se coloca el cambio.
    """
    kind: DeltaKind
    position: Position = None
    old: Any = None
    new: Any = None
    anchor: int = 0
    children: List["Delta"] = field(default_factory=list)


def _same(left: Any, right: Any) -> bool:
    return type(left) is type(right) and left == right


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True)


def compare(left: Any, right: Any, position: Position = None, anchor: int = 0) -> Optional[Delta]:
    """Compara dos valores JSON ya cargados. Devuelve None si son iguales."""
    if isinstance(left, dict) and isinstance(right, dict):
        children = _compare_objects(left, right)
        if not children:
            return None
        return Delta(DeltaKind.OBJECT, position, anchor=anchor, children=children)

    if isinstance(left, list) and isinstance(right, list):
        children = _compare_arrays(left, right)
        if not children:
            return None
        return Delta(DeltaKind.ARRAY, position, anchor=anchor, children=children)

    if _same(left, right):
        return None
    return Delta(DeltaKind.MODIFIED, position, old=left, new=right, anchor=anchor)


def _compare_objects(left: Dict[str, Any], right: Dict[str, Any]) -> List[Delta]:
    deltas: List[Delta] = []
    for key, value in left.items():
        if key not in right:
            deltas.append(Delta(DeltaKind.REMOVED, key, old=value))
            continue
        child = compare(value, right[key], key)
        if child is not None:
            deltas.append(child)
    for key, value in right.items():
        if key not in left:
            deltas.append(Delta(DeltaKind.ADDED, key, new=value))
    return deltas


def _compare_arrays(left: List[Any], right: List[Any]) -> List[Delta]:
    matcher = difflib.SequenceMatcher(
        None,
        [_canonical(v) for v in left],
        [_canonical(v) for v in right],
        autojunk=False,
    )
    deltas: List[Delta] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        paired = min(i2 - i1, j2 - j1) if tag == "replace" else 0
        for k in range(paired):
            child = compare(left[i1 + k], right[j1 + k], i1 + k, anchor=i1 + k)
            if child is not None:
                deltas.append(child)
        for i in range(i1 + paired, i2):
            deltas.append(Delta(DeltaKind.REMOVED, i, old=left[i], anchor=i))
        for j in range(j1 + paired, j2):
            deltas.append(Delta(DeltaKind.ADDED, j, new=right[j], anchor=i2))
    return deltas


def count_changes(delta: Optional[Delta]) -> Dict[DeltaKind, int]:
    """Cuenta hojas ADDED / REMOVED / MODIFIED del árbol."""
    counts = {DeltaKind.ADDED: 0, DeltaKind.REMOVED: 0, DeltaKind.MODIFIED: 0}
    pending = [delta] if delta is not None else []
    while pending:
        node = pending.pop()
        if node.kind in counts:
            counts[node.kind] += 1
        pending.extend(node.children)
    return counts


def _load(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise StateParseError(source, str(e)) from e


def diff_documents(before: str, after: str) -> Tuple[Any, Optional[Delta]]:
    """
    Compara dos serializaciones JSON.

    Returns:
        Tuple (documento original cargado, delta o None si no hay cambios)
    """
    left = _load(before, "el estado original")
    right = _load(after, "el estado modificado")
    return left, compare(left, right)
