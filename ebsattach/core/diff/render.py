"""
Renderizado del diff estructural como JSON anotado.

Recorre el documento original e imprime cada línea con un marcador:
" " sin cambios, "+" añadido, "-" eliminado. Los elementos de arrays llevan su
índice delante ("0: {").
"""

import json
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from rich.text import Text

from ebsattach.core.diff.engine import Delta, DeltaKind

MARKER_STYLES: Dict[str, str] = {
    "+": "green",
    "-": "red",
}


@dataclass(frozen=True)
class DiffLine:
    marker: str
    depth: int
    text: str


def _key_label(key: str) -> str:
    return f"{json.dumps(key, ensure_ascii=False)}: "


def _index_label(index: int) -> str:
    return f"{index}: "


def _join(blocks: List[List[DiffLine]]) -> List[DiffLine]:
    """Aplana bloques hermanos añadiendo la coma al final de todos menos el último."""
    lines: List[DiffLine] = []
    for i, block in enumerate(blocks):
        if i < len(blocks) - 1 and block:
            block = block[:-1] + [replace(block[-1], text=block[-1].text + ",")]
        lines.extend(block)
    return lines


def _value_lines(marker: str, depth: int, label: str, value: Any) -> List[DiffLine]:
    if isinstance(value, dict):
        if not value:
            return [DiffLine(marker, depth, f"{label}{{}}")]
        blocks = [_value_lines(marker, depth + 1, _key_label(k), v) for k, v in value.items()]
        return [DiffLine(marker, depth, f"{label}{{")] + _join(blocks) + [DiffLine(marker, depth, "}")]
    if isinstance(value, list):
        if not value:
            return [DiffLine(marker, depth, f"{label}[]")]
        blocks = [_value_lines(marker, depth + 1, _index_label(i), v) for i, v in enumerate(value)]
        return [DiffLine(marker, depth, f"{label}[")] + _join(blocks) + [DiffLine(marker, depth, "]")]
    return [DiffLine(marker, depth, label + json.dumps(value, ensure_ascii=False))]


def _entry(depth: int, label: str, value: Any, delta: Optional[Delta]) -> List[DiffLine]:
    if delta is None:
        return _value_lines(" ", depth, label, value)
    if delta.kind is DeltaKind.REMOVED:
        return _value_lines("-", depth, label, value)
    if delta.kind is DeltaKind.MODIFIED:
        return _value_lines("-", depth, label, delta.old) + _value_lines("+", depth, label, delta.new)
    if delta.kind is DeltaKind.OBJECT:
        return _object_lines(depth, label, value, delta)
    return _array_lines(depth, label, value, delta)


def _object_lines(depth: int, label: str, value: Dict[str, Any], delta: Delta) -> List[DiffLine]:
    by_key = {child.position: child for child in delta.children if child.kind is not DeltaKind.ADDED}
    blocks = [_entry(depth + 1, _key_label(k), v, by_key.get(k)) for k, v in value.items()]
    for child in delta.children:
        if child.kind is DeltaKind.ADDED:
            blocks.append(_value_lines("+", depth + 1, _key_label(child.position), child.new))
    return [DiffLine(" ", depth, f"{label}{{")] + _join(blocks) + [DiffLine(" ", depth, "}")]


def _array_lines(depth: int, label: str, value: List[Any], delta: Delta) -> List[DiffLine]:
    blocks: List[List[DiffLine]] = []
    cursor = 0
    for child in delta.children:
        while cursor < child.anchor:
            blocks.append(_value_lines(" ", depth + 1, _index_label(cursor), value[cursor]))
            cursor += 1
        if child.kind is DeltaKind.ADDED:
            blocks.append(_value_lines("+", depth + 1, _index_label(child.position), child.new))
        else:
            blocks.append(_entry(depth + 1, _index_label(cursor), value[cursor], child))
            cursor += 1
    while cursor < len(value):
        blocks.append(_value_lines(" ", depth + 1, _index_label(cursor), value[cursor]))
        cursor += 1
    return [DiffLine(" ", depth, f"{label}[")] + _join(blocks) + [DiffLine(" ", depth, "]")]


def render_diff(left: Any, delta: Optional[Delta]) -> List[DiffLine]:
    """Anota el documento original con las diferencias de delta."""
    return _entry(0, "", left, delta)


def format_plain(lines: List[DiffLine], indent: str = "  ") -> str:
    """Texto plano, una línea por DiffLine, con salto de línea final."""
    return "".join(f"{line.marker}{indent * line.depth}{line.text}\n" for line in lines)


def to_rich_text(lines: List[DiffLine], indent: str = "  ") -> Text:
    """Igual que format_plain pero con colores por marcador (verde +, rojo -)."""
    text = Text()
    for line in lines:
        text.append(
            f"{line.marker}{indent * line.depth}{line.text}\n",
            style=MARKER_STYLES.get(line.marker),
        )
    return text
