"""
Lectura y escritura del documento de estado.

"-" representa stdin (lectura) o stdout (escritura). Las escrituras a archivo
van primero a un temporal en el mismo directorio y luego lo reemplazan, así el
destino nunca queda a medio escribir.
"""

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Tuple

from pydantic import ValidationError

from ebsattach.core.errors import OutputWriteError, StateParseError, StateStructureError
from ebsattach.core.state.models import StateDocument, to_json

STDIO = "-"
DEFAULT_FILE_MODE = 0o644


def display_name(location: str, stream: str = "stdin") -> str:
    return f"<{stream}>" if location == STDIO else location


def read_text(source: str) -> str:
    """Lee el texto completo del origen (archivo o "-")."""
    name = display_name(source)
    try:
        if source == STDIO:
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8")
    except OSError as e:
        raise StateParseError(name, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise StateParseError(name, f"no es UTF-8 válido: {e}") from e


def parse_state(text: str, source: str = STDIO) -> StateDocument:
    """
    Parsea el JSON del estado y valida la estructura modules/resources.

    Raises:
        StateParseError: si el texto no es JSON válido
        StateStructureError: si falta modules, resources o algún tipo no encaja
    """
    name = display_name(source)
    try:
        data = json.loads(text)
    except ValueError as e:
        raise StateParseError(name, f"JSON inválido: {e}") from e

    if not isinstance(data, dict):
        raise StateStructureError(f"El estado {name} debe ser un objeto JSON con 'modules'")

    try:
        return StateDocument.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<raíz>'}: {err['msg']}" for err in e.errors()
        )
        raise StateStructureError(f"El estado {name} no tiene la estructura esperada: {problems}") from e


def read_state(source: str) -> Tuple[StateDocument, str]:
    """
    Lee y parsea el estado.

    Returns:
        Tuple (documento, texto original tal cual se leyó)
    """
    text = read_text(source)
    return parse_state(text, source), text


def dump_state(document: StateDocument, indent: int = 4) -> str:
    """Serializa el documento completo con salto de línea final."""
    return to_json(document, indent) + "\n"


def write_text(destination: str, text: str) -> None:
    """
    Escribe text en destination (archivo o "-").

    Si destination es un enlace simbólico se escribe en el archivo al que apunta.

    Raises:
        OutputWriteError: si el destino no se puede escribir o text no se puede
            codificar en UTF-8 (p. ej. surrogates sueltos como "\\ud800")
    """
    name = display_name(destination, "stdout")
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise OutputWriteError(name, f"el contenido no se puede codificar en UTF-8: {e}") from e

    if destination == STDIO:
        try:
            sys.stdout.write(text)
            sys.stdout.flush()
        except (OSError, UnicodeEncodeError) as e:
            raise OutputWriteError(name, str(e)) from e
        return

    path = Path(destination).resolve()
    tmp_name = None
    try:
        mode = path.stat().st_mode & 0o777 if path.exists() else DEFAULT_FILE_MODE
        with tempfile.NamedTemporaryFile(
            "wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise OutputWriteError(destination, e.strerror or str(e)) from e
    finally:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)


def write_state(destination: str, document: StateDocument, indent: int = 4) -> None:
    """Serializa primero y escribe después: si la serialización falla no se toca el destino."""
    write_text(destination, dump_state(document, indent))
