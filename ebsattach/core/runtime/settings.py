"""
Configuración de tf-ebs-attach.

Precedencia (de menor a mayor):
1. Valores por defecto
2. Archivo YAML (.ebs-attach.yaml en el directorio de trabajo, o EBS_ATTACH_CONFIG)
3. Archivo .env del directorio de trabajo
4. Variables de entorno
Las opciones de la línea de comandos se aplican después, en la CLI.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, Field, ValidationError, field_validator

from ebsattach.core.errors import ConfigError

DEFAULT_STATE_FILE = "terraform.tfstate"
CONFIG_FILE_NAME = ".ebs-attach.yaml"

ENV_CONFIG = "EBS_ATTACH_CONFIG"
ENV_VARS = {
    "state_file": "EBS_ATTACH_STATE_FILE",
    "color": "EBS_ATTACH_COLOR",
    "indent": "EBS_ATTACH_INDENT",
}


class ColorMode(str, Enum):
    """Modo de color del diff"""
    AUTO = "auto"
    YES = "yes"
    NO = "no"


class Settings(BaseModel):
    state_file: str = Field(DEFAULT_STATE_FILE, description="Estado por defecto para -i/-o ('-' = stdin/stdout)")
    color: ColorMode = Field(ColorMode.AUTO, description="auto | yes | no")
    indent: int = Field(4, ge=0, description="Indentación del JSON generado")

    class Config:
        extra = "forbid"

    @field_validator("color", mode="before")
    @classmethod
    def _yaml_bool_color(cls, value):
        # YAML 1.1 convierte yes/no sin comillas en booleanos
        if isinstance(value, bool):
            return ColorMode.YES if value else ColorMode.NO
        if isinstance(value, str):
            return value.strip().lower()
        return value


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"No se pudo leer {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error al parsear YAML en {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} debe contener un mapa clave: valor")
    return data


def config_file(base_dir: Path, environ: Mapping[str, str]) -> Optional[Path]:
    """Archivo YAML a usar: explícito por variable de entorno, o el del directorio."""
    explicit = environ.get(ENV_CONFIG, "").strip()
    if explicit:
        path = Path(explicit).expanduser()
        if not path.exists():
            raise ConfigError(f"Archivo de configuración no encontrado: {path}")
        return path
    candidate = base_dir / CONFIG_FILE_NAME
    return candidate if candidate.exists() else None


def load_settings(
    base_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Carga la configuración combinando YAML, .env y entorno.

    Args:
        base_dir: Directorio donde buscar .ebs-attach.yaml y .env (por defecto: cwd)
        environ: Variables de entorno (por defecto: os.environ)

    Returns:
        Settings validado

    Raises:
        ConfigError: si algún archivo es ilegible o un valor es inválido
    """
    base_dir = base_dir or Path.cwd()
    env_file = base_dir / ".env"
    dotenv = {k: v for k, v in dotenv_values(env_file).items() if v is not None} if env_file.exists() else {}
    env: Dict[str, str] = {**dotenv, **(os.environ if environ is None else environ)}

    data: Dict[str, Any] = {}
    path = config_file(base_dir, env)
    if path is not None:
        data.update(_load_yaml(path))

    for field_name, var in ENV_VARS.items():
        value = env.get(var, "").strip()
        if value:
            data[field_name] = value

    try:
        return Settings(**data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Configuración inválida: {problems}") from e
