"""
Modelos del documento de estado de Terraform (terraform.tfstate, formato "modules").

Usa Pydantic para validación y serialización. Solo se modela lo necesario para
localizar módulos y recursos; cualquier otro campo se conserva tal cual
(extra = "allow") y se vuelve a escribir al serializar.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_serializer


class InstanceState(BaseModel):
    """Registro primario de un recurso: id real y atributos planos."""
    id: str = ""
    attributes: Dict[str, str] = Field(default_factory=dict)
    meta: Dict[str, Any] = Field(default_factory=dict)
    tainted: bool = False

    class Config:
        extra = "allow"

    @field_serializer("attributes", mode="wrap")
    def _sorted_attributes(self, value, handler):
        return dict(sorted(handler(value).items()))


class ResourceState(BaseModel):
    """Recurso gestionado: tipo, dependencias y registro primario."""
    type: str = ""
    depends_on: List[str] = Field(default_factory=list)
    primary: Optional[InstanceState] = None
    deposed: List[InstanceState] = Field(default_factory=list)
    provider: str = ""

    class Config:
        extra = "allow"


class ModuleState(BaseModel):
    """Módulo: agrupa recursos bajo claves "<tipo>.<nombre>"."""
    path: List[str] = Field(default_factory=list)
    outputs: Dict[str, Any] = Field(default_factory=dict)
    resources: Dict[str, ResourceState]
    depends_on: List[str] = Field(default_factory=list)

    class Config:
        extra = "allow"

    @field_serializer("resources", mode="wrap")
    def _sorted_resources(self, value, handler):
        return dict(sorted(handler(value).items()))


class StateDocument(BaseModel):
    """Documento de estado completo: lista ordenada de módulos."""
    version: Optional[int] = None
    terraform_version: Optional[str] = None
    serial: Optional[int] = None
    lineage: Optional[str] = None
    modules: List[ModuleState]

    class Config:
        extra = "allow"


def to_data(model: BaseModel) -> Dict[str, Any]:
    """
    Convierte un modelo a dict serializable.

    Solo se emiten los campos presentes en la entrada (o asignados explícitamente),
    así un módulo no tocado sale igual que entró.
    """
    return model.model_dump(mode="json", exclude_unset=True)


def to_json(data: Any, indent: int = 4) -> str:
    """Serializa a JSON indentado, sin escapar caracteres no ASCII."""
    if isinstance(data, BaseModel):
        data = to_data(data)
    return json.dumps(data, indent=indent, ensure_ascii=False)
