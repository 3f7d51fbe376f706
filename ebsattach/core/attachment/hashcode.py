"""
Hash de cadenas compatible con helper/hashcode.String de Terraform.

Terraform calcula el CRC-32 (IEEE) de la cadena, lo convierte al int con signo
de la plataforma (64 bits) y lo devuelve en positivo, así que el resultado es
siempre el CRC-32 sin signo: 0 <= hashcode(s) < 2**32.
"""

import zlib


def hashcode(value: str) -> int:
    return zlib.crc32(value.encode("utf-8"))
