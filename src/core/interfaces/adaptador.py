"""Contratos de adaptadores a bases externas.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que adaptadores reales (BDNN, Policía) y mocks sean intercambiables
  y testeables sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AdaptadorBDExterna(Protocol):
    """Contrato mínimo para una base externa.

    Reglas de diseño:
    - `consultar_paciente` es asíncrono porque típicamente hará I/O (HTTP).
    - Devuelve `{"antecedentes": [...]}`; puede lanzar ante cualquier fallo.
    """

    async def consultar_paciente(self, identidad: Any) -> dict[str, Any]:
        """Consulta la fuente para una identidad y devuelve sus antecedentes."""

        ...
