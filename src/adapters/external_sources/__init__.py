"""Bases externas (adaptadores concretos).

Cada módulo implementa `core.interfaces.adaptador.AdaptadorBDExterna` y
normaliza su respuesta a `{"antecedentes": [...]}`.
"""

from adapters.external_sources.bdnn import AdaptadorBDNN
from adapters.external_sources.mocks import AdaptadorBDNNMock, AdaptadorPoliciaMock
from adapters.external_sources.policia import AdaptadorPolicia

__all__ = [
	"AdaptadorBDNN",
	"AdaptadorBDNNMock",
	"AdaptadorPolicia",
	"AdaptadorPoliciaMock",
]
