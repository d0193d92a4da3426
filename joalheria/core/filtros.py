# joalheria/core/filtros.py
"""
Filtro de consulta de produtos do catálogo.

Traduz os parâmetros da query string (type, metal, stone, sort) em condições
de igualdade combinadas com AND e exatamente uma ordenação.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence

from joalheria.core.entities import Produto

ORDEM_PRECO_ASC = 'price_asc'
ORDEM_PRECO_DESC = 'price_desc'
ORDEM_RECENTES = 'newest'

# Mapeia a ordenação pública para o formato de ordenação do ORM
_ORDENACAO_ORM = {
    ORDEM_PRECO_ASC: 'preco',
    ORDEM_PRECO_DESC: '-preco',
    ORDEM_RECENTES: '-id',
}


def _limpar(valor: Optional[str]) -> Optional[str]:
    if valor is None:
        return None
    valor = valor.strip()
    return valor or None


@dataclass(frozen=True)
class FiltroProdutos:
    tipo: Optional[str] = None
    metal: Optional[str] = None
    pedra: Optional[str] = None
    ordenacao: str = ORDEM_RECENTES

    def __post_init__(self):
        # Valores desconhecidos caem no padrão (mais recentes)
        if self.ordenacao not in _ORDENACAO_ORM:
            object.__setattr__(self, 'ordenacao', ORDEM_RECENTES)

    @classmethod
    def de_parametros(cls, params: Mapping[str, str]) -> 'FiltroProdutos':
        """Cria o filtro a partir de request.GET (ou qualquer mapeamento)."""
        return cls(
            tipo=_limpar(params.get('type')),
            metal=_limpar(params.get('metal')),
            pedra=_limpar(params.get('stone')),
            ordenacao=_limpar(params.get('sort')) or ORDEM_RECENTES,
        )

    def condicoes(self) -> Dict[str, str]:
        """Condições de igualdade presentes, no formato campo -> valor."""
        campos = {'tipo': self.tipo, 'metal': self.metal, 'pedra': self.pedra}
        return {campo: valor for campo, valor in campos.items() if valor is not None}

    def ordenacao_orm(self) -> str:
        return _ORDENACAO_ORM[self.ordenacao]

    def aplicar(self, produtos: Sequence[Produto]) -> List[Produto]:
        """Aplica o mesmo filtro/ordenação sobre uma coleção em memória."""
        condicoes = self.condicoes()
        resultado = [
            p for p in produtos
            if all(getattr(p, campo) == valor for campo, valor in condicoes.items())
        ]
        if self.ordenacao == ORDEM_PRECO_ASC:
            resultado.sort(key=lambda p: Decimal(p.preco or 0))
        elif self.ordenacao == ORDEM_PRECO_DESC:
            resultado.sort(key=lambda p: Decimal(p.preco or 0), reverse=True)
        else:
            resultado.sort(key=lambda p: p.id or 0, reverse=True)
        return resultado

